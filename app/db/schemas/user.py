from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Dict
from datetime import date, datetime
from app.constants.enums import UserRole, Gender, DriverApprovalStatus
from .common import Pagination

class UserSummary(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str
    role: UserRole

    model_config = ConfigDict(from_attributes=True)

class UserOut(UserSummary):
    phone: Optional[str] = None
    gender: Optional[Gender] = None
    date_of_birth: Optional[date] = None
    profile_image: Optional[str] = None
    is_active: bool
    is_verified: bool
    created_at: datetime
    updated_at: datetime

class DriverProfileOut(BaseModel):
    id: int
    license_number: Optional[str] = None
    approval_status: DriverApprovalStatus

    model_config = ConfigDict(from_attributes=True)

class StoreOwnerProfileOut(BaseModel):
    id: int
    business_name: str
    business_license: Optional[str] = None
    is_verified: bool

    model_config = ConfigDict(from_attributes=True)

class UserCounts(BaseModel):
    services: int = 0
    payments: int = 0
    reviews: int = 0
    favorite_locations: int = 0
    notifications: int = 0

class UserDetail(UserOut):
    driver: Optional[DriverProfileOut] = None
    store_owner: Optional[StoreOwnerProfileOut] = None
    counts: UserCounts = Field(default_factory=UserCounts)

class UserListResponse(BaseModel):
    users: List[UserOut]
    pagination: Pagination

class UserStatusUpdate(BaseModel):
    is_active: bool

class UserVerificationUpdate(BaseModel):
    is_verified: bool

# Analytics rollup

class ServiceTypeCount(BaseModel):
    service_type: str
    count: int

class ServiceStats(BaseModel):
    total: int
    by_status: Dict[str, int]
    by_type: List[ServiceTypeCount]

class MethodBreakdown(BaseModel):
    count: int
    amount: float

class MonthlySpend(BaseModel):
    month: str  # YYYY-MM
    amount: float
    count: int

class PaymentStats(BaseModel):
    total_spent: float
    total_transactions: int
    by_method: Dict[str, MethodBreakdown]
    monthly: List[MonthlySpend]

class ReviewStats(BaseModel):
    total: int
    average_rating: float
    average_punctuality: float
    average_cleanliness: float
    average_safety: float

class UserAnalytics(BaseModel):
    user_id: int
    services: ServiceStats
    payments: PaymentStats
    reviews_given: ReviewStats
    driver_ratings: Optional[ReviewStats] = None
