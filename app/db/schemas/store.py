from pydantic import BaseModel, Field, ConfigDict, EmailStr, field_validator
from typing import Optional, List
from datetime import datetime
from app.constants.enums import StoreType
from .location import Location, LocationInput, LocationUpdate
from .business_hours import BusinessHours
from .product import Product
from .common import not_null

class StoreCreate(BaseModel):
    name: str = Field(..., min_length=3)
    type: StoreType
    location: LocationInput
    contact_phone: str = Field(..., min_length=1)
    contact_email: EmailStr
    operating_hours: str = Field(..., description="Human readable opening hours")
    description: Optional[str] = None
    owner_id: Optional[int] = Field(None, description="Store owner profile id, required when an admin creates the store")

class StoreUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=3)
    type: Optional[StoreType] = None
    location: Optional[LocationUpdate] = None
    contact_phone: Optional[str] = Field(None, min_length=1)
    contact_email: Optional[EmailStr] = None
    operating_hours: Optional[str] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("name", "type", "location", "contact_phone", "contact_email", "is_active")
    @classmethod
    def check_not_null(cls, value):
        return not_null(value)

class StoreClosureUpdate(BaseModel):
    is_temporarily_closed: bool
    closure_reason: Optional[str] = Field(None, max_length=500)

class Store(BaseModel):
    id: int
    owner_id: int
    name: str
    type: StoreType
    location_id: int
    contact_phone: str
    contact_email: str
    operating_hours: Optional[str] = None
    description: Optional[str] = None
    is_active: bool
    is_temporarily_closed: bool
    closure_reason: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    location: Optional[Location] = None

    model_config = ConfigDict(from_attributes=True)

class StoreWithDistance(Store):
    distance: Optional[float] = Field(None, description="Distance from the query point in kilometers, set for radius searches")

class StoreDetail(Store):
    business_hours: List[BusinessHours] = []
    products: List[Product] = []
