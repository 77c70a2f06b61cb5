from pydantic import BaseModel, ConfigDict, field_validator
from typing import Optional
from datetime import datetime
from app.constants.enums import StaffRole
from .user import UserSummary
from .common import not_null

class StaffCreate(BaseModel):
    store_id: int
    user_id: int
    role: StaffRole

class StaffUpdate(BaseModel):
    role: Optional[StaffRole] = None
    is_active: Optional[bool] = None

    @field_validator("role", "is_active")
    @classmethod
    def check_not_null(cls, value):
        return not_null(value)

class Staff(BaseModel):
    id: int
    store_id: int
    user_id: int
    role: StaffRole
    is_active: bool
    created_at: datetime
    updated_at: datetime
    user: Optional[UserSummary] = None

    model_config = ConfigDict(from_attributes=True)
