from pydantic import BaseModel, ConfigDict
from typing import Optional, List, Any
from datetime import datetime, date
from .common import Pagination
from .user import UserSummary

class AuditLog(BaseModel):
    id: int
    user_id: Optional[int] = None
    action: str
    resource: str
    resource_id: Optional[str] = None
    old_values: Optional[Any] = None
    new_values: Optional[Any] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    timestamp: datetime
    user: Optional[UserSummary] = None

    model_config = ConfigDict(from_attributes=True)

class AuditLogListResponse(BaseModel):
    logs: List[AuditLog]
    pagination: Pagination

class KeyCount(BaseModel):
    key: str
    count: int

class UserActivity(BaseModel):
    user_id: int
    count: int
    user: Optional[UserSummary] = None

class DailyActivity(BaseModel):
    day: date
    count: int

class AuditStatistics(BaseModel):
    action_counts: List[KeyCount]
    resource_counts: List[KeyCount]
    user_activity: List[UserActivity]
    daily_activity: List[DailyActivity]
