from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import List

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"

class ScheduleEntry(BaseModel):
    day_of_week: int = Field(..., ge=0, le=6, description="0 = Sunday ... 6 = Saturday")
    open_time: str = Field(..., pattern=TIME_PATTERN, description="HH:MM")
    close_time: str = Field(..., pattern=TIME_PATTERN, description="HH:MM")
    is_closed: bool = False

class BusinessHoursReplace(BaseModel):
    store_id: int
    schedule: List[ScheduleEntry]

    @field_validator("schedule")
    @classmethod
    def check_unique_days(cls, value: List[ScheduleEntry]) -> List[ScheduleEntry]:
        days = [entry.day_of_week for entry in value]
        if len(days) != len(set(days)):
            raise ValueError("each day_of_week may appear only once")
        return value

class BusinessHours(ScheduleEntry):
    id: int
    store_id: int

    model_config = ConfigDict(from_attributes=True)
