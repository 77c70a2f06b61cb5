from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional
from datetime import datetime
from .location import Location, LocationUpdate
from .common import not_null

class StandLocation(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    address: str = Field(..., min_length=1)

class TaxiStandCreate(BaseModel):
    name: str = Field(..., min_length=1)
    capacity: int = Field(..., gt=0)
    location: StandLocation
    is_active: bool = True

class TaxiStandUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    capacity: Optional[int] = Field(None, gt=0)
    location: Optional[LocationUpdate] = None
    is_active: Optional[bool] = None

    @field_validator("name", "capacity", "location", "is_active")
    @classmethod
    def check_not_null(cls, value):
        return not_null(value)

class NearbyStandsQuery(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)

class TaxiStand(BaseModel):
    id: int
    name: str
    capacity: int
    location_id: int
    is_active: bool
    created_at: datetime
    updated_at: datetime
    location: Optional[Location] = None

    model_config = ConfigDict(from_attributes=True)

class NearbyTaxiStand(TaxiStand):
    distance: float = Field(..., description="Distance from the query point in meters")
