from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional
from .common import not_null

class LocationInput(BaseModel):
    latitude: Optional[float] = Field(None, ge=-90, le=90, description="Omit together with longitude to geocode the address")
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    address: str = Field(..., min_length=1)
    city: Optional[str] = None
    country: Optional[str] = None

class LocationUpdate(BaseModel):
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    address: Optional[str] = Field(None, min_length=1)
    city: Optional[str] = None
    country: Optional[str] = None

    @field_validator("latitude", "longitude", "address")
    @classmethod
    def check_not_null(cls, value):
        return not_null(value)

class Location(BaseModel):
    id: int
    latitude: float
    longitude: float
    address: str
    city: Optional[str] = None
    country: Optional[str] = None
    place_id: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
