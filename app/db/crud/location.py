from sqlalchemy.orm import Session
from typing import Dict, Any
from app.db.models.location import Location

def create_location(db: Session, data: Dict[str, Any]) -> Location:
    db_location = Location(**data)
    db.add(db_location)
    db.flush()
    return db_location

def update_location(db: Session, db_location: Location, data: Dict[str, Any]) -> Location:
    for field, value in data.items():
        setattr(db_location, field, value)
    db.flush()
    return db_location
