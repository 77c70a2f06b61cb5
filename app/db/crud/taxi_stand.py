from sqlalchemy.orm import Session, joinedload
from typing import List, Optional, Dict, Any
from app.db.models.taxi_stand import TaxiStand

def get_taxi_stand(db: Session, stand_id: int) -> Optional[TaxiStand]:
    return (
        db.query(TaxiStand)
        .options(joinedload(TaxiStand.location))
        .filter(TaxiStand.id == stand_id)
        .first()
    )

def get_taxi_stands(db: Session, is_active: Optional[bool] = None) -> List[TaxiStand]:
    query = db.query(TaxiStand).options(joinedload(TaxiStand.location))
    if is_active is not None:
        query = query.filter(TaxiStand.is_active == is_active)
    return query.order_by(TaxiStand.name).all()

def create_taxi_stand(db: Session, location_id: int, data: Dict[str, Any]) -> TaxiStand:
    db_stand = TaxiStand(location_id=location_id, **data)
    db.add(db_stand)
    db.flush()
    return db_stand

def update_taxi_stand(db: Session, db_stand: TaxiStand, data: Dict[str, Any]) -> TaxiStand:
    for field, value in data.items():
        setattr(db_stand, field, value)
    db.flush()
    return db_stand

def delete_taxi_stand(db: Session, db_stand: TaxiStand) -> None:
    location = db_stand.location
    db.delete(db_stand)
    if location is not None:
        db.delete(location)
    db.flush()
