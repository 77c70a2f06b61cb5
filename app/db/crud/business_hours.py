from sqlalchemy.orm import Session
from typing import List
from app.db.models.store import BusinessHours
from app.db.schemas.business_hours import ScheduleEntry

def get_schedule(db: Session, store_id: int) -> List[BusinessHours]:
    return (
        db.query(BusinessHours)
        .filter(BusinessHours.store_id == store_id)
        .order_by(BusinessHours.day_of_week)
        .all()
    )

def replace_schedule(db: Session, store_id: int, schedule: List[ScheduleEntry]) -> List[BusinessHours]:
    """Drop every row for the store and insert the new set. Caller owns the transaction."""
    db.query(BusinessHours).filter(BusinessHours.store_id == store_id).delete(synchronize_session="fetch")
    db.add_all([BusinessHours(store_id=store_id, **entry.model_dump()) for entry in schedule])
    db.flush()
    return get_schedule(db, store_id)
