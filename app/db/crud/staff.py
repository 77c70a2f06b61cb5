from sqlalchemy.orm import Session, joinedload
from typing import Optional, Dict, Any
from app.constants.enums import StaffRole
from app.db.models.store import StoreStaff

def get_staff(db: Session, staff_id: int) -> Optional[StoreStaff]:
    return (
        db.query(StoreStaff)
        .options(joinedload(StoreStaff.user))
        .filter(StoreStaff.id == staff_id)
        .first()
    )

def get_staff_by_store_and_user(db: Session, store_id: int, user_id: int) -> Optional[StoreStaff]:
    return db.query(StoreStaff).filter(
        StoreStaff.store_id == store_id,
        StoreStaff.user_id == user_id
    ).first()

def filter_staff(
    query,
    store_id: Optional[int] = None,
    role: Optional[StaffRole] = None,
    is_active: Optional[bool] = None,
):
    query = query.options(joinedload(StoreStaff.user))
    if store_id is not None:
        query = query.filter(StoreStaff.store_id == store_id)
    if role is not None:
        query = query.filter(StoreStaff.role == role)
    if is_active is not None:
        query = query.filter(StoreStaff.is_active == is_active)
    return query.order_by(StoreStaff.store_id, StoreStaff.id)

def create_staff(db: Session, db_staff: StoreStaff) -> StoreStaff:
    db.add(db_staff)
    db.flush()
    return db_staff

def update_staff(db: Session, db_staff: StoreStaff, data: Dict[str, Any]) -> StoreStaff:
    for field, value in data.items():
        setattr(db_staff, field, value)
    db.flush()
    return db_staff

def delete_staff(db: Session, db_staff: StoreStaff) -> None:
    db.delete(db_staff)
    db.flush()
