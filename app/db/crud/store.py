from sqlalchemy.orm import Session, joinedload
from typing import List, Optional, Dict, Any
from app.constants.enums import StoreType
from app.db.models.store import Store
from app.db.models.order import Order
from app.db.models.user import StoreOwnerProfile

def get_store(db: Session, store_id: int) -> Optional[Store]:
    return (
        db.query(Store)
        .options(joinedload(Store.location))
        .filter(Store.id == store_id)
        .first()
    )

def get_owner_profile(db: Session, profile_id: int) -> Optional[StoreOwnerProfile]:
    return db.query(StoreOwnerProfile).filter(StoreOwnerProfile.id == profile_id).first()

def stores_query(
    db: Session,
    store_type: Optional[StoreType] = None,
    is_active: Optional[bool] = None,
):
    query = db.query(Store).options(joinedload(Store.location))
    if store_type is not None:
        query = query.filter(Store.type == store_type)
    if is_active is not None:
        query = query.filter(Store.is_active == is_active)
    return query

def create_store(db: Session, owner_id: int, location_id: int, data: Dict[str, Any]) -> Store:
    db_store = Store(owner_id=owner_id, location_id=location_id, **data)
    db.add(db_store)
    db.flush()
    return db_store

def update_store(db: Session, db_store: Store, data: Dict[str, Any]) -> Store:
    for field, value in data.items():
        setattr(db_store, field, value)
    db.flush()
    return db_store

def set_closure(db: Session, db_store: Store, is_closed: bool, reason: Optional[str]) -> Store:
    db_store.is_temporarily_closed = is_closed
    # reopening always clears the previous reason
    db_store.closure_reason = reason if is_closed else None
    db.flush()
    return db_store

def count_orders(db: Session, store_id: int) -> int:
    return db.query(Order).filter(Order.store_id == store_id).count()

def delete_store(db: Session, db_store: Store) -> None:
    """Delete a store and its location; products, staff and business hours go with it through the cascade."""
    location = db_store.location
    db.delete(db_store)
    if location is not None:
        db.delete(location)
    db.flush()

def get_store_ids_for_owner(db: Session, owner_id: int) -> List[int]:
    return [store_id for (store_id,) in db.query(Store.id).filter(Store.owner_id == owner_id)]
