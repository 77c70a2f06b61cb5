import logging
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from app import audit
from app.authz import Action, authorize, scope_to_owned_stores
from app.constants.enums import AuditAction, StoreType, UserRole
from app.database import get_db, transaction
from app.db.crud import location as location_crud
from app.db.crud import store as store_crud
from app.db.models.store import Store as StoreModel
from app.db.schemas.product import Product
from app.db.schemas.store import (
    Store,
    StoreCreate,
    StoreUpdate,
    StoreClosureUpdate,
    StoreDetail,
    StoreWithDistance,
)
from app.dependencies import CurrentUser, store_managers
from app.errors import AccessDeniedError, ConflictError, NotFoundError, ValidationError
from app.services.geocoding import resolve_location
from app.utils.geo import distance_meters

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/stores",
    tags=["stores"]
)

def load_store(db: Session, store_id: int) -> StoreModel:
    store = store_crud.get_store(db, store_id)
    if not store:
        raise NotFoundError("Store not found")
    return store

def _resolve_owner_id(db: Session, store_in: StoreCreate, current_user: CurrentUser) -> int:
    if current_user.role == UserRole.STORE_OWNER:
        if current_user.owner_profile_id is None:
            raise AccessDeniedError("Store owner profile not found")
        if store_in.owner_id is not None and store_in.owner_id != current_user.owner_profile_id:
            raise AccessDeniedError("Access denied")
        return current_user.owner_profile_id

    if store_in.owner_id is None:
        raise ValidationError("owner_id: Field required when an admin creates a store")
    if not store_crud.get_owner_profile(db, store_in.owner_id):
        raise NotFoundError("Store owner profile not found")
    return store_in.owner_id

@router.post("/", response_model=Store, status_code=201)
def create_store(
    store_in: StoreCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(store_managers),
):
    """Create a store together with its location"""
    owner_id = _resolve_owner_id(db, store_in, current_user)
    authorize(current_user, Action.CREATE, StoreModel(owner_id=owner_id))
    location_data = resolve_location(store_in.location)

    with transaction(db):
        location = location_crud.create_location(db, location_data)
        store = store_crud.create_store(
            db, owner_id, location.id, store_in.model_dump(exclude={"location", "owner_id"})
        )
        audit.record(
            db, current_user, AuditAction.CREATE, "Store", store.id, None, audit.snapshot(store, "location")
        )

    logger.info(f"Store {store.id} created by user {current_user.id}")
    return store

@router.get("/", response_model=List[StoreWithDistance])
def list_stores(
    type: Optional[StoreType] = None,
    is_active: Optional[bool] = None,
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lng: Optional[float] = Query(None, ge=-180, le=180),
    radius: Optional[float] = Query(None, gt=0, description="Search radius in kilometers"),
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(store_managers),
):
    """List the stores visible to the caller, optionally within a radius"""
    query = store_crud.stores_query(db, store_type=type, is_active=is_active)
    stores = scope_to_owned_stores(query, current_user, StoreModel.id).order_by(StoreModel.name).all()

    if lat is None or lng is None or radius is None:
        return stores

    nearby = []
    for store in stores:
        distance_km = distance_meters(lat, lng, store.location.latitude, store.location.longitude) / 1000
        if distance_km <= radius:
            nearby.append(
                StoreWithDistance(**Store.model_validate(store).model_dump(), distance=round(distance_km, 3))
            )
    return sorted(nearby, key=lambda item: item.distance)

@router.get("/{store_id}", response_model=StoreDetail)
def get_store(
    store_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(store_managers),
):
    """Get a store with its business hours and in-stock products"""
    store = load_store(db, store_id)
    authorize(current_user, Action.READ, store)

    detail = StoreDetail.model_validate(store)
    detail.products = [Product.model_validate(p) for p in store.products if p.in_stock]
    return detail

@router.put("/{store_id}", response_model=Store)
def update_store(
    store_id: int,
    store_in: StoreUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(store_managers),
):
    """Update a store and, optionally, its location"""
    store = load_store(db, store_id)
    authorize(current_user, Action.UPDATE, store)

    before = audit.snapshot(store, "location")
    update_data = store_in.model_dump(exclude_unset=True, exclude={"location"})
    with transaction(db):
        if store_in.location is not None:
            location_crud.update_location(db, store.location, store_in.location.model_dump(exclude_unset=True))
        store_crud.update_store(db, store, update_data)
        audit.record(
            db, current_user, AuditAction.UPDATE, "Store", store.id, before, audit.snapshot(store, "location")
        )
    return store

@router.put("/{store_id}/closure", response_model=Store)
def update_store_closure(
    store_id: int,
    closure: StoreClosureUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(store_managers),
):
    """Temporarily close or reopen a store"""
    store = load_store(db, store_id)
    authorize(current_user, Action.UPDATE, store)

    before = audit.snapshot(store, "location")
    with transaction(db):
        store_crud.set_closure(db, store, closure.is_temporarily_closed, closure.closure_reason)
        audit.record(
            db, current_user, AuditAction.CLOSURE_UPDATE, "Store", store.id, before, audit.snapshot(store, "location")
        )
    return store

@router.delete("/{store_id}")
def delete_store(
    store_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(store_managers),
):
    """Delete a store with its products, staff and business hours"""
    store = load_store(db, store_id)
    authorize(current_user, Action.DELETE, store)

    order_count = store_crud.count_orders(db, store.id)
    if order_count:
        logger.warning(f"Refusing to delete store {store.id}: {order_count} orders reference it")
        raise ConflictError(f"Cannot delete store with {order_count} existing orders")

    before = audit.snapshot(store, "location")
    with transaction(db):
        store_crud.delete_store(db, store)
        audit.record(db, current_user, AuditAction.DELETE, "Store", store_id, before, None)

    logger.info(f"Store {store_id} deleted by user {current_user.id}")
    return {"message": "Store deleted successfully"}
