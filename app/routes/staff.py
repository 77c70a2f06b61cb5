import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from app import audit
from app.authz import Action, authorize, scope_to_owned_stores
from app.constants.enums import AuditAction, StaffRole
from app.database import get_db, transaction
from app.db.crud import staff as staff_crud
from app.db.crud import user as user_crud
from app.db.models.store import StoreStaff
from app.db.schemas.staff import Staff, StaffCreate, StaffUpdate
from app.dependencies import CurrentUser, store_managers
from app.errors import ConflictError, NotFoundError
from app.routes.store import load_store

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/stores",
    tags=["staff"]
)

def load_staff(db: Session, staff_id: int) -> StoreStaff:
    staff = staff_crud.get_staff(db, staff_id)
    if not staff:
        raise NotFoundError("Staff member not found")
    return staff

@router.post("/staff", response_model=Staff, status_code=201)
def create_staff(
    staff_in: StaffCreate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(store_managers),
):
    """Attach a user to a store as staff"""
    load_store(db, staff_in.store_id)
    staff = StoreStaff(**staff_in.model_dump())
    authorize(current_user, Action.CREATE, staff)

    if not user_crud.get_user(db, staff_in.user_id):
        raise NotFoundError("User not found")
    if staff_crud.get_staff_by_store_and_user(db, staff_in.store_id, staff_in.user_id):
        raise ConflictError("User is already a staff member of this store")

    with transaction(db):
        staff_crud.create_staff(db, staff)
        audit.record(db, current_user, AuditAction.CREATE, "StoreStaff", staff.id, None, audit.snapshot(staff))
    return staff

@router.get("/staff", response_model=List[Staff])
def list_staff(
    store_id: Optional[int] = None,
    role: Optional[StaffRole] = None,
    is_active: Optional[bool] = None,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(store_managers),
):
    """List staff across the caller's stores"""
    if store_id is not None:
        authorize(current_user, Action.READ, load_store(db, store_id))
    query = scope_to_owned_stores(db.query(StoreStaff), current_user, StoreStaff.store_id)
    return staff_crud.filter_staff(query, store_id=store_id, role=role, is_active=is_active).all()

@router.put("/staff/{staff_id}", response_model=Staff)
def update_staff(
    staff_id: int,
    staff_in: StaffUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(store_managers),
):
    """Change a staff member's role or active flag"""
    staff = load_staff(db, staff_id)
    authorize(current_user, Action.UPDATE, staff)

    before = audit.snapshot(staff)
    with transaction(db):
        staff_crud.update_staff(db, staff, staff_in.model_dump(exclude_unset=True))
        audit.record(db, current_user, AuditAction.UPDATE, "StoreStaff", staff.id, before, audit.snapshot(staff))
    return staff

@router.delete("/staff/{staff_id}")
def delete_staff(
    staff_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(store_managers),
):
    """Remove a staff member from their store"""
    staff = load_staff(db, staff_id)
    authorize(current_user, Action.DELETE, staff)

    before = audit.snapshot(staff)
    with transaction(db):
        staff_crud.delete_staff(db, staff)
        audit.record(db, current_user, AuditAction.DELETE, "StoreStaff", staff_id, before, None)
    return {"message": "Staff member removed successfully"}
