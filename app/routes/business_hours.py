from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from app import audit
from app.authz import Action, authorize
from app.constants.enums import AuditAction
from app.database import get_db, transaction
from app.db.crud import business_hours as hours_crud
from app.db.schemas.business_hours import BusinessHours, BusinessHoursReplace
from app.dependencies import CurrentUser, store_managers
from app.routes.store import load_store

router = APIRouter(
    prefix="/api/v1/stores",
    tags=["business-hours"]
)

@router.post("/business-hours", response_model=List[BusinessHours])
def replace_business_hours(
    hours_in: BusinessHoursReplace,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(store_managers),
):
    """Replace a store's weekly schedule with the submitted set"""
    store = load_store(db, hours_in.store_id)
    authorize(current_user, Action.UPDATE, store)

    before = [audit.snapshot(row) for row in hours_crud.get_schedule(db, store.id)]
    with transaction(db):
        schedule = hours_crud.replace_schedule(db, store.id, hours_in.schedule)
        audit.record(
            db, current_user, AuditAction.REPLACE_SCHEDULE, "BusinessHours", store.id,
            before, [audit.snapshot(row) for row in schedule],
        )
    return hours_crud.get_schedule(db, store.id)

@router.get("/business-hours", response_model=List[BusinessHours])
def get_business_hours(
    store_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(store_managers),
):
    """Current weekly schedule of a store, ordered by day"""
    store = load_store(db, store_id)
    authorize(current_user, Action.READ, store)
    return hours_crud.get_schedule(db, store.id)
