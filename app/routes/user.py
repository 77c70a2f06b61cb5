import logging
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from app import audit, config
from app.constants.enums import AuditAction, UserRole
from app.database import get_db, transaction
from app.db.crud import user as user_crud
from app.db.models.user import User
from app.db.schemas.common import paginate
from app.db.schemas.user import (
    UserOut,
    UserDetail,
    UserCounts,
    UserListResponse,
    UserStatusUpdate,
    UserVerificationUpdate,
    UserAnalytics,
)
from app.dependencies import CurrentUser, super_admins
from app.errors import NotFoundError, ValidationError
from app.services.analytics import build_user_analytics

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/users",
    tags=["users"]
)

def load_user(db: Session, user_id: int) -> User:
    user = user_crud.get_user(db, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user

@router.get("/", response_model=UserListResponse)
def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(config.DEFAULT_PAGE_SIZE, ge=1, le=config.MAX_PAGE_SIZE),
    search: Optional[str] = None,
    role: Optional[UserRole] = None,
    is_active: Optional[bool] = None,
    is_verified: Optional[bool] = None,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(super_admins),
):
    """Paginated user listing, newest first"""
    users, total = user_crud.get_users(
        db,
        page=page,
        limit=limit,
        search=search,
        role=role,
        is_active=is_active,
        is_verified=is_verified,
    )
    return UserListResponse(
        users=[UserOut.model_validate(user) for user in users],
        pagination=paginate(total, page, limit),
    )

@router.get("/{user_id}", response_model=UserDetail)
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(super_admins),
):
    """User profile with driver/store-owner profiles and relation counts"""
    user = load_user(db, user_id)
    detail = UserDetail.model_validate(user)
    detail.counts = UserCounts(**user_crud.get_relation_counts(db, user.id))
    return detail

@router.put("/{user_id}/status", response_model=UserOut)
def update_user_status(
    user_id: int,
    status_in: UserStatusUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(super_admins),
):
    """Activate or deactivate a user account"""
    user = load_user(db, user_id)
    if user.id == current_user.id and not status_in.is_active:
        raise ValidationError("You cannot deactivate your own account")

    before = audit.snapshot(user)
    with transaction(db):
        user_crud.set_user_flag(db, user, "is_active", status_in.is_active)
        audit.record(db, current_user, AuditAction.STATUS_UPDATE, "User", user.id, before, audit.snapshot(user))

    logger.info(f"User {user.id} is_active set to {status_in.is_active} by user {current_user.id}")
    return user

@router.put("/{user_id}/verification", response_model=UserOut)
def update_user_verification(
    user_id: int,
    verification_in: UserVerificationUpdate,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(super_admins),
):
    """Mark a user as verified or unverified"""
    user = load_user(db, user_id)

    before = audit.snapshot(user)
    with transaction(db):
        user_crud.set_user_flag(db, user, "is_verified", verification_in.is_verified)
        audit.record(db, current_user, AuditAction.VERIFICATION_UPDATE, "User", user.id, before, audit.snapshot(user))
    return user

@router.get("/{user_id}/analytics", response_model=UserAnalytics)
def get_user_analytics(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(super_admins),
):
    """Service, spend and review rollup for one user"""
    user = load_user(db, user_id)
    return build_user_analytics(db, user)
