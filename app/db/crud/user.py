from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload
from typing import List, Optional, Tuple, Dict
from app.constants.enums import UserRole
from app.db.models.user import User
from app.db.models.service import Service, ServiceType, Payment, Review
from app.db.models.engagement import FavoriteLocation, Notification

def get_user(db: Session, user_id: int) -> Optional[User]:
    return (
        db.query(User)
        .options(joinedload(User.driver), joinedload(User.store_owner))
        .filter(User.id == user_id)
        .first()
    )

def get_users(
    db: Session,
    page: int = 1,
    limit: int = 20,
    search: Optional[str] = None,
    role: Optional[UserRole] = None,
    is_active: Optional[bool] = None,
    is_verified: Optional[bool] = None,
) -> Tuple[List[User], int]:
    """Page of users matching the filters, newest first, plus the total match count"""
    query = db.query(User)
    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(
            User.first_name.ilike(pattern),
            User.last_name.ilike(pattern),
            User.email.ilike(pattern),
            User.phone.ilike(pattern),
        ))
    if role is not None:
        query = query.filter(User.role == role)
    if is_active is not None:
        query = query.filter(User.is_active == is_active)
    if is_verified is not None:
        query = query.filter(User.is_verified == is_verified)

    total = query.count()
    users = (
        query.order_by(User.created_at.desc(), User.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return users, total

def get_relation_counts(db: Session, user_id: int) -> Dict[str, int]:
    return {
        "services": db.query(Service).filter(Service.user_id == user_id).count(),
        "payments": db.query(Payment).filter(Payment.user_id == user_id).count(),
        "reviews": db.query(Review).filter(Review.reviewer_id == user_id).count(),
        "favorite_locations": db.query(FavoriteLocation).filter(FavoriteLocation.user_id == user_id).count(),
        "notifications": db.query(Notification).filter(Notification.user_id == user_id).count(),
    }

def set_user_flag(db: Session, db_user: User, field: str, value: bool) -> User:
    setattr(db_user, field, value)
    db.flush()
    return db_user

def service_counts_by_status(db: Session, user_id: int):
    return (
        db.query(Service.status, func.count(Service.id))
        .filter(Service.user_id == user_id)
        .group_by(Service.status)
        .all()
    )

def service_counts_by_type(db: Session, user_id: int):
    return (
        db.query(ServiceType.name, func.count(Service.id))
        .join(ServiceType, Service.service_type_id == ServiceType.id)
        .filter(Service.user_id == user_id)
        .group_by(ServiceType.name)
        .order_by(func.count(Service.id).desc(), ServiceType.name)
        .all()
    )

def get_payments(db: Session, user_id: int) -> List[Payment]:
    return db.query(Payment).filter(Payment.user_id == user_id).order_by(Payment.created_at).all()

def get_reviews_given(db: Session, user_id: int) -> List[Review]:
    return db.query(Review).filter(Review.reviewer_id == user_id).all()

def get_reviews_for_driver(db: Session, driver_id: int) -> List[Review]:
    return db.query(Review).filter(Review.driver_id == driver_id).all()
