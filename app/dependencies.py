from dataclasses import dataclass, field
from typing import FrozenSet, Optional

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app import config
from app.constants.enums import UserRole
from app.database import get_db
from app.db.crud import store as store_crud
from app.db.models.user import User
from app.errors import AccessDeniedError, UnauthorizedError

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CurrentUser:
    id: int
    role: UserRole
    owner_profile_id: Optional[int] = None
    owned_store_ids: FrozenSet[int] = field(default_factory=frozenset)
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


def create_access_token(user_id: int) -> str:
    return jwt.encode({"user_id": user_id}, config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> CurrentUser:
    """Resolve the bearer token to an active user, with their store ownership preloaded"""
    if credentials is None:
        raise UnauthorizedError("Unauthorized")
    try:
        payload = jwt.decode(credentials.credentials, config.JWT_SECRET, algorithms=[config.JWT_ALGORITHM])
    except jwt.PyJWTError:
        raise UnauthorizedError("Invalid token")

    user_id = payload.get("user_id")
    user = db.query(User).filter(User.id == user_id).first() if user_id is not None else None
    if not user or not user.is_active:
        raise UnauthorizedError("User not found or inactive")

    owner_profile_id = None
    owned_store_ids: FrozenSet[int] = frozenset()
    if user.role == UserRole.STORE_OWNER and user.store_owner is not None:
        owner_profile_id = user.store_owner.id
        owned_store_ids = frozenset(store_crud.get_store_ids_for_owner(db, owner_profile_id))

    return CurrentUser(
        id=user.id,
        role=user.role,
        owner_profile_id=owner_profile_id,
        owned_store_ids=owned_store_ids,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )


def require_roles(*roles: UserRole):
    def checker(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if current_user.role not in roles:
            raise AccessDeniedError("Insufficient role")
        return current_user
    return checker


store_managers = require_roles(UserRole.STORE_OWNER, UserRole.SUPER_ADMIN)
city_admins = require_roles(UserRole.CITY_ADMIN, UserRole.SUPER_ADMIN)
super_admins = require_roles(UserRole.SUPER_ADMIN)
