"""
Ownership rules shared by every store-scoped and admin-only handler
"""

from enum import Enum

from sqlalchemy import false

from app.constants.enums import UserRole
from app.db.models.store import Store, StoreStaff, BusinessHours
from app.db.models.product import Product
from app.db.models.taxi_stand import TaxiStand
from app.errors import AccessDeniedError


class Action(str, Enum):
    READ = "READ"
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


STORE_SCOPED = (StoreStaff, BusinessHours, Product)


def can(actor, action: Action, resource) -> bool:
    """Whether the actor may perform `action` on `resource`."""
    if actor.role == UserRole.SUPER_ADMIN:
        return True

    if isinstance(resource, TaxiStand):
        return actor.role == UserRole.CITY_ADMIN

    if actor.role != UserRole.STORE_OWNER or actor.owner_profile_id is None:
        return False

    if isinstance(resource, Store):
        return resource.owner_id == actor.owner_profile_id
    if isinstance(resource, STORE_SCOPED):
        return resource.store_id in actor.owned_store_ids
    return False


def authorize(actor, action: Action, resource, message: str = "Access denied") -> None:
    if not can(actor, action, resource):
        raise AccessDeniedError(message)


def scope_to_owned_stores(query, actor, store_id_column):
    """Restrict a list query to the stores the actor may read."""
    if actor.role == UserRole.SUPER_ADMIN:
        return query
    if actor.role != UserRole.STORE_OWNER or not actor.owned_store_ids:
        return query.filter(false())
    return query.filter(store_id_column.in_(actor.owned_store_ids))
