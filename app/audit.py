"""
Audit trail: handlers emit an AuditEvent after each successful mutation and a
session listener persists pending events as AuditLog rows inside the same
commit. Events queued by a transaction that rolls back are dropped.
"""

import enum
import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Dict, Optional

from sqlalchemy import event, inspect
from sqlalchemy.orm import Session

from app.db.models.audit_log import AuditLog

logger = logging.getLogger(__name__)

PENDING_EVENTS_KEY = "pending_audit_events"


@dataclass(frozen=True)
class AuditEvent:
    actor_id: Optional[int]
    action: str
    resource: str
    resource_id: Optional[str]
    old_values: Optional[Any] = None
    new_values: Optional[Any] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


def _json_value(value: Any) -> Any:
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return value


def snapshot(entity, *related: str) -> Optional[Dict[str, Any]]:
    """Full column state of an ORM entity as a JSON-safe dict.

    Names in `related` are many-to-one relationships whose own column state
    is nested under the relationship name, e.g. snapshot(store, "location").
    """
    if entity is None:
        return None
    mapper = inspect(entity).mapper
    data = {attr.key: _json_value(getattr(entity, attr.key)) for attr in mapper.column_attrs}
    for name in related:
        data[name] = snapshot(getattr(entity, name))
    return data


def emit(db: Session, audit_event: AuditEvent) -> None:
    db.info.setdefault(PENDING_EVENTS_KEY, []).append(audit_event)


def record(
    db: Session,
    actor,
    action,
    resource: str,
    resource_id,
    old_values: Optional[Any] = None,
    new_values: Optional[Any] = None,
) -> None:
    """Emit an event for a mutation performed by the current user."""
    emit(
        db,
        AuditEvent(
            actor_id=actor.id if actor is not None else None,
            action=_json_value(action),
            resource=resource,
            resource_id=str(resource_id) if resource_id is not None else None,
            old_values=old_values,
            new_values=new_values,
            ip_address=getattr(actor, "ip_address", None),
            user_agent=getattr(actor, "user_agent", None),
        ),
    )


@event.listens_for(Session, "before_commit")
def _write_pending_events(session: Session) -> None:
    pending = session.info.pop(PENDING_EVENTS_KEY, None)
    if not pending:
        return
    for audit_event in pending:
        session.add(
            AuditLog(
                user_id=audit_event.actor_id,
                action=audit_event.action,
                resource=audit_event.resource,
                resource_id=audit_event.resource_id,
                old_values=audit_event.old_values,
                new_values=audit_event.new_values,
                ip_address=audit_event.ip_address,
                user_agent=audit_event.user_agent,
            )
        )
    logger.debug("Recorded %d audit events", len(pending))


@event.listens_for(Session, "after_rollback")
def _discard_pending_events(session: Session) -> None:
    session.info.pop(PENDING_EVENTS_KEY, None)
