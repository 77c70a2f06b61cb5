from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload
from typing import List, Optional, Tuple
from datetime import datetime
from app.db.models.audit_log import AuditLog

def _apply_filters(
    query,
    resource: Optional[str] = None,
    resource_id: Optional[str] = None,
    user_id: Optional[int] = None,
    action: Optional[str] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
):
    if resource:
        query = query.filter(AuditLog.resource == resource)
    if resource_id:
        query = query.filter(AuditLog.resource_id == resource_id)
    if user_id is not None:
        query = query.filter(AuditLog.user_id == user_id)
    if action:
        query = query.filter(AuditLog.action == action)
    if start_date is not None:
        query = query.filter(AuditLog.timestamp >= start_date)
    if end_date is not None:
        query = query.filter(AuditLog.timestamp <= end_date)
    return query

def get_audit_log(db: Session, log_id: int) -> Optional[AuditLog]:
    return (
        db.query(AuditLog)
        .options(joinedload(AuditLog.user))
        .filter(AuditLog.id == log_id)
        .first()
    )

def get_audit_logs(
    db: Session,
    page: int = 1,
    limit: int = 50,
    **filters,
) -> Tuple[List[AuditLog], int]:
    query = _apply_filters(db.query(AuditLog), **filters)
    total = query.count()
    logs = (
        query.options(joinedload(AuditLog.user))
        .order_by(AuditLog.timestamp.desc(), AuditLog.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return logs, total

def count_by(db: Session, column, start_date=None, end_date=None, limit: Optional[int] = None):
    query = _apply_filters(
        db.query(column, func.count(AuditLog.id)),
        start_date=start_date,
        end_date=end_date,
    ).filter(column.isnot(None))
    query = query.group_by(column).order_by(func.count(AuditLog.id).desc())
    if limit is not None:
        query = query.limit(limit)
    return query.all()

def get_timestamps(db: Session, start_date: datetime, end_date: datetime) -> List[datetime]:
    rows = _apply_filters(
        db.query(AuditLog.timestamp),
        start_date=start_date,
        end_date=end_date,
    ).all()
    return [timestamp for (timestamp,) in rows]
