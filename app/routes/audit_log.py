from collections import Counter
from datetime import datetime, timedelta
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from app import config
from app.database import get_db
from app.db.crud import audit_log as audit_log_crud
from app.db.crud import user as user_crud
from app.db.models.audit_log import AuditLog as AuditLogModel
from app.db.schemas.audit_log import (
    AuditLog,
    AuditLogListResponse,
    AuditStatistics,
    DailyActivity,
    KeyCount,
    UserActivity,
)
from app.db.schemas.common import paginate
from app.db.schemas.user import UserSummary
from app.dependencies import CurrentUser, super_admins
from app.errors import NotFoundError

STATISTICS_WINDOW_DAYS = 30
TOP_USERS = 10

router = APIRouter(
    prefix="/api/v1/audit-logs",
    tags=["audit-logs"]
)

@router.get("/", response_model=AuditLogListResponse)
def list_audit_logs(
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=config.MAX_PAGE_SIZE),
    resource: Optional[str] = None,
    resource_id: Optional[str] = None,
    user_id: Optional[int] = None,
    action: Optional[str] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(super_admins),
):
    """Audit entries, newest first"""
    logs, total = audit_log_crud.get_audit_logs(
        db,
        page=page,
        limit=limit,
        resource=resource,
        resource_id=resource_id,
        user_id=user_id,
        action=action,
        start_date=start_date,
        end_date=end_date,
    )
    return AuditLogListResponse(
        logs=[AuditLog.model_validate(log) for log in logs],
        pagination=paginate(total, page, limit),
    )

@router.get("/statistics", response_model=AuditStatistics)
def get_audit_statistics(
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(super_admins),
):
    """Counts per action, per resource, most active users and per-day activity.

    Defaults to the last 30 days when no window is given.
    """
    end_date = end_date or datetime.utcnow()
    start_date = start_date or end_date - timedelta(days=STATISTICS_WINDOW_DAYS)

    action_counts = [
        KeyCount(key=action, count=count)
        for action, count in audit_log_crud.count_by(db, AuditLogModel.action, start_date, end_date)
    ]
    resource_counts = [
        KeyCount(key=resource, count=count)
        for resource, count in audit_log_crud.count_by(db, AuditLogModel.resource, start_date, end_date)
    ]

    user_activity = []
    for user_id, count in audit_log_crud.count_by(db, AuditLogModel.user_id, start_date, end_date, limit=TOP_USERS):
        user = user_crud.get_user(db, user_id)
        user_activity.append(UserActivity(
            user_id=user_id,
            count=count,
            user=UserSummary.model_validate(user) if user else None,
        ))

    # Bucketed in Python so the query stays portable across SQLite and PostgreSQL
    per_day = Counter(ts.date() for ts in audit_log_crud.get_timestamps(db, start_date, end_date))
    daily_activity = [DailyActivity(day=day, count=per_day[day]) for day in sorted(per_day)]

    return AuditStatistics(
        action_counts=action_counts,
        resource_counts=resource_counts,
        user_activity=user_activity,
        daily_activity=daily_activity,
    )

@router.get("/{log_id}", response_model=AuditLog)
def get_audit_log(
    log_id: int,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(super_admins),
):
    """Get a specific audit entry"""
    log = audit_log_crud.get_audit_log(db, log_id)
    if not log:
        raise NotFoundError("Audit log not found")
    return log
