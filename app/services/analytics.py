"""
Per-user analytics rollup for the admin console.

Counts come from GROUP BY queries; spend and rating figures are reduced in
Python from the user's full payment and review history, which is fine for the
volumes a single rider or driver accumulates.
"""

from collections import OrderedDict, defaultdict
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from app.constants.enums import PaymentStatus
from app.db.crud import user as user_crud
from app.db.models.service import Review
from app.db.models.user import User


def _average(values: Iterable[Optional[int]]) -> float:
    rated = [value for value in values if value is not None]
    if not rated:
        return 0.0
    return round(sum(rated) / len(rated), 2)


def review_stats(reviews: List[Review]) -> Dict[str, Any]:
    return {
        "total": len(reviews),
        "average_rating": _average(r.rating for r in reviews),
        "average_punctuality": _average(r.punctuality_rating for r in reviews),
        "average_cleanliness": _average(r.cleanliness_rating for r in reviews),
        "average_safety": _average(r.safety_rating for r in reviews),
    }


def payment_stats(payments) -> Dict[str, Any]:
    """Spend totals over completed payments, bucketed by method and by YYYY-MM."""
    completed = [p for p in payments if p.status == PaymentStatus.COMPLETED]

    by_method: Dict[str, Dict[str, Any]] = defaultdict(lambda: {"count": 0, "amount": 0.0})
    monthly: Dict[str, Dict[str, Any]] = OrderedDict()
    for payment in sorted(completed, key=lambda p: p.created_at):
        method = by_method[payment.payment_method.value]
        method["count"] += 1
        method["amount"] = round(method["amount"] + payment.amount, 2)

        month = payment.created_at.isoformat()[:7]
        bucket = monthly.setdefault(month, {"month": month, "amount": 0.0, "count": 0})
        bucket["count"] += 1
        bucket["amount"] = round(bucket["amount"] + payment.amount, 2)

    return {
        "total_spent": round(sum(p.amount for p in completed), 2),
        "total_transactions": len(payments),
        "by_method": dict(by_method),
        "monthly": list(monthly.values()),
    }


def build_user_analytics(db: Session, user: User) -> Dict[str, Any]:
    by_status = {
        status.value: count for status, count in user_crud.service_counts_by_status(db, user.id)
    }
    by_type = [
        {"service_type": name, "count": count}
        for name, count in user_crud.service_counts_by_type(db, user.id)
    ]

    driver_ratings = None
    if user.driver is not None:
        driver_ratings = review_stats(user_crud.get_reviews_for_driver(db, user.driver.id))

    return {
        "user_id": user.id,
        "services": {
            "total": sum(by_status.values()),
            "by_status": by_status,
            "by_type": by_type,
        },
        "payments": payment_stats(user_crud.get_payments(db, user.id)),
        "reviews_given": review_stats(user_crud.get_reviews_given(db, user.id)),
        "driver_ratings": driver_ratings,
    }
