"""SQLAlchemy ORM models."""

import uuid
from datetime import datetime, timezone

from subtracker.domain.dates import format_month_year
from subtracker.extensions import db


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Subscription
# ---------------------------------------------------------------------------
class Subscription(db.Model):
    """A user's paid subscription to an online service.

    Dates are month-granular and stored as the first day of the month.
    ``end_date`` is either NULL or not before ``start_date``.
    """

    __tablename__ = "subscriptions"
    __table_args__ = (
        db.CheckConstraint("price >= 0", name="ck_subscriptions_price_non_negative"),
        db.CheckConstraint(
            "end_date IS NULL OR end_date >= start_date",
            name="ck_subscriptions_end_after_start",
        ),
    )

    id = db.Column(db.Uuid, primary_key=True, default=uuid.uuid4)
    service_name = db.Column(db.String(255), nullable=False)
    price = db.Column(db.Integer, nullable=False)
    user_id = db.Column(db.Uuid, nullable=False, index=True)
    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date, nullable=True)
    created_at = db.Column(db.DateTime, default=_utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    def to_dict(self) -> dict:
        data = {
            "id": str(self.id),
            "service_name": self.service_name,
            "price": self.price,
            "user_id": str(self.user_id),
            "start_date": format_month_year(self.start_date),
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }
        if self.end_date is not None:
            data["end_date"] = format_month_year(self.end_date)
        return data
