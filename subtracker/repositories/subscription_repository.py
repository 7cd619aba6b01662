"""Subscription repository."""

import re
from datetime import date
from uuid import UUID

from sqlalchemy import bindparam, func, text

from subtracker.domain.models import Subscription
from subtracker.domain.query_builder import UpdateStatement
from subtracker.extensions import db
from subtracker.repositories.base import BaseRepository

_POSITIONAL_PARAM = re.compile(r"\$(\d+)")


class SubscriptionRepository(BaseRepository[Subscription]):
    """Data access for Subscription records."""

    def __init__(self):
        super().__init__(Subscription)

    def find_all(self, offset: int, limit: int) -> tuple[list[Subscription], int]:
        """Return one page of subscriptions (newest first) and the total count."""
        items = (
            Subscription.query
            .order_by(Subscription.created_at.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return items, self.count()

    def execute_update(self, statement: UpdateStatement) -> bool:
        """Run a rendered partial update; ``False`` if no row matched.

        ``$n`` placeholders become named binds typed after the column they
        target, so UUIDs and dates are converted the same way the ORM does.
        """
        columns = Subscription.__table__.c
        sql = _POSITIONAL_PARAM.sub(lambda m: f":p{m.group(1)}", statement.sql)
        binds = [
            bindparam(f"p{position}", value, type_=columns[column].type)
            for position, (column, value) in enumerate(
                zip(statement.columns, statement.params), start=1,
            )
        ]
        result = db.session.execute(text(sql).bindparams(*binds))
        return result.rowcount > 0

    def sum_price(
        self,
        start: date,
        end: date,
        user_id: UUID | None = None,
        service_name: str | None = None,
    ) -> int:
        """Sum ``price`` over subscriptions starting within ``[start, end]``."""
        query = db.session.query(func.coalesce(func.sum(Subscription.price), 0)).filter(
            Subscription.start_date >= start,
            Subscription.start_date <= end,
        )
        if user_id is not None:
            query = query.filter(Subscription.user_id == user_id)
        if service_name is not None:
            query = query.filter(Subscription.service_name == service_name)
        return int(query.scalar())
