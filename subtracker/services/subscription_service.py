"""Subscription service: core workflow orchestration.

Flow: SubscriptionMapper (validate + map) → UpdateQueryBuilder (updates)
→ SubscriptionRepository → response dict.

Persistence failures are rolled back, logged with detail and surfaced as
``InternalError`` so no database detail reaches the client.
"""

import logging
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from subtracker.domain.exceptions import (
    EmptyUpdateError,
    InternalError,
    MappingError,
    ResourceNotFoundError,
    ValidationError,
)
from subtracker.domain.mapper import SubscriptionMapper
from subtracker.domain.models import Subscription
from subtracker.domain.query_builder import UpdateQueryBuilder
from subtracker.repositories.subscription_repository import SubscriptionRepository

DATE_ORDER_CONFLICT = "end_date must not be before start_date (stored values included)"


class SubscriptionService:
    """Create, read, update, delete, list and sum subscriptions.

    Args:
        repository: Persistence collaborator; defaults to ``SubscriptionRepository``.
        mapper: Request mapper; defaults to ``SubscriptionMapper``.
        logger: Logger used for every message this service emits.
    """

    def __init__(
        self,
        repository: SubscriptionRepository | None = None,
        mapper: SubscriptionMapper | None = None,
        logger: logging.Logger | None = None,
    ):
        self._repo = repository or SubscriptionRepository()
        self._logger = logger or logging.getLogger(__name__)
        self._mapper = mapper or SubscriptionMapper(logger=self._logger)

    def create_subscription(self, data) -> dict:
        """Validate a create request and persist the new subscription."""
        subscription = self._map(self._mapper.to_subscription, data)

        with self._persistence("create"):
            subscription = self._repo.create(subscription)
            self._repo.commit()

        self._logger.info(
            "Subscription created id=%s user=%s service='%s'",
            subscription.id, subscription.user_id, subscription.service_name,
        )
        return subscription.to_dict()

    def get_subscription(self, subscription_id: str) -> dict:
        """Fetch a subscription by id or raise not-found."""
        record_id = self._mapper.parse_id(subscription_id)

        with self._persistence("get"):
            subscription = self._repo.get_by_id(record_id)

        if not subscription:
            raise ResourceNotFoundError("Subscription", record_id)
        return subscription.to_dict()

    def list_subscriptions(
        self,
        offset=None,
        limit=None,
        default_limit: int = 10,
        max_limit: int = 100,
    ) -> dict:
        """Return one page of subscriptions with the overall total."""
        offset, limit = self._mapper.to_page(offset, limit, default_limit, max_limit)

        with self._persistence("list"):
            items, total = self._repo.find_all(offset, limit)

        return {
            "total": total,
            "offset": offset,
            "limit": limit,
            "subscriptions": [s.to_dict() for s in items],
        }

    def update_subscription(self, data) -> dict:
        """Apply a partial update and return the refreshed subscription.

        Only supplied fields are written. A request with no field to change
        raises ``EmptyUpdateError`` without touching the database.
        """
        update = self._map(self._mapper.to_update_data, data)
        statement = UpdateQueryBuilder(Subscription.__tablename__).build(update.id, update.fields())
        if statement is None:
            raise EmptyUpdateError()

        with self._persistence("update", conflict_message=DATE_ORDER_CONFLICT):
            updated = self._repo.execute_update(statement)
            self._repo.commit()

        if not updated:
            self._logger.warning("Update matched no subscription id=%s", update.id)
            raise ResourceNotFoundError("Subscription", update.id)

        self._logger.info("Subscription updated id=%s", update.id)

        with self._persistence("reload"):
            subscription = self._repo.get_by_id(update.id)

        if not subscription:
            raise ResourceNotFoundError("Subscription", update.id)
        return subscription.to_dict()

    def delete_subscription(self, subscription_id: str) -> None:
        """Delete a subscription or raise not-found."""
        record_id = self._mapper.parse_id(subscription_id)

        with self._persistence("delete"):
            deleted = self._repo.delete_by_id(record_id)
            self._repo.commit()

        if not deleted:
            raise ResourceNotFoundError("Subscription", record_id)
        self._logger.info("Subscription deleted id=%s", record_id)

    def get_total_sum(self, data) -> int:
        """Sum subscription prices whose start month falls in ``[start, end]``."""
        query = self._map(self._mapper.to_total_query, data)

        with self._persistence("total"):
            return self._repo.sum_price(
                query.start, query.end, query.user_id, query.service_name,
            )

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _map(self, convert, data):
        """Run a mapper conversion, logging mapping failures before re-raising."""
        try:
            return convert(data)
        except MappingError as err:
            self._logger.error("Mapping failed: %s", err.detail)
            raise

    @contextmanager
    def _persistence(self, operation: str, conflict_message: str | None = None):
        """Translate database failures into ``InternalError``.

        With ``conflict_message`` set, a constraint violation is reported as a
        ``ValidationError`` instead: a partial update can move one date past
        the other one already stored.
        """
        try:
            yield
        except SQLAlchemyError as err:
            self._repo.rollback()
            if conflict_message and isinstance(err, IntegrityError):
                self._logger.warning("Subscription %s rejected by constraints", operation)
                raise ValidationError.from_errors([conflict_message])
            self._logger.exception("Subscription %s failed", operation)
            raise InternalError()
