"""Unit tests for SubscriptionService outcome classification.

The repository is replaced by an in-memory stub so each persistence
outcome (row found / not found / database failure) can be forced.
"""

import uuid
from datetime import date, datetime
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from subtracker.domain.exceptions import (
    EmptyUpdateError,
    InternalError,
    MappingError,
    ResourceNotFoundError,
    ValidationError,
)
from subtracker.domain.models import Subscription
from subtracker.schemas.subscription_schema import (
    SubscriptionCreateSchema,
    SubscriptionTotalSchema,
    SubscriptionUpdateSchema,
)
from subtracker.services.subscription_service import DATE_ORDER_CONFLICT, SubscriptionService

from conftest import USER_ID

STAMP = datetime(2025, 10, 28, 10, 0, 0)


def _subscription(record_id: uuid.UUID, **overrides) -> Subscription:
    fields = {
        "id": record_id,
        "service_name": "Yandex Plus",
        "price": 400,
        "user_id": uuid.UUID(USER_ID),
        "start_date": date(2025, 1, 1),
        "end_date": None,
        "created_at": STAMP,
        "updated_at": STAMP,
    }
    fields.update(overrides)
    return Subscription(**fields)


class StubRepository:
    """Records calls and returns canned results."""

    def __init__(self):
        self.rows: dict[uuid.UUID, Subscription] = {}
        self.statements = []
        self.failure: Exception | None = None
        self.commits = 0
        self.rollbacks = 0
        self.sum_args = None

    def _maybe_fail(self):
        if self.failure is not None:
            raise self.failure

    def create(self, subscription):
        self._maybe_fail()
        subscription.id = uuid.uuid4()
        subscription.created_at = subscription.updated_at = STAMP
        self.rows[subscription.id] = subscription
        return subscription

    def get_by_id(self, record_id):
        self._maybe_fail()
        return self.rows.get(record_id)

    def find_all(self, offset, limit):
        self._maybe_fail()
        items = list(self.rows.values())
        return items[offset:offset + limit], len(items)

    def execute_update(self, statement):
        self._maybe_fail()
        self.statements.append(statement)
        return statement.params[0] in self.rows

    def delete_by_id(self, record_id):
        self._maybe_fail()
        return self.rows.pop(record_id, None) is not None

    def sum_price(self, start, end, user_id=None, service_name=None):
        self._maybe_fail()
        self.sum_args = (start, end, user_id, service_name)
        return 1234

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1


@pytest.fixture()
def repo():
    return StubRepository()


@pytest.fixture()
def logger():
    return MagicMock()


@pytest.fixture()
def service(repo, logger):
    return SubscriptionService(repository=repo, logger=logger)


def _create_data(**overrides):
    payload = {
        "service_name": "Yandex Plus",
        "price": 400,
        "user_id": USER_ID,
        "start_date": "01-2025",
    }
    payload.update(overrides)
    return SubscriptionCreateSchema.model_validate(payload)


class TestCreate:
    def test_returns_response_shape(self, service, repo, logger):
        result = service.create_subscription(_create_data())

        assert result["service_name"] == "Yandex Plus"
        assert result["start_date"] == "01-2025"
        assert "end_date" not in result
        assert repo.commits == 1
        logger.info.assert_called_once()

    def test_end_date_is_reencoded(self, service):
        result = service.create_subscription(_create_data(end_date="12-2025"))
        assert result["end_date"] == "12-2025"

    def test_validation_failure_skips_persistence(self, service, repo):
        with pytest.raises(ValidationError):
            service.create_subscription(_create_data(start_date="02-2025", end_date="01-2025"))
        assert repo.rows == {}
        assert repo.commits == 0

    def test_database_failure_is_internal(self, service, repo, logger):
        repo.failure = OperationalError("INSERT", {}, Exception("connection refused"))

        with pytest.raises(InternalError) as exc_info:
            service.create_subscription(_create_data())

        assert exc_info.value.status_code == 500
        assert "connection refused" not in exc_info.value.message
        assert repo.rollbacks == 1
        logger.exception.assert_called_once()

    def test_constraint_violation_on_create_is_internal(self, service, repo, logger):
        repo.failure = IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))

        with pytest.raises(InternalError):
            service.create_subscription(_create_data())

        assert repo.rollbacks == 1
        logger.exception.assert_called_once()
        logger.warning.assert_not_called()

    def test_rejection_is_logged_by_service_logger(self, service, logger):
        with pytest.raises(ValidationError):
            service.create_subscription(_create_data(price=-1))

        logger.warning.assert_called_once()

    def test_mapping_failure_is_logged(self, repo, logger):
        mapper = MagicMock()
        mapper.to_subscription.side_effect = MappingError("failed to parse user_id")
        svc = SubscriptionService(repository=repo, mapper=mapper, logger=logger)

        with pytest.raises(MappingError):
            svc.create_subscription(_create_data())

        logger.error.assert_called_once_with("Mapping failed: %s", "failed to parse user_id")


class TestUpdate:
    def test_writes_only_supplied_fields(self, service, repo):
        record_id = uuid.uuid4()
        repo.rows[record_id] = _subscription(record_id)

        result = service.update_subscription(
            SubscriptionUpdateSchema.model_validate({"id": str(record_id), "price": 500}),
        )

        [statement] = repo.statements
        assert statement.sql == (
            "UPDATE subscriptions SET price = $2, updated_at = CURRENT_TIMESTAMP "
            "WHERE id = $1"
        )
        assert statement.params == (record_id, 500)
        assert result["id"] == str(record_id)
        assert repo.commits == 1

    def test_empty_update_never_reaches_repository(self, service, repo):
        with pytest.raises(EmptyUpdateError) as exc_info:
            service.update_subscription(
                SubscriptionUpdateSchema.model_validate({"id": str(uuid.uuid4())}),
            )

        assert exc_info.value.status_code == 400
        assert repo.statements == []

    def test_no_rows_affected_is_not_found(self, service, repo):
        with pytest.raises(ResourceNotFoundError) as exc_info:
            service.update_subscription(
                SubscriptionUpdateSchema.model_validate({"id": str(uuid.uuid4()), "price": 1}),
            )
        assert exc_info.value.status_code == 404
        assert len(repo.statements) == 1

    def test_constraint_violation_is_client_error(self, service, repo):
        repo.failure = IntegrityError("UPDATE", {}, Exception("CHECK constraint failed"))

        with pytest.raises(ValidationError) as exc_info:
            service.update_subscription(
                SubscriptionUpdateSchema.model_validate({
                    "id": str(uuid.uuid4()),
                    "end_date": "01-2020",
                }),
            )
        assert exc_info.value.message == DATE_ORDER_CONFLICT
        assert repo.rollbacks == 1


class TestReadAndDelete:
    def test_get_existing(self, service, repo):
        record_id = uuid.uuid4()
        repo.rows[record_id] = _subscription(record_id, end_date=date(2025, 6, 1))

        result = service.get_subscription(str(record_id))
        assert result["end_date"] == "06-2025"

    def test_get_missing(self, service):
        with pytest.raises(ResourceNotFoundError):
            service.get_subscription(str(uuid.uuid4()))

    def test_get_with_malformed_id(self, service):
        with pytest.raises(ValidationError):
            service.get_subscription("123")

    def test_delete(self, service, repo, logger):
        record_id = uuid.uuid4()
        repo.rows[record_id] = _subscription(record_id)

        service.delete_subscription(str(record_id))

        assert record_id not in repo.rows
        logger.info.assert_called_once()

    def test_constraint_violation_on_delete_is_internal(self, service, repo):
        repo.failure = IntegrityError("DELETE", {}, Exception("FOREIGN KEY constraint failed"))

        with pytest.raises(InternalError):
            service.delete_subscription(str(uuid.uuid4()))
        assert repo.rollbacks == 1

    def test_delete_missing(self, service):
        with pytest.raises(ResourceNotFoundError):
            service.delete_subscription(str(uuid.uuid4()))

    def test_list_page(self, service, repo):
        for _ in range(3):
            record_id = uuid.uuid4()
            repo.rows[record_id] = _subscription(record_id)

        page = service.list_subscriptions("1", "5")

        assert page["total"] == 3
        assert page["offset"] == 1
        assert page["limit"] == 5
        assert len(page["subscriptions"]) == 2


class TestTotal:
    def test_passes_filters_to_repository(self, service, repo):
        data = SubscriptionTotalSchema.model_validate({
            "start": "01-2025",
            "end": "12-2025",
            "service_name": "Yandex Plus",
        })

        assert service.get_total_sum(data) == 1234
        assert repo.sum_args == (date(2025, 1, 1), date(2025, 12, 1), None, "Yandex Plus")

    def test_database_failure(self, service, repo):
        repo.failure = OperationalError("SELECT", {}, Exception("timeout"))
        data = SubscriptionTotalSchema.model_validate({"start": "01-2025", "end": "12-2025"})

        with pytest.raises(InternalError):
            service.get_total_sum(data)
