"""Request-to-entity mapper.

Turns parsed request shapes into domain objects: a ``Subscription`` for
create, an ``UpdateData`` descriptor for partial updates and a
``TotalQuery`` for price sums. Every ``to_*`` method validates first and
raises ``ValidationError`` with all collected messages.

No database session is touched here; the returned entities are transient.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import date
from typing import Any

from subtracker.domain.dates import InvalidDateFormat, parse_month_year
from subtracker.domain.exceptions import MappingError, ValidationError
from subtracker.domain.models import Subscription
from subtracker.domain.query_builder import UNSET
from subtracker.domain.validator import Validator

SERVICE_NAME_MAX_LENGTH = 255
# Upper bound of the INTEGER columns and of the LIMIT/OFFSET values sent to the database.
MAX_DB_INTEGER = 2_147_483_647

# Present-but-null is rejected for these; ``end_date: null`` clears the end date.
_NON_NULLABLE_UPDATE_FIELDS = ("service_name", "price", "user_id", "start_date")


@dataclass(frozen=True)
class UpdateData:
    """Partial update descriptor.

    Each optional field is ``UNSET`` (leave unchanged) or the new value.
    ``end_date=None`` means "clear the end date".
    """

    id: uuid.UUID
    service_name: Any = UNSET
    price: Any = UNSET
    user_id: Any = UNSET
    start_date: Any = UNSET
    end_date: Any = UNSET

    def fields(self) -> list[tuple[str, Any]]:
        """Column/value pairs in the fixed order the query builder consumes."""
        return [
            ("user_id", self.user_id),
            ("price", self.price),
            ("service_name", self.service_name),
            ("start_date", self.start_date),
            ("end_date", self.end_date),
        ]


@dataclass(frozen=True)
class TotalQuery:
    """Filters for a total price query."""

    start: date
    end: date
    user_id: uuid.UUID | None = None
    service_name: str | None = None


class SubscriptionMapper:
    """Validates request shapes and converts them into domain objects.

    Args:
        logger: Logger for rejected requests; the service passes its own.
    """

    def __init__(self, logger: logging.Logger | None = None):
        self._logger = logger or logging.getLogger(__name__)

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def validate_create(self, data) -> list[str]:
        """Return every problem with a create request (empty if valid)."""
        v = Validator()
        self._check_service_name(v, data.service_name)
        v.check_string(data.user_id, "user_id").is_uuid()
        v.check_number(data.price, "price").is_min(0).is_max(MAX_DB_INTEGER)

        start = self._check_date(v, data.start_date, "start_date", "01-2025")
        if data.end_date:
            end = self._check_date(v, data.end_date, "end_date", "12-2025")
            self._check_order(v, start, end, data.start_date, data.end_date)

        return v.get_errors()

    def to_subscription(self, data) -> Subscription:
        """Build an unsaved ``Subscription`` from a create request."""
        self._raise_if_invalid("create", self.validate_create(data))

        try:
            user_id = uuid.UUID(data.user_id)
            start_date = parse_month_year(data.start_date)
            end_date = parse_month_year(data.end_date) if data.end_date else None
        except ValueError as err:
            raise MappingError(f"failed to map create request: {err}") from err

        return Subscription(
            service_name=data.service_name,
            price=data.price,
            user_id=user_id,
            start_date=start_date,
            end_date=end_date,
        )

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    def validate_update(self, data) -> list[str]:
        """Return every problem with a partial update request.

        Only fields present in the payload are checked. The end-before-start
        rule applies only when both dates are supplied and parse.
        """
        v = Validator()
        v.check_string(data.id, "id").is_uuid()

        for name in _NON_NULLABLE_UPDATE_FIELDS:
            if name in data.model_fields_set and getattr(data, name) is None:
                v.add_error(f"[{name}] - Cannot be null")

        if data.service_name is not None:
            self._check_service_name(v, data.service_name)
        if data.price is not None:
            v.check_number(data.price, "price").is_min(0).is_max(MAX_DB_INTEGER)
        if data.user_id is not None:
            v.check_string(data.user_id, "user_id").is_uuid()

        start = end = None
        if data.start_date is not None:
            start = self._check_date(v, data.start_date, "start_date", "01-2025")
        if data.end_date is not None:
            end = self._check_date(v, data.end_date, "end_date", "12-2025")
        self._check_order(v, start, end, data.start_date, data.end_date)

        return v.get_errors()

    def to_update_data(self, data) -> UpdateData:
        """Build an ``UpdateData`` descriptor; absent fields stay ``UNSET``."""
        self._raise_if_invalid("update", self.validate_update(data))

        changes: dict[str, Any] = {}
        try:
            record_id = uuid.UUID(data.id)
            if data.service_name is not None:
                changes["service_name"] = data.service_name
            if data.price is not None:
                changes["price"] = data.price
            if data.user_id is not None:
                changes["user_id"] = uuid.UUID(data.user_id)
            if data.start_date is not None:
                changes["start_date"] = parse_month_year(data.start_date)
            if "end_date" in data.model_fields_set:
                changes["end_date"] = (
                    parse_month_year(data.end_date) if data.end_date is not None else None
                )
        except ValueError as err:
            raise MappingError(f"failed to map update request: {err}") from err

        return UpdateData(id=record_id, **changes)

    # ------------------------------------------------------------------
    # Total sum / pagination / path ids
    # ------------------------------------------------------------------

    def validate_total(self, data) -> list[str]:
        """Check a total price query; empty optional filters are ignored."""
        v = Validator()
        self._check_date(v, data.start, "start", "01-2025")
        self._check_date(v, data.end, "end", "12-2025")
        if data.user_id:
            v.check_string(data.user_id, "user_id").is_uuid()
        if data.service_name:
            self._check_service_name(v, data.service_name)
        return v.get_errors()

    def to_total_query(self, data) -> TotalQuery:
        self._raise_if_invalid("total", self.validate_total(data))

        try:
            return TotalQuery(
                start=parse_month_year(data.start),
                end=parse_month_year(data.end),
                user_id=uuid.UUID(data.user_id) if data.user_id else None,
                service_name=data.service_name or None,
            )
        except ValueError as err:
            raise MappingError(f"failed to map total request: {err}") from err

    def to_page(
        self,
        offset,
        limit,
        default_limit: int = 10,
        max_limit: int = 100,
    ) -> tuple[int, int]:
        """Resolve raw ``offset``/``limit`` query values into integers."""
        offset = self._to_int(offset, 0)
        limit = self._to_int(limit, default_limit)

        v = Validator()
        v.check_number(offset, "offset").is_min(0).is_max(MAX_DB_INTEGER)
        v.check_number(limit, "limit").is_min(1).is_max(max_limit)
        self._raise_if_invalid("list", v.get_errors())
        return offset, limit

    def parse_id(self, value: str, name: str = "id") -> uuid.UUID:
        """Parse a path identifier or raise ``ValidationError``."""
        v = Validator()
        v.check_string(value, name).is_uuid()
        self._raise_if_invalid("lookup", v.get_errors())
        return uuid.UUID(value)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _check_service_name(v: Validator, value: str) -> None:
        v.check_string(value, "service_name").is_min(1).is_max(SERVICE_NAME_MAX_LENGTH)

    @staticmethod
    def _check_date(v: Validator, value: str, name: str, example: str) -> date | None:
        """Parse a month-year field, recording an error on failure."""
        try:
            return parse_month_year(value)
        except InvalidDateFormat:
            v.add_error(
                f"Invalid {name} format. Expected MM-YYYY (e.g., {example}). Got: {value}",
            )
            return None

    @staticmethod
    def _check_order(
        v: Validator,
        start: date | None,
        end: date | None,
        raw_start: str | None,
        raw_end: str | None,
    ) -> None:
        if start is not None and end is not None and end < start:
            v.add_error(
                "end_date must not be before start_date. "
                f"Got: end_date={raw_end}, start_date={raw_start}",
            )

    @staticmethod
    def _to_int(value, default: int):
        """Convert a query string value; unparsable input is returned as-is."""
        if value is None or value == "":
            return default
        try:
            return int(value)
        except (TypeError, ValueError):
            return value

    def _raise_if_invalid(self, operation: str, errors: list[str]) -> None:
        if errors:
            self._logger.warning("Rejected %s request: %s", operation, errors)
            raise ValidationError.from_errors(errors)
