"""Field-level validation primitives.

A ``Validator`` collects human-readable messages instead of raising, so a
single pass can report every problem with a request at once.
"""

import uuid


class Validator:
    """Accumulates validation messages for one request."""

    def __init__(self):
        self._errors: list[str] = []
        self._count = 0

    def check_string(self, value: str, name: str) -> "StringCheck":
        """Start a chain of checks on a string field."""
        self._count += 1
        return StringCheck(self, value, name)

    def check_number(self, value, name: str) -> "NumberCheck":
        """Start a chain of checks on a numeric field."""
        self._count += 1
        return NumberCheck(self, value, name)

    def add_error(self, message: str) -> None:
        self._errors.append(message)

    def has_errors(self) -> bool:
        return bool(self._errors)

    def get_errors(self) -> list[str]:
        return list(self._errors)

    def validated_fields_count(self) -> int:
        """Number of fields passed to ``check_*`` so far."""
        return self._count


class StringCheck:
    """Chainable checks bound to a single string value."""

    def __init__(self, validator: Validator, value: str, name: str):
        self._validator = validator
        self._value = value
        self._name = name

    def is_min(self, minimum: int) -> "StringCheck":
        """Fail if the value has fewer than ``minimum`` characters."""
        length = len(self._value)
        if length < minimum:
            self._validator.add_error(
                f"[{self._name}] - Min required length is {minimum}, provided: {length}",
            )
        return self

    def is_max(self, maximum: int) -> "StringCheck":
        """Fail if the value has more than ``maximum`` characters."""
        length = len(self._value)
        if length > maximum:
            self._validator.add_error(
                f"[{self._name}] - Max available length is {maximum}, provided: {length}",
            )
        return self

    def is_uuid(self) -> "StringCheck":
        """Fail if the value does not parse as a UUID."""
        try:
            uuid.UUID(self._value)
        except (TypeError, ValueError, AttributeError):
            self._validator.add_error(f"[{self._name}] - Invalid uuid")
        return self


class NumberCheck:
    """Chainable bound checks on an ``int`` or ``float`` value.

    Anything else (``bool`` included) is reported as an unsupported type
    rather than compared, once per chain.
    """

    def __init__(self, validator: Validator, value, name: str):
        self._validator = validator
        self._value = value
        self._name = name
        self._type_reported = False

    def is_min(self, minimum: float) -> "NumberCheck":
        if self._supported() and self._value < minimum:
            self._validator.add_error(
                f"[{self._name}] - Min required: {minimum}, provided: {self._value}",
            )
        return self

    def is_max(self, maximum: float) -> "NumberCheck":
        if self._supported() and self._value > maximum:
            self._validator.add_error(
                f"[{self._name}] - Max available: {maximum}, provided: {self._value}",
            )
        return self

    def _supported(self) -> bool:
        if isinstance(self._value, (int, float)) and not isinstance(self._value, bool):
            return True
        if not self._type_reported:
            self._type_reported = True
            self._validator.add_error(
                f"[{self._name}] - Unsupported type: {type(self._value).__name__}",
            )
        return False
