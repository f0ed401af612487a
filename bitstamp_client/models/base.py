"""
Base classes for normalized Bitstamp records.

Implements the Template Method pattern for common operations
and provides a consistent interface across all record types.
"""
import json
from abc import ABC
from dataclasses import asdict
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from bitstamp_client.exceptions import InvalidTypeError, MissingFieldError, ValidationError
from bitstamp_client.utils.currency import Currency

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def parse_exchange_datetime(value: Any, field: str = "datetime") -> datetime:
    """
    Parse an exchange timestamp ("YYYY-MM-DD HH:MM:SS[.ffffff]") as UTC.

    Aware datetimes are passed through; naive ones are taken to be UTC.

    Raises:
        InvalidTypeError: If the value cannot be parsed
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).strip())
        except ValueError as e:
            raise InvalidTypeError(field, "datetime", value) from e
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed


def to_iso8601(value: datetime) -> str:
    """Render a datetime as UTC ISO-8601 with milliseconds, e.g. '2016-02-01T10:00:00.000Z'."""
    utc = value.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


class BaseRecord(ABC):
    """
    Abstract base class for all normalized records.

    Provides the conversion helpers used by the ``from_*`` factory methods
    and common serialization.
    """

    # Subclasses should define required raw fields
    REQUIRED_FIELDS: tuple = ()

    @classmethod
    def _validate_required_fields(cls, data: Any) -> None:
        """
        Validate that all required fields are present.

        Raises:
            InvalidTypeError: If data is not a dictionary
            MissingFieldError: If any required field is missing
        """
        if not isinstance(data, dict):
            raise InvalidTypeError(cls.__name__, "object", data)
        for field in cls.REQUIRED_FIELDS:
            if field not in data:
                raise MissingFieldError(field, data)

    @classmethod
    def _safe_float(cls, value: Any, field: str, default: float = 0.0) -> float:
        """
        Safely convert value to float.

        Raises:
            InvalidTypeError: If conversion fails
        """
        if value is None:
            return default
        try:
            return float(value)
        except (ValueError, TypeError) as e:
            raise InvalidTypeError(field, "float", value) from e

    @classmethod
    def _safe_int(cls, value: Any, field: str, default: int = 0) -> int:
        """
        Safely convert value to int.

        Raises:
            InvalidTypeError: If conversion fails
        """
        if value is None:
            return default
        try:
            return int(value)
        except (ValueError, TypeError) as e:
            raise InvalidTypeError(field, "int", value) from e

    @classmethod
    def _subunits(cls, value: Any, currency: str, field: str) -> int:
        """
        Convert a raw decimal amount to integer subunits of ``currency``.

        Missing values count as zero.

        Raises:
            InvalidTypeError: If the value is not numeric
        """
        if value is None or value == "":
            return 0
        try:
            return Currency.to_smallest_subunit(value, currency)
        except ValidationError as e:
            raise InvalidTypeError(field, "decimal", value) from e

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert instance to dictionary.

        Returns:
            Dictionary representation with enum values converted to strings
        """
        return self._convert_enums(asdict(self))

    def _convert_enums(self, data: Any) -> Any:
        """Recursively replace enum members by their values."""
        if isinstance(data, dict):
            return {key: self._convert_enums(value) for key, value in data.items()}
        if isinstance(data, list):
            return [self._convert_enums(item) for item in data]
        if isinstance(data, Enum):
            return data.value
        return data

    def to_json(self, indent: Optional[int] = None) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent, default=str)
