"""
Custom exceptions for the Bitstamp client.

Every error carries a stable machine-readable ``code`` and a human-readable
message. The underlying cause (network exception or raw exchange error
payload) is kept on ``cause`` for diagnostics.
"""
from enum import Enum, unique
from typing import Any, Dict, Optional


@unique
class ErrorCode(str, Enum):
    """Machine-readable error codes."""

    MODULE_ERROR = "MODULE_ERROR"
    EXCHANGE_SERVER_ERROR = "EXCHANGE_SERVER_ERROR"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"

    def __str__(self) -> str:
        return self.value


class BitstampError(Exception):
    """Base exception for all client errors."""

    code: ErrorCode = ErrorCode.MODULE_ERROR

    def __init__(
        self,
        message: str,
        cause: Any = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# Caller Input Errors
# =============================================================================


class ValidationError(BitstampError):
    """Raised when caller input is invalid. No request is made."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None,
        expected: Optional[str] = None,
    ):
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)[:100]  # Truncate for safety
        if expected:
            details["expected"] = expected

        super().__init__(message, details=details)
        self.field = field
        self.value = value
        self.expected = expected


class MissingFieldError(ValidationError):
    """Raised when a required field is missing from a record."""

    def __init__(self, field: str, data: Optional[Dict[str, Any]] = None):
        message = f"Required field '{field}' is missing"
        super().__init__(message, field=field)
        self.available_fields = list(data.keys()) if isinstance(data, dict) else []


class InvalidTypeError(ValidationError):
    """Raised when a field has an invalid type."""

    def __init__(self, field: str, expected_type: str, actual_value: Any):
        actual_type = type(actual_value).__name__
        message = f"Field '{field}' has invalid type: expected {expected_type}, got {actual_type}"
        super().__init__(
            message,
            field=field,
            value=actual_value,
            expected=expected_type,
        )


class UnsupportedCurrencyPairError(ValidationError):
    """Raised for any currency pair other than BTC/USD."""

    def __init__(self, base_currency: Any, quote_currency: Any):
        message = (
            "Bitstamp only supports BTC and USD as base and quote currencies, "
            "respectively."
        )
        super().__init__(
            message,
            field="currency_pair",
            value=f"{base_currency}/{quote_currency}",
            expected="BTC/USD",
        )


class MissingCredentialsError(ValidationError):
    """Raised when an authenticated call is made without full credentials."""

    def __init__(self, missing: Optional[list] = None):
        message = "Must provide key, secret and client ID to make this API request."
        super().__init__(message, field=", ".join(missing) if missing else None)
        self.missing = missing or []


# =============================================================================
# Exchange Response Errors
# =============================================================================


class ServerError(BitstampError):
    """Raised on transport failure or an unrecognized exchange error."""

    code = ErrorCode.EXCHANGE_SERVER_ERROR

    def __init__(
        self,
        message: str,
        cause: Any = None,
        status: Optional[int] = None,
    ):
        details = {}
        if status is not None:
            details["status"] = status
        super().__init__(message, cause=cause, details=details)
        self.status = status


class InsufficientFundsError(ServerError):
    """Raised when the exchange reports a balance shortfall."""

    code = ErrorCode.INSUFFICIENT_FUNDS


class ClientParseError(BitstampError):
    """Raised when a response body cannot be understood."""

    code = ErrorCode.MODULE_ERROR


# =============================================================================
# Listing Errors
# =============================================================================


class ListingError(BitstampError):
    """Raised when transaction pagination fails on any page."""

    code = ErrorCode.MODULE_ERROR

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        offset: Optional[int] = None,
    ):
        details = {}
        if offset is not None:
            details["offset"] = offset
        super().__init__(message, cause=cause, details=details)
        self.offset = offset
