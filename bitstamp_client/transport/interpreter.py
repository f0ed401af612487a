"""
Interpretation of raw Bitstamp responses.

The error schema of the GET endpoints is undocumented; it is assumed to
mirror the POST schema observed in practice:

    {"error": {"__all__": ["message", ...], ...}}  or  {"error": "message"}

so both paths share this logic.
"""
import json
import re
from typing import Any, Iterable, Optional

from bitstamp_client.exceptions import (
    ClientParseError,
    ErrorCode,
    InsufficientFundsError,
    ServerError,
)
from bitstamp_client.utils import get_logger

from .http import RawResponse

logger = get_logger(__name__)

BUY_INSUFFICIENT_FUNDS_PATTERN = re.compile(
    r"^You need \d+(\.\d+)? [A-Z]{3} to open that order\. "
    r"You have only \d+(\.\d+)? [A-Z]{3} available\. "
    r"Check your account balance for details\.$"
)
SELL_INSUFFICIENT_FUNDS_PATTERN = re.compile(
    r"^You have only \d+(\.\d+)? [A-Z]{3} available\. "
    r"Check your account balance for details\.$"
)


def classify_error_message(message: Any) -> Optional[ErrorCode]:
    """
    Map an exchange error message to a known error code.

    Returns:
        ErrorCode.INSUFFICIENT_FUNDS for either balance shortfall message,
        None for anything unrecognized
    """
    if not isinstance(message, str):
        return None
    if BUY_INSUFFICIENT_FUNDS_PATTERN.match(message):
        return ErrorCode.INSUFFICIENT_FUNDS
    if SELL_INSUFFICIENT_FUNDS_PATTERN.match(message):
        return ErrorCode.INSUFFICIENT_FUNDS
    return None


def find_insufficient_funds_message(messages: Iterable[Any]) -> Optional[str]:
    """Return the first shortfall message, preferring the buy-side wording."""
    messages = [m for m in messages if isinstance(m, str)]
    for pattern in (BUY_INSUFFICIENT_FUNDS_PATTERN, SELL_INSUFFICIENT_FUNDS_PATTERN):
        for message in messages:
            if pattern.match(message):
                return message
    return None


def error_from_payload(error: Any) -> ServerError:
    """
    Build the exception for an ``error`` field of a response body.

    Recognized ``__all__`` messages are reclassified; anything else becomes
    a generic ServerError holding the raw payload as cause.
    """
    if isinstance(error, dict):
        messages = error.get("__all__")
        if isinstance(messages, list):
            message = find_insufficient_funds_message(messages)
            if message is not None:
                return InsufficientFundsError(message, cause=error)

    return ServerError(
        "There is an error in the body of the response from the exchange service...",
        cause=error,
    )


def interpret_response(response: RawResponse) -> Any:
    """
    Turn a raw transport outcome into parsed data.

    Returns:
        The decoded JSON body

    Raises:
        ServerError: On transport failure, empty body or an exchange error
        InsufficientFundsError: If the exchange reports a balance shortfall
        ClientParseError: If the body is not valid JSON
    """
    if response.error is not None or not response.body:
        raise ServerError(
            "There is an error in the response from the Bitstamp service...",
            cause=response.error,
            status=response.status,
        ) from response.error

    try:
        data = json.loads(response.body)
    except ValueError as e:
        raise ClientParseError(
            "Could not understand response from exchange server.",
            cause=e,
            details={"status": response.status, "body": response.body[:200]},
        ) from e

    if isinstance(data, dict) and data.get("error"):
        error = error_from_payload(data["error"])
        logger.warning("Exchange reported an error (%s): %s", error.code, data["error"])
        raise error

    return data
