"""
HTTP transport and response interpretation for the Bitstamp client.
"""
from .http import HttpMethod, HttpTransport, RawResponse, RequestOptions
from .interpreter import (
    classify_error_message,
    error_from_payload,
    interpret_response,
)

__all__ = [
    "HttpMethod",
    "HttpTransport",
    "RawResponse",
    "RequestOptions",
    "classify_error_message",
    "error_from_payload",
    "interpret_response",
]
