"""
Bitstamp Client - normalized access to the Bitstamp REST API.

This package provides:
- An asyncio client for ticker, order book, balance and trading endpoints
- Paginated transaction history with date-bounded early exit
- Data models normalizing transactions, trades and market data
- Configuration management
"""

__version__ = "1.0.0"

from bitstamp_client.api import BitstampClient
from bitstamp_client.config import get_config, AppConfig, BitstampConfig, Credentials
from bitstamp_client.exceptions import (
    BitstampError,
    ClientParseError,
    ErrorCode,
    InsufficientFundsError,
    ListingError,
    MissingCredentialsError,
    ServerError,
    ValidationError,
)

__all__ = [
    "BitstampClient",
    "get_config",
    "AppConfig",
    "BitstampConfig",
    "Credentials",
    "BitstampError",
    "ClientParseError",
    "ErrorCode",
    "InsufficientFundsError",
    "ListingError",
    "MissingCredentialsError",
    "ServerError",
    "ValidationError",
    "__version__",
]
