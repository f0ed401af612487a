"""
Enumerations for Bitstamp account and market data.

Centralizes all enum definitions to ensure consistency
across the codebase and prevent magic strings.
"""
from enum import Enum, IntEnum, unique
from typing import Any, Optional


@unique
class TransactionType(IntEnum):
    """Raw ``user_transactions`` record type."""

    DEPOSIT = 0
    WITHDRAWAL = 1
    MARKET_TRADE = 2

    @classmethod
    def from_value(cls, value: Any) -> "TransactionType":
        """
        Create from raw value (int or numeric string).

        Raises:
            ValueError: If value is not a known type
        """
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            raise ValueError(f"Unknown transaction type: {value!r}") from None

    @classmethod
    def parse(cls, value: Any) -> Optional["TransactionType"]:
        """Like from_value, but returns None for unknown types."""
        try:
            return cls.from_value(value)
        except ValueError:
            return None


@unique
class OrderSide(str, Enum):
    """Limit order side; also the endpoint name used to place it."""

    BUY = "buy"
    SELL = "sell"

    @classmethod
    def from_value(cls, value: str) -> "OrderSide":
        """
        Create from string value.

        Raises:
            ValueError: If value is not valid
        """
        return cls(str(value).lower())

    @classmethod
    def from_amount(cls, base_amount: float) -> "OrderSide":
        """Negative base amounts sell, positive ones buy."""
        return cls.SELL if base_amount < 0 else cls.BUY

    @property
    def is_buy(self) -> bool:
        return self == OrderSide.BUY

    @property
    def is_sell(self) -> bool:
        return self == OrderSide.SELL


@unique
class TradeState(str, Enum):
    """Normalized trade state."""

    OPEN = "open"
    CLOSED = "closed"

    @classmethod
    def from_order_status(cls, status: Any) -> "TradeState":
        """Orders are closed once the exchange reports 'Finished'."""
        if isinstance(status, str) and status.lower() == "finished":
            return cls.CLOSED
        return cls.OPEN


@unique
class TradeType(str, Enum):
    """Normalized trade type. Only limit orders are supported."""

    LIMIT = "limit"


@unique
class TransactionState(str, Enum):
    """Bitstamp has no transaction states; everything is completed."""

    COMPLETED = "completed"


@unique
class TransactionKind(str, Enum):
    """Normalized transaction kind."""

    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"

    @classmethod
    def from_type(cls, tx_type: TransactionType) -> "TransactionKind":
        if tx_type == TransactionType.DEPOSIT:
            return cls.DEPOSIT
        return cls.WITHDRAWAL
