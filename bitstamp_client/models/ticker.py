"""
Ticker model for Bitstamp market data.

Based on the public ``/api/ticker/`` endpoint, which returns every
numeric value as a string.
"""
from dataclasses import dataclass
from typing import Any, Dict

from .base import BaseRecord


@dataclass(frozen=True)
class Ticker(BaseRecord):
    """
    Normalized ticker.

    Attributes:
        base_currency: Base currency code (e.g. 'BTC')
        quote_currency: Quote currency code (e.g. 'USD')
        bid: Highest buy order price
        ask: Lowest sell order price
        last_price: Last trade price
        high_24_hours: Highest price of the last 24 hours
        low_24_hours: Lowest price of the last 24 hours
        vwap_24_hours: Volume weighted average price of the last 24 hours
        volume_24_hours: Traded base volume of the last 24 hours, in subunits
    """

    REQUIRED_FIELDS = ("bid", "ask", "last", "high", "low", "vwap", "volume")

    base_currency: str
    quote_currency: str
    bid: float
    ask: float
    last_price: float
    high_24_hours: float
    low_24_hours: float
    vwap_24_hours: float
    volume_24_hours: int

    @classmethod
    def from_api(
        cls,
        data: Dict[str, Any],
        base_currency: str,
        quote_currency: str,
    ) -> "Ticker":
        """
        Create Ticker from the ticker endpoint response.

        Raises:
            MissingFieldError: If required field is missing
            InvalidTypeError: If field has wrong type
        """
        cls._validate_required_fields(data)

        return cls(
            base_currency=base_currency,
            quote_currency=quote_currency,
            bid=cls._safe_float(data["bid"], "bid"),
            ask=cls._safe_float(data["ask"], "ask"),
            last_price=cls._safe_float(data["last"], "last"),
            high_24_hours=cls._safe_float(data["high"], "high"),
            low_24_hours=cls._safe_float(data["low"], "low"),
            vwap_24_hours=cls._safe_float(data["vwap"], "vwap"),
            volume_24_hours=cls._subunits(data["volume"], base_currency, "volume"),
        )

    @property
    def spread(self) -> float:
        """Calculate spread between ask and bid."""
        return self.ask - self.bid

    @property
    def mid_price(self) -> float:
        """Calculate mid price."""
        return (self.ask + self.bid) / 2
