"""
Order book models for Bitstamp market data.

Based on the public ``/api/order_book/`` endpoint, whose entries are
``[price, amount]`` string pairs.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from bitstamp_client.exceptions import InvalidTypeError

from .base import BaseRecord


@dataclass(frozen=True)
class OrderBookEntry:
    """
    Single order book price level.

    Attributes:
        price: Price in quote currency
        base_amount: Amount offered at this price, in base subunits
    """

    price: float
    base_amount: int

    @classmethod
    def from_api(cls, entry: Any, base_currency: str) -> "OrderBookEntry":
        """Create from a raw ``[price, amount]`` pair."""
        if not isinstance(entry, (list, tuple)) or len(entry) < 2:
            raise InvalidTypeError("order_book entry", "[price, amount]", entry)
        return cls(
            price=BaseRecord._safe_float(entry[0], "price"),
            base_amount=BaseRecord._subunits(entry[1], base_currency, "amount"),
        )


@dataclass(frozen=True)
class OrderBook(BaseRecord):
    """
    Normalized order book.

    Bids and asks keep the order in which the exchange returned them
    (bids highest price first, asks lowest price first).

    Attributes:
        base_currency: Currency of base_amount
        quote_currency: Currency of price
        bids: Buy entries
        asks: Sell entries
    """

    base_currency: str
    quote_currency: str
    bids: List[OrderBookEntry] = field(default_factory=list)
    asks: List[OrderBookEntry] = field(default_factory=list)

    @classmethod
    def from_api(
        cls,
        data: Dict[str, Any],
        base_currency: str,
        quote_currency: str,
    ) -> "OrderBook":
        """
        Create OrderBook from the order book endpoint response.

        Missing ``bids`` or ``asks`` yield empty sides.
        """
        cls._validate_required_fields(data)

        return cls(
            base_currency=base_currency,
            quote_currency=quote_currency,
            bids=[
                OrderBookEntry.from_api(entry, base_currency)
                for entry in data.get("bids") or []
            ],
            asks=[
                OrderBookEntry.from_api(entry, base_currency)
                for entry in data.get("asks") or []
            ],
        )

    @property
    def best_bid(self) -> Optional[OrderBookEntry]:
        return self.bids[0] if self.bids else None

    @property
    def best_ask(self) -> Optional[OrderBookEntry]:
        return self.asks[0] if self.asks else None
