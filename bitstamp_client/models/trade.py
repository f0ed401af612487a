"""
Trade models for Bitstamp orders.

Three raw shapes are normalized here:

- ``/api/order_status/`` responses, whose fills are summed into one trade
- ``/api/user_transactions/`` market-trade records (type 2), one trade each
- ``/api/buy/`` and ``/api/sell/`` responses for freshly placed orders
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from bitstamp_client.exceptions import InvalidTypeError, MissingFieldError

from .base import BaseRecord, parse_exchange_datetime, to_iso8601
from .enums import OrderSide, TradeState, TradeType
from .transaction import transaction_datetime

BASE_CURRENCY = "BTC"
QUOTE_CURRENCY = "USD"


@dataclass(frozen=True)
class NormalizedTrade(BaseRecord):
    """
    Limit order, normalized.

    Amounts are signed integer subunits from the account's point of view:
    a sell has a negative ``base_amount`` and a positive ``quote_amount``,
    a buy the other way around. Market-trade listings are unsigned.

    Attributes:
        external_id: Bitstamp order ID
        state: 'open' or 'closed'
        base_amount: Base currency amount in subunits
        quote_amount: Quote currency amount in subunits (None if unknown)
        base_currency: Currency of base_amount
        quote_currency: Currency of quote_amount
        fee_amount: Commission paid in subunits of fee_currency
        fee_currency: Currency of fee_amount
        type: Always 'limit'
        limit_price: Limit price the order was placed with
        trade_time: UTC ISO-8601 execution time (market-trade listings)
        raw: The exchange record; ``raw["orderType"]`` holds the side
    """

    external_id: str
    state: TradeState
    base_amount: int
    quote_amount: Optional[int] = None
    base_currency: str = BASE_CURRENCY
    quote_currency: str = QUOTE_CURRENCY
    fee_amount: Optional[int] = None
    fee_currency: Optional[str] = QUOTE_CURRENCY
    type: TradeType = TradeType.LIMIT
    limit_price: Optional[float] = None
    trade_time: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_order_status(
        cls,
        order_id: Any,
        side: OrderSide,
        data: Dict[str, Any],
    ) -> "NormalizedTrade":
        """
        Create NormalizedTrade from an order status response.

        The exchange does not echo the order ID or side, so both come from
        the caller. Fill amounts are summed; the base sum is negated for a
        sell and the quote sum for a buy.

        Raises:
            MissingFieldError: If 'status' is missing
            InvalidTypeError: If a fill amount is not numeric
        """
        cls._validate_required_fields(data)
        if "status" not in data:
            raise MissingFieldError("status", data)

        fills = data.get("transactions") or []
        if not isinstance(fills, list):
            raise InvalidTypeError("transactions", "list", fills)
        base_amount = 0
        quote_amount = 0
        fee_amount = 0
        for fill in fills:
            if not isinstance(fill, dict):
                raise InvalidTypeError("transactions", "list of objects", fill)
            fill_base = cls._subunits(fill.get("btc"), BASE_CURRENCY, "btc")
            fill_quote = cls._subunits(fill.get("usd"), QUOTE_CURRENCY, "usd")
            base_amount += -fill_base if side.is_sell else fill_base
            quote_amount += -fill_quote if side.is_buy else fill_quote
            fee_amount += cls._subunits(fill.get("fee"), QUOTE_CURRENCY, "fee")

        raw = dict(data)
        raw.setdefault("id", order_id)

        return cls(
            external_id=str(order_id),
            state=TradeState.from_order_status(data["status"]),
            base_amount=base_amount,
            quote_amount=quote_amount,
            fee_amount=fee_amount,
            raw=raw,
        )

    @classmethod
    def from_market_transaction(cls, data: Dict[str, Any]) -> "NormalizedTrade":
        """
        Create NormalizedTrade from a market-trade ``user_transactions`` record.

        No aggregation happens; amounts are reported unsigned, so the
        trade direction is not encoded.
        """
        cls._validate_required_fields(data)
        if data.get("order_id") is None:
            raise MissingFieldError("order_id", data)

        return cls(
            external_id=str(data["order_id"]),
            state=TradeState.CLOSED,
            base_amount=abs(cls._subunits(data.get("btc"), BASE_CURRENCY, "btc")),
            quote_amount=abs(cls._subunits(data.get("usd"), QUOTE_CURRENCY, "usd")),
            fee_amount=abs(cls._subunits(data.get("fee"), QUOTE_CURRENCY, "fee")),
            trade_time=to_iso8601(transaction_datetime(data)),
            raw=data,
        )

    @classmethod
    def from_placed_order(
        cls,
        data: Dict[str, Any],
        side: OrderSide,
        base_amount: int,
        limit_price: float,
    ) -> "NormalizedTrade":
        """
        Create NormalizedTrade from a buy/sell response.

        The side is recorded as ``raw["orderType"]`` so the trade can later
        be looked up with ``get_trade``.
        """
        cls._validate_required_fields(data)
        if data.get("id") is None:
            raise MissingFieldError("id", data)

        raw = dict(data)
        raw["orderType"] = side.value

        return cls(
            external_id=str(data["id"]),
            state=TradeState.OPEN,
            base_amount=int(base_amount),
            fee_amount=None,
            fee_currency=None,
            limit_price=limit_price,
            raw=raw,
        )

    @property
    def side(self) -> Optional[OrderSide]:
        """Order side recorded in raw, if any."""
        try:
            return OrderSide.from_value(self.raw.get("orderType"))
        except ValueError:
            return None

    @property
    def is_closed(self) -> bool:
        return self.state == TradeState.CLOSED

    def latest_activity(self) -> datetime:
        """
        Timestamp of the newest fill, or of the order itself.

        Used as the lower bound when listing trades newer than this one.

        Raises:
            MissingFieldError: If raw holds neither fills nor a datetime
        """
        fills = self.raw.get("transactions")
        if fills:
            return max(transaction_datetime(fill) for fill in fills)
        if "datetime" in self.raw:
            return parse_exchange_datetime(self.raw["datetime"])
        raise MissingFieldError("datetime", self.raw)
