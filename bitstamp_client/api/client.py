"""
Bitstamp REST API client.

Exposes the exchange through a normalized, asyncio based interface.
Only the BTC/USD pair is supported.

Example:
    async with BitstampClient(BitstampConfig(api_key=..., api_secret=...,
                                             client_id=...)) as client:
        ticker, balance = await asyncio.gather(
            client.get_ticker("BTC", "USD"),
            client.get_balance(),
        )
"""
from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Iterator, List, Optional, Tuple

from bitstamp_client.config import BitstampConfig, get_config
from bitstamp_client.exceptions import (
    ClientParseError,
    UnsupportedCurrencyPairError,
    ValidationError,
)
from bitstamp_client.models import (
    EPOCH,
    Balance,
    NormalizedTrade,
    NormalizedTransaction,
    OrderBook,
    OrderSide,
    Ticker,
    TransactionType,
    transaction_datetime,
)
from bitstamp_client.transport import HttpTransport, interpret_response
from bitstamp_client.utils import Currency, Signer, get_logger

from .pagination import PAGE_SIZE, TransactionPaginator

logger = get_logger(__name__)

BASE_CURRENCY = "BTC"
QUOTE_CURRENCY = "USD"


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return False
    return Decimal(str(value)).is_finite()


@contextmanager
def _parsing(endpoint: str) -> Iterator[None]:
    """Report malformed exchange records as ClientParseError."""
    try:
        yield
    except ValidationError as e:
        raise ClientParseError(
            f"Could not understand {endpoint} response from exchange server.",
            cause=e,
            details=e.details,
        ) from e


class BitstampClient:
    """
    Bitstamp REST API client.

    Holds only immutable configuration and credentials, plus the signer's
    nonce counter, so independent calls may run concurrently.
    """

    def __init__(
        self,
        config: Optional[BitstampConfig] = None,
        transport: Optional[HttpTransport] = None,
        page_size: int = PAGE_SIZE,
    ):
        """
        Initialize the client.

        Args:
            config: Optional Bitstamp configuration (defaults to environment)
            transport: Optional transport, e.g. one sharing a session
            page_size: Transactions requested per history page
        """
        self._config = config or get_config().bitstamp
        self._transport = transport or HttpTransport(self._config)
        self._signer = Signer(self._config.credentials)
        self._paginator = TransactionPaginator(self._fetch_transactions_page, page_size)

    async def __aenter__(self) -> "BitstampClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Release the underlying HTTP session."""
        await self._transport.close()

    @property
    def config(self) -> BitstampConfig:
        return self._config

    # =========================================================================
    # Request helpers
    # =========================================================================

    @staticmethod
    def _validate_currency_pair(base_currency: Any, quote_currency: Any) -> Tuple[str, str]:
        """
        Normalize and check the currency pair.

        Raises:
            UnsupportedCurrencyPairError: For anything but BTC/USD
        """
        if not isinstance(base_currency, str) or not isinstance(quote_currency, str):
            raise UnsupportedCurrencyPairError(base_currency, quote_currency)
        base, quote = base_currency.upper(), quote_currency.upper()
        if base != BASE_CURRENCY or quote != QUOTE_CURRENCY:
            raise UnsupportedCurrencyPairError(base_currency, quote_currency)
        return base, quote

    async def _get(self, action: str) -> Any:
        """Unauthenticated GET."""
        response = await self._transport.get(action)
        return interpret_response(response)

    async def _post(self, action: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Authenticated POST.

        Raises:
            MissingCredentialsError: If credentials are incomplete
        """
        form = self._signer.sign(params)
        response = await self._transport.post(action, form)
        return interpret_response(response)

    async def _fetch_transactions_page(self, offset: int, limit: int) -> Any:
        return await self._post(
            "user_transactions",
            {"limit": limit, "offset": offset, "sort": "desc"},
        )

    # =========================================================================
    # Market data
    # =========================================================================

    async def get_ticker(self, base_currency: str, quote_currency: str) -> Ticker:
        """
        Return ticker data for the currency pair.

        Prices are floats; ``volume_24_hours`` is in base subunits.
        """
        base, quote = self._validate_currency_pair(base_currency, quote_currency)
        data = await self._get("ticker")
        with _parsing("ticker"):
            return Ticker.from_api(data, base, quote)

    async def get_order_book(self, base_currency: str, quote_currency: str) -> OrderBook:
        """
        Return the current order book.

        Asks are lowest price first and bids highest price first, exactly
        as returned by the exchange.
        """
        base, quote = self._validate_currency_pair(base_currency, quote_currency)
        data = await self._get("order_book")
        with _parsing("order book"):
            return OrderBook.from_api(data, base, quote)

    # =========================================================================
    # Account
    # =========================================================================

    async def get_balance(self) -> Balance:
        """Return available and total balances in subunits."""
        data = await self._post("balance")
        with _parsing("balance"):
            return Balance.from_api(data)

    async def get_trade(self, trade: NormalizedTrade) -> NormalizedTrade:
        """
        Fetch the current state of a previously placed trade.

        Args:
            trade: A trade whose ``raw`` holds the order ``id`` and its
                ``orderType`` ('buy' or 'sell'); the exchange does not echo
                the side back, so it must come from the caller

        Returns:
            The trade with fills summed up
        """
        raw = getattr(trade, "raw", None)
        if trade is None or not isinstance(raw, dict):
            raise ValidationError("Trade object is a required parameter.", field="trade")
        try:
            side = OrderSide.from_value(raw.get("orderType"))
        except ValueError:
            raise ValidationError(
                "Trade object must have a raw orderType parameter with value "
                "either 'sell' or 'buy'.",
                field="raw.orderType",
                value=raw.get("orderType"),
            ) from None
        order_id = raw.get("id")
        if order_id is None:
            raise ValidationError("Trade object must have a raw id parameter.", field="raw.id")

        data = await self._post("order_status", {"id": order_id})
        with _parsing("order status"):
            return NormalizedTrade.from_order_status(order_id, side, data)

    async def list_transactions(
        self,
        latest_transaction: Optional[NormalizedTransaction] = None,
    ) -> List[NormalizedTransaction]:
        """
        List deposits and withdrawals, newest first.

        Args:
            latest_transaction: Newest transaction already known; only
                transactions strictly newer than it are returned. If None,
                the whole history is returned.
        """
        boundary = (
            transaction_datetime(latest_transaction.raw)
            if latest_transaction is not None
            else EPOCH
        )
        transactions = await self.list_raw_transactions(boundary)
        wanted = (TransactionType.DEPOSIT, TransactionType.WITHDRAWAL)
        with _parsing("user transactions"):
            return [
                NormalizedTransaction.from_api(tx)
                for tx in transactions
                if TransactionType.parse(tx.get("type")) in wanted
            ]

    async def list_trades(
        self,
        latest_trade: Optional[NormalizedTrade] = None,
    ) -> List[NormalizedTrade]:
        """
        List market trades, newest first, one entry per fill.

        Args:
            latest_trade: Newest trade already known; the boundary is its
                newest fill (or its own datetime). If None, all trades are
                returned.
        """
        boundary = latest_trade.latest_activity() if latest_trade is not None else EPOCH
        transactions = await self.list_raw_transactions(boundary)
        with _parsing("user transactions"):
            return [
                NormalizedTrade.from_market_transaction(tx)
                for tx in transactions
                if TransactionType.parse(tx.get("type")) == TransactionType.MARKET_TRADE
            ]

    async def list_raw_transactions(
        self,
        since: Optional[datetime] = None,
    ) -> List[Dict[str, Any]]:
        """
        Return raw ``user_transactions`` records strictly newer than ``since``.

        Raises:
            ListingError: If any page request fails
        """
        return await self._paginator.collect(since)

    # =========================================================================
    # Trading
    # =========================================================================

    async def place_trade(
        self,
        base_amount: int,
        limit_price: float,
        base_currency: str,
        quote_currency: str,
    ) -> NormalizedTrade:
        """
        Place a limit order.

        Args:
            base_amount: Base amount in subunits; negative sells, positive buys
            limit_price: Minimum price to sell for or maximum price to buy
                for; strictly positive
            base_currency: Always 'BTC'
            quote_currency: Always 'USD'

        Returns:
            The open trade; ``raw["orderType"]`` records the side
        """
        base, _ = self._validate_currency_pair(base_currency, quote_currency)
        if not _is_number(base_amount) or base_amount == 0:
            raise ValidationError(
                "The base amount must be a non-zero number.",
                field="base_amount",
                value=base_amount,
            )
        if base_amount != int(base_amount):
            raise ValidationError(
                "The base amount must be a whole number of subunits.",
                field="base_amount",
                value=base_amount,
            )
        if not _is_number(limit_price) or limit_price <= 0:
            raise ValidationError(
                "The limit price must be a positive number.",
                field="limit_price",
                value=limit_price,
            )

        side = OrderSide.from_amount(base_amount)
        amount = Currency.from_smallest_subunit(abs(int(base_amount)), base)
        params = {
            "amount": f"{amount:f}",
            "price": f"{Decimal(str(limit_price)):f}",
        }
        logger.info("Placing %s order: %s %s at %s", side.value, params["amount"], base, params["price"])

        data = await self._post(side.value, params)
        with _parsing(side.value):
            return NormalizedTrade.from_placed_order(data, side, int(base_amount), limit_price)
