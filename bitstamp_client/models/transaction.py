"""
Transaction models for Bitstamp account history.

Raw records come from the ``/api/user_transactions/`` endpoint:
{"id": 1, "datetime": "2016-02-01 10:00:00", "type": 0,
 "btc": "0.50000000", "usd": "0.00", "fee": "0.00", "order_id": null}
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict

from bitstamp_client.exceptions import MissingFieldError

from .base import BaseRecord, parse_exchange_datetime, to_iso8601
from .enums import TransactionKind, TransactionState, TransactionType


def transaction_datetime(raw: Dict[str, Any]) -> datetime:
    """Timestamp of a raw transaction record as an aware UTC datetime."""
    if not isinstance(raw, dict) or "datetime" not in raw:
        raise MissingFieldError("datetime", raw if isinstance(raw, dict) else None)
    return parse_exchange_datetime(raw["datetime"])


@dataclass(frozen=True)
class NormalizedTransaction(BaseRecord):
    """
    Deposit or withdrawal.

    Exactly one currency is reported: if the raw BTC amount is zero the
    transaction is USD-denominated, otherwise it is BTC-denominated.
    A transaction touching both currencies reports only its BTC side.

    Attributes:
        external_id: Bitstamp transaction ID
        timestamp: UTC ISO-8601 timestamp
        state: Always 'completed'
        amount: Signed amount in subunits of ``currency``
        currency: 'BTC' or 'USD'
        type: 'deposit' or 'withdrawal'
        raw: The exchange record as received
    """

    REQUIRED_FIELDS = ("id", "datetime", "type")

    external_id: str
    timestamp: str
    amount: int
    currency: str
    type: TransactionKind
    state: TransactionState = TransactionState.COMPLETED
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "NormalizedTransaction":
        """
        Create NormalizedTransaction from a raw deposit/withdrawal record.

        Raises:
            MissingFieldError: If required field is missing
            InvalidTypeError: If field has wrong type
        """
        cls._validate_required_fields(data)
        tx_type = TransactionType.parse(data["type"])

        btc_amount = cls._safe_float(data.get("btc"), "btc")
        if btc_amount == 0:
            currency = "USD"
            amount = cls._subunits(data.get("usd"), "USD", "usd")
        else:
            currency = "BTC"
            amount = cls._subunits(data.get("btc"), "BTC", "btc")

        return cls(
            external_id=str(data["id"]),
            timestamp=to_iso8601(transaction_datetime(data)),
            amount=amount,
            currency=currency,
            type=TransactionKind.from_type(tx_type),
            raw=data,
        )

    @property
    def is_deposit(self) -> bool:
        return self.type == TransactionKind.DEPOSIT

    @property
    def is_withdrawal(self) -> bool:
        return self.type == TransactionKind.WITHDRAWAL
