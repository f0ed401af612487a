"""
Account balance model.
"""
from dataclasses import dataclass, field
from typing import Any, Dict

from .base import BaseRecord


@dataclass(frozen=True)
class Balance(BaseRecord):
    """
    Available and total account balances in integer subunits.

    Example:
        Balance(available={"USD": 12345, "BTC": 50000000},
                total={"USD": 22345, "BTC": 150000000})
    """

    REQUIRED_FIELDS = ("usd_available", "btc_available", "usd_balance", "btc_balance")

    available: Dict[str, int] = field(default_factory=dict)
    total: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Balance":
        """Create Balance from the balance endpoint response."""
        cls._validate_required_fields(data)

        return cls(
            available={
                "USD": cls._subunits(data["usd_available"], "USD", "usd_available"),
                "BTC": cls._subunits(data["btc_available"], "BTC", "btc_available"),
            },
            total={
                "USD": cls._subunits(data["usd_balance"], "USD", "usd_balance"),
                "BTC": cls._subunits(data["btc_balance"], "BTC", "btc_balance"),
            },
        )

    @property
    def reserved(self) -> Dict[str, int]:
        """Amounts locked in open orders."""
        return {
            currency: amount - self.available.get(currency, 0)
            for currency, amount in self.total.items()
        }
