"""
Currency subunit conversion.

Amounts are carried as integers in the smallest subunit of their currency
(cents for USD, satoshi for BTC) to avoid floating-point errors.
"""
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict

from bitstamp_client.exceptions import ValidationError


class Currency:
    """Converts between main-unit decimal amounts and integer subunits."""

    DECIMAL_PLACES: Dict[str, int] = {
        "BTC": 8,
        "ETH": 8,
        "LTC": 8,
        "USD": 2,
        "EUR": 2,
        "GBP": 2,
        "DKK": 2,
    }

    @classmethod
    def decimal_places(cls, currency: str) -> int:
        """Return the number of decimal places for a currency code."""
        try:
            return cls.DECIMAL_PLACES[str(currency).upper()]
        except KeyError:
            raise ValidationError(
                f"Unknown currency '{currency}'",
                field="currency",
                value=currency,
                expected=", ".join(sorted(cls.DECIMAL_PLACES)),
            ) from None

    @classmethod
    def to_smallest_subunit(cls, amount: Any, currency: str) -> int:
        """
        Convert a main-unit amount to integer subunits.

        Args:
            amount: Amount as number or numeric string (e.g. "0.5")
            currency: Currency code

        Returns:
            Amount in smallest subunits, rounded half up
        """
        places = cls.decimal_places(currency)
        try:
            value = Decimal(str(amount))
        except (InvalidOperation, ValueError) as e:
            raise ValidationError(
                f"Amount '{amount}' is not a number",
                field="amount",
                value=amount,
            ) from e
        if not value.is_finite():
            raise ValidationError(
                f"Amount '{amount}' is not a finite number",
                field="amount",
                value=amount,
            )
        subunits = value.scaleb(places).quantize(Decimal(1), rounding=ROUND_HALF_UP)
        return int(subunits)

    @classmethod
    def from_smallest_subunit(cls, amount: int, currency: str) -> Decimal:
        """
        Convert integer subunits to a main-unit amount.

        Example: (50000000, "BTC") -> Decimal("0.5")
        """
        places = cls.decimal_places(currency)
        return Decimal(int(amount)) / (Decimal(10) ** places)
