#!/usr/bin/env python3
"""
Money Primitive Type

Immutable currency value wrapper backed by Decimal.
Prevents floating-point errors and keeps the currency next to the amount.
"""

from dataclasses import dataclass
from decimal import Decimal

from .currency import format_amount, normalize_currency, parse_decimal


@dataclass(frozen=True)
class Money:
    """
    Immutable money value in a single currency.

    Supports both positive and negative amounts. Lunch Money reports
    expenses as positive amounts unless `debit_as_negative` is requested.

    Examples:
        >>> m = Money.from_api("12.3400", "usd")
        >>> str(m)
        '$12.34'
        >>> m.amount
        Decimal('12.3400')
    """

    amount: Decimal
    currency: str = "usd"

    @classmethod
    def from_api(cls, amount: str | int | float | Decimal, currency: str | None = None) -> "Money":
        """
        Create Money from a Lunch Money amount field.

        Args:
            amount: Decimal string or number as returned by the API
            currency: Currency code (default: usd)

        Returns:
            Money object
        """
        return cls(amount=parse_decimal(amount), currency=normalize_currency(currency))

    def to_api(self) -> str:
        """Get value as the API's decimal string representation."""
        return str(self.amount)

    def __str__(self) -> str:
        """Format with currency symbol."""
        return format_amount(self.amount, self.currency)

    def __repr__(self) -> str:
        return f"Money(amount={self.amount!r}, currency={self.currency!r})"
