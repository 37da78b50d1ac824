#!/usr/bin/env python3
"""
Currency Parsing and Formatting Utilities

Lunch Money reports amounts as decimal strings ("12.3400") in the
transaction currency and as JSON numbers for the base-currency amount
(`to_base`). All parsing goes through Decimal so that values never pass
through binary floating point arithmetic.

Key Principles:
- Never use floating-point arithmetic for currency values
- Convert JSON numbers via their string representation
- Currency codes are lower-case ISO 4217 codes, as the API returns them
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

# Symbols for the currencies most commonly seen in Lunch Money budgets.
CURRENCY_SYMBOLS = {
    "usd": "$",
    "cad": "CA$",
    "aud": "A$",
    "eur": "€",
    "gbp": "£",
    "jpy": "¥",
    "chf": "CHF ",
}

# Currencies without minor units.
ZERO_DECIMAL_CURRENCIES = {"jpy", "krw", "vnd", "clp", "isk"}


def parse_decimal(value: str | int | float | Decimal | None) -> Decimal:
    """
    Convert an API amount to Decimal.

    Args:
        value: Decimal string, JSON number, or Decimal

    Returns:
        Decimal value

    Raises:
        ValueError: If value is None or not a number

    Example:
        parse_decimal("12.3400") -> Decimal("12.3400")
        parse_decimal(12.34) -> Decimal("12.34")
    """
    if value is None:
        raise ValueError("Amount is missing")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Invalid amount: {value!r}")
    try:
        # str() first so floats keep their shortest repr instead of binary noise
        result = Decimal(str(value).replace(",", "").strip())
    except InvalidOperation as e:
        raise ValueError(f"Invalid amount: {value!r}") from e
    if not result.is_finite():
        raise ValueError(f"Invalid amount: {value!r}")
    return result


def normalize_currency(code: str | None, default: str = "usd") -> str:
    """Lower-case a currency code, falling back to default when empty."""
    if not code:
        return default
    return code.strip().lower()


def quantize_for_display(amount: Decimal, currency: str) -> Decimal:
    """Round amount to the currency's display precision."""
    exponent = Decimal("1") if normalize_currency(currency) in ZERO_DECIMAL_CURRENCIES else Decimal("0.01")
    return amount.quantize(exponent, rounding=ROUND_HALF_UP)


def format_amount(amount: Decimal, currency: str = "usd") -> str:
    """
    Format an amount with its currency symbol.

    Args:
        amount: Decimal amount
        currency: ISO 4217 currency code

    Returns:
        Formatted string, e.g. "$1,234.50", "-€12.00", "12.00 SEK"
    """
    code = normalize_currency(currency)
    rounded = quantize_for_display(amount, code)
    sign = "-" if rounded < 0 else ""
    digits = f"{abs(rounded):,}"

    symbol = CURRENCY_SYMBOLS.get(code)
    if symbol is None:
        return f"{sign}{digits} {code.upper()}"
    return f"{sign}{symbol}{digits}"
