"""Display formatting for analytics payloads."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

CURRENCY_PREFIX = "AED"

Number = int | float | Decimal

_CENTS = Decimal("0.01")


def format_currency(amount: Number | None) -> str:
    """Format an amount as "AED 1,234.50".

    Thousands separators, exactly two decimal places, halves rounded away
    from zero (0.125 -> 0.13). None counts as 0.
    """
    cents = Decimal(str(amount or 0)).quantize(_CENTS, rounding=ROUND_HALF_UP)
    return f"{CURRENCY_PREFIX} {cents:,.2f}"


def format_percentage(numerator: int, denominator: int) -> str:
    """Format numerator/denominator as a percentage, "0.00%" when denominator is 0."""
    if denominator == 0:
        return "0.00%"
    return f"{numerator / denominator * 100:.2f}%"


def format_ratio(numerator: int, denominator: int) -> str:
    """Format numerator/denominator with two decimals, "0.00" when denominator is 0."""
    if denominator == 0:
        return "0.00"
    return f"{numerator / denominator:.2f}"
