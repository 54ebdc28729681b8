"""
Money helpers.

Amounts are held as integer cents. Catalog prices may arrive as formatted
labels ("$1,250.00"); they are converted here, once, at ingestion.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union

from .exceptions import InvalidPrice

CENT = Decimal("0.01")

CURRENCY_SYMBOLS = {
    "USD": "$",
    "CAD": "$",
    "EUR": "€",
    "GBP": "£",
}

Amount = Union[int, float, Decimal, str]


def to_cents(value: Amount) -> int:
    """
    Convert a price to integer cents.

    Args:
        value: A number in major units (50, 49.99, Decimal("12.5")) or a
            display label ("$50.00", "1,250", "USD 12.00")

    Returns:
        Amount in cents, rounded half-up
    """
    if isinstance(value, bool):
        raise InvalidPrice(str(value))

    if isinstance(value, str):
        cleaned = value.strip()
        for symbol in set(CURRENCY_SYMBOLS.values()):
            cleaned = cleaned.replace(symbol, "")
        for code in CURRENCY_SYMBOLS:
            cleaned = cleaned.replace(code, "")
        cleaned = cleaned.replace(",", "").strip()
        try:
            amount = Decimal(cleaned)
        except InvalidOperation:
            raise InvalidPrice(value)
    elif isinstance(value, float):
        # str() keeps 49.99 from becoming 49.98999...
        amount = Decimal(str(value))
    else:
        amount = Decimal(value)

    if not amount.is_finite():
        raise InvalidPrice(str(value))

    return int((amount / CENT).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def cents_to_decimal(cents: int) -> Decimal:
    """Cents as a two-place Decimal in major units"""
    return (Decimal(cents) * CENT).quantize(CENT)


def format_cents(cents: int, currency: str = "USD") -> str:
    """Render cents for display, e.g. 5000 -> "$50.00" """
    symbol = CURRENCY_SYMBOLS.get(currency.upper(), "")
    sign = "-" if cents < 0 else ""
    amount = cents_to_decimal(abs(cents))
    return f"{sign}{symbol}{amount:,.2f}"


def percentage_of(cents: int, percent: Amount) -> int:
    """`percent`% of `cents`, rounded half-up to the cent"""
    share = Decimal(cents) * Decimal(str(percent)) / Decimal(100)
    return int(share.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
