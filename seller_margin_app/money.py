"""
Minor-unit arithmetic helpers.

All monetary values in this package are integer counts of minor units
(pence, cents).  Percentage maths produces floats, so every such value
is brought back to an integer with ``round_half_up`` before it is used
as money.
"""

from __future__ import annotations

import math

CURRENCY_SYMBOLS = {
    "GBP": "£",
    "USD": "$",
    "EUR": "€",
    "CAD": "C$",
    "AUD": "A$",
    "JPY": "¥",
}

# Currencies whose minor unit is not a hundredth of the major unit
CURRENCY_DECIMAL_PLACES = {
    "JPY": 0,
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going towards positive infinity.

    Python's built-in ``round`` uses banker's rounding (``round(0.5) == 0``),
    which would give different fee amounts from the published fee tables.
    ``-2.5`` rounds to ``-2``.
    """
    return int(math.floor(value + 0.5))


def format_money(amount: int, currency: str = "GBP") -> str:
    """Render a minor-unit amount for display, e.g. ``1234`` -> ``£12.34``.

    Yen has no minor unit, so ``1234`` JPY renders as ``¥1234``.  Codes
    without a symbol are written out: ``CHF 12.34``.
    """
    code = currency.upper()
    sign = "-" if amount < 0 else ""
    places = CURRENCY_DECIMAL_PLACES.get(code, 2)
    if places:
        major, minor = divmod(abs(int(amount)), 10 ** places)
        value = f"{major}.{minor:0{places}d}"
    else:
        value = str(abs(int(amount)))
    symbol = CURRENCY_SYMBOLS.get(code)
    if symbol is None:
        return f"{sign}{code} {value}"
    return f"{sign}{symbol}{value}"
