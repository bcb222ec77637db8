from __future__ import annotations

from typing import Any

from pos_billing.core.domain.model.money import round_half_up, to_decimal
from pos_billing.core.domain.service.numerals import (
    MINUS_WORD,
    format_grouped,
    to_words,
)

RUPEE_SYMBOL = "₹"
MAJOR_UNIT = "Rupees"
MINOR_UNIT = "Paise"


def format_currency(amount: Any, symbol: str = RUPEE_SYMBOL) -> str:
    """``₹12,34,567.89``; the minus sign goes before the symbol.

    Non-numeric input renders as ``₹0.00``.
    """
    text = format_grouped(amount, 2)
    if text.startswith("-"):
        return f"-{symbol}{text[1:]}"
    return f"{symbol}{text}"


def amount_in_words(
    amount: Any, major_unit: str = MAJOR_UNIT, minor_unit: str = MINOR_UNIT
) -> str:
    """Spell an amount as major units plus, when non-zero, minor units.

    >>> amount_in_words("1234.56")
    'One Thousand Two Hundred Thirty Four Rupees and Fifty Six Paise'

    A zero whole part is still spelled out, so negative amounts below one
    rupee read like ``Minus Zero Rupees and Fifty Paise``.
    """
    value = to_decimal(amount)
    if value is None:
        return f"Zero {major_unit}"

    rounded = round_half_up(value, 2)
    if rounded == 0:
        return f"Zero {major_unit}"

    sign = f"{MINUS_WORD} " if rounded < 0 else ""
    rounded = rounded.copy_abs()
    whole = int(rounded)
    fraction = int((rounded - whole) * 100)

    words = f"{sign}{to_words(whole)} {major_unit}"
    if fraction:
        words += f" and {to_words(fraction)} {minor_unit}"
    return words
