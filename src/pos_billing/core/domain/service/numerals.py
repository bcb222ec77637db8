"""Indian numeral formatting.

Digits are grouped as thousands first, then in pairs (lakh, crore)::

    >>> format_grouped(1234567, 2)
    '12,34,567.00'
    >>> to_words(123456)
    'One Lakh Twenty Three Thousand Four Hundred Fifty Six'

Grouping is done on the digit string, so the output does not depend on the
host locale.
"""

from __future__ import annotations

from typing import Any

from pos_billing.core.domain.model.money import round_half_up, to_decimal

_ONES = ("", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine")
_TENS = (
    "",
    "Ten",
    "Twenty",
    "Thirty",
    "Forty",
    "Fifty",
    "Sixty",
    "Seventy",
    "Eighty",
    "Ninety",
)
_TEENS = (
    "Ten",
    "Eleven",
    "Twelve",
    "Thirteen",
    "Fourteen",
    "Fifteen",
    "Sixteen",
    "Seventeen",
    "Eighteen",
    "Nineteen",
)

_CRORE = 10_000_000

# below one crore, most significant first
_SCALES = (
    (100_000, "Lakh"),
    (1_000, "Thousand"),
)

ZERO_WORD = "Zero"
CRORE_WORD = "Crore"
MINUS_WORD = "Minus"


def group_digits(digits: str) -> str:
    """Group a plain run of integer digits: last three, then pairs."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups: list[str] = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_grouped(value: Any, decimals: int = 2) -> str:
    """Format ``value`` with Indian grouping and exactly ``decimals`` places.

    Rounds half away from zero. Non-numeric input gives zero, e.g. ``"0.00"``.
    """
    decimals = max(decimals, 0)
    amount = to_decimal(value)
    if amount is None:
        return "0." + "0" * decimals if decimals else "0"

    rounded = round_half_up(amount, decimals)
    sign = "-" if rounded < 0 else ""
    whole, _, fraction = format(rounded.copy_abs(), "f").partition(".")
    grouped = group_digits(whole)
    if decimals:
        return f"{sign}{grouped}.{fraction}"
    return f"{sign}{grouped}"


def to_words(value: Any) -> str:
    """Spell out the integral part of ``value`` in Indian cardinal words.

    Fractions are truncated toward zero; non-numeric input reads as zero.
    """
    amount = to_decimal(value)
    number = int(amount) if amount is not None else 0
    return _spell(number)


def _spell(number: int) -> str:
    if number == 0:
        return ZERO_WORD
    if number < 0:
        return f"{MINUS_WORD} {_spell(-number)}"

    # crore chunks, least significant first; each boundary between two
    # chunks reads "Crore" even when the lower chunk is zero
    chunks: list[int] = []
    while number:
        number, chunk = divmod(number, _CRORE)
        chunks.append(chunk)

    words: list[str] = []
    for position, chunk in enumerate(reversed(chunks)):
        if position:
            words.append(CRORE_WORD)
        if chunk:
            words.append(_below_crore(chunk))
    return " ".join(words)


def _below_crore(number: int) -> str:
    words: list[str] = []
    for magnitude, name in _SCALES:
        if number >= magnitude:
            words.append(f"{_below_thousand(number // magnitude)} {name}")
            number %= magnitude
    if number:
        words.append(_below_thousand(number))
    return " ".join(words)


def _below_thousand(number: int) -> str:
    words: list[str] = []
    if number >= 100:
        words.append(f"{_ONES[number // 100]} Hundred")
        number %= 100

    if number >= 20:
        words.append(_TENS[number // 10])
        number %= 10
    elif number >= 10:
        words.append(_TEENS[number - 10])
        number = 0

    if number > 0:
        words.append(_ONES[number])

    return " ".join(words)
