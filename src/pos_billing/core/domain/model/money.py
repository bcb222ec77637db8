from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def to_decimal(value: Any) -> Decimal | None:
    """Coerce a numeric or string-numeric value, or return None.

    bool is rejected even though it is an int subclass, and so are NaN and
    the infinities.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        dec = value
    elif isinstance(value, int):
        dec = Decimal(value)
    elif isinstance(value, float):
        dec = Decimal(str(value))
    elif isinstance(value, str):
        try:
            dec = Decimal(value.strip())
        except InvalidOperation:
            return None
    else:
        return None

    if not dec.is_finite():
        return None
    return dec


def round_half_up(value: Decimal, places: int) -> Decimal:
    places = max(places, 0)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + places + 2)
        return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class Money:
    amount: Decimal
    currency: str = "INR"

    @staticmethod
    def of(amount: Decimal | int | str, currency: str = "INR") -> "Money":
        dec = round_half_up(Decimal(str(amount)), 2)
        return Money(dec, currency)

    def is_negative(self) -> bool:
        return self.amount < 0
