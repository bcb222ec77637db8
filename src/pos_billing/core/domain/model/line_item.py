from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from pos_billing.core.domain.model.errors import ValidationError
from pos_billing.core.domain.model.money import HUNDRED, ZERO, to_decimal


class DiscountKind(str, Enum):
    PERCENTAGE = "PERCENTAGE"
    FLAT = "FLAT"


def _require_decimal(value: Any, field: str) -> Decimal:
    dec = to_decimal(value)
    if dec is None:
        raise ValidationError("must be a number", field=field)
    return dec


def _require_rate(value: Decimal, field: str) -> None:
    if value < ZERO or value > HUNDRED:
        raise ValidationError("must be between 0 and 100", field=field)


@dataclass(frozen=True)
class Discount:
    kind: DiscountKind
    value: Decimal

    def __post_init__(self) -> None:
        try:
            kind = DiscountKind(self.kind)
        except ValueError:
            raise ValidationError(
                "must be PERCENTAGE or FLAT", field="discount.kind"
            ) from None
        value = _require_decimal(self.value, "discount.value")
        if value < ZERO:
            raise ValidationError("must be >= 0", field="discount.value")
        if kind is DiscountKind.PERCENTAGE:
            _require_rate(value, "discount.value")
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "value", value)

    @staticmethod
    def percentage(value: Decimal | int | str) -> "Discount":
        return Discount(DiscountKind.PERCENTAGE, value)

    @staticmethod
    def flat(value: Decimal | int | str) -> "Discount":
        """A per-unit amount: the line discount is ``value * quantity``."""
        return Discount(DiscountKind.FLAT, value)

    def amount_for(self, gross: Decimal, quantity: int) -> Decimal:
        if self.kind is DiscountKind.PERCENTAGE:
            return gross * self.value / HUNDRED
        return self.value * quantity


@dataclass(frozen=True)
class LineItem:
    """One product entry of a cart.

    Numeric fields accept anything ``to_decimal`` understands and are stored
    as ``Decimal``. Construction raises ``ValidationError`` naming the field.
    """

    product_id: str
    quantity: int
    unit_price: Decimal
    tax_rate: Decimal = ZERO
    discount: Discount | None = None
    name: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.product_id, str) or not self.product_id.strip():
            raise ValidationError("is required", field="product_id")
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValidationError("must be an integer", field="quantity")
        if self.quantity <= 0:
            raise ValidationError("must be > 0", field="quantity")

        unit_price = _require_decimal(self.unit_price, "unit_price")
        if unit_price < ZERO:
            raise ValidationError("must be >= 0", field="unit_price")
        tax_rate = _require_decimal(self.tax_rate, "tax_rate")
        _require_rate(tax_rate, "tax_rate")
        if self.discount is not None and not isinstance(self.discount, Discount):
            raise ValidationError("must be a Discount", field="discount")

        object.__setattr__(self, "unit_price", unit_price)
        object.__setattr__(self, "tax_rate", tax_rate)

    def gross(self) -> Decimal:
        return self.unit_price * self.quantity

    def discount_amount(self) -> Decimal:
        if self.discount is None:
            return ZERO
        return self.discount.amount_for(self.gross(), self.quantity)

    def taxable_amount(self) -> Decimal:
        return self.gross() - self.discount_amount()

    def tax_amount(self) -> Decimal:
        return self.taxable_amount() * self.tax_rate / HUNDRED

    def total(self) -> Decimal:
        return self.taxable_amount() + self.tax_amount()
