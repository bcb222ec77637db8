from __future__ import annotations

from decimal import Decimal
from typing import Any, Literal, Mapping, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel
from returns.result import Failure, Result, Success

from pos_billing.core.domain.model.errors import ValidationError
from pos_billing.core.ports.inbound.checkout import (
    AddItemCommand,
    AddPaymentCommand,
    SetCustomerCommand,
)

M = TypeVar("M", bound=BaseModel)

# ---- UI DTOs (adapter layer) -----------------------------------------------


class _UiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )


class LineItemIn(_UiModel):
    product_id: str = Field(min_length=1, examples=["SKU-1"])
    product_name: str = ""
    quantity: int = Field(gt=0, examples=[2])
    unit_price: Decimal = Field(ge=0, examples=["100.00"])
    tax_rate: Decimal = Field(default=Decimal("0"), ge=0, le=100, examples=["18"])
    discount_type: Literal["PERCENTAGE", "FLAT"] | None = None
    discount_value: Decimal | None = Field(default=None, ge=0)

    @field_validator("discount_type", mode="before")
    @classmethod
    def _upper_discount_type(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().upper() or None
        return v


class PaymentIn(_UiModel):
    mode: Literal["CASH", "CARD", "UPI", "WALLET", "CREDIT", "BANK_TRANSFER"]
    amount: Decimal = Field(ge=0, examples=["100.00"])
    reference: str | None = None

    @field_validator("mode", mode="before")
    @classmethod
    def _upper_mode(cls, v: Any) -> Any:
        return v.strip().upper() if isinstance(v, str) else v


class CustomerIn(_UiModel):
    name: str | None = None
    phone: str | None = None
    email: str | None = None
    tax_id: str | None = Field(default=None, examples=["22AAAAA0000A1Z5"])


# ---- Mapping helpers -------------------------------------------------------


def parse_line_item(
    payload: Mapping[str, Any],
) -> Result[AddItemCommand, ValidationError]:
    """
    payload: a cart row as the POS screen sends it.
    Example:
      {"productId": "SKU-1", "productName": "Tea", "quantity": 2,
       "unitPrice": "100", "taxRate": "10",
       "discountType": "PERCENTAGE", "discountValue": "10"}
    """
    return _validate(LineItemIn, payload).map(
        lambda m: AddItemCommand(
            product_id=m.product_id,
            quantity=m.quantity,
            unit_price=m.unit_price,
            tax_rate=m.tax_rate,
            name=m.product_name,
            discount_type=m.discount_type,
            discount_value=m.discount_value,
        )
    )


def parse_payment(
    payload: Mapping[str, Any],
) -> Result[AddPaymentCommand, ValidationError]:
    return _validate(PaymentIn, payload).map(
        lambda m: AddPaymentCommand(mode=m.mode, amount=m.amount, reference=m.reference)
    )


def parse_customer(
    payload: Mapping[str, Any],
) -> Result[SetCustomerCommand, ValidationError]:
    return _validate(CustomerIn, payload).map(
        lambda m: SetCustomerCommand(
            name=m.name, phone=m.phone, email=m.email, tax_id=m.tax_id
        )
    )


def _validate(model: type[M], payload: Mapping[str, Any]) -> Result[M, ValidationError]:
    try:
        return Success(model.model_validate(payload))
    except PydanticValidationError as exc:
        return Failure(_to_domain_error(exc))


def _to_domain_error(exc: PydanticValidationError) -> ValidationError:
    # report the first problem only, named by its UI key
    first = exc.errors()[0]
    loc = ".".join(str(part) for part in first["loc"])
    return ValidationError(message=first["msg"], field=loc or None)
