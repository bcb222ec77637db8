from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol, Sequence

from returns.result import Result

from pos_billing.core.domain.model.cart import Cart
from pos_billing.core.domain.model.customer import CustomerInfo
from pos_billing.core.domain.model.errors import BillingError
from pos_billing.core.domain.model.ledger import PaymentRecord
from pos_billing.core.domain.model.line_item import LineItem
from pos_billing.core.domain.model.money import Money

RawNumber = Decimal | int | float | str


@dataclass(frozen=True)
class AddItemCommand:
    product_id: str
    quantity: int
    unit_price: RawNumber
    tax_rate: RawNumber = 0
    name: str = ""
    discount_type: str | None = None  # PERCENTAGE | FLAT
    discount_value: RawNumber | None = None


@dataclass(frozen=True)
class AddPaymentCommand:
    mode: str
    amount: RawNumber
    reference: str | None = None


@dataclass(frozen=True)
class SetCustomerCommand:
    name: str | None = None
    phone: str | None = None
    email: str | None = None
    tax_id: str | None = None


@dataclass(frozen=True)
class LineView:
    product_id: str
    name: str
    quantity: int
    unit_price: Money
    gross: Money
    discount: Money
    tax: Money
    total: Money


@dataclass(frozen=True)
class PaymentView:
    mode: str
    amount: Money
    reference: str | None


@dataclass(frozen=True)
class CheckoutSummary:
    lines: Sequence[LineView]
    payments: Sequence[PaymentView]
    customer: CustomerInfo
    customer_region: str | None
    subtotal: Money
    total_discount: Money
    total_tax: Money
    grand_total: Money
    paid_amount: Money
    balance_due: Money
    grand_total_display: str
    balance_due_display: str
    grand_total_in_words: str
    financial_year: str


class CheckoutUseCase(Protocol):
    def add_item(
        self, cart: Cart, command: AddItemCommand
    ) -> Result[LineItem, BillingError]: ...

    def update_item(
        self, cart: Cart, product_id: str, command: AddItemCommand
    ) -> Result[LineItem | None, BillingError]: ...

    def set_customer(
        self, cart: Cart, command: SetCustomerCommand
    ) -> Result[CustomerInfo, BillingError]: ...

    def add_payment(
        self, cart: Cart, command: AddPaymentCommand
    ) -> Result[PaymentRecord, BillingError]: ...

    def summarize(self, cart: Cart) -> CheckoutSummary: ...
