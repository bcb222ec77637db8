from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from functools import partial
from typing import Callable, TypeVar

import structlog
from returns.result import Failure, Result, Success

from pos_billing.config import BillingSettings
from pos_billing.core.domain.model.cart import Cart
from pos_billing.core.domain.model.customer import CustomerInfo
from pos_billing.core.domain.model.errors import BillingError, ValidationError
from pos_billing.core.domain.model.ledger import PaymentRecord
from pos_billing.core.domain.model.line_item import Discount, LineItem
from pos_billing.core.domain.model.money import Money
from pos_billing.core.domain.service import tax_identifier
from pos_billing.core.domain.service.currency import amount_in_words, format_currency
from pos_billing.core.domain.service.fiscal import financial_year
from pos_billing.core.ports.inbound.checkout import (
    AddItemCommand,
    AddPaymentCommand,
    CheckoutSummary,
    CheckoutUseCase,
    LineView,
    PaymentView,
    SetCustomerCommand,
)

log = structlog.get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CheckoutDeps:
    settings: BillingSettings = field(default_factory=BillingSettings)
    today: Callable[[], date] = date.today


@dataclass(frozen=True)
class CheckoutService(CheckoutUseCase):
    """Applies raw UI commands to a cart.

    Bad input comes back as ``Failure(ValidationError)``; the cart is left
    untouched in that case.
    """

    deps: CheckoutDeps

    def add_item(
        self, cart: Cart, command: AddItemCommand
    ) -> Result[LineItem, BillingError]:
        built = _build_line_item(command)
        if isinstance(built, Failure):
            return _rejected("add_item", built)

        item = built.unwrap()
        cart.add_item(item)
        # after a merge the cart holds the accumulated line, not `item`
        return Success(cart.get_item(item.product_id) or item)

    def update_item(
        self, cart: Cart, product_id: str, command: AddItemCommand
    ) -> Result[LineItem | None, BillingError]:
        if cart.get_item(product_id) is None:
            return Success(None)

        built = _build_line_item(command)
        if isinstance(built, Failure):
            return _rejected("update_item", built)

        item = built.unwrap()
        renamed = item.product_id != product_id
        if renamed and cart.get_item(item.product_id) is not None:
            clash = ValidationError("already in the cart", field="product_id")
            return _rejected("update_item", Failure(clash))

        cart.update_item(product_id, item)
        return Success(item)

    def set_customer(
        self, cart: Cart, command: SetCustomerCommand
    ) -> Result[CustomerInfo, BillingError]:
        tax_id: str | None = None
        if _clean(command.tax_id) is not None:
            parsed = tax_identifier.parse(tax_identifier.normalize(command.tax_id))
            if isinstance(parsed, Failure):
                return _rejected("set_customer", parsed)
            tax_id = parsed.unwrap().value

        customer = CustomerInfo(
            name=_clean(command.name),
            phone=_clean(command.phone),
            email=_clean(command.email),
            tax_id=tax_id,
        )
        cart.set_customer(customer)
        return Success(customer)

    def add_payment(
        self, cart: Cart, command: AddPaymentCommand
    ) -> Result[PaymentRecord, BillingError]:
        mode = _strip(command.mode)
        if isinstance(mode, str):
            mode = mode.upper()
        try:
            record = PaymentRecord(
                mode=mode, amount=command.amount, reference=_clean(command.reference)
            )
        except ValidationError as err:
            return _rejected("add_payment", Failure(err))

        cart.add_payment(record)
        return Success(record)

    def summarize(self, cart: Cart) -> CheckoutSummary:
        settings = self.deps.settings
        money = partial(Money.of, currency=settings.currency_code)

        grand_total = cart.grand_total()
        balance_due = cart.balance_due()

        region: str | None = None
        if cart.customer.tax_id:
            region = tax_identifier.region_name(
                tax_identifier.extract_region_code(cart.customer.tax_id)
            )

        summary = CheckoutSummary(
            lines=tuple(_to_line_view(it, money) for it in cart.items),
            payments=tuple(
                PaymentView(
                    mode=p.mode.value, amount=money(p.amount), reference=p.reference
                )
                for p in cart.ledger.payments
            ),
            customer=cart.customer,
            customer_region=region,
            subtotal=money(cart.subtotal()),
            total_discount=money(cart.total_discount()),
            total_tax=money(cart.total_tax()),
            grand_total=money(grand_total),
            paid_amount=money(cart.paid_amount()),
            balance_due=money(balance_due),
            grand_total_display=format_currency(grand_total, settings.currency_symbol),
            balance_due_display=format_currency(balance_due, settings.currency_symbol),
            grand_total_in_words=amount_in_words(
                grand_total, settings.major_unit, settings.minor_unit
            ),
            financial_year=financial_year(self.deps.today()),
        )
        log.debug(
            "checkout_summarized",
            lines=len(summary.lines),
            grand_total=str(summary.grand_total.amount),
            balance_due=str(summary.balance_due.amount),
        )
        return summary


# ---- pure helpers ----------------------------------------------------------


def _build_line_item(cmd: AddItemCommand) -> Result[LineItem, BillingError]:
    product_id = _strip(cmd.product_id)
    try:
        item = LineItem(
            product_id=product_id,
            quantity=cmd.quantity,
            unit_price=cmd.unit_price,
            tax_rate=cmd.tax_rate,
            discount=_build_discount(cmd),
            name=cmd.name or "",
        )
    except ValidationError as err:
        return Failure(err)
    return Success(item)


def _build_discount(cmd: AddItemCommand) -> Discount | None:
    # a discount type without a value means "no discount"
    if not cmd.discount_type or cmd.discount_value is None:
        return None
    kind = cmd.discount_type.strip().upper()
    return Discount(kind, cmd.discount_value)


def _to_line_view(item: LineItem, money: Callable[..., Money]) -> LineView:
    return LineView(
        product_id=item.product_id,
        name=item.name,
        quantity=item.quantity,
        unit_price=money(item.unit_price),
        gross=money(item.gross()),
        discount=money(item.discount_amount()),
        tax=money(item.tax_amount()),
        total=money(item.total()),
    )


def _strip(value: object) -> object:
    return value.strip() if isinstance(value, str) else value


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _rejected(
    operation: str, failure: Result[T, BillingError]
) -> Result[T, BillingError]:
    err = failure.failure()
    log.warning(
        "checkout_rejected",
        operation=operation,
        field=getattr(err, "field", None),
        reason=getattr(err, "message", str(err)),
    )
    return failure
