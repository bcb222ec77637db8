from __future__ import annotations

from datetime import date

import pytest
import structlog

from pos_billing.config import BillingSettings
from pos_billing.core.domain.model.cart import Cart
from pos_billing.core.domain.model.line_item import Discount, LineItem
from pos_billing.core.domain.service.checkout_service import (
    CheckoutDeps,
    CheckoutService,
)


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.fixture
def cart() -> Cart:
    return Cart()


@pytest.fixture
def tea() -> LineItem:
    """2 x 100 at 10% tax with a 10% discount."""
    return LineItem("TEA", 2, "100", "10", Discount.percentage("10"), name="Tea")


@pytest.fixture
def biscuit() -> LineItem:
    """1 x 50 at 5% tax, no discount."""
    return LineItem("BISCUIT", 1, "50", "5", name="Biscuit")


@pytest.fixture
def priced_cart(cart: Cart, tea: LineItem, biscuit: LineItem) -> Cart:
    """Cart whose grand total is 250.5."""
    cart.add_item(tea)
    cart.add_item(biscuit)
    return cart


@pytest.fixture
def service() -> CheckoutService:
    return CheckoutService(
        CheckoutDeps(settings=BillingSettings(), today=lambda: date(2024, 11, 5))
    )
