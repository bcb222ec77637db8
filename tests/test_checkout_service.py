"""Tests for CheckoutService."""

from __future__ import annotations

from decimal import Decimal

from returns.result import Failure, Success
from structlog.testing import capture_logs

from pos_billing.core.domain.model.customer import CustomerInfo
from pos_billing.core.domain.model.ledger import PaymentMode
from pos_billing.core.domain.model.line_item import DiscountKind
from pos_billing.core.domain.model.money import Money
from pos_billing.core.ports.inbound.checkout import (
    AddItemCommand,
    AddPaymentCommand,
    SetCustomerCommand,
)

TEA = AddItemCommand(
    product_id="TEA",
    quantity=2,
    unit_price="100",
    tax_rate="10",
    name="Tea",
    discount_type="PERCENTAGE",
    discount_value="10",
)
BISCUIT = AddItemCommand(product_id="BISCUIT", quantity=1, unit_price=50, tax_rate=5)


class TestAddItem:
    """Tests for add_item."""

    def test_success_adds_line(self, service, cart):
        result = service.add_item(cart, TEA)

        assert isinstance(result, Success)
        line = result.unwrap()
        assert line.product_id == "TEA"
        assert line.discount.kind is DiscountKind.PERCENTAGE
        assert cart.get_item("TEA") == line

    def test_returns_merged_line(self, service, cart):
        service.add_item(cart, TEA)
        result = service.add_item(cart, TEA)

        assert result.unwrap().quantity == 4

    def test_lowercase_discount_type(self, service, cart):
        cmd = AddItemCommand("A", 1, "10", discount_type="flat", discount_value="2")
        assert service.add_item(cart, cmd).unwrap().discount.kind is DiscountKind.FLAT

    def test_discount_type_without_value_means_none(self, service, cart):
        cmd = AddItemCommand("A", 1, "10", discount_type="PERCENTAGE")
        assert service.add_item(cart, cmd).unwrap().discount is None

    def test_product_id_is_trimmed(self, service, cart):
        service.add_item(cart, AddItemCommand(" A ", 1, "10"))
        assert cart.get_item("A") is not None

    def test_invalid_quantity_is_failure_and_cart_untouched(self, service, cart):
        with capture_logs() as logs:
            result = service.add_item(cart, AddItemCommand("A", 0, "10"))

        assert isinstance(result, Failure)
        assert result.failure().field == "quantity"
        assert cart.is_empty()
        assert logs == [
            {
                "event": "checkout_rejected",
                "log_level": "warning",
                "operation": "add_item",
                "field": "quantity",
                "reason": "must be > 0",
            }
        ]

    def test_unknown_discount_type(self, service, cart):
        cmd = AddItemCommand("A", 1, "10", discount_type="BOGO", discount_value="1")
        assert service.add_item(cart, cmd).failure().field == "discount.kind"


class TestUpdateItem:
    """Tests for update_item."""

    def test_absent_product_is_success_none(self, service, cart):
        result = service.update_item(cart, "NOPE", BISCUIT)

        assert isinstance(result, Success)
        assert result.unwrap() is None
        assert cart.is_empty()

    def test_replaces_line(self, service, cart):
        service.add_item(cart, TEA)
        result = service.update_item(
            cart, "TEA", AddItemCommand("TEA", 5, "20", "0", name="Tea")
        )

        assert result.unwrap().quantity == 5
        assert cart.subtotal() == Decimal("100")

    def test_invalid_replacement_keeps_line(self, service, cart):
        service.add_item(cart, TEA)
        result = service.update_item(cart, "TEA", AddItemCommand("TEA", 1, "-5"))

        assert result.failure().field == "unit_price"
        assert cart.get_item("TEA").unit_price == Decimal("100")

    def test_rename_onto_existing_line_is_rejected(self, service, cart):
        """Distinguishable from the absent-product case, which is Success(None)."""
        service.add_item(cart, TEA)
        service.add_item(cart, BISCUIT)

        with capture_logs() as logs:
            result = service.update_item(
                cart, "TEA", AddItemCommand("BISCUIT", 1, "1")
            )

        assert isinstance(result, Failure)
        assert result.failure().field == "product_id"
        assert cart.get_item("TEA").quantity == 2
        assert cart.get_item("BISCUIT").unit_price == Decimal("50")
        assert logs[0]["event"] == "checkout_rejected"
        assert logs[0]["operation"] == "update_item"

    def test_rename_to_free_id(self, service, cart):
        service.add_item(cart, TEA)

        result = service.update_item(cart, "TEA", AddItemCommand("CHAI", 2, "90"))

        assert result.unwrap().product_id == "CHAI"
        assert cart.get_item("TEA") is None


class TestSetCustomer:
    """Tests for set_customer."""

    def test_normalizes_tax_id(self, service, cart):
        result = service.set_customer(
            cart, SetCustomerCommand(name=" Asha ", phone="", tax_id=" 27aapfu0939f1zv ")
        )

        assert result.unwrap() == CustomerInfo(name="Asha", tax_id="27AAPFU0939F1ZV")
        assert cart.customer.tax_id == "27AAPFU0939F1ZV"

    def test_invalid_tax_id_rejected(self, service, cart):
        cart.set_customer(CustomerInfo(name="Before"))

        result = service.set_customer(cart, SetCustomerCommand(name="X", tax_id="12345"))

        assert result.failure().field == "tax_id"
        assert cart.customer.name == "Before"

    def test_blank_tax_id_is_none(self, service, cart):
        result = service.set_customer(cart, SetCustomerCommand(email="a@b.in", tax_id="  "))
        assert result.unwrap().tax_id is None


class TestAddPayment:
    """Tests for add_payment."""

    def test_mode_is_case_insensitive(self, service, cart):
        record = service.add_payment(cart, AddPaymentCommand("upi", "50", "ref-9")).unwrap()

        assert record.mode is PaymentMode.UPI
        assert record.reference == "ref-9"
        assert cart.paid_amount() == Decimal("50")

    def test_negative_amount_rejected(self, service, cart):
        result = service.add_payment(cart, AddPaymentCommand("CASH", "-1"))

        assert result.failure().field == "amount"
        assert cart.paid_amount() == 0

    def test_unknown_mode_rejected(self, service, cart):
        assert service.add_payment(cart, AddPaymentCommand("CHEQUE", "1")).failure().field == "mode"


class TestSummarize:
    """Tests for summarize."""

    def test_summary_of_worked_example(self, service, cart):
        service.add_item(cart, TEA)
        service.add_item(cart, BISCUIT)
        service.set_customer(cart, SetCustomerCommand(name="Asha", tax_id="22AAAAA0000A1Z5"))
        service.add_payment(cart, AddPaymentCommand("CASH", "100"))
        service.add_payment(cart, AddPaymentCommand("CARD", "100"))

        summary = service.summarize(cart)

        assert summary.subtotal == Money.of("250")
        assert summary.total_discount == Money.of("20")
        assert summary.total_tax == Money.of("20.5")
        assert summary.grand_total == Money(Decimal("250.50"), "INR")
        assert summary.paid_amount == Money.of("200")
        assert summary.balance_due == Money.of("50.5")
        assert summary.grand_total_display == "₹250.50"
        assert summary.balance_due_display == "₹50.50"
        assert summary.grand_total_in_words == "Two Hundred Fifty Rupees and Fifty Paise"
        assert summary.customer_region == "Chhattisgarh"
        assert summary.financial_year == "2024-25"
        assert [p.mode for p in summary.payments] == ["CASH", "CARD"]

        tea = summary.lines[0]
        assert (tea.product_id, tea.name, tea.quantity) == ("TEA", "Tea", 2)
        assert tea.gross == Money.of("200")
        assert tea.discount == Money.of("20")
        assert tea.tax == Money.of("18")
        assert tea.total == Money.of("198")

    def test_overpaid_summary(self, service, cart):
        service.add_item(cart, BISCUIT)
        service.add_payment(cart, AddPaymentCommand("CASH", "60"))

        summary = service.summarize(cart)

        assert summary.balance_due.is_negative()
        assert summary.balance_due_display == "-₹7.50"

    def test_empty_cart_summary(self, service, cart):
        summary = service.summarize(cart)

        assert summary.lines == ()
        assert summary.customer_region is None
        assert summary.grand_total_display == "₹0.00"
        assert summary.grand_total_in_words == "Zero Rupees"
