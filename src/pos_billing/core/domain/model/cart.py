from __future__ import annotations

from dataclasses import dataclass, field, replace
from decimal import Decimal

import structlog

from pos_billing.core.domain.model.customer import CustomerInfo
from pos_billing.core.domain.model.ledger import PaymentRecord, SettlementLedger
from pos_billing.core.domain.model.line_item import LineItem
from pos_billing.core.domain.model.money import ZERO

log = structlog.get_logger(__name__)


@dataclass
class Cart:
    """Aggregate root for one checkout session.

    Owns the line items, the customer and the settlement ledger. Totals are
    recomputed from the current items on every call. Mutations that target
    a product or payment that is not there are silent no-ops.

    A cart is not thread-safe; callers sharing one across threads must
    serialize access themselves.
    """

    _items: list[LineItem] = field(default_factory=list, init=False)
    customer: CustomerInfo = field(default_factory=CustomerInfo)
    ledger: SettlementLedger = field(default_factory=SettlementLedger)

    # ---- items -------------------------------------------------------------

    @property
    def items(self) -> tuple[LineItem, ...]:
        return tuple(self._items)

    def get_item(self, product_id: str) -> LineItem | None:
        idx = self._index_of(product_id)
        return None if idx is None else self._items[idx]

    def add_item(self, item: LineItem) -> None:
        """Append ``item``, or add its quantity to the line with the same id.

        Only the quantity accumulates on a merge; the existing line keeps its
        price, tax rate, discount and name.
        """
        idx = self._index_of(item.product_id)
        if idx is None:
            self._items.append(item)
            log.debug(
                "cart_item_added", product_id=item.product_id, quantity=item.quantity
            )
            return

        existing = self._items[idx]
        self._items[idx] = replace(existing, quantity=existing.quantity + item.quantity)
        log.debug(
            "cart_item_merged",
            product_id=item.product_id,
            quantity=self._items[idx].quantity,
        )

    def update_item(self, product_id: str, item: LineItem) -> None:
        idx = self._index_of(product_id)
        if idx is None:
            return
        renamed = item.product_id != product_id
        if renamed and self._index_of(item.product_id) is not None:
            # would leave two lines with the same product id
            log.warning(
                "cart_update_conflict",
                product_id=product_id,
                replacement_id=item.product_id,
            )
            return
        self._items[idx] = item
        log.debug("cart_item_updated", product_id=product_id)

    def update_quantity(self, product_id: str, quantity: int) -> None:
        idx = self._index_of(product_id)
        if idx is None:
            return
        if quantity <= 0:
            self.remove_item(product_id)
            return
        self._items[idx] = replace(self._items[idx], quantity=quantity)

    def remove_item(self, product_id: str) -> None:
        idx = self._index_of(product_id)
        if idx is None:
            return
        del self._items[idx]
        log.debug("cart_item_removed", product_id=product_id)

    def is_empty(self) -> bool:
        return not self._items

    def item_count(self) -> int:
        return sum(it.quantity for it in self._items)

    def _index_of(self, product_id: str) -> int | None:
        for i, it in enumerate(self._items):
            if it.product_id == product_id:
                return i
        return None

    # ---- customer ----------------------------------------------------------

    def set_customer(self, customer: CustomerInfo) -> None:
        self.customer = customer

    def clear_customer(self) -> None:
        self.customer = CustomerInfo()

    # ---- payments ----------------------------------------------------------

    def add_payment(self, record: PaymentRecord) -> None:
        self.ledger.add_payment(record)

    def remove_payment(self, index: int) -> None:
        self.ledger.remove_payment(index)

    def clear_payments(self) -> None:
        self.ledger.clear()

    # ---- lifecycle ---------------------------------------------------------

    def clear(self) -> None:
        """Reset items, customer and payments together."""
        self._items.clear()
        self.customer = CustomerInfo()
        self.ledger.clear()
        log.info("cart_cleared")

    # ---- totals ------------------------------------------------------------

    def subtotal(self) -> Decimal:
        return sum((it.gross() for it in self._items), ZERO)

    def total_discount(self) -> Decimal:
        return sum((it.discount_amount() for it in self._items), ZERO)

    def total_tax(self) -> Decimal:
        return sum((it.tax_amount() for it in self._items), ZERO)

    def grand_total(self) -> Decimal:
        return self.subtotal() - self.total_discount() + self.total_tax()

    def paid_amount(self) -> Decimal:
        return self.ledger.paid_amount()

    def balance_due(self) -> Decimal:
        return self.ledger.balance_due(self.grand_total())
