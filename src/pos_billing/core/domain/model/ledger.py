from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

import structlog

from pos_billing.core.domain.model.errors import ValidationError
from pos_billing.core.domain.model.money import ZERO, to_decimal

log = structlog.get_logger(__name__)


class PaymentMode(str, Enum):
    CASH = "CASH"
    CARD = "CARD"
    UPI = "UPI"
    WALLET = "WALLET"
    CREDIT = "CREDIT"
    BANK_TRANSFER = "BANK_TRANSFER"


@dataclass(frozen=True)
class PaymentRecord:
    mode: PaymentMode
    amount: Decimal
    reference: str | None = None

    def __post_init__(self) -> None:
        try:
            mode = PaymentMode(self.mode)
        except ValueError:
            raise ValidationError("unknown payment mode", field="mode") from None
        amount = to_decimal(self.amount)
        if amount is None:
            raise ValidationError("must be a number", field="amount")
        if amount < ZERO:
            raise ValidationError("must be >= 0", field="amount")
        object.__setattr__(self, "mode", mode)
        object.__setattr__(self, "amount", amount)


@dataclass
class SettlementLedger:
    """Payments recorded against a cart's grand total.

    Overpayment is representable: nothing here checks an amount against the
    remaining balance, and ``balance_due`` is not clamped at zero.
    """

    _payments: list[PaymentRecord] = field(default_factory=list, init=False)

    @property
    def payments(self) -> tuple[PaymentRecord, ...]:
        return tuple(self._payments)

    def __len__(self) -> int:
        return len(self._payments)

    def add_payment(self, record: PaymentRecord) -> None:
        self._payments.append(record)
        log.debug(
            "payment_added",
            mode=record.mode.value,
            amount=str(record.amount),
            position=len(self._payments) - 1,
        )

    def remove_payment(self, index: int) -> None:
        # out-of-range (including negative) positions are ignored
        if not 0 <= index < len(self._payments):
            return
        removed = self._payments.pop(index)
        log.debug("payment_removed", mode=removed.mode.value, position=index)

    def clear(self) -> None:
        self._payments.clear()

    def paid_amount(self) -> Decimal:
        return sum((p.amount for p in self._payments), ZERO)

    def paid_by_mode(self) -> dict[PaymentMode, Decimal]:
        totals: dict[PaymentMode, Decimal] = {}
        for p in self._payments:
            totals[p.mode] = totals.get(p.mode, ZERO) + p.amount
        return totals

    def balance_due(self, total: Decimal) -> Decimal:
        return total - self.paid_amount()
