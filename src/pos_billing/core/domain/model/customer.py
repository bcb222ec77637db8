from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CustomerInfo:
    name: str | None = None
    phone: str | None = None
    email: str | None = None
    tax_id: str | None = None  # GSTIN

    def is_empty(self) -> bool:
        return not any((self.name, self.phone, self.email, self.tax_id))
