from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BillingError(Exception):
    message: str

    def __str__(self) -> str:  # pragma: no cover
        return self.message


@dataclass(frozen=True)
class ValidationError(BillingError):
    field: str | None = None

    def __str__(self) -> str:
        if self.field is None:
            return self.message
        return f"{self.field}: {self.message}"
