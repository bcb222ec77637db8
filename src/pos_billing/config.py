from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from pos_billing.core.domain.model.errors import ValidationError

ENV_PREFIX = "POS_BILLING_"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("console", "json")


@dataclass(frozen=True)
class BillingSettings:
    currency_code: str = "INR"
    currency_symbol: str = "₹"
    major_unit: str = "Rupees"
    minor_unit: str = "Paise"
    log_level: str = "INFO"
    log_format: str = "console"

    @staticmethod
    def from_env(environ: Mapping[str, str] | None = None) -> "BillingSettings":
        """Read ``POS_BILLING_*`` variables over the defaults.

        e.g. ``POS_BILLING_LOG_LEVEL=DEBUG POS_BILLING_LOG_FORMAT=json``
        """
        env = os.environ if environ is None else environ
        defaults = BillingSettings()

        def get(name: str, default: str) -> str:
            return env.get(ENV_PREFIX + name, default).strip() or default

        log_level = get("LOG_LEVEL", defaults.log_level).upper()
        if log_level not in LOG_LEVELS:
            raise ValidationError(
                f"must be one of: {', '.join(LOG_LEVELS)}", field="log_level"
            )
        log_format = get("LOG_FORMAT", defaults.log_format).lower()
        if log_format not in LOG_FORMATS:
            raise ValidationError(
                f"must be one of: {', '.join(LOG_FORMATS)}", field="log_format"
            )

        return BillingSettings(
            currency_code=get("CURRENCY_CODE", defaults.currency_code),
            currency_symbol=get("CURRENCY_SYMBOL", defaults.currency_symbol),
            major_unit=get("MAJOR_UNIT", defaults.major_unit),
            minor_unit=get("MINOR_UNIT", defaults.minor_unit),
            log_level=log_level,
            log_format=log_format,
        )
