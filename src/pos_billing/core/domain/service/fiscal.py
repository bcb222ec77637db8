from __future__ import annotations

from datetime import date

FINANCIAL_YEAR_START_MONTH = 4  # April


def financial_year(on: date | None = None) -> str:
    """Indian financial year label, April to March: ``2024-25``."""
    on = on or date.today()
    start = on.year if on.month >= FINANCIAL_YEAR_START_MONTH else on.year - 1
    return f"{start}-{(start + 1) % 100:02d}"
