"""Mini README: Display helpers derived from the ledger.

Structure:
    * CategoryShare - one slice of the expense breakdown.
    * expense_breakdown - ledger grouping enriched with each category's share.
    * format_currency - two-decimal rendering used by the web page.

Rounding happens only here, at display time. The ledger keeps full precision.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from .ledger import Ledger


@dataclass(frozen=True, slots=True)
class CategoryShare:
    """Expense total for a category and its fraction of all expenses."""

    name: str
    value: float
    percent: float

    def as_dict(self) -> Dict[str, object]:
        return {"name": self.name, "value": self.value, "percent": self.percent}


def expense_breakdown(ledger: Ledger) -> List[CategoryShare]:
    """Return per-category expense shares in first-occurrence order."""

    totals = ledger.expense_by_category()
    grand_total = sum(totals.values())
    if grand_total <= 0:
        return []
    return [
        CategoryShare(name=name, value=value, percent=value / grand_total)
        for name, value in totals.items()
    ]


def format_currency(value: float, symbol: str = "$") -> str:
    """Render ``value`` with two decimals, placing any sign before the symbol."""

    rounded = round(value, 2)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{symbol}{abs(rounded):.2f}"
