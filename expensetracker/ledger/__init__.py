"""Mini README: Ledger and aggregation helpers for the expense tracker.

The package keeps transactions in memory, enforces the category vocabulary
for each transaction kind, and derives totals and expense breakdowns on
demand for the web interface.
"""

from .categories import CATEGORIES, TransactionKind, ValidationError, categories_for, is_valid_category
from .ledger import Ledger, LedgerEvent, LedgerSummary, Transaction, seed_demo_transactions
from .reports import CategoryShare, expense_breakdown, format_currency

__all__ = [
    "CATEGORIES",
    "CategoryShare",
    "Ledger",
    "LedgerEvent",
    "LedgerSummary",
    "Transaction",
    "TransactionKind",
    "ValidationError",
    "categories_for",
    "expense_breakdown",
    "format_currency",
    "is_valid_category",
    "seed_demo_transactions",
]
