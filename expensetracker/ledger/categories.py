"""Mini README: Transaction kinds and their fixed category vocabularies.

Structure:
    * ValidationError - the single error raised for malformed ledger input.
    * TransactionKind - enum representing income versus expense entries.
    * CATEGORIES - mapping of kind to the ordered categories it allows.
    * categories_for / is_valid_category - lookup helpers used by forms.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple


class ValidationError(ValueError):
    """Raised when a transaction is missing required fields or is malformed."""


class TransactionKind(str, Enum):
    """Enumerate the supported transaction kinds."""

    INCOME = "income"
    EXPENSE = "expense"

    @classmethod
    def from_str(cls, value: object) -> "TransactionKind":
        """Coerce arbitrary casing into a valid transaction kind."""

        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as error:
            raise ValidationError(f"Unsupported transaction kind: {value}") from error


CATEGORIES: Dict[TransactionKind, Tuple[str, ...]] = {
    TransactionKind.INCOME: (
        "Client Payment",
        "Project Fee",
        "Consultation",
        "Other Income",
    ),
    TransactionKind.EXPENSE: (
        "Software/Tools",
        "Equipment",
        "Marketing",
        "Travel",
        "Office Supplies",
        "Professional Development",
        "Other Expense",
    ),
}


def categories_for(kind: object) -> Tuple[str, ...]:
    """Return the categories a transaction of ``kind`` may use."""

    return CATEGORIES[TransactionKind.from_str(kind)]


def is_valid_category(kind: object, category: str) -> bool:
    return category in categories_for(kind)
