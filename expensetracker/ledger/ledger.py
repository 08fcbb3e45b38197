"""Mini README: In-memory ledger of income and expense transactions.

Structure:
    * Transaction - frozen dataclass storing a single entry.
    * LedgerEvent - enum describing the change passed to observers.
    * LedgerSummary - income, expense and net totals at a point in time.
    * Ledger - ordered, newest-first collection with aggregation helpers.
    * seed_demo_transactions - deterministic example data for demos.

The ledger validates every entry on the way in and never mutates a stored
transaction. Totals and category groupings are recomputed from the full
sequence on every call, so there is no cached state to fall out of sync.
Observers registered with ``subscribe`` are called synchronously after each
append or effective removal.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from numbers import Number
from typing import Callable, Dict, Iterator, List, Optional

from ..logging_utils import get_logger
from .categories import TransactionKind, ValidationError, is_valid_category

LOGGER = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Transaction:
    """Represent an immutable ledger entry."""

    transaction_id: str
    kind: TransactionKind
    description: str
    category: str
    amount: float
    occurred_on: date

    def as_dict(self) -> Dict[str, object]:
        """Export the transaction with serialisable values."""

        return {
            "transaction_id": self.transaction_id,
            "kind": self.kind.value,
            "description": self.description,
            "category": self.category,
            "amount": self.amount,
            "occurred_on": self.occurred_on.isoformat(),
        }


class LedgerEvent(str, Enum):
    """Change notifications delivered to ledger observers."""

    ADDED = "added"
    REMOVED = "removed"


@dataclass(frozen=True, slots=True)
class LedgerSummary:
    """Totals derived from the ledger contents."""

    total_income: float
    total_expenses: float
    net_balance: float

    def as_dict(self) -> Dict[str, float]:
        return {
            "total_income": self.total_income,
            "total_expenses": self.total_expenses,
            "net_balance": self.net_balance,
        }


Observer = Callable[[LedgerEvent, Transaction], None]


def parse_amount(value: object) -> float:
    """Parse a positive, finite amount from a number or numeric text."""

    if isinstance(value, bool):
        raise ValidationError("Amount must be a number.")
    if isinstance(value, Number):
        try:
            amount = float(value)
        except (OverflowError, TypeError, ValueError) as error:
            raise ValidationError(f"Amount is not a usable number: {value!r}") from error
    elif isinstance(value, str):
        try:
            amount = float(value.strip())
        except ValueError as error:
            raise ValidationError(f"Amount is not a number: {value!r}") from error
    else:
        raise ValidationError("Amount must be a number.")
    if not math.isfinite(amount) or amount <= 0:
        raise ValidationError("Amount must be a positive number.")
    return amount


def parse_date(value: object) -> date:
    """Parse ISO formatted strings or date objects, defaulting to today."""

    if value is None or value == "":
        return date.today()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError as error:
            raise ValidationError(f"Date is not in ISO format: {value!r}") from error
    raise ValidationError("Dates must be provided as ISO strings or date/datetime instances.")


class Ledger:
    """Manage an ordered, newest-first collection of transactions."""

    def __init__(self) -> None:
        self._transactions: List[Transaction] = []
        self._observers: List[Observer] = []
        self._sequence = 0
        LOGGER.debug("Ledger initialised")

    def __len__(self) -> int:
        return len(self._transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(list(self._transactions))

    def _next_id(self) -> str:
        """Generate a monotonically increasing transaction identifier."""

        self._sequence += 1
        return f"txn_{self._sequence:04d}"

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register ``observer`` and return a callable that unregisters it."""

        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _notify(self, event: LedgerEvent, transaction: Transaction) -> None:
        for observer in list(self._observers):
            observer(event, transaction)

    def append(
        self,
        description: str,
        amount: object,
        kind: object,
        category: str,
        occurred_on: object = None,
    ) -> Transaction:
        """Validate the fields, prepend a new transaction and return it."""

        try:
            cleaned_description = description.strip() if isinstance(description, str) else ""
            if not cleaned_description:
                raise ValidationError("Description is required.")
            parsed_amount = parse_amount(amount)
            parsed_kind = TransactionKind.from_str(kind)
            cleaned_category = category.strip() if isinstance(category, str) else ""
            if not cleaned_category:
                raise ValidationError("Category is required.")
            if not is_valid_category(parsed_kind, cleaned_category):
                raise ValidationError(
                    f"Category '{cleaned_category}' is not valid for {parsed_kind.value} transactions."
                )
            parsed_date = parse_date(occurred_on)
        except ValidationError as error:
            LOGGER.warning("Rejected transaction: %s", error)
            raise

        transaction = Transaction(
            transaction_id=self._next_id(),
            kind=parsed_kind,
            description=cleaned_description,
            category=cleaned_category,
            amount=parsed_amount,
            occurred_on=parsed_date,
        )
        self._transactions.insert(0, transaction)
        LOGGER.info(
            "Added %s transaction %s (%s, %.2f)",
            parsed_kind.value,
            transaction.transaction_id,
            cleaned_category,
            parsed_amount,
        )
        self._notify(LedgerEvent.ADDED, transaction)
        return transaction

    def remove(self, transaction_id: str) -> Optional[Transaction]:
        """Remove the matching transaction; unknown identifiers are ignored."""

        for index, transaction in enumerate(self._transactions):
            if transaction.transaction_id == transaction_id:
                del self._transactions[index]
                LOGGER.info("Removed transaction %s", transaction_id)
                self._notify(LedgerEvent.REMOVED, transaction)
                return transaction
        LOGGER.debug("Remove ignored, transaction %s not present", transaction_id)
        return None

    def list_transactions(self) -> List[Transaction]:
        """Return transactions newest-first, in insertion order."""

        return list(self._transactions)

    def get_transaction(self, transaction_id: str) -> Transaction:
        """Retrieve a transaction, raising informative errors when missing."""

        for transaction in self._transactions:
            if transaction.transaction_id == transaction_id:
                return transaction
        raise KeyError(f"Transaction {transaction_id} not found")

    def total_by_kind(self, kind: object) -> float:
        """Sum the amounts of every transaction of ``kind``."""

        wanted = TransactionKind.from_str(kind)
        return sum(
            (transaction.amount for transaction in self._transactions if transaction.kind is wanted),
            0.0,
        )

    def net_balance(self) -> float:
        return self.total_by_kind(TransactionKind.INCOME) - self.total_by_kind(
            TransactionKind.EXPENSE
        )

    def expense_by_category(self) -> Dict[str, float]:
        """Group expense amounts by category in order of first occurrence."""

        totals: Dict[str, float] = {}
        for transaction in self._transactions:
            if transaction.kind is not TransactionKind.EXPENSE:
                continue
            totals[transaction.category] = totals.get(transaction.category, 0.0) + transaction.amount
        LOGGER.debug("Expense breakdown covers %s categories", len(totals))
        return totals

    def summary(self) -> LedgerSummary:
        income = self.total_by_kind(TransactionKind.INCOME)
        expenses = self.total_by_kind(TransactionKind.EXPENSE)
        return LedgerSummary(
            total_income=income,
            total_expenses=expenses,
            net_balance=income - expenses,
        )

    def export_snapshot(self) -> Dict[str, object]:
        """Export transactions, totals and the expense grouping for JSON responses."""

        return {
            "transactions": [transaction.as_dict() for transaction in self._transactions],
            "totals": self.summary().as_dict(),
            "expense_by_category": self.expense_by_category(),
        }


def seed_demo_transactions(ledger: Ledger) -> None:
    """Populate ``ledger`` with deterministic demo data, oldest first."""

    demo_transactions = [
        ("Website redesign retainer", 2400.0, TransactionKind.INCOME, "Client Payment", date(2024, 5, 1)),
        ("Design suite subscription", 54.99, TransactionKind.EXPENSE, "Software/Tools", date(2024, 5, 3)),
        ("Conference ticket", 320.0, TransactionKind.EXPENSE, "Professional Development", date(2024, 5, 9)),
        ("Strategy workshop", 650.0, TransactionKind.INCOME, "Consultation", date(2024, 5, 14)),
        ("Train to client site", 87.5, TransactionKind.EXPENSE, "Travel", date(2024, 5, 20)),
    ]
    for description, amount, kind, category, occurred_on in demo_transactions:
        ledger.append(description, amount, kind, category, occurred_on)
    LOGGER.debug("Seeded ledger with %s demo transactions", len(demo_transactions))
