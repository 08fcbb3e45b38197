"""Mini README: Tests covering the in-memory ledger and its aggregations.

Structure:
    * append/remove behaviour - ordering, validation, idempotent removal.
    * aggregation - totals by kind, net balance, grouping by category.
    * observers - change notifications after mutating operations.
"""

from __future__ import annotations

from datetime import date, datetime

import pytest

from expensetracker.ledger import (
    Ledger,
    LedgerEvent,
    TransactionKind,
    ValidationError,
    seed_demo_transactions,
)


@pytest.fixture
def scenario_ledger() -> Ledger:
    ledger = Ledger()
    ledger.append("Website launch", 1000, "income", "Client Payment", "2024-01-01")
    ledger.append("Design suite", 200, "expense", "Software/Tools", "2024-01-02")
    ledger.append("Font licence", 50, "expense", "Software/Tools", "2024-01-03")
    return ledger


def test_append_prepends_and_grows_by_one() -> None:
    """Each valid append adds exactly one entry at the front of the sequence."""

    ledger = Ledger()
    first = ledger.append("Retainer", 500, TransactionKind.INCOME, "Project Fee", date(2024, 2, 1))
    second = ledger.append("Laptop stand", 45.5, "expense", "Equipment", date(2024, 2, 2))

    assert len(ledger) == 2
    assert ledger.list_transactions() == [second, first]
    assert first.transaction_id != second.transaction_id
    assert second.description == "Laptop stand"
    assert second.kind is TransactionKind.EXPENSE


def test_append_trims_description_and_parses_inputs() -> None:
    ledger = Ledger()
    transaction = ledger.append("  Flight  ", " 120.25 ", " EXPENSE ", "Travel", datetime(2024, 3, 4, 9, 30))

    assert transaction.description == "Flight"
    assert transaction.amount == pytest.approx(120.25)
    assert transaction.occurred_on == date(2024, 3, 4)


def test_append_defaults_date_to_today() -> None:
    ledger = Ledger()
    transaction = ledger.append("Ads", 30, "expense", "Marketing")

    assert transaction.occurred_on == date.today()


@pytest.mark.parametrize(
    "description, amount, kind, category, occurred_on",
    [
        ("", 10, "expense", "Travel", "2024-01-01"),
        ("   ", 10, "expense", "Travel", "2024-01-01"),
        ("Taxi", 0, "expense", "Travel", "2024-01-01"),
        ("Taxi", -5, "expense", "Travel", "2024-01-01"),
        ("Taxi", "abc", "expense", "Travel", "2024-01-01"),
        ("Taxi", "", "expense", "Travel", "2024-01-01"),
        ("Taxi", float("nan"), "expense", "Travel", "2024-01-01"),
        ("Taxi", float("inf"), "expense", "Travel", "2024-01-01"),
        ("Taxi", True, "expense", "Travel", "2024-01-01"),
        ("Taxi", None, "expense", "Travel", "2024-01-01"),
        ("Taxi", 10**400, "expense", "Travel", "2024-01-01"),
        ("Taxi", 3 + 4j, "expense", "Travel", "2024-01-01"),
        (42, 10, "expense", "Travel", "2024-01-01"),
        (None, 10, "expense", "Travel", "2024-01-01"),
        ("Taxi", 10, "expense", 7, "2024-01-01"),
        ("Taxi", 10, "expense", "", "2024-01-01"),
        ("Taxi", 10, "transfer", "Travel", "2024-01-01"),
        ("Taxi", 10, "income", "Travel", "2024-01-01"),
        ("Taxi", 10, "expense", "Travel", "01/02/2024"),
    ],
)
def test_append_rejects_invalid_input(description, amount, kind, category, occurred_on) -> None:
    """Invalid entries raise ValidationError and leave the ledger unchanged."""

    ledger = Ledger()
    ledger.append("Existing", 10, "expense", "Marketing", "2024-01-01")
    before = ledger.list_transactions()

    with pytest.raises(ValidationError):
        ledger.append(description, amount, kind, category, occurred_on)

    assert ledger.list_transactions() == before


def test_validation_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        Ledger().append("", 1, "expense", "Travel")


def test_transactions_are_immutable(scenario_ledger: Ledger) -> None:
    transaction = scenario_ledger.list_transactions()[0]

    with pytest.raises(AttributeError):
        transaction.amount = 1.0  # type: ignore[misc]


def test_scenario_totals(scenario_ledger: Ledger) -> None:
    """Income 1000 with expenses 200 and 50 yields a 750 balance."""

    assert scenario_ledger.total_by_kind("income") == pytest.approx(1000)
    assert scenario_ledger.total_by_kind(TransactionKind.EXPENSE) == pytest.approx(250)
    assert scenario_ledger.net_balance() == pytest.approx(750)
    assert scenario_ledger.expense_by_category() == {"Software/Tools": pytest.approx(250)}


def test_removing_income_keeps_expense_grouping(scenario_ledger: Ledger) -> None:
    income = next(t for t in scenario_ledger if t.kind is TransactionKind.INCOME)

    scenario_ledger.remove(income.transaction_id)

    assert scenario_ledger.total_by_kind("income") == 0
    assert scenario_ledger.net_balance() == pytest.approx(-250)
    assert scenario_ledger.expense_by_category() == {"Software/Tools": pytest.approx(250)}


def test_remove_is_idempotent(scenario_ledger: Ledger) -> None:
    target = scenario_ledger.list_transactions()[0]

    assert scenario_ledger.remove(target.transaction_id) == target
    assert scenario_ledger.remove(target.transaction_id) is None
    assert scenario_ledger.remove("txn_9999") is None
    assert len(scenario_ledger) == 2


def test_identifiers_are_not_reused_after_removal() -> None:
    ledger = Ledger()
    first = ledger.append("Ads", 10, "expense", "Marketing")
    ledger.remove(first.transaction_id)
    second = ledger.append("Ads", 10, "expense", "Marketing")

    assert second.transaction_id != first.transaction_id


def test_empty_ledger_aggregates_to_zero() -> None:
    ledger = Ledger()

    assert ledger.total_by_kind("income") == 0
    assert ledger.total_by_kind("expense") == 0
    assert ledger.net_balance() == 0
    assert ledger.expense_by_category() == {}


def test_expense_by_category_sums_and_keeps_first_occurrence_order() -> None:
    """Categories appear in the order they first occur in the newest-first sequence."""

    ledger = Ledger()
    ledger.append("Train", 10, "expense", "Travel", "2024-01-01")
    ledger.append("Flyers", 5, "expense", "Marketing", "2024-01-02")
    ledger.append("Hotel", 15, "expense", "Travel", "2024-01-03")
    ledger.append("Invoice", 99, "income", "Consultation", "2024-01-04")

    grouped = ledger.expense_by_category()

    assert list(grouped) == ["Travel", "Marketing"]
    assert grouped["Travel"] == pytest.approx(25)
    assert grouped["Marketing"] == pytest.approx(5)


def test_net_balance_matches_totals_after_mixed_operations() -> None:
    ledger = Ledger()
    seed_demo_transactions(ledger)
    ledger.remove(ledger.list_transactions()[1].transaction_id)
    ledger.append("Referral bonus", 12.34, "income", "Other Income")

    income = ledger.total_by_kind("income")
    expenses = ledger.total_by_kind("expense")
    assert ledger.net_balance() == pytest.approx(income - expenses)
    summary = ledger.summary()
    assert summary.net_balance == pytest.approx(ledger.net_balance())


def test_get_transaction_raises_for_unknown_identifier() -> None:
    with pytest.raises(KeyError):
        Ledger().get_transaction("txn_0001")


def test_observers_receive_changes_until_unsubscribed() -> None:
    """Observers fire after appends and effective removals only."""

    ledger = Ledger()
    events = []
    unsubscribe = ledger.subscribe(lambda event, txn: events.append((event, txn.transaction_id)))

    added = ledger.append("Mouse", 25, "expense", "Equipment")
    ledger.remove(added.transaction_id)
    ledger.remove(added.transaction_id)
    unsubscribe()
    ledger.append("Keyboard", 60, "expense", "Equipment")

    assert events == [
        (LedgerEvent.ADDED, added.transaction_id),
        (LedgerEvent.REMOVED, added.transaction_id),
    ]


def test_rejected_append_does_not_notify() -> None:
    ledger = Ledger()
    events = []
    ledger.subscribe(lambda event, txn: events.append(event))

    with pytest.raises(ValidationError):
        ledger.append("Mouse", -1, "expense", "Equipment")

    assert events == []


def test_export_snapshot_is_json_ready(scenario_ledger: Ledger) -> None:
    snapshot = scenario_ledger.export_snapshot()

    assert [entry["occurred_on"] for entry in snapshot["transactions"]] == [
        "2024-01-03",
        "2024-01-02",
        "2024-01-01",
    ]
    assert snapshot["transactions"][0]["kind"] == "expense"
    assert snapshot["totals"]["net_balance"] == pytest.approx(750)
    assert snapshot["expense_by_category"] == {"Software/Tools": pytest.approx(250)}
