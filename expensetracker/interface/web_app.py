"""Mini README: FastAPI-powered single page for the expense tracker.

Structure:
    * create_application - application factory wiring routes and templates.
    * HTML routes - render the page, accept the add form and delete buttons.
    * JSON routes - expose the ledger snapshot and category vocabulary.

Each application instance owns one in-memory ledger. Every page render
recomputes totals and the expense breakdown from that ledger, so mutating
routes only need to redirect back to ``/``. The change-logging observer is
attached for the lifetime of the running application only.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Dict, List, Optional

from fastapi import FastAPI, Form, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from ..configuration import ExpenseTrackerSettings, get_settings
from ..ledger import (
    CATEGORIES,
    Ledger,
    LedgerEvent,
    Transaction,
    TransactionKind,
    ValidationError,
    expense_breakdown,
    format_currency,
    seed_demo_transactions,
)
from ..logging_utils import configure_root_logger, get_logger

LOGGER = get_logger(__name__)


def _log_change(event: LedgerEvent, transaction: Transaction) -> None:
    LOGGER.debug("Ledger %s %s", event.value, transaction.transaction_id)


def create_application(
    ledger: Optional[Ledger] = None,
    settings: Optional[ExpenseTrackerSettings] = None,
) -> FastAPI:
    """Create the FastAPI application with routes and an in-memory ledger."""

    settings = settings or get_settings()
    configure_root_logger(settings.log_level)
    if ledger is None:
        ledger = Ledger()
        if settings.seed_demo_data:
            seed_demo_transactions(ledger)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        unsubscribe = ledger.subscribe(_log_change)
        try:
            yield
        finally:
            unsubscribe()

    app = FastAPI(
        title="Expense Tracker",
        version="0.1.0",
        debug=settings.is_development,
        lifespan=lifespan,
    )
    LOGGER.debug("Application created for %s environment", settings.environment)
    templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
    templates.env.filters["currency"] = lambda value: format_currency(
        value, settings.currency_symbol
    )
    static_directory = Path(__file__).parent / "static"
    app.mount("/static", StaticFiles(directory=str(static_directory)), name="static")
    app.state.ledger = ledger

    categories: Dict[str, List[str]] = {
        kind.value: list(names) for kind, names in CATEGORIES.items()
    }

    def render_page(
        request: Request,
        error: Optional[str] = None,
        form: Optional[Dict[str, str]] = None,
        status_code: int = 200,
    ) -> HTMLResponse:
        summary = ledger.summary()
        breakdown = expense_breakdown(ledger)
        LOGGER.debug(
            "Rendering page -> transactions: %s income: %.2f expenses: %.2f",
            len(ledger),
            summary.total_income,
            summary.total_expenses,
        )
        return templates.TemplateResponse(
            request,
            "index.html",
            {
                "summary": summary,
                "transactions": ledger.list_transactions(),
                "breakdown": breakdown,
                "categories": categories,
                "error": error,
                "form": form or {"kind": TransactionKind.EXPENSE.value},
            },
            status_code=status_code,
        )

    @app.get("/", response_class=HTMLResponse)
    async def index(request: Request) -> HTMLResponse:
        """Render summary cards, the entry form, history and breakdown."""

        return render_page(request)

    @app.post("/transactions")
    async def add_transaction(
        request: Request,
        description: str = Form(""),
        amount: str = Form(""),
        kind: str = Form(TransactionKind.EXPENSE.value),
        category: str = Form(""),
        occurred_on: str = Form(""),
    ):
        """Append a transaction from the form, re-rendering with errors on failure."""

        try:
            ledger.append(description, amount, kind, category, occurred_on or None)
        except ValidationError as error:
            form = {
                "description": description,
                "amount": amount,
                "kind": kind,
                "category": category,
                "occurred_on": occurred_on,
            }
            return render_page(request, error=str(error), form=form, status_code=400)
        return RedirectResponse(url="/", status_code=303)

    @app.post("/transactions/{transaction_id}/delete")
    async def delete_transaction(transaction_id: str) -> RedirectResponse:
        """Remove a transaction; unknown identifiers are ignored."""

        ledger.remove(transaction_id)
        return RedirectResponse(url="/", status_code=303)

    @app.get("/api/summary")
    async def api_summary() -> JSONResponse:
        """Return transactions, totals and the expense breakdown."""

        snapshot = ledger.export_snapshot()
        snapshot["breakdown"] = [share.as_dict() for share in expense_breakdown(ledger)]
        return JSONResponse(snapshot)

    @app.get("/api/categories")
    async def api_categories() -> JSONResponse:
        return JSONResponse(categories)

    @app.delete("/api/transactions/{transaction_id}")
    async def api_delete_transaction(transaction_id: str) -> JSONResponse:
        removed = ledger.remove(transaction_id)
        LOGGER.info("API delete for %s (removed=%s)", transaction_id, removed is not None)
        return JSONResponse({"removed": removed is not None})

    return app
