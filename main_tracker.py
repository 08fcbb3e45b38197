"""Mini README: Entry point CLI for launching the expense tracker.

This script exposes a Typer CLI that starts the FastAPI application with
configurable host, port, and production flags, and lists the category
vocabulary. Settings are drawn from environment variables when available.
"""

from __future__ import annotations

import typer
import uvicorn

from expensetracker.configuration import get_settings
from expensetracker.ledger import CATEGORIES
from expensetracker.logging_utils import configure_root_logger

cli = typer.Typer(help="Launch and inspect the expense tracker web interface.")


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(settings.log_level)

    # Browsers cannot open the 0.0.0.0 / :: wildcard addresses directly.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting Expense Tracker on {effective_host}:{effective_port}.\n"
        f"Open your browser at http://{browser_host}:{effective_port}"
    )
    uvicorn.run(
        "expensetracker.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def categories() -> None:
    """Print the allowed categories for each transaction kind."""

    for kind, names in CATEGORIES.items():
        typer.echo(f"{kind.value}:")
        for name in names:
            typer.echo(f"  - {name}")


if __name__ == "__main__":
    cli()
