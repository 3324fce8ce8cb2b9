"""CLI for Folio.

Server, database and content helpers with rich terminal output.
"""

import asyncio
from collections.abc import Awaitable
from typing import Annotated

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from folio.config import settings
from folio.logging import configure_logging

# Palette
PURPLE = "#e135ff"
CYAN = "#80ffea"
CORAL = "#ff6ac1"
YELLOW = "#f1fa8c"
GREEN = "#50fa7b"
RED = "#ff6363"

console = Console()
app = typer.Typer(
    name="folio",
    help="Folio - portfolio content server",
    add_completion=False,
    no_args_is_help=True,
)
db_app = typer.Typer(name="db", help="Database operations", no_args_is_help=True)
app.add_typer(db_app)


def success(message: str) -> None:
    """Print a success message."""
    console.print(f"[{GREEN}]✓[/{GREEN}] {message}")


def error(message: str) -> None:
    """Print an error message."""
    console.print(f"[{RED}]✗[/{RED}] {message}")


def info(message: str) -> None:
    """Print an info message."""
    console.print(f"[{CYAN}]→[/{CYAN}] {message}")


def _run[T](coro: Awaitable[T]) -> T:
    """Run a coroutine against the configured database, closing the engine after."""
    from folio.cache import reset_cache
    from folio.db.connection import close_db

    async def _wrapped() -> T:
        try:
            return await coro
        finally:
            await reset_cache()
            await close_db()

    return asyncio.run(_wrapped())


def _quiet_logging() -> None:
    configure_logging(service_name="cli", level="WARNING")


# =============================================================================
# Server
# =============================================================================


@app.command()
def serve(
    host: Annotated[str | None, typer.Option("--host", "-h", help="Host to bind to")] = None,
    port: Annotated[int | None, typer.Option("--port", "-p", help="Port to listen on")] = None,
    reload: Annotated[bool, typer.Option("--reload", help="Restart on code changes")] = False,
) -> None:
    """Start the API server.

    Examples:
        folio serve                    # Default: localhost:3340
        folio serve -p 9000            # Custom port
        folio serve -h 0.0.0.0         # Listen on all interfaces
    """
    from folio.main import run_server

    try:
        run_server(host=host, port=port, reload=reload)
    except KeyboardInterrupt:
        console.print(f"\n[{CYAN}]Shutting down...[/{CYAN}]")


@app.command()
def health() -> None:
    """Check database connectivity and content counts."""
    from folio.db.connection import check_database_health
    from folio.seed import count_records

    _quiet_logging()

    async def _check() -> tuple[dict[str, str | None], dict[str, int]]:
        status = await check_database_health()
        counts = await count_records() if status["status"] == "healthy" else {}
        return status, counts

    with Progress(
        SpinnerColumn(style=CYAN),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        progress.add_task("Checking health...", total=None)
        status, counts = _run(_check())

    table = Table(title="Health Status", border_style=CYAN)
    table.add_column("Metric", style=PURPLE)
    table.add_column("Value", style=CYAN)

    status_color = GREEN if status["status"] == "healthy" else RED
    table.add_row("Status", f"[{status_color}]{status['status']}[/{status_color}]")
    table.add_row("Environment", settings.environment)
    if status.get("dialect"):
        table.add_row("Database", str(status["dialect"]))
    for kind, count in counts.items():
        table.add_row(f"Records: {kind}", str(count))
    console.print(table)

    if status.get("error"):
        error(f"Database unreachable: {status['error']}")
        raise typer.Exit(1)


@app.command()
def slug(
    title: Annotated[str, typer.Argument(help="Title to derive a slug from")],
) -> None:
    """Show the slug a title would get."""
    from folio.slugs import is_valid_slug, slugify

    derived = slugify(title)
    if not is_valid_slug(derived):
        error("Title has no letters or digits; a slug must be given explicitly")
        raise typer.Exit(1)
    console.print(derived)


# =============================================================================
# Database
# =============================================================================


@db_app.command("init")
def db_init() -> None:
    """Create any missing tables."""
    from folio.db.connection import init_db

    _quiet_logging()
    info("Creating tables...")
    try:
        _run(init_db())
    except Exception as e:
        error(f"Failed to create tables: {e}")
        raise typer.Exit(1) from e
    success("Tables created")


@db_app.command("seed")
def db_seed(
    create_tables: Annotated[
        bool, typer.Option("--create-tables/--no-create-tables", help="Create tables first")
    ] = True,
) -> None:
    """Load sample content. Safe to run more than once."""
    from folio.db.connection import init_db
    from folio.seed import SeedReport, seed_database

    _quiet_logging()

    async def _seed() -> SeedReport:
        if create_tables:
            await init_db()
        return await seed_database()

    try:
        report = _run(_seed())
    except Exception as e:
        error(f"Seed failed: {e}")
        raise typer.Exit(1) from e

    table = Table(title="Seed", border_style=CYAN)
    table.add_column("Kind", style=PURPLE)
    table.add_column("Created", style=GREEN)
    table.add_column("Skipped", style=YELLOW)
    for kind in sorted(set(report.created) | set(report.skipped)):
        table.add_row(kind, str(report.created.get(kind, 0)), str(report.skipped.get(kind, 0)))
    console.print(table)

    for message in report.errors:
        console.print(f"  [{CORAL}]•[/{CORAL}] {message}")
    if report.errors:
        raise typer.Exit(1)
    success("Seed completed")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
