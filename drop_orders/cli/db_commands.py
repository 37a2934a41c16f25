"""Database commands: create tables, optionally seed demo data."""

from typing import Optional

import typer

from drop_orders.db import get_session, init_db
from drop_orders.db.seed_data import seed_mock_data

from .shared import console, logger


def init_database(
    seed: bool = typer.Option(False, "--seed", help="Insert demo drops and members"),
    database_url: Optional[str] = typer.Option(None, "--database-url", help="Override DATABASE_URL"),
) -> None:
    """Create tables (idempotent)."""
    log = logger.bind(command="init-db")
    init_db(database_url)
    log.info("init_db.tables_ready")
    if not seed:
        console.print("[green]Tables ready.[/green]")
        return
    with get_session() as session:
        created = seed_mock_data(session)
    if created:
        console.print(f"[green]Tables ready, seeded {created} drops.[/green]")
    else:
        console.print("[yellow]Tables ready; drops already present, seed skipped.[/yellow]")
