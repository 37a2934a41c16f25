"""Order commands: process an order file locally, sign a payload for test deliveries."""

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer

from drop_orders.config import SHOPIFY_WEBHOOK_SECRET
from drop_orders.db.datastore import SqlDatastore
from drop_orders.mailer import build_mailer
from drop_orders.webhook.processor import OrderWebhookProcessor, parse_order
from drop_orders.webhook.signature import compute_signature

from .shared import console, logger, outcomes_table


def process_order(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Order JSON (Shopify orders/* payload)"),
    notify: bool = typer.Option(False, "--notify", help="Send the operator summary email"),
    database_url: Optional[str] = typer.Option(None, "--database-url", help="Override DATABASE_URL"),
) -> None:
    """Run a trusted local order file through reconciliation (no signature check).

    Sold quantities are incremented again for every run; use it to reconcile items a
    delivery reported as update_failed, with the already-updated items removed from the file.
    """
    log = logger.bind(command="process-order", path=str(path))
    try:
        order = parse_order(path.read_bytes())
    except Exception as e:
        console.print(f"[red]Cannot read order: {e}[/red]")
        log.error("process_order.parse_failed", error=str(e))
        raise typer.Exit(1) from e

    mailer = build_mailer() if notify else None
    processor = OrderWebhookProcessor(datastore=SqlDatastore(database_url), mailer=mailer)
    result = asyncio.run(processor.process_order(order))

    console.print(f"[bold]Order #{result.order_number}[/bold] (id {result.order_id}) member: {result.member_found}")
    console.print(outcomes_table(result.updates))
    failed = [o for o in result.updates if o.status != "updated"]
    log.info("process_order.done", updates=len(result.updates), problems=len(failed))
    if failed:
        raise typer.Exit(2)


def sign(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Payload file to sign"),
    secret: str = typer.Option(SHOPIFY_WEBHOOK_SECRET, "--secret", help="Shared secret (default SHOPIFY_WEBHOOK_SECRET)"),
) -> None:
    """Print the X-Shopify-Hmac-Sha256 value for a payload file."""
    if not secret:
        console.print("[red]No secret: pass --secret or set SHOPIFY_WEBHOOK_SECRET[/red]")
        raise typer.Exit(1)
    raw = path.read_bytes()
    try:
        json.loads(raw)
    except ValueError:
        console.print("[yellow]Warning: payload is not valid JSON[/yellow]")
    typer.echo(compute_signature(raw, secret))
