"""Serve mode: run the FastAPI order webhook under uvicorn."""

import sys

import typer
import uvicorn

from drop_orders.config import SHOPIFY_WEBHOOK_SECRET, WEBHOOK_DEV_MODE, WEBHOOK_HOST, WEBHOOK_PATH, WEBHOOK_PORT
from drop_orders.db import init_db
from drop_orders.webhook.server import create_app

from .shared import console, logger


def serve(
    port: int = typer.Option(WEBHOOK_PORT, "--port", "-p", help="Port for the webhook server"),
    host: str = typer.Option(WEBHOOK_HOST, "--host", "-h", help="Bind host"),
) -> None:
    """Start the order webhook listener."""
    init_db()
    log = logger.bind(command="serve", port=port)
    log.info("serve.start")

    if not SHOPIFY_WEBHOOK_SECRET:
        if WEBHOOK_DEV_MODE:
            console.print("[yellow]SHOPIFY_WEBHOOK_SECRET not set: signatures are NOT verified (dev mode).[/yellow]")
        else:
            console.print(
                "[red]SHOPIFY_WEBHOOK_SECRET not set: every delivery will be rejected. "
                "Set WEBHOOK_DEV_MODE=true to accept unsigned deliveries locally.[/red]"
            )
            log.warning("serve.no_secret")

    app = create_app()
    console.print(f"[green]Starting webhook server on http://{host}:{port}[/green]")
    console.print(f"[dim]Endpoints: POST {WEBHOOK_PATH}, GET /health[/dim]")
    try:
        uvicorn.run(
            app,
            host=host,
            port=port,
            log_level="info",
            timeout_graceful_shutdown=15,
        )
    except KeyboardInterrupt:
        console.print("\n[dim]Shutting down...[/dim]")
        sys.exit(0)
