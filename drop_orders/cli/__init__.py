"""CLI commands: one module per concern (serve, database, orders)."""

from typer import Typer

from drop_orders.cli import db_commands, order_commands, serve as serve_module

app = Typer(help="Drop order reconciliation webhook")


def register_commands() -> None:
    """Register all CLI commands on the global app."""
    app.command()(serve_module.serve)
    app.command(name="init-db")(db_commands.init_database)
    app.command(name="process-order")(order_commands.process_order)
    app.command()(order_commands.sign)


register_commands()
