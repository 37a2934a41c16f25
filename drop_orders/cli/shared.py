"""Shared CLI helpers: console, logger, outcome table."""

from typing import Sequence

from rich.console import Console
from rich.table import Table

from drop_orders.models.outcomes import LineItemOutcome, NotFoundOutcome, UpdatedOutcome
from drop_orders.utils.logger import get_logger
from drop_orders.webhook.notifier import STATUS_GLYPHS

console = Console()
logger = get_logger("drop_orders.cli")


def outcomes_table(outcomes: Sequence[LineItemOutcome], title: str = "Inventory updates") -> Table:
    table = Table(title=title)
    table.add_column("Status")
    table.add_column("Drop / product", style="cyan")
    table.add_column("Title")
    table.add_column("Sold", justify="right")
    table.add_column("Remaining", justify="right")
    table.add_column("Detail", style="dim")
    for o in outcomes:
        status = f"{STATUS_GLYPHS.get(o.status, '')} {o.status}"
        if isinstance(o, UpdatedOutcome):
            table.add_row(
                status,
                o.drop_id,
                o.title,
                f"{o.previous_quantity} → {o.new_quantity}",
                str(o.remaining),
                o.matched_by.value,
            )
        elif isinstance(o, NotFoundOutcome):
            table.add_row(status, o.product_id or o.variant_id or "", o.title, "", "", "")
        else:
            table.add_row(status, o.drop_id, o.title, "", "", o.error)
    return table
