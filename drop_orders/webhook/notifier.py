"""Operator summary email sent after an order has been reconciled."""

from html import escape
from typing import Sequence

from drop_orders.mailer.models import OutboundEmail
from drop_orders.mailer.protocol import Mailer
from drop_orders.models.outcomes import (
    LineItemOutcome,
    NotFoundOutcome,
    UpdatedOutcome,
    UpdateFailedOutcome,
)
from drop_orders.utils.logger import get_logger
from drop_orders.webhook.models import OrderEvent

logger = get_logger("drop_orders.webhook.notifier")

STATUS_GLYPHS = {
    "updated": "✅",
    "not_found": "⚠️",
    "update_failed": "❌",
}


def _describe_outcome(outcome: LineItemOutcome) -> str:
    glyph = STATUS_GLYPHS.get(outcome.status, "•")
    if isinstance(outcome, UpdatedOutcome):
        return (
            f"{glyph} <strong>{escape(outcome.title)}</strong>: sold "
            f"{outcome.previous_quantity} → {outcome.new_quantity}, {outcome.remaining} remaining"
        )
    if isinstance(outcome, NotFoundOutcome):
        ref = outcome.product_id or outcome.variant_id or "?"
        return f"{glyph} <strong>{escape(outcome.title)}</strong>: no drop for product {escape(ref)}"
    if isinstance(outcome, UpdateFailedOutcome):
        return f"{glyph} <strong>{escape(outcome.title)}</strong>: update failed ({escape(outcome.error)})"
    return f"{glyph} {escape(str(outcome))}"


def build_subject(order: OrderEvent, outcomes: Sequence[LineItemOutcome]) -> str:
    problems = sum(1 for o in outcomes if o.status != "updated")
    subject = f"Order #{order.order_number if order.order_number is not None else order.id} processed"
    if problems:
        subject += f" ({problems} item{'s' if problems != 1 else ''} need attention)"
    return subject


def build_summary_html(order: OrderEvent, outcomes: Sequence[LineItemOutcome], member_found: bool) -> str:
    items_html = "".join(
        f"<li>{item.quantity} × {escape(item.title or '')} "
        f"(product {escape(str(item.product_id))}, variant {escape(str(item.variant_id))})</li>"
        for item in order.line_items
    )
    outcomes_html = "".join(f"<li>{_describe_outcome(o)}</li>" for o in outcomes)
    return (
        "<h2>New order received</h2>"
        "<table>"
        f"<tr><td>Order</td><td>#{escape(str(order.order_number))} ({escape(order.order_ref)})</td></tr>"
        f"<tr><td>Email</td><td>{escape(order.customer_email or '-')}</td></tr>"
        f"<tr><td>Member</td><td>{'yes' if member_found else 'no'}</td></tr>"
        f"<tr><td>Created</td><td>{escape(order.created_at or '-')}</td></tr>"
        f"<tr><td>Financial status</td><td>{escape(order.financial_status or '-')}</td></tr>"
        "</table>"
        f"<h3>Line items</h3><ul>{items_html or '<li>none</li>'}</ul>"
        f"<h3>Inventory updates</h3><ul>{outcomes_html or '<li>none</li>'}</ul>"
    )


def build_summary_email(
    order: OrderEvent,
    outcomes: Sequence[LineItemOutcome],
    member_found: bool,
    sender: str,
    recipients: Sequence[str],
) -> OutboundEmail:
    return OutboundEmail(
        from_=sender,
        to=list(recipients),
        subject=build_subject(order, outcomes),
        html=build_summary_html(order, outcomes, member_found),
    )


async def notify_operators(
    mailer: Mailer | None,
    order: OrderEvent,
    outcomes: Sequence[LineItemOutcome],
    member_found: bool,
    sender: str,
    recipients: Sequence[str],
) -> bool:
    """Send the summary; returns True on success. Never raises."""
    if mailer is None or not recipients:
        logger.info("webhook.notify.skipped", reason="no_mailer" if mailer is None else "no_recipients")
        return False
    try:
        email = build_summary_email(order, outcomes, member_found, sender, recipients)
        message_id = await mailer.send(email)
    except Exception as e:
        logger.error("webhook.notify.failed", order_id=order.order_ref, error=str(e))
        return False
    logger.info("webhook.notify.sent", order_id=order.order_ref, message_id=message_id)
    return True
