"""Order webhook pipeline: verify -> filter -> resolve member -> reconcile -> notify -> respond.

Each delivery is handled on its own; nothing is shared across requests except the
datastore and the mailer. Line items are processed one after another so every
outcome is attributable to exactly one item.
"""

import asyncio
import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import ValidationError

from drop_orders.config import NOTIFY_FROM, NOTIFY_TO, SHOPIFY_WEBHOOK_SECRET, WEBHOOK_DEV_MODE
from drop_orders.db.datastore import Datastore
from drop_orders.errors import PayloadError
from drop_orders.mailer.protocol import Mailer
from drop_orders.models.outcomes import WebhookResult
from drop_orders.utils.logger import delivery_context, get_logger
from drop_orders.webhook.members import resolve_member
from drop_orders.webhook.models import OrderEvent
from drop_orders.webhook.notifier import notify_operators
from drop_orders.webhook.participation import record_participation
from drop_orders.webhook.reconciler import reconcile_line_item
from drop_orders.webhook.signature import verify_signature
from drop_orders.webhook.topics import is_relevant_topic

logger = get_logger("drop_orders.webhook.processor")


class PipelineState(str, Enum):
    RECEIVED = "received"
    VERIFIED = "verified"
    REJECTED = "rejected"
    FILTERED_OUT = "filtered_out"
    RECONCILING = "reconciling"
    NOTIFIED = "notified"
    RESPONDED = "responded"


@dataclass
class WebhookSettings:
    secret: str = SHOPIFY_WEBHOOK_SECRET
    dev_mode: bool = WEBHOOK_DEV_MODE
    notify_from: str = NOTIFY_FROM
    notify_to: list[str] = field(default_factory=lambda: list(NOTIFY_TO))


@dataclass
class WebhookResponse:
    status_code: int
    body: dict[str, Any]


def parse_order(raw_body: bytes) -> OrderEvent:
    try:
        data = json.loads(raw_body)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise PayloadError(f"Invalid JSON body: {e}") from e
    if not isinstance(data, dict):
        raise PayloadError("Order payload must be a JSON object")
    try:
        return OrderEvent.model_validate(data)
    except ValidationError as e:
        raise PayloadError(f"Invalid order payload: {e.error_count()} validation error(s)") from e


class OrderWebhookProcessor:
    """Runs one delivery through the pipeline. Datastore and mailer are injected."""

    def __init__(
        self,
        datastore: Datastore,
        mailer: Mailer | None,
        settings: WebhookSettings | None = None,
    ):
        self.datastore = datastore
        self.mailer = mailer
        self.settings = settings or WebhookSettings()

    async def handle(
        self,
        raw_body: bytes,
        topic: str | None,
        signature: str | None,
        shop_domain: str | None = None,
    ) -> WebhookResponse:
        """Handle a raw delivery. Always returns a response; never raises."""
        with delivery_context(topic=topic, shop_domain=shop_domain):
            logger.info("webhook.order.received", state=PipelineState.RECEIVED.value, body_length=len(raw_body))
            try:
                if not verify_signature(
                    raw_body,
                    signature,
                    self.settings.secret,
                    dev_mode=self.settings.dev_mode,
                ):
                    logger.warning("webhook.order.rejected", state=PipelineState.REJECTED.value)
                    return WebhookResponse(401, {"error": "Invalid signature"})
                logger.debug("webhook.order.verified", state=PipelineState.VERIFIED.value)

                if not is_relevant_topic(topic):
                    logger.info("webhook.order.ignored", state=PipelineState.FILTERED_OUT.value)
                    return WebhookResponse(200, {"message": "Ignored topic"})

                order = parse_order(raw_body)
                result = await self.process_order(order)
                logger.info(
                    "webhook.order.responded",
                    state=PipelineState.RESPONDED.value,
                    order_id=order.order_ref,
                    updates=len(result.updates),
                )
                return WebhookResponse(200, result.to_response())
            except Exception as e:
                logger.exception("webhook.order.error", error=str(e))
                return WebhookResponse(500, {"error": "Internal server error", "message": str(e)})

    async def process_order(self, order: OrderEvent) -> WebhookResult:
        """Reconcile a parsed order and notify operators. Per-item failures end up in the result.

        Datastore calls are synchronous and run in worker threads; line items still go
        through one at a time.
        """
        with delivery_context(order_id=order.order_ref):
            logger.info(
                "webhook.order.reconciling",
                state=PipelineState.RECONCILING.value,
                order_number=order.order_number,
                line_items=len(order.line_items),
            )
            member_id = await asyncio.to_thread(resolve_member, self.datastore, order.customer_email)

            outcomes = []
            # drop id -> quantity bought in this order, summed over line items
            purchased: dict[str, int] = {}
            for item in order.line_items:
                reconciled = await asyncio.to_thread(reconcile_line_item, self.datastore, item)
                outcomes.append(reconciled.outcome)
                if reconciled.updated:
                    purchased[reconciled.drop.id] = purchased.get(reconciled.drop.id, 0) + item.quantity

            if member_id is not None:
                for drop_id, quantity in purchased.items():
                    await asyncio.to_thread(
                        record_participation,
                        self.datastore,
                        member_id=member_id,
                        drop_id=drop_id,
                        quantity=quantity,
                        order_ref=order.order_ref,
                    )

            await notify_operators(
                self.mailer,
                order,
                outcomes,
                member_found=member_id is not None,
                sender=self.settings.notify_from,
                recipients=self.settings.notify_to,
            )
            logger.debug("webhook.order.notified", state=PipelineState.NOTIFIED.value)

            return WebhookResult(
                order_id=order.id,
                order_number=order.order_number,
                member_found=member_id is not None,
                updates=outcomes,
            )
