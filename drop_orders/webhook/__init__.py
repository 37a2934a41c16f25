"""Shopify order webhook: verification, reconciliation, participation and notification."""

from drop_orders.webhook.models import LineItem, OrderEvent
from drop_orders.webhook.processor import (
    OrderWebhookProcessor,
    PipelineState,
    WebhookResponse,
    WebhookSettings,
)

__all__ = [
    "LineItem",
    "OrderEvent",
    "OrderWebhookProcessor",
    "PipelineState",
    "WebhookResponse",
    "WebhookSettings",
]
