"""Pydantic models shared across the pipeline."""

from drop_orders.models.outcomes import (
    LineItemOutcome,
    MatchKind,
    NotFoundOutcome,
    UpdatedOutcome,
    UpdateFailedOutcome,
    WebhookResult,
)
from drop_orders.models.records import DropRecord, ParticipationRecord

__all__ = [
    "DropRecord",
    "ParticipationRecord",
    "MatchKind",
    "UpdatedOutcome",
    "NotFoundOutcome",
    "UpdateFailedOutcome",
    "LineItemOutcome",
    "WebhookResult",
]
