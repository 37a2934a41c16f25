"""Inventory reconciliation: map each line item to a drop and add to its sold quantity.

A drop's shopify_product_id holds either the bare numeric product id or a variant
gid. Candidates are tried in MATCH_STRATEGIES order and the first hit wins.
"""

from dataclasses import dataclass
from typing import Callable

from drop_orders.db.datastore import Datastore
from drop_orders.models.outcomes import (
    LineItemOutcome,
    MatchKind,
    NotFoundOutcome,
    UpdatedOutcome,
    UpdateFailedOutcome,
)
from drop_orders.models.records import DropRecord
from drop_orders.utils.logger import get_logger
from drop_orders.webhook.models import LineItem

logger = get_logger("drop_orders.webhook.reconciler")

VARIANT_GID_PREFIX = "gid://shopify/ProductVariant/"


def product_reference(item: LineItem) -> str | None:
    if item.product_id is None or str(item.product_id).strip() == "":
        return None
    return str(item.product_id).strip()


def variant_reference(item: LineItem) -> str | None:
    if item.variant_id is None or str(item.variant_id).strip() == "":
        return None
    return f"{VARIANT_GID_PREFIX}{str(item.variant_id).strip()}"


MATCH_STRATEGIES: tuple[tuple[MatchKind, Callable[[LineItem], str | None]], ...] = (
    (MatchKind.PRODUCT_ID, product_reference),
    (MatchKind.VARIANT_REFERENCE, variant_reference),
)


@dataclass(frozen=True)
class DropMatch:
    drop: DropRecord
    kind: MatchKind
    reference: str


@dataclass
class ReconciledLineItem:
    """Outcome for one line item; drop is set only when the update succeeded."""

    item: LineItem
    outcome: LineItemOutcome
    drop: DropRecord | None = None

    @property
    def updated(self) -> bool:
        return isinstance(self.outcome, UpdatedOutcome)


def find_drop(datastore: Datastore, item: LineItem) -> DropMatch | None:
    """Evaluate MATCH_STRATEGIES in order; a failing lookup counts as a miss for that candidate."""
    for kind, build_reference in MATCH_STRATEGIES:
        reference = build_reference(item)
        if reference is None:
            continue
        try:
            drop = datastore.find_drop_by_reference(reference)
        except Exception as e:
            logger.warning("webhook.reconcile.lookup_error", reference=reference, match_kind=kind.value, error=str(e))
            continue
        if drop is not None:
            logger.debug("webhook.reconcile.matched", reference=reference, match_kind=kind.value, drop_id=drop.id)
            return DropMatch(drop=drop, kind=kind, reference=reference)
    return None


def reconcile_line_item(datastore: Datastore, item: LineItem) -> ReconciledLineItem:
    """Increment the matched drop's sold quantity by item.quantity. Never raises."""
    title = item.title or ""
    match = find_drop(datastore, item)
    if match is None:
        logger.warning(
            "webhook.reconcile.not_found",
            product_id=product_reference(item),
            variant_reference=variant_reference(item),
        )
        return ReconciledLineItem(
            item=item,
            outcome=NotFoundOutcome(
                product_id=product_reference(item),
                variant_id=str(item.variant_id) if item.variant_id is not None else None,
                title=title,
            ),
        )

    drop = match.drop
    try:
        updated = datastore.increment_quantity_sold(drop.id, item.quantity)
    except Exception as e:
        logger.error("webhook.reconcile.update_failed", drop_id=drop.id, error=str(e))
        return ReconciledLineItem(
            item=item,
            outcome=UpdateFailedOutcome(drop_id=drop.id, title=drop.title or title, error=str(e)),
        )

    previous = updated.quantity_sold - item.quantity
    logger.info(
        "webhook.reconcile.updated",
        drop_id=drop.id,
        match_kind=match.kind.value,
        previous_quantity=previous,
        new_quantity=updated.quantity_sold,
        remaining=updated.remaining,
    )
    return ReconciledLineItem(
        item=item,
        outcome=UpdatedOutcome(
            drop_id=drop.id,
            title=updated.title or title,
            matched_by=match.kind,
            previous_quantity=previous,
            new_quantity=updated.quantity_sold,
            remaining=updated.remaining,
        ),
        drop=updated,
    )
