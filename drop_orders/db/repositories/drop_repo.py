"""Drop repository: look up drops by external reference, increment sold quantity."""

from sqlalchemy import select, update

from drop_orders.db import get_session
from drop_orders.db.models.catalog import Drop
from drop_orders.models.records import DropRecord


def _to_record(row: Drop) -> DropRecord:
    return DropRecord(
        id=row.id,
        shopify_product_id=row.shopify_product_id,
        title=row.title_en or "",
        quantity_available=row.quantity_available or 0,
        quantity_sold=row.quantity_sold or 0,
    )


def find_by_reference(reference: str) -> DropRecord | None:
    """Return the drop whose shopify_product_id equals reference (oldest first), or None."""
    with get_session() as session:
        row = session.scalars(
            select(Drop)
            .where(Drop.shopify_product_id == reference)
            .order_by(Drop.created_at)
        ).first()
        return _to_record(row) if row is not None else None


def get_by_id(drop_id: str) -> DropRecord | None:
    with get_session() as session:
        row = session.get(Drop, drop_id)
        return _to_record(row) if row is not None else None


def increment_quantity_sold(drop_id: str, quantity: int) -> DropRecord | None:
    """Add quantity to quantity_sold in a single UPDATE and return the refreshed drop.

    The increment happens in SQL (quantity_sold = quantity_sold + :q) so concurrent
    deliveries for the same drop cannot overwrite each other. Returns None if no row
    matched drop_id.
    """
    with get_session() as session:
        result = session.execute(
            update(Drop)
            .where(Drop.id == drop_id)
            .values(quantity_sold=Drop.quantity_sold + quantity)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            return None
        row = session.get(Drop, drop_id, populate_existing=True)
        return _to_record(row)
