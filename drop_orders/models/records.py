"""Plain records handed out by the datastore (detached from any DB session)."""

from datetime import datetime

from pydantic import BaseModel


class DropRecord(BaseModel):
    """A limited-release product and its stock counters."""

    id: str
    shopify_product_id: str | None = None
    title: str = ""
    quantity_available: int = 0
    quantity_sold: int = 0

    @property
    def remaining(self) -> int:
        return self.quantity_available - self.quantity_sold


class ParticipationRecord(BaseModel):
    """Purchase fact joining one member to one drop for one external order."""

    id: str
    member_id: str
    drop_id: str
    purchased: bool
    quantity: int
    shopify_order_id: str | None = None
    created_at: datetime | None = None
