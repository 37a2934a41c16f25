"""Pydantic models for Shopify order webhook payloads."""

from pydantic import BaseModel, Field


class LineItem(BaseModel):
    """One product/variant/quantity entry of an order."""

    product_id: int | str | None = None
    variant_id: int | str | None = None
    quantity: int = 0
    title: str | None = None

    model_config = {"extra": "ignore"}


class OrderEvent(BaseModel):
    """Body of an orders/create or orders/paid delivery (only the fields reconciliation reads)."""

    id: int | str
    order_number: int | str | None = None
    email: str | None = None
    contact_email: str | None = None
    created_at: str | None = None
    financial_status: str | None = None
    line_items: list[LineItem] = Field(default_factory=list)

    model_config = {"extra": "ignore"}

    @property
    def customer_email(self) -> str:
        return (self.email or self.contact_email or "").strip()

    @property
    def order_ref(self) -> str:
        """External order reference stored on participation rows."""
        return str(self.id)
