"""ORM model for drops (limited-release products)."""

from datetime import datetime

from sqlalchemy import Boolean, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from drop_orders.db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Drop(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """A drop. shopify_product_id holds either a numeric product id or a variant gid."""

    __tablename__ = "drops"

    title_en: Mapped[str] = mapped_column(String(256), nullable=False)
    title_nl: Mapped[str] = mapped_column(String(256), nullable=False, default="")
    description_en: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    quantity_available: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    quantity_sold: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    shopify_product_id: Mapped[str | None] = mapped_column(String(128), nullable=True, index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    starts_at: Mapped[datetime | None] = mapped_column(nullable=True)
    ends_at: Mapped[datetime | None] = mapped_column(nullable=True)
