"""ORM models for identities, memberships and drop participation."""

from datetime import datetime, timezone

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from drop_orders.db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Profile(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Identity record; the contact email of an order is matched against it."""

    __tablename__ = "profiles"

    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False, index=True)
    first_name: Mapped[str | None] = mapped_column(String(128), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(128), nullable=True)
    email_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    member: Mapped["Member | None"] = relationship("Member", back_populates="profile", uselist=False)


class Member(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Membership granting purchasing rights; one per profile."""

    __tablename__ = "members"

    user_id: Mapped[str] = mapped_column(ForeignKey("profiles.id"), unique=True, nullable=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="active")
    invites_remaining: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    profile: Mapped["Profile"] = relationship("Profile", back_populates="member")


class DropParticipation(Base, UUIDPrimaryKeyMixin):
    """One purchase fact per (member, drop, external order)."""

    __tablename__ = "drop_participation"
    __table_args__ = (
        UniqueConstraint("member_id", "drop_id", "shopify_order_id", name="uq_participation_member_drop_order"),
    )

    member_id: Mapped[str] = mapped_column(ForeignKey("members.id"), nullable=False, index=True)
    drop_id: Mapped[str] = mapped_column(ForeignKey("drops.id"), nullable=False, index=True)
    purchased: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    shopify_order_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    created_at: Mapped[datetime] = mapped_column(nullable=False, default=lambda: datetime.now(timezone.utc))
