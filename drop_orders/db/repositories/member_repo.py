"""Member repository: resolve profile by email and membership by profile."""

from sqlalchemy import func, select

from drop_orders.db import get_session
from drop_orders.db.models.membership import Member, Profile


def find_profile_id_by_email(email: str) -> str | None:
    """Case-insensitive exact match on profiles.email."""
    normalized = (email or "").strip().lower()
    if not normalized:
        return None
    with get_session() as session:
        return session.scalars(
            select(Profile.id).where(func.lower(Profile.email) == normalized)
        ).first()


def find_member_id_by_user(user_id: str) -> str | None:
    with get_session() as session:
        return session.scalars(select(Member.id).where(Member.user_id == user_id)).first()
