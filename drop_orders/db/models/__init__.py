"""Re-export all ORM models so Base.metadata has all tables."""

from drop_orders.db.models.catalog import Drop
from drop_orders.db.models.membership import DropParticipation, Member, Profile

__all__ = [
    "Drop",
    "Profile",
    "Member",
    "DropParticipation",
]
