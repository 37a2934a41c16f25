"""Demo data for local runs: a few drops, one member and one non-member profile."""

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from drop_orders.db.models import Drop, Member, Profile
from drop_orders.utils.logger import get_logger

logger = get_logger("drop_orders.db.seed")

DEMO_DROPS = [
    {
        "title_en": "Barolo Riserva 2016",
        "title_nl": "Barolo Riserva 2016",
        "price": 145.0,
        "quantity_available": 24,
        "shopify_product_id": "8001234567890",
    },
    {
        "title_en": "Single Cask Islay 21yo",
        "title_nl": "Single Cask Islay 21 jaar",
        "price": 320.0,
        "quantity_available": 12,
        "shopify_product_id": "gid://shopify/ProductVariant/44001234567890",
    },
    {
        "title_en": "Aged Balsamico Tradizionale",
        "title_nl": "Gerijpte Balsamico Tradizionale",
        "price": 89.0,
        "quantity_available": 40,
        "shopify_product_id": "8001234567999",
    },
]

DEMO_MEMBER_EMAIL = "member@example.com"
DEMO_GUEST_EMAIL = "guest@example.com"


def seed_mock_data(session: Session) -> int:
    """Insert demo rows unless drops already exist. Returns the number of drops created."""
    if session.scalars(select(Drop.id)).first() is not None:
        logger.info("seed.skipped", reason="drops_present")
        return 0
    now = datetime.now(timezone.utc)
    for data in DEMO_DROPS:
        session.add(Drop(starts_at=now, **data))
    member_profile = Profile(email=DEMO_MEMBER_EMAIL, first_name="Demo", last_name="Member", email_verified=True)
    session.add(member_profile)
    session.add(Profile(email=DEMO_GUEST_EMAIL, first_name="Demo", last_name="Guest"))
    session.flush()
    session.add(Member(user_id=member_profile.id, status="active", invites_remaining=2))
    session.flush()
    logger.info("seed.done", drops=len(DEMO_DROPS))
    return len(DEMO_DROPS)
