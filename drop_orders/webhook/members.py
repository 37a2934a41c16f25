"""Member resolution: order contact email -> profile -> membership id."""

from drop_orders.db.datastore import Datastore
from drop_orders.utils.logger import get_logger

logger = get_logger("drop_orders.webhook.members")


def resolve_member(datastore: Datastore, email: str | None) -> str | None:
    """Return the membership id for email, or None for guests.

    Best effort: lookup errors are logged and reported as "no member".
    """
    normalized = (email or "").strip().lower()
    if not normalized:
        logger.info("webhook.member.no_email")
        return None
    try:
        profile_id = datastore.find_profile_id_by_email(normalized)
        if profile_id is None:
            logger.info("webhook.member.no_profile", email=normalized)
            return None
        member_id = datastore.find_member_id_by_user(profile_id)
    except Exception as e:
        logger.warning("webhook.member.lookup_error", email=normalized, error=str(e))
        return None
    if member_id is None:
        logger.info("webhook.member.not_member", email=normalized, profile_id=profile_id)
        return None
    logger.info("webhook.member.resolved", email=normalized, member_id=member_id)
    return member_id
