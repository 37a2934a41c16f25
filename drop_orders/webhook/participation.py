"""Participation recording, idempotent per (member, drop, external order)."""

from drop_orders.db.datastore import Datastore
from drop_orders.errors import DuplicateParticipationError
from drop_orders.utils.logger import get_logger

logger = get_logger("drop_orders.webhook.participation")


def record_participation(
    datastore: Datastore,
    member_id: str,
    drop_id: str,
    quantity: int,
    order_ref: str,
) -> bool:
    """Insert a purchased participation row unless one exists. Returns True if a row was inserted.

    Redelivery of the same order finds the existing row and skips. Failures are logged only.
    """
    log = logger.bind(member_id=member_id, drop_id=drop_id, order_ref=order_ref)
    try:
        if datastore.has_participation(member_id, drop_id, order_ref):
            log.info("webhook.participation.exists")
            return False
        datastore.insert_participation(member_id, drop_id, quantity, order_ref)
    except DuplicateParticipationError:
        # concurrent delivery inserted between the check and the insert
        log.info("webhook.participation.exists", race=True)
        return False
    except Exception as e:
        log.error("webhook.participation.insert_failed", error=str(e))
        return False
    log.info("webhook.participation.recorded", quantity=quantity)
    return True
