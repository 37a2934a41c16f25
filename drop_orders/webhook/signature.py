"""HMAC verification of inbound Shopify deliveries.

Shopify signs the exact request body bytes with HMAC-SHA256 and sends the base64
digest in ``X-Shopify-Hmac-Sha256``. Verification must run on the raw body; a parsed
and re-serialized payload produces a different digest.
"""

import base64
import hashlib
import hmac

from drop_orders.utils.logger import get_logger

logger = get_logger("drop_orders.webhook.signature")


def compute_signature(raw_body: bytes, secret: str) -> str:
    """Base64 HMAC-SHA256 of raw_body keyed with secret."""
    digest = hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def verify_signature(
    raw_body: bytes,
    signature: str | None,
    secret: str | None,
    *,
    dev_mode: bool = False,
) -> bool:
    """Return True if signature matches raw_body under secret.

    Without a secret the delivery is rejected, unless dev_mode is set, in which case
    verification is skipped with a warning.
    """
    if not secret:
        if dev_mode:
            logger.warning("webhook.signature.skipped", reason="no_secret_dev_mode")
            return True
        logger.error("webhook.signature.no_secret")
        return False
    if not signature:
        logger.warning("webhook.signature.missing_header")
        return False
    expected = compute_signature(raw_body, secret).encode("ascii")
    # header text may hold any latin-1 character; compare_digest only accepts ASCII str
    received = signature.strip().encode("utf-8", "surrogateescape")
    is_valid = hmac.compare_digest(expected, received)
    if not is_valid:
        logger.warning("webhook.signature.mismatch", body_length=len(raw_body))
    return is_valid
