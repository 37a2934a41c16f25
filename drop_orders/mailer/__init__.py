"""Mail provider: protocol, Resend implementation and file-backed development mailer."""

from drop_orders.config import MAIL_PROVIDER, RESEND_API_KEY, SENT_ITEMS_PATH
from drop_orders.mailer.file_mailer import FileMailer
from drop_orders.mailer.models import OutboundEmail
from drop_orders.mailer.protocol import Mailer
from drop_orders.mailer.resend import ResendMailer


def build_mailer(provider: str | None = None) -> Mailer:
    """Mailer selected by MAIL_PROVIDER ("resend" or "file")."""
    kind = (provider or MAIL_PROVIDER).lower()
    if kind == "resend":
        return ResendMailer(api_key=RESEND_API_KEY)
    if kind == "file":
        return FileMailer(sent_items_path=SENT_ITEMS_PATH)
    raise ValueError(f"Unknown mail provider: {kind!r}")


__all__ = [
    "OutboundEmail",
    "Mailer",
    "ResendMailer",
    "FileMailer",
    "build_mailer",
]
