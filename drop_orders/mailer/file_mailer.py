"""File mailer: appends outgoing emails to a JSON file instead of sending them."""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from drop_orders.mailer.models import OutboundEmail
from drop_orders.utils.logger import get_logger

logger = get_logger("drop_orders.mailer.file")


class FileMailer:
    """Development mailer: every send is appended to sent_items_path."""

    def __init__(self, sent_items_path: Path):
        self._sent_items_path = Path(sent_items_path)
        logger.info("mailer.file.init", sent_items_path=str(self._sent_items_path))

    def load_sent(self) -> list[dict[str, Any]]:
        if not self._sent_items_path.exists():
            logger.debug("mailer.file.sent_missing", sent_items_path=str(self._sent_items_path))
            return []
        with self._sent_items_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        return data if isinstance(data, list) else []

    def _save_sent(self, items: list[dict[str, Any]]) -> None:
        self._sent_items_path.parent.mkdir(parents=True, exist_ok=True)
        with self._sent_items_path.open("w", encoding="utf-8") as f:
            json.dump(items, f, indent=2, default=str)

    async def send(self, email: OutboundEmail) -> str:
        sent = self.load_sent()
        message_id = f"file_{len(sent) + 1}"
        entry = email.to_payload()
        entry["id"] = message_id
        entry["sent_at"] = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
        sent.append(entry)
        self._save_sent(sent)
        logger.info("mailer.file.sent", message_id=message_id, to=email.to, count=len(sent))
        return message_id
