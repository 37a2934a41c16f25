"""Configuration and settings."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Paths
PROJECT_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = PROJECT_ROOT / "data"
OUTPUT_DIR = PROJECT_ROOT / "output"
SENT_ITEMS_PATH = Path(os.getenv("SENT_ITEMS_PATH", str(OUTPUT_DIR / "sent_items.json")))

# Ensure directories exist
DATA_DIR.mkdir(parents=True, exist_ok=True)
OUTPUT_DIR.mkdir(parents=True, exist_ok=True)

# Database
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{DATA_DIR / 'drops.sqlite'}")

# Logging
LOG_DIR = Path(os.getenv("LOG_DIR", str(OUTPUT_DIR / "logs")))
LOG_FILE = LOG_DIR / "app.jsonl"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
VERBOSE_LOGGING = os.getenv("VERBOSE_LOGGING", "false").lower() == "true"

# Ensure log directory exists
LOG_DIR.mkdir(parents=True, exist_ok=True)

# Shopify order webhook
SHOPIFY_WEBHOOK_SECRET = os.getenv("SHOPIFY_WEBHOOK_SECRET", "")
# Without a secret every delivery is rejected unless dev mode is switched on explicitly.
WEBHOOK_DEV_MODE = os.getenv("WEBHOOK_DEV_MODE", "false").lower() == "true"
WEBHOOK_HOST = os.getenv("WEBHOOK_HOST", "0.0.0.0")
WEBHOOK_PORT = int(os.getenv("WEBHOOK_PORT", "8000"))
WEBHOOK_PATH = "/webhooks/shopify/orders"

# Operator notifications (Resend)
RESEND_API_KEY = os.getenv("RESEND_API_KEY", "")
RESEND_API_URL = os.getenv("RESEND_API_URL", "https://api.resend.com/emails")
RESEND_TIMEOUT_SECONDS = float(os.getenv("RESEND_TIMEOUT_SECONDS", "10"))
NOTIFY_FROM = os.getenv("NOTIFY_FROM", "The Rare Goods Club <orders@theraregoodsclub.com>")
NOTIFY_TO = [addr.strip() for addr in os.getenv("NOTIFY_TO", "").split(",") if addr.strip()]
# "resend" | "file"; empty picks resend when an API key is present
MAIL_PROVIDER = os.getenv("MAIL_PROVIDER", "").strip().lower() or ("resend" if RESEND_API_KEY else "file")
