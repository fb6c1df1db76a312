"""Load and validate configuration from environment."""
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Paths
PROJECT_ROOT = Path(__file__).resolve().parent.parent
SKILLS_DIR = Path(os.getenv("SKILLS_DIR") or PROJECT_ROOT / "skills")

# Resolver
# Fraction of meaningful request words that must appear in a skill's id, description or aliases.
SEMANTIC_THRESHOLD = float(os.getenv("SEMANTIC_THRESHOLD", "0.5"))

# Registry snapshot is treated as stale after this many days (refresh stays manual)
REGISTRY_MAX_AGE_DAYS = float(os.getenv("REGISTRY_MAX_AGE_DAYS", "7"))

# Telegram (required only for telegram trigger)
TELEGRAM_BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN")
TELEGRAM_ALLOWED_USER_ID = os.getenv("TELEGRAM_ALLOWED_USER_ID")
# Optional: proxy for Telegram API (e.g. http://host:port or socks5://...). Also respects HTTPS_PROXY/HTTP_PROXY.
TELEGRAM_PROXY = os.getenv("TELEGRAM_PROXY") or os.getenv("HTTPS_PROXY") or os.getenv("HTTP_PROXY")
TELEGRAM_CONNECT_TIMEOUT = float(os.getenv("TELEGRAM_CONNECT_TIMEOUT", "30"))
TELEGRAM_READ_TIMEOUT = float(os.getenv("TELEGRAM_READ_TIMEOUT", "30"))
if TELEGRAM_ALLOWED_USER_ID:
    try:
        TELEGRAM_ALLOWED_USER_ID = int(TELEGRAM_ALLOWED_USER_ID)
    except ValueError:
        TELEGRAM_ALLOWED_USER_ID = None

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def validate_for_resolver() -> None:
    """Validate resolver settings before any request is handled."""
    if not 0.0 < SEMANTIC_THRESHOLD <= 1.0:
        raise ValueError("SEMANTIC_THRESHOLD must be in (0, 1]. Set it in .env.")
    if REGISTRY_MAX_AGE_DAYS <= 0:
        raise ValueError("REGISTRY_MAX_AGE_DAYS must be positive. Set it in .env.")


def validate_for_telegram() -> None:
    """Validate that required env vars for the Telegram trigger are set."""
    validate_for_resolver()
    if not TELEGRAM_BOT_TOKEN:
        raise ValueError("TELEGRAM_BOT_TOKEN is required for the Telegram trigger. Set it in .env.")
