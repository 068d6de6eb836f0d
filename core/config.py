import os
import json
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

# ==============================
# DEFAULTS
# ==============================
CONFIG_PATH = os.getenv("CONFIG_PATH", "config.json")
DEFAULT_CHECK_INTERVAL_MINUTES = 30
DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///subscribers.db"
DEFAULT_IMAGE_BASE_URL = "https://meteomonitoring.am/public/admin/ckfinder/userfiles/files/weather-"
DEFAULT_TIMEZONE = "Asia/Yerevan"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# ==============================
# PERFORMANCE & LIMITS
# ==============================
REQUEST_TIMEOUT = 30.0
MAX_CONCURRENT_SENDS = 20  # Telegram allows ~30 msgs/sec per bot


@dataclass(frozen=True)
class BotConfig:
    token: str
    check_interval_minutes: int = DEFAULT_CHECK_INTERVAL_MINUTES
    database_url: str = DEFAULT_DATABASE_URL
    image_base_url: str = DEFAULT_IMAGE_BASE_URL
    timezone: str = DEFAULT_TIMEZONE

    @property
    def check_interval_seconds(self) -> int:
        return self.check_interval_minutes * 60


def normalize_database_url(raw_url: str) -> str:
    """Force the async drivers so the engine never falls back to a sync DBAPI."""
    if raw_url.startswith("postgres://"):
        return raw_url.replace("postgres://", "postgresql+asyncpg://", 1)
    if raw_url.startswith("postgresql://"):
        return raw_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if raw_url.startswith("sqlite:///"):
        return raw_url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    return raw_url


def _read_config_file(path: str) -> dict:
    if not os.path.exists(path):
        return {}
    try:
        with open(path, encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, json.JSONDecodeError) as e:
        raise ValueError(f"❌ FATAL: could not read {path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"❌ FATAL: {path} must contain a JSON object.")
    return data


def _parse_interval(value) -> int:
    try:
        minutes = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"❌ FATAL: check interval must be an integer, got {value!r}.")
    if minutes <= 0:
        raise ValueError(f"❌ FATAL: check interval must be positive, got {minutes}.")
    return minutes


def load_config(path: str = None) -> BotConfig:
    """
    Build the runtime config from config.json plus environment overrides.
    Environment variables (or .env) win over the file.
    """
    file_data = _read_config_file(path or CONFIG_PATH)

    token = os.getenv("BOT_TOKEN") or file_data.get("token")
    if not token:
        raise ValueError("❌ FATAL: BOT_TOKEN is missing from Environment Variables and config.json.")

    raw_interval = os.getenv("CHECK_INTERVAL_MINUTES")
    if raw_interval is None:
        # checkTimeout is the legacy key
        raw_interval = file_data.get(
            "checkIntervalMinutes", file_data.get("checkTimeout", DEFAULT_CHECK_INTERVAL_MINUTES)
        )

    return BotConfig(
        token=token,
        check_interval_minutes=_parse_interval(raw_interval),
        database_url=normalize_database_url(
            os.getenv("DATABASE_URL") or file_data.get("databaseUrl") or DEFAULT_DATABASE_URL
        ),
        image_base_url=os.getenv("IMAGE_BASE_URL") or file_data.get("imageBaseUrl") or DEFAULT_IMAGE_BASE_URL,
        timezone=os.getenv("TIMEZONE") or file_data.get("timezone") or DEFAULT_TIMEZONE,
    )
