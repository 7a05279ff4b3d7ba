from __future__ import annotations

import os
from pathlib import Path


def _default_data_file() -> str:
    here = Path(__file__).resolve().parent.parent
    return str(here / "storage" / "fridge_data.json")


def _env_int(name: str, default: int, maximum: int | None = None) -> int:
    raw = os.getenv(name, "").strip()
    try:
        value = int(raw) if raw else default
    except ValueError:
        value = default
    if maximum is not None:
        value = min(value, maximum)
    return value


DATA_FILE = os.getenv("FRIDGE_DATA_FILE", _default_data_file())
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
DEFAULT_USER_ID = "demo-user"
DEFAULT_LOCALE = os.getenv("DEFAULT_LOCALE", "ko")

MAX_TASTE_RESULTS = 5
# May be lowered from the environment, never raised past MAX_TASTE_RESULTS.
TASTE_RESULT_LIMIT = _env_int("TASTE_RESULT_LIMIT", MAX_TASTE_RESULTS, maximum=MAX_TASTE_RESULTS)
EXPIRING_SOON_DAYS = _env_int("EXPIRING_SOON_DAYS", 3)
DEFAULT_MAX_RESULTS = _env_int("DEFAULT_MAX_RESULTS", 20)


def get_cors_allow_origins() -> list[str]:
    raw = os.getenv("CORS_ALLOW_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").strip()
    if not raw:
        return ["*"]
    return [entry.strip() for entry in raw.split(",") if entry.strip()]
