from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Load project-level .env regardless of current working directory.
_DOTENV_PATH = Path(__file__).resolve().parents[2] / ".env"
load_dotenv(_DOTENV_PATH)


def _env_int(name: str, default: int, *, minimum: int = 1) -> int:
    raw = str(os.getenv(name, "")).strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return max(minimum, value)


def _env_list(name: str, default: str) -> list[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


# HTTP payload limits
MAX_ROWS = _env_int("SHEETCHARTS_MAX_ROWS", 10000)
MAX_COLUMNS = _env_int("SHEETCHARTS_MAX_COLUMNS", 200)

# Logging
LOG_LEVEL = str(os.getenv("SHEETCHARTS_LOG_LEVEL", "INFO")).strip().upper() or "INFO"

# CORS
CORS_ALLOW_ORIGINS = _env_list(
    "CORS_ALLOW_ORIGINS",
    "http://localhost:3000,http://127.0.0.1:3000",
)
