"""
Environment-backed settings.

Every knob is a plain env var. Blank or unparsable values fall back to the
default instead of failing at import time.
"""

from __future__ import annotations

import os

DEFAULT_VARIANT_FILE = "variant_summary.txt"
DEFAULT_INGEST_LOG_EVERY = 10_000
DEFAULT_CORS_ORIGINS = ("http://localhost:5173", "http://127.0.0.1:5173")


def env_str(name: str, default: str = "") -> str:
    return os.environ.get(name, "").strip() or default


def env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def variant_file() -> str:
    return env_str("VARIANT_FILE", DEFAULT_VARIANT_FILE)


def ingest_log_every() -> int:
    value = env_int("INGEST_LOG_EVERY", DEFAULT_INGEST_LOG_EVERY)
    return value if value > 0 else DEFAULT_INGEST_LOG_EVERY


def cors_origins() -> list[str]:
    raw = env_str("CORS_ORIGINS")
    if not raw:
        return list(DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def log_level() -> str:
    return env_str("LOG_LEVEL", "INFO").upper()
