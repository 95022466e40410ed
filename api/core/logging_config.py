"""
Process-wide logging setup shared by the API and the ingestion CLI.
"""

from __future__ import annotations

import logging

from . import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str | None = None) -> None:
    resolved = level or settings.log_level()
    logging.basicConfig(level=getattr(logging, resolved, logging.INFO), format=LOG_FORMAT)
    # asyncpg is chatty at DEBUG; keep our own debug output readable.
    logging.getLogger("asyncpg").setLevel(logging.WARNING)
