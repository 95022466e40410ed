"""
Command-line entry point: `python -m ingestion [PATH]`.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from core import settings
from core.logging_config import configure_logging

from . import service

logger = logging.getLogger("ingestion")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m ingestion",
        description="Load a ClinVar variant_summary file into the variants table.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=settings.variant_file(),
        help="tab-delimited input (.txt or .txt.gz); defaults to $VARIANT_FILE",
    )
    parser.add_argument("--log-level", default=None, help="overrides $LOG_LEVEL")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging(args.log_level.upper() if args.log_level else None)

    try:
        asyncio.run(service.run(args.path))
    except Exception:
        logger.exception("ingest_failed path=%s", args.path)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
