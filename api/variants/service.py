"""
Variant query service.

Sits between the router and the SQL in `repository`:
- independent reads (page + count, the two summary projections) run
  concurrently on separate pooled connections
- storage failures are logged here and turned into an opaque 500
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Any

import asyncpg
from fastapi import HTTPException

from core import db

from . import pagination, repository

# Largest value a bigserial id can hold.
MAX_VARIANT_PK = 2**63 - 1
_PK_PATTERN = re.compile(r"-?[0-9]+")

logger = logging.getLogger(__name__)


def parse_variant_pk(raw: str) -> int:
    """
    Parse the path id. Only ASCII digits with an optional leading "-" are
    accepted; anything else is a client error.
    """
    if not _PK_PATTERN.fullmatch(raw):
        raise HTTPException(status_code=400, detail="Variant id must be an integer.")
    # Past 19 digits the id is outside bigint; int() also caps digit count.
    if len(raw.lstrip("-")) > 19:
        raise HTTPException(status_code=404, detail="Variant not found.")
    return int(raw)


async def list_variants(
    pool: asyncpg.Pool,
    *,
    page: str | None = None,
    limit: str | None = None,
    search: str | None = None,
    variant_type: str | None = None,
    significance: str | None = None,
) -> dict[str, Any]:
    paging = pagination.parse_pagination(page, limit)
    where, args = repository.build_filters(
        search=search,
        variant_type=variant_type,
        significance=significance,
    )

    try:
        rows, total = await asyncio.gather(
            repository.list_variants(pool, where=where, args=args, limit=paging.limit, offset=paging.offset),
            repository.count_variants(pool, where=where, args=args),
        )
    except db.DatabaseError as exc:
        logger.exception("list_variants_failed page=%s limit=%s", paging.page, paging.limit)
        raise HTTPException(status_code=500, detail="Error fetching variants.") from exc

    return {
        "message": "Variants fetched successfully.",
        "data": rows,
        "pagination": {
            "currentPage": paging.page,
            "limit": paging.limit,
            "totalItems": total,
            "totalPages": pagination.total_pages(total, paging.limit),
        },
    }


async def get_variant(pool: asyncpg.Pool, raw_id: str) -> dict[str, Any]:
    variant_pk = parse_variant_pk(raw_id)
    if not 1 <= variant_pk <= MAX_VARIANT_PK:
        raise HTTPException(status_code=404, detail="Variant not found.")

    try:
        row = await repository.get_variant(pool, variant_pk)
    except db.DatabaseError as exc:
        logger.exception("get_variant_failed id=%s", variant_pk)
        raise HTTPException(status_code=500, detail="Error fetching variant.") from exc

    if row is None:
        raise HTTPException(status_code=404, detail="Variant not found.")
    return {"message": "Variant fetched successfully.", "data": row}


async def summary(pool: asyncpg.Pool) -> dict[str, Any]:
    try:
        significance_counts, type_counts = await asyncio.gather(
            repository.significance_counts(pool),
            repository.type_counts(pool),
        )
    except db.DatabaseError as exc:
        logger.exception("variant_summary_failed")
        raise HTTPException(status_code=500, detail="Error fetching variant summary.") from exc

    return {"significanceCounts": significance_counts, "typeCounts": type_counts}
