"""
Variant read API endpoints.
"""

from __future__ import annotations

import asyncpg
from fastapi import APIRouter, Depends, Query

from core import db

from . import schemas, service

router = APIRouter(prefix="/api/variants")


@router.get("", response_model=schemas.VariantListResponse)
async def list_variants(
    page: str | None = Query(default=None),
    limit: str | None = Query(default=None),
    search: str | None = Query(default=None),
    variant_type: str | None = Query(default=None, alias="type"),
    significance: str | None = Query(default=None),
    pool: asyncpg.Pool = Depends(db.pool),
) -> dict:
    """
    Paginated list. `search` matches gene name or external id (substring,
    case-insensitive); `type` and `significance` are exact filters.
    """
    return await service.list_variants(
        pool,
        page=page,
        limit=limit,
        search=search,
        variant_type=variant_type,
        significance=significance,
    )


# Registered before "/{variant_pk}" so "summary" is not parsed as an id.
@router.get("/summary", response_model=schemas.VariantSummaryResponse)
async def variant_summary(pool: asyncpg.Pool = Depends(db.pool)) -> dict:
    return await service.summary(pool)


@router.get("/{variant_pk}", response_model=schemas.VariantResponse)
async def get_variant(variant_pk: str, pool: asyncpg.Pool = Depends(db.pool)) -> dict:
    return await service.get_variant(pool, variant_pk)
