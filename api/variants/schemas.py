"""
Pydantic schemas for variant endpoints (response models).
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class Variant(BaseModel):
    id: int
    gene_name: str
    variant_id: str | None = None
    genomic_position: str
    variant_type: str
    clinical_significance: str
    details: str


class PaginationInfo(BaseModel):
    currentPage: int
    limit: int
    totalItems: int
    totalPages: int


class VariantListResponse(BaseModel):
    message: str
    data: list[Variant]
    pagination: PaginationInfo


class VariantResponse(BaseModel):
    message: str
    data: Variant


class CountBucket(BaseModel):
    name: str
    value: int = Field(..., ge=0)


class VariantSummaryResponse(BaseModel):
    significanceCounts: list[CountBucket]
    typeCounts: list[CountBucket]
