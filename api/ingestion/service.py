"""
Variant ingestion "service layer".

Turns the tab-delimited ClinVar summary into rows of the `variants` table:
- stream rows from the file (`reader.iter_rows`)
- classify free-text type/significance into the controlled vocabularies
- conflict-skip insert each normalized row

Flow control: rows are pulled from a lazy iterator and handled strictly one
at a time. The next row is not read until the current row's insert has
finished, so memory stays flat and the run holds exactly one connection
with at most one statement in flight.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import asyncpg

from core import db, settings

from . import classification, reader, repository

NO_PHENOTYPE_PLACEHOLDER = "No phenotype listed."

MISSING_EXTERNAL_IDS = {""}

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VariantRecord:
    gene_name: str
    variant_id: str | None
    genomic_position: str
    variant_type: str
    clinical_significance: str
    details: str


@dataclass(frozen=True)
class IngestStats:
    rows_seen: int
    inserted: int
    duplicates: int
    skipped: int
    failed: int


def _clean(value: str | None) -> str:
    return (value or "").strip()


def _normalize(row: reader.Row) -> tuple[VariantRecord | None, str]:
    gene_name = _clean(row.get(reader.GENE_SYMBOL))
    raw_significance = _clean(row.get(reader.CLINICAL_SIGNIFICANCE))
    if not gene_name or not raw_significance:
        return None, "missing_gene_or_significance"

    variant_type = classification.classify_variant_type(row.get(reader.TYPE))
    if variant_type is None:
        return None, "unmapped_type"

    clinical_significance = classification.classify_clinical_significance(raw_significance)
    if clinical_significance is None:
        return None, "unmapped_significance"

    genomic_position = _clean(row.get(reader.POSITION))
    if not genomic_position:
        return None, "missing_position"

    external_id = _clean(row.get(reader.EXTERNAL_ID))
    record = VariantRecord(
        gene_name=gene_name,
        variant_id=None if external_id in MISSING_EXTERNAL_IDS else external_id,
        genomic_position=genomic_position,
        variant_type=variant_type,
        clinical_significance=clinical_significance,
        details=_clean(row.get(reader.PHENOTYPES)) or NO_PHENOTYPE_PLACEHOLDER,
    )
    return record, ""


def normalize_row(row: reader.Row) -> VariantRecord | None:
    """
    Map one raw file row to a persistable record, or None when the row
    cannot be fully classified.
    """
    record, _reason = _normalize(row)
    return record


async def load_variants(path: str | Path, *, pool: asyncpg.Pool) -> IngestStats:
    """
    Stream `path` into the `variants` table.

    Bad rows and failed inserts are logged and counted; only file-level
    problems (missing file, bad header) and pool failures abort the run.
    """
    log_every = settings.ingest_log_every()
    rows_seen = inserted = duplicates = skipped = failed = 0

    async with pool.acquire() as conn:  # type: asyncpg.Connection
        for row in reader.iter_rows(path):
            rows_seen += 1

            record, reason = _normalize(row)
            if record is None:
                skipped += 1
                logger.debug("row_skipped row=%s reason=%s", rows_seen, reason)
            else:
                try:
                    written = await repository.insert_variant(
                        conn,
                        gene_name=record.gene_name,
                        variant_id=record.variant_id,
                        genomic_position=record.genomic_position,
                        variant_type=record.variant_type,
                        clinical_significance=record.clinical_significance,
                        details=record.details,
                    )
                except db.DatabaseError:
                    failed += 1
                    logger.exception("row_insert_failed row=%s variant_id=%s", rows_seen, record.variant_id)
                else:
                    if written:
                        inserted += 1
                    else:
                        duplicates += 1

            if rows_seen % log_every == 0:
                logger.info(
                    "ingest_progress rows_seen=%s inserted=%s duplicates=%s skipped=%s failed=%s",
                    rows_seen,
                    inserted,
                    duplicates,
                    skipped,
                    failed,
                )

    return IngestStats(
        rows_seen=rows_seen,
        inserted=inserted,
        duplicates=duplicates,
        skipped=skipped,
        failed=failed,
    )


async def run(path: str | Path) -> IngestStats:
    """
    One full ingestion run with its own pool, closed on every exit path.
    """
    pool = await db.init_pool()
    try:
        stats = await load_variants(path, pool=pool)
    finally:
        await db.close_pool()

    logger.info(
        "ingest_complete path=%s rows_seen=%s inserted=%s duplicates=%s skipped=%s failed=%s",
        path,
        stats.rows_seen,
        stats.inserted,
        stats.duplicates,
        stats.skipped,
        stats.failed,
    )
    return stats
