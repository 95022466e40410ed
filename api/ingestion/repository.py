"""
Ingestion persistence.
This module is where ingestion-related SQL lives.
"""

from __future__ import annotations

from core import db


async def insert_variant(
    conn: db.Executor,
    *,
    gene_name: str,
    variant_id: str | None,
    genomic_position: str,
    variant_type: str,
    clinical_significance: str,
    details: str,
) -> bool:
    """
    Insert one normalized variant.

    Duplicate external ids are skipped by the unique constraint
    (first write wins). Returns True when a row was written.
    """
    status = await db.execute(
        conn,
        """
        INSERT INTO variants (
          gene_name,
          variant_id,
          genomic_position,
          variant_type,
          clinical_significance,
          details
        )
        VALUES ($1, $2, $3, $4, $5, $6)
        ON CONFLICT (variant_id) DO NOTHING
        """,
        gene_name,
        variant_id,
        genomic_position,
        variant_type,
        clinical_significance,
        details,
    )
    # asyncpg returns the command tag: "INSERT <oid> <rows>".
    return status.rsplit(" ", 1)[-1] == "1"
