"""
Variant read queries (raw SQL).

The API never writes to `variants`; rows come from the ingestion pipeline.
"""

from __future__ import annotations

from typing import Any

from core import db

VARIANT_COLUMNS = """
  id,
  gene_name,
  variant_id,
  genomic_position,
  variant_type,
  clinical_significance,
  details
"""


def _like_pattern(text: str) -> str:
    """
    Substring pattern for ILIKE with the user's own wildcards escaped.
    """
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def build_filters(
    *,
    search: str | None = None,
    variant_type: str | None = None,
    significance: str | None = None,
) -> tuple[str, list[Any]]:
    """
    Return (where_clause, args) shared by the page query and the count query.

    Blank values are treated as "no filter". The clause is "" when nothing
    applies, otherwise "WHERE ..." with placeholders starting at $1.
    """
    clauses: list[str] = []
    args: list[Any] = []

    search = (search or "").strip()
    if search:
        args.append(_like_pattern(search))
        n = len(args)
        clauses.append(f"(gene_name ILIKE ${n} ESCAPE '\\' OR variant_id ILIKE ${n} ESCAPE '\\')")

    variant_type = (variant_type or "").strip()
    if variant_type:
        args.append(variant_type)
        clauses.append(f"variant_type = ${len(args)}")

    significance = (significance or "").strip()
    if significance:
        args.append(significance)
        clauses.append(f"clinical_significance = ${len(args)}")

    if not clauses:
        return "", args
    return "WHERE " + " AND ".join(clauses), args


async def list_variants(
    executor: db.Executor,
    *,
    where: str,
    args: list[Any],
    limit: int,
    offset: int,
) -> list[dict[str, Any]]:
    n = len(args)
    return await db.fetch_all(
        executor,
        f"""
        SELECT {VARIANT_COLUMNS}
        FROM variants
        {where}
        ORDER BY id ASC
        LIMIT ${n + 1}
        OFFSET ${n + 2}
        """,
        *args,
        limit,
        offset,
    )


async def count_variants(executor: db.Executor, *, where: str, args: list[Any]) -> int:
    value = await db.fetch_value(
        executor,
        f"""
        SELECT count(*)
        FROM variants
        {where}
        """,
        *args,
    )
    return int(value or 0)


async def get_variant(executor: db.Executor, variant_pk: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        executor,
        f"""
        SELECT {VARIANT_COLUMNS}
        FROM variants
        WHERE id = $1
        """,
        variant_pk,
    )


async def significance_counts(executor: db.Executor) -> list[dict[str, Any]]:
    return await db.fetch_all(
        executor,
        """
        SELECT clinical_significance AS name, count(*)::int AS value
        FROM variants
        WHERE clinical_significance IS NOT NULL
        GROUP BY clinical_significance
        ORDER BY value DESC, name ASC
        """,
    )


async def type_counts(executor: db.Executor) -> list[dict[str, Any]]:
    return await db.fetch_all(
        executor,
        """
        SELECT variant_type AS name, count(*)::int AS value
        FROM variants
        WHERE variant_type IS NOT NULL
        GROUP BY variant_type
        ORDER BY value DESC, name ASC
        """,
    )
