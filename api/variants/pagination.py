"""
Pagination parsing for list endpoints.

Query values arrive as raw strings so that junk input falls back to the
defaults instead of producing a 422.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 25
MAX_LIMIT = 100
# OFFSET is bound as a Postgres bigint.
MAX_OFFSET = 2**63 - 1


@dataclass(frozen=True)
class Pagination:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def _positive_int(raw: str | None) -> int | None:
    try:
        value = int((raw or "").strip())
    except ValueError:
        return None
    return value if value >= 1 else None


def parse_pagination(page: str | None, limit: str | None) -> Pagination:
    """
    page: invalid or < 1 -> 1
    limit: invalid or < 1 -> 25, then capped at 100
    page is then capped so the offset stays within MAX_OFFSET
    """
    parsed_limit = min(_positive_int(limit) or DEFAULT_LIMIT, MAX_LIMIT)
    parsed_page = min(_positive_int(page) or DEFAULT_PAGE, MAX_OFFSET // parsed_limit + 1)
    return Pagination(page=parsed_page, limit=parsed_limit)


def total_pages(total_items: int, limit: int) -> int:
    return math.ceil(total_items / limit)
