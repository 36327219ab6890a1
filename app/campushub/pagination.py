from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Generic, TypeVar

from sqlalchemy import or_
from sqlalchemy.orm import Query

from app.campushub.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from app.campushub.errors import ValidationError
from app.campushub.validation import parse_date

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    page: int
    limit: int
    count: int

    @property
    def pages(self) -> int:
        return math.ceil(self.count / self.limit) if self.count else 0

    def pagination(self) -> dict:
        return {"current": self.page, "total": self.pages, "count": self.count}


def parse_page_args(args: Any, *, default_limit: int = DEFAULT_PAGE_SIZE) -> tuple[int, int]:
    """1-based page (bad values -> 1) and limit clamped to [1, MAX_PAGE_SIZE]."""
    page = _int_or(args.get("page"), 1)
    if page < 1:
        page = 1
    limit = _int_or(args.get("limit"), default_limit)
    limit = max(1, min(limit, MAX_PAGE_SIZE))
    return page, limit


def _int_or(raw: Any, default: int) -> int:
    if raw is None or str(raw).strip() == "":
        return default
    try:
        return int(str(raw).strip())
    except ValueError:
        return default


def parse_date_arg(raw: str | None, name: str) -> date | None:
    if not (raw or "").strip():
        return None
    parsed = parse_date(raw)
    if parsed is None:
        raise ValidationError(f"{name} must be a date in YYYY-MM-DD format")
    return parsed


def apply_search(q: Query, term: str | None, first_col, second_col) -> Query:
    """Case-insensitive substring match over two columns, OR-ed."""
    term = (term or "").strip()
    if not term:
        return q
    like = f"%{_escape_like(term)}%"
    return q.filter(or_(first_col.ilike(like, escape="\\"), second_col.ilike(like, escape="\\")))


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def apply_date_range(q: Query, col, start: date | None, end: date | None) -> Query:
    # inclusive on both bounds
    if start:
        q = q.filter(col >= start)
    if end:
        q = q.filter(col <= end)
    return q


def apply_equals(q: Query, col, value: str | None) -> Query:
    # Unknown enum values simply match nothing.
    value = (value or "").strip()
    if not value:
        return q
    return q.filter(col == value)


def paginate(q: Query, page: int, limit: int) -> Page:
    """Count, then fetch one page. The query must already be ordered."""
    count = q.order_by(None).count()
    offset = (page - 1) * limit
    # Past the last row: no fetch, so an arbitrarily large page never reaches the DB as an OFFSET.
    items = q.offset(offset).limit(limit).all() if offset < count else []
    return Page(items=items, page=page, limit=limit, count=count)
