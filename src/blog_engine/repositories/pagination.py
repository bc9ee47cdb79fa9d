"""Page-number pagination shared by the list operations of every store."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from blog_engine.core.errors import InvalidArgument

T = TypeVar("T")

__all__ = ["Page", "paginate", "total_pages_for"]


@dataclass
class Page(Generic[T]):
    """One page of results plus the totals needed to render pagination."""

    items: list[T] = field(default_factory=list)
    total_pages: int = 0
    page: int = 1
    total_count: int = 0


def total_pages_for(total_count: int, page_size: int) -> int:
    """Return ceil(total_count / page_size); zero when there is nothing to show."""
    if total_count <= 0:
        return 0
    return math.ceil(total_count / page_size)


def _check_bounds(page: int, page_size: int) -> None:
    if page < 1:
        raise InvalidArgument("page must be >= 1")
    if page_size < 1:
        raise InvalidArgument("page_size must be >= 1")


def paginate(
    session: Session,
    stmt: Select[Any],
    page: int,
    page_size: int,
    *,
    count_stmt: Select[Any] | None = None,
) -> Page[Any]:
    """Execute `stmt` for the 1-indexed `page`.

    Args:
        session: Active database session.
        stmt: Fully filtered and ordered select statement.
        page: 1-indexed page number as seen by API clients.
        page_size: Maximum number of items per page.
        count_stmt: Optional statement whose row count is the total; defaults to `stmt`.
    """
    _check_bounds(page, page_size)

    source = count_stmt if count_stmt is not None else stmt
    total_count = session.execute(
        select(func.count()).select_from(source.order_by(None).subquery())
    ).scalar_one()

    # Translate the 1-indexed API page into an offset.
    paged = stmt.limit(page_size).offset((page - 1) * page_size)
    items = list(session.execute(paged).scalars())

    return Page(
        items=items,
        total_pages=total_pages_for(total_count, page_size),
        page=page,
        total_count=int(total_count),
    )
