from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar

from sqlalchemy import Select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    items: list[T] = field(default_factory=list)
    next_cursor: Optional[Any] = None


async def paginate(
    db: AsyncSession,
    stmt: Select,
    *,
    key: InstrumentedAttribute,
    limit: int,
    cursor: Optional[Any] = None,
) -> Page:
    """
    Cursor pagination over ``key``.

    Fetches ``limit + 1`` rows starting at ``cursor`` (inclusive). When the
    extra row comes back it is popped and its key becomes ``next_cursor``, so
    the next page starts exactly at that row. No extra row means last page.
    """
    if cursor is not None:
        stmt = stmt.where(key >= cursor)

    rows = list(
        (await db.execute(stmt.order_by(key).limit(limit + 1))).scalars().all()
    )

    next_cursor = None
    if len(rows) > limit:
        next_cursor = getattr(rows.pop(), key.key)

    return Page(items=rows, next_cursor=next_cursor)
