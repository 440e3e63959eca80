"""Paginated lookup lists (tags, time signatures) for filter pickers."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sheetshare.catalog.errors import CatalogError
from sheetshare.catalog.planner import total_pages
from sheetshare.catalog.service import PageMeta
from sheetshare.models import Tag, TimeSignature

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LookupItem:
    id: int
    name: str


@dataclass(slots=True)
class LookupPage:
    data: list[LookupItem]
    meta: PageMeta


async def _list_named(session: AsyncSession, model, page: int, limit: int) -> LookupPage:
    offset = (page - 1) * limit
    rows = []
    try:
        count_result = await session.execute(select(func.count()).select_from(model))
        total_items = int(count_result.scalar_one() or 0)

        if offset < total_items:
            rows_result = await session.execute(
                select(model.id, model.name)
                .order_by(model.name.asc(), model.id.asc())
                .limit(limit)
                .offset(offset)
            )
            rows = rows_result.all()
    except SQLAlchemyError as exc:
        logger.exception("Failed to list %s", model.__tablename__)
        raise CatalogError(f"{model.__tablename__} listing failed") from exc

    return LookupPage(
        data=[LookupItem(id=row.id, name=row.name) for row in rows],
        meta=PageMeta(
            total_items=total_items,
            total_pages=total_pages(total_items, limit),
            current_page=page,
            limit=limit,
        ),
    )


async def list_tags(session: AsyncSession, page: int, limit: int) -> LookupPage:
    """Return a page of tags ordered by name."""
    return await _list_named(session, Tag, page, limit)


async def list_time_signatures(session: AsyncSession, page: int, limit: int) -> LookupPage:
    """Return a page of time signatures ordered by name."""
    return await _list_named(session, TimeSignature, page, limit)
