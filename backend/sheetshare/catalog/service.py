"""Catalog read pipeline: count, id page, hydrate.

The three store round-trips run sequentially and are not wrapped in a
single transaction. A note deleted between the id page and the hydrate
query is missing from the page rather than failing the request.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from dataclasses import dataclass
from typing import TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sheetshare.catalog.errors import CatalogError, NoteNotFoundError
from sheetshare.catalog.filters import ListingFilters
from sheetshare.catalog.hydrator import HydratedNote, fold_rows, hydrate_statement
from sheetshare.catalog.planner import ListingPlan, total_pages

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(slots=True)
class PageMeta:
    total_items: int
    total_pages: int
    current_page: int
    limit: int


@dataclass(slots=True)
class NotePage:
    data: list[HydratedNote]
    meta: PageMeta


class NoteCatalog:
    """Read-only access to the note catalog for one request.

    Args:
        session: Request-scoped database session.
        timeout: Optional deadline in seconds for a whole call. On expiry all
            outstanding store calls are cancelled and :class:`CatalogError`
            is raised.
    """

    def __init__(self, session: AsyncSession, timeout: float | None = None):
        self._session = session
        self._timeout = timeout

    async def _guarded(self, operation: str, work: Awaitable[T]) -> T:
        try:
            if self._timeout is None:
                return await work
            return await asyncio.wait_for(work, timeout=self._timeout)
        except TimeoutError as exc:
            logger.error("Catalog %s exceeded %.2fs deadline", operation, self._timeout)
            raise CatalogError(f"{operation} timed out") from exc
        except SQLAlchemyError as exc:
            logger.exception("Catalog %s failed", operation)
            raise CatalogError(f"{operation} failed") from exc

    async def list_notes(self, filters: ListingFilters, page: int, limit: int) -> NotePage:
        """Return one ranked page of notes and its paging metadata."""
        return await self._guarded("listing", self._list_notes(ListingPlan(filters, page, limit)))

    async def get_note(self, note_id: int) -> HydratedNote:
        """Return a single hydrated note.

        Raises:
            NoteNotFoundError: If no note has this id.
        """
        notes = await self._guarded("lookup", self._hydrate([note_id]))
        if not notes:
            raise NoteNotFoundError(note_id)
        return notes[0]

    async def _list_notes(self, plan: ListingPlan) -> NotePage:
        count_result = await self._session.execute(plan.count_statement())
        total_items = int(count_result.scalar_one() or 0)
        meta = PageMeta(
            total_items=total_items,
            total_pages=total_pages(total_items, plan.limit),
            current_page=plan.page,
            limit=plan.limit,
        )
        # Past-the-end pages never reach the store as an OFFSET.
        if plan.offset >= total_items:
            return NotePage(data=[], meta=meta)

        ids_result = await self._session.execute(plan.page_statement())
        note_ids = [row[0] for row in ids_result.all()]

        notes = await self._hydrate(note_ids) if note_ids else []
        logger.debug(
            "Listed %d/%d notes (page=%d, limit=%d)", len(notes), total_items, plan.page, plan.limit
        )

        return NotePage(data=notes, meta=meta)

    async def _hydrate(self, note_ids: list[int]) -> list[HydratedNote]:
        result = await self._session.execute(hydrate_statement(note_ids))
        return fold_rows(result.all(), note_ids)
