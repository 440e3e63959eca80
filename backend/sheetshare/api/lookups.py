"""Lookup list endpoints used by the catalog filter pickers.

Endpoints:
- ``GET /tags``             -- Paginated tag list
- ``GET /time-signatures``  -- Paginated time-signature list
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from sheetshare.api.notes import CamelModel, PageMetaOut, meta_to_out
from sheetshare.catalog import parse_page_params
from sheetshare.catalog.lookups import LookupPage, list_tags, list_time_signatures
from sheetshare.database import get_db

router = APIRouter(tags=["lookups"])


class LookupItemOut(CamelModel):
    id: int
    name: str


class LookupListResponse(CamelModel):
    data: list[LookupItemOut]
    meta: PageMetaOut


def _to_response(page: LookupPage) -> LookupListResponse:
    return LookupListResponse(
        data=[LookupItemOut(id=item.id, name=item.name) for item in page.data],
        meta=meta_to_out(page.meta),
    )


@router.get("/tags", response_model=LookupListResponse)
async def get_tags(
    request: Request,
    db: AsyncSession = Depends(get_db),  # noqa: B008
) -> LookupListResponse:
    """Retrieve a page of tags ordered by name."""
    page, limit = parse_page_params(request.query_params.get("page"), request.query_params.get("limit"))
    return _to_response(await list_tags(db, page, limit))


@router.get("/time-signatures", response_model=LookupListResponse)
async def get_time_signatures(
    request: Request,
    db: AsyncSession = Depends(get_db),  # noqa: B008
) -> LookupListResponse:
    """Retrieve a page of time signatures ordered by name."""
    page, limit = parse_page_params(request.query_params.get("page"), request.query_params.get("limit"))
    return _to_response(await list_time_signatures(db, page, limit))
