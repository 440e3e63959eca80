# @TASK Songs catalog API endpoints

"""Note catalog API endpoints.

Endpoints:
- ``GET /songs``                        -- Filtered, ranked, paginated note list
- ``GET /songs/{note_id}``              -- Single note detail
- ``GET /composers/{composer_id}/songs`` -- Note list restricted to one owner

Filter parameters accept comma lists, JSON-array strings and repeated
values; every alias of a category is merged.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from sqlalchemy.ext.asyncio import AsyncSession

from sheetshare.catalog import (
    HydratedNote,
    NoteCatalog,
    NotePage,
    PageMeta,
    parse_listing_filters,
    parse_page_params,
)
from sheetshare.catalog.filters import as_id
from sheetshare.config import get_settings
from sheetshare.database import get_db
from sheetshare.utils.datetime_utils import datetime_to_iso

logger = logging.getLogger(__name__)

router = APIRouter(tags=["songs"])

TAG_PARAMS = ("tags", "tagsIds")
TIME_SIGNATURE_PARAMS = ("time_signature", "timeSignatures", "timeSignaturesIds")
SIZE_PARAMS = ("sizes", "size")


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class CamelModel(BaseModel):
    """Base schema serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TagOut(CamelModel):
    id: int
    name: str


class SizeOut(CamelModel):
    id: int
    name: str


class AuthorOut(CamelModel):
    id: int
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None


class NoteOut(CamelModel):
    """Hydrated note as exposed to clients."""

    id: int
    title: str
    owner_id: int | None = None
    pdf_url: str | None = None
    audio_url: str | None = None
    cover_image_url: str | None = None
    description: str | None = None
    difficulty: str | None = None
    is_public: bool | None = None
    created_at: str | None = None
    views: int = 0
    size: SizeOut | None = None
    author: AuthorOut | None = None
    tags: list[TagOut] = []


class PageMetaOut(CamelModel):
    total_items: int
    total_pages: int
    current_page: int
    limit: int


class NoteListResponse(CamelModel):
    data: list[NoteOut]
    meta: PageMetaOut


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _note_to_out(note: HydratedNote) -> NoteOut:
    return NoteOut(
        id=note.id,
        title=note.title,
        owner_id=note.owner_id,
        pdf_url=note.pdf_url,
        audio_url=note.audio_url,
        cover_image_url=note.cover_image_url,
        description=note.description,
        difficulty=note.difficulty,
        is_public=note.is_public,
        created_at=datetime_to_iso(note.created_at),
        views=note.views,
        size=SizeOut(id=note.size.id, name=note.size.name) if note.size else None,
        author=(
            AuthorOut(
                id=note.author.id,
                first_name=note.author.first_name,
                last_name=note.author.last_name,
                email=note.author.email,
            )
            if note.author
            else None
        ),
        tags=[TagOut(id=tag.id, name=tag.name) for tag in note.tags],
    )


def meta_to_out(meta: PageMeta) -> PageMetaOut:
    return PageMetaOut(
        total_items=meta.total_items,
        total_pages=meta.total_pages,
        current_page=meta.current_page,
        limit=meta.limit,
    )


def _page_to_response(page: NotePage) -> NoteListResponse:
    return NoteListResponse(
        data=[_note_to_out(note) for note in page.data],
        meta=meta_to_out(page.meta),
    )


def _collect(request: Request, names: tuple[str, ...]) -> list[str]:
    """Gather every value supplied under any of *names*."""
    values: list[str] = []
    for name in names:
        values.extend(request.query_params.getlist(name))
    return values


def _parse_path_id(raw: str) -> int:
    value = as_id(raw.strip())
    if value is None or value <= 0:
        raise HTTPException(status_code=400, detail="Invalid id")
    return value


def get_catalog(db: AsyncSession = Depends(get_db)) -> NoteCatalog:  # noqa: B008
    """Create a NoteCatalog bound to the request session.

    Extracted as a dependency so tests can override it.
    """
    return NoteCatalog(db, timeout=get_settings().CATALOG_QUERY_TIMEOUT_SECONDS)


async def _list(request: Request, catalog: NoteCatalog, owner_id: int | None = None) -> NoteListResponse:
    params = request.query_params
    page, limit = parse_page_params(params.get("page"), params.get("limit"))
    filters = parse_listing_filters(
        tags=_collect(request, TAG_PARAMS),
        time_signatures=_collect(request, TIME_SIGNATURE_PARAMS),
        sizes=_collect(request, SIZE_PARAMS),
        query=params.get("query"),
        owner_id=owner_id,
    )
    result = await catalog.list_notes(filters, page, limit)
    return _page_to_response(result)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.get("/songs", response_model=NoteListResponse)
async def list_songs(
    request: Request,
    catalog: NoteCatalog = Depends(get_catalog),  # noqa: B008
) -> NoteListResponse:
    """Retrieve a filtered, ranked page of notes.

    Query parameters:
        page: Page number (default 1).
        limit: Page size (default 10, max 50).
        tags / tagsIds: Tag ids and/or names (OR within the category).
        time_signature / timeSignatures / timeSignaturesIds: Time-signature ids and/or names.
        sizes / size: Time-signature names.
        query: Case-insensitive title substring.

    Notes matching more of the requested tags come first; within that,
    newest first.
    """
    return await _list(request, catalog)


@router.get("/songs/{note_id}", response_model=NoteOut)
async def get_song(
    note_id: str,
    catalog: NoteCatalog = Depends(get_catalog),  # noqa: B008
) -> NoteOut:
    """Retrieve a single note with its author, time signature and tags."""
    note = await catalog.get_note(_parse_path_id(note_id))
    return _note_to_out(note)


@router.get("/composers/{composer_id}/songs", response_model=NoteListResponse)
async def list_composer_songs(
    composer_id: str,
    request: Request,
    catalog: NoteCatalog = Depends(get_catalog),  # noqa: B008
) -> NoteListResponse:
    """Retrieve a page of notes owned by one composer.

    Accepts the same filter and paging parameters as ``GET /songs``.
    """
    return await _list(request, catalog, owner_id=_parse_path_id(composer_id))
