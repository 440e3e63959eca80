"""Turn an ordered id page into fully-populated notes.

The hydrate query outer-joins author, time signature and tags, so it returns
one row per (note, tag). Rows are folded back into one object per note and
then re-sorted to the id order the planner produced; ``IN (...)`` gives no
ordering guarantee.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from sqlalchemy import Select, select

from sheetshare.models import Note, NoteTag, Tag, TimeSignature, User


@dataclass(slots=True)
class TagRef:
    id: int
    name: str


@dataclass(slots=True)
class SizeRef:
    id: int
    name: str


@dataclass(slots=True)
class AuthorRef:
    id: int
    first_name: str | None
    last_name: str | None
    email: str | None


@dataclass(slots=True)
class HydratedNote:
    id: int
    title: str
    owner_id: int | None
    pdf_url: str | None
    audio_url: str | None
    cover_image_url: str | None
    description: str | None
    difficulty: str | None
    is_public: bool | None
    created_at: datetime | None
    views: int
    size: SizeRef | None = None
    author: AuthorRef | None = None
    tags: list[TagRef] = field(default_factory=list)


def hydrate_statement(note_ids: Sequence[int]) -> Select:
    """Select note columns plus author, time signature and tag columns."""
    return (
        select(
            Note.id,
            Note.title,
            Note.user_id,
            Note.pdf_url,
            Note.audio_url,
            Note.cover_image_url,
            Note.description,
            Note.difficulty,
            Note.is_public,
            Note.created_at,
            Note.views,
            TimeSignature.id.label("size_id"),
            TimeSignature.name.label("size_name"),
            User.id.label("author_id"),
            User.first_name.label("author_first_name"),
            User.last_name.label("author_last_name"),
            User.email.label("author_email"),
            Tag.id.label("tag_id"),
            Tag.name.label("tag_name"),
        )
        .select_from(Note)
        .outerjoin(User, User.id == Note.user_id)
        .outerjoin(TimeSignature, TimeSignature.id == Note.time_signature_id)
        .outerjoin(NoteTag, NoteTag.note_id == Note.id)
        .outerjoin(Tag, Tag.id == NoteTag.tag_id)
        .where(Note.id.in_(note_ids))
        .order_by(Note.id, Tag.id)
    )


def _note_from_row(row: Any) -> HydratedNote:
    size = SizeRef(id=row.size_id, name=row.size_name) if row.size_id is not None else None
    author = None
    if row.author_id is not None:
        author = AuthorRef(
            id=row.author_id,
            first_name=row.author_first_name,
            last_name=row.author_last_name,
            email=row.author_email,
        )
    return HydratedNote(
        id=row.id,
        title=row.title or "",
        owner_id=row.user_id,
        pdf_url=row.pdf_url,
        audio_url=row.audio_url,
        cover_image_url=row.cover_image_url,
        description=row.description,
        difficulty=row.difficulty,
        is_public=row.is_public,
        created_at=row.created_at,
        views=row.views or 0,
        size=size,
        author=author,
    )


def fold_rows(rows: Iterable[Any], ordered_ids: Sequence[int]) -> list[HydratedNote]:
    """Fold fan-out rows into notes and restore the order of *ordered_ids*.

    Ids without any row (deleted since the id page was selected) are absent
    from the result. Each note's tags keep first-seen order with no id repeated.
    """
    notes: dict[int, HydratedNote] = {}
    seen_tags: dict[int, set[int]] = {}

    for row in rows:
        note = notes.get(row.id)
        if note is None:
            note = notes[row.id] = _note_from_row(row)
            seen_tags[row.id] = set()

        if row.tag_id is not None and row.tag_id not in seen_tags[row.id]:
            seen_tags[row.id].add(row.tag_id)
            note.tags.append(TagRef(id=row.tag_id, name=row.tag_name))

    position = {note_id: index for index, note_id in enumerate(ordered_ids)}
    return sorted(
        (note for note in notes.values() if note.id in position),
        key=lambda note: position[note.id],
    )
