"""Count and id-page statements for the note listing.

Filtering is expressed as an ordered list of optional predicate terms, one
per active category (free text, time signature, tag, owner). The terms are
AND-ed; within a category, id matches and name matches are OR-ed.

Tag filtering joins ``note_tags`` and fans out to one row per matching
association. The count therefore uses ``COUNT(DISTINCT notes.id)`` and the
id page groups by note, which also yields the per-note match count used
for ranking.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from sqlalchemy import ColumnElement, Select, and_, distinct, func, or_, select

from sheetshare.catalog.filters import ListingFilters
from sheetshare.models import Note, NoteTag, Tag, TimeSignature


def contains_pattern(value: str) -> str:
    """Build a LIKE pattern matching *value* as a literal substring."""
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _name_contains(column, names: tuple[str, ...]) -> list[ColumnElement[bool]]:
    return [column.ilike(contains_pattern(name), escape="\\") for name in names]


def total_pages(total_items: int, limit: int) -> int:
    """Number of pages needed for *total_items*; zero when there is nothing."""
    if total_items <= 0:
        return 0
    return math.ceil(total_items / limit)


@dataclass(frozen=True, slots=True)
class ListingPlan:
    """Statements for one listing request."""

    filters: ListingFilters
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    # ------------------------------------------------------------------
    # Predicate terms
    # ------------------------------------------------------------------

    def _free_text_term(self) -> ColumnElement[bool] | None:
        if not self.filters.free_text:
            return None
        return Note.title.ilike(contains_pattern(self.filters.free_text), escape="\\")

    def _time_signature_term(self) -> ColumnElement[bool] | None:
        f = self.filters
        if not f.has_time_signature_filter:
            return None
        clauses: list[ColumnElement[bool]] = []
        if f.time_signature_ids:
            clauses.append(Note.time_signature_id.in_(f.time_signature_ids))
        names = f.time_signature_names + f.size_names
        if names:
            matching = select(TimeSignature.id).where(or_(*_name_contains(TimeSignature.name, names)))
            clauses.append(Note.time_signature_id.in_(matching))
        return or_(*clauses)

    def _tag_term(self) -> ColumnElement[bool] | None:
        f = self.filters
        if not f.has_tag_filter:
            return None
        clauses: list[ColumnElement[bool]] = []
        if f.tag_ids:
            clauses.append(NoteTag.tag_id.in_(f.tag_ids))
        clauses.extend(_name_contains(Tag.name, f.tag_names))
        return or_(*clauses)

    def _owner_term(self) -> ColumnElement[bool] | None:
        if self.filters.owner_id is None:
            return None
        return Note.user_id == self.filters.owner_id

    def terms(self) -> list[ColumnElement[bool]]:
        """Active predicate terms, in a fixed category order."""
        candidates = (
            self._free_text_term(),
            self._time_signature_term(),
            self._tag_term(),
            self._owner_term(),
        )
        return [term for term in candidates if term is not None]

    def _apply_filters(self, stmt: Select) -> Select:
        if self.filters.has_tag_filter:
            stmt = stmt.join(NoteTag, NoteTag.note_id == Note.id).join(Tag, Tag.id == NoteTag.tag_id)
        terms = self.terms()
        if terms:
            stmt = stmt.where(and_(*terms))
        return stmt

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def count_statement(self) -> Select:
        """``SELECT COUNT(DISTINCT notes.id)`` over the filtered rows."""
        return self._apply_filters(select(func.count(distinct(Note.id))).select_from(Note))

    def page_statement(self) -> Select:
        """Ranked, paginated ``SELECT notes.id``."""
        stmt = self._apply_filters(select(Note.id).select_from(Note))

        ordering = []
        if self.filters.has_tag_filter:
            match_count = func.count(distinct(NoteTag.tag_id))
            stmt = stmt.group_by(Note.id, Note.created_at)
            ordering.append(match_count.desc())
        ordering.extend([Note.created_at.desc(), Note.id.desc()])

        return stmt.order_by(*ordering).limit(self.limit).offset(self.offset)
