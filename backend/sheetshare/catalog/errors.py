"""Exceptions raised by the catalog read pipeline."""


class CatalogError(Exception):
    """Opaque failure of a catalog query (store unavailable, query error, deadline)."""


class NoteNotFoundError(CatalogError):
    """Raised when a single-note lookup does not resolve to any row."""

    def __init__(self, note_id: int):
        super().__init__(f"Note {note_id} not found")
        self.note_id = note_id
