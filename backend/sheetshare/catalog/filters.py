"""Normalization of raw listing query parameters.

Filter values arrive in several shapes depending on the client:

- a single token: ``tags=piano``
- a comma-separated list: ``tags=1,2,jazz``
- a JSON array string: ``tags=[1, 2, "jazz"]``
- repeated query values: ``tags=1&tags=2``

All of them flatten to an ordered list of string tokens. Tokens that are
exact integer literals become ids, everything else is matched by name.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from sheetshare.config import get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ListingFilters:
    """Typed filter sets for the note listing."""

    tag_ids: tuple[int, ...] = ()
    tag_names: tuple[str, ...] = ()
    time_signature_ids: tuple[int, ...] = ()
    time_signature_names: tuple[str, ...] = ()
    size_names: tuple[str, ...] = ()
    free_text: str | None = None
    owner_id: int | None = None

    @property
    def has_tag_filter(self) -> bool:
        return bool(self.tag_ids or self.tag_names)

    @property
    def has_time_signature_filter(self) -> bool:
        return bool(self.time_signature_ids or self.time_signature_names or self.size_names)


def flatten_tokens(raw: Any) -> list[str]:
    """Flatten a raw filter value into a list of non-empty string tokens.

    A JSON-array string that fails to parse contributes no tokens.
    """
    if raw is None:
        return []
    values = raw if isinstance(raw, (list, tuple)) else [raw]

    tokens: list[str] = []
    for value in values:
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            tokens.extend(flatten_tokens(value))
            continue

        text = str(value).strip()
        if not text:
            continue
        if text.startswith("["):
            try:
                parsed = json.loads(text)
            except ValueError:
                logger.debug("Ignoring malformed filter value %r", text)
                continue
            if isinstance(parsed, list):
                tokens.extend(flatten_tokens(parsed))
            continue

        tokens.extend(part.strip() for part in text.split(",") if part.strip())
    return tokens


def as_id(token: str) -> int | None:
    """Return the integer id for *token* if it round-trips exactly, else None."""
    try:
        value = int(token)
    except ValueError:
        return None
    return value if str(value) == token else None


def split_ids_and_names(tokens: Iterable[str]) -> tuple[tuple[int, ...], tuple[str, ...]]:
    """Partition tokens into ids and names, dropping repeats."""
    ids: dict[int, None] = {}
    names: dict[str, None] = {}
    for token in tokens:
        token_id = as_id(token)
        if token_id is not None:
            ids.setdefault(token_id)
        else:
            names.setdefault(token)
    return tuple(ids), tuple(names)


def parse_listing_filters(
    *,
    tags: Any = None,
    time_signatures: Any = None,
    sizes: Any = None,
    query: str | None = None,
    owner_id: int | None = None,
) -> ListingFilters:
    """Build :class:`ListingFilters` from raw query values.

    Args:
        tags: Tag ids and/or names.
        time_signatures: Time-signature ids and/or names.
        sizes: Time-signature names. Numeric-looking tokens are still names here.
        query: Free-text title filter; blank means no filter.
        owner_id: Restrict to notes owned by this user.
    """
    tag_ids, tag_names = split_ids_and_names(flatten_tokens(tags))
    ts_ids, ts_names = split_ids_and_names(flatten_tokens(time_signatures))
    size_names = tuple(dict.fromkeys(flatten_tokens(sizes)))

    free_text = query.strip() if isinstance(query, str) else None

    return ListingFilters(
        tag_ids=tag_ids,
        tag_names=tag_names,
        time_signature_ids=ts_ids,
        time_signature_names=ts_names,
        size_names=size_names,
        free_text=free_text or None,
        owner_id=owner_id,
    )


def _to_positive_int(value: Any, fallback: int) -> int:
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return fallback
    return number if number > 0 else fallback


def parse_page_params(page: Any = None, limit: Any = None) -> tuple[int, int]:
    """Parse ``page`` and ``limit`` leniently.

    Junk or non-positive values fall back to the defaults; ``limit`` is
    clamped to the configured maximum.
    """
    settings = get_settings()
    page_number = _to_positive_int(page, 1)
    page_size = min(
        _to_positive_int(limit, settings.CATALOG_DEFAULT_LIMIT),
        settings.CATALOG_MAX_LIMIT,
    )
    return page_number, page_size
