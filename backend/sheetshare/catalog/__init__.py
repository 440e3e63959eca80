"""Note catalog: filter parsing, query planning and hydration."""

from sheetshare.catalog.errors import CatalogError, NoteNotFoundError
from sheetshare.catalog.filters import ListingFilters, parse_listing_filters, parse_page_params
from sheetshare.catalog.hydrator import HydratedNote
from sheetshare.catalog.service import NoteCatalog, NotePage, PageMeta

__all__ = [
    "CatalogError",
    "HydratedNote",
    "ListingFilters",
    "NoteCatalog",
    "NoteNotFoundError",
    "NotePage",
    "PageMeta",
    "parse_listing_filters",
    "parse_page_params",
]
