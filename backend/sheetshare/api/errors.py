"""Exception handlers mapping catalog failures to JSON responses.

Every error body has the shape ``{"message": ...}``. Store failures and
any other unhandled exception are reported as a bare ``"Error"``; the cause
is only logged.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from sheetshare.catalog.errors import CatalogError, NoteNotFoundError

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Register catalog and HTTP exception handlers on *app*."""

    @app.exception_handler(NoteNotFoundError)
    async def note_not_found_handler(request: Request, exc: NoteNotFoundError) -> JSONResponse:
        logger.info("Note %d not found (%s)", exc.note_id, request.url.path)
        return JSONResponse(status_code=404, content={"message": "Not found"})

    @app.exception_handler(CatalogError)
    async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
        logger.error("Catalog error on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=500, content={"message": "Error"})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled %s on %s %s", type(exc).__name__, request.method, request.url.path
        )
        return JSONResponse(status_code=500, content={"message": "Error"})
