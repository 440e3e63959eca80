# @TASK P0-T0.3 - FastAPI 앱 엔트리포인트

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sheetshare import __version__
from sheetshare.api.errors import register_exception_handlers
from sheetshare.config import get_settings
from sheetshare.database import engine


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: dispose the engine pool on shutdown.

    The schema is owned by Alembic migrations; nothing is created here.
    """
    yield
    await engine.dispose()


app = FastAPI(
    title="SheetShare",
    description="Music sheet sharing catalog",
    version=__version__,
    lifespan=lifespan,
)

# --- CORS Middleware ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# --- Router includes ---
from sheetshare.api.lookups import router as lookups_router  # noqa: E402
from sheetshare.api.notes import router as notes_router  # noqa: E402

app.include_router(notes_router, prefix="/api")
app.include_router(lookups_router, prefix="/api")


@app.get("/api/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint.

    Returns a simple status response to verify the API is running.
    """
    return {"status": "ok"}
