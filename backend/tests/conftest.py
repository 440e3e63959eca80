# @TASK P0-T0.3 - Test configuration
import os
from collections.abc import AsyncGenerator
from datetime import datetime, timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Set test environment variables before importing app modules
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest_asyncio.fixture(scope="function")
async def test_db() -> AsyncGenerator[AsyncSession, None]:
    """Provide an async session on a fresh in-memory database.

    Each test gets its own engine with all tables created; the single
    shared connection keeps the in-memory database alive for the test.
    """
    from sheetshare.database import Base
    import sheetshare.models  # noqa: F401 - Import to register models with Base

    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)
    session_factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with session_factory() as session:
        yield session
        await session.rollback()

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_app(test_db: AsyncSession):
    """Provide the FastAPI app with the test database session injected."""
    from sheetshare.database import get_db
    from sheetshare.main import app

    async def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def test_client(test_app) -> AsyncGenerator[AsyncClient, None]:
    """Provide an async HTTP client bound to the test app."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# ---------------------------------------------------------------------------
# Catalog data
# ---------------------------------------------------------------------------

BASE_TIME = datetime(2026, 1, 1, 12, 0, 0)


@pytest_asyncio.fixture(scope="function")
async def catalog_data(test_db: AsyncSession) -> dict:
    """Seed a small catalog with overlapping tags and time signatures.

    Notes (oldest first):

    ======  ============================  ======  ========  =========
    id      title                         tags    meter     owner
    ======  ============================  ======  ========  =========
    1       Nocturne Op.9 No.2            2,5,7   4/4       1
    2       Prelude in C                  2       3/4       1
    3       NOCTURNE in E minor           5       4/4       2
    4       Etude 100%_done               7       6/8       None
    5       Gymnopedie                    -       None      2
    ======  ============================  ======  ========  =========
    """
    from sheetshare.models import Note, NoteTag, Tag, TimeSignature, User

    test_db.add_all(
        [
            User(id=1, email="chopin@example.com", first_name="Frederic", last_name="Chopin"),
            User(id=2, email="satie@example.com", first_name="Erik", last_name="Satie"),
            TimeSignature(id=1, name="4/4"),
            TimeSignature(id=2, name="3/4"),
            TimeSignature(id=3, name="6/8"),
            Tag(id=2, name="Romantic"),
            Tag(id=5, name="Piano"),
            Tag(id=7, name="Advanced"),
            Tag(id=9, name="Baroque"),
        ]
    )
    await test_db.flush()

    rows = [
        (1, "Nocturne Op.9 No.2", 1, 1, [2, 5, 7]),
        (2, "Prelude in C", 2, 1, [2]),
        (3, "NOCTURNE in E minor", 1, 2, [5]),
        (4, "Etude 100%_done", 3, None, [7]),
        (5, "Gymnopedie", None, 2, []),
    ]
    for note_id, title, ts_id, owner_id, tag_ids in rows:
        test_db.add(
            Note(
                id=note_id,
                title=title,
                time_signature_id=ts_id,
                user_id=owner_id,
                description=f"{title} description",
                difficulty="medium",
                is_public=True,
                views=note_id * 10,
                pdf_url=f"https://cdn.example.com/{note_id}.pdf",
                created_at=BASE_TIME + timedelta(days=note_id),
            )
        )
    await test_db.flush()
    for note_id, _title, _ts, _owner, tag_ids in rows:
        test_db.add_all([NoteTag(note_id=note_id, tag_id=tag_id) for tag_id in tag_ids])
    await test_db.commit()

    return {"note_ids": [row[0] for row in rows]}


@pytest_asyncio.fixture(scope="function")
async def many_notes(test_db: AsyncSession) -> list[int]:
    """Seed 25 untagged notes with strictly increasing creation times."""
    from sheetshare.models import Note

    test_db.add_all(
        [
            Note(id=i, title=f"Study No.{i}", created_at=BASE_TIME + timedelta(hours=i))
            for i in range(1, 26)
        ]
    )
    await test_db.commit()
    return list(range(1, 26))
