"""Test configuration and fixtures for the library catalog."""

import os
from datetime import date

os.environ.setdefault("ENVIRONMENT", "local")
os.environ["DATABASE_ENGINE"] = "sqlite"
os.environ["SQLITE_URI"] = ":memory:"
os.environ["SQLITE_ASYNC_PREFIX"] = "sqlite+aiosqlite:///"
os.environ["CREATE_TABLES_ON_STARTUP"] = "false"

TEST_DATABASE = os.environ.get("CATALOG_TEST_DATABASE", "sqlite")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402

# mypy: disable-error-code="import-untyped"
from testcontainers.core.docker_client import DockerClient  # noqa: E402
from testcontainers.postgres import PostgresContainer  # noqa: E402

from catalog.infrastructure.database.session import Base, async_session, get_session_factory  # noqa: E402
from catalog.infrastructure.logging import configure_testing_logging, mark_logging_configured  # noqa: E402
from catalog.interfaces.main import app  # noqa: E402
from catalog.modules.author.models import Author  # noqa: E402
from catalog.modules.book.models import Book  # noqa: E402


@pytest.fixture(autouse=True, scope="session")
def quiet_logging():
    """Keep test output free of application log lines."""
    configure_testing_logging()
    mark_logging_configured()
    yield


def is_docker_running() -> bool:
    """Check if Docker daemon is running."""
    try:
        DockerClient()
        return True
    except Exception:
        return False


@pytest.fixture(scope="session")
def pg_container():
    """Start a PostgreSQL container when the suite runs against Postgres."""
    if TEST_DATABASE != "postgres":
        yield None
        return

    if not is_docker_running():
        pytest.skip("Docker is required, but not running")

    with PostgresContainer(driver="asyncpg") as pg:
        yield pg


@pytest.fixture(scope="function")
def test_db_url(pg_container, tmp_path):
    """Database URL for one test: a fresh SQLite file, or the shared Postgres container."""
    if pg_container is None:
        return f"sqlite+aiosqlite:///{tmp_path / 'catalog-test.db'}"
    return pg_container.get_connection_url()


@pytest_asyncio.fixture(scope="function")
async def test_db_engine(test_db_url):
    """Create an engine whose sessions each get their own connection."""
    engine = create_async_engine(test_db_url, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def session_factory(test_db_engine):
    """Session factory bound to the test engine."""
    return async_sessionmaker(test_db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture(scope="function")
async def db_session(session_factory):
    """Create a test database session."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def client(session_factory):
    """Create a test client whose requests each get an isolated database session."""
    app.dependency_overrides = {}

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[async_session] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides = {}


async def _add_author(db_session: AsyncSession, **fields) -> dict:
    author = Author(**fields)
    db_session.add(author)
    await db_session.commit()
    return {
        "id": author.id,
        "first_name": author.first_name,
        "family_name": author.family_name,
        "date_of_birth": author.date_of_birth,
        "date_of_death": author.date_of_death,
    }


@pytest_asyncio.fixture
async def test_author(db_session: AsyncSession):
    """Create an author with both dates set."""
    return await _add_author(
        db_session,
        first_name="Isaac",
        family_name="Asimov",
        date_of_birth=date(1920, 1, 2),
        date_of_death=date(1992, 4, 6),
    )


@pytest_asyncio.fixture
async def test_author_2(db_session: AsyncSession):
    """Create a second author without dates."""
    return await _add_author(db_session, first_name="Ben", family_name="Bova")


@pytest_asyncio.fixture
async def test_author_without_books(db_session: AsyncSession):
    """Create an author no book references."""
    return await _add_author(db_session, first_name="Jim", family_name="Jones", date_of_birth=date(1971, 12, 16))


@pytest_asyncio.fixture
async def test_book(db_session: AsyncSession, test_author: dict):
    """Create a book written by ``test_author``."""
    book = Book(
        title="The Gods Themselves",
        summary="In the year 2100 Earth's scientists discover the Inter-Universal Electron Pump.",
        author_id=test_author["id"],
        isbn="9780553288100",
    )
    db_session.add(book)
    await db_session.commit()
    return {"id": book.id, "title": book.title, "summary": book.summary, "author_id": book.author_id}


@pytest_asyncio.fixture
async def test_book_2(db_session: AsyncSession, test_author: dict):
    """Create a second book written by ``test_author``."""
    book = Book(
        title="Foundation",
        summary="The Galactic Empire is crumbling and only psychohistory sees the dark age coming.",
        author_id=test_author["id"],
    )
    db_session.add(book)
    await db_session.commit()
    return {"id": book.id, "title": book.title, "summary": book.summary, "author_id": book.author_id}
