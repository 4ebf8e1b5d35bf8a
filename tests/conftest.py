import os
import sys
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

sys.path.append(str(Path(__file__).parents[1] / "src"))

ENV_TEST_PATH = Path(__file__).parents[1] / ".env.test"


def _load_env_file(path: Path) -> None:
    if not path.exists():
        return
    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        os.environ.setdefault(key, value)


_load_env_file(ENV_TEST_PATH)

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")

# Settings are read at import time; point the app at the test database and
# never let a developer's real API key reach the provider from tests.
os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ["OPENAI_API_KEY"] = ""
os.environ["DB_AUTO_CREATE"] = "false"

from app.api.deps import get_category_resolver  # noqa: E402
from app.categorization.resolver import CategoryResolver  # noqa: E402
from app.db.session import build_engine, get_db  # noqa: E402
from app.main import app  # noqa: E402

DEFAULT_CATEGORIES = [
    "Food",
    "Transportation",
    "Housing",
    "Entertainment",
    "Healthcare",
    "Utilities",
    "Shopping",
    "Education",
]

test_engine = build_engine(TEST_DATABASE_URL)
TestSessionLocal = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture(scope="function")
async def setup_database():
    """Create tables for tests that need the database, and drop them after.

    Not autouse, so pure unit tests run without a database.
    """
    from app.models.base import BaseModel

    async with test_engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    yield

    async with test_engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.drop_all)

    await test_engine.dispose()


@pytest.fixture
async def db_session(setup_database):
    """Provide test database session with fresh connection per test."""
    async with TestSessionLocal() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def seeded_categories(db_session: AsyncSession) -> list[str]:
    """Seed the default category vocabulary (frequency 1 each)."""
    from app.repositories.category import CategoryRepository

    await CategoryRepository(db_session).seed(DEFAULT_CATEGORIES)
    return DEFAULT_CATEGORIES


@pytest.fixture
async def client(db_session: AsyncSession):
    """Provide test client with database override and keyword-only categorization."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_category_resolver] = lambda: CategoryResolver(semantic=None)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def test_db_engine():
    return test_engine


@pytest.fixture
def test_session_factory():
    return TestSessionLocal
