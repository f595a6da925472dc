"""Pytest configuration and fixtures for the blog backend.

Repository and API tests run against a throwaway SQLite file (aiosqlite)
per test. HTTP tests use httpx's ASGITransport, which does not run the
lifespan, so the app fixture installs the cache and session overrides itself.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./blog-test.db")
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("ADMIN_INVITE_CODE", "test-invite-code")

from collections.abc import AsyncIterator, Awaitable, Callable  # noqa: E402
from dataclasses import dataclass  # noqa: E402

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool  # noqa: E402

from blog.core.config import get_settings  # noqa: E402
from blog.core.limiter import limiter  # noqa: E402
from blog.infrastructure.cache import CacheStore  # noqa: E402
from blog.infrastructure.persistence import models  # noqa: E402, F401
from blog.infrastructure.persistence.database import (  # noqa: E402
    Base,
    build_session_factory,
    enable_sqlite_foreign_keys,
    get_db,
    get_db_transactional,
)
from blog.main import create_app  # noqa: E402

# Rate limits are exercised by slowapi itself; tests log in far more often.
limiter.enabled = False

ADMIN_INVITE_CODE = os.environ["ADMIN_INVITE_CODE"]
DEFAULT_PASSWORD = "correct-horse-battery"


class FakeClock:
    """Monotonic clock the tests advance by hand."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> CacheStore:
    """Process cache on the fake clock (default TTL 300s)."""
    return CacheStore(default_ttl=300, check_period=60, clock=clock)


@pytest.fixture
async def engine(tmp_path) -> AsyncIterator[AsyncEngine]:
    """Fresh SQLite database file with all tables; FK cascades enabled."""
    eng = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'blog.db'}", poolclass=NullPool
    )
    enable_sqlite_foreign_keys(eng)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return build_session_factory(engine)


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """Session for repository tests. Repositories commit explicitly where needed."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def app(
    session_factory: async_sessionmaker[AsyncSession], cache: CacheStore
) -> FastAPI:
    """Application wired to the test database and the fake-clock cache."""
    get_settings.cache_clear()
    application = create_app()

    async def _get_db() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    async def _get_db_transactional() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    application.dependency_overrides[get_db] = _get_db
    application.dependency_overrides[get_db_transactional] = _get_db_transactional
    application.state.cache = cache
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@dataclass(frozen=True)
class Account:
    """A signed-up user: bearer headers and id."""

    headers: dict[str, str]
    user_id: str


SignupFn = Callable[..., Awaitable[Account]]


@pytest.fixture
def signup(client: AsyncClient) -> SignupFn:
    """Register a user through the API; returns auth headers plus the user id."""

    async def _signup(
        first_name: str,
        last_name: str,
        email: str | None = None,
        *,
        admin: bool = False,
    ) -> Account:
        body = {
            "firstName": first_name,
            "lastName": last_name,
            "email": email or f"{first_name}.{last_name}@example.com".lower(),
            "password": DEFAULT_PASSWORD,
        }
        if admin:
            body["inviteCode"] = ADMIN_INVITE_CODE
        response = await client.post("/api/v1/auth/signup", json=body)
        assert response.status_code == 201, response.text
        data = response.json()
        return Account(
            headers={"Authorization": f"Bearer {data['accessToken']}"},
            user_id=data["user"]["id"],
        )

    return _signup

