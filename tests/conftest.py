"""Pytest configuration and fixtures for vendorhub.

Database tests run against in-memory SQLite (aiosqlite, one shared
connection, foreign keys enforced). The cache is a CacheService over
fakeredis, so keys, TTLs and pattern deletes behave like Redis. The IFSC
directory is an httpx MockTransport. HTTP tests use create_app() with
get_db, get_cache and get_ifsc_client overridden.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("REDIS_ENABLED", "false")

from collections.abc import AsyncIterator  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import fakeredis.aioredis  # noqa: E402
import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient, MockTransport, Request, Response  # noqa: E402
from redis.exceptions import ConnectionError as RedisConnectionError  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from vendorhub.api.v1.dependencies import (  # noqa: E402
    ServiceRegistry,
    get_cache,
    get_db,
    get_ifsc_client,
)
from vendorhub.application.dtos.account import UserResult, VendorResult  # noqa: E402
from vendorhub.application.dtos.product import ProductResult  # noqa: E402
from vendorhub.core.config import get_settings  # noqa: E402
from vendorhub.infrastructure.cache import CacheService  # noqa: E402
from vendorhub.infrastructure.external import IfscClient  # noqa: E402
from vendorhub.infrastructure.persistence import models  # noqa: E402,F401
from vendorhub.infrastructure.persistence.database import (  # noqa: E402
    Base,
    create_session_factory,
)
from vendorhub.main import create_app  # noqa: E402

get_settings.cache_clear()


class QueryCounter:
    """Counts SQL statements sent to the database (before_cursor_execute)."""

    def __init__(self) -> None:
        self.count = 0

    def __call__(self, *args: object) -> None:
        self.count += 1

    def reset(self) -> None:
        self.count = 0


@pytest.fixture
def queries() -> QueryCounter:
    return QueryCounter()


@pytest.fixture
async def engine(queries: QueryCounter) -> AsyncIterator[AsyncEngine]:
    """Fresh in-memory schema per test; every statement is counted in `queries`."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    event.listen(engine.sync_engine, "before_cursor_execute", queries)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine):
    return create_session_factory(engine)


@pytest.fixture
async def db_session(session_factory) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def redis_client() -> fakeredis.aioredis.FakeRedis:
    """A clean fakeredis instance for each test."""
    return fakeredis.aioredis.FakeRedis(decode_responses=True)


@pytest.fixture
def cache(redis_client) -> CacheService:
    """CacheService backed by fakeredis (connect() not needed)."""
    return CacheService(redis_client=redis_client, settings=get_settings())


@pytest.fixture
def broken_redis() -> AsyncMock:
    """Redis client whose every command fails as if the server were down."""
    down = RedisConnectionError("Connection refused")
    client = AsyncMock()
    for command in ("ping", "get", "setex", "delete", "aclose"):
        getattr(client, command).side_effect = down
    client.scan_iter = MagicMock(side_effect=down)
    client.pipeline = MagicMock(side_effect=down)
    return client


@pytest.fixture
def broken_cache(broken_redis: AsyncMock) -> CacheService:
    return CacheService(redis_client=broken_redis, settings=get_settings())


def _ifsc_directory(request: Request) -> Response:
    if request.url.path.endswith("/HDFC0001234"):
        return Response(
            200, json={"BANK": "HDFC Bank", "IFSC": "HDFC0001234", "BRANCH": "Andheri West"}
        )
    return Response(404, text="Not Found")


@pytest.fixture
async def ifsc_client() -> AsyncIterator[IfscClient]:
    """IFSC client over a mocked directory that knows only HDFC0001234."""
    http = AsyncClient(transport=MockTransport(_ifsc_directory))
    yield IfscClient("https://ifsc.test", http_client=http)
    await http.aclose()


@pytest.fixture
def services(db_session: AsyncSession, cache: CacheService) -> ServiceRegistry:
    """Service graph over the test session and the fakeredis cache."""
    return ServiceRegistry(db_session, cache, get_settings())


@pytest.fixture
async def vendor(services: ServiceRegistry) -> VendorResult:
    return await services.vendors.create_vendor(
        name="Asha Traders", email="asha@example.com", store_name="Asha Store"
    )


@pytest.fixture
async def other_vendor(services: ServiceRegistry) -> VendorResult:
    return await services.vendors.create_vendor(
        name="Bram Goods", email="bram@example.com", store_name="Bram Store"
    )


@pytest.fixture
async def user(services: ServiceRegistry) -> UserResult:
    return await services.users.create_user(name="Dana", email="dana@example.com")


@pytest.fixture
async def product(services: ServiceRegistry, vendor: VendorResult) -> ProductResult:
    return await services.products.create_product(
        vendor_id=vendor.id, name="Kettle", mrp=50.0, net_price=40.0, quantity=20
    )


@pytest.fixture
async def client(
    session_factory, cache: CacheService, ifsc_client: IfscClient
) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against a fresh app (ASGI) using the test DB and cache."""
    app = create_app()

    async def _test_db() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _test_db
    app.dependency_overrides[get_cache] = lambda: cache
    app.dependency_overrides[get_ifsc_client] = lambda: ifsc_client
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
