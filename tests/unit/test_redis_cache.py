"""CacheService (Redis adapter) tests: TTL storage, pattern deletes and fail-open behaviour."""

from unittest.mock import AsyncMock

import fakeredis
import fakeredis.aioredis
import pytest
from pydantic import TypeAdapter
from redis.exceptions import ConnectionError as RedisConnectionError

from vendorhub.application.dtos.catalog import BrandResult
from vendorhub.core.config import get_settings
from vendorhub.infrastructure.cache import CacheService, EntityCache


@pytest.fixture
def shared_server() -> fakeredis.FakeServer:
    return fakeredis.FakeServer()


@pytest.fixture
def raw_client(shared_server: fakeredis.FakeServer) -> fakeredis.aioredis.FakeRedis:
    """Bytes-level client on the same server, for writing values the app never would."""
    return fakeredis.aioredis.FakeRedis(server=shared_server)


@pytest.fixture
def decoding_cache(shared_server: fakeredis.FakeServer) -> CacheService:
    client = fakeredis.aioredis.FakeRedis(server=shared_server, decode_responses=True)
    return CacheService(redis_client=client, settings=get_settings())


async def test_set_then_get_round_trips_json(cache: CacheService) -> None:
    assert await cache.set("brands:id:b1", {"id": "b1", "name": "Acme"}, ttl=60)
    assert await cache.get("brands:id:b1") == {"id": "b1", "name": "Acme"}


async def test_set_applies_ttl(cache: CacheService, redis_client) -> None:
    await cache.set("brands:all", [], ttl=120)
    ttl = await redis_client.ttl("brands:all")
    assert 0 < ttl <= 120


async def test_get_missing_key_is_none(cache: CacheService) -> None:
    assert await cache.get("brands:id:missing") is None


async def test_get_invalid_json_is_a_miss(cache: CacheService, redis_client) -> None:
    await redis_client.set("brands:id:b1", "{not json")
    assert await cache.get("brands:id:b1") is None


async def test_set_unserializable_value_is_not_cached(cache: CacheService) -> None:
    assert await cache.set("brands:id:b1", {"x": object()}, ttl=60) is False
    assert await cache.get("brands:id:b1") is None


async def test_delete_missing_key_is_not_an_error(cache: CacheService) -> None:
    assert await cache.delete("brands:id:nope") is True


async def test_delete_pattern_only_touches_matching_keys(
    cache: CacheService, redis_client
) -> None:
    await cache.set("brands:id:1", 1, ttl=60)
    await cache.set("brands:all", [], ttl=60)
    await cache.set("products:all", [], ttl=60)
    assert await cache.delete_pattern("brands:*") == 2
    assert await redis_client.exists("products:all") == 1
    assert await cache.keys("brands:*") == []


async def test_delete_pattern_on_empty_namespace_returns_zero(cache: CacheService) -> None:
    assert await cache.delete_pattern("brands:*") == 0


async def test_store_errors_degrade_to_miss(broken_cache: CacheService) -> None:
    """Every operation reports a miss or no-op instead of raising."""
    assert broken_cache.is_available()
    assert await broken_cache.get("brands:id:1") is None
    assert await broken_cache.set("brands:id:1", {"a": 1}, ttl=60) is False
    assert await broken_cache.delete("brands:id:1") is False
    assert await broken_cache.keys("brands:*") == []
    assert await broken_cache.delete_pattern("brands:*") == 0


async def test_connect_failure_disables_cache(broken_redis: AsyncMock) -> None:
    cache = CacheService(redis_client=broken_redis, settings=get_settings())
    await cache.connect()
    assert cache.is_available() is False
    assert await cache.get("brands:id:1") is None


async def test_connect_with_reachable_server_keeps_client(cache: CacheService) -> None:
    await cache.connect()
    assert cache.is_available() is True


async def test_disconnect_is_idempotent(cache: CacheService) -> None:
    await cache.disconnect()
    await cache.disconnect()
    assert cache.is_available() is False


async def test_non_utf8_value_is_a_miss_and_is_discarded(
    decoding_cache: CacheService, raw_client
) -> None:
    await raw_client.set("brands:id:b1", b"\xff\xfe\x00garbage")
    assert await decoding_cache.get("brands:id:b1") is None
    assert await raw_client.exists("brands:id:b1") == 0


async def test_non_utf8_value_falls_back_to_loader(
    decoding_cache: CacheService, raw_client
) -> None:
    await raw_client.set("brands:id:b1", b"\xff\xfe\x00garbage")
    entity_cache = EntityCache(decoding_cache, "brands", ttl=300)
    fresh = BrandResult(id="b1", name="Acme", is_active=True)
    loader = AsyncMock(return_value=fresh)

    result = await entity_cache.fetch("brands:id:b1", TypeAdapter(BrandResult), loader)

    assert result == fresh
    loader.assert_awaited_once()
    assert (await decoding_cache.get("brands:id:b1"))["name"] == "Acme"


async def test_non_utf8_key_name_yields_no_keys(
    decoding_cache: CacheService, raw_client
) -> None:
    await raw_client.set(b"brands:\xff", b"1")
    assert await decoding_cache.keys("brands:*") == []
    assert await decoding_cache.delete_pattern("brands:*") == 0


async def test_cache_resumes_after_failed_connect(redis_client) -> None:
    """Redis down at startup, healthy later: caching starts once a retry PING succeeds."""
    settings = get_settings().model_copy(update={"redis_retry_interval": 0.0})
    redis_client.ping = AsyncMock(side_effect=[RedisConnectionError("refused"), True])
    cache = CacheService(redis_client=redis_client, settings=settings)

    await cache.connect()

    assert cache.is_available() is True
    assert await cache.set("brands:id:b1", {"id": "b1"}, ttl=60) is True
    assert await cache.get("brands:id:b1") == {"id": "b1"}
    assert redis_client.ping.await_count == 2


async def test_store_error_skips_store_until_retry_interval(broken_redis: AsyncMock) -> None:
    cache = CacheService(redis_client=broken_redis, settings=get_settings())
    assert await cache.get("brands:id:1") is None
    assert cache.is_available() is False

    assert await cache.get("brands:id:1") is None
    assert broken_redis.get.await_count == 1
    broken_redis.ping.assert_not_awaited()


async def test_retry_that_still_fails_stays_down(broken_redis: AsyncMock) -> None:
    settings = get_settings().model_copy(update={"redis_retry_interval": 0.0})
    cache = CacheService(redis_client=broken_redis, settings=settings)
    await cache.connect()

    assert await cache.get("brands:id:1") is None
    assert broken_redis.ping.await_count == 2
    broken_redis.get.assert_not_awaited()
