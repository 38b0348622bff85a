"""EntityCache read-through tests (fakeredis-backed store, mocked loaders)."""

import asyncio
from unittest.mock import AsyncMock

import pytest
from pydantic import TypeAdapter

from vendorhub.application.dtos.catalog import BrandResult
from vendorhub.infrastructure.cache import CacheService, EntityCache

_BRAND = TypeAdapter(BrandResult)


def _brand(name: str = "Acme") -> BrandResult:
    return BrandResult(id="b1", name=name, is_active=True)


async def test_miss_loads_and_stores_then_hit_skips_loader(cache: CacheService) -> None:
    entity_cache = EntityCache(cache, "brands", ttl=300)
    loader = AsyncMock(return_value=_brand())

    first = await entity_cache.fetch("brands:id:b1", _BRAND, loader)
    second = await entity_cache.fetch("brands:id:b1", _BRAND, loader)

    assert first == second == _brand()
    loader.assert_awaited_once()


async def test_fetch_uses_namespace_ttl_unless_overridden(
    cache: CacheService, redis_client
) -> None:
    entity_cache = EntityCache(cache, "brands", ttl=300)
    await entity_cache.fetch("brands:id:b1", _BRAND, AsyncMock(return_value=_brand()))
    await entity_cache.fetch(
        "brands:id:b2", _BRAND, AsyncMock(return_value=_brand()), ttl=30
    )
    assert 30 < await redis_client.ttl("brands:id:b1") <= 300
    assert 0 < await redis_client.ttl("brands:id:b2") <= 30


async def test_expired_entry_is_reloaded(cache: CacheService, redis_client) -> None:
    entity_cache = EntityCache(cache, "brands", ttl=300)
    loader = AsyncMock(side_effect=[_brand("Old"), _brand("New")])
    await entity_cache.fetch("brands:id:b1", _BRAND, loader)

    await redis_client.pexpire("brands:id:b1", 10)
    await asyncio.sleep(0.05)

    assert (await entity_cache.fetch("brands:id:b1", _BRAND, loader)).name == "New"
    assert loader.await_count == 2


async def test_not_found_is_not_cached(cache: CacheService, redis_client) -> None:
    entity_cache = EntityCache(cache, "brands", ttl=300)
    loader = AsyncMock(return_value=None)
    assert await entity_cache.fetch("brands:id:b1", _BRAND, loader) is None
    assert await entity_cache.fetch("brands:id:b1", _BRAND, loader) is None
    assert loader.await_count == 2
    assert await redis_client.exists("brands:id:b1") == 0


async def test_corrupt_entry_is_deleted_and_reloaded(
    cache: CacheService, redis_client
) -> None:
    """A payload that no longer matches the DTO shape is treated as a miss."""
    await redis_client.set("brands:id:b1", '{"unexpected": true}')
    entity_cache = EntityCache(cache, "brands", ttl=300)
    loader = AsyncMock(return_value=_brand("Fresh"))

    result = await entity_cache.fetch("brands:id:b1", _BRAND, loader)

    assert result.name == "Fresh"
    loader.assert_awaited_once()
    assert await cache.get("brands:id:b1") == _BRAND.dump_python(result, mode="json")


async def test_loader_errors_propagate(cache: CacheService) -> None:
    entity_cache = EntityCache(cache, "brands", ttl=300)
    loader = AsyncMock(side_effect=RuntimeError("db down"))
    with pytest.raises(RuntimeError, match="db down"):
        await entity_cache.fetch("brands:id:b1", _BRAND, loader)


async def test_without_store_every_read_loads() -> None:
    entity_cache = EntityCache(None, "brands", ttl=300)
    loader = AsyncMock(return_value=_brand())
    await entity_cache.fetch("brands:id:b1", _BRAND, loader)
    await entity_cache.fetch("brands:id:b1", _BRAND, loader)
    assert loader.await_count == 2
    assert await entity_cache.invalidate() == 0


async def test_store_outage_falls_back_to_loader(broken_cache: CacheService) -> None:
    entity_cache = EntityCache(broken_cache, "brands", ttl=300)
    loader = AsyncMock(return_value=_brand())
    assert await entity_cache.fetch("brands:id:b1", _BRAND, loader) == _brand()
    assert await entity_cache.invalidate() == 0
