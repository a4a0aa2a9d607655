from __future__ import annotations

import pytest

from expiry_hooks import (
    CacheInvalidator,
    EntityExpired,
    ExpiryHooksConfig,
    FilterPipeline,
    InMemoryCacheService,
)
from expiry_hooks.scheduling import EXTEND_CACHE_KEYS


@pytest.fixture
def invalidator(
    config: ExpiryHooksConfig, cache: InMemoryCacheService
) -> CacheInvalidator:
    return CacheInvalidator(config, cache)


def test_default_cache_keys_use_prefix(invalidator: CacheInvalidator) -> None:
    assert invalidator.default_cache_keys(42) == ["p_42", "p_upcoming", "p_past"]
    assert invalidator.key_filters.name == EXTEND_CACHE_KEYS


@pytest.mark.asyncio
async def test_handle_deletes_keys_in_namespace_and_entity_cache(
    invalidator: CacheInvalidator, cache: InMemoryCacheService
) -> None:
    cache.set("p_42", {"title": "Launch"}, "events")
    cache.set("p_upcoming", [42, 43], "events")
    cache.set("p_42", "other namespace", "posts")
    cache.set_entity_entry(42, "meta", {"end": "soon"})

    deleted = await invalidator.handle(EntityExpired(entity_id=42))

    assert deleted == ["p_42", "p_upcoming", "p_past"]
    assert cache.deleted_keys("events") == ["p_42", "p_upcoming", "p_past"]
    assert cache.get("p_42", "events") is None
    assert cache.get("p_upcoming", "events") is None
    assert cache.get("p_42", "posts") == "other namespace"
    assert cache.get_entity_entries(42) == {}
    assert cache.invalidated_entities == [42]


@pytest.mark.asyncio
async def test_extension_key_only_applies_to_its_entity(
    invalidator: CacheInvalidator, cache: InMemoryCacheService
) -> None:
    def add_custom(keys: list[str], entity_id: int) -> list[str]:
        if entity_id == 7:
            return [*keys, "custom_7"]
        return keys

    invalidator.key_filters.register(add_custom)

    await invalidator.invalidate(7)
    assert "custom_7" in cache.deleted_keys()

    cache.clear()
    await invalidator.invalidate(8)
    assert cache.deleted_keys() == ["p_8", "p_upcoming", "p_past"]


@pytest.mark.asyncio
async def test_empty_and_non_string_keys_are_skipped(
    config: ExpiryHooksConfig, cache: InMemoryCacheService
) -> None:
    pipeline: FilterPipeline[list[str]] = FilterPipeline(EXTEND_CACHE_KEYS)
    pipeline.register(lambda keys, entity_id: [*keys, "", None, 12, "extra"])
    invalidator = CacheInvalidator(config, cache, pipeline)

    deleted = await invalidator.invalidate(1)

    assert deleted == ["p_1", "p_upcoming", "p_past", "extra"]


@pytest.mark.asyncio
async def test_filter_returning_single_string_is_accepted(
    config: ExpiryHooksConfig, cache: InMemoryCacheService
) -> None:
    invalidator = CacheInvalidator(config, cache)
    invalidator.key_filters.register(lambda keys, entity_id: "only_this")

    assert await invalidator.invalidate(3) == ["only_this"]
    assert cache.invalidated_entities == [3]


@pytest.mark.asyncio
async def test_invalidate_twice_is_harmless(
    invalidator: CacheInvalidator, cache: InMemoryCacheService
) -> None:
    cache.set("p_5", "x", "events")

    await invalidator.invalidate(5)
    await invalidator.invalidate(5)

    assert cache.get("p_5", "events") is None
    assert cache.invalidated_entities == [5, 5]


@pytest.mark.asyncio
async def test_filter_returning_none_means_no_keys(
    invalidator: CacheInvalidator,
    cache: InMemoryCacheService,
    caplog: pytest.LogCaptureFixture,
) -> None:
    invalidator.key_filters.register(lambda keys, entity_id: None)
    cache.set_entity_entry(9, "meta", {"end": "soon"})

    assert await invalidator.invalidate(9) == []

    assert cache.deleted == []
    assert cache.invalidated_entities == [9]
    assert cache.get_entity_entries(9) == {}
    assert "returned None" in caplog.text
