from __future__ import annotations

from datetime import datetime, timezone

import pytest

from expiry_hooks import (
    EventDispatcher,
    ExpiryHooksConfig,
    FrozenClock,
    InMemoryCacheService,
    InMemoryEntityStore,
    InMemoryTimerQueue,
    InMemoryTrackedSet,
)

NOW = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(NOW)


@pytest.fixture
def config() -> ExpiryHooksConfig:
    return ExpiryHooksConfig(cache_prefix="p", cache_namespace="events")


@pytest.fixture
def store(clock: FrozenClock) -> InMemoryEntityStore:
    return InMemoryEntityStore(clock=clock)


@pytest.fixture
def queue(clock: FrozenClock) -> InMemoryTimerQueue:
    return InMemoryTimerQueue(clock)


@pytest.fixture
def cache() -> InMemoryCacheService:
    return InMemoryCacheService()


@pytest.fixture
def tracked() -> InMemoryTrackedSet:
    return InMemoryTrackedSet()


@pytest.fixture
def dispatcher() -> EventDispatcher:
    return EventDispatcher()
