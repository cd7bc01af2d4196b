"""Shared fixtures: in-process Redis servers via fakeredis."""

import fakeredis
import pytest

from remote_collections import CollectionOptions, RedisKeyBuilder


@pytest.fixture
def redis_server():
    """Fresh fake Redis server per test (shared by sync and async clients)."""
    return fakeredis.FakeServer()


@pytest.fixture
def redis_client(redis_server):
    """Blocking client returning bytes, like a default redis.Redis."""
    return fakeredis.FakeRedis(server=redis_server)


@pytest.fixture
def async_redis_client(redis_server):
    """Asyncio client on the same fake server."""
    return fakeredis.FakeAsyncRedis(server=redis_server)


@pytest.fixture
def key_builder():
    """Key builder with no prefix, independent of environment settings."""
    return RedisKeyBuilder(prefix="")


@pytest.fixture
def options():
    """Default JSON options with a small scan batch to force several HSCAN rounds."""
    return CollectionOptions(scan_count=2)
