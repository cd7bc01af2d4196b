"""Dictionary backed by a Redis hash (asyncio client).

Same operations as `RedisDictionary`, each a coroutine that suspends while
its Redis command is in flight. Cancellation and client timeouts propagate
to the caller unchanged.
"""

from collections.abc import AsyncIterator
from typing import Any

from loguru import logger
from redis.asyncio import Redis

from remote_collections.dictionary.base import K, RedisHashBase, V
from remote_collections.errors import DuplicateKeyError, KeyNotFoundError
from remote_collections.keys import RedisKeyBuilder
from remote_collections.options import CollectionOptions


class AsyncRedisDictionary(RedisHashBase[K, V]):
    """Async dictionary whose entries live in a Redis hash.

    Usage:
        d = AsyncRedisDictionary(Redis(), "sessions", value_type=int)
        await d.add("alice", 1)
        found, value = await d.try_get("alice")
        async for key, value in d.items():
            ...
    """

    def __init__(
        self,
        client: Redis,
        name: str,
        options: CollectionOptions | None = None,
        key_type: type[K] | Any = Any,
        value_type: type[V] | Any = Any,
        key_builder: RedisKeyBuilder | None = None,
    ):
        """Initialize dictionary. Does not touch the network.

        Args:
            client: Async Redis client used for every command
            name: Logical collection name
            options: Serializers and scan tuning (defaults to JSON both ways)
            key_type: Type keys are decoded into
            value_type: Type values are decoded into
            key_builder: Namespace key builder override
        """
        super().__init__(name, options, key_type, value_type, key_builder)
        self._client = client
        logger.debug(f"Opened async dictionary {self._redis_key}")

    async def add(self, key: K, value: V) -> None:
        """Insert a new entry with a single HSETNX.

        Raises:
            DuplicateKeyError: If the key already exists (entry is left unchanged)
        """
        added = await self._client.hsetnx(self._redis_key, self._dump_key(key), self._dump_value(value))
        if not added:
            raise DuplicateKeyError(key)

    async def set(self, key: K, value: V) -> None:
        """Insert or replace an entry (HSET)."""
        await self._client.hset(self._redis_key, self._dump_key(key), self._dump_value(value))

    async def try_get(self, key: K) -> tuple[bool, V | None]:
        """Read one entry with a single HGET.

        Returns:
            (True, value) if present, (False, None) otherwise
        """
        raw = await self._client.hget(self._redis_key, self._dump_key(key))
        if self._is_missing(raw):
            return False, None
        return True, self._load_value(raw)

    async def get(self, key: K) -> V:
        """Read one entry.

        Raises:
            KeyNotFoundError: If the key is absent
        """
        found, value = await self.try_get(key)
        if not found:
            raise KeyNotFoundError(key)
        return value

    async def get_or_default(self, key: K, default: V | None = None) -> V | None:
        found, value = await self.try_get(key)
        return value if found else default

    async def contains_key(self, key: K) -> bool:
        """Check key presence (HEXISTS)."""
        return bool(await self._client.hexists(self._redis_key, self._dump_key(key)))

    async def contains(self, key: K, value: V) -> bool:
        """Check that key is present and its value equals `value`."""
        found, current = await self.try_get(key)
        return found and current == value

    async def remove(self, key: K) -> bool:
        """Delete one entry (HDEL). Returns whether an entry was removed."""
        return bool(await self._client.hdel(self._redis_key, self._dump_key(key)))

    async def remove_item(self, key: K, value: V) -> bool:
        """Delete the entry only if its current value equals `value`.

        HGET then HDEL: not atomic. Another writer can replace the value
        between the two commands.
        """
        if not await self.contains(key, value):
            return False
        return await self.remove(key)

    async def clear(self) -> None:
        """Delete every entry by deleting the hash itself (DEL)."""
        await self._client.delete(self._redis_key)
        logger.debug(f"Cleared async dictionary {self._redis_key}")

    async def count(self) -> int:
        """Number of entries (HLEN)."""
        return int(await self._client.hlen(self._redis_key))

    async def keys(self) -> list[K]:
        """All keys, fetched in one HKEYS call."""
        return [self._load_key(field) for field in await self._client.hkeys(self._redis_key)]

    async def values(self) -> list[V]:
        """All values, fetched in one HVALS call."""
        return [self._load_value(raw) for raw in await self._client.hvals(self._redis_key)]

    async def to_dict(self) -> dict[K, V]:
        """Materialize every entry with one HGETALL."""
        entries = await self._client.hgetall(self._redis_key)
        return dict(self._load_entry(field, raw) for field, raw in entries.items())

    async def copy_to(self, buffer: list, offset: int = 0) -> None:
        """Write every (key, value) pair into `buffer` starting at `offset`.

        Raises:
            ValueError: If offset is negative
            IndexError: If the buffer is too short
        """
        if offset < 0:
            raise ValueError(f"offset must be non-negative, got {offset}")
        entries = await self._client.hgetall(self._redis_key)
        for field, raw in entries.items():
            buffer[offset] = self._load_entry(field, raw)
            offset += 1

    async def items(self) -> AsyncIterator[tuple[K, V]]:
        """Stream (key, value) pairs with HSCAN.

        Each step may suspend while the next batch is fetched. Calling
        `items()` again starts a new scan. A field can be returned twice if
        Redis rehashes the hash during the scan.
        """
        async for field, raw in self._client.hscan_iter(self._redis_key, count=self._options.scan_count):
            yield self._load_entry(field, raw)

    async def __aiter__(self) -> AsyncIterator[K]:
        async for key, _ in self.items():
            yield key
