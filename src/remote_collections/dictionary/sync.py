"""Dictionary backed by a Redis hash (blocking client).

Every operation maps to one Redis hash command against the collection's
namespace key:

- add -> HSETNX, d[k] = v -> HSET, try_get / d[k] -> HGET
- k in d -> HEXISTS, remove -> HDEL, clear -> DEL, len -> HLEN
- keys -> HKEYS, values -> HVALS, copy_to -> HGETALL
- iteration -> HSCAN (cursor based, bounded batches)

Redis errors are never caught here; they reach the caller unchanged.
"""

from collections.abc import ItemsView, Iterator, MutableMapping
from typing import Any

from loguru import logger
from redis import Redis

from remote_collections.dictionary.base import K, RedisHashBase, V
from remote_collections.errors import DuplicateKeyError, KeyNotFoundError
from remote_collections.keys import RedisKeyBuilder
from remote_collections.options import CollectionOptions


class ScanItemsView(ItemsView):
    """Items view that streams entries with HSCAN.

    Each iteration starts a fresh scan, so the view can be iterated any
    number of times. `len()` is a single HLEN.
    """

    def __iter__(self):
        return self._mapping.scan_items()

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, tuple) or len(item) != 2:
            return False
        key, value = item
        return self._mapping.contains(key, value)


class RedisDictionary(RedisHashBase[K, V], MutableMapping[K, V]):
    """Mutable mapping whose entries live in a Redis hash.

    The adapter is stateless apart from its fixed configuration. Several
    instances created with the same name (in this or other processes) see the
    same entries. Dropping an instance never deletes data; only `clear()` does.

    Usage:
        d = RedisDictionary(Redis(), "sessions", key_type=str, value_type=int)
        d.add("alice", 1)
        d["bob"] = 2
        found, value = d.try_get("alice")
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
            client: Redis client used for every command
            name: Logical collection name
            options: Serializers and scan tuning (defaults to JSON both ways)
            key_type: Type keys are decoded into
            value_type: Type values are decoded into
            key_builder: Namespace key builder override
        """
        super().__init__(name, options, key_type, value_type, key_builder)
        self._client = client
        logger.debug(f"Opened dictionary {self._redis_key}")

    # -- writes ---------------------------------------------------------

    def add(self, key: K, value: V) -> None:
        """Insert a new entry.

        Uses HSETNX so that two concurrent adders of the same key cannot both
        succeed.

        Raises:
            DuplicateKeyError: If the key already exists (entry is left unchanged)
        """
        if not self._set(key, value, replace=False):
            raise DuplicateKeyError(key)

    def set(self, key: K, value: V) -> None:
        """Insert or replace an entry (HSET)."""
        self._set(key, value, replace=True)

    def __setitem__(self, key: K, value: V) -> None:
        self._set(key, value, replace=True)

    def _set(self, key: K, value: V, replace: bool) -> bool:
        field = self._dump_key(key)
        raw = self._dump_value(value)
        if replace:
            self._client.hset(self._redis_key, field, raw)
            return True
        return bool(self._client.hsetnx(self._redis_key, field, raw))

    def setdefault(self, key: K, default: V = None) -> V:
        """Return the value for key, inserting default first if absent."""
        if self._set(key, default, replace=False):
            return default
        return self[key]

    # -- reads ----------------------------------------------------------

    def try_get(self, key: K) -> tuple[bool, V | None]:
        """Read one entry with a single HGET.

        Returns:
            (True, value) if present, (False, None) otherwise
        """
        raw = self._client.hget(self._redis_key, self._dump_key(key))
        if self._is_missing(raw):
            return False, None
        return True, self._load_value(raw)

    def __getitem__(self, key: K) -> V:
        found, value = self.try_get(key)
        if not found:
            raise KeyNotFoundError(key)
        return value

    def get(self, key: K, default: V | None = None) -> V | None:
        found, value = self.try_get(key)
        return value if found else default

    def contains_key(self, key: K) -> bool:
        """Check key presence (HEXISTS)."""
        return bool(self._client.hexists(self._redis_key, self._dump_key(key)))

    def __contains__(self, key: object) -> bool:
        return self.contains_key(key)

    def contains(self, key: K, value: V) -> bool:
        """Check that key is present and its value equals `value`."""
        found, current = self.try_get(key)
        return found and current == value

    # -- removal --------------------------------------------------------

    def remove(self, key: K) -> bool:
        """Delete one entry (HDEL).

        Returns:
            True if an entry was removed, False if the key was absent
        """
        return bool(self._client.hdel(self._redis_key, self._dump_key(key)))

    def __delitem__(self, key: K) -> None:
        if not self.remove(key):
            raise KeyNotFoundError(key)

    def remove_item(self, key: K, value: V) -> bool:
        """Delete the entry only if its current value equals `value`.

        This is HGET followed by HDEL, two separate commands. A concurrent
        writer can replace the value in between, in which case the new value
        is deleted. Use a server-side script if that race matters.

        Returns:
            True if the entry matched and was removed
        """
        if not self.contains(key, value):
            return False
        return self.remove(key)

    def clear(self) -> None:
        """Delete every entry by deleting the hash itself (DEL)."""
        self._client.delete(self._redis_key)
        logger.debug(f"Cleared dictionary {self._redis_key}")

    # -- bulk reads -----------------------------------------------------

    def __len__(self) -> int:
        return int(self._client.hlen(self._redis_key))

    def count(self) -> int:
        """Number of entries (HLEN)."""
        return len(self)

    def keys(self) -> list[K]:
        """All keys, fetched in one HKEYS call."""
        return [self._load_key(field) for field in self._client.hkeys(self._redis_key)]

    def values(self) -> list[V]:
        """All values, fetched in one HVALS call."""
        return [self._load_value(raw) for raw in self._client.hvals(self._redis_key)]

    def items(self) -> ScanItemsView:
        """Restartable, lazily scanned view of (key, value) pairs."""
        return ScanItemsView(self)

    def copy_to(self, buffer: list, offset: int = 0) -> None:
        """Write every (key, value) pair into `buffer` starting at `offset`.

        Entries are fetched once with HGETALL. The buffer must already hold at
        least `offset + len(self)` slots.

        Raises:
            ValueError: If offset is negative
            IndexError: If the buffer is too short
        """
        if offset < 0:
            raise ValueError(f"offset must be non-negative, got {offset}")
        for field, raw in self._client.hgetall(self._redis_key).items():
            buffer[offset] = self._load_entry(field, raw)
            offset += 1

    def scan_items(self) -> Iterator[tuple[K, V]]:
        """Stream (key, value) pairs with HSCAN.

        Only one batch of `options.scan_count` entries is held at a time, so
        this works for hashes too large to fetch at once.

        HSCAN only guarantees that fields present for the whole scan are
        returned at least once. If Redis rehashes the hash mid-scan a field
        can come back twice; callers that need exact counts should use
        `len()` or `copy_to`.
        """
        for field, raw in self._client.hscan_iter(self._redis_key, count=self._options.scan_count):
            yield self._load_entry(field, raw)

    def __iter__(self) -> Iterator[K]:
        for key, _ in self.scan_items():
            yield key
