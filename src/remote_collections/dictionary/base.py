"""State and codec helpers shared by the sync and async dictionaries."""

from typing import Any, Generic, TypeVar

from remote_collections.keys import DICTIONARY_TYPE_TAG, RedisKeyBuilder
from remote_collections.options import CollectionOptions
from remote_collections.serializing import WireValue

K = TypeVar("K")
V = TypeVar("V")


class RedisHashBase(Generic[K, V]):
    """Fixed configuration of a dictionary backed by one Redis hash.

    Holds the namespace key, the serializers and the logical key/value types.
    None of it changes after construction, and no entries are cached locally.
    """

    type_tag = DICTIONARY_TYPE_TAG

    def __init__(
        self,
        name: str,
        options: CollectionOptions | None = None,
        key_type: type[K] | Any = Any,
        value_type: type[V] | Any = Any,
        key_builder: RedisKeyBuilder | None = None,
    ):
        self._name = name
        self._options = options or CollectionOptions()
        self._key_type = key_type
        self._value_type = value_type
        self._redis_key = (key_builder or RedisKeyBuilder()).build(self.type_tag, name)

    @property
    def name(self) -> str:
        """Logical collection name."""
        return self._name

    @property
    def redis_key(self) -> str:
        """Redis key holding the hash."""
        return self._redis_key

    @property
    def options(self) -> CollectionOptions:
        return self._options

    def _dump_key(self, key: K) -> WireValue:
        return self._options.key_serializer.serialize(key)

    def _dump_value(self, value: V) -> WireValue:
        return self._options.value_serializer.serialize(value)

    def _load_key(self, field: WireValue) -> K:
        return self._options.key_serializer.deserialize(field, self._key_type)

    def _load_value(self, raw: WireValue) -> V:
        return self._options.value_serializer.deserialize(raw, self._value_type)

    def _load_entry(self, field: WireValue, raw: WireValue) -> tuple[K, V]:
        return self._load_key(field), self._load_value(raw)

    @staticmethod
    def _is_missing(raw: WireValue | None) -> bool:
        # HGET replies None for a missing field; an empty value counts as missing too
        return not raw

    def __repr__(self) -> str:
        return f"{type(self).__name__}(redis_key={self._redis_key!r})"
