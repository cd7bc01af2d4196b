"""Python mappings backed by Redis hashes.

This package provides:
- RedisDictionary / AsyncRedisDictionary (dict semantics over HSET/HGET/HSCAN...)
- Pluggable serializers (JSON by default)
- RemoteCollectionFactory for creating named collections from shared clients
"""

__version__ = "0.1.0"

from remote_collections.dictionary import AsyncRedisDictionary, RedisDictionary
from remote_collections.errors import (
    DecodeError,
    DuplicateKeyError,
    EncodeError,
    KeyNotFoundError,
    RemoteCollectionError,
    SerializationError,
)
from remote_collections.factory import RemoteCollectionFactory
from remote_collections.keys import RedisKeyBuilder
from remote_collections.options import CollectionOptions
from remote_collections.serializing import JsonSerializer, Serializer, StringSerializer

__all__ = [
    "RedisDictionary",
    "AsyncRedisDictionary",
    "RemoteCollectionFactory",
    "CollectionOptions",
    "RedisKeyBuilder",
    "Serializer",
    "JsonSerializer",
    "StringSerializer",
    "RemoteCollectionError",
    "DuplicateKeyError",
    "KeyNotFoundError",
    "SerializationError",
    "EncodeError",
    "DecodeError",
]
