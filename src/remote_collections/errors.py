"""Exception taxonomy for remote collections.

Redis client errors (connection, timeout, protocol) are not part of this
hierarchy. They propagate unchanged from the `redis` package.
"""

from typing import Any


class RemoteCollectionError(Exception):
    """Base class for errors raised by remote collections."""


class DuplicateKeyError(RemoteCollectionError, ValueError):
    """Raised by `add` when the key is already present in the hash."""

    def __init__(self, key: Any):
        self.key = key
        super().__init__(f"An item with the same key has already been added: {key!r}")


class KeyNotFoundError(RemoteCollectionError, KeyError):
    """Raised by indexed access when the key is absent from the hash."""

    def __init__(self, key: Any):
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        return f"Key {self.key!r} not found in dictionary"


class SerializationError(RemoteCollectionError):
    """Base class for serializer failures."""


class EncodeError(SerializationError, TypeError):
    """Value cannot be represented in the serializer's wire format."""


class DecodeError(SerializationError, ValueError):
    """Wire data is malformed or does not match the requested type."""
