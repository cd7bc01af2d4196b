"""Pass-through serializer for plain strings."""

from typing import Any

from remote_collections.errors import DecodeError, EncodeError
from remote_collections.serializing.base import T, WireValue


class StringSerializer:
    """Stores `str` values as raw UTF-8, without any JSON quoting.

    Useful when the hash is shared with tools that read or write plain
    strings (redis-cli, other languages). Only `str` is supported.
    """

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def serialize(self, value: Any) -> bytes:
        if not isinstance(value, str):
            raise EncodeError(f"StringSerializer only encodes str, got {type(value).__name__}")
        return value.encode(self.encoding)

    def deserialize(self, data: WireValue, type_: type[T] | Any = Any) -> T:
        if type_ is not Any and type_ is not str:
            raise DecodeError(f"StringSerializer only decodes to str, not {type_!r}")
        if isinstance(data, str):
            return data
        try:
            return data.decode(self.encoding)
        except UnicodeDecodeError as e:
            raise DecodeError(f"Stored value is not valid {self.encoding}: {e}") from e

    def __repr__(self) -> str:
        return f"StringSerializer(encoding={self.encoding!r})"
