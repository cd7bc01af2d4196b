"""Default JSON serializer (orjson encoding, pydantic decoding)."""

import dataclasses
import math
from functools import lru_cache
from typing import Any

import orjson
from pydantic import BaseModel, TypeAdapter, ValidationError

from remote_collections.errors import DecodeError, EncodeError
from remote_collections.serializing.base import T, WireValue

# Sorted keys keep equal mappings byte-identical, which hash field lookup relies on.
# Non-str mapping keys are rejected: {1: x} and {"1": x} would share one field.
_DUMP_OPTIONS = orjson.OPT_SORT_KEYS


@lru_cache(maxsize=256)
def _adapter_for(type_: Any) -> TypeAdapter:
    return TypeAdapter(type_)


def _default(value: Any) -> Any:
    """Fallback for types orjson does not handle natively."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    raise TypeError(f"Type is not JSON serializable: {type(value).__name__}")


def _has_non_finite(value: Any) -> bool:
    """True if value holds inf or nan anywhere (orjson writes those as null)."""
    if isinstance(value, float):
        return not math.isfinite(value)
    if isinstance(value, dict):
        return any(_has_non_finite(v) for v in value.values())
    if isinstance(value, (list, tuple, set, frozenset)):
        return any(_has_non_finite(v) for v in value)
    if isinstance(value, BaseModel):
        return _has_non_finite(value.model_dump())
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return _has_non_finite(dataclasses.asdict(value))
    return False


class JsonSerializer:
    """Structured, human-readable encoding for arbitrary plain data.

    Encoding goes through orjson. Decoding parses with orjson and then
    validates against the requested type with a pydantic `TypeAdapter`, so
    any annotation pydantic understands can be requested:

        >>> s = JsonSerializer()
        >>> s.deserialize(s.serialize((1, 2)), tuple[int, int])
        (1, 2)

    Used for keys, equality is JSON equality, not Python equality: 1, 1.0
    and True encode to 1, 1.0 and true and are three different fields, while
    a tuple and a frozenset with the same items both encode to one array.
    Mappings with non-str keys, bytes, inf and nan are rejected with
    `EncodeError`.
    """

    def serialize(self, value: Any) -> bytes:
        try:
            data = orjson.dumps(value, default=_default, option=_DUMP_OPTIONS)
        except orjson.JSONEncodeError as e:
            raise EncodeError(f"Cannot encode {type(value).__name__} as JSON: {e}") from e
        # Only output containing null can hide an inf/nan, skip the walk otherwise
        if b"null" in data and _has_non_finite(value):
            raise EncodeError(f"Cannot encode {type(value).__name__} as JSON: inf and nan are not valid JSON")
        return data

    def deserialize(self, data: WireValue, type_: type[T] | Any = Any) -> T:
        try:
            decoded = orjson.loads(data)
        except orjson.JSONDecodeError as e:
            raise DecodeError(f"Invalid JSON: {e}") from e

        if type_ is Any:
            return decoded

        try:
            adapter = _adapter_for(type_)
        except TypeError:
            # Unhashable annotation, skip the cache
            adapter = TypeAdapter(type_)

        try:
            return adapter.validate_python(decoded)
        except ValidationError as e:
            raise DecodeError(f"Stored value does not match {type_!r}: {e}") from e

    def __repr__(self) -> str:
        return "JsonSerializer()"
