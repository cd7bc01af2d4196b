"""Serializer contract shared by keys and values.

A serializer is generic per call, not per instance: one instance encodes any
value it is handed and decodes into whatever type the caller asks for.
"""

from typing import Any, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")

WireValue = bytes | str


@runtime_checkable
class Serializer(Protocol):
    """Converts values to and from the representation stored in Redis.

    Implementations must be deterministic: equal values serialize to equal
    wire values. Hash fields are matched by byte equality, so a key
    serializer that breaks this rule breaks lookups.
    """

    def serialize(self, value: Any) -> WireValue:
        """Encode a value for storage.

        Raises:
            EncodeError: If the value cannot be represented
        """
        ...

    def deserialize(self, data: WireValue, type_: type[T] | Any = Any) -> T:
        """Decode stored data into `type_`.

        Raises:
            DecodeError: If data is malformed or does not match `type_`
        """
        ...
