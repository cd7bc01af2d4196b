"""Pluggable key/value serializers."""

from remote_collections.serializing.base import Serializer, WireValue
from remote_collections.serializing.json_serializer import JsonSerializer
from remote_collections.serializing.string_serializer import StringSerializer

__all__ = ["Serializer", "WireValue", "JsonSerializer", "StringSerializer"]
