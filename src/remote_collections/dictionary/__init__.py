"""Dictionary adapters over Redis hashes."""

from remote_collections.dictionary.aio import AsyncRedisDictionary
from remote_collections.dictionary.sync import RedisDictionary, ScanItemsView

__all__ = ["RedisDictionary", "AsyncRedisDictionary", "ScanItemsView"]
