"""Factory binding Redis clients to named collections."""

from typing import Any

import redis
import redis.asyncio
from loguru import logger

from remote_collections.dictionary import AsyncRedisDictionary, RedisDictionary
from remote_collections.dictionary.base import K, V
from remote_collections.keys import RedisKeyBuilder
from remote_collections.options import CollectionOptions
from remote_collections.settings import Settings, settings as default_settings


class RemoteCollectionFactory:
    """Creates dictionary adapters that share one set of Redis clients.

    Usage:
        factory = RemoteCollectionFactory(redis.Redis())
        users = factory.create_dict("users", key_type=int, value_type=User)

        factory = RemoteCollectionFactory.from_settings()
        sessions = factory.create_dict_async("sessions")
    """

    def __init__(
        self,
        client: redis.Redis | None = None,
        async_client: redis.asyncio.Redis | None = None,
        options: CollectionOptions | None = None,
        key_builder: RedisKeyBuilder | None = None,
    ):
        """Initialize factory.

        Args:
            client: Blocking client for `create_dict`
            async_client: Asyncio client for `create_dict_async`
            options: Default options for every collection created here
            key_builder: Namespace key builder (defaults to settings prefix)
        """
        self.client = client
        self.async_client = async_client
        self.options = options or CollectionOptions()
        self.key_builder = key_builder or RedisKeyBuilder()

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "RemoteCollectionFactory":
        """Build a factory with sync and async clients for `settings.redis_url`.

        Clients connect lazily, so this never touches the network.
        """
        settings = settings or default_settings
        logger.info(f"Creating Redis clients for {settings.redis_url}")
        client = redis.Redis.from_url(settings.redis_url, decode_responses=settings.decode_responses)
        async_client = redis.asyncio.Redis.from_url(
            settings.redis_url, decode_responses=settings.decode_responses
        )
        return cls(
            client=client,
            async_client=async_client,
            options=CollectionOptions(scan_count=settings.scan_count),
            key_builder=RedisKeyBuilder(prefix=settings.key_prefix),
        )

    def create_dict(
        self,
        name: str,
        key_type: type[K] | Any = Any,
        value_type: type[V] | Any = Any,
        options: CollectionOptions | None = None,
    ) -> RedisDictionary[K, V]:
        """Create a blocking dictionary named `name`.

        Raises:
            ValueError: If the factory has no blocking client
        """
        if self.client is None:
            raise ValueError("RemoteCollectionFactory has no sync Redis client")
        return RedisDictionary(
            self.client,
            name,
            options=options or self.options,
            key_type=key_type,
            value_type=value_type,
            key_builder=self.key_builder,
        )

    def create_dict_async(
        self,
        name: str,
        key_type: type[K] | Any = Any,
        value_type: type[V] | Any = Any,
        options: CollectionOptions | None = None,
    ) -> AsyncRedisDictionary[K, V]:
        """Create an async dictionary named `name`.

        Raises:
            ValueError: If the factory has no async client
        """
        if self.async_client is None:
            raise ValueError("RemoteCollectionFactory has no async Redis client")
        return AsyncRedisDictionary(
            self.async_client,
            name,
            options=options or self.options,
            key_type=key_type,
            value_type=value_type,
            key_builder=self.key_builder,
        )
