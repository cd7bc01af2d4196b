"""Namespace key derivation for collections stored in Redis."""

from remote_collections.settings import settings

KEY_SEPARATOR = "+"

# Type tags
DICTIONARY_TYPE_TAG = "IDictionary"


class RedisKeyBuilder:
    """Derives the Redis key that holds a logical collection.

    Key format: ``{prefix}{type_tag}+{name}``. Two collections built with the
    same type tag and name address the same Redis key, which is how separate
    adapter instances (and processes) share one collection.

    Examples:
        >>> RedisKeyBuilder().build("IDictionary", "sessions")
        'IDictionary+sessions'
        >>> RedisKeyBuilder(prefix="app:").build("IDictionary", "sessions")
        'app:IDictionary+sessions'
    """

    def __init__(self, prefix: str | None = None):
        """Initialize key builder.

        Args:
            prefix: Key prefix override (defaults to settings.key_prefix)
        """
        self.prefix = settings.key_prefix if prefix is None else prefix

    def build(self, type_tag: str, name: str) -> str:
        """Build the namespace key for a collection.

        Args:
            type_tag: Collection kind (e.g. DICTIONARY_TYPE_TAG)
            name: Logical collection name

        Returns:
            Redis key string

        Raises:
            ValueError: If type_tag contains the separator (keys would collide)
        """
        if KEY_SEPARATOR in type_tag:
            raise ValueError(f"type_tag must not contain {KEY_SEPARATOR!r}: {type_tag!r}")
        return f"{self.prefix}{type_tag}{KEY_SEPARATOR}{name}"
