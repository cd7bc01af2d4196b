"""Per-collection options."""

from pydantic import BaseModel, ConfigDict, Field

from remote_collections.serializing import JsonSerializer, Serializer
from remote_collections.settings import settings


class CollectionOptions(BaseModel):
    """Serializers and scan tuning for one collection.

    Options are frozen once built and shared read-only by the adapter.
    Use `model_copy(update=...)` to derive a variant:

        >>> opts = CollectionOptions(key_serializer=StringSerializer())
        >>> wide = opts.model_copy(update={"scan_count": 1000})
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    key_serializer: Serializer = Field(
        default_factory=JsonSerializer, description="Serializer for hash fields (logical keys)"
    )
    value_serializer: Serializer = Field(
        default_factory=JsonSerializer, description="Serializer for hash values"
    )
    scan_count: int = Field(
        default_factory=lambda: settings.scan_count,
        gt=0,
        description="COUNT hint for HSCAN batches during enumeration",
    )
