"""quotelist - merged, paginated listing of quote documents across asset store partitions."""

from .core import (
    PARTITIONS,
    ConfigurationError,
    DeliveryType,
    FailurePolicy,
    ListingError,
    ListingSettings,
    PartitionFetchError,
    PartitionKey,
    ProviderError,
    ResourceType,
    iter_partitions,
)
from .models import (
    ContinuationState,
    ListingFilter,
    PartitionPage,
    ResourceItem,
    ResultPage,
)
from .runtime import (
    ListingAggregator,
    clamp_page_size,
    decode_cursor,
    encode_cursor,
)
from .connectors import CloudinaryProvider

__version__ = "0.1.0"

__all__ = [
    # Partitions
    "ResourceType",
    "DeliveryType",
    "PartitionKey",
    "PARTITIONS",
    "iter_partitions",
    # Configuration
    "FailurePolicy",
    "ListingSettings",
    # Models
    "ContinuationState",
    "ListingFilter",
    "PartitionPage",
    "ResourceItem",
    "ResultPage",
    # Runtime
    "ListingAggregator",
    "clamp_page_size",
    "decode_cursor",
    "encode_cursor",
    # Providers
    "CloudinaryProvider",
    # Exceptions
    "ListingError",
    "ConfigurationError",
    "ProviderError",
    "PartitionFetchError",
]
