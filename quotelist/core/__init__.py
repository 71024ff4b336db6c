"""Core components."""

from .config import FailurePolicy, ListingSettings
from .enums import (
    PARTITIONS,
    DeliveryType,
    PartitionKey,
    ResourceType,
    iter_partitions,
)
from .exceptions import (
    ConfigurationError,
    ListingError,
    PartitionFetchError,
    ProviderError,
)

__all__ = [
    "ResourceType",
    "DeliveryType",
    "PartitionKey",
    "PARTITIONS",
    "iter_partitions",
    "FailurePolicy",
    "ListingSettings",
    "ListingError",
    "ConfigurationError",
    "ProviderError",
    "PartitionFetchError",
]
