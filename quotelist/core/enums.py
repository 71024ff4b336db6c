"""Core enumerations and the partition set queried on every listing call.

Architecture:
    The asset store keeps resources in independent partitions addressed by a
    storage class (resource type) and an access class (delivery type). A
    listing call queries every combination of the two, so the full set is
    computed once here and consumed by position rather than rebuilt through
    nested loops at call sites.

Design Decisions:
    - String enums: values are sent verbatim to the upstream search API
    - Frozen dataclass: PartitionKey is hashable and used as a mapping key
    - Fixed order: storage-class-major, access-class-minor

See Also:
    - runtime.cursor: keys continuation state by PartitionKey.slug
    - runtime.aggregator: fetches PARTITIONS in order
"""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ResourceType(str, Enum):
    """Storage class of an asset."""

    RAW = "raw"
    IMAGE = "image"
    VIDEO = "video"


class DeliveryType(str, Enum):
    """Access class of an asset."""

    UPLOAD = "upload"
    AUTHENTICATED = "authenticated"
    PRIVATE = "private"


@dataclass(frozen=True)
class PartitionKey:
    """One (resource_type, delivery_type) partition."""

    resource_type: ResourceType
    delivery_type: DeliveryType

    @property
    def slug(self) -> str:
        """Wire form used as the continuation state key, e.g. ``raw:upload``."""
        return f"{self.resource_type.value}:{self.delivery_type.value}"

    @property
    def index(self) -> int:
        """Position of this partition in enumeration order."""
        return _INDEX[self]

    @classmethod
    def from_slug(cls, slug: str) -> Optional["PartitionKey"]:
        """Parse a slug. Returns None if it names no known partition."""
        return _BY_SLUG.get(slug)

    def __str__(self) -> str:
        return self.slug


PARTITIONS: tuple[PartitionKey, ...] = tuple(
    PartitionKey(resource_type, delivery_type)
    for resource_type in ResourceType
    for delivery_type in DeliveryType
)

_INDEX = {partition: i for i, partition in enumerate(PARTITIONS)}
_BY_SLUG = {partition.slug: partition for partition in PARTITIONS}


def iter_partitions() -> Iterator[PartitionKey]:
    """Yield every partition in fixed enumeration order."""
    return iter(PARTITIONS)
