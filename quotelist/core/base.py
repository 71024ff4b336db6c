"""Base provider abstract class.

Architecture:
    This module defines the BaseProvider abstract base class that the
    aggregator talks to. A provider fetches exactly one page from one
    partition per call and knows nothing about the other partitions or about
    the caller-facing continuation token.

Design Decisions:
    - Abstract base class: the aggregator can be driven by an in-memory
      provider in tests
    - Failures raise: the aggregator decides whether a failure degrades the
      page or aborts the call
    - Async context manager: ensures proper resource cleanup

See Also:
    - CloudinaryProvider: the upstream implementation
    - ListingAggregator: drives one fetch per partition
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..models import ListingFilter, PartitionPage
    from .enums import PartitionKey


class BaseProvider(ABC):
    """Abstract base class for partition page providers."""

    def __init__(self, name: str) -> None:
        self.name = name

    @abstractmethod
    async def fetch_page(
        self,
        partition: PartitionKey,
        token: str,
        page_size: int,
        listing_filter: ListingFilter,
    ) -> PartitionPage:
        """Fetch one page of raw records from one partition.

        Args:
            partition: Partition to list
            token: Upstream cursor for this partition, "" to start fresh
            page_size: Maximum records to return
            listing_filter: Folder and prefix restriction

        Returns:
            PartitionPage with the records and the upstream next cursor
        """
        pass

    async def close(self) -> None:
        """Close provider connections and cleanup resources."""
        pass

    async def __aenter__(self) -> BaseProvider:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
