"""Custom exception hierarchy."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .enums import PartitionKey


class ListingError(Exception):
    """Base exception for all library errors."""

    pass


class ConfigurationError(ListingError):
    """Required account identity or credentials are missing."""

    pass


class ProviderError(ListingError):
    """Error from the upstream asset store."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        detail: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class PartitionFetchError(ProviderError):
    """A partition fetch failed and the call was aborted.

    Raised only when the fail-fast policy is active. Carries the partition
    identity plus whatever upstream status and body were available.
    """

    def __init__(
        self,
        partition: PartitionKey,
        cause: Exception,
    ) -> None:
        status_code = getattr(cause, "status_code", None)
        detail = getattr(cause, "detail", None)
        message = f"Listing {partition.slug} failed: {str(cause) or type(cause).__name__}"
        super().__init__(message, status_code=status_code, detail=detail)
        self.partition = partition
        self.cause = cause
