"""Data models."""

from .listing_filter import ListingFilter
from .page import ContinuationState, PartitionPage, RawRecord, ResultPage
from .resource import ResourceItem

__all__ = [
    "ContinuationState",
    "ListingFilter",
    "PartitionPage",
    "RawRecord",
    "ResourceItem",
    "ResultPage",
]
