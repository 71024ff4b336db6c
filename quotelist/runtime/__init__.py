"""Listing runtime.

Architecture:
    - cursor.py: continuation token codec
    - normalizer.py: raw record to ResourceItem mapping
    - aggregator.py: fan-out, merge and sort of partition pages
    - paging.py: page size limits
    - telemetry.py: structured logging
    - rest/: HTTP client and endpoint runner used by connectors
"""

from __future__ import annotations

from .aggregator import ListingAggregator, merge_pages, parse_timestamp, sort_items
from .cursor import decode_cursor, encode_cursor
from .normalizer import build_link, normalize_record, short_id
from .paging import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, clamp_page_size

__all__ = [
    "ListingAggregator",
    "merge_pages",
    "sort_items",
    "parse_timestamp",
    "decode_cursor",
    "encode_cursor",
    "normalize_record",
    "short_id",
    "build_link",
    "clamp_page_size",
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
]
