"""Aggregation of per-partition pages into one listing page.

Architecture:
    A listing call fans out to every partition concurrently, each with its
    own upstream cursor taken from the caller's continuation token. The
    independent results are then folded by a pure merge step into one sorted
    item list and one outgoing continuation state.

Design Decisions:
    - Results are keyed by partition, so fetch completion order never
      affects the output
    - Recoverable failures come back as PartitionPage values; only the
      fail-fast policy turns them into an exception
    - The sort is local to one call: a partition whose cursor lags behind
      may still hold records newer than ones already returned. Independent
      per-partition cursors cannot give a global order without fetching
      ahead, which this service does not do.

See Also:
    - runtime.cursor: continuation token codec
    - runtime.normalizer: record to ResourceItem mapping
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Sequence
from datetime import datetime, timezone
from typing import Any

from ..core.base import BaseProvider
from ..core.config import FailurePolicy, ListingSettings
from ..core.enums import PartitionKey, iter_partitions
from ..core.exceptions import PartitionFetchError
from ..models import ContinuationState, ListingFilter, PartitionPage, ResourceItem, ResultPage
from .cursor import decode_cursor, encode_cursor
from .normalizer import normalize_record
from .paging import clamp_page_size
from .telemetry import log_page_assembled, log_partition_failed


class ListingAggregator:
    """Builds merged listing pages from a partition page provider.

    Example:
        >>> async with CloudinaryProvider(settings) as provider:
        ...     aggregator = ListingAggregator.from_settings(provider, settings)
        ...     page = await aggregator.list_page(page_size=20)
        ...     page = await aggregator.list_page(page.next, page_size=20)
    """

    def __init__(
        self,
        provider: BaseProvider,
        *,
        folder: str = "quotes",
        prefix: str | None = "q-",
        failure_policy: FailurePolicy = FailurePolicy.PARTIAL,
    ) -> None:
        self._provider = provider
        self._folder = folder
        self._prefix = prefix
        self._failure_policy = failure_policy

    @classmethod
    def from_settings(cls, provider: BaseProvider, settings: ListingSettings) -> ListingAggregator:
        return cls(
            provider,
            folder=settings.folder,
            prefix=settings.quote_prefix,
            failure_policy=settings.failure_policy,
        )

    @property
    def failure_policy(self) -> FailurePolicy:
        return self._failure_policy

    async def list_page(
        self,
        next_token: str | None = "",
        page_size: Any = None,
        *,
        use_prefix: bool = True,
        base_url: str = "",
    ) -> ResultPage:
        """Fetch one page from every partition and merge them.

        Args:
            next_token: Continuation token from a previous page ("" to start)
            page_size: Records per partition; coerced by clamp_page_size
            use_prefix: Restrict to quote filenames; False lists the whole folder
            base_url: Base for item links

        Returns:
            ResultPage sorted newest first, with the token for the next call

        Raises:
            PartitionFetchError: A partition failed under the fail-fast policy.
        """
        state = decode_cursor(next_token)
        per = clamp_page_size(page_size)
        listing_filter = ListingFilter(
            folder=self._folder,
            prefix=self._prefix if use_prefix else None,
        )

        pages = await self._fetch_all(state, per, listing_filter)
        items, outgoing = merge_pages(pages, folder=self._folder, base_url=base_url)

        log_page_assembled(
            items=len(items),
            partitions_with_more=len(outgoing),
            partitions_failed=sum(1 for page in pages if page.failed),
            page_size=per,
        )
        return ResultPage(items=items, next=encode_cursor(outgoing))

    async def _fetch_all(
        self,
        state: ContinuationState,
        page_size: int,
        listing_filter: ListingFilter,
    ) -> list[PartitionPage]:
        partitions = list(iter_partitions())
        results = await asyncio.gather(
            *(
                self._provider.fetch_page(
                    partition, state.get(partition, ""), page_size, listing_filter
                )
                for partition in partitions
            ),
            return_exceptions=True,
        )

        fatal = self._failure_policy is FailurePolicy.FAIL_FAST
        pages: list[PartitionPage] = []
        for partition, result in zip(partitions, results):
            if isinstance(result, Exception):
                log_partition_failed(
                    partition=partition,
                    error_type=type(result).__name__,
                    error_message=str(result),
                    status_code=getattr(result, "status_code", None),
                    fatal=fatal,
                )
                if fatal:
                    # First failure in partition order, regardless of timing.
                    raise PartitionFetchError(partition, result) from result
                pages.append(PartitionPage.failure(partition, result))
            elif isinstance(result, BaseException):
                raise result
            else:
                pages.append(result)
        return pages


def merge_pages(
    pages: Iterable[PartitionPage],
    *,
    folder: str,
    base_url: str,
) -> tuple[list[ResourceItem], ContinuationState]:
    """Fold partition pages into sorted items and the outgoing state.

    Failed pages contribute neither records nor a cursor.
    """
    items: list[ResourceItem] = []
    outgoing: ContinuationState = {}
    for page in pages:
        if page.failed:
            continue
        items.extend(
            normalize_record(raw, page.partition, folder, base_url) for raw in page.records
        )
        if page.next_token:
            outgoing[page.partition] = page.next_token
    return sort_items(items), outgoing


def sort_items(items: Sequence[ResourceItem]) -> list[ResourceItem]:
    """Sort newest first.

    Equal timestamps are ordered by partition order, then by short id.
    Items without a parseable timestamp go last.
    """
    return sorted(items, key=_sort_key)


def _sort_key(item: ResourceItem) -> tuple[float, int, str]:
    created = parse_timestamp(item.created_at)
    newest_first = -created if created is not None else float("inf")
    return (newest_first, PartitionKey(item.resource_type, item.type).index, item.id)


def parse_timestamp(value: str | None) -> float | None:
    """Parse an ISO 8601 timestamp to epoch seconds, None if unparseable.

    Naive timestamps are taken as UTC.

    Examples:
        >>> parse_timestamp("1970-01-01T00:01:00Z")
        60.0
        >>> parse_timestamp("yesterday") is None
        True
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp()
