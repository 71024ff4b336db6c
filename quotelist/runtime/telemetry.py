"""Structured logging for listing operations.

This module provides telemetry hooks for partition fetches and page
assembly, emitting structured logs for observability.
"""

from __future__ import annotations

import logging

from ..core.enums import PartitionKey

logger = logging.getLogger(__name__)


def log_partition_fetched(
    *,
    partition: PartitionKey,
    records: int,
    has_more: bool,
    latency_ms: float | None = None,
) -> None:
    """Log a successful partition fetch.

    Args:
        partition: Partition that was fetched
        records: Number of raw records returned
        has_more: Whether the upstream returned a next cursor
        latency_ms: Latency in milliseconds (optional)
    """
    logger.debug(
        "partition_fetched",
        extra={
            "partition": partition.slug,
            "records": records,
            "has_more": has_more,
            "latency_ms": latency_ms,
        },
    )


def log_partition_failed(
    *,
    partition: PartitionKey,
    error_type: str,
    error_message: str,
    status_code: int | None = None,
    fatal: bool = False,
) -> None:
    """Log a failed partition fetch.

    Args:
        partition: Partition whose fetch failed
        error_type: Exception class name
        error_message: Exception message
        status_code: Upstream HTTP status, if any
        fatal: Whether the failure aborts the listing call
    """
    logger.log(
        logging.ERROR if fatal else logging.WARNING,
        "partition_failed",
        extra={
            "partition": partition.slug,
            "error_type": error_type,
            "error_message": error_message,
            "status_code": status_code,
            "fatal": fatal,
        },
    )


def log_page_assembled(
    *,
    items: int,
    partitions_with_more: int,
    partitions_failed: int,
    page_size: int,
) -> None:
    """Log completion of a merged listing page."""
    logger.info(
        "page_assembled",
        extra={
            "items": items,
            "partitions_with_more": partitions_with_more,
            "partitions_failed": partitions_failed,
            "page_size": page_size,
        },
    )


def log_cursor_rejected(*, reason: str, token_length: int) -> None:
    """Log a continuation token that could not be decoded."""
    logger.debug(
        "cursor_rejected",
        extra={"reason": reason, "token_length": token_length},
    )
