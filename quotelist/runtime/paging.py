"""Page size limits shared by the fetcher and the HTTP surface."""

from __future__ import annotations

import re
from typing import Any

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 100

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def clamp_page_size(value: Any) -> int:
    """Coerce a caller-supplied page size.

    The leading integer of the value is used, so "12.7" and "10abc" read as
    12 and 10. Missing, non-numeric and non-positive values fall back to
    DEFAULT_PAGE_SIZE; the result never exceeds MAX_PAGE_SIZE.

    Examples:
        >>> clamp_page_size("10")
        10
        >>> clamp_page_size("abc")
        50
        >>> clamp_page_size(500)
        100
    """
    match = _LEADING_INT.match(str(value)) if value is not None else None
    size = int(match.group(1)) if match else DEFAULT_PAGE_SIZE
    if size <= 0:
        size = DEFAULT_PAGE_SIZE
    return min(size, MAX_PAGE_SIZE)
