"""Mapping of raw upstream records to ResourceItem."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

from ..core.enums import PartitionKey
from ..models import ResourceItem

# encodeURIComponent leaves these unescaped
_URI_COMPONENT_SAFE = "-_.!~*'()"


def short_id(public_id: str | None, folder: str) -> str:
    """Strip leading slashes, then one leading ``folder`` and optional slash.

    Falls back to the slash-stripped path when stripping leaves nothing.

    Examples:
        >>> short_id("quotes/q-1234.pdf", "quotes")
        'q-1234.pdf'
        >>> short_id("/quotes", "quotes")
        'quotes'
    """
    path = (public_id or "").lstrip("/")
    if not folder:
        return path
    stripped = re.sub(f"^{re.escape(folder)}/?", "", path, count=1)
    return stripped or path


def build_link(base_url: str, item_id: str) -> str:
    """Build the caller-facing link for an item.

    Examples:
        >>> build_link("https://example.com/app", "q-1234.pdf")
        'https://example.com/app/?cid=q-1234.pdf'
        >>> build_link("", "a b")
        '/?cid=a%20b'
    """
    base = base_url.rstrip("/") + "/" if base_url else "/"
    return f"{base}?cid={quote(item_id, safe=_URI_COMPONENT_SAFE)}"


def normalize_record(
    raw: Mapping[str, Any],
    partition: PartitionKey,
    folder: str,
    base_url: str,
) -> ResourceItem:
    """Normalize one upstream record. Missing fields become None."""
    raw = raw if isinstance(raw, Mapping) else {}
    public_id = _as_str(raw.get("public_id"))
    item_id = short_id(public_id, folder)
    return ResourceItem(
        id=item_id,
        public_id=public_id,
        created_at=_as_str(raw.get("created_at")),
        bytes=_as_int(raw.get("bytes")),
        format=_as_str(raw.get("format")),
        filename=_as_str(raw.get("filename")),
        resource_type=partition.resource_type,
        type=partition.delivery_type,
        link=build_link(base_url, item_id),
    )


def _as_str(value: Any) -> str | None:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None
