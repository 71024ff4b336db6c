"""Continuation token codec.

The caller-facing token is an opaque string that carries one upstream cursor
per partition. It is URL-safe base64 of compact JSON::

    {"cursors": {"raw:upload": "<upstream cursor>", ...}, "v": 1}

Tokens issued by the hosted function (standard base64 of a flat
``{"raw:upload": "<cursor>"}`` object) are still accepted.

Both directions fail soft. A token that cannot be decoded restarts every
partition from the beginning, and a state that cannot be encoded ends
pagination, so neither ever breaks a listing call.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from collections.abc import Mapping
from typing import Any

from ..core.enums import PartitionKey
from ..models import ContinuationState
from .telemetry import log_cursor_rejected

logger = logging.getLogger(__name__)

CURSOR_VERSION = 1

# Longer tokens are rejected before decoding.
MAX_TOKEN_LENGTH = 8192


def encode_cursor(state: Mapping[PartitionKey, str]) -> str:
    """Serialize continuation state into an opaque token.

    Empty cursors are dropped. Returns "" when nothing is left to resume or
    when serialization fails.
    """
    try:
        cursors = {
            partition.slug: token for partition, token in (state or {}).items() if token
        }
        if not cursors:
            return ""
        payload = json.dumps(
            {"v": CURSOR_VERSION, "cursors": cursors},
            sort_keys=True,
            separators=(",", ":"),
        )
        return base64.urlsafe_b64encode(payload.encode("utf-8")).decode("ascii").rstrip("=")
    except (AttributeError, TypeError, ValueError) as e:
        logger.warning("cursor_encode_failed", extra={"error": str(e)})
        return ""


def decode_cursor(token: str | None) -> ContinuationState:
    """Parse an opaque token back into continuation state.

    Never raises: empty, truncated, forged or otherwise malformed tokens
    yield an empty mapping.
    """
    if not token or not isinstance(token, str):
        return {}
    if len(token) > MAX_TOKEN_LENGTH:
        log_cursor_rejected(reason="too_long", token_length=len(token))
        return {}

    try:
        raw = _b64decode(token.strip())
        data = json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, ValueError, RecursionError) as e:
        log_cursor_rejected(reason=type(e).__name__, token_length=len(token))
        return {}

    if not isinstance(data, dict):
        log_cursor_rejected(reason="not_an_object", token_length=len(token))
        return {}

    if "v" in data:
        if data.get("v") != CURSOR_VERSION or not isinstance(data.get("cursors"), dict):
            log_cursor_rejected(reason="unsupported_version", token_length=len(token))
            return {}
        return _to_state(data["cursors"])

    # Unversioned flat mapping
    return _to_state(data)


def _to_state(cursors: dict[str, Any]) -> ContinuationState:
    state: ContinuationState = {}
    for slug, value in cursors.items():
        partition = PartitionKey.from_slug(slug)
        if partition is None or not isinstance(value, str) or not value:
            continue
        state[partition] = value
    return state


def _b64decode(token: str) -> bytes:
    # Accept both alphabets and missing padding.
    normalized = token.replace("-", "+").replace("_", "/")
    normalized += "=" * (-len(normalized) % 4)
    return base64.b64decode(normalized, validate=True)
