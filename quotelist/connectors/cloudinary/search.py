"""Cloudinary resources/search endpoint definition and adapter."""

from __future__ import annotations

from typing import Any

from quotelist.models import PartitionPage
from quotelist.runtime.rest import ResponseAdapter, RestEndpointSpec

from .config import basic_auth_header, build_expression, search_path


def build_path(params: dict[str, Any]) -> str:
    """Build the search path for the configured account."""
    return search_path(params["cloud_name"])


def build_body(params: dict[str, Any]) -> dict[str, Any]:
    """Build the search request body for one partition page."""
    body: dict[str, Any] = {
        "expression": build_expression(params["partition"], params["listing_filter"]),
        "max_results": params["page_size"],
        "sort_by": [{"public_id": "desc"}],
    }
    if params.get("token"):
        body["next_cursor"] = params["token"]
    return body


def build_headers(params: dict[str, Any]) -> dict[str, str]:
    return {
        "Authorization": basic_auth_header(params["api_key"], params["api_secret"]),
        "Content-Type": "application/json",
        "Cache-Control": "no-store",
    }


# Endpoint definition
SPEC = RestEndpointSpec(
    id="resources_search",
    method="POST",
    build_path=build_path,
    build_body=build_body,
    build_headers=build_headers,
)


class Adapter(ResponseAdapter):
    """Adapter for parsing a search response into a PartitionPage."""

    def parse(self, response: Any, params: dict[str, Any]) -> PartitionPage:
        """Parse a Cloudinary search response.

        Args:
            response: Decoded JSON body (``resources`` and ``next_cursor``)
            params: Request parameters containing the partition

        Returns:
            PartitionPage with the raw records and the upstream cursor
        """
        data = response if isinstance(response, dict) else {}
        resources = data.get("resources") or []
        next_cursor = data.get("next_cursor") or ""
        return PartitionPage(
            partition=params["partition"],
            records=tuple(row for row in resources if isinstance(row, dict)),
            next_token=next_cursor if isinstance(next_cursor, str) else str(next_cursor),
        )
