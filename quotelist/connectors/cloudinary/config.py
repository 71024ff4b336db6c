"""Shared Cloudinary constants and request helpers.

This module centralizes the API URL, authentication header and search
expression construction so the provider can stay small and focused.
"""

from __future__ import annotations

import base64

from quotelist.core.enums import PartitionKey
from quotelist.models import ListingFilter

API_BASE_URL = "https://api.cloudinary.com/v1_1"


def search_path(cloud_name: str) -> str:
    """Search API path for an account.

    Examples:
        >>> search_path("demo")
        '/demo/resources/search'
    """
    return f"/{cloud_name}/resources/search"


def basic_auth_header(api_key: str, api_secret: str) -> str:
    """HTTP Basic authorization header value for the admin API."""
    token = base64.b64encode(f"{api_key}:{api_secret}".encode()).decode("ascii")
    return f"Basic {token}"


def escape_expression(value: str) -> str:
    """Escape double quotes for use inside a quoted search term."""
    return str(value or "").replace('"', '\\"')


def build_expression(partition: PartitionKey, listing_filter: ListingFilter) -> str:
    """Build the search expression for one partition.

    Examples:
        >>> from quotelist.core.enums import PARTITIONS
        >>> build_expression(PARTITIONS[0], ListingFilter("quotes"))
        'folder="quotes" AND resource_type=raw AND type=upload'
    """
    folder = escape_expression(listing_filter.folder)
    expression = (
        f'folder="{folder}"'
        f" AND resource_type={partition.resource_type.value}"
        f" AND type={partition.delivery_type.value}"
    )
    if listing_filter.prefix:
        prefix = escape_expression(listing_filter.prefix)
        expression += f' AND (filename="{prefix}*" OR public_id="{folder}/{prefix}*")'
    return expression
