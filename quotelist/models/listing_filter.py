"""Listing restriction passed down to partition fetches."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ListingFilter:
    """Folder and optional filename prefix a listing is restricted to.

    Attributes:
        folder: Asset folder to list
        prefix: Quote filename prefix, or None to list the whole folder
    """

    folder: str
    prefix: str | None = None
