"""Shared fixtures for unit tests."""

from __future__ import annotations

import pytest

from quotelist.core import ListingSettings, PartitionKey
from quotelist.core.base import BaseProvider
from quotelist.models import ListingFilter, PartitionPage


class FakeProvider(BaseProvider):
    """In-memory partition provider recording every fetch."""

    def __init__(
        self,
        pages: dict[PartitionKey, tuple[list[dict], str]] | None = None,
        errors: dict[PartitionKey, Exception] | None = None,
    ) -> None:
        super().__init__(name="fake")
        self.pages = pages or {}
        self.errors = errors or {}
        self.calls: list[tuple[PartitionKey, str, int, ListingFilter]] = []

    async def fetch_page(
        self,
        partition: PartitionKey,
        token: str,
        page_size: int,
        listing_filter: ListingFilter,
    ) -> PartitionPage:
        self.calls.append((partition, token, page_size, listing_filter))
        if partition in self.errors:
            raise self.errors[partition]
        records, next_token = self.pages.get(partition, ([], ""))
        return PartitionPage(partition=partition, records=tuple(records), next_token=next_token)


@pytest.fixture
def fake_provider():
    """Factory for FakeProvider instances."""
    return FakeProvider


@pytest.fixture
def settings() -> ListingSettings:
    """Fully configured settings independent of the process environment."""
    return ListingSettings(
        cloud_name="demo",
        api_key="key",
        api_secret="secret",
        folder="quotes",
        quote_prefix="q-",
        site_base_url="",
        fetch_timeout=5.0,
        failure_policy="partial",
        _env_file=None,
    )


def record(public_id: str, created_at: str | None, **extra) -> dict:
    """Build a raw upstream record."""
    row = {
        "public_id": public_id,
        "created_at": created_at,
        "bytes": 1024,
        "format": "pdf",
        "filename": public_id.rsplit("/", 1)[-1].rsplit(".", 1)[0],
    }
    row.update(extra)
    return row


@pytest.fixture
def make_record():
    return record
