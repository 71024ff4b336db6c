"""Cloudinary partition page provider."""

from __future__ import annotations

import asyncio
from time import perf_counter

from quotelist.core.base import BaseProvider
from quotelist.core.config import ListingSettings
from quotelist.core.enums import PartitionKey
from quotelist.models import ListingFilter, PartitionPage
from quotelist.runtime.paging import clamp_page_size
from quotelist.runtime.rest import HTTPClient, RestRunner
from quotelist.runtime.telemetry import log_partition_fetched

from .config import API_BASE_URL
from .search import SPEC, Adapter


class CloudinaryProvider(BaseProvider):
    """Fetches one search page per partition from the Cloudinary admin API.

    The HTTP client may be shared across providers; it is only closed here
    when the provider created it.
    """

    def __init__(
        self,
        settings: ListingSettings,
        http: HTTPClient | None = None,
    ) -> None:
        super().__init__(name="cloudinary")
        settings.require_credentials()
        self._settings = settings
        self._owns_http = http is None
        self._http = http or HTTPClient(base_url=API_BASE_URL)
        self._runner = RestRunner(self._http)
        self._adapter = Adapter()

    async def fetch_page(
        self,
        partition: PartitionKey,
        token: str,
        page_size: int,
        listing_filter: ListingFilter,
    ) -> PartitionPage:
        """Issue exactly one search request for one partition.

        Raises:
            ProviderError: The upstream answered with an error or could not
                be reached.
            TimeoutError: The request exceeded the configured fetch timeout.
        """
        params = {
            "cloud_name": self._settings.cloud_name,
            "api_key": self._settings.api_key,
            "api_secret": self._settings.api_secret.get_secret_value(),
            "partition": partition,
            "token": token or "",
            "page_size": clamp_page_size(page_size),
            "listing_filter": listing_filter,
        }

        start = perf_counter()
        page = await asyncio.wait_for(
            self._runner.run(spec=SPEC, adapter=self._adapter, params=params),
            timeout=self._settings.fetch_timeout,
        )
        log_partition_fetched(
            partition=partition,
            records=len(page.records),
            has_more=bool(page.next_token),
            latency_ms=(perf_counter() - start) * 1000.0,
        )
        return page

    async def close(self) -> None:
        if self._owns_http:
            await self._http.close()
