"""HTTP client helper."""

from __future__ import annotations

import json
from typing import Any

import aiohttp

from ...core.exceptions import ProviderError

# Upstream bodies are echoed into error details, keep them short.
_MAX_DETAIL_CHARS = 500


class HTTPClient:
    """Async HTTP client wrapper."""

    def __init__(self, base_url: str | None = None, timeout: float = 30.0) -> None:
        self.base_url = base_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: aiohttp.ClientSession | None = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    async def post(
        self,
        url: str,
        json_body: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """POST a JSON body and return the decoded JSON response.

        Raises:
            ProviderError: On a non-2xx status, a transport failure, or a
                body that is not JSON.
        """
        # If base_url is set and url is relative, combine them
        if self.base_url and not url.startswith("http"):
            url = f"{self.base_url}{url}"

        try:
            async with self.session.post(url, json=json_body, headers=headers) as response:
                text = await response.text()
                if response.status >= 400:
                    raise ProviderError(
                        f"Upstream returned HTTP {response.status}",
                        status_code=response.status,
                        detail=text[:_MAX_DETAIL_CHARS] or None,
                    )
        except aiohttp.ClientError as e:
            raise ProviderError(f"Upstream request failed: {e}") from e

        try:
            return json.loads(text) if text else {}
        except ValueError as e:
            raise ProviderError(
                "Upstream returned invalid JSON",
                status_code=response.status,
                detail=text[:_MAX_DETAIL_CHARS],
            ) from e

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
