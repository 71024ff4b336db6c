"""aiohttp application exposing ``GET /list``.

Query parameters:
    per: records per partition (default 50, max 100)
    next: continuation token from a previous response
    noprefix: "1" lists the whole folder instead of quote files only
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from aiohttp import web

from ..connectors.cloudinary import CloudinaryProvider
from ..connectors.cloudinary.config import API_BASE_URL
from ..core.base import BaseProvider
from ..core.config import ListingSettings
from ..core.exceptions import ConfigurationError, PartitionFetchError
from ..runtime.aggregator import ListingAggregator
from ..runtime.rest import HTTPClient

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[ListingSettings, HTTPClient], BaseProvider]

SETTINGS_KEY = web.AppKey("settings", ListingSettings)
HTTP_KEY = web.AppKey("http", HTTPClient)
PROVIDER_FACTORY_KEY = web.AppKey("provider_factory", ProviderFactory)

_NO_STORE = {"Cache-Control": "no-store"}


def create_app(
    settings: ListingSettings | None = None,
    provider_factory: ProviderFactory | None = None,
) -> web.Application:
    """Build the web application.

    Args:
        settings: Listing settings; loaded from the environment when omitted
        provider_factory: Builds the partition provider for a request from
            the settings and the shared HTTP client (CloudinaryProvider by
            default)
    """
    if settings is None:
        settings = ListingSettings()

    app = web.Application()
    app[SETTINGS_KEY] = settings
    app[HTTP_KEY] = HTTPClient(base_url=API_BASE_URL, timeout=settings.fetch_timeout)
    app[PROVIDER_FACTORY_KEY] = provider_factory or _cloudinary_provider
    app.router.add_get("/", handle_list)
    app.router.add_get("/list", handle_list)
    app.on_cleanup.append(_close_http)
    return app


def _cloudinary_provider(settings: ListingSettings, http: HTTPClient) -> BaseProvider:
    return CloudinaryProvider(settings, http=http)


async def _close_http(app: web.Application) -> None:
    await app[HTTP_KEY].close()


async def handle_list(request: web.Request) -> web.Response:
    """Return one merged listing page as JSON."""
    settings = request.app[SETTINGS_KEY]
    query = request.query

    try:
        settings.require_credentials()
        provider = request.app[PROVIDER_FACTORY_KEY](settings, request.app[HTTP_KEY])
        aggregator = ListingAggregator.from_settings(provider, settings)
        page = await aggregator.list_page(
            query.get("next", ""),
            query.get("per"),
            use_prefix=query.get("noprefix") != "1",
            base_url=settings.site_base_url or resolve_base_url(request.headers, request.path),
        )
    except ConfigurationError as e:
        logger.error("listing_not_configured")
        return _json(500, {"error": str(e)})
    except PartitionFetchError as e:
        return _json(
            502,
            {
                "error": str(e),
                "partition": e.partition.slug,
                "status": e.status_code,
                "detail": e.detail,
            },
        )
    except Exception as e:
        logger.exception("listing_failed")
        return _json(500, {"error": str(e) or type(e).__name__})

    return _json(200, page.to_payload())


def resolve_base_url(headers: Mapping[str, str], path: str = "/") -> str:
    """Derive the public base URL from proxy headers.

    Examples:
        >>> resolve_base_url({"Host": "quotes.example.com"}, "/app/")
        'https://quotes.example.com/app/'
        >>> resolve_base_url({}, "/")
        ''
    """
    lowered = {key.lower(): value for key, value in headers.items()}
    proto = (lowered.get("x-forwarded-proto") or "https").split(",")[0].strip() or "https"
    host = (lowered.get("x-forwarded-host") or lowered.get("host") or "").split(",")[0].strip()
    if not host:
        return ""
    path = path if path and path.endswith("/") else "/"
    return f"{proto}://{host}{path}".rstrip("/") + "/"


def run_server(
    settings: ListingSettings | None = None,
    host: str = "0.0.0.0",
    port: int = 8080,
) -> None:
    """Serve the listing endpoint until interrupted."""
    web.run_app(create_app(settings), host=host, port=port)


def _json(status: int, payload: dict[str, Any]) -> web.Response:
    return web.json_response(payload, status=status, headers=_NO_STORE)
