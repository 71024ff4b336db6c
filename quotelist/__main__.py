"""Command line entry point.

Usage:
    # Serve GET /list on port 8080
    python -m quotelist serve --port 8080

    # Print the first page, 20 records per partition
    python -m quotelist fetch --per 20

    # Continue from a previous page
    python -m quotelist fetch --next <token>
"""

import argparse
import asyncio
import json
import logging
import sys

from .connectors.cloudinary import CloudinaryProvider
from .core import ListingError, ListingSettings
from .runtime import ListingAggregator
from .server import run_server


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="quotelist", description=__doc__.splitlines()[0])
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Serve the listing endpoint")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8080)

    fetch = sub.add_parser("fetch", help="Print one listing page as JSON")
    fetch.add_argument("--per", default=None, help="Records per partition (max 100)")
    fetch.add_argument("--next", default="", help="Continuation token")
    fetch.add_argument("--noprefix", action="store_true", help="List the whole folder")
    fetch.add_argument("--base-url", default=None, help="Base URL for item links")
    return parser


async def fetch_page(settings: ListingSettings, args: argparse.Namespace) -> dict:
    async with CloudinaryProvider(settings) as provider:
        aggregator = ListingAggregator.from_settings(provider, settings)
        page = await aggregator.list_page(
            args.next,
            args.per,
            use_prefix=not args.noprefix,
            base_url=args.base_url if args.base_url is not None else settings.site_base_url,
        )
    return page.to_payload()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    settings = ListingSettings()

    if args.command == "serve":
        run_server(settings, host=args.host, port=args.port)
        return 0

    try:
        payload = asyncio.run(fetch_page(settings, args))
    except ListingError as e:
        print(json.dumps({"error": str(e)}), file=sys.stderr)
        return 1
    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
