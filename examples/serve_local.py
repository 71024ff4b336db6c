#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging

from quotelist import ListingSettings
from quotelist.server import run_server


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Serve GET /list locally")
    p.add_argument("port", nargs="?", type=int, default=8080)
    p.add_argument("--site-base-url", default=None, help="Override SITE_BASE_URL for links")
    return p.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG)
    settings = ListingSettings()
    if args.site_base_url is not None:
        settings = settings.model_copy(update={"site_base_url": args.site_base_url})
    print(f"Listing on http://127.0.0.1:{args.port}/list?per=10")
    run_server(settings, host="127.0.0.1", port=args.port)


if __name__ == "__main__":
    main()
