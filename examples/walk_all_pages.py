#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio

from quotelist import CloudinaryProvider, ListingAggregator, ListingSettings


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Walk every listing page for the configured folder")
    p.add_argument("per", nargs="?", type=int, default=20)
    p.add_argument("--max-pages", type=int, default=10)
    p.add_argument("--noprefix", action="store_true")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    settings = ListingSettings()

    async with CloudinaryProvider(settings) as provider:
        aggregator = ListingAggregator.from_settings(provider, settings)
        token = ""
        for page_no in range(1, args.max_pages + 1):
            page = await aggregator.list_page(token, args.per, use_prefix=not args.noprefix)
            print(f"Page {page_no}: {len(page.items)} items")
            print(f"{'Created':25} | {'Partition':20} | {'Bytes':>10} | Id")
            print("-" * 80)
            for item in page.items:
                partition = f"{item.resource_type.value}:{item.type.value}"
                print(f"{item.created_at or '-':25} | {partition:20} | {item.bytes or 0:>10} | {item.id}")
            if not page.next:
                break
            token = page.next


if __name__ == "__main__":
    asyncio.run(main())
