"""
Backfill remote file ids for product photos and the logo slot.

Example:
    python scripts/backfill_remote_ids.py --dry-run
"""
from __future__ import annotations

import argparse
import asyncio
import logging

from sellerhub.core.config import get_settings
from sellerhub.infrastructure.database import dispose_engine, init_db, session_scope
from sellerhub.infrastructure.imagekit import ImageKitClient
from sellerhub.modules.assets import IdentifierResolver
from sellerhub.modules.assets.backfill import backfill_remote_ids


async def run(dry_run: bool) -> None:
    settings = get_settings()
    if not settings.asset_endpoint:
        raise SystemExit("ASSET_HOST__URL_ENDPOINT must be set to recognise hosted URLs")

    await init_db()
    client = ImageKitClient.from_settings(settings.asset_host)
    resolver = IdentifierResolver(
        client,
        endpoint=settings.asset_endpoint,
        page_size=settings.asset_host.list_limit,
    )

    try:
        async with session_scope() as db:
            summary = await backfill_remote_ids(db, resolver, endpoint=settings.asset_endpoint)
            if dry_run:
                await db.rollback()
    finally:
        await dispose_engine()

    print("=" * 50)
    print(f"scanned:    {summary.scanned}")
    print(f"resolved:   {summary.resolved}")
    print(f"unresolved: {summary.unresolved}")
    print(f"not hosted: {summary.not_hosted}")
    print("=" * 50)
    if dry_run:
        print("dry run, nothing was written")


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--dry-run", action="store_true", help="resolve ids without saving them")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    asyncio.run(run(args.dry_run))


if __name__ == "__main__":
    main()
