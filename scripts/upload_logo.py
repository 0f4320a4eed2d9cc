"""
Upload a local logo file and make it the application logo.

Example:
    python scripts/upload_logo.py uploads/logo.svg --file-name brand-logo.svg
"""
from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path
from typing import Optional

from sellerhub.core.config import get_settings
from sellerhub.infrastructure.database import dispose_engine, init_db, session_scope
from sellerhub.infrastructure.imagekit import ImageKitClient
from sellerhub.modules.logo import LogoService, resolve_logo_file_name


async def upload(path: Path, file_name: Optional[str]) -> None:
    settings = get_settings()
    if not settings.asset_host.private_key or not settings.asset_endpoint:
        raise SystemExit(
            "ASSET_HOST__PRIVATE_KEY and ASSET_HOST__URL_ENDPOINT must be configured"
        )
    if not path.is_file():
        raise SystemExit(f"logo file not found: {path}")

    await init_db()
    client = ImageKitClient.from_settings(settings.asset_host)

    try:
        async with session_scope() as db:
            service = LogoService.with_session(db, client, settings)
            name = resolve_logo_file_name(file_name, original_name=path.name)
            replacement = await service.upload_logo(path.read_bytes(), name)
        report = await service.cleanup_previous(replacement)
    finally:
        await dispose_engine()

    uploaded = replacement.uploaded
    print("=" * 50)
    print(f"url:       {uploaded.url}")
    print(f"file id:   {uploaded.remote_id}")
    print(f"file path: {uploaded.path}")
    print(f"size:      {uploaded.size} bytes")
    if uploaded.width and uploaded.height:
        print(f"dimensions: {uploaded.width}x{uploaded.height}")
    print(f"slot version: {replacement.slot.version}")
    if replacement.previous is not None:
        print(f"previous logo cleanup: {report.summary()}")
    print("=" * 50)


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("path", type=Path, help="local image file")
    parser.add_argument("--file-name", default=None, help="name to store the logo under")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    asyncio.run(upload(args.path, args.file_name))


if __name__ == "__main__":
    main()
