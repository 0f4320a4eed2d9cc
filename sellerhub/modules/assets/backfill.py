"""One-time backfill of remote ids for references stored without one.

Rows written before upload results were persisted with their file id only
carry a URL. Resolving and storing the id once lets later reconciliation
delete them without listing the host.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sellerhub.db.models import LogoSlot, ProductPhoto

from .exceptions import InvalidUrlError
from .resolver import IdentifierResolver, extract_file_path, is_hosted_url

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BackfillSummary:
    scanned: int = 0
    resolved: int = 0
    unresolved: int = 0
    not_hosted: int = 0


async def backfill_remote_ids(
    session: AsyncSession,
    resolver: IdentifierResolver,
    *,
    endpoint: str | None,
) -> BackfillSummary:
    """Resolve missing ids on product photos and the logo slot in place.

    Changes are flushed but not committed.
    """
    summary = BackfillSummary()

    photos = (
        await session.execute(select(ProductPhoto).where(ProductPhoto.remote_id.is_(None)))
    ).scalars().all()
    slots = (
        await session.execute(
            select(LogoSlot).where(LogoSlot.remote_id.is_(None), LogoSlot.url.is_not(None))
        )
    ).scalars().all()

    for row in [*photos, *slots]:
        summary.scanned += 1
        if not is_hosted_url(row.url, endpoint):
            summary.not_hosted += 1
            continue
        try:
            remote_id = await resolver.resolve(row.url)
        except InvalidUrlError as exc:
            logger.warning("Cannot backfill %s: %s", row.url, exc)
            remote_id = None
        if remote_id is None:
            summary.unresolved += 1
            continue

        row.remote_id = remote_id
        if not row.path:
            row.path = extract_file_path(row.url, endpoint)
        summary.resolved += 1

    await session.flush()
    logger.info("Remote id backfill: %s", summary)
    return summary
