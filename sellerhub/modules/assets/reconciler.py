"""Delete hosted assets that an entity no longer references."""

from __future__ import annotations

import logging
from typing import Optional

from .client import AssetHostClient
from .exceptions import AssetHostError, InvalidUrlError
from .models import AssetReference, DeletionOutcome, DeletionReport, PhotoSet
from .resolver import IdentifierResolver, is_hosted_url

logger = logging.getLogger(__name__)


class PhotoReconciler:
    """Diffs two photo sets and removes dropped assets from the host.

    Failures are recorded per item and never abort the batch. Persisting the
    desired photo set is the caller's job and must not depend on the report:
    entity updates stay available while the asset host is down.
    """

    def __init__(
        self,
        client: AssetHostClient,
        resolver: IdentifierResolver,
        *,
        endpoint: Optional[str],
    ) -> None:
        self._client = client
        self._resolver = resolver
        self._endpoint = endpoint

    @classmethod
    def for_client(
        cls,
        client: AssetHostClient,
        *,
        endpoint: Optional[str],
        page_size: int = 1000,
    ) -> "PhotoReconciler":
        resolver = IdentifierResolver(client, endpoint=endpoint, page_size=page_size)
        return cls(client, resolver, endpoint=endpoint)

    @staticmethod
    def removed(current: PhotoSet, desired: PhotoSet) -> list[AssetReference]:
        kept_urls = {reference.url for reference in desired}
        return [reference for reference in current if reference.url not in kept_urls]

    async def reconcile(self, current: PhotoSet, desired: PhotoSet) -> DeletionReport:
        report = DeletionReport()
        # Deletes are issued one at a time.
        for reference in self.removed(current, desired):
            await self._remove(reference, report)
        if report.items:
            logger.info("Photo reconciliation finished: %s", report.summary())
        return report

    async def replace_single(
        self,
        previous: Optional[AssetReference],
        new: Optional[AssetReference],
    ) -> DeletionReport:
        """Singleton slot variant: at most one delete, for ``previous``.

        Remote ids decide when both sides carry one; a reused URL may still
        point at a different file.
        """
        report = DeletionReport()
        if previous is None or not _replaced(previous, new):
            return report
        await self._remove(previous, report)
        logger.info("Slot replacement finished: %s", report.summary())
        return report

    async def _remove(self, reference: AssetReference, report: DeletionReport) -> None:
        try:
            await self._remove_one(reference, report)
        except Exception as exc:
            logger.exception("Unexpected error while removing %s", reference.url)
            report.record(
                reference.url,
                DeletionOutcome.FAILED,
                remote_id=reference.remote_id,
                detail=f"{type(exc).__name__}: {exc}",
            )

    async def _remove_one(self, reference: AssetReference, report: DeletionReport) -> None:
        url = reference.url
        if not is_hosted_url(url, self._endpoint):
            logger.info("Skipping %s: not served by the asset host", url)
            report.record(url, DeletionOutcome.SKIPPED_NOT_HOSTED)
            return

        remote_id = reference.remote_id
        if not remote_id:
            try:
                remote_id = await self._resolver.resolve(url)
            except InvalidUrlError as exc:
                logger.warning("Skipping %s: %s", url, exc)
                report.record(url, DeletionOutcome.SKIPPED_UNRESOLVED, detail=str(exc))
                return
            if remote_id is None:
                logger.warning("Skipping %s: remote id not found", url)
                report.record(url, DeletionOutcome.SKIPPED_UNRESOLVED, detail="remote id not found")
                return

        try:
            deleted = await self._client.delete(remote_id)
        except AssetHostError as exc:
            logger.error("Failed to delete %s (%s): %s", url, remote_id, exc)
            report.record(url, DeletionOutcome.FAILED, remote_id=remote_id, detail=str(exc))
            return

        if deleted:
            logger.info("Deleted hosted asset %s (%s)", url, remote_id)
            report.record(url, DeletionOutcome.DELETED, remote_id=remote_id)
        else:
            logger.error("Asset host refused to delete %s (%s)", url, remote_id)
            report.record(url, DeletionOutcome.FAILED, remote_id=remote_id, detail="delete returned false")


def _replaced(previous: AssetReference, new: Optional[AssetReference]) -> bool:
    if new is None:
        return True
    if previous.remote_id and new.remote_id:
        return previous.remote_id != new.remote_id
    return previous.url != new.url
