"""Logo slot service: single hosted image replaced via compare-and-set."""

from __future__ import annotations

import base64
import binascii
import logging
import re
from pathlib import PurePosixPath
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from sellerhub.core.config import Settings, get_settings
from sellerhub.modules.assets import AssetHostClient, DeletionReport, PhotoReconciler

from .exceptions import InvalidLogoError, LogoConflictError, LogoNotFoundError
from .models import LogoRemoval, LogoReplacement, LogoSlot
from .repository import LogoRepository

logger = logging.getLogger(__name__)

SLOT_KEY = "default"
LOGO_TAGS = ("logo", "app-logo", "footer-logo")
DEFAULT_LOGO_STEM = "app-logo"

_DATA_URL_PREFIX = re.compile(r"^data:image/(\w+);base64,")


class LogoService:
    def __init__(
        self,
        repository: LogoRepository,
        client: AssetHostClient,
        reconciler: PhotoReconciler,
        *,
        folder: str = "/app-assets",
        swap_attempts: int = 3,
    ) -> None:
        self._repository = repository
        self._client = client
        self._reconciler = reconciler
        self._folder = folder
        self._swap_attempts = max(1, swap_attempts)

    @classmethod
    def with_session(
        cls,
        session: AsyncSession,
        client: AssetHostClient,
        settings: Optional[Settings] = None,
    ) -> "LogoService":
        from sellerhub.infrastructure.database.repositories.logo_repository import SqlLogoRepository

        settings = settings or get_settings()
        reconciler = PhotoReconciler.for_client(
            client,
            endpoint=settings.asset_endpoint,
            page_size=settings.asset_host.list_limit,
        )
        return cls(
            SqlLogoRepository(session),
            client,
            reconciler,
            folder=settings.asset_host.logo_folder,
            swap_attempts=settings.uploads.logo_swap_attempts,
        )

    async def get_logo(self) -> LogoSlot:
        slot = await self._repository.get_slot(SLOT_KEY)
        if slot.is_empty:
            raise LogoNotFoundError("no logo has been uploaded yet")
        return slot

    async def upload_logo(self, data: bytes, file_name: str) -> LogoReplacement:
        """Upload a new logo and point the slot at it.

        The slot is swapped before anything is deleted, so the new logo is
        current even if removing the old one later fails.
        """
        if not data:
            raise InvalidLogoError("logo image is empty")

        uploaded = await self._client.upload(data, file_name, self._folder, tags=LOGO_TAGS)
        reference = uploaded.to_reference()

        for attempt in range(1, self._swap_attempts + 1):
            current = await self._repository.get_slot(SLOT_KEY)
            swapped = await self._repository.swap(SLOT_KEY, current.version, reference)
            if swapped is not None:
                logger.info("Logo slot now at version %d (%s)", swapped.version, reference.url)
                return LogoReplacement(slot=swapped, uploaded=uploaded, previous=current.reference)
            logger.info(
                "Logo slot moved past version %d, retrying (%d/%d)",
                current.version,
                attempt,
                self._swap_attempts,
            )

        await self._reconciler.replace_single(reference, None)
        raise LogoConflictError("logo was replaced concurrently, try again")

    async def cleanup_previous(self, replacement: LogoReplacement) -> DeletionReport:
        """Remove the logo that ``replacement`` displaced; call after committing."""
        return await self._reconciler.replace_single(replacement.previous, replacement.slot.reference)

    async def delete_logo(self) -> LogoRemoval:
        current = await self.get_logo()
        swapped = await self._repository.swap(SLOT_KEY, current.version, None)
        if swapped is None:
            raise LogoConflictError("logo was replaced concurrently, try again")
        assert current.reference is not None
        return LogoRemoval(slot=swapped, previous=current.reference)

    async def cleanup_removed(self, removal: LogoRemoval) -> DeletionReport:
        return await self._reconciler.replace_single(removal.previous, None)


def resolve_logo_file_name(
    file_name: Optional[str] = None,
    *,
    original_name: Optional[str] = None,
    base64_payload: Optional[str] = None,
) -> str:
    """Pick the stored logo file name: explicit name, then source extension."""
    if file_name and file_name.strip():
        return file_name.strip()
    if original_name:
        suffix = PurePosixPath(original_name).suffix.lstrip(".")
        return f"{DEFAULT_LOGO_STEM}.{suffix or 'png'}"
    if base64_payload:
        match = _DATA_URL_PREFIX.match(base64_payload)
        if match:
            return f"{DEFAULT_LOGO_STEM}.{match.group(1)}"
    return f"{DEFAULT_LOGO_STEM}.png"


def decode_logo_base64(payload: str) -> bytes:
    raw = _DATA_URL_PREFIX.sub("", payload.strip(), count=1)
    try:
        data = base64.b64decode(raw, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidLogoError("logo is not valid base64") from exc
    if not data:
        raise InvalidLogoError("logo image is empty")
    return data
