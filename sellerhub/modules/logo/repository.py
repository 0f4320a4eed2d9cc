"""Repository protocol for the logo slot."""

from __future__ import annotations

from typing import Optional, Protocol

from sellerhub.modules.assets.models import AssetReference

from .models import LogoSlot


class LogoRepository(Protocol):
    async def get_slot(self, key: str) -> LogoSlot:
        """Return the slot, or an empty version-0 slot when none is stored."""
        ...

    async def swap(
        self,
        key: str,
        expected_version: int,
        reference: Optional[AssetReference],
    ) -> LogoSlot | None:
        """Compare-and-set: replace the reference only if ``version`` still matches.

        Returns the new slot, or ``None`` when another writer got there first.
        """
        ...
