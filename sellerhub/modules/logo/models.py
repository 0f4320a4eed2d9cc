"""Domain models for the logo slot."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sellerhub.modules.assets.models import AssetReference, UploadedAsset


@dataclass(slots=True)
class LogoSlot:
    key: str
    version: int = 0
    reference: Optional[AssetReference] = None
    updated_at: Optional[datetime] = None

    @property
    def is_empty(self) -> bool:
        return self.reference is None


@dataclass(frozen=True, slots=True)
class LogoReplacement:
    slot: LogoSlot
    uploaded: UploadedAsset
    previous: Optional[AssetReference]


@dataclass(frozen=True, slots=True)
class LogoRemoval:
    slot: LogoSlot
    previous: AssetReference
