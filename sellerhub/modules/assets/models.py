"""Domain models for hosted image assets."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence


@dataclass(frozen=True, slots=True)
class AssetReference:
    """One uploaded image as recorded on an owning entity.

    ``remote_id`` may be missing for legacy rows that only persisted the URL.
    """

    url: str
    remote_id: Optional[str] = None
    path: str = ""


PhotoSet = Sequence[AssetReference]


@dataclass(frozen=True, slots=True)
class AssetRecord:
    """A single row returned by the asset host's listing endpoint."""

    remote_id: Optional[str]
    name: str = ""
    path: str = ""
    url: str = ""


@dataclass(frozen=True, slots=True)
class UploadedAsset:
    url: str
    remote_id: str
    path: str
    name: str
    size: int
    mime_type: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None

    def to_reference(self) -> AssetReference:
        return AssetReference(url=self.url, remote_id=self.remote_id, path=self.path)


class DeletionOutcome(str, Enum):
    DELETED = "deleted"
    FAILED = "failed"
    SKIPPED_NOT_HOSTED = "skipped_not_hosted"
    SKIPPED_UNRESOLVED = "skipped_unresolved"


@dataclass(frozen=True, slots=True)
class DeletionItem:
    url: str
    outcome: DeletionOutcome
    remote_id: Optional[str] = None
    detail: Optional[str] = None


@dataclass(slots=True)
class DeletionReport:
    """Aggregate result of one reconciliation pass."""

    items: list[DeletionItem] = field(default_factory=list)

    def record(
        self,
        url: str,
        outcome: DeletionOutcome,
        *,
        remote_id: Optional[str] = None,
        detail: Optional[str] = None,
    ) -> None:
        self.items.append(DeletionItem(url=url, outcome=outcome, remote_id=remote_id, detail=detail))

    def _count(self, outcome: DeletionOutcome) -> int:
        return sum(1 for item in self.items if item.outcome is outcome)

    @property
    def deleted(self) -> int:
        return self._count(DeletionOutcome.DELETED)

    @property
    def failed(self) -> int:
        return self._count(DeletionOutcome.FAILED)

    @property
    def skipped_not_hosted(self) -> int:
        return self._count(DeletionOutcome.SKIPPED_NOT_HOSTED)

    @property
    def skipped_unresolved(self) -> int:
        return self._count(DeletionOutcome.SKIPPED_UNRESOLVED)

    def summary(self) -> dict[str, int]:
        return {
            "skipped_not_hosted": self.skipped_not_hosted,
            "skipped_unresolved": self.skipped_unresolved,
            "deleted": self.deleted,
            "failed": self.failed,
        }
