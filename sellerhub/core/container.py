"""Simple dependency container for wiring core services."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache

from sellerhub.core.config import Settings, get_settings
from sellerhub.infrastructure.database.session import get_engine
from sellerhub.infrastructure.imagekit import ImageKitClient
from sellerhub.modules.assets import AssetHostClient


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    asset_client: AssetHostClient = field(init=False)

    def __post_init__(self) -> None:
        self.asset_client = ImageKitClient.from_settings(self.settings.asset_host)

    def init_infrastructure(self) -> None:
        """Ensure infrastructure singletons (database engine, etc.) are initialised."""
        get_engine()


@lru_cache()
def get_container() -> ApplicationContainer:
    container = ApplicationContainer(settings=get_settings())
    container.init_infrastructure()
    return container


__all__ = ["ApplicationContainer", "get_container"]
