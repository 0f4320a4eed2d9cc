"""SQLAlchemy implementation of the logo slot repository."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from sellerhub.db.models import LogoSlot as LogoSlotModel
from sellerhub.modules.assets.models import AssetReference
from sellerhub.modules.logo.models import LogoSlot
from sellerhub.modules.logo.repository import LogoRepository


class SqlLogoRepository(LogoRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_slot(self, key: str) -> LogoSlot:
        model = await self._get_model(key)
        if model is None:
            return LogoSlot(key=key)
        return self._to_domain(model)

    async def swap(
        self,
        key: str,
        expected_version: int,
        reference: Optional[AssetReference],
    ) -> LogoSlot | None:
        values = {
            "url": reference.url if reference else None,
            "remote_id": reference.remote_id if reference else None,
            "path": reference.path if reference else None,
            "updated_at": datetime.now(timezone.utc),
        }

        if expected_version == 0 and await self._get_model(key) is None:
            model = LogoSlotModel(key=key, version=1, **values)
            try:
                async with self._session.begin_nested():
                    self._session.add(model)
            except IntegrityError:
                return None
            return self._to_domain(model)

        stmt = (
            update(LogoSlotModel)
            .where(LogoSlotModel.key == key, LogoSlotModel.version == expected_version)
            .values(version=LogoSlotModel.version + 1, **values)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        if result.rowcount != 1:
            return None

        model = await self._get_model(key)
        assert model is not None
        return self._to_domain(model)

    async def _get_model(self, key: str) -> LogoSlotModel | None:
        stmt = (
            select(LogoSlotModel)
            .where(LogoSlotModel.key == key)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _to_domain(model: LogoSlotModel) -> LogoSlot:
        reference = None
        if model.url:
            reference = AssetReference(url=model.url, remote_id=model.remote_id, path=model.path or "")
        return LogoSlot(
            key=model.key,
            version=model.version,
            reference=reference,
            updated_at=model.updated_at,
        )
