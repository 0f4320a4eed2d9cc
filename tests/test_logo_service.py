"""
Tests for the logo slot: compare-and-set replacement and old asset cleanup.
"""

import base64

import pytest

from sellerhub.modules.assets import PhotoReconciler
from sellerhub.modules.logo import (
    InvalidLogoError,
    LogoConflictError,
    LogoNotFoundError,
    LogoService,
    LogoSlot,
    decode_logo_base64,
    resolve_logo_file_name,
)

from conftest import ENDPOINT


@pytest.fixture
def service(session, fake_host, settings) -> LogoService:
    return LogoService.with_session(session, fake_host, settings)


class TestLogoUpload:
    @pytest.mark.asyncio
    async def test_first_upload_deletes_nothing(self, service, fake_host, session):
        replacement = await service.upload_logo(b"logo", "app-logo.png")
        await session.commit()
        report = await service.cleanup_previous(replacement)

        assert replacement.previous is None
        assert fake_host.delete_calls == []
        assert report.items == []
        slot = await service.get_logo()
        assert slot.version == 1
        assert slot.reference == replacement.uploaded.to_reference()
        assert fake_host.uploads[0]["folder"] == "/app-assets"
        assert fake_host.uploads[0]["tags"] == ("logo", "app-logo", "footer-logo")

    @pytest.mark.asyncio
    async def test_replacement_deletes_previous_once(self, service, fake_host, session):
        first = await service.upload_logo(b"one", "app-logo.png")
        await session.commit()

        second = await service.upload_logo(b"two", "app-logo.svg")
        await session.commit()
        report = await service.cleanup_previous(second)

        assert fake_host.delete_calls == [first.uploaded.remote_id]
        assert report.deleted == 1
        assert (await service.get_logo()).reference.url == second.uploaded.url
        assert second.slot.version == 2

    @pytest.mark.asyncio
    async def test_slot_moves_even_when_old_delete_fails(self, service, fake_host, session):
        first = await service.upload_logo(b"one", "app-logo.png")
        await session.commit()
        fake_host.raise_on_delete.add(first.uploaded.remote_id)

        second = await service.upload_logo(b"two", "app-logo.png")
        await session.commit()
        report = await service.cleanup_previous(second)

        assert fake_host.delete_calls == [first.uploaded.remote_id]
        assert report.failed == 1
        assert (await service.get_logo()).reference.remote_id == second.uploaded.remote_id

    @pytest.mark.asyncio
    async def test_empty_payload_is_rejected(self, service, fake_host):
        with pytest.raises(InvalidLogoError):
            await service.upload_logo(b"", "app-logo.png")
        assert fake_host.uploads == []


class StaleLogoRepository:
    """Repository whose compare-and-set always loses the race."""

    def __init__(self) -> None:
        self.swaps = 0

    async def get_slot(self, key):
        return LogoSlot(key=key, version=self.swaps)

    async def swap(self, key, expected_version, reference):
        self.swaps += 1
        return None


class TestLogoConflicts:
    @pytest.mark.asyncio
    async def test_gives_up_after_bounded_retries(self, fake_host):
        repository = StaleLogoRepository()
        reconciler = PhotoReconciler.for_client(fake_host, endpoint=ENDPOINT)
        service = LogoService(repository, fake_host, reconciler, swap_attempts=3)

        with pytest.raises(LogoConflictError):
            await service.upload_logo(b"logo", "app-logo.png")

        assert repository.swaps == 3
        # The fresh upload is not left behind.
        assert fake_host.delete_calls == ["file_1"]

    @pytest.mark.asyncio
    async def test_stale_version_is_refused(self, session, fake_host, settings):
        from sellerhub.infrastructure.database.repositories import SqlLogoRepository

        repository = SqlLogoRepository(session)
        asset = (await fake_host.upload(b"x", "app-logo.png", "/app-assets")).to_reference()

        first = await repository.swap("default", 0, asset)
        assert first is not None and first.version == 1

        assert await repository.swap("default", 0, None) is None
        cleared = await repository.swap("default", 1, None)
        assert cleared is not None
        assert cleared.version == 2
        assert cleared.is_empty


class TestLogoDelete:
    @pytest.mark.asyncio
    async def test_get_and_delete_without_logo(self, service):
        with pytest.raises(LogoNotFoundError):
            await service.get_logo()
        with pytest.raises(LogoNotFoundError):
            await service.delete_logo()

    @pytest.mark.asyncio
    async def test_delete_clears_slot_and_remote_asset(self, service, fake_host, session):
        replacement = await service.upload_logo(b"logo", "app-logo.png")
        await session.commit()

        removal = await service.delete_logo()
        await session.commit()
        report = await service.cleanup_removed(removal)

        assert removal.previous.url == replacement.uploaded.url
        assert fake_host.delete_calls == [replacement.uploaded.remote_id]
        assert report.deleted == 1
        with pytest.raises(LogoNotFoundError):
            await service.get_logo()


class TestLogoFileNames:
    def test_explicit_name_wins(self):
        assert resolve_logo_file_name(" brand.svg ", original_name="x.png") == "brand.svg"

    def test_extension_from_upload(self):
        assert resolve_logo_file_name(None, original_name="my logo.webp") == "app-logo.webp"
        assert resolve_logo_file_name(None, original_name="logo") == "app-logo.png"

    def test_extension_from_data_url(self):
        payload = "data:image/jpeg;base64,AAAA"
        assert resolve_logo_file_name(None, base64_payload=payload) == "app-logo.jpeg"
        assert resolve_logo_file_name(None, base64_payload="AAAA") == "app-logo.png"

    def test_decode_base64(self):
        encoded = base64.b64encode(b"\x89PNG").decode()
        assert decode_logo_base64(f"data:image/png;base64,{encoded}") == b"\x89PNG"
        assert decode_logo_base64(encoded) == b"\x89PNG"
        with pytest.raises(InvalidLogoError):
            decode_logo_base64("not base64!")
