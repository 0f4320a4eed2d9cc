"""
Tests for URL parsing, host recognition and remote id resolution.
"""

import pytest

from sellerhub.modules.assets import (
    AssetRecord,
    IdentifierResolver,
    InvalidUrlError,
    extract_file_path,
    is_hosted_url,
)
from sellerhub.modules.assets.resolver import split_file_path

from conftest import ENDPOINT


class TestExtractFilePath:
    def test_full_url_uses_path_component(self):
        assert extract_file_path("https://cdn.example.com/products/p1.jpg") == "/products/p1.jpg"

    def test_query_and_fragment_are_dropped(self):
        url = "https://cdn.example.com/products/p1.jpg?updatedAt=1700000000#top"
        assert extract_file_path(url) == "/products/p1.jpg"

    def test_endpoint_prefix_is_stripped(self):
        url = f"{ENDPOINT}/app-assets/app-logo.png"
        assert extract_file_path(url, ENDPOINT) == "/app-assets/app-logo.png"
        assert extract_file_path(url) == "/acct/app-assets/app-logo.png"

    def test_bare_path_is_accepted(self):
        assert extract_file_path("/products//p1.jpg") == "/products/p1.jpg"

    @pytest.mark.parametrize("url", ["", "p1.jpg", "not a url", "https://cdn.example.com/", "http://[::1"])
    def test_invalid_inputs_raise(self, url):
        with pytest.raises(InvalidUrlError):
            extract_file_path(url)

    def test_split_file_path(self):
        assert split_file_path("/products/2024/p1.jpg") == ("/products/2024", "p1.jpg")
        assert split_file_path("/p1.jpg") == ("/", "p1.jpg")


class TestIsHostedUrl:
    def test_configured_endpoint_matches(self):
        url = "https://ik.example.io/acct/app-assets/app-logo.png"
        assert is_hosted_url(url, "https://ik.example.io/acct") is True

    def test_no_endpoint_means_not_hosted(self):
        url = "https://ik.example.io/acct/app-assets/app-logo.png"
        assert is_hosted_url(url, None) is False
        assert is_hosted_url(url, "") is False

    def test_provider_domain_matches_when_endpoint_configured(self):
        assert is_hosted_url("https://ik.imagekit.io/other/p.jpg", ENDPOINT) is True

    def test_foreign_and_case_mismatched_urls(self):
        assert is_hosted_url("https://images.example.com/p.jpg", ENDPOINT) is False
        assert is_hosted_url(ENDPOINT.upper() + "/p.jpg", ENDPOINT) is False
        assert is_hosted_url(None, ENDPOINT) is False


class TestIdentifierResolver:
    @pytest.mark.asyncio
    async def test_resolves_by_exact_path_in_folder(self, fake_host):
        fake_host.add("/products/p0.jpg")
        target = fake_host.add("/products/p1.jpg")
        resolver = IdentifierResolver(fake_host, endpoint=ENDPOINT)

        assert await resolver.resolve(target.url) == target.remote_id
        assert fake_host.list_calls == ["/products"]

    @pytest.mark.asyncio
    async def test_path_match_wins_over_name_match(self, fake_host):
        fake_host.add("/products/old/p1.jpg", url="https://elsewhere.example/p1.jpg")
        target = fake_host.add("/products/p1.jpg")
        resolver = IdentifierResolver(fake_host, endpoint=ENDPOINT)

        assert await resolver.resolve(f"{ENDPOINT}/products/p1.jpg") == target.remote_id

    @pytest.mark.asyncio
    async def test_url_match_when_path_differs(self, fake_host):
        url = f"{ENDPOINT}/products/p1.jpg?tr=w-300"
        target = fake_host.add("/products/renamed.jpg", url=url)
        resolver = IdentifierResolver(fake_host, endpoint=ENDPOINT)

        assert await resolver.resolve(url) == target.remote_id

    @pytest.mark.asyncio
    async def test_falls_back_to_global_listing(self, fake_host):
        target = fake_host.add("/legacy/p1.jpg")
        resolver = IdentifierResolver(fake_host, endpoint=ENDPOINT)

        assert await resolver.resolve(f"{ENDPOINT}/products/p1.jpg") == target.remote_id
        assert fake_host.list_calls == ["/products", None]

    @pytest.mark.asyncio
    async def test_records_without_id_never_match(self, fake_host):
        fake_host.records.append(
            AssetRecord(remote_id=None, name="p1.jpg", path="/products/p1.jpg", url=f"{ENDPOINT}/products/p1.jpg")
        )
        resolver = IdentifierResolver(fake_host, endpoint=ENDPOINT)

        assert await resolver.resolve(f"{ENDPOINT}/products/p1.jpg") is None

    @pytest.mark.asyncio
    async def test_path_suffix_match_when_name_is_missing(self, fake_host):
        fake_host.records.append(AssetRecord(remote_id="legacy_1", name="", path="/legacy/p1.jpg"))
        resolver = IdentifierResolver(fake_host, endpoint=ENDPOINT)

        assert await resolver.resolve(f"{ENDPOINT}/products/p1.jpg") == "legacy_1"

    @pytest.mark.asyncio
    async def test_name_match_wins_over_path_suffix(self, fake_host):
        fake_host.records.append(AssetRecord(remote_id="by_suffix", name="", path="/legacy/p1.jpg"))
        fake_host.records.append(AssetRecord(remote_id="by_name", name="p1.jpg", path="/legacy/renamed.jpg"))
        resolver = IdentifierResolver(fake_host, endpoint=ENDPOINT)

        assert await resolver.resolve(f"{ENDPOINT}/products/p1.jpg") == "by_name"

    @pytest.mark.asyncio
    async def test_suffix_must_be_a_whole_file_name(self, fake_host):
        fake_host.records.append(AssetRecord(remote_id="other", name="", path="/other/xp1.jpg"))
        resolver = IdentifierResolver(fake_host, endpoint=ENDPOINT)

        assert await resolver.resolve(f"{ENDPOINT}/products/p1.jpg") is None

    @pytest.mark.asyncio
    async def test_not_found_returns_none(self, fake_host):
        fake_host.add("/products/other.jpg")
        resolver = IdentifierResolver(fake_host, endpoint=ENDPOINT)

        assert await resolver.resolve(f"{ENDPOINT}/products/p1.jpg") is None

    @pytest.mark.asyncio
    async def test_listing_failures_return_none(self, fake_host):
        fake_host.add("/products/p1.jpg")
        fake_host.fail_listing = True
        resolver = IdentifierResolver(fake_host, endpoint=ENDPOINT)

        assert await resolver.resolve(f"{ENDPOINT}/products/p1.jpg") is None
        assert fake_host.list_calls == ["/products", None]

    @pytest.mark.asyncio
    async def test_page_size_is_passed_to_host(self, fake_host):
        for index in range(5):
            fake_host.add(f"/products/p{index}.jpg")
        resolver = IdentifierResolver(fake_host, endpoint=ENDPOINT, page_size=2)

        # p4 falls outside the first page of both listings.
        assert await resolver.resolve(f"{ENDPOINT}/products/p4.jpg") is None

    @pytest.mark.asyncio
    async def test_invalid_url_raises(self, fake_host):
        resolver = IdentifierResolver(fake_host, endpoint=ENDPOINT)

        with pytest.raises(InvalidUrlError):
            await resolver.resolve("p1.jpg")
        assert fake_host.list_calls == []
