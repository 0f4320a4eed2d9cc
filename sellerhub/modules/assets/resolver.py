"""Recover remote file identifiers from stored asset URLs.

The media host never embeds the file id in the public URL, so an id for a
legacy reference can only be recovered by listing the folder the URL points
at and matching the returned records against it. Matching is attempted in a
fixed priority order and the first record in host list order wins; the host
does not promise a stable order, so duplicate names inside one folder can
resolve to either copy.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence
from urllib.parse import urlsplit

from .client import AssetHostClient
from .exceptions import AssetHostError, InvalidUrlError
from .models import AssetRecord

logger = logging.getLogger(__name__)

PROVIDER_URL_PREFIX = "https://ik.imagekit.io/"


def is_hosted_url(url: Optional[str], endpoint: Optional[str]) -> bool:
    """Return True when ``url`` is served by the configured asset host.

    Without a configured endpoint nothing is treated as hosted, so no delete
    is ever sent for a URL that may belong to another provider.
    """
    if not url or not isinstance(url, str):
        return False
    if not endpoint:
        return False
    return endpoint in url or url.startswith(PROVIDER_URL_PREFIX)


def extract_file_path(url: str, endpoint: Optional[str] = None) -> str:
    """Turn an asset URL (or a bare ``/folder/name`` path) into a host file path."""
    if not url or not isinstance(url, str):
        raise InvalidUrlError("asset url is empty")

    base = endpoint.rstrip("/") if endpoint else None
    try:
        if base and url.startswith(base + "/"):
            raw_path = urlsplit(url[len(base):]).path
        else:
            parts = urlsplit(url)
            if parts.scheme and parts.netloc:
                raw_path = parts.path
            elif url.startswith("/"):
                raw_path = parts.path
            else:
                raise InvalidUrlError(f"not a url or file path: {url!r}")
    except ValueError as exc:
        raise InvalidUrlError(f"malformed asset url: {url!r}") from exc

    segments = [segment for segment in raw_path.split("/") if segment]
    if not segments:
        raise InvalidUrlError(f"asset url has no file path: {url!r}")
    return "/" + "/".join(segments)


def split_file_path(file_path: str) -> tuple[str, str]:
    segments = [segment for segment in file_path.split("/") if segment]
    name = segments[-1]
    folder = "/" + "/".join(segments[:-1]) if len(segments) > 1 else "/"
    return folder, name


@dataclass(frozen=True, slots=True)
class _Target:
    url: str
    path: str
    name: str


_Matcher = Callable[[AssetRecord, _Target], bool]

MATCH_ORDER: Sequence[tuple[str, _Matcher]] = (
    ("path", lambda record, target: record.path == target.path),
    ("url", lambda record, target: bool(record.url) and record.url == target.url),
    ("name", lambda record, target: record.name == target.name),
    (
        "path-suffix",
        lambda record, target: record.path == target.name or record.path.endswith("/" + target.name),
    ),
)


def find_match(records: Sequence[AssetRecord], url: str, file_path: str) -> Optional[tuple[str, AssetRecord]]:
    """Return ``(method, record)`` for the first record matching ``file_path``."""
    _, name = split_file_path(file_path)
    target = _Target(url=url, path=file_path, name=name)
    candidates = [record for record in records if record.remote_id]
    for method, matcher in MATCH_ORDER:
        for record in candidates:
            if matcher(record, target):
                return method, record
    return None


class IdentifierResolver:
    """Look up the remote id for a previously returned asset URL."""

    def __init__(
        self,
        client: AssetHostClient,
        *,
        endpoint: Optional[str] = None,
        page_size: int = 1000,
    ) -> None:
        self._client = client
        self._endpoint = endpoint
        self._page_size = page_size

    async def resolve(self, url: str) -> Optional[str]:
        """Return the remote id for ``url`` or ``None`` when nothing matches.

        Raises ``InvalidUrlError`` when ``url`` cannot be parsed. Listing
        failures never propagate.
        """
        file_path = extract_file_path(url, self._endpoint)
        folder, _ = split_file_path(file_path)

        for scope in (folder, None):
            records = await self._list(scope)
            found = find_match(records, url, file_path)
            if found is not None:
                method, record = found
                logger.debug(
                    "Resolved %s to %s by %s match (%s listing)",
                    file_path,
                    record.remote_id,
                    method,
                    scope or "global",
                )
                return record.remote_id

        logger.warning("Could not resolve remote id for %s (path %s)", url, file_path)
        return None

    async def _list(self, folder: Optional[str]) -> list[AssetRecord]:
        try:
            return await self._client.list_assets(folder, limit=self._page_size)
        except AssetHostError as exc:
            logger.warning("Listing %s failed: %s", folder or "all files", exc)
            return []
