"""Async client for the ARCADE library repository on GitHub.

Wraps the two kinds of requests the scaffolder makes:

* one ``GET`` to the GitHub API for the latest release tag (with a fixed
  fallback when it cannot be determined), and
* one ``GET`` per catalog asset, issued concurrently and written straight to
  the project directory.

Typical usage::

    client = ArcadeRepoClient(Settings.from_env())
    tag = await client.resolve_release_tag()
    await client.fetch_all(list_header_assets(tag), project_root)
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from pathlib import Path

import httpx

from arcade_cli.catalog import AssetDescriptor
from arcade_cli.config import Settings
from arcade_cli.errors import AssetFetchError, ReleaseResolutionError

logger = logging.getLogger(__name__)


class ArcadeRepoClient:
    """Fetches release metadata and files from the ARCADE repository.

    A fresh ``httpx.AsyncClient`` is opened per operation.  *transport* is
    handed to every client it opens, which lets tests substitute an
    ``httpx.MockTransport``.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.transport = transport

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _client(self) -> httpx.AsyncClient:
        """Return a fresh ``AsyncClient`` with our timeout and redirect policy."""
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.settings.timeout, connect=10.0),
            follow_redirects=True,
            transport=self.transport,
        )

    def _api_headers(self) -> dict[str, str]:
        headers = {"Accept": "application/vnd.github+json"}
        if self.settings.github_token:
            headers["Authorization"] = f"Bearer {self.settings.github_token}"
        return headers

    # ------------------------------------------------------------------
    # Release resolution
    # ------------------------------------------------------------------

    async def latest_release_tag(self) -> str:
        """Return the ``tag_name`` of the latest published release.

        Raises:
            ReleaseResolutionError: On any transport error, non-2xx status,
                malformed JSON, or a payload without a usable ``tag_name``.
        """
        url = self.settings.latest_release_url
        try:
            async with self._client() as client:
                response = await client.get(url, headers=self._api_headers())
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as exc:
            raise ReleaseResolutionError(
                f"GitHub API returned HTTP {exc.response.status_code} for {url}"
            ) from exc
        except httpx.HTTPError as exc:
            raise ReleaseResolutionError(f"Request to {url} failed: {exc}") from exc
        except ValueError as exc:
            raise ReleaseResolutionError(f"Invalid JSON from {url}: {exc}") from exc

        tag = data.get("tag_name") if isinstance(data, dict) else None
        if not isinstance(tag, str) or not tag.strip():
            raise ReleaseResolutionError(f"No tag_name in response from {url}")
        return tag.strip()

    async def resolve_release_tag(self, on_fallback: Callable[[str], None] | None = None) -> str:
        """Return the latest release tag, or the configured fallback tag.

        *on_fallback* receives a human-readable warning when the fallback
        tag is used.
        """
        try:
            tag = await self.latest_release_tag()
        except ReleaseResolutionError as exc:
            fallback = self.settings.fallback_tag
            logger.warning("Could not resolve latest ARCADE release (%s); using %s", exc, fallback)
            if on_fallback is not None:
                on_fallback(f"Could not resolve the latest ARCADE release; using {fallback}.")
            return fallback
        logger.debug("Latest ARCADE release is %s", tag)
        return tag

    # ------------------------------------------------------------------
    # Asset transfer
    # ------------------------------------------------------------------

    async def fetch_asset(
        self,
        client: httpx.AsyncClient,
        asset: AssetDescriptor,
        root: Path,
    ) -> Path:
        """Download one asset and write it below *root*.

        Text assets are decoded and written as UTF-8; binary assets are
        written byte-for-byte.

        Raises:
            AssetFetchError: If the request or the write fails.
        """
        destination = Path(root) / asset.path
        try:
            response = await client.get(asset.url)
            response.raise_for_status()
            if asset.binary:
                await asyncio.to_thread(_write_bytes, destination, response.content)
            else:
                await asyncio.to_thread(_write_text, destination, response.text)
        except (httpx.HTTPError, OSError) as exc:
            raise AssetFetchError(asset.path, exc) from exc
        logger.debug("Fetched %s -> %s", asset.url, destination)
        return destination

    async def fetch_all(
        self,
        assets: Sequence[AssetDescriptor],
        root: Path,
        on_done: Callable[[AssetDescriptor], None] | None = None,
    ) -> list[Path]:
        """Download every asset concurrently and wait for all of them.

        Each download runs to completion even if a sibling fails; files that
        were written successfully stay on disk.  *on_done* is called after
        each successful download.

        Raises:
            AssetFetchError: The first failure, in catalog order.
        """

        async def _one(client: httpx.AsyncClient, asset: AssetDescriptor) -> Path:
            path = await self.fetch_asset(client, asset, root)
            if on_done is not None:
                on_done(asset)
            return path

        async with self._client() as client:
            results = await asyncio.gather(
                *(_one(client, asset) for asset in assets),
                return_exceptions=True,
            )

        failures = [r for r in results if isinstance(r, BaseException)]
        if failures:
            for extra in failures[1:]:
                logger.error("%s", extra)
            raise failures[0]
        return [r for r in results if isinstance(r, Path)]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _write_bytes(path: Path, content: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
