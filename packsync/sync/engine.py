"""Sync engine pushing the local pack project to the web API."""

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

from ..api import PackClient
from ..models import PackMetadata
from ..output import OutputFormatter
from .scanner import LocalArtifactScanner
from .transform import (
    build_release_payload,
    encode_assets,
    parse_manifest,
    parse_metadata,
    parse_page,
)

logger = logging.getLogger(__name__)


@dataclass
class SyncSummary:
    """What a single ``update_web`` run uploaded and skipped."""

    pages: int = 0
    metadata: bool = False
    assets: int = 0
    skipped: list[str] = field(default_factory=list)


class SyncEngine:
    """Orchestrates the upload of pack metadata, pages, assets and releases.

    Nothing is cached between calls: every run scans the project again and
    builds fresh request bodies.
    """

    def __init__(
        self,
        client: PackClient,
        root: Union[str, Path] = ".",
        output: Optional[OutputFormatter] = None,
    ):
        """Initialize sync engine.

        Args:
            client: Pack API client
            root: Project root holding the ``web`` directory
            output: Output formatter for progress and warnings
        """
        self.client = client
        self.root = Path(root)
        self.output = output or OutputFormatter()
        self.scanner = LocalArtifactScanner(self.root)

    async def get_pack_data(self) -> PackMetadata:
        """Fetch the pack metadata currently stored on the backend."""
        return await self.client.get_pack()

    async def update_web(self) -> SyncSummary:
        """Upload pages, pack metadata and assets concurrently.

        Every branch runs to completion before anything is reported. If one
        or more branches failed, the first failure is raised after all of
        them have settled; uploads that already succeeded are kept.

        Returns:
            Summary of what was uploaded and skipped

        Raises:
            PackSyncError: The first failure among the branches
        """
        summary = SyncSummary()

        with self.output.group("Updating web"):
            branches = [
                *self._page_branches(summary),
                self._update_data(summary),
                self._update_assets(summary),
            ]
            results = await asyncio.gather(*branches, return_exceptions=True)

        failures = [result for result in results if isinstance(result, BaseException)]
        if failures:
            for extra in failures[1:]:
                logger.error(f"Additional web update failure: {extra}")
            raise failures[0]

        logger.debug(
            f"Web update done: {summary.pages} page(s), "
            f"metadata={summary.metadata}, {summary.assets} asset(s), "
            f"skipped={summary.skipped}"
        )
        return summary

    async def _update_data(self, summary: SyncSummary) -> None:
        path = self.scanner.find_metadata()
        if path is None:
            self.output.warning("Skip updating pack data")
            summary.skipped.append("metadata")
            return

        metadata = parse_metadata(path)
        await self.client.update_pack(metadata.to_dict())
        summary.metadata = True
        self.output.info("Updated pack data")

    async def _update_assets(self, summary: SyncSummary) -> None:
        if not self.scanner.has_assets_dir():
            self.output.warning("No assets defined")
            summary.skipped.append("assets")
            return

        assets = self.scanner.find_assets()
        headers, body = encode_assets(assets)
        await self.client.update_assets(headers, body)
        summary.assets = len(assets)
        self.output.info("Updated assets")

    def _page_branches(self, summary: SyncSummary) -> list[Any]:
        if not self.scanner.has_pages_dir():
            self.output.warning("No pages defined")
            summary.skipped.append("pages")
            return []
        return [self._update_page(path, summary) for path in self.scanner.find_pages()]

    async def _update_page(self, path: Path, summary: SyncSummary) -> None:
        page = parse_page(path)
        await self.client.update_page(page.content)
        summary.pages += 1
        self.output.info(f"Uploaded {page.title}")

    async def create_release(
        self,
        release: dict[str, Any],
        directory: Union[str, Path, None] = None,
    ) -> Any:
        """Create the release for a release event.

        The installed-mod manifest is required; add-ons whose file is not
        shipped in ``mods/`` are left out of the release.

        Args:
            release: Release event record (needs ``tag_name``)
            directory: Optional sub-directory of the root holding the build

        Returns:
            The release record returned by the backend

        Raises:
            ManifestMissingError: If the manifest is absent (no request is made)
            ReleaseEventError: If the release has no tag name
            PackAPIError: If the request fails
        """
        layout = self.scanner.release_layout(directory)
        manifest = parse_manifest(self.scanner.find_manifest(directory))
        payload = build_release_payload(release, manifest, layout.mods_dir)

        logger.debug(
            f"Release {payload.tag_name}: {len(payload.installed_addons)} of "
            f"{len(manifest.installed_addons)} addon(s) shipped"
        )
        data = await self.client.create_release(payload.tag_name, payload.to_dict())
        self.output.success(f"Created release for version '{payload.tag_name}'")
        return data
