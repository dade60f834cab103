"""Conversion of local artifacts into API request bodies."""

import json
import logging
import os
import secrets
from enum import Enum
from pathlib import Path
from typing import Any

import httpx
import yaml

from ..exceptions import ArtifactParseError, ReleaseEventError
from ..models import (
    AssetFile,
    InstalledAddon,
    MinecraftInstance,
    PackMetadata,
    PageDocument,
    ReleasePayload,
)
from ..utils import RELEASE_FIELDS

logger = logging.getLogger(__name__)


class PageFormat(Enum):
    """Supported page file formats.

    Anything that is neither JSON nor YAML maps to ``UNKNOWN`` and is sent
    as an empty page rather than failing the batch.
    """

    JSON = "json"
    YAML = "yaml"
    UNKNOWN = "unknown"

    @classmethod
    def from_path(cls, path: Path) -> "PageFormat":
        suffix = path.suffix.lower()
        if suffix == ".json":
            return cls.JSON
        if suffix in (".yml", ".yaml"):
            return cls.YAML
        return cls.UNKNOWN


def _load_yaml(path: Path) -> Any:
    try:
        return yaml.safe_load(path.read_text(encoding="utf-8", errors="replace"))
    except yaml.YAMLError as e:
        raise ArtifactParseError(path, str(e)) from e


def _load_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8", errors="replace"))
    except json.JSONDecodeError as e:
        raise ArtifactParseError(path, str(e)) from e


def parse_metadata(path: Path) -> PackMetadata:
    """Parse ``pack.yml``.

    Args:
        path: Path to the metadata file

    Returns:
        PackMetadata carrying the parsed mapping verbatim

    Raises:
        ArtifactParseError: If the file is not a YAML mapping
    """
    data = _load_yaml(path)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ArtifactParseError(path, "expected a mapping at the top level")
    return PackMetadata.from_dict(data)


def parse_page(path: Path) -> PageDocument:
    """Parse a page file according to its extension.

    Args:
        path: Path to the page file

    Returns:
        PageDocument, with empty content for unsupported extensions
    """
    page_format = PageFormat.from_path(path)
    if page_format is PageFormat.JSON:
        content = _load_json(path)
    elif page_format is PageFormat.YAML:
        content = _load_yaml(path)
        if content is None:
            content = {}
    else:
        logger.debug(f"Unsupported page format, sending empty page: {path.name}")
        content = {}
    return PageDocument(path=path, content=content)


def encode_assets(assets: list[AssetFile]) -> tuple[dict[str, str], bytes]:
    """Encode asset files as one multipart/form-data body.

    Each part is named after the file's base name.

    Args:
        assets: Asset files to include

    Returns:
        Tuple of (headers, body). The headers hold the multipart content
        type with its boundary.
    """
    files = [
        (asset.name, (asset.name, asset.read_bytes(), asset.content_type))
        for asset in assets
    ]
    if not files:
        # httpx sends no body for an empty file list; send a closed form instead
        boundary = secrets.token_hex(16)
        headers = {"Content-Type": f"multipart/form-data; boundary={boundary}"}
        return headers, f"--{boundary}--\r\n".encode("ascii")

    request = httpx.Request("PUT", "http://localhost/", files=files)
    body = request.read()
    headers = {"Content-Type": request.headers["Content-Type"]}
    return headers, body


def strip_release(release: dict[str, Any]) -> dict[str, Any]:
    """Keep only the descriptive fields of a release event record."""
    return {key: release[key] for key in RELEASE_FIELDS if key in release}


def parse_manifest(path: Path) -> MinecraftInstance:
    """Parse the installed-mod manifest.

    Raises:
        ArtifactParseError: If the file is not a JSON object
    """
    data = _load_json(path)
    if not isinstance(data, dict):
        raise ArtifactParseError(path, "expected a JSON object")
    return MinecraftInstance.from_dict(data)


def _is_shipped(mods_dir: Path, file_name: str) -> bool:
    """Check that ``file_name`` exists inside ``mods_dir`` and not elsewhere."""
    if Path(file_name).is_absolute():
        return False
    candidate = Path(os.path.normpath(mods_dir / file_name))
    if Path(os.path.normpath(mods_dir)) not in candidate.parents:
        return False
    return candidate.exists()


def filter_installed_addons(
    manifest: MinecraftInstance, mods_dir: Path
) -> list[InstalledAddon]:
    """Keep the add-ons whose installed file is present in ``mods_dir``.

    Args:
        manifest: Parsed installed-mod manifest
        mods_dir: Directory holding the shipped mod files

    Returns:
        Subset of ``manifest.installed_addons`` in manifest order
    """
    kept = []
    for addon in manifest.installed_addons:
        file_name = addon.installed_file.file_name
        if file_name and _is_shipped(mods_dir, file_name):
            kept.append(addon)
        else:
            logger.debug(f"Skipping addon {addon.addon_id}: {file_name} not shipped")
    return kept


def build_release_payload(
    release: dict[str, Any], manifest: MinecraftInstance, mods_dir: Path
) -> ReleasePayload:
    """Build the release body from an event record and the manifest.

    Args:
        release: Release event record
        manifest: Parsed installed-mod manifest
        mods_dir: Directory holding the shipped mod files

    Returns:
        ReleasePayload

    Raises:
        ReleaseEventError: If the release has no tag name
    """
    tag = release.get("tag_name")
    if not isinstance(tag, str) or not tag.strip():
        raise ReleaseEventError("Release event has no tag name")
    return ReleasePayload(
        tag_name=tag,
        fields=strip_release(release),
        installed_addons=tuple(filter_installed_addons(manifest, mods_dir)),
    )
