"""Data models for pack artifacts and API payloads."""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional


@dataclass
class PackMetadata:
    """Pack metadata as stored in ``web/pack.yml`` and served by ``/pack``.

    Only the well-known keys are modelled. The parsed mapping is kept in
    ``raw`` and is what gets sent, so unknown keys pass through untouched.
    """

    name: str = ""
    author: str = ""
    description: str = ""
    slug: str = ""
    assets: Optional[dict[str, Optional[str]]] = None
    links: Optional[dict[str, Optional[str]]] = None
    private: bool = False
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> "PackMetadata":
        """Create PackMetadata from a parsed document or API response.

        Args:
            data: Parsed mapping (``None`` is treated as empty)

        Returns:
            PackMetadata instance
        """
        data = dict(data or {})
        return cls(
            name=data.get("name") or "",
            author=data.get("author") or "",
            description=data.get("description") or "",
            slug=data.get("slug") or "",
            assets=data.get("assets"),
            links=data.get("links"),
            private=bool(data.get("private", False)),
            raw=data,
        )

    def to_dict(self) -> dict[str, Any]:
        return dict(self.raw)


@dataclass
class PageDocument:
    """A single page, parsed from one file in ``web/pages``."""

    path: Path
    content: Any = field(default_factory=dict)

    @property
    def title(self) -> Optional[str]:
        """Page title used for log messages."""
        if isinstance(self.content, dict):
            return self.content.get("title")
        return None


@dataclass
class AssetFile:
    """A file from ``web/assets``. Identity is the base file name."""

    path: Path

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def content_type(self) -> str:
        mime_type, _ = mimetypes.guess_type(self.path.name)
        return mime_type or "application/octet-stream"

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()


@dataclass
class InstalledFile:
    """The file installed for an add-on."""

    id: int
    file_name: str
    category_section_package_type: Optional[int] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "InstalledFile":
        return cls(
            id=data.get("id", 0),
            file_name=data.get("fileName", ""),
            category_section_package_type=data.get("categorySectionPackageType"),
        )


@dataclass
class InstalledAddon:
    """An add-on entry from the installed-mod manifest.

    ``raw`` holds the manifest entry as read and is what gets sent to the
    API, so fields beyond the ones modelled here are not lost.
    """

    addon_id: int
    installed_file: InstalledFile
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "InstalledAddon":
        return cls(
            addon_id=data.get("addonID", 0),
            installed_file=InstalledFile.from_dict(data.get("installedFile") or {}),
            raw=data,
        )

    def to_dict(self) -> dict[str, Any]:
        return dict(self.raw)


@dataclass
class MinecraftInstance:
    """The installed-mod manifest (``minecraftinstance.json``)."""

    name: str = ""
    base_mod_loader: Optional[dict[str, Any]] = None
    installed_addons: list[InstalledAddon] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MinecraftInstance":
        return cls(
            name=data.get("name") or "",
            base_mod_loader=data.get("baseModLoader"),
            installed_addons=[
                InstalledAddon.from_dict(addon)
                for addon in data.get("installedAddons") or []
            ],
        )


@dataclass(frozen=True)
class ReleasePayload:
    """Body sent to ``PUT /pack/release/{tag}``."""

    tag_name: str
    fields: dict[str, Any]
    installed_addons: tuple[InstalledAddon, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "installedAddons": [addon.to_dict() for addon in self.installed_addons],
            **self.fields,
        }
