"""Discovery of the local pack artifacts."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from ..exceptions import ManifestMissingError
from ..models import AssetFile
from ..utils import (
    ASSETS_DIR,
    MANIFEST_FILE,
    METADATA_FILE,
    MODS_DIR,
    PAGES_DIR,
    WEB_DIR,
)

logger = logging.getLogger(__name__)


@dataclass
class WebLayout:
    """Locations of the web artifacts below a project root."""

    root: Path

    def __post_init__(self) -> None:
        self.root = Path(self.root)

    @property
    def web_dir(self) -> Path:
        return self.root / WEB_DIR

    @property
    def metadata_file(self) -> Path:
        return self.web_dir / METADATA_FILE

    @property
    def pages_dir(self) -> Path:
        return self.web_dir / PAGES_DIR

    @property
    def assets_dir(self) -> Path:
        return self.web_dir / ASSETS_DIR


@dataclass
class ReleaseLayout:
    """Locations of the release build (manifest and mods) below a directory."""

    root: Path

    def __post_init__(self) -> None:
        self.root = Path(self.root)

    @property
    def manifest_file(self) -> Path:
        return self.root / MANIFEST_FILE

    @property
    def mods_dir(self) -> Path:
        return self.root / MODS_DIR


def _list_files(directory: Path) -> list[Path]:
    """Regular files directly inside ``directory``, sorted by name."""
    return sorted(
        (item for item in directory.iterdir() if item.is_file()),
        key=lambda item: item.name,
    )


class LocalArtifactScanner:
    """Reports which artifact categories exist in a project.

    Missing metadata, pages or assets are not errors: the scanner returns
    ``None`` or an empty list and leaves the warning to the caller. Only a
    missing installed-mod manifest raises, because a release cannot be
    built without it.

    Examples:
        >>> scanner = LocalArtifactScanner(Path("."))
        >>> pages = scanner.find_pages()
        >>> metadata = scanner.find_metadata()
    """

    def __init__(self, root: Union[str, Path] = "."):
        self.layout = WebLayout(Path(root))

    @property
    def root(self) -> Path:
        return self.layout.root

    def find_metadata(self) -> Optional[Path]:
        """Return the metadata file, or ``None`` if it does not exist."""
        path = self.layout.metadata_file
        if not path.is_file():
            logger.debug(f"No metadata file at {path}")
            return None
        return path

    def find_pages(self) -> list[Path]:
        """Return the page files, empty if the pages directory is absent."""
        pages_dir = self.layout.pages_dir
        if not pages_dir.is_dir():
            logger.debug(f"No pages directory at {pages_dir}")
            return []
        return _list_files(pages_dir)

    def find_assets(self) -> list[AssetFile]:
        """Return the asset files, empty if the assets directory is absent."""
        assets_dir = self.layout.assets_dir
        if not assets_dir.is_dir():
            logger.debug(f"No assets directory at {assets_dir}")
            return []
        return [AssetFile(path=path) for path in _list_files(assets_dir)]

    def has_assets_dir(self) -> bool:
        return self.layout.assets_dir.is_dir()

    def has_pages_dir(self) -> bool:
        return self.layout.pages_dir.is_dir()

    def release_layout(self, directory: Union[str, Path, None] = None) -> ReleaseLayout:
        """Layout of a release build, relative to the project root.

        Args:
            directory: Optional sub-directory holding the build
        """
        if directory:
            return ReleaseLayout(self.root / directory)
        return ReleaseLayout(self.root)

    def find_manifest(self, directory: Union[str, Path, None] = None) -> Path:
        """Return the installed-mod manifest.

        Raises:
            ManifestMissingError: If the manifest file does not exist
        """
        path = self.release_layout(directory).manifest_file
        if not path.is_file():
            raise ManifestMissingError(path)
        return path
