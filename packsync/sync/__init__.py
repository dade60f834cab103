"""Sync engine for packsync - local artifacts to the pack web API."""

from .engine import SyncEngine, SyncSummary
from .scanner import LocalArtifactScanner, ReleaseLayout, WebLayout
from .transform import (
    PageFormat,
    build_release_payload,
    encode_assets,
    filter_installed_addons,
    parse_manifest,
    parse_metadata,
    parse_page,
    strip_release,
)

__all__ = [
    "SyncEngine",
    "SyncSummary",
    "LocalArtifactScanner",
    "ReleaseLayout",
    "WebLayout",
    "PageFormat",
    "build_release_payload",
    "encode_assets",
    "filter_installed_addons",
    "parse_manifest",
    "parse_metadata",
    "parse_page",
    "strip_release",
]
