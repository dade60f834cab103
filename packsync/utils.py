"""Utility constants and helpers for packsync."""

from typing import Any

# =============================================================================
# Local project layout
# =============================================================================

WEB_DIR: str = "web"
METADATA_FILE: str = "pack.yml"
PAGES_DIR: str = "pages"
ASSETS_DIR: str = "assets"

MANIFEST_FILE: str = "minecraftinstance.json"
MODS_DIR: str = "mods"

# =============================================================================
# Release events
# =============================================================================

# Descriptive fields of a release event that are forwarded to the API
RELEASE_FIELDS: tuple[str, ...] = ("name", "body", "prerelease")


def format_body(body: Any, limit: int = 2000) -> str:
    """Render a response body for a log line.

    Args:
        body: Response body (text, bytes or ``None``)
        limit: Maximum number of characters to keep

    Returns:
        Printable, possibly truncated text
    """
    if body is None:
        return ""
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    text = str(body)
    if len(text) > limit:
        return text[:limit] + "..."
    return text
