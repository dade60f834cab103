"""Exceptions raised by packsync."""

from __future__ import annotations

from pathlib import Path


class PackSyncError(Exception):
    """Base exception for all packsync errors."""


class PackConfigError(PackSyncError):
    """Required configuration value is missing."""


class InvalidActionError(PackSyncError):
    """The requested top-level action is not known."""

    def __init__(self, action: str):
        super().__init__(f"Invalid action '{action}'")
        self.action = action


class UnsupportedActionError(PackSyncError):
    """The action is known but handled by another tool."""

    def __init__(self, action: str):
        super().__init__(f"Action '{action}' is not handled by packsync")
        self.action = action


class ManifestMissingError(PackSyncError):
    """The installed-mod manifest needed for a release is absent."""

    def __init__(self, path: Path):
        super().__init__(f"{path.name} file missing")
        self.path = path


class ReleaseEventError(PackSyncError):
    """The release event record cannot be used to build a release."""


class ArtifactParseError(PackSyncError):
    """A local artifact could not be parsed."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Failed to parse {path}: {reason}")
        self.path = path


class PackAPIError(PackSyncError):
    """A request to the pack web API failed.

    Carries the requested URL and whatever the server answered so the
    entry point can report the failing endpoint.
    """

    def __init__(
        self,
        message: str,
        url: str,
        status_code: int | None = None,
        body: str | None = None,
    ):
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.body = body


class PackAuthenticationError(PackAPIError):
    """The API rejected the bearer token."""


class PackNotFoundError(PackAPIError):
    """The requested API resource does not exist."""


class PackNetworkError(PackAPIError):
    """The request never produced a response."""
