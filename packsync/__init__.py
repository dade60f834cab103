"""packsync - push a pack project's web data and releases to the pack API."""

from .api import PackClient, create_client
from .exceptions import (
    ArtifactParseError,
    InvalidActionError,
    ManifestMissingError,
    PackAPIError,
    PackAuthenticationError,
    PackConfigError,
    PackNetworkError,
    PackNotFoundError,
    PackSyncError,
    ReleaseEventError,
    UnsupportedActionError,
)

__all__ = [
    "PackClient",
    "create_client",
    "ArtifactParseError",
    "InvalidActionError",
    "ManifestMissingError",
    "PackAPIError",
    "PackAuthenticationError",
    "PackConfigError",
    "PackNetworkError",
    "PackNotFoundError",
    "PackSyncError",
    "ReleaseEventError",
    "UnsupportedActionError",
]
