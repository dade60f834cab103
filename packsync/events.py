"""Loading of the pipeline's release event."""

import json
import logging
from pathlib import Path
from typing import Any, Union

from .exceptions import ReleaseEventError

logger = logging.getLogger(__name__)


def load_release(event_path: Union[str, Path]) -> dict[str, Any]:
    """Read the release record from the event payload file.

    Args:
        event_path: Path to the JSON payload of the triggering event

    Returns:
        The ``release`` object of the payload

    Raises:
        ReleaseEventError: If the payload is missing or holds no release
    """
    if not event_path:
        raise ReleaseEventError("No event payload available for release event")

    path = Path(event_path)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ReleaseEventError(f"Event payload not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ReleaseEventError(f"Event payload is not valid JSON: {e}") from e

    release = payload.get("release") if isinstance(payload, dict) else None
    if not isinstance(release, dict):
        raise ReleaseEventError("Event payload holds no release")

    logger.debug(f"Loaded release event for tag {release.get('tag_name')!r}")
    return release
