"""Configuration read from the invoking pipeline.

The pipeline exposes each step input as an environment variable named
``INPUT_<NAME>`` (upper-cased, spaces replaced by underscores). Values are
treated as opaque strings; only their presence is checked.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .exceptions import PackConfigError


def input_variable(name: str) -> str:
    """Return the environment variable name backing a pipeline input.

    Examples:
        >>> input_variable("web_token")
        'INPUT_WEB_TOKEN'
    """
    return f"INPUT_{name.replace(' ', '_').upper()}"


def in_actions(environ: Optional[Mapping[str, str]] = None) -> bool:
    """Check whether we are running inside a GitHub Actions job."""
    env = os.environ if environ is None else environ
    return env.get("GITHUB_ACTIONS", "").lower() == "true"


@dataclass
class Settings:
    """Values consumed once at start-up."""

    action: str
    api_url: str = ""
    web_token: str = ""
    release_dir: str = ""
    event_name: str = ""
    event_path: str = ""

    def __post_init__(self) -> None:
        self.action = (self.action or "").strip()
        self.api_url = (self.api_url or "").strip()
        self.web_token = (self.web_token or "").strip()
        self.release_dir = (self.release_dir or "").strip()
        if not self.action:
            raise PackConfigError("Input required and not supplied: action")

    @classmethod
    def from_inputs(
        cls,
        action: str,
        api_url: Optional[str] = None,
        web_token: Optional[str] = None,
        release_dir: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "Settings":
        """Build settings from step inputs plus the pipeline event variables.

        Args:
            action: Top-level action to run
            api_url: Base URL of the pack web API
            web_token: Bearer credential for the API
            release_dir: Sub-directory holding the release build
            environ: Mapping to read event variables from (defaults to
                ``os.environ``)
        """
        env = os.environ if environ is None else environ
        return cls(
            action=action,
            api_url=api_url or "",
            web_token=web_token or "",
            release_dir=release_dir or "",
            event_name=env.get("GITHUB_EVENT_NAME", ""),
            event_path=env.get("GITHUB_EVENT_PATH", ""),
        )

    @property
    def is_release_event(self) -> bool:
        return self.event_name == "release"

    def require_web(self) -> None:
        """Make sure everything the web flow needs is present."""
        if not self.web_token:
            raise PackConfigError("Input required and not supplied: web_token")
        if not self.api_url:
            raise PackConfigError("Input required and not supplied: api")
