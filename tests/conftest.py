"""Shared fixtures for packsync tests."""

import json
from pathlib import Path
from typing import Any, Optional

import httpx
import pytest

from packsync.api import PackClient
from packsync.output import OutputFormatter

API_URL = "https://api.example.com"


class RequestRecorder:
    """Answers API requests and keeps every request it saw."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.responses: dict[tuple[str, str], tuple[int, Any]] = {}

    def respond(self, method: str, path: str, status: int = 200, body: Any = None):
        self.responses[(method, path)] = (status, body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, body = self.responses.get(
            (request.method, request.url.path), (200, {})
        )
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [
            r for r in self.requests if r.method == method and r.url.path == path
        ]

    def json_bodies(self, method: str, path: str) -> list[Any]:
        return [json.loads(r.content) for r in self.calls(method, path)]


@pytest.fixture
def recorder():
    """Provide a request recorder answering 200 with ``{}`` by default."""
    return RequestRecorder()


@pytest.fixture
def client(recorder):
    """Provide a PackClient backed by the recorder."""
    return PackClient(
        api_url=API_URL,
        token="test_token",
        transport=httpx.MockTransport(recorder.handler),
    )


@pytest.fixture
def output():
    """Provide a quiet output formatter without workflow commands."""
    return OutputFormatter(quiet=True, annotations=False)


def make_project(
    root: Path,
    metadata: Optional[str] = None,
    pages: Optional[dict[str, str]] = None,
    assets: Optional[dict[str, bytes]] = None,
) -> Path:
    """Lay out a pack project below ``root``.

    ``pages`` and ``assets`` create their directory even when empty.
    """
    web = root / "web"
    web.mkdir(parents=True, exist_ok=True)
    if metadata is not None:
        (web / "pack.yml").write_text(metadata)
    if pages is not None:
        (web / "pages").mkdir(exist_ok=True)
        for name, text in pages.items():
            (web / "pages" / name).write_text(text)
    if assets is not None:
        (web / "assets").mkdir(exist_ok=True)
        for name, data in assets.items():
            (web / "assets" / name).write_bytes(data)
    return root


def make_release_build(
    root: Path, addons: list[tuple[int, str]], shipped: list[str]
) -> Path:
    """Write a ``minecraftinstance.json`` and the shipped mod files."""
    root.mkdir(parents=True, exist_ok=True)
    manifest = {
        "name": "Test Pack",
        "baseModLoader": {"name": "forge-36.2.0", "minecraftVersion": "1.16.5"},
        "installedAddons": [
            {
                "addonID": addon_id,
                "installedFile": {
                    "categorySectionPackageType": 6,
                    "id": addon_id * 100,
                    "fileName": file_name,
                },
            }
            for addon_id, file_name in addons
        ],
    }
    (root / "minecraftinstance.json").write_text(json.dumps(manifest))
    (root / "mods").mkdir(exist_ok=True)
    for file_name in shipped:
        (root / "mods" / file_name).write_bytes(b"jar")
    return root
