"""Tests for configuration, release events and console output."""

import json

import pytest
from rich.console import Console

from packsync.config import Settings, in_actions, input_variable
from packsync.events import load_release
from packsync.exceptions import PackConfigError, ReleaseEventError
from packsync.output import OutputFormatter
from packsync.utils import format_body


class TestSettings:
    """Tests for Settings."""

    def test_input_variable(self):
        assert input_variable("web_token") == "INPUT_WEB_TOKEN"
        assert input_variable("release dir") == "INPUT_RELEASE_DIR"

    def test_in_actions(self):
        assert in_actions({"GITHUB_ACTIONS": "true"}) is True
        assert in_actions({"GITHUB_ACTIONS": "false"}) is False
        assert in_actions({}) is False

    def test_from_inputs_reads_event(self):
        settings = Settings.from_inputs(
            action=" web ",
            api_url="https://api.example.com",
            web_token="secret",
            environ={
                "GITHUB_EVENT_NAME": "release",
                "GITHUB_EVENT_PATH": "/tmp/event.json",
            },
        )

        assert settings.action == "web"
        assert settings.is_release_event is True
        assert settings.event_path == "/tmp/event.json"
        assert settings.release_dir == ""

    def test_action_required(self):
        with pytest.raises(PackConfigError, match="action"):
            Settings(action="  ")

    def test_require_web(self):
        Settings(action="web", api_url="https://x", web_token="t").require_web()

        with pytest.raises(PackConfigError, match="web_token"):
            Settings(action="web", api_url="https://x").require_web()
        with pytest.raises(PackConfigError, match="api"):
            Settings(action="web", web_token="t").require_web()


class TestLoadRelease:
    """Tests for reading the release event payload."""

    def test_load_release(self, tmp_path):
        path = tmp_path / "event.json"
        path.write_text(json.dumps({"action": "published", "release": {"tag_name": "v1"}}))
        assert load_release(path) == {"tag_name": "v1"}

    def test_missing_path(self):
        with pytest.raises(ReleaseEventError, match="No event payload"):
            load_release("")

    def test_missing_file(self, tmp_path):
        with pytest.raises(ReleaseEventError, match="not found"):
            load_release(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "event.json"
        path.write_text("{")
        with pytest.raises(ReleaseEventError, match="not valid JSON"):
            load_release(path)

    def test_payload_without_release(self, tmp_path):
        path = tmp_path / "event.json"
        path.write_text(json.dumps({"ref": "refs/heads/main"}))
        with pytest.raises(ReleaseEventError, match="no release"):
            load_release(path)


class TestOutputFormatter:
    """Tests for OutputFormatter."""

    @pytest.fixture
    def consoles(self):
        out = Console(record=True, width=200)
        err = Console(record=True, width=200)
        return out, err

    def test_plain_output(self, consoles):
        out, err = consoles
        formatter = OutputFormatter(annotations=False, console=out, error_console=err)

        with formatter.group("Updating web"):
            formatter.info("Updated pack data")
            formatter.warning("No assets defined")
        formatter.error("Boom")

        text = out.export_text()
        assert "Updating web" in text
        assert "Updated pack data" in text
        assert "Warning: No assets defined" in text
        assert "Error: Boom" in err.export_text()

    def test_workflow_commands(self, consoles):
        out, err = consoles
        formatter = OutputFormatter(annotations=True, console=out, error_console=err)

        with formatter.group("Updating web"):
            formatter.warning("50% done\nnext")
        formatter.error("Invalid action 'x'")

        lines = out.export_text().splitlines()
        assert lines == ["::group::Updating web", "::warning::50%25 done%0Anext", "::endgroup::"]
        assert err.export_text().strip() == "::error::Invalid action 'x'"

    def test_quiet_keeps_problems(self, consoles):
        out, err = consoles
        formatter = OutputFormatter(
            quiet=True, annotations=False, console=out, error_console=err
        )

        formatter.info("hidden")
        formatter.success("hidden")
        formatter.warning("shown")

        text = out.export_text()
        assert "hidden" not in text
        assert "shown" in text

    def test_markup_not_interpreted(self, consoles):
        out, err = consoles
        formatter = OutputFormatter(annotations=False, console=out, error_console=err)
        formatter.info("[bold]title[/bold]")
        assert "[bold]title[/bold]" in out.export_text()


class TestFormatBody:
    """Tests for format_body."""

    def test_none(self):
        assert format_body(None) == ""

    def test_bytes(self):
        assert format_body(b"error") == "error"

    def test_truncation(self):
        assert format_body("x" * 10, limit=4) == "xxxx..."
