"""Tests for clipwarp.cli — Typer housekeeping commands."""

from __future__ import annotations

from unittest.mock import patch

from typer.testing import CliRunner

from clipwarp.cli import app
from clipwarp.clip.pins import PinStore
from clipwarp.clip.preview import content_hash
from clipwarp.config import get_settings
from clipwarp.system.probe import Capabilities

runner = CliRunner()


def _store() -> PinStore:
    return PinStore(get_settings().clipboard.pins_dir)


class TestCLI:
    """Test the Typer sub-commands."""

    def test_version_flag(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "clipwarp" in result.output.lower()

    def test_info_command(self) -> None:
        """clipwarp info lists the paths and every probed tool."""
        caps = Capabilities(
            installed_tools={"cliphist": "/usr/bin/cliphist"},
            missing_tools=["magick"],
        )
        with patch("clipwarp.cli.get_capabilities", return_value=caps):
            result = runner.invoke(app, ["info"])
        assert result.exit_code == 0
        assert "cliphist" in result.output
        assert "magick" in result.output
        assert "Pins" in result.output

    def test_no_args_shows_help(self) -> None:
        result = runner.invoke(app, [])
        # Typer/Click may return 0 or 2 when displaying help
        assert result.exit_code in (0, 2)
        assert "usage" in result.output.lower()

    def test_setup_command_exists(self) -> None:
        result = runner.invoke(app, ["setup", "--help"])
        assert result.exit_code == 0
        assert "--reset" in result.output


class TestPins:
    def test_pins_empty(self) -> None:
        result = runner.invoke(app, ["pins"])
        assert result.exit_code == 0
        assert "No pins yet" in result.output

    def test_pin_then_list(self) -> None:
        result = runner.invoke(app, ["pin", "hello world"])
        assert result.exit_code == 0
        assert content_hash(b"hello world") in result.output

        result = runner.invoke(app, ["pins"])
        assert result.exit_code == 0
        assert "hello world" in result.output

    def test_pin_from_stdin(self) -> None:
        result = runner.invoke(app, ["pin", "-"], input="from stdin\n")
        assert result.exit_code == 0
        [entry] = _store().list()
        assert entry.content == b"from stdin\n"

    def test_pin_empty_stdin(self) -> None:
        result = runner.invoke(app, ["pin", "-"], input="")
        assert result.exit_code == 1
        assert _store().list() == []

    def test_unpin(self) -> None:
        entry = _store().create(b"gone soon")
        result = runner.invoke(app, ["unpin", entry.id])
        assert result.exit_code == 0
        assert "Removed" in result.output
        assert _store().list() == []

    def test_unpin_unknown(self) -> None:
        result = runner.invoke(app, ["unpin", "0123456789abcdef"])
        assert result.exit_code == 0
        assert "No pin" in result.output

    def test_unpin_rejects_traversal(self) -> None:
        result = runner.invoke(app, ["unpin", "../../etc/passwd"])
        assert result.exit_code == 1
