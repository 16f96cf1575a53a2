"""Tests for clipwarp.system.probe — helper-tool discovery."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from clipwarp.config import ClipwarpSettings
from clipwarp.errors import DependencyMissing
from clipwarp.system.probe import Capabilities, get_capabilities


def _which(installed: set[str]):
    return lambda name: f"/usr/bin/{name}" if name in installed else None


class TestDetect:
    def test_detect_splits_installed_and_missing(self) -> None:
        with patch("clipwarp.system.probe.shutil.which", side_effect=_which({"cliphist", "wl-copy"})):
            caps = Capabilities.detect(ClipwarpSettings())
        assert caps.installed_tools == {
            "cliphist": "/usr/bin/cliphist",
            "wl-copy": "/usr/bin/wl-copy",
        }
        assert caps.missing_tools == ["magick", "warp-cli", "notify-send"]

    def test_feature_flags(self) -> None:
        with patch(
            "clipwarp.system.probe._probe_tool",
            side_effect=_which({"magick", "notify-send"}),
        ):
            caps = Capabilities.detect(ClipwarpSettings())
        assert caps.thumbnails is True
        assert caps.notifications is True

    def test_flags_off_when_missing(self) -> None:
        caps = Capabilities(missing_tools=["magick", "notify-send"])
        assert caps.thumbnails is False
        assert caps.notifications is False

    def test_custom_convert_command(self) -> None:
        settings = ClipwarpSettings(clipboard={"convert_command": "convert"})
        with patch("clipwarp.system.probe._probe_tool", side_effect=_which({"convert"})):
            caps = Capabilities.detect(settings)
        assert caps.thumbnails is True

    def test_get_capabilities_is_cached(self) -> None:
        with patch("clipwarp.system.probe._probe_tool", return_value=None) as probe:
            first = get_capabilities()
            second = get_capabilities()
        assert first is second
        assert probe.call_count == 5


class TestRequire:
    def test_require_passes(self) -> None:
        caps = Capabilities(installed_tools={"cliphist": "/usr/bin/cliphist"})
        caps.require("cliphist")

    def test_require_lists_every_missing_tool(self) -> None:
        caps = Capabilities(installed_tools={"cliphist": "/usr/bin/cliphist"})
        with pytest.raises(DependencyMissing) as excinfo:
            caps.require("cliphist", "wl-copy", "magick")
        assert excinfo.value.missing == ["wl-copy", "magick"]
        assert "wl-copy" in str(excinfo.value)
