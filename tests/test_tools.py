"""Tests for clipwarp.tools — subprocess runner, clipboard writer and notifier."""

from __future__ import annotations

import sys
from unittest.mock import patch

import pytest

from clipwarp.errors import ToolFailed
from clipwarp.tools.clipboard import write_clipboard
from clipwarp.tools.notify import Notifier
from clipwarp.tools.process import run_tool

PY = sys.executable


class TestRunTool:
    """Real child processes, using the running interpreter as the tool."""

    def test_captures_stdout(self) -> None:
        result = run_tool([PY, "-c", "print('hello')"])
        assert result.returncode == 0
        assert result.stdout.strip() == b"hello"

    def test_feeds_stdin(self) -> None:
        code = "import sys; sys.stdout.buffer.write(sys.stdin.buffer.read()[::-1])"
        result = run_tool([PY, "-c", code], input=b"\x00abc")
        assert result.stdout == b"cba\x00"

    def test_stdin_closed_without_input(self) -> None:
        code = "import sys; sys.stdout.write(repr(sys.stdin.read()))"
        result = run_tool([PY, "-c", code], timeout=10)
        assert result.stdout == b"''"

    def test_nonzero_exit_raises(self) -> None:
        with pytest.raises(ToolFailed) as excinfo:
            run_tool([PY, "-c", "import sys; sys.stderr.write('boom'); sys.exit(3)"])
        assert excinfo.value.returncode == 3
        assert "boom" in str(excinfo.value)

    def test_nonzero_exit_without_check(self) -> None:
        result = run_tool([PY, "-c", "import sys; sys.exit(2)"], check=False)
        assert result.returncode == 2

    def test_missing_binary(self) -> None:
        with pytest.raises(ToolFailed, match="command not found"):
            run_tool(["clipwarp-no-such-tool-xyz"])

    def test_timeout(self) -> None:
        with pytest.raises(ToolFailed, match="timed out"):
            run_tool([PY, "-c", "import time; time.sleep(5)"], timeout=0.2)

    def test_uncaptured_call_ignores_lingering_children(self) -> None:
        """A child that outlives the tool does not stall an uncaptured call."""
        code = (
            "import subprocess, sys; "
            "subprocess.Popen([sys.executable, '-c', 'import time; time.sleep(3)'])"
        )
        result = run_tool([PY, "-c", code], timeout=2, capture=False)
        assert result.returncode == 0
        assert result.stdout is None

    def test_uncaptured_failure_still_raises(self) -> None:
        with pytest.raises(ToolFailed, match="exit status 4"):
            run_tool([PY, "-c", "import sys; sys.exit(4)"], capture=False)


class TestWriteClipboard:
    def test_pipes_bytes_to_copy_command(self, runner) -> None:
        write_clipboard(b"\x89PNG", command="wl-copy", runner=runner)
        assert runner.calls == [(["wl-copy"], b"\x89PNG")]

    def test_failure_propagates(self, runner) -> None:
        runner.on("wl-copy", returncode=1)
        with pytest.raises(ToolFailed):
            write_clipboard(b"x", runner=runner)

    def test_output_not_captured(self) -> None:
        """The copy tool's background server must not hold our pipes open."""
        with patch("clipwarp.tools.clipboard.run_tool") as run:
            write_clipboard(b"text")
        run.assert_called_once_with(["wl-copy"], input=b"text", timeout=5.0, capture=False)


class TestNotifier:
    def test_disabled_is_noop(self, runner) -> None:
        with patch("clipwarp.tools.notify.run_tool", runner):
            assert Notifier("WARP", enabled=False).send("hi") is False
        assert runner.calls == []

    def test_argv(self, runner) -> None:
        with patch("clipwarp.tools.notify.run_tool", runner):
            sent = Notifier("Cloudflare WARP").send(
                "-Connected", "tunnel up", urgency="normal", icon="network-vpn"
            )
        assert sent is True
        assert runner.commands() == [[
            "notify-send", "-u", "normal", "-a", "Cloudflare WARP",
            "-i", "network-vpn", "--", "-Connected", "tunnel up",
        ]]

    def test_no_icon_flag_without_icon(self, runner) -> None:
        with patch("clipwarp.tools.notify.run_tool", runner):
            Notifier("WARP").send("title")
        assert "-i" not in runner.commands()[0]

    def test_failure_is_swallowed(self, runner) -> None:
        runner.on("notify-send", returncode=1)
        with patch("clipwarp.tools.notify.run_tool", runner):
            assert Notifier("WARP").send("title") is False
