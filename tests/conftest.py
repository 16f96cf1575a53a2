"""Shared fixtures: isolated XDG/config paths and a fake subprocess runner."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Callable
from pathlib import Path

import pytest

from clipwarp import config
from clipwarp.config import ClipboardSettings
from clipwarp.errors import ToolFailed
from clipwarp.system import probe


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point every XDG directory and the config file into tmp_path."""
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    for var in (
        "CLIPWARP_PINS_DIR",
        "CLIPWARP_THUMBS_DIR",
        "CLIPWARP_MAX_PREVIEW",
        "CLIPWARP_WARP_TIMEOUT",
        "ROFI_RETV",
        "ROFI_INFO",
    ):
        monkeypatch.delenv(var, raising=False)

    config_dir = tmp_path / "config"
    monkeypatch.setattr(config, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config, "CONFIG_PATH", config_dir / "config.yaml")
    monkeypatch.setattr(config, "_ENV_FILE", config_dir / ".env")

    config.get_settings.cache_clear()
    probe.get_capabilities.cache_clear()
    yield
    config.get_settings.cache_clear()
    probe.get_capabilities.cache_clear()

    logger = logging.getLogger("clipwarp")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def clip_settings(tmp_path: Path) -> ClipboardSettings:
    return ClipboardSettings(
        pins_dir=tmp_path / "pins",
        thumbs_dir=tmp_path / "thumbs",
    )


class FakeRunner:
    """Stands in for :func:`clipwarp.tools.process.run_tool`.

    Responses are matched on an argv prefix; the most recently registered
    match wins.  Unmatched commands succeed with empty output.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[list[str], bytes | None]] = []
        self._responses: list[tuple[list[str], dict]] = []

    def on(
        self,
        *prefix: str,
        stdout: bytes = b"",
        returncode: int = 0,
        action: Callable[[list[str], bytes | None], None] | None = None,
    ) -> None:
        self._responses.append(
            (list(prefix), {"stdout": stdout, "returncode": returncode, "action": action})
        )

    def commands(self) -> list[list[str]]:
        return [argv for argv, _ in self.calls]

    def __call__(self, command, *, input=None, timeout=None, check=True, capture=True):
        argv = list(command)
        self.calls.append((argv, input))

        response = {"stdout": b"", "returncode": 0, "action": None}
        for prefix, candidate in reversed(self._responses):
            if argv[: len(prefix)] == prefix:
                response = candidate
                break

        if response["action"] is not None:
            response["action"](argv, input)
        if check and response["returncode"] != 0:
            raise ToolFailed(argv[0], f"exit status {response['returncode']}", response["returncode"])
        return subprocess.CompletedProcess(argv, response["returncode"], response["stdout"], b"")


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


def write_png_output(argv: list[str], _input: bytes | None) -> None:
    """Fake ``magick``: write a small file to the ``png:<path>`` target."""
    target = argv[-1]
    if target.startswith("png:"):
        target = target[len("png:"):]
    Path(target).write_bytes(b"\x89PNG\r\n\x1a\nfake")


@pytest.fixture
def fake_magick() -> Callable[[list[str], bytes | None], None]:
    return write_png_output
