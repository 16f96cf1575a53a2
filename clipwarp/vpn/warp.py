"""
clipwarp.vpn.warp — Cloudflare WARP control through ``warp-cli``.

``warp-cli status`` prints a report whose interesting line is::

    Status update: Connected

Connecting is asynchronous, so after ``warp-cli connect`` the status is
polled once per ``poll_interval`` for at most ``timeout`` polls.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from enum import Enum
from typing import Protocol

from rich.text import Text

from clipwarp.config import VpnSettings
from clipwarp.errors import ConnectTimeout, ToolFailed
from clipwarp.tools.notify import Notifier
from clipwarp.tools.process import run_tool

logger = logging.getLogger(__name__)

CONNECTED = "Connected"
CONNECTING = "Connecting"
DISCONNECTED = "Disconnected"
UNKNOWN = "Unknown"


class Mode(str, Enum):
    TOGGLE = "toggle"
    CONNECT = "connect"
    DISCONNECT = "disconnect"


class Reporter(Protocol):
    """Where user-facing progress lines go (a console, or a mock)."""

    def info(self, message: str | Text) -> None: ...
    def success(self, message: str | Text) -> None: ...
    def warn(self, message: str | Text) -> None: ...
    def error(self, message: str | Text) -> None: ...


def parse_status(output: str) -> str | None:
    """Return the state from the ``Status update:`` line, if any."""
    for line in output.splitlines():
        if "Status update" not in line:
            continue
        _, _, rest = line.partition(": ")
        state = rest.split(": ", 1)[0].strip()
        return state or None
    return None


class WarpClient:
    """Subprocess wrapper around ``warp-cli``."""

    def __init__(self, command: str = "warp-cli", runner: Callable[..., object] = run_tool) -> None:
        self.command = command
        self._run = runner

    def status(self) -> str:
        """Current state, or ``Unknown`` when it cannot be determined."""
        try:
            result = self._run([self.command, "status"], timeout=10)
        except ToolFailed as exc:
            logger.debug("status failed: %s", exc)
            return UNKNOWN
        return parse_status(result.stdout.decode("utf-8", errors="replace")) or UNKNOWN

    def connect(self) -> None:
        self._run([self.command, "connect"], timeout=30)

    def disconnect(self) -> None:
        self._run([self.command, "disconnect"], timeout=30)


class WarpController:
    """Connect / disconnect / toggle with progress reporting.

    Parameters
    ----------
    client : WarpClient
        Talks to ``warp-cli``.
    settings : VpnSettings
        Timeout, polling interval and notification icons.
    notifier : Notifier
        Desktop notifications (best-effort).
    reporter : Reporter
        Receives the ``[INFO]`` / ``[OK]`` / ``[WARN]`` / ``[ERR]`` lines.
    sleep : Callable[[float], None]
        Injected so tests don't wait on the polling loop.
    """

    def __init__(
        self,
        client: WarpClient,
        settings: VpnSettings,
        notifier: Notifier,
        reporter: Reporter,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.client = client
        self.settings = settings
        self.notifier = notifier
        self.reporter = reporter
        self._sleep = sleep

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _notify(self, title: str, body: str, urgency: str, icon: str) -> None:
        self.notifier.send(title, body, urgency=urgency, icon=icon)

    def wait_for_connection(self) -> None:
        """Send ``connect`` and poll until connected.

        Raises
        ------
        ToolFailed
            If the connect command itself fails.
        ConnectTimeout
            If the state is not ``Connected`` after ``timeout`` polls.
        """
        icons = self.settings.icons
        self.reporter.info("Initiating connection sequence...")
        self._notify("Connecting...", "Establishing secure tunnel.", "normal", icons.waiting)

        try:
            self.client.connect()
        except ToolFailed:
            self.reporter.error("Failed to send connect command.")
            self._notify("Error", "Failed to send connect command.", "critical", icons.error)
            raise

        for _ in range(self.settings.timeout):
            if self.client.status() == CONNECTED:
                self.reporter.success("WARP is now Connected.")
                self._notify("Connected", "Secure tunnel active.", "normal", icons.connected)
                return
            self._sleep(self.settings.poll_interval)

        timeout = self.settings.timeout
        self.reporter.error(f"Connection timed out after {timeout}s.")
        self._notify(
            "Timeout", f"Failed to connect within {timeout} seconds.", "critical", icons.error
        )
        raise ConnectTimeout(timeout)

    def disconnect(self) -> None:
        """Send ``disconnect``.  Raises :class:`ToolFailed` on failure."""
        icons = self.settings.icons
        self.reporter.info("Disconnecting...")
        try:
            self.client.disconnect()
        except ToolFailed:
            self.reporter.error("Failed to disconnect.")
            self._notify("Error", "Failed to disconnect WARP.", "critical", icons.error)
            raise
        self.reporter.success("Disconnected successfully.")
        self._notify("Disconnected", "Secure tunnel closed.", "low", icons.disconnected)

    # ------------------------------------------------------------------
    # Entry
    # ------------------------------------------------------------------

    def run(self, mode: Mode = Mode.TOGGLE) -> None:
        """Bring WARP into the state *mode* asks for."""
        status = self.client.status()
        logger.info("warp status=%s mode=%s", status, mode.value)

        if mode is Mode.CONNECT:
            if status == CONNECTED:
                self.reporter.success("Already Connected. No action taken.")
            else:
                self.wait_for_connection()
            return

        if mode is Mode.DISCONNECT:
            if status == DISCONNECTED:
                self.reporter.success("Already Disconnected. No action taken.")
            else:
                self.disconnect()
            return

        self.reporter.info(Text.assemble("Current Status: ", (status, "bold")))
        if status in (CONNECTED, CONNECTING):
            self.disconnect()
        elif status == DISCONNECTED:
            self.wait_for_connection()
        else:
            self.reporter.warn(f"Unknown status detected: '{status}'. Attempting to connect.")
            self.wait_for_connection()
