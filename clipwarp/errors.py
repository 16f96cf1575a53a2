"""
clipwarp.errors — Exception hierarchy shared by the clipboard and VPN tools.

Callers decide how fatal each one is: a missing dependency aborts the
process, a missing thumbnail only downgrades a menu row.
"""

from __future__ import annotations


class ClipwarpError(Exception):
    """Base exception for clipwarp errors."""


class DependencyMissing(ClipwarpError):
    """One or more required external tools are not on ``PATH``."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"Missing dependencies: {' '.join(self.missing)}")


class NotFound(ClipwarpError):
    """A pin or history entry does not exist."""


class InvalidPinId(ClipwarpError, ValueError):
    """An identifier would escape its storage directory."""


class Unavailable(ClipwarpError):
    """A thumbnail could not be produced."""


class DaemonError(ClipwarpError):
    """The clipboard history daemon failed or returned nothing."""


class ConnectTimeout(ClipwarpError):
    """The VPN did not reach the connected state in time."""

    def __init__(self, timeout: int) -> None:
        self.timeout = timeout
        super().__init__(f"Connection timed out after {timeout}s.")


class ToolFailed(ClipwarpError):
    """An external command could not be run or exited non-zero."""

    def __init__(self, command: str, reason: str, returncode: int | None = None) -> None:
        self.command = command
        self.returncode = returncode
        super().__init__(f"{command}: {reason}")
