"""
clipwarp.tools.clipboard — System clipboard writer.

Pipes raw bytes into ``wl-copy`` (or whatever ``clipboard.copy_command``
names) so images survive the round trip unchanged.
"""

from __future__ import annotations

from collections.abc import Callable

from clipwarp.tools.process import run_tool


def write_clipboard(
    content: bytes,
    command: str = "wl-copy",
    timeout: float = 5.0,
    runner: Callable[..., object] | None = None,
) -> None:
    """Copy *content* to the system clipboard.

    Raises :class:`~clipwarp.errors.ToolFailed` if the copy utility fails.
    """
    # wl-copy forks a server that outlives it; never wait on its output
    (runner or run_tool)([command], input=content, timeout=timeout, capture=False)
