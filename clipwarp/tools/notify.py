"""
clipwarp.tools.notify — Best-effort desktop notifications via ``notify-send``.

A dead or restarting notification daemon must never break the caller, so
every failure is logged at debug level and dropped.
"""

from __future__ import annotations

import logging

from clipwarp.errors import ToolFailed
from clipwarp.tools.process import run_tool

logger = logging.getLogger(__name__)


class Notifier:
    """Send notifications on behalf of one application.

    Parameters
    ----------
    app_name : str
        Passed as ``-a`` so the daemon groups notifications.
    enabled : bool
        Result of the capability probe; when False, :meth:`send` is a no-op.
    """

    def __init__(self, app_name: str, enabled: bool = True, command: str = "notify-send") -> None:
        self.app_name = app_name
        self.enabled = enabled
        self.command = command

    def send(self, title: str, body: str = "", urgency: str = "low", icon: str = "") -> bool:
        """Show a notification.  Returns True if it was delivered."""
        if not self.enabled:
            return False

        argv = [self.command, "-u", urgency, "-a", self.app_name]
        if icon:
            argv += ["-i", icon]
        # '--' keeps a title starting with '-' from being parsed as a flag
        argv += ["--", title, body]
        try:
            run_tool(argv, timeout=5)
        except ToolFailed as exc:
            logger.debug("notification dropped: %s", exc)
            return False
        return True
