"""
clipwarp.tools — Thin wrappers around the external programs clipwarp drives.
"""

from clipwarp.tools.clipboard import write_clipboard
from clipwarp.tools.notify import Notifier
from clipwarp.tools.process import run_tool

__all__ = [
    "Notifier",
    "run_tool",
    "write_clipboard",
]
