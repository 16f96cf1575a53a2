"""
clipwarp.system.probe — Helper-tool discovery.

Looks up the external tools clipwarp drives (cliphist, wl-copy, magick,
warp-cli, notify-send) once per process and turns the result into the
feature flags the rest of the code consults.  rofi re-runs the script on
every selection, so probing is a ``PATH`` lookup only; nothing is spawned.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from functools import lru_cache

from clipwarp.config import ClipwarpSettings, get_settings
from clipwarp.errors import DependencyMissing

NOTIFY_COMMAND = "notify-send"


def _probe_tool(name: str) -> str | None:
    """Return the absolute path of *name*, or None if not found."""
    return shutil.which(name)


@dataclass
class Capabilities:
    """Snapshot of which helper tools are installed."""

    installed_tools: dict[str, str] = field(default_factory=dict)
    missing_tools: list[str] = field(default_factory=list)
    convert_command: str = "magick"

    @classmethod
    def detect(cls, settings: ClipwarpSettings) -> Capabilities:
        """Probe ``PATH`` for every tool named in *settings*."""
        caps = cls(convert_command=settings.clipboard.convert_command)
        names = [
            settings.clipboard.history_command,
            settings.clipboard.copy_command,
            settings.clipboard.convert_command,
            settings.vpn.command,
            NOTIFY_COMMAND,
        ]
        for name in dict.fromkeys(names):
            path = _probe_tool(name)
            if path:
                caps.installed_tools[name] = path
            else:
                caps.missing_tools.append(name)
        return caps

    def has(self, name: str) -> bool:
        return name in self.installed_tools

    @property
    def thumbnails(self) -> bool:
        """Whether image previews can be generated."""
        return self.has(self.convert_command)

    @property
    def notifications(self) -> bool:
        return self.has(NOTIFY_COMMAND)

    def require(self, *names: str) -> None:
        """Raise :class:`DependencyMissing` unless every tool is installed."""
        missing = [name for name in names if not self.has(name)]
        if missing:
            raise DependencyMissing(missing)


@lru_cache(maxsize=1)
def get_capabilities() -> Capabilities:
    """Return cached capabilities (probes run once per process)."""
    return Capabilities.detect(get_settings())
