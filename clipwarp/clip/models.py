"""
clipwarp.clip.models — Data types shared by the clipboard components.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

PIN_SUFFIX = ".pin"


class EntryKind(str, Enum):
    """Where a menu row came from."""

    PIN = "pin"
    HIST = "hist"


class ContentKind(str, Enum):
    """What a cliphist entry holds."""

    TEXT = "text"
    IMAGE = "image"


@dataclass(frozen=True)
class PinEntry:
    """A pinned clipboard entry, stored as ``<id>.pin``.

    Attributes
    ----------
    id : str
        Truncated content hash; doubles as the file stem.
    content : bytes
        The pinned bytes, exactly as copied.
    touched_at : datetime
        File modification time; newest pins are listed first.
    """

    id: str
    content: bytes
    touched_at: datetime

    @property
    def filename(self) -> str:
        return f"{self.id}{PIN_SUFFIX}"


@dataclass(frozen=True)
class HistoryEntry:
    """One line of ``cliphist list`` output (``id<TAB>payload``)."""

    id: str
    raw_line: str
    payload: str
    kind: ContentKind = ContentKind.TEXT

    @property
    def is_image(self) -> bool:
        return self.kind is ContentKind.IMAGE


@dataclass(frozen=True)
class InfoToken:
    """The hidden ``info`` field of a menu row.

    rofi hands it back in ``ROFI_INFO`` when the row is selected, so it
    carries everything the router needs: ``pin:<filename>`` or
    ``hist:<raw cliphist line>``.
    """

    kind: EntryKind
    data: str

    def encode(self) -> str:
        return f"{self.kind.value}:{self.data}"

    @classmethod
    def decode(cls, raw: str | None) -> InfoToken | None:
        """Parse ``ROFI_INFO``.  Returns None for anything unrecognised."""
        if not raw or ":" not in raw:
            return None
        kind, _, data = raw.partition(":")
        try:
            return cls(EntryKind(kind), data)
        except ValueError:
            return None


@dataclass(frozen=True)
class MenuRow:
    """A single rofi row; never persisted."""

    text: str
    info: InfoToken
    icon: Path | None = None
