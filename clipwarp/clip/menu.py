"""
clipwarp.clip.menu — Render pins and history as rofi script-mode lines.

rofi's script protocol, as used here::

    \\0message\\x1f<hint>                     mode option
    <text>\\0icon\\x1f<path>\\x1finfo\\x1f<token>  row with hidden fields

A NUL splits a row's display text from its options, and ``\\x1f`` splits
option keys from values.  Display text is always run through
:func:`make_preview` so neither byte can leak into it.
"""

from __future__ import annotations

import logging
import re
import sys
from collections.abc import Iterator
from typing import TextIO

from clipwarp.clip.history import HistoryAdapter
from clipwarp.clip.models import EntryKind, HistoryEntry, InfoToken, MenuRow
from clipwarp.clip.pins import PinStore
from clipwarp.clip.preview import make_preview, strip_controls
from clipwarp.clip.thumbs import ThumbnailCache
from clipwarp.config import ClipboardSettings
from clipwarp.errors import ClipwarpError

logger = logging.getLogger(__name__)

SEP = "\x1f"
OPT = "\x00"

# The info value runs to the end of the line, so only line breaks and NUL
# can corrupt it; tabs in the raw cliphist line must survive.
_INFO_UNSAFE = re.compile(r"[\x00\r\n]")


def directive(key: str, value: str) -> str:
    """Encode a mode option line (``\\0key\\x1fvalue``)."""
    return f"{OPT}{key}{SEP}{value}"


def encode_row(row: MenuRow) -> str:
    """Encode a row with its optional icon and its info token."""
    fields = []
    if row.icon is not None:
        fields.append(f"icon{SEP}{row.icon}")
    fields.append(f"info{SEP}{_INFO_UNSAFE.sub('', row.info.encode())}")
    return f"{row.text}{OPT}{SEP.join(fields)}"


class MenuRenderer:
    """Builds the full menu: options, then pins, then history."""

    def __init__(
        self,
        settings: ClipboardSettings,
        pins: PinStore,
        history: HistoryAdapter,
        thumbs: ThumbnailCache,
    ) -> None:
        self.settings = settings
        self.pins = pins
        self.history = history
        self.thumbs = thumbs

    def directives(self) -> list[str]:
        return [
            directive("message", self.settings.message),
            directive("use-hot-keys", "true"),
            directive("keep-selection", "true"),
        ]

    def pin_rows(self) -> Iterator[MenuRow]:
        max_len = self.settings.max_preview_length
        for pin in self.pins.list():
            yield MenuRow(
                text=f"{self.settings.pin_icon} {make_preview(pin.content, max_len)}",
                info=InfoToken(EntryKind.PIN, pin.filename),
            )

    def history_row(self, entry: HistoryEntry) -> MenuRow:
        """Build the row for one cliphist entry."""
        label = strip_controls(entry.id)
        info = InfoToken(EntryKind.HIST, entry.raw_line)

        if not entry.is_image:
            preview = make_preview(entry.payload, self.settings.max_preview_length)
            return MenuRow(text=f"{label}: {preview}", info=info)

        try:
            thumb = self.thumbs.ensure(entry.id)
        except ClipwarpError as exc:
            logger.debug("no thumbnail for %s: %s", entry.id, exc)
            return MenuRow(text=f"{label}: [Binary] (No Preview)", info=info)
        return MenuRow(
            text=f"{label}: {self.settings.image_icon} [Image]",
            info=info,
            icon=thumb,
        )

    def rows(self) -> Iterator[MenuRow]:
        yield from self.pin_rows()
        for entry in self.history.list():
            yield self.history_row(entry)

    def render(self) -> list[str]:
        """Return every protocol line of the menu, without newlines."""
        return self.directives() + [encode_row(row) for row in self.rows()]

    def write(self, stream: TextIO | None = None) -> int:
        """Write the menu to *stream* (stdout by default); returns row count."""
        out = stream if stream is not None else sys.stdout
        lines = self.render()
        for line in lines:
            out.write(line + "\n")
        out.flush()
        return len(lines) - len(self.directives())
