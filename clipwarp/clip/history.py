"""
clipwarp.clip.history — cliphist adapter.

``cliphist list`` prints one entry per line as ``id<TAB>payload``, where
the payload of an image looks like ``[[ binary data 12 KiB png 640x480 ]]``.
The daemon owns the entries; clipwarp only reads, decodes and deletes.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterator

from clipwarp.clip.models import ContentKind, HistoryEntry
from clipwarp.errors import DaemonError, ToolFailed
from clipwarp.tools.process import run_tool

logger = logging.getLogger(__name__)

_IMAGE_PAYLOAD = re.compile(r"binary.*(png|jpg|jpeg|bmp|webp)", re.IGNORECASE)


def parse_line(line: str) -> HistoryEntry | None:
    """Split one ``cliphist list`` line.  Blank lines yield None."""
    line = line.rstrip("\r\n")
    if not line.strip():
        return None
    entry_id, _, payload = line.partition("\t")
    kind = ContentKind.IMAGE if _IMAGE_PAYLOAD.search(payload) else ContentKind.TEXT
    return HistoryEntry(id=entry_id, raw_line=line, payload=payload, kind=kind)


class HistoryAdapter:
    """Talks to the cliphist binary.

    Parameters
    ----------
    command : str
        Name or path of the cliphist executable.
    timeout : float
        Per-call timeout in seconds.
    runner : Callable
        Subprocess runner, :func:`run_tool` unless a test swaps it.
    """

    def __init__(
        self,
        command: str = "cliphist",
        timeout: float = 5.0,
        runner: Callable[..., object] = run_tool,
    ) -> None:
        self.command = command
        self.timeout = timeout
        self._run = runner

    def list(self) -> Iterator[HistoryEntry]:
        """Yield current history entries, newest first.

        A failing daemon yields nothing; the menu still shows the pins.
        """
        try:
            result = self._run([self.command, "list"], timeout=self.timeout)
        except ToolFailed as exc:
            logger.error("cliphist list failed: %s", exc)
            return

        text = result.stdout.decode("utf-8", errors="replace")
        for line in text.splitlines():
            entry = parse_line(line)
            if entry is not None:
                yield entry

    def decode(self, entry_id: str) -> bytes:
        """Return the full, untruncated bytes of an entry.

        Raises
        ------
        DaemonError
            On a non-zero exit, a missing binary, or empty output.
        """
        try:
            result = self._run([self.command, "decode", entry_id], timeout=self.timeout)
        except ToolFailed as exc:
            raise DaemonError(f"cliphist decode {entry_id} failed: {exc}") from exc
        if not result.stdout:
            raise DaemonError(f"cliphist decode {entry_id} returned nothing")
        return result.stdout

    def delete(self, entry_id: str, raw_line: str | None = None) -> bool:
        """Delete an entry from history.  Best-effort; returns success.

        ``cliphist delete`` reads the entry from stdin and only looks at
        the id before the first tab, so the raw list line works as input.
        """
        line = raw_line if raw_line is not None else entry_id
        try:
            self._run(
                [self.command, "delete"],
                input=line.encode("utf-8"),
                timeout=self.timeout,
            )
        except ToolFailed as exc:
            logger.warning("cliphist delete %s failed: %s", entry_id, exc)
            return False
        logger.info("deleted history entry %s", entry_id)
        return True
