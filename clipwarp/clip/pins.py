"""
clipwarp.clip.pins — Pinned clipboard entries.

Each pin is one file, ``<hash>.pin``, holding the raw bytes that were
pinned.  There is no index: the file's modification time is the sort key,
so re-pinning the same content just touches the file and moves it to
the top of the menu.
"""

from __future__ import annotations

import logging
import os
import stat
from datetime import datetime
from pathlib import Path

from clipwarp.clip.models import PIN_SUFFIX, PinEntry
from clipwarp.clip.preview import content_hash
from clipwarp.errors import InvalidPinId, NotFound

logger = logging.getLogger(__name__)

DIR_MODE = 0o700
FILE_MODE = 0o600


def validate_id(raw_id: str) -> str:
    """Return *raw_id* if it is safe to join onto a storage directory.

    Identifiers reach us from ``ROFI_INFO``, which anything can set, so a
    separator or a leading ``..`` is rejected before any path is built.
    """
    if not raw_id or "/" in raw_id or "\x00" in raw_id or raw_id.startswith(".."):
        raise InvalidPinId(f"Invalid identifier: {raw_id!r}")
    return raw_id


def ensure_private_dir(path: Path) -> Path:
    """Create *path* (and parents) and restrict it to the owner."""
    path.mkdir(parents=True, exist_ok=True)
    os.chmod(path, DIR_MODE)
    return path


class PinStore:
    """Directory-backed store of pinned entries.

    Parameters
    ----------
    root : Path
        The pins directory, e.g. ``~/.local/share/rofi-cliphist/pins``.
    """

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def path_for(self, pin_id: str) -> Path:
        """Map an id (``abc123`` or ``abc123.pin``) to its file path."""
        name = validate_id(pin_id)
        if not name.endswith(PIN_SUFFIX):
            name += PIN_SUFFIX
        return self.root / name

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list(self) -> list[PinEntry]:
        """Return every readable pin, most recently touched first."""
        if not self.root.is_dir():
            return []

        entries: list[tuple[float, PinEntry]] = []
        for path in self.root.glob(f"*{PIN_SUFFIX}"):
            try:
                st = path.stat()
                if not stat.S_ISREG(st.st_mode):
                    continue
                content = path.read_bytes()
            except OSError as exc:
                logger.debug("skipping unreadable pin %s: %s", path, exc)
                continue
            entry = PinEntry(
                id=path.name[: -len(PIN_SUFFIX)],
                content=content,
                touched_at=datetime.fromtimestamp(st.st_mtime),
            )
            entries.append((st.st_mtime, entry))

        entries.sort(key=lambda pair: (pair[0], pair[1].id), reverse=True)
        return [entry for _, entry in entries]

    def read(self, pin_id: str) -> bytes:
        """Return the content of a pin.

        Raises
        ------
        InvalidPinId
            If *pin_id* contains a path separator or ``..`` prefix.
        NotFound
            If no such pin exists.
        """
        path = self.path_for(pin_id)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            raise NotFound(f"Pin not found: {pin_id}") from None
        except IsADirectoryError:
            raise NotFound(f"Pin not found: {pin_id}") from None

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(self, content: bytes | str) -> PinEntry:
        """Pin *content*, or bump the existing pin with the same content."""
        if isinstance(content, str):
            content = content.encode("utf-8")
        if not content:
            raise ValueError("Refusing to pin empty content")

        ensure_private_dir(self.root)
        pin_id = content_hash(content)
        path = self.path_for(pin_id)

        if path.is_file():
            # Already pinned: touching the file moves it to the top
            os.utime(path)
            logger.info("re-pinned %s", pin_id)
        else:
            tmp_path = path.with_name(f".{path.name}.tmp.{os.getpid()}")
            fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE)
            try:
                with os.fdopen(fd, "wb") as fh:
                    fh.write(content)
                os.chmod(tmp_path, FILE_MODE)
                os.replace(tmp_path, path)
            except OSError:
                tmp_path.unlink(missing_ok=True)
                raise
            logger.info("pinned %s (%d bytes)", pin_id, len(content))

        return PinEntry(
            id=pin_id,
            content=content,
            touched_at=datetime.fromtimestamp(path.stat().st_mtime),
        )

    def delete(self, pin_id: str) -> bool:
        """Remove a pin.  Returns True if a file was deleted.

        The id is validated first; an invalid one raises
        :class:`InvalidPinId` without touching the filesystem.
        """
        path = self.path_for(pin_id)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        logger.info("unpinned %s", pin_id)
        return True
