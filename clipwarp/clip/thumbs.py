"""
clipwarp.clip.thumbs — Lazily generated image previews.

Thumbnails are keyed by cliphist id and written to a temporary name
first; only a complete file is ever renamed onto ``<id>.png``, so a menu
render never picks up half an image even if an earlier run was killed
mid-write.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path

from clipwarp.clip.history import HistoryAdapter
from clipwarp.clip.pins import ensure_private_dir, validate_id
from clipwarp.errors import DaemonError, ToolFailed, Unavailable
from clipwarp.tools.process import run_tool

logger = logging.getLogger(__name__)


class ThumbnailCache:
    """Cache of ``<id>.png`` previews for image history entries.

    Parameters
    ----------
    root : Path
        Cache directory, e.g. ``~/.cache/rofi-cliphist/thumbs``.
    history : HistoryAdapter
        Used to decode the original image bytes.
    enabled : bool
        False when the converter is not installed; cache hits still work.
    convert_command : str
        ImageMagick entry point.
    size : str
        Bounding box passed to ``-resize``.
    """

    def __init__(
        self,
        root: Path,
        history: HistoryAdapter,
        enabled: bool = True,
        convert_command: str = "magick",
        size: str = "256x256",
        timeout: float = 10.0,
        runner: Callable[..., object] = run_tool,
    ) -> None:
        self.root = Path(root)
        self.history = history
        self.enabled = enabled
        self.convert_command = convert_command
        self.size = size
        self.timeout = timeout
        self._run = runner

    def path_for(self, history_id: str) -> Path:
        return self.root / f"{validate_id(history_id)}.png"

    def ensure(self, history_id: str) -> Path:
        """Return the thumbnail path, generating it on a cache miss.

        Raises
        ------
        Unavailable
            If the converter is missing or decoding/conversion fails.
            Callers fall back to a text-only row.
        """
        final_path = self.path_for(history_id)
        if final_path.is_file():
            return final_path

        if not self.enabled:
            raise Unavailable(f"{self.convert_command} not installed")

        try:
            image = self.history.decode(history_id)
        except DaemonError as exc:
            raise Unavailable(str(exc)) from exc

        ensure_private_dir(self.root)
        tmp_path = final_path.with_name(f"{final_path.name}.tmp.{os.getpid()}")
        try:
            self._run(
                [
                    self.convert_command, "-",
                    "-background", "none",
                    "-resize", self.size,
                    # Explicit format: the temp suffix hides the extension
                    f"png:{tmp_path}",
                ],
                input=image,
                timeout=self.timeout,
            )
            os.replace(tmp_path, final_path)
        except (ToolFailed, OSError) as exc:
            tmp_path.unlink(missing_ok=True)
            logger.debug("thumbnail for %s failed: %s", history_id, exc)
            raise Unavailable(f"Thumbnail for {history_id} failed: {exc}") from exc

        return final_path

    def evict(self, history_id: str) -> bool:
        """Drop a cached thumbnail.  Returns True if a file was removed."""
        try:
            self.path_for(history_id).unlink()
        except FileNotFoundError:
            return False
        return True
