"""
clipwarp.log — Logging setup shared by every entry point.

Records go to stderr through rich and to a plain log file.  stdout is
reserved for the rofi protocol, so nothing here may ever write to it.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

_FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

stderr_console = Console(stderr=True)


def setup_logging(log_file: Path | None = None, verbose: bool = False) -> None:
    """Attach handlers to the ``clipwarp`` logger (idempotent)."""
    logger = logging.getLogger("clipwarp")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if logger.handlers:
        return

    rich_handler = RichHandler(
        console=stderr_console,
        show_path=False,
        show_time=False,
        markup=False,
    )
    rich_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.addHandler(rich_handler)

    if log_file is not None:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as exc:
            logger.warning("Cannot open log file %s: %s", log_file, exc)
        else:
            file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
            logger.addHandler(file_handler)

    logger.propagate = False
