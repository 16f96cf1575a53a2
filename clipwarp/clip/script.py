"""
clipwarp.clip.script — rofi script-mode entry point (``clipwarp-rofi``).

Usage::

    rofi -kb-custom-1 "Alt+u" -kb-custom-2 "Alt+y" \\
         -modi "clipboard:clipwarp-rofi" -show clipboard

Keys:

    Enter   copy the entry (closes the menu)
    Alt+U   pin a history entry / unpin a pin (menu stays open)
    Alt+Y   delete from history / unpin (menu stays open)
"""

from __future__ import annotations

import functools
import logging
import os
from dataclasses import dataclass
from typing import List, Optional

import typer

from clipwarp.clip.history import HistoryAdapter
from clipwarp.clip.menu import MenuRenderer
from clipwarp.clip.pins import PinStore, ensure_private_dir
from clipwarp.clip.router import SelectionRouter
from clipwarp.clip.thumbs import ThumbnailCache
from clipwarp.config import ClipboardSettings, get_settings
from clipwarp.errors import DependencyMissing
from clipwarp.log import setup_logging
from clipwarp.system.probe import Capabilities, get_capabilities
from clipwarp.tools.clipboard import write_clipboard
from clipwarp.tools.process import run_tool

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="clipwarp-rofi",
    help="Clipboard manager for rofi script mode.",
    add_completion=False,
    # rofi passes row text verbatim; never parse it as options
    context_settings={"ignore_unknown_options": True, "help_option_names": []},
)


@dataclass
class ClipboardApp:
    """The wired-up clipboard components for one invocation."""

    pins: PinStore
    history: HistoryAdapter
    thumbs: ThumbnailCache
    renderer: MenuRenderer
    router: SelectionRouter


def build(settings: ClipboardSettings, caps: Capabilities) -> ClipboardApp:
    """Wire the components from settings and probed capabilities."""
    history = HistoryAdapter(
        command=settings.history_command,
        timeout=settings.command_timeout,
        runner=run_tool,
    )
    pins = PinStore(settings.pins_dir)
    thumbs = ThumbnailCache(
        settings.thumbs_dir,
        history,
        enabled=caps.thumbnails,
        convert_command=settings.convert_command,
        size=settings.thumb_size,
        runner=run_tool,
    )
    copier = functools.partial(
        write_clipboard,
        command=settings.copy_command,
        timeout=settings.command_timeout,
        runner=run_tool,
    )
    return ClipboardApp(
        pins=pins,
        history=history,
        thumbs=thumbs,
        renderer=MenuRenderer(settings, pins, history, thumbs),
        router=SelectionRouter(pins, history, thumbs, copier, keys=settings.keys),
    )


@app.command()
def main(
    selection: Optional[List[str]] = typer.Argument(  # noqa: UP006, UP007
        None, help="Row text handed back by rofi."
    ),
) -> None:
    """Print the menu, or act on the row rofi hands back."""
    settings = get_settings()
    setup_logging(settings.log_file)
    clip = settings.clipboard

    try:
        get_capabilities().require(clip.history_command, clip.copy_command)
    except DependencyMissing as exc:
        logger.error("%s", exc)
        raise typer.Exit(code=1)

    ensure_private_dir(clip.pins_dir)
    ensure_private_dir(clip.thumbs_dir)
    components = build(clip, get_capabilities())

    text = " ".join(selection or [])
    if not text:
        components.renderer.write()
        return

    retv = os.environ.get("ROFI_RETV")
    info = os.environ.get("ROFI_INFO")
    if components.router.handle(text, retv, info):
        components.renderer.write()


if __name__ == "__main__":
    app()
