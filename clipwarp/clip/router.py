"""
clipwarp.clip.router — Act on a rofi selection.

rofi re-runs the script for every selection with the chosen row's text
as ``$1``, the key that was pressed in ``ROFI_RETV`` and the row's hidden
info field in ``ROFI_INFO``.  All state travels in those three values:
they are decoded once, :func:`plan` maps (row kind, key) to an
:class:`Effect`, and :class:`SelectionRouter` carries it out.

==========  ==========  ===================  ===============
row kind    key         effect               menu stays open
==========  ==========  ===================  ===============
pin         Enter       copy pin             no
pin         pin/delete  delete pin           yes
hist        Enter       copy entry           no
hist        pin         pin decoded entry    yes
hist        delete      delete + evict thumb yes
any         other       nothing              yes
==========  ==========  ===================  ===============
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum

from clipwarp.clip.history import HistoryAdapter
from clipwarp.clip.models import EntryKind, InfoToken
from clipwarp.clip.pins import PinStore
from clipwarp.clip.thumbs import ThumbnailCache
from clipwarp.config import KeyBindings
from clipwarp.errors import ClipwarpError

logger = logging.getLogger(__name__)


class Action(str, Enum):
    """Which key the user pressed."""

    SELECT = "select"
    PIN = "pin"
    DELETE = "delete"
    OTHER = "other"

    @classmethod
    def from_retv(cls, retv: str | int | None, keys: KeyBindings | None = None) -> Action:
        """Decode ``ROFI_RETV`` using the configured key codes."""
        keys = keys or KeyBindings()
        try:
            code = int(retv) if retv is not None else 0
        except ValueError:
            return cls.OTHER
        return {
            keys.select: cls.SELECT,
            keys.pin: cls.PIN,
            keys.delete: cls.DELETE,
        }.get(code, cls.OTHER)


class Effect(str, Enum):
    NONE = "none"
    COPY_PIN = "copy_pin"
    DELETE_PIN = "delete_pin"
    COPY_HIST = "copy_hist"
    PIN_HIST = "pin_hist"
    DELETE_HIST = "delete_hist"

    @property
    def rerender(self) -> bool:
        """Copies close the menu; everything else keeps it open."""
        return self not in (Effect.COPY_PIN, Effect.COPY_HIST)


def plan(kind: EntryKind, action: Action) -> Effect:
    """Map a row kind and a key press to the effect to perform."""
    if kind is EntryKind.PIN:
        if action is Action.SELECT:
            return Effect.COPY_PIN
        if action in (Action.PIN, Action.DELETE):
            return Effect.DELETE_PIN
        return Effect.NONE

    if action is Action.SELECT:
        return Effect.COPY_HIST
    if action is Action.PIN:
        return Effect.PIN_HIST
    if action is Action.DELETE:
        return Effect.DELETE_HIST
    return Effect.NONE


def history_id(data: str) -> str:
    """Extract the cliphist id from a raw line (``id\\t...``) or a row label (``id: ...``)."""
    return data.split("\t", 1)[0].split(": ", 1)[0].strip()


class SelectionRouter:
    """Executes the effect for one selection.

    Parameters
    ----------
    copier : Callable[[bytes], None]
        Puts bytes on the system clipboard.
    """

    def __init__(
        self,
        pins: PinStore,
        history: HistoryAdapter,
        thumbs: ThumbnailCache,
        copier: Callable[[bytes], None],
        keys: KeyBindings | None = None,
    ) -> None:
        self.pins = pins
        self.history = history
        self.thumbs = thumbs
        self.copier = copier
        self.keys = keys or KeyBindings()

    def handle(self, selection: str | None, retv: str | int | None, info: str | None) -> bool:
        """Act on a selection.  Returns True if the menu should be shown again."""
        if not selection:
            return True

        action = Action.from_retv(retv, self.keys)
        token = InfoToken.decode(info)
        if token is None:
            logger.warning("Unknown item type, treating selection as a history line")
            token = InfoToken(EntryKind.HIST, selection)

        effect = plan(token.kind, action)
        logger.debug("selection kind=%s action=%s effect=%s", token.kind.value, action.value, effect.value)

        try:
            self._apply(effect, token.data)
        except (ClipwarpError, OSError) as exc:
            # A failed copy still closes the menu; everything else refreshes
            logger.error("%s failed: %s", effect.value, exc)
        return effect.rerender

    # ------------------------------------------------------------------
    # Effects
    # ------------------------------------------------------------------

    def _apply(self, effect: Effect, data: str) -> None:
        if effect is Effect.NONE:
            return

        if effect is Effect.COPY_PIN:
            self.copier(self.pins.read(data))
        elif effect is Effect.DELETE_PIN:
            self.pins.delete(data)
        elif effect is Effect.COPY_HIST:
            self.copier(self.history.decode(history_id(data)))
        elif effect is Effect.PIN_HIST:
            content = self.history.decode(history_id(data))
            if content:
                self.pins.create(content)
        elif effect is Effect.DELETE_HIST:
            entry_id = history_id(data)
            self.history.delete(entry_id, raw_line=data if "\t" in data else None)
            self.thumbs.evict(entry_id)
