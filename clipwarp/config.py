"""
clipwarp.config — Load, validate, and expose project configuration.

Config search order (later layers win):
1. Built-in Pydantic defaults (XDG-derived paths)
2. ``$XDG_CONFIG_HOME/clipwarp/config.yaml``  (created by ``clipwarp setup``)
3. Environment variables, optionally from ``$XDG_CONFIG_HOME/clipwarp/.env``
   (``CLIPWARP_PINS_DIR``, ``CLIPWARP_THUMBS_DIR``, ``CLIPWARP_MAX_PREVIEW``,
   ``CLIPWARP_WARP_TIMEOUT``)

The resulting settings object is frozen: it is built once per process and
handed to every component.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------


def _xdg_home(var: str, fallback: str) -> Path:
    """Return ``$var`` or ``~/<fallback>`` when unset or empty."""
    value = os.environ.get(var)
    return Path(value) if value else Path.home() / fallback


def data_home() -> Path:
    return _xdg_home("XDG_DATA_HOME", ".local/share")


def cache_home() -> Path:
    return _xdg_home("XDG_CACHE_HOME", ".cache")


CONFIG_DIR = _xdg_home("XDG_CONFIG_HOME", ".config") / "clipwarp"
CONFIG_PATH = CONFIG_DIR / "config.yaml"
_ENV_FILE = CONFIG_DIR / ".env"

# Storage shared with the original rofi-cliphist scripts
STORE_NAME = "rofi-cliphist"


# ---------------------------------------------------------------------------
# Pydantic schemas
# ---------------------------------------------------------------------------


class KeyBindings(BaseModel):
    """rofi ``ROFI_RETV`` codes for each menu action."""

    model_config = {"frozen": True}

    select: int = 1        # Enter
    pin: int = 10          # kb-custom-1
    delete: int = 11       # kb-custom-2


class ClipboardSettings(BaseModel):
    """Settings for the rofi clipboard manager."""

    model_config = {"frozen": True}

    pins_dir: Path = Field(default_factory=lambda: data_home() / STORE_NAME / "pins")
    thumbs_dir: Path = Field(default_factory=lambda: cache_home() / STORE_NAME / "thumbs")

    pin_icon: str = "\uf435"      # nf-oct-pin
    image_icon: str = "\uf03e"    # nf-fa-image
    max_preview_length: int = Field(default=80, gt=0)
    thumb_size: str = "256x256"
    message: str = (
        "<b>Enter</b>: Copy  |  <b>ALT+U</b>: Pin  |  <b>ALT+Y</b>: Delete"
    )

    history_command: str = "cliphist"
    copy_command: str = "wl-copy"
    convert_command: str = "magick"
    command_timeout: float = 5.0

    keys: KeyBindings = Field(default_factory=KeyBindings)


class VpnIcons(BaseModel):
    """Freedesktop icon names used in notifications."""

    model_config = {"frozen": True}

    connected: str = "network-vpn"
    disconnected: str = "network-offline"
    waiting: str = "network-transmit-receive"
    error: str = "dialog-error"


class VpnSettings(BaseModel):
    """Settings for the WARP toggle."""

    model_config = {"frozen": True}

    app_name: str = "Cloudflare WARP"
    command: str = "warp-cli"
    timeout: int = Field(default=10, gt=0)          # number of status polls
    poll_interval: float = Field(default=1.0, ge=0)  # seconds between polls
    icons: VpnIcons = Field(default_factory=VpnIcons)


class ClipwarpSettings(BaseModel):
    """Top-level settings object for the entire application."""

    model_config = {"frozen": True}

    version: int = 1
    log_file: Path = Field(default_factory=lambda: cache_home() / "clipwarp" / "clipwarp.log")

    clipboard: ClipboardSettings = Field(default_factory=ClipboardSettings)
    vpn: VpnSettings = Field(default_factory=VpnSettings)


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------


def _load_yaml(path: Path) -> dict[str, Any]:
    """Read and parse a YAML file.  Returns {} if not found."""
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


def _section(raw: dict[str, Any], key: str) -> dict[str, Any]:
    """Return ``raw[key]`` as a dict, creating it when missing or null."""
    section = raw.get(key) or {}
    raw[key] = section
    return section


def needs_setup() -> bool:
    """Return True if no user-level config file exists yet."""
    return not CONFIG_PATH.exists()


@lru_cache(maxsize=1)
def get_settings() -> ClipwarpSettings:
    """Return the validated, cached application settings.

    Loading order (each layer overrides the previous):
    1. Built-in defaults (Pydantic field defaults).
    2. ``config.yaml`` in the config directory.
    3. Environment variables / ``.env`` file.
    """

    # 1. Load .env (if present) so env-vars are available below
    load_dotenv(_ENV_FILE)

    # 2. Parse YAML
    raw: dict[str, Any] = _load_yaml(CONFIG_PATH)
    # An empty section parses as None; treat it as absent
    raw = {key: value for key, value in raw.items() if value is not None}

    # 3. Overlay env-var overrides
    if pins_dir := os.getenv("CLIPWARP_PINS_DIR"):
        _section(raw, "clipboard")["pins_dir"] = pins_dir
    if thumbs_dir := os.getenv("CLIPWARP_THUMBS_DIR"):
        _section(raw, "clipboard")["thumbs_dir"] = thumbs_dir
    if max_preview := os.getenv("CLIPWARP_MAX_PREVIEW"):
        _section(raw, "clipboard")["max_preview_length"] = max_preview
    if timeout := os.getenv("CLIPWARP_WARP_TIMEOUT"):
        _section(raw, "vpn")["timeout"] = timeout

    # 4. Validate through Pydantic
    return ClipwarpSettings(**raw)
