"""
clipwarp.setup — Interactive setup wizard.

Writes ``$XDG_CONFIG_HOME/clipwarp/config.yaml`` so the defaults are
visible and editable.  Nothing requires it: every setting has a default.
"""

from __future__ import annotations

import yaml
from rich.console import Console
from rich.panel import Panel
from rich.prompt import IntPrompt, Prompt

from clipwarp import config

console = Console()


def _default_config() -> dict:
    """Return the default config dictionary."""
    return {
        "version": 1,
        "clipboard": {
            "max_preview_length": 80,
            "thumb_size": "256x256",
            "history_command": "cliphist",
            "copy_command": "wl-copy",
            "convert_command": "magick",
            "keys": {
                "select": 1,
                "pin": 10,
                "delete": 11,
            },
        },
        "vpn": {
            "app_name": "Cloudflare WARP",
            "command": "warp-cli",
            "timeout": 10,
            "poll_interval": 1.0,
        },
    }


def is_configured() -> bool:
    """Return True if the config file exists."""
    return config.CONFIG_PATH.exists()


def run_setup(reset: bool = False) -> None:
    """Interactive wizard.

    Parameters
    ----------
    reset : bool
        If True, overwrite existing config.
    """
    if is_configured() and not reset:
        console.print("[green]✓[/green] clipwarp is already configured.")
        console.print(f"  Config: [dim]{config.CONFIG_PATH}[/dim]")
        console.print("  Run [bold]clipwarp setup --reset[/bold] to reconfigure.")
        return

    console.print(
        Panel(
            "[bold]clipwarp setup[/bold]\n\n"
            "Press Enter to keep a default.",
            border_style="bright_blue",
            padding=(1, 2),
        )
    )

    # --- Step 1: clipboard ---
    console.print("[bold]1/2[/bold] [cyan]Clipboard[/cyan]")
    copy_command = Prompt.ask("  Clipboard copy command", default="wl-copy").strip()
    max_preview = IntPrompt.ask("  Preview length (characters)", default=80)

    # --- Step 2: WARP ---
    console.print()
    console.print("[bold]2/2[/bold] [cyan]Cloudflare WARP[/cyan]")
    timeout = IntPrompt.ask("  Seconds to wait for a connection", default=10)

    cfg = _default_config()
    cfg["clipboard"]["copy_command"] = copy_command or "wl-copy"
    cfg["clipboard"]["max_preview_length"] = max(1, max_preview)
    cfg["vpn"]["timeout"] = max(1, timeout)

    write_config(cfg)

    console.print(
        Panel(
            f"[green]✓[/green] Config saved to [bold]{config.CONFIG_PATH}[/bold]\n\n"
            "Try it now:\n"
            "  [bold cyan]rofi -modi clipboard:clipwarp-rofi -show clipboard[/bold cyan]",
            title="Setup Complete",
            border_style="green",
            padding=(1, 2),
        )
    )


def write_config(cfg: dict) -> None:
    """Write *cfg* as YAML to the config path."""
    config.CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    with open(config.CONFIG_PATH, "w", encoding="utf-8") as f:
        yaml.dump(cfg, f, default_flow_style=False, sort_keys=False)
