"""
clipwarp.cli — Typer-based housekeeping CLI.

The rofi mode and the VPN toggle have their own entry points
(``clipwarp-rofi``, ``clipwarp-vpn``).  This one is for people at a
terminal:

    clipwarp info            → config summary and detected tools
    clipwarp setup           → write a config file
    clipwarp pins            → list pins, newest first
    clipwarp pin "text"      → pin text (``-`` reads stdin)
    clipwarp unpin <id>      → remove a pin
"""

from __future__ import annotations

import sys
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from clipwarp import __version__
from clipwarp.clip.pins import PinStore
from clipwarp.clip.preview import make_preview
from clipwarp.config import get_settings
from clipwarp.errors import InvalidPinId
from clipwarp.log import setup_logging
from clipwarp.system.probe import get_capabilities

# ---------------------------------------------------------------------------
# Typer app
# ---------------------------------------------------------------------------

app = typer.Typer(
    name="clipwarp",
    help="clipwarp — rofi clipboard pins and a WARP toggle.",
    no_args_is_help=True,
    add_completion=True,
)
console = Console()


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold cyan]clipwarp[/bold cyan] v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """clipwarp — rofi clipboard pins and a WARP toggle."""
    setup_logging(get_settings().log_file)


def _pin_store() -> PinStore:
    return PinStore(get_settings().clipboard.pins_dir)


# ---------------------------------------------------------------------------
# clipwarp setup
# ---------------------------------------------------------------------------

@app.command()
def setup(
    reset: bool = typer.Option(False, "--reset", help="Overwrite an existing config."),
) -> None:
    """Write a config file with the defaults (interactive)."""
    from clipwarp.setup import run_setup

    run_setup(reset=reset)
    get_settings.cache_clear()


# ---------------------------------------------------------------------------
# clipwarp info
# ---------------------------------------------------------------------------

@app.command()
def info() -> None:
    """Print the current configuration and the helper tools found."""
    settings = get_settings()
    caps = get_capabilities()
    clip = settings.clipboard

    body = Text.assemble(
        ("Pins:     ", "bold"), (str(clip.pins_dir), "green"), "\n",
        ("Thumbs:   ", "bold"), (str(clip.thumbs_dir), "green"), "\n",
        ("Log:      ", "bold"), (str(settings.log_file), "green"), "\n",
        ("Preview:  ", "bold"), (f"{clip.max_preview_length} chars", "cyan"), "\n",
        ("WARP:     ", "bold"),
        (f"{settings.vpn.timeout} polls × {settings.vpn.poll_interval}s", "cyan"), "\n",
    )
    for name in caps.installed_tools:
        body.append_text(Text.assemble(("  ✓ ", "green"), name, "\n"))
    for name in caps.missing_tools:
        body.append_text(Text.assemble(("  ✗ ", "red"), name, "\n"))

    console.print(
        Panel(body, title=f"[bold]clipwarp v{__version__}[/bold]", border_style="bright_blue")
    )


# ---------------------------------------------------------------------------
# clipwarp pins / pin / unpin
# ---------------------------------------------------------------------------

@app.command()
def pins() -> None:
    """List pinned entries, most recent first."""
    entries = _pin_store().list()
    if not entries:
        console.print("[dim]No pins yet.[/dim]")
        return

    max_len = get_settings().clipboard.max_preview_length
    table = Table(show_header=True, header_style="bold")
    table.add_column("id", style="cyan", no_wrap=True)
    table.add_column("pinned", style="dim", no_wrap=True)
    table.add_column("preview")
    for entry in entries:
        table.add_row(
            entry.id,
            entry.touched_at.strftime("%Y-%m-%d %H:%M"),
            Text(make_preview(entry.content, max_len)),
        )
    console.print(table)


@app.command()
def pin(
    text: str = typer.Argument(..., help="Text to pin, or '-' to read stdin."),
) -> None:
    """Pin text so it survives history eviction."""
    content = sys.stdin.buffer.read() if text == "-" else text.encode("utf-8")
    if not content:
        console.print("[red]✗ Nothing to pin.[/red]")
        raise typer.Exit(code=1)

    entry = _pin_store().create(content)
    console.print(f"[green]✓[/green] Pinned [bold]{entry.id}[/bold].")


@app.command()
def unpin(
    pin_id: str = typer.Argument(..., help="Pin id as shown by 'clipwarp pins'."),
) -> None:
    """Remove a pin."""
    try:
        removed = _pin_store().delete(pin_id)
    except InvalidPinId as exc:
        console.print(f"[red]✗ {exc}[/red]")
        raise typer.Exit(code=1)

    if removed:
        console.print(f"[green]✓[/green] Removed [bold]{pin_id}[/bold].")
    else:
        console.print(f"[dim]No pin {pin_id}.[/dim]")


# ---------------------------------------------------------------------------
# Entry-point (for `python -m clipwarp.cli`)
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    app()
