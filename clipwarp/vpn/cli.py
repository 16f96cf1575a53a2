"""
clipwarp.vpn.cli — ``clipwarp-vpn``, the WARP toggle.

    clipwarp-vpn                toggle the connection
    clipwarp-vpn --connect      connect (no-op if connected)
    clipwarp-vpn --disconnect   disconnect (no-op if disconnected)

Exit status is 0 on success or no-op and 1 on any failure, including an
unknown option.
"""

from __future__ import annotations

import sys

import typer
from rich.console import Console
from rich.text import Text

from clipwarp.config import get_settings
from clipwarp.errors import ClipwarpError, DependencyMissing
from clipwarp.log import setup_logging
from clipwarp.system.probe import get_capabilities
from clipwarp.tools.notify import Notifier
from clipwarp.vpn.warp import Mode, WarpClient, WarpController

app = typer.Typer(
    name="clipwarp-vpn",
    help="Toggle Cloudflare WARP, with desktop notifications.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


class ConsoleReporter:
    """``[INFO]``/``[OK]`` on stdout, ``[WARN]``/``[ERR]`` on stderr.

    rich drops the colours by itself when the stream is not a terminal.
    """

    def __init__(self, out: Console | None = None, err: Console | None = None) -> None:
        self.out = out or Console(highlight=False)
        self.err = err or Console(stderr=True, highlight=False)

    @staticmethod
    def _line(tag: str, style: str, message: str | Text) -> Text:
        return Text.assemble((tag, style), " ", message)

    def info(self, message: str | Text) -> None:
        self.out.print(self._line("[INFO]", "bold blue", message))

    def success(self, message: str | Text) -> None:
        self.out.print(self._line("[OK]  ", "bold green", message))

    def warn(self, message: str | Text) -> None:
        self.err.print(self._line("[WARN]", "bold yellow", message))

    def error(self, message: str | Text) -> None:
        self.err.print(self._line("[ERR] ", "bold red", message))


@app.command()
def main(
    connect: bool = typer.Option(False, "--connect", help="Force connection (idempotent)."),
    disconnect: bool = typer.Option(False, "--disconnect", help="Force disconnection (idempotent)."),
) -> None:
    """Toggle the WARP connection state (no options), or force one."""
    settings = get_settings()
    setup_logging(settings.log_file)
    reporter = ConsoleReporter()

    if connect and disconnect:
        reporter.error("--connect and --disconnect are mutually exclusive.")
        raise typer.Exit(code=1)

    caps = get_capabilities()
    try:
        caps.require(settings.vpn.command)
    except DependencyMissing:
        reporter.error(f"{settings.vpn.command} not found. Please install 'cloudflare-warp-bin'.")
        raise typer.Exit(code=1)

    mode = Mode.CONNECT if connect else Mode.DISCONNECT if disconnect else Mode.TOGGLE
    controller = WarpController(
        WarpClient(settings.vpn.command),
        settings.vpn,
        Notifier(settings.vpn.app_name, enabled=caps.notifications),
        reporter,
    )
    try:
        controller.run(mode)
    except ClipwarpError:
        # The controller has already reported the failure
        raise typer.Exit(code=1)


def run() -> None:
    """Console-script entry: like ``app()``, but usage errors exit 1."""
    try:
        app()
    except SystemExit as exc:
        # Usage errors are reported by the parser with status 2
        if exc.code == 2:
            sys.exit(1)
        raise


if __name__ == "__main__":
    run()
