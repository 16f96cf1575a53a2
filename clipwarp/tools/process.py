"""
clipwarp.tools.process — Run an external command and capture its output.

Every subprocess clipwarp spawns goes through :func:`run_tool`, which
turns the three ways a call can go wrong (binary missing, timeout,
non-zero exit) into a single :class:`~clipwarp.errors.ToolFailed`.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence

from clipwarp.errors import ToolFailed

logger = logging.getLogger(__name__)

# Default wall-clock limit for a helper invocation (seconds)
DEFAULT_TIMEOUT = 10.0


def run_tool(
    command: Sequence[str],
    *,
    input: bytes | None = None,
    timeout: float | None = DEFAULT_TIMEOUT,
    check: bool = True,
    capture: bool = True,
) -> subprocess.CompletedProcess[bytes]:
    """Run *command* without a shell and return the completed process.

    Parameters
    ----------
    command : Sequence[str]
        Program and arguments, e.g. ``["cliphist", "decode", "42"]``.
    input : bytes | None
        Bytes fed to the child's stdin.  ``None`` attaches ``/dev/null``.
    timeout : float | None
        Seconds before the child is killed.
    check : bool
        Raise on a non-zero exit status.
    capture : bool
        Collect stdout and stderr.  Tools that leave a background process
        behind (``wl-copy``) need False, or the read waits on that process.

    Raises
    ------
    ToolFailed
        If the binary is missing, the call times out, or (with *check*)
        the exit status is non-zero.
    """
    argv = list(command)
    name = argv[0]
    logger.debug("run %s", argv)
    try:
        result = subprocess.run(
            argv,
            input=input,
            stdin=subprocess.DEVNULL if input is None else None,
            stdout=subprocess.PIPE if capture else subprocess.DEVNULL,
            stderr=subprocess.PIPE if capture else subprocess.DEVNULL,
            timeout=timeout,
        )
    except FileNotFoundError:
        raise ToolFailed(name, "command not found") from None
    except subprocess.TimeoutExpired:
        raise ToolFailed(name, f"timed out after {timeout}s") from None
    except OSError as exc:
        raise ToolFailed(name, str(exc)) from exc

    if check and result.returncode != 0:
        stderr = (result.stderr or b"").decode("utf-8", errors="replace").strip()
        raise ToolFailed(
            name,
            f"exit status {result.returncode}" + (f": {stderr}" if stderr else ""),
            returncode=result.returncode,
        )
    return result
