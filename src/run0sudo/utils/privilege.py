"""Privilege helper utilities.

Hand the translated command over to run0 by replacing the current process.
Nothing in this package runs elevated commands as a child process: once
`exec_command` succeeds, run0's exit status is the only observable result.
"""
from __future__ import annotations

import os
import shlex
import sys
from collections.abc import Sequence
from typing import NoReturn

from ..managers.request import LaunchFailure


def exec_command(cmd: Sequence[str]) -> NoReturn:
    """Replace this process with `cmd`, looking cmd[0] up on PATH.

    Standard streams, environment and process identity are inherited.
    Raises LaunchFailure if the exec itself fails.
    """
    cmd_list = list(cmd)
    if not cmd_list:
        raise LaunchFailure("failed to execute command: empty argument vector")

    # Buffered output would be lost with the old process image
    sys.stdout.flush()
    sys.stderr.flush()

    try:
        os.execvp(cmd_list[0], cmd_list)
    except OSError as e:
        raise LaunchFailure(f"failed to execute command: {e}") from e
    raise AssertionError("os.execvp returned")


def render_command(cmd: Sequence[str]) -> str:
    """Return a shell-safe string representation of the command for logging."""
    return ' '.join(shlex.quote(p) for p in cmd)
