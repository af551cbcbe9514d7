"""Builtins that end the shell: exit and exec.

Neither returns normally on success. exit raises ExitError for the
driver to act on; exec replaces the process image and raises
ExitError(1) only if that fails.
"""

import os
import re
from typing import TYPE_CHECKING

from ...types import ExecResult
from ..errors import ExitError
from ..process import restore_default_signals, set_signal_handlers

if TYPE_CHECKING:
    from ..types import InterpreterContext

EXEC_FAILURE_STATUS = 1

_NUMERIC_RE = re.compile(r"[+-]?\d+")


def _result(stdout: str, stderr: str, exit_code: int) -> ExecResult:
    """Create an ExecResult."""
    return ExecResult(stdout=stdout, stderr=stderr, exit_code=exit_code)


async def handle_exit(ctx: "InterpreterContext", args: list[str]) -> ExecResult:
    """Execute the exit builtin.

    Usage: exit [n]

    Exit the shell with status n (default 0). A non-numeric n or more
    than one argument is a usage error and the shell keeps running.
    """
    if len(args) > 1:
        return _result("", "exit: too many arguments\n", 1)

    exit_code = 0
    if args:
        if not _NUMERIC_RE.fullmatch(args[0]):
            return _result("", f"exit: {args[0]}: numeric argument required\n", 1)
        exit_code = int(args[0]) & 255  # Mask to 0-255

    raise ExitError(exit_code)


async def handle_exec(ctx: "InterpreterContext", args: list[str]) -> ExecResult:
    """Execute the exec builtin.

    Usage: exec command [arg ...]

    Replace the shell with command. The new program gets the exported
    variables as its environment and default interrupt/quit handling.
    """
    if not args:
        raise ExitError(EXEC_FAILURE_STATUS, stderr="exec: command name required\n")

    env = dict(entry.split("=", 1) for entry in ctx.state.env.materialize_environment())
    ctx.stdout.flush()
    ctx.stderr.flush()

    previous = restore_default_signals()
    try:
        os.execvpe(args[0], args, env)
    except OSError as e:
        set_signal_handlers(previous)
        raise ExitError(
            EXEC_FAILURE_STATUS,
            stderr=f"exec: {args[0]}: {e.strerror}\n",
        ) from e
    # Not reached: execvpe only returns by raising
    return _result("", "", EXEC_FAILURE_STATUS)
