"""Cd builtin implementation.

Usage: cd [dir]

Change the current working directory to dir. If dir is not specified,
change to $HOME. A directory that cannot be entered terminates the
shell with status 1.
"""

import os
from typing import TYPE_CHECKING

from ...types import ExecResult
from ..errors import ExitError

if TYPE_CHECKING:
    from ..types import InterpreterContext

CD_FAILURE_STATUS = 1


async def handle_cd(ctx: "InterpreterContext", args: list[str]) -> ExecResult:
    """Execute the cd builtin."""
    if args:
        target = args[0]
    else:
        target = ctx.state.env.lookup("HOME")

    try:
        os.chdir(target)
    except OSError as e:
        raise ExitError(
            CD_FAILURE_STATUS,
            stderr=f"cd: {target}: {e.strerror}\n",
        ) from e

    return ExecResult(stdout="", stderr="", exit_code=0)
