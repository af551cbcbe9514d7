"""Builtin command dispatch.

Builtins run inside the shell process. They are tried in a fixed order
and the first match wins: assignment, set, export, cd, exit, read, exec.
"""

import logging
from typing import TYPE_CHECKING, Awaitable, Callable, Optional

from ...types import ExecResult
from .assign import handle_assignment, is_assignment
from .cd import handle_cd
from .control import handle_exec, handle_exit
from .export import handle_export
from .read import handle_read
from .set import handle_set

if TYPE_CHECKING:
    from ..types import InterpreterContext

logger = logging.getLogger(__name__)

BuiltinHandler = Callable[["InterpreterContext", list[str]], Awaitable[ExecResult]]

BUILTINS: dict[str, BuiltinHandler] = {
    "set": handle_set,
    "export": handle_export,
    "cd": handle_cd,
    "exit": handle_exit,
    "read": handle_read,
    "exec": handle_exec,
}


async def run_builtin(ctx: "InterpreterContext", args: list[str]) -> Optional[ExecResult]:
    """Run args as a builtin if it is one.

    Returns the builtin's result, or None if args[0] is not a builtin.
    """
    cmd = args[0]
    if is_assignment(cmd):
        logger.debug("assignment: %s", cmd)
        return await handle_assignment(ctx, args)

    handler = BUILTINS.get(cmd)
    if handler is None:
        return None
    logger.debug("builtin: %s", cmd)
    return await handler(ctx, args[1:])


__all__ = [
    "BUILTINS",
    "BuiltinHandler",
    "run_builtin",
    "handle_assignment",
    "handle_set",
    "handle_export",
    "handle_cd",
    "handle_exit",
    "handle_read",
    "handle_exec",
]
