"""Read builtin implementation.

Usage: read [name]

Read one line from standard input and store it, without its newline,
in name (default REPLY). At end of input the variable is set to the
empty string and the status is 1.
"""

from typing import TYPE_CHECKING

from ...parser import is_valid_name
from ...types import ExecResult
from ..errors import StoreError

if TYPE_CHECKING:
    from ..types import InterpreterContext


async def handle_read(ctx: "InterpreterContext", args: list[str]) -> ExecResult:
    """Execute the read builtin. The readline blocks until input arrives."""
    name = args[0] if args else ctx.config.reply_variable

    if not is_valid_name(name):
        return ExecResult(
            stdout="",
            stderr=f"read: '{name}': not a valid identifier\n",
            exit_code=1,
        )

    line = ctx.stdin.readline()
    exit_code = 0 if line else 1
    if line.endswith("\n"):
        line = line[:-1]

    try:
        ctx.state.env.store(name, line)
    except StoreError as e:
        return ExecResult(stdout="", stderr=f"read: {e}\n", exit_code=1)
    return ExecResult(stdout="", stderr="", exit_code=exit_code)
