"""Assignment builtin implementation.

Usage: NAME=VALUE

Bind NAME to VALUE in the shell's variable table. The binding is local
until exported. Words after the assignment are ignored.
"""

from typing import TYPE_CHECKING

from ...parser import is_valid_name
from ...types import ExecResult
from ..errors import StoreError

if TYPE_CHECKING:
    from ..types import InterpreterContext


def is_assignment(word: str) -> bool:
    """Check whether word has the NAME=VALUE form."""
    return "=" in word


async def handle_assignment(ctx: "InterpreterContext", args: list[str]) -> ExecResult:
    """Execute a NAME=VALUE word (args[0])."""
    name, value = args[0].split("=", 1)

    if not is_valid_name(name):
        return ExecResult(
            stdout="",
            stderr=f"{args[0]}: not a valid identifier\n",
            exit_code=1,
        )

    try:
        ctx.state.env.store(name, value)
    except StoreError as e:
        return ExecResult(stdout="", stderr=f"{e}\n", exit_code=1)
    return ExecResult(stdout="", stderr="", exit_code=0)
