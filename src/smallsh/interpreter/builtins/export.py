"""Export builtin implementation.

Usage: export [name]

Mark a variable for export to child processes, creating it with an
empty value if it is unset. With no argument, list the exported
variables.
"""

from typing import TYPE_CHECKING

from ...parser import is_valid_name
from ...types import ExecResult
from ..errors import StoreError
from .set import format_binding

if TYPE_CHECKING:
    from ..types import InterpreterContext


async def handle_export(ctx: "InterpreterContext", args: list[str]) -> ExecResult:
    """Execute the export builtin."""
    env = ctx.state.env

    # No arguments: list exported variables
    if not args:
        lines = [format_binding(b) + "\n" for b in env.list() if b.exported]
        return ExecResult(stdout="".join(lines), stderr="", exit_code=0)

    name = args[0]
    if not is_valid_name(name):
        return ExecResult(
            stdout="",
            stderr=f"export: '{name}': not a valid identifier\n",
            exit_code=1,
        )

    try:
        env.export(name)
    except StoreError as e:
        return ExecResult(stdout="", stderr=f"export: {e}\n", exit_code=1)
    return ExecResult(stdout="", stderr="", exit_code=0)
