"""Set builtin implementation.

Usage: set

List every variable in table order, one NAME=VALUE per line. Exported
variables are marked with `*`. Arguments are ignored.
"""

from typing import TYPE_CHECKING

from ...types import ExecResult

if TYPE_CHECKING:
    from ..types import InterpreterContext, VariableBinding

EXPORT_MARK = "  * "
LOCAL_MARK = "    "


def format_binding(binding: "VariableBinding") -> str:
    """Format one binding the way `set` prints it."""
    mark = EXPORT_MARK if binding.exported else LOCAL_MARK
    return f"{mark}{binding.name}={binding.value}"


async def handle_set(ctx: "InterpreterContext", args: list[str]) -> ExecResult:
    """Execute the set builtin."""
    lines = [format_binding(b) for b in ctx.state.env.list()]
    return ExecResult(stdout="".join(line + "\n" for line in lines), stderr="", exit_code=0)
