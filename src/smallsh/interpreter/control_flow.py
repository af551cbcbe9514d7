"""Control Flow State Machine.

Handles the if/then/else/fi keywords one line at a time. A single frame
records where we are in the current conditional and whether its
condition succeeded; conditionals do not nest.

    NEUTRAL   --if-->   WANT_THEN --then--> THEN_BLOCK
    THEN_BLOCK --else-> ELSE_BLOCK
    THEN_BLOCK, ELSE_BLOCK --fi--> NEUTRAL

Any other keyword/state combination is a syntax error, which resets the
frame to NEUTRAL.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ..parser import CONTROL_KEYWORDS
from ..types import ExecResult
from .errors import ExitError

if TYPE_CHECKING:
    from .types import InterpreterContext

logger = logging.getLogger(__name__)

SYNTAX_ERROR_STATUS = 2


class IfState(Enum):
    NEUTRAL = "neutral"
    WANT_THEN = "want_then"
    THEN_BLOCK = "then_block"
    ELSE_BLOCK = "else_block"


class BranchResult(Enum):
    SUCCESS = "success"
    FAIL = "fail"


@dataclass
class ControlFlowFrame:
    """State of the one active conditional."""

    state: IfState = IfState.NEUTRAL
    branch_result: BranchResult = BranchResult.SUCCESS

    def reset(self) -> None:
        self.state = IfState.NEUTRAL


def _result(stdout: str, stderr: str, exit_code: int) -> ExecResult:
    """Create an ExecResult."""
    return ExecResult(stdout=stdout, stderr=stderr, exit_code=exit_code)


def syntax_error(frame: ControlFlowFrame, msg: str) -> ExecResult:
    """Reset the frame and report msg as a syntax error."""
    logger.debug("syntax error in state %s: %s", frame.state.name, msg)
    frame.reset()
    return _result("", f"syntax error: {msg}\n", SYNTAX_ERROR_STATUS)


def is_control_command(word: str) -> bool:
    """Check whether word is one of the conditional keywords."""
    return word in CONTROL_KEYWORDS


def ok_to_execute(frame: ControlFlowFrame) -> tuple[bool, ExecResult | None]:
    """Decide whether a non-keyword command may run in the current state.

    Returns (allowed, error). error is a syntax-error result when a
    command shows up where `then` was expected; the frame is reset then.
    """
    if frame.state is IfState.WANT_THEN:
        return False, syntax_error(frame, "then expected")
    if frame.state is IfState.THEN_BLOCK:
        return frame.branch_result is BranchResult.SUCCESS, None
    if frame.state is IfState.ELSE_BLOCK:
        return frame.branch_result is BranchResult.FAIL, None
    return True, None


async def do_control_command(ctx: "InterpreterContext", args: list[str]) -> ExecResult:
    """Process if, then, else or fi: change state or report a syntax error.

    `if` runs the rest of its command vector through the full pipeline and
    records whether it succeeded. An unknown keyword is an internal error
    and terminates the shell.
    """
    frame = ctx.state.control
    cmd = args[0]

    if cmd == "if":
        if frame.state is not IfState.NEUTRAL:
            return syntax_error(frame, "if unexpected")
        status = await ctx.process(args[1:])
        frame.branch_result = BranchResult.SUCCESS if status == 0 else BranchResult.FAIL
        frame.state = IfState.WANT_THEN
    elif cmd == "then":
        if frame.state is not IfState.WANT_THEN:
            return syntax_error(frame, "then unexpected")
        frame.state = IfState.THEN_BLOCK
    elif cmd == "else":
        if frame.state is not IfState.THEN_BLOCK:
            return syntax_error(frame, "else unexpected")
        frame.state = IfState.ELSE_BLOCK
    elif cmd == "fi":
        if frame.state not in (IfState.THEN_BLOCK, IfState.ELSE_BLOCK):
            return syntax_error(frame, "fi unexpected")
        frame.state = IfState.NEUTRAL
    else:
        raise ExitError(2, stderr=f"Error: internal error processing: {cmd}\n")

    logger.debug("%s -> %s (%s)", cmd, frame.state.name, frame.branch_result.name)
    return _result("", "", 0)


def check_if_state(frame: ControlFlowFrame, filename: str, line_number: int) -> None:
    """Verify that end of input was reached outside any conditional.

    Raises ExitError(2) if a conditional is still open.
    """
    if frame.state is IfState.NEUTRAL:
        return
    error = syntax_error(frame, "unexpected end of file")
    raise ExitError(2, stderr=f"{filename}: line {line_number}: {error.stderr}")
