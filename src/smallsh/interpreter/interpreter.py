"""Interpreter - Command Processing Pipeline.

Main interpreter class that takes one line at a time through:
- Variable substitution (expansion.py)
- Word splitting (parser)
- if/then/else/fi handling (control_flow.py)
- Built-in commands (builtins/)
- External programs (process.py)
"""

import logging
import sys
from typing import Optional, TextIO

from ..parser import split_line
from ..types import ExecResult, ShellConfig
from .builtins import run_builtin
from .control_flow import do_control_command, is_control_command, ok_to_execute
from .errors import StoreError
from .expansion import substitute_variables
from .process import execute
from .types import InterpreterContext, InterpreterState, VariableStore

logger = logging.getLogger(__name__)

FORK_FAILURE_STATUS = 1


class Interpreter:
    """Runs command lines against one shell state."""

    def __init__(
        self,
        state: Optional[InterpreterState] = None,
        config: Optional[ShellConfig] = None,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ):
        """Initialize the interpreter.

        Args:
            state: Optional initial state (creates an empty one if not provided)
            config: Session configuration
            stdin: Stream for the read builtin (default sys.stdin)
            stdout: Stream for builtin output (default sys.stdout)
            stderr: Stream for diagnostics (default sys.stderr)
        """
        self._config = config or ShellConfig()
        self._state = state or InterpreterState(
            env=VariableStore(max_variables=self._config.max_variables)
        )
        self._ctx = InterpreterContext(
            state=self._state,
            config=self._config,
            stdin=stdin or sys.stdin,
            stdout=stdout or sys.stdout,
            stderr=stderr or sys.stderr,
            process=self.process,
        )

    @property
    def state(self) -> InterpreterState:
        """Get the interpreter state."""
        return self._state

    @property
    def context(self) -> InterpreterContext:
        return self._ctx

    def expand_line(self, line: str) -> list[str]:
        """Substitute variables in a raw line and split it into words."""
        return split_line(substitute_variables(line, self._state.env))

    async def execute_line(self, line: str) -> int:
        """Substitute, split and process one raw command line."""
        return await self.process(self.expand_line(line))

    async def process(self, args: list[str]) -> int:
        """Process a command vector: handle keywords, gate, then run.

        Returns the command's exit status. A command skipped by the
        current conditional branch returns 0.
        """
        if not args:
            return 0

        if is_control_command(args[0]):
            result = await do_control_command(self._ctx, args)
            self.emit(result)
            return result.exit_code

        allowed, error = ok_to_execute(self._state.control)
        if error is not None:
            self.emit(error)
            return error.exit_code
        if not allowed:
            logger.debug("skipped: %s", args[0])
            return 0

        return await self.do_command(args)

    async def do_command(self, args: list[str]) -> int:
        """Run a builtin, or else an external program."""
        result = await run_builtin(self._ctx, args)
        if result is not None:
            self.emit(result)
            return result.exit_code

        self._ctx.stdout.flush()
        self._ctx.stderr.flush()
        outcome = execute(args, self._state.env, self._ctx.stderr)
        if outcome is None:
            return FORK_FAILURE_STATUS
        return outcome.exit_code

    def record_status(self, exit_code: int) -> None:
        """Remember exit_code as the last status and expose it as $?."""
        self._state.last_exit_code = exit_code
        try:
            self._state.env.store("?", str(exit_code))
        except StoreError as e:
            self.emit(ExecResult(stderr=f"{e}\n", exit_code=1))

    def emit(self, result: ExecResult) -> None:
        """Write a builtin's output to the session streams."""
        if result.stdout:
            self._ctx.stdout.write(result.stdout)
            self._ctx.stdout.flush()
        if result.stderr:
            self._ctx.stderr.write(result.stderr)
            self._ctx.stderr.flush()
