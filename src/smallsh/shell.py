"""Main Shell class - the primary API for smallsh.

Example usage:
    from smallsh import Shell

    # Synchronous usage (for REPL, scripts)
    shell = Shell()
    status = shell.run("GREETING=hello\\nexport GREETING\\nprintenv GREETING")

    # Async usage (for async applications)
    shell = Shell()
    status = await shell.exec("if true\\nthen\\necho yes\\nfi")

    # Running a script file with positional parameters
    shell = Shell(args=["one", "two"], script_name="greet.sh")
    status = shell.run_file("greet.sh")

`exit`, a failing `cd` or `exec`, and an unterminated conditional raise
ExitError; callers decide whether that ends the process.

The async API does not yield while a command runs: waiting for a child
and `read` block the event loop until the child exits or a line arrives.

Script files are decoded as UTF-8 with surrogateescape, so arbitrary bytes
pass through to variables and to the arguments of external programs.
"""

import asyncio
import io
import logging
import os
import signal
import sys
from typing import Iterable, Mapping, Optional, TextIO

import nest_asyncio  # type: ignore[import-untyped]

from .interpreter import ExitError, Interpreter, InterpreterState, VariableStore
from .interpreter.control_flow import ControlFlowFrame, check_if_state, ok_to_execute
from .types import ExecResult, ShellConfig

logger = logging.getLogger(__name__)

SOURCE_COMMAND = "."
DEFAULT_SCRIPT_NAME = "smallsh"


class Shell:
    """A smallsh session: a variable table, a conditional frame and streams."""

    def __init__(
        self,
        *,
        config: Optional[ShellConfig] = None,
        env: Optional[Mapping[str, str]] = None,
        args: Optional[Iterable[str]] = None,
        script_name: str = DEFAULT_SCRIPT_NAME,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ):
        """Initialize the shell.

        Args:
            config: Session configuration (variable capacity, prompt, ...).
            env: Initial exported variables. Defaults to os.environ.
            args: Positional parameters, bound to $1, $2, ...
            script_name: Value of $0.
            stdin: Stream scripts and `read` take lines from.
            stdout: Stream for builtin output and the prompt.
            stderr: Stream for diagnostics.

        Raises:
            StoreError: if the initial variables do not fit in the table.
        """
        self._config = config or ShellConfig()
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self._stderr = stderr or sys.stderr

        store = VariableStore(max_variables=self._config.max_variables)
        store.load_from_environment((os.environ if env is None else env).items())
        store.store("$", str(os.getpid()))
        store.store("0", script_name)
        for i, arg in enumerate(args or (), start=1):
            store.store(str(i), arg)

        self._interpreter = Interpreter(
            state=InterpreterState(env=store),
            config=self._config,
            stdin=self._stdin,
            stdout=self._stdout,
            stderr=self._stderr,
        )

    @property
    def env(self) -> VariableStore:
        """Get the variable table."""
        return self._interpreter.state.env

    @property
    def interpreter(self) -> Interpreter:
        return self._interpreter

    @property
    def last_exit_code(self) -> int:
        return self._interpreter.state.last_exit_code

    def install_signal_policy(self) -> None:
        """Ignore interrupt and quit in this process, if configured to.

        Signal dispositions are process-wide, so the run methods never call
        this themselves; the command-line entry point does.
        """
        if self._config.ignore_signals:
            signal.signal(signal.SIGINT, signal.SIG_IGN)
            signal.signal(signal.SIGQUIT, signal.SIG_IGN)

    async def exec(self, script: str, *, filename: str = DEFAULT_SCRIPT_NAME) -> int:
        """Execute script text line by line.

        Returns the status of the last line. External commands and `read`
        block the running event loop for as long as they take.
        """
        return await self.execute_stream(io.StringIO(script), filename)

    async def exec_file(self, path: str) -> int:
        """Execute the lines of the file at path."""
        try:
            stream = open(path, encoding="utf-8", errors="surrogateescape")
        except OSError as e:
            raise ExitError(1, stderr=f"{DEFAULT_SCRIPT_NAME}: {path}: {e.strerror}\n") from e
        with stream:
            return await self.execute_stream(stream, path)

    async def interact(self) -> int:
        """Execute lines from stdin, prompting if stdin is a terminal."""
        prompt = self._config.prompt if self._stdin.isatty() else ""
        return await self.execute_stream(self._stdin, DEFAULT_SCRIPT_NAME, prompt=prompt)

    async def execute_stream(self, stream: TextIO, filename: str, prompt: str = "") -> int:
        """Read-eval loop over stream.

        Each line is substituted, split and processed, and its status is
        stored in $?. At end of input the conditional must be closed.
        """
        interpreter = self._interpreter
        result = 0
        line_number = 1

        while True:
            if prompt:
                self._stdout.write(prompt)
                self._stdout.flush()
            line = stream.readline()
            if not line:
                break
            if line.endswith("\n"):
                line = line[:-1]

            args = interpreter.expand_line(line)
            logger.debug("%s:%d: %r", filename, line_number, args)
            if args and args[0] == SOURCE_COMMAND:
                result = await self._source(args[1:])
            else:
                result = await interpreter.process(args)

            line_number += 1
            interpreter.record_status(result)

        check_if_state(interpreter.state.control, filename, line_number)
        return result

    async def _source(self, args: list[str]) -> int:
        """Run a file in this shell (the `.` command).

        The file gets its own conditional frame, so it must close every
        conditional it opens; the caller's frame is restored afterwards.
        """
        state = self._interpreter.state
        allowed, error = ok_to_execute(state.control)
        if error is not None:
            self._interpreter.emit(error)
            return error.exit_code
        if not allowed:
            return 0
        if not args:
            self._interpreter.emit(
                ExecResult(stderr=f"{SOURCE_COMMAND}: filename argument required\n", exit_code=2)
            )
            return 2

        outer = state.control
        state.control = ControlFlowFrame()
        try:
            return await self.exec_file(args[0])
        finally:
            state.control = outer

    def run(self, script: str, *, filename: str = DEFAULT_SCRIPT_NAME) -> int:
        """Execute script text synchronously.

        This is a convenience wrapper around exec() that works in any context,
        including Jupyter notebooks and async frameworks.
        """
        return self._run_sync(self.exec(script, filename=filename))

    def run_file(self, path: str) -> int:
        """Execute a script file synchronously."""
        return self._run_sync(self.exec_file(path))

    def run_interactive(self) -> int:
        """Execute lines from stdin synchronously."""
        return self._run_sync(self.interact())

    @staticmethod
    def _run_sync(coro) -> int:
        try:
            asyncio.get_running_loop()
            # We're in an existing event loop (Jupyter, async framework, etc.)
            # Apply nest_asyncio to allow nested event loops
            nest_asyncio.apply()
        except RuntimeError:
            # No running event loop, asyncio.run() will work fine
            pass
        return asyncio.run(coro)
