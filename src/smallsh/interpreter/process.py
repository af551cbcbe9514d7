"""Process Executor.

Runs a command that is not a builtin as a child process: fork, set up
the child's environment and signals, exec, and wait for it in the parent.
The wait is a blocking waitpid, so an event loop calling in is held
until the child exits.
"""

import logging
import os
import signal
import sys
from typing import TYPE_CHECKING, Optional, TextIO

from .types import ProcessOutcome

if TYPE_CHECKING:
    from .types import VariableStore

logger = logging.getLogger(__name__)

EXEC_FAILURE_STATUS = 1

CHILD_DEFAULT_SIGNALS = (signal.SIGINT, signal.SIGQUIT)


def restore_default_signals() -> dict[int, object]:
    """Undo the shell's ignore policy for interrupt and quit.

    Returns the previous handlers, for set_signal_handlers.
    """
    return {sig: signal.signal(sig, signal.SIG_DFL) for sig in CHILD_DEFAULT_SIGNALS}


def set_signal_handlers(handlers: dict[int, object]) -> None:
    for sig, handler in handlers.items():
        # None means the handler was not installed from Python
        if handler is not None:
            signal.signal(sig, handler)


def _run_child(argv: list[str], env: dict[str, str]) -> None:
    """Replace the child's image with argv[0]. Never returns."""
    try:
        restore_default_signals()
        os.execvpe(argv[0], argv, env)
    except OSError as e:
        os.write(2, f"cannot execute command: {argv[0]}: {e.strerror}\n".encode())
    finally:
        os._exit(EXEC_FAILURE_STATUS)


def execute(
    argv: list[str], env: "VariableStore", stderr: Optional[TextIO] = None
) -> Optional[ProcessOutcome]:
    """Run argv as an external program and wait for it to finish.

    An empty argv succeeds without spawning anything. The child sees only
    the exported variables of env. Returns None if no process could be
    created; the reason is written to stderr.
    """
    if stderr is None:
        stderr = sys.stderr
    if not argv:
        return ProcessOutcome(raw_status=0)

    child_env = dict(entry.split("=", 1) for entry in env.materialize_environment())

    # Buffered output must not be duplicated into the child
    sys.stdout.flush()
    sys.stderr.flush()

    try:
        pid = os.fork()
    except OSError as e:
        stderr.write(f"fork: {e.strerror}\n")
        return None

    if pid == 0:
        _run_child(argv, child_env)

    logger.debug("spawned %s as pid %d", argv[0], pid)
    try:
        _, raw_status = os.waitpid(pid, 0)
    except ChildProcessError as e:
        stderr.write(f"wait: {e.strerror}\n")
        return None
    outcome = ProcessOutcome(raw_status=raw_status)
    logger.debug("pid %d finished with status %d", pid, outcome.exit_code)
    return outcome
