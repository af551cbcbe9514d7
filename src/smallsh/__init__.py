"""smallsh - a small command interpreter.

Reads command lines, substitutes variables, runs if/then/else/fi
conditionals, handles a handful of builtins in-process and runs
everything else as a child process.
"""

from .interpreter import (
    CapacityExceededError,
    ExitError,
    Interpreter,
    InvalidBindingError,
    ProcessOutcome,
    StoreError,
    VariableStore,
)
from .shell import Shell
from .types import ExecResult, ShellConfig

__version__ = "0.1.0"

__all__ = [
    "CapacityExceededError",
    "ExecResult",
    "ExitError",
    "Interpreter",
    "InvalidBindingError",
    "ProcessOutcome",
    "Shell",
    "ShellConfig",
    "StoreError",
    "VariableStore",
]
