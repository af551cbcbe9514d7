"""Interpreter module for smallsh."""

from .control_flow import BranchResult, ControlFlowFrame, IfState
from .errors import (
    CapacityExceededError,
    ExitError,
    InterpreterError,
    InvalidBindingError,
    StoreError,
)
from .expansion import substitute_variables
from .interpreter import Interpreter
from .process import execute
from .types import (
    InterpreterContext,
    InterpreterState,
    ProcessOutcome,
    VariableBinding,
    VariableStore,
)

__all__ = [
    "BranchResult",
    "CapacityExceededError",
    "ControlFlowFrame",
    "ExitError",
    "IfState",
    "Interpreter",
    "InterpreterContext",
    "InterpreterError",
    "InterpreterState",
    "InvalidBindingError",
    "ProcessOutcome",
    "StoreError",
    "VariableBinding",
    "VariableStore",
    "execute",
    "substitute_variables",
]
