"""Interpreter errors.

Terminal conditions (exit, fatal cd/exec failures, unterminated
conditionals) are raised as ExitError and propagate up to the driver.
Store errors are raised by VariableStore and turned into failing
results by the builtins that call it.
"""


class InterpreterError(Exception):
    """Base class for interpreter errors that carry output."""

    def __init__(self, message: str = "", stdout: str = "", stderr: str = ""):
        super().__init__(message)
        self.stdout = stdout
        self.stderr = stderr


class ExitError(InterpreterError):
    """Raised when the shell must terminate with a given status."""

    def __init__(self, exit_code: int, stdout: str = "", stderr: str = ""):
        super().__init__(f"exit {exit_code}", stdout, stderr)
        self.exit_code = exit_code


class StoreError(Exception):
    """Base class for variable store failures."""


class CapacityExceededError(StoreError):
    """Raised when a new binding does not fit in the store."""

    def __init__(self, name: str, capacity: int):
        super().__init__(f"{name}: variable table full ({capacity} entries)")
        self.name = name
        self.capacity = capacity


class InvalidBindingError(StoreError):
    """Raised when a binding cannot be constructed from name and value."""
