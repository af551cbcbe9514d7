"""Interpreter types for smallsh."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Awaitable, Callable, Iterable, Optional, TextIO

from .control_flow import ControlFlowFrame
from .errors import CapacityExceededError, InvalidBindingError

if TYPE_CHECKING:
    from ..types import ShellConfig


DEFAULT_MAX_VARIABLES = 512


@dataclass
class VariableMetadata:
    """Per-variable metadata that can't be represented in the flat dict."""

    attributes: set[str] = field(default_factory=set)
    """Variable attributes: x=export."""


@dataclass(frozen=True)
class VariableBinding:
    """A name/value pair as listed by the store."""

    name: str
    value: str
    exported: bool = False


class VariableStore(dict):
    """Dict subclass holding shell variables with an export flag per name.

    Insertion order is table order: `set` and the child environment list
    bindings in the order they were first stored. Bindings are never
    removed; storing an existing name updates it in place.
    """

    _metadata: dict[str, VariableMetadata]

    def __init__(self, *args, max_variables: int = DEFAULT_MAX_VARIABLES, **kwargs):
        super().__init__()
        self._metadata = {}
        self.max_variables = max_variables
        for name, value in dict(*args, **kwargs).items():
            self.store(name, value)

    def __setitem__(self, name: str, value: str) -> None:
        self.store(name, value)

    def store(self, name: str, value: Optional[str]) -> None:
        """Create or update a binding.

        Raises CapacityExceededError if name is new and the table is full,
        InvalidBindingError if name or value is not a usable string.
        """
        if not isinstance(name, str) or not name:
            raise InvalidBindingError(f"{name!r}: invalid variable name")
        if value is None:
            value = ""
        elif not isinstance(value, str):
            raise InvalidBindingError(f"{name}: value must be a string")
        if name not in self and len(self) >= self.max_variables:
            raise CapacityExceededError(name, self.max_variables)
        super().__setitem__(name, value)

    def lookup(self, name: str) -> str:
        """Return the value bound to name, or "" if unbound."""
        return super().get(name, "")

    def export(self, name: str) -> None:
        """Mark name exported, binding it to "" first if it is unbound."""
        if name not in self:
            self.store(name, "")
        self.set_attribute(name, "x")

    def is_exported(self, name: str) -> bool:
        return "x" in self.get_attributes(name)

    def list(self) -> list[VariableBinding]:
        """All bindings in table order."""
        return [VariableBinding(k, v, self.is_exported(k)) for k, v in self.items()]

    def load_from_environment(self, environ: Iterable[tuple[str, str]]) -> None:
        """Bulk-load name/value pairs, marking each one exported."""
        for name, value in environ:
            self.store(name, value)
            self.set_attribute(name, "x")

    def materialize_environment(self) -> list[str]:
        """Exported bindings as "name=value" strings, in table order."""
        return [f"{k}={v}" for k, v in self.items() if self.is_exported(k)]

    def get_metadata(self, name: str) -> VariableMetadata:
        """Get or create metadata for a variable."""
        if name not in self._metadata:
            self._metadata[name] = VariableMetadata()
        return self._metadata[name]

    def set_attribute(self, name: str, attr: str) -> None:
        """Set an attribute on a variable."""
        self.get_metadata(name).attributes.add(attr)

    def get_attributes(self, name: str) -> set[str]:
        """Get all attributes for a variable."""
        meta = self._metadata.get(name)
        return set(meta.attributes) if meta else set()


@dataclass(frozen=True)
class ProcessOutcome:
    """What waiting on one child process produced."""

    raw_status: int
    """Wait status exactly as returned by waitpid."""

    @property
    def terminated_by_signal(self) -> bool:
        return os.WIFSIGNALED(self.raw_status)

    @property
    def exit_code(self) -> int:
        """Shell-style status: the exit code, or 128+N if killed by signal N."""
        if self.terminated_by_signal:
            return 128 + os.WTERMSIG(self.raw_status)
        return (self.raw_status >> 8) & 0xFF


@dataclass
class InterpreterState:
    """Mutable state maintained by the interpreter."""

    env: VariableStore = field(default_factory=VariableStore)
    """Shell variables, including the special keys $, ?, 0 and 1..9."""

    control: ControlFlowFrame = field(default_factory=ControlFlowFrame)
    """The single active if/then/else/fi frame."""

    last_exit_code: int = 0
    """Exit code of last command."""


@dataclass
class InterpreterContext:
    """Context provided to builtins and the control-flow machine."""

    state: InterpreterState
    """Mutable interpreter state."""

    config: "ShellConfig"
    """Session configuration."""

    stdin: TextIO
    """Stream `read` takes its lines from."""

    stdout: TextIO
    """Stream builtin output is written to."""

    stderr: TextIO
    """Stream diagnostics are written to."""

    process: Callable[[list[str]], Awaitable[int]]
    """Run a command vector through the full pipeline (used by `if`)."""
