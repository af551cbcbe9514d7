"""Core types for smallsh."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ExecResult:
    """Result of running a builtin command."""

    stdout: str = ""
    """Text the command writes to standard output."""

    stderr: str = ""
    """Diagnostics the command writes to standard error."""

    exit_code: int = 0
    """Exit status (0 means success)."""


@dataclass
class ShellConfig:
    """Configuration for a shell session."""

    max_variables: int = 512
    """Maximum number of bindings the variable store may hold."""

    prompt: str = "> "
    """Prompt written before each line in interactive sessions."""

    ignore_signals: bool = True
    """Ignore SIGINT/SIGQUIT in the shell itself (children get defaults).

    Takes effect only when Shell.install_signal_policy() is called, as the
    smallsh command does at startup.
    """

    reply_variable: str = "REPLY"
    """Variable that `read` stores into when no name is given."""
