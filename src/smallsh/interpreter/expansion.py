"""Variable Substitution.

Rewrites a raw command line before it is split into words:
- Variable references ($NAME, $1..$9, $$, $?)
- Backslash escapes (\\c yields a literal c, so \\$ is a literal dollar)

The line is scanned once, left to right. Text produced by a substitution
is never rescanned, so a value containing `$` or `\\` is inserted as is.
"""

import logging
import string
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import VariableStore

logger = logging.getLogger(__name__)

SPECIAL_PARAMS = frozenset(string.digits + "$?")
"""Characters that form a complete name on their own after `$`."""

NAME_CHARS = frozenset(string.ascii_letters + string.digits + "_")


def parse_variable_name(line: str, start: int) -> tuple[str, int]:
    """Find the variable name beginning at line[start] (just after a `$`).

    Returns (name, end) where line[start:end] == name. The name is a
    single special character, or the longest run of letters, digits and
    underscores, which may be empty.
    """
    if start < len(line) and line[start] in SPECIAL_PARAMS:
        return line[start], start + 1
    end = start
    while end < len(line) and line[end] in NAME_CHARS:
        end += 1
    return line[start:end], end


def substitute_variables(line: str, env: "VariableStore") -> str:
    """Return line with every escape and variable reference replaced."""
    result: list[str] = []
    i = 0
    n = len(line)

    while i < n:
        ch = line[i]
        if ch == "\\":
            # The escaped character is copied without interpretation
            if i + 1 < n:
                result.append(line[i + 1])
            i += 2
        elif ch == "$":
            name, i = parse_variable_name(line, i + 1)
            if name:
                result.append(env.lookup(name))
            else:
                # Nothing to reference: keep the dollar sign
                result.append("$")
        else:
            result.append(ch)
            i += 1

    expanded = "".join(result)
    if expanded != line:
        logger.debug("substituted %r -> %r", line, expanded)
    return expanded
