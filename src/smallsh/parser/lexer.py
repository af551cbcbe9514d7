"""Lexer for smallsh command lines.

Splits a line into words on blanks. There is no quoting, globbing or
operator recognition: every non-blank run of characters is one word.
"""

import re

BLANKS = " \t"

CONTROL_KEYWORDS = frozenset({"if", "then", "else", "fi"})

_NAME_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def split_line(line: str) -> list[str]:
    """Split a command line into its command vector."""
    words = []
    current = []
    for ch in line:
        if ch in BLANKS or ch in "\r\n":
            if current:
                words.append("".join(current))
                current = []
        else:
            current.append(ch)
    if current:
        words.append("".join(current))
    return words


def is_valid_name(name: str) -> bool:
    """Check a variable name: a letter or underscore, then alphanumerics/underscores."""
    return bool(_NAME_RE.fullmatch(name))
