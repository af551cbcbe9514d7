"""Parser module for smallsh."""

from .lexer import (
    BLANKS,
    CONTROL_KEYWORDS,
    split_line,
    is_valid_name,
)

__all__ = [
    "BLANKS",
    "CONTROL_KEYWORDS",
    "split_line",
    "is_valid_name",
]
