"""
Rule file grammar for pathsearch.

A rule file holds one rule per line:

    # comment
    +/home/user/projects
    -/home/user/projects/vendor
    all

Blank lines and lines starting with ``#`` are ignored. ``all`` expands to one
inclusion rule per filesystem root. Every other line must start with ``+``
(include) or ``-`` (exclude) followed by a path.
"""

import os
import string
from pathlib import Path
from typing import List, Optional

from .models.include_path import IncludePath


ALL_ROOTS = "all"
COMMENT_PREFIX = "#"
INCLUDE_SIGN = "+"
EXCLUDE_SIGN = "-"


class ParseError(ValueError):
    """Raised when a rule file line is malformed or names a missing path."""

    def __init__(self, message: str, line_number: int, filename: Optional[str] = None):
        self.line_number = line_number
        self.filename = filename
        if filename:
            full_message = f"Error in {filename} (line {line_number}): {message}"
        else:
            full_message = f"Line {line_number}: {message}"
        super().__init__(full_message)


class RuleFileError(OSError):
    """Raised when the rule file cannot be opened, read or written."""
    pass


def is_ignored_line(line: str) -> bool:
    """Check if a stripped rule file line is blank or a comment."""
    return not line or line.startswith(COMMENT_PREFIX)


def has_valid_sign(line: str) -> bool:
    """Check if a stripped, non-comment line is ``all`` or starts with + or -."""
    return line == ALL_ROOTS or line[:1] in (INCLUDE_SIGN, EXCLUDE_SIGN)


def parse_rule(line: str) -> IncludePath:
    """
    Convert a signed rule line into an IncludePath.

    The first character decides inclusion: ``+`` includes, anything else
    excludes. The remainder, trimmed, is the path. The sign set itself is
    not checked here; see has_valid_sign.

    Args:
        line: A rule line such as ``+/srv/app``

    Returns:
        The IncludePath described by the line

    Raises:
        ValueError: If the line is empty or carries no path
    """
    if not line:
        raise ValueError("Rule line cannot be empty")
    path = line[1:].strip()
    if not path:
        raise ValueError(f"Rule line has no path: {line!r}")
    return IncludePath(path=Path(path), include=line[0] == INCLUDE_SIGN)


def format_rules(entries: List[IncludePath], header: Optional[List[str]] = None) -> str:
    """
    Render entries as rule file content.

    Args:
        entries: Entries in list order
        header: Comment lines written before the rules (without the leading #)

    Returns:
        Rule file text ending in a newline
    """
    lines = [f"{COMMENT_PREFIX} {text}" if text else COMMENT_PREFIX for text in (header or [])]
    lines.extend(entry.to_rule() for entry in entries)
    return "\n".join(lines) + "\n"


def list_filesystem_roots() -> List[Path]:
    """
    List every filesystem root on this machine.

    On Windows this is each existing drive letter; elsewhere it is ``/``.
    """
    if os.name == 'nt':
        drives = [Path(f"{letter}:\\") for letter in string.ascii_uppercase]
        return [drive for drive in drives if drive.exists()]
    return [Path(os.sep)]
