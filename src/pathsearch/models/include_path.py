"""
Include path data model for pathsearch.

An IncludePath is a single inclusion or exclusion rule: a filesystem location
tagged with whether its contents take part in a search.
"""

import os
from pathlib import Path
from typing import Union
from pydantic import BaseModel, Field, field_validator


class IncludePath(BaseModel):
    """
    A filesystem path tagged as included in or excluded from a search.

    Two IncludePaths are equal when their paths are equal, regardless of the
    include flag, so a list holding them can never carry two rules for the
    same location.

    Attributes:
        path: Directory, file or drive root this rule applies to
        include: True if the path contributes candidates, False if it is skipped
    """

    path: Path = Field(..., description="Filesystem location of the rule")
    include: bool = Field(True, description="Whether the location is searched or skipped")

    @field_validator('path', mode='before')
    @classmethod
    def validate_path(cls, v) -> Path:
        """Reject empty paths; strings are left for pydantic to coerce."""
        if isinstance(v, str) and not v.strip():
            raise ValueError("Include path cannot be empty")
        return v

    def exists(self) -> bool:
        """Check whether the path exists on disk; unreachable paths count as missing."""
        try:
            return self.path.exists()
        except OSError:
            return False

    def resolved(self) -> 'IncludePath':
        """Get a copy with an absolute path, symlinks and ``..`` resolved."""
        try:
            path = self.path.resolve()
        except (OSError, RuntimeError):
            path = Path(os.path.abspath(self.path))
        return IncludePath(path=path, include=self.include)

    def contains(self, other: Union[str, Path]) -> bool:
        """Check whether other is this path or lies somewhere below it."""
        other = Path(other)
        return other == self.path or self.path in other.parents

    def to_rule(self) -> str:
        """Render the entry as a rule file line."""
        sign = '+' if self.include else '-'
        return f"{sign}{self.path}"

    def __eq__(self, other) -> bool:
        if not isinstance(other, IncludePath):
            return NotImplemented
        return self.path == other.path

    def __hash__(self) -> int:
        return hash(self.path)

    def __str__(self) -> str:
        return self.to_rule()
