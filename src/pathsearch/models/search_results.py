"""
Search results data models for pathsearch.

This module defines the records a search delegate writes into a result sink,
and SearchResults, the default append-only sink.
"""

from typing import Dict, List, Optional, Any
from datetime import datetime
from pathlib import Path
from pydantic import BaseModel, Field, field_validator

from .include_path import IncludePath


class ArtifactMatch(BaseModel):
    """
    A single artifact discovered during a search.

    Attributes:
        path: Absolute path to the matched file
        root: The inclusion rule whose traversal found the file
        backup_dir: Where the file should be backed up before it is modified
        size: File size in bytes
        modified_time: Last modification timestamp
    """

    path: str = Field(..., min_length=1, description="Absolute path to the matched file")
    root: Optional[IncludePath] = Field(None, description="Inclusion rule that produced the match")
    backup_dir: Optional[str] = Field(None, description="Backup destination for this artifact")
    size: int = Field(0, ge=0, description="File size in bytes")
    modified_time: Optional[datetime] = Field(None, description="Last modification timestamp")

    @field_validator('path')
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Validate and normalize file path."""
        if not v or not v.strip():
            raise ValueError("File path cannot be empty")
        return str(Path(v).resolve())

    def get_filename(self) -> str:
        """Get just the filename without directory path."""
        return Path(self.path).name

    def get_directory(self) -> str:
        """Get the directory containing this file."""
        return str(Path(self.path).parent)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the match to dictionary representation."""
        data = self.model_dump()
        data['filename'] = self.get_filename()
        data['directory'] = self.get_directory()
        data['root'] = self.root.to_rule() if self.root else None
        if self.modified_time:
            data['modified_time'] = self.modified_time.isoformat()
        return data

    def __str__(self) -> str:
        return f"{self.get_filename()} ({self.get_directory()})"


class SearchResults(BaseModel):
    """
    Append-only result sink for a search run.

    Matches are appended in discovery order. An interrupted search leaves the
    matches found so far in place and sets ``interrupted``.

    Attributes:
        matches: Artifacts discovered so far
        started: When the sink was created
        interrupted: Whether the search that filled the sink was cancelled
        errors: Non-fatal errors encountered while searching
    """

    matches: List[ArtifactMatch] = Field(default_factory=list, description="Discovered artifacts")
    started: datetime = Field(default_factory=datetime.now, description="When the search started")
    interrupted: bool = Field(False, description="Whether the search was cancelled")
    errors: List[str] = Field(default_factory=list, description="Errors encountered during search")

    def append(self, match: ArtifactMatch) -> None:
        """Add a discovered artifact."""
        self.matches.append(match)

    def add_error(self, error: str) -> None:
        """Add an error message to the results."""
        self.errors.append(error)

    def get_match_count(self) -> int:
        """Get the total number of matches."""
        return len(self.matches)

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def __len__(self) -> int:
        return len(self.matches)

    def to_dict(self) -> Dict[str, Any]:
        """Convert search results to dictionary representation."""
        return {
            'matches': [match.to_dict() for match in self.matches],
            'match_count': self.get_match_count(),
            'started': self.started.isoformat(),
            'interrupted': self.interrupted,
            'errors': list(self.errors),
            'has_errors': self.has_errors(),
        }

    def __str__(self) -> str:
        parts = [f"Found {self.get_match_count()} matches"]
        if self.interrupted:
            parts.append("Interrupted")
        if self.has_errors():
            parts.append(f"Errors: {len(self.errors)}")
        return " | ".join(parts)
