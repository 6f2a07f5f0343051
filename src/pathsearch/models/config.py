"""
Configuration data models for pathsearch.

This module defines the settings consumed by the path list, the search
dispatcher and the default filesystem walker: where the rule file lives,
how searches traverse directories, and what counts as a matching artifact.
"""

from typing import Dict, List, Optional, Any
from pathlib import Path
import re
from pydantic import BaseModel, Field, field_validator


DEFAULT_RULE_FILE = "DirectorySearch.txt"


class SearchOptions(BaseModel):
    """
    Configuration for search traversal and matching.

    Attributes:
        recurse_subdirs: Whether to descend into subdirectories of each included path
        backup_dir: Where matched artifacts are backed up before modification
        patterns: Regex patterns a file name or path must match to be reported
    """

    recurse_subdirs: bool = Field(True, description="Whether to search subdirectories")
    backup_dir: Optional[str] = Field(None, description="Backup destination for matched artifacts")
    patterns: List[str] = Field(default_factory=list, description="Regex patterns for matching artifacts")

    @field_validator('backup_dir')
    @classmethod
    def validate_backup_dir(cls, v: Optional[str]) -> Optional[str]:
        """Expand user path but keep relative paths relative."""
        if v is None or not v.strip():
            return None
        if v.startswith('~'):
            return str(Path(v).expanduser())
        return str(Path(v))

    @field_validator('patterns')
    @classmethod
    def validate_patterns(cls, v: List[str]) -> List[str]:
        """Reject patterns that do not compile."""
        for pattern in v:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(f"Invalid match pattern '{pattern}': {e}")
        return v

    def get_backup_path(self) -> Optional[Path]:
        """Get the backup destination as a Path, if one is configured."""
        return Path(self.backup_dir) if self.backup_dir else None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()


class LimitsConfig(BaseModel):
    """
    Configuration for search limits.

    Attributes:
        max_files: Maximum number of files a single search examines
    """

    max_files: int = Field(200000, gt=0, description="Maximum number of files to examine")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()


class PathSearchConfig(BaseModel):
    """
    Main configuration class for pathsearch.

    Attributes:
        rule_file: Location of the line-oriented path rule file
        encoding: Text encoding of the rule file
        search: Traversal and matching options
        limits: Search limits
    """

    rule_file: str = Field(DEFAULT_RULE_FILE, min_length=1, description="Path rule file")
    encoding: str = Field("utf-8", min_length=1, description="Rule file encoding")
    search: SearchOptions = Field(default_factory=SearchOptions, description="Search options")
    limits: LimitsConfig = Field(default_factory=LimitsConfig, description="Search limits")

    @field_validator('rule_file')
    @classmethod
    def validate_rule_file(cls, v: str) -> str:
        """Expand a leading ~ in the rule file location."""
        v = v.strip()
        if not v:
            raise ValueError("Rule file cannot be empty")
        if v.startswith('~'):
            return str(Path(v).expanduser())
        return v

    @field_validator('encoding')
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Reject encodings Python does not know."""
        import codecs
        try:
            codecs.lookup(v)
        except LookupError:
            raise ValueError(f"Unknown encoding: {v}")
        return v

    def get_rule_file_path(self) -> Path:
        """Get the rule file location as a Path."""
        return Path(self.rule_file)

    def validate_configuration(self) -> List[str]:
        """
        Collect non-fatal configuration warnings.

        Returns:
            List of warning messages
        """
        warnings = []

        if not self.get_rule_file_path().exists():
            warnings.append(f"Rule file does not exist yet: {self.rule_file}")

        backup_path = self.search.get_backup_path()
        if backup_path is not None and backup_path.exists() and not backup_path.is_dir():
            warnings.append(f"Backup destination is not a directory: {backup_path}")

        if not self.search.patterns:
            warnings.append("No match patterns configured - every file will be reported")

        return warnings

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary representation."""
        return {
            'rule_file': self.rule_file,
            'encoding': self.encoding,
            'search': self.search.to_dict(),
            'limits': self.limits.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PathSearchConfig':
        """Create configuration from dictionary."""
        return cls(**data)

    def __str__(self) -> str:
        return (f"PathSearchConfig(rule_file={self.rule_file}, "
                f"recurse_subdirs={self.search.recurse_subdirs}, "
                f"patterns={len(self.search.patterns)})")
