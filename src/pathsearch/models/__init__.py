"""
Data models for pathsearch.

This module contains all the core data structures used throughout the system.
"""

from .include_path import IncludePath
from .events import ChangeType, ListChangeEvent
from .search_results import ArtifactMatch, SearchResults
from .config import PathSearchConfig, SearchOptions, LimitsConfig, DEFAULT_RULE_FILE

__all__ = [
    'IncludePath',
    'ChangeType',
    'ListChangeEvent',
    'ArtifactMatch',
    'SearchResults',
    'PathSearchConfig',
    'SearchOptions',
    'LimitsConfig',
    'DEFAULT_RULE_FILE'
]
