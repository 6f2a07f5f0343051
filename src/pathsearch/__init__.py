"""
pathsearch - Core Package

Maintains an ordered list of inclusion/exclusion search paths, persists it to a
line-oriented rule file, and dispatches cancellable recursive artifact searches
over a selection of those paths.
"""

__version__ = "0.1.0"
__author__ = "pathsearch Team"
