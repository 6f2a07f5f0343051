"""
Search tools for pathsearch.

This module contains the default search delegate used by the dispatcher.
"""

from .fs_walker import FSWalker

__all__ = ['FSWalker']
