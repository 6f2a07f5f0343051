"""
Settings file support for pathsearch.
"""

from .parser import (
    ConfigParser,
    ConfigParseResult,
    ConfigurationError,
    SETTINGS_FILE_NAMES,
    load_config,
)

__all__ = [
    'ConfigParser',
    'ConfigParseResult',
    'ConfigurationError',
    'SETTINGS_FILE_NAMES',
    'load_config',
]
