"""
Settings file loading for pathsearch.

A settings file is a YAML mapping with the same shape as PathSearchConfig. It
is looked up by name in the working directory and then the home directory;
when none is found the model defaults apply.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence, Union

import yaml
from pydantic import ValidationError

from ..models.config import PathSearchConfig


logger = logging.getLogger(__name__)

SETTINGS_FILE_NAMES = (
    '.pathsearch.yaml',
    '.pathsearch.yml',
    'pathsearch.yaml',
    'pathsearch.yml',
)

SETTINGS_HEADER = (
    "# pathsearch settings\n"
    "# rule_file holds one +<path> or -<path> rule per line ('all' adds every drive)\n"
)


class ConfigurationError(Exception):
    """Raised when a settings file cannot be read, parsed or validated."""


@dataclass
class ConfigParseResult:
    """
    Outcome of loading settings.

    Attributes:
        config: The validated settings
        config_path: Settings file that was read, or None when defaults were used
        warnings: Non-fatal problems found in the settings
    """
    config: PathSearchConfig
    config_path: Optional[Path] = None
    warnings: List[str] = field(default_factory=list)

    @property
    def is_default(self) -> bool:
        return self.config_path is None


class ConfigParser:
    """
    Finds, reads and validates pathsearch settings files.

    In strict mode any warning reported by PathSearchConfig.validate_configuration
    is raised as a ConfigurationError instead of being returned.
    """

    def __init__(self, strict_mode: bool = False,
                 search_dirs: Optional[Sequence[Union[str, Path]]] = None):
        """
        Args:
            strict_mode: Treat configuration warnings as errors
            search_dirs: Directories searched for a settings file, in order;
                defaults to the working directory then the home directory
        """
        self.strict_mode = strict_mode
        self.search_dirs = [Path(d) for d in search_dirs] if search_dirs is not None else None

    def candidates(self) -> Iterator[Path]:
        """Yield every settings file present in the search directories, in lookup order."""
        dirs = self.search_dirs if self.search_dirs is not None else [Path.cwd(), Path.home()]
        for directory in dirs:
            for name in SETTINGS_FILE_NAMES:
                candidate = directory / name
                if candidate.is_file():
                    yield candidate

    def load_config(self, config_path: Optional[Union[str, Path]] = None) -> ConfigParseResult:
        """
        Load settings from config_path, or from the first readable settings file found.

        Raises:
            ConfigurationError: If the settings are unreadable or invalid, or if
                there are warnings in strict mode
        """
        data: Dict[str, Any] = {}
        if config_path is not None:
            config_path = Path(config_path)
            if not config_path.is_file():
                raise ConfigurationError(f"Configuration file not found: {config_path}")
            data = self.read(config_path)
        else:
            config_path, data = self._discover()

        try:
            config = PathSearchConfig.from_dict(data)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed: {e}") from e

        result = ConfigParseResult(config=config, config_path=config_path,
                                   warnings=config.validate_configuration())
        if result.is_default:
            result.warnings.append("No configuration file found, using default settings")

        if self.strict_mode and result.warnings:
            raise ConfigurationError(f"Configuration warnings in strict mode: {'; '.join(result.warnings)}")

        logger.info(f"Loaded settings from {config_path or 'defaults'}")
        return result

    def _discover(self):
        for candidate in self.candidates():
            try:
                data = self.read(candidate)
            except ConfigurationError as e:
                logger.warning(f"Skipping settings file {candidate}: {e}")
                continue
            logger.info(f"Found settings file: {candidate}")
            return candidate, data
        logger.info("No settings file found, using defaults")
        return None, {}

    @staticmethod
    def read(path: Path) -> Dict[str, Any]:
        """
        Parse a settings file into a mapping; an empty file gives an empty mapping.

        Raises:
            ConfigurationError: If the file cannot be read, is not valid YAML,
                or does not hold a mapping
        """
        try:
            data = yaml.safe_load(path.read_text(encoding='utf-8'))
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {path}: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Cannot read configuration file {path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file must contain a YAML object, got {type(data).__name__}")
        return data

    @staticmethod
    def save_config(config: PathSearchConfig, output_path: Union[str, Path]) -> None:
        """
        Write config as a settings file that load_config reads back unchanged.

        Raises:
            ConfigurationError: If the file cannot be written
        """
        output_path = Path(output_path)
        body = yaml.safe_dump(config.to_dict(), default_flow_style=False, sort_keys=False)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(SETTINGS_HEADER + body, encoding='utf-8')
        except OSError as e:
            raise ConfigurationError(f"Cannot write configuration file {output_path}: {e}") from e
        logger.info(f"Saved settings to {output_path}")


def load_config(config_path: Optional[Union[str, Path]] = None, strict_mode: bool = False) -> ConfigParseResult:
    """Load settings with a default ConfigParser."""
    return ConfigParser(strict_mode=strict_mode).load_config(config_path)
