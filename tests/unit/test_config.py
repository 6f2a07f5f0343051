"""
Unit tests for configuration data models.

Tests PathSearchConfig, SearchOptions and LimitsConfig validation and
warning generation.
"""

import pytest
from pathlib import Path
from pydantic import ValidationError

from pathsearch.models.config import (
    DEFAULT_RULE_FILE,
    LimitsConfig,
    PathSearchConfig,
    SearchOptions,
)


class TestSearchOptions:
    """Test cases for SearchOptions class."""

    def test_defaults(self):
        options = SearchOptions()

        assert options.recurse_subdirs is True
        assert options.backup_dir is None
        assert options.patterns == []
        assert options.get_backup_path() is None

    def test_backup_dir_expansion(self):
        options = SearchOptions(backup_dir="~/backup")

        assert options.backup_dir == str(Path("~/backup").expanduser())
        assert options.get_backup_path() == Path("~/backup").expanduser()

    def test_relative_backup_dir_kept_relative(self):
        assert SearchOptions(backup_dir="backup").backup_dir == "backup"

    def test_blank_backup_dir(self):
        assert SearchOptions(backup_dir="  ").backup_dir is None

    def test_invalid_pattern(self):
        with pytest.raises(ValidationError, match="Invalid match pattern"):
            SearchOptions(patterns=["[unclosed"])


class TestLimitsConfig:
    """Test cases for LimitsConfig class."""

    def test_defaults(self):
        assert LimitsConfig().max_files == 200000

    def test_max_files_must_be_positive(self):
        with pytest.raises(ValidationError):
            LimitsConfig(max_files=0)


class TestPathSearchConfig:
    """Test cases for PathSearchConfig class."""

    def test_defaults(self):
        config = PathSearchConfig()

        assert config.rule_file == DEFAULT_RULE_FILE == "DirectorySearch.txt"
        assert config.encoding == "utf-8"
        assert config.get_rule_file_path() == Path("DirectorySearch.txt")

    def test_nested_dicts(self):
        config = PathSearchConfig(
            search={'recurse_subdirs': False, 'patterns': [r"\.jar$"]},
            limits={'max_files': 10}
        )

        assert config.search.recurse_subdirs is False
        assert config.search.patterns == [r"\.jar$"]
        assert config.limits.max_files == 10

    def test_rule_file_expansion(self):
        config = PathSearchConfig(rule_file="~/rules.txt")

        assert config.rule_file == str(Path("~/rules.txt").expanduser())

    def test_empty_rule_file(self):
        with pytest.raises(ValidationError):
            PathSearchConfig(rule_file="   ")

    def test_unknown_encoding(self):
        with pytest.raises(ValidationError, match="Unknown encoding"):
            PathSearchConfig(encoding="no-such-codec")

    def test_warnings(self, tmp_path):
        config = PathSearchConfig(rule_file=str(tmp_path / "missing.txt"))

        warnings = config.validate_configuration()

        assert any("Rule file does not exist" in w for w in warnings)
        assert any("No match patterns" in w for w in warnings)

    def test_backup_not_a_directory_warning(self, tmp_path):
        rule_file = tmp_path / "rules.txt"
        rule_file.write_text("")
        backup = tmp_path / "backup"
        backup.write_text("")

        config = PathSearchConfig(
            rule_file=str(rule_file),
            search={'backup_dir': str(backup), 'patterns': [r"\.jar$"]}
        )

        assert config.validate_configuration() == [f"Backup destination is not a directory: {backup}"]

    def test_dict_round_trip(self):
        config = PathSearchConfig(search={'patterns': [r"\.jar$"], 'backup_dir': "backup"})

        restored = PathSearchConfig.from_dict(config.to_dict())

        assert restored == config

    def test_str(self):
        assert "DirectorySearch.txt" in str(PathSearchConfig())
