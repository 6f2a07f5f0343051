"""
Unit tests for pathsearch data models.

Tests the IncludePath, ListChangeEvent, ArtifactMatch and SearchResults
classes to ensure proper validation, equality semantics and serialization.
"""

import pytest
from datetime import datetime
from pathlib import Path
from unittest.mock import patch
from pydantic import ValidationError

from pathsearch.models import (
    IncludePath, ChangeType, ListChangeEvent, ArtifactMatch, SearchResults
)


class TestIncludePath:
    """Test cases for IncludePath class."""

    def test_basic_creation(self):
        """Test creation from a string path."""
        entry = IncludePath(path="/srv/app")

        assert entry.path == Path("/srv/app")
        assert entry.include is True

    def test_equality_ignores_include_flag(self):
        """Entries for the same location are equal whatever their flag."""
        included = IncludePath(path="/srv/app", include=True)
        excluded = IncludePath(path="/srv/app", include=False)

        assert included == excluded
        assert hash(included) == hash(excluded)
        assert included != IncludePath(path="/srv/other")

    def test_empty_path_rejected(self):
        """Test empty path validation."""
        with pytest.raises(ValidationError):
            IncludePath(path="")

        with pytest.raises(ValidationError):
            IncludePath(path="   ")

    def test_exists(self, tmp_path):
        """Test existence check against the filesystem."""
        assert IncludePath(path=tmp_path).exists() is True
        assert IncludePath(path=tmp_path / "missing").exists() is False

    def test_exists_unreachable(self, tmp_path):
        entry = IncludePath(path=tmp_path)

        with patch.object(Path, 'exists', side_effect=PermissionError(13, "Permission denied")):
            assert entry.exists() is False

    def test_resolved(self, tmp_path, monkeypatch):
        """Relative paths and '..' segments resolve to one absolute path."""
        (tmp_path / "sub").mkdir()
        monkeypatch.chdir(tmp_path)

        relative = IncludePath(path="sub/../sub", include=False).resolved()

        assert relative.path == (tmp_path / "sub").resolve()
        assert relative.path.is_absolute()
        assert relative.include is False

    def test_contains(self):
        """Test ancestor-or-self containment."""
        entry = IncludePath(path="/srv/app")

        assert entry.contains("/srv/app")
        assert entry.contains("/srv/app/lib/x.jar")
        assert not entry.contains("/srv/application")
        assert not entry.contains("/srv")

    def test_to_rule(self):
        """Test rendering as a rule file line."""
        assert IncludePath(path="/srv/app").to_rule() == f"+{Path('/srv/app')}"
        assert str(IncludePath(path="/srv/app", include=False)) == f"-{Path('/srv/app')}"


class TestListChangeEvent:
    """Test cases for ListChangeEvent class."""

    def test_basic_creation(self):
        event = ListChangeEvent(type=ChangeType.INTERVAL_ADDED, index0=2, index1=2)

        assert event.type == ChangeType.INTERVAL_ADDED
        assert str(event) == "interval_added[2, 2]"

    def test_reversed_interval_rejected(self):
        with pytest.raises(ValidationError):
            ListChangeEvent(type=ChangeType.INTERVAL_REMOVED, index0=3, index1=1)

    def test_negative_index_rejected(self):
        with pytest.raises(ValidationError):
            ListChangeEvent(type=ChangeType.INTERVAL_REMOVED, index0=-1, index1=0)


class TestArtifactMatch:
    """Test cases for ArtifactMatch class."""

    def test_basic_creation(self):
        """Test basic match creation."""
        root = IncludePath(path="/srv/app")
        match = ArtifactMatch(path="/srv/app/lib/icu4j.jar", root=root, size=10)

        assert match.get_filename() == "icu4j.jar"
        assert "lib" in match.get_directory()
        assert match.root == root
        assert match.backup_dir is None

    def test_empty_path_validation(self):
        with pytest.raises(ValidationError):
            ArtifactMatch(path="")

        with pytest.raises(ValidationError):
            ArtifactMatch(path="   ")

    def test_to_dict(self):
        """Test dictionary conversion."""
        now = datetime.now()
        match = ArtifactMatch(
            path="/srv/app/a.jar",
            root=IncludePath(path="/srv/app"),
            backup_dir="/backup",
            modified_time=now
        )

        data = match.to_dict()

        assert data['filename'] == "a.jar"
        assert data['root'] == f"+{Path('/srv/app')}"
        assert data['backup_dir'] == "/backup"
        assert data['modified_time'] == now.isoformat()


class TestSearchResults:
    """Test cases for SearchResults class."""

    def test_append_keeps_discovery_order(self):
        results = SearchResults()
        results.append(ArtifactMatch(path="/b.jar"))
        results.append(ArtifactMatch(path="/a.jar"))

        assert results.get_match_count() == 2
        assert len(results) == 2
        assert [m.get_filename() for m in results.matches] == ["b.jar", "a.jar"]

    def test_errors_and_string(self):
        results = SearchResults()
        assert str(results) == "Found 0 matches"

        results.add_error("Cannot read /x")
        results.interrupted = True

        assert results.has_errors()
        assert str(results) == "Found 0 matches | Interrupted | Errors: 1"

    def test_to_dict(self):
        results = SearchResults()
        results.append(ArtifactMatch(path="/a.jar"))

        data = results.to_dict()

        assert data['match_count'] == 1
        assert data['interrupted'] is False
        assert data['matches'][0]['filename'] == "a.jar"
