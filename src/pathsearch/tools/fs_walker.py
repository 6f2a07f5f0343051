"""
Filesystem walker for pathsearch.

FSWalker is the default search delegate. It walks each inclusion rule handed to
it by the dispatcher, skips anything governed by a more specific exclusion
rule, and appends an ArtifactMatch to the result sink for every file the match
predicate accepts.
"""

import os
import re
import threading
from pathlib import Path
from typing import Callable, Dict, List, Optional, Iterator, Sequence
from datetime import datetime
import logging

from ..models.config import PathSearchConfig
from ..models.include_path import IncludePath
from ..models.search_results import ArtifactMatch


logger = logging.getLogger(__name__)

MatchPredicate = Callable[[Path], bool]


class FSWalker:
    """
    Search delegate that traverses included paths and reports matching files.

    Rules are applied most-specific-first: for any directory or file, the rule whose
    path is its closest ancestor (or the directory itself) decides whether it
    is searched. A nested inclusion rule is walked on its own, so the walk of
    an enclosing inclusion skips it and no file is reported twice.

    The walker checks the shared cancel event before each rule and at every
    directory, raising InterruptedError once it is set.
    """

    def __init__(self, config: Optional[PathSearchConfig] = None,
                 cancel_event: Optional[threading.Event] = None,
                 matcher: Optional[MatchPredicate] = None):
        """
        Initialize the filesystem walker.

        Args:
            config: Configuration supplying match patterns and limits
            cancel_event: Event that interrupts the walk when set
            matcher: Predicate deciding whether a file is reported; defaults to
                the configured regex patterns
        """
        self.config = config or PathSearchConfig()
        self.cancel_event = cancel_event if cancel_event is not None else threading.Event()
        self._compiled_patterns = self._compile_patterns(self.config.search.patterns)
        self.matcher = matcher or self._matches_patterns
        self._stats = self._empty_stats()

    @staticmethod
    def _empty_stats() -> Dict[str, int]:
        return {
            'files_scanned': 0,
            'files_matched': 0,
            'directories_traversed': 0,
            'directories_excluded': 0,
            'files_excluded': 0,
            'errors': 0
        }

    def __call__(self, result_sink, status_sink, paths: Sequence[IncludePath],
                 recurse_subdirs: bool, backup_dir: Optional[Path]) -> None:
        """
        Walk every inclusion rule in paths and append matches to result_sink.

        Rule paths are resolved before they are compared, so relative rules,
        ``..`` segments and absolute rules for the same tree interact correctly.

        Args:
            result_sink: Append-only destination for ArtifactMatch records
            status_sink: Optional callable receiving progress text
            paths: Inclusion and exclusion rules, in search order
            recurse_subdirs: Whether to descend below each included path
            backup_dir: Backup destination recorded on every match

        Raises:
            InterruptedError: If the cancel event is set during the walk
        """
        originals = list(paths)
        rules = [rule.resolved() for rule in originals]
        backup = str(backup_dir) if backup_dir is not None else None
        walked = set()

        try:
            for original, rule in zip(originals, rules):
                self._check_cancelled()
                if not rule.include or rule.path in walked:
                    continue
                walked.add(rule.path)
                for match in self.walk(rule, rules, recurse_subdirs, backup, status_sink, original):
                    result_sink.append(match)
        except InterruptedError:
            self._report(status_sink, "Search interrupted")
            if hasattr(result_sink, 'interrupted'):
                result_sink.interrupted = True
            raise

        self._report(status_sink, f"Search complete: {self._stats['files_matched']} matches")

    def walk(self, rule: IncludePath, rules: Sequence[IncludePath], recurse_subdirs: bool,
             backup_dir: Optional[str] = None, status_sink=None,
             report_as: Optional[IncludePath] = None) -> Iterator[ArtifactMatch]:
        """
        Walk a single inclusion rule and yield matching files.

        Args:
            rule: The inclusion rule to walk
            rules: Every rule in the search, used to prune excluded or
                separately included subdirectories and files
            recurse_subdirs: Whether to descend below the rule's path
            backup_dir: Backup destination recorded on every match
            status_sink: Optional callable receiving progress text
            report_as: Rule recorded as the root of each match; defaults to rule

        Yields:
            ArtifactMatch objects for files accepted by the match predicate
        """
        root_path = rule.path
        report_as = report_as or rule
        if not rule.exists():
            logger.warning(f"Search path does not exist: {root_path}")
            return

        if root_path.is_file():
            match = self._check_file(root_path, report_as, backup_dir)
            if match:
                yield match
            return

        logger.info(f"Walking directory tree: {root_path}")
        for current_dir, subdirs, files in os.walk(root_path, onerror=self._on_walk_error):
            self._check_cancelled()
            current_path = Path(current_dir)
            self._stats['directories_traversed'] += 1
            self._report(status_sink, f"Searching {current_path}")

            if recurse_subdirs:
                kept = []
                for d in sorted(subdirs):
                    if self._governing_rule(current_path / d, rules) == rule:
                        kept.append(d)
                    else:
                        self._stats['directories_excluded'] += 1
                subdirs[:] = kept
            else:
                subdirs[:] = []

            for filename in sorted(files):
                file_path = current_path / filename
                if self._governing_rule(file_path, rules) != rule:
                    self._stats['files_excluded'] += 1
                    continue
                if self._stats['files_scanned'] >= self.config.limits.max_files:
                    logger.warning(f"Reached maximum file limit: {self.config.limits.max_files}")
                    return
                match = self._check_file(file_path, report_as, backup_dir)
                if match:
                    yield match

    def _check_file(self, file_path: Path, rule: IncludePath,
                    backup_dir: Optional[str]) -> Optional[ArtifactMatch]:
        self._stats['files_scanned'] += 1
        if not self.matcher(file_path):
            return None
        try:
            stat_result = file_path.stat()
            match = ArtifactMatch(
                path=str(file_path),
                root=rule,
                backup_dir=backup_dir,
                size=stat_result.st_size,
                modified_time=datetime.fromtimestamp(stat_result.st_mtime)
            )
        except OSError as e:
            logger.warning(f"Error reading file {file_path}: {e}")
            self._stats['errors'] += 1
            return None
        self._stats['files_matched'] += 1
        return match

    @staticmethod
    def _governing_rule(path: Path, rules: Sequence[IncludePath]) -> Optional[IncludePath]:
        """Return the rule with the longest path that contains path, if any."""
        best = None
        for rule in rules:
            if rule.contains(path) and (best is None or len(rule.path.parts) > len(best.path.parts)):
                best = rule
        return best

    def _check_cancelled(self) -> None:
        if self.cancel_event.is_set():
            raise InterruptedError("Search was cancelled")

    def _on_walk_error(self, error: OSError) -> None:
        logger.warning(f"Cannot read directory {error.filename}: {error}")
        self._stats['errors'] += 1

    @staticmethod
    def _report(status_sink, message: str) -> None:
        logger.debug(message)
        if status_sink is not None:
            status_sink(message)

    def _compile_patterns(self, patterns: List[str]) -> List[re.Pattern]:
        """
        Compile regex patterns for efficient matching.

        Args:
            patterns: List of regex pattern strings

        Returns:
            List of compiled regex patterns
        """
        compiled = []
        for pattern in patterns:
            try:
                compiled.append(re.compile(pattern, re.IGNORECASE))
            except re.error as e:
                logger.warning(f"Invalid regex pattern '{pattern}': {e}")
        return compiled

    def _matches_patterns(self, file_path: Path) -> bool:
        """
        Check if a file matches any of the configured patterns.

        Args:
            file_path: Path to check

        Returns:
            True if the file matches any pattern
        """
        if not self._compiled_patterns:
            return True  # No patterns means match all files

        filename = file_path.name
        full_path = str(file_path)

        for pattern in self._compiled_patterns:
            if pattern.search(filename) or pattern.search(full_path):
                return True

        return False

    def get_stats(self) -> Dict[str, int]:
        """
        Get statistics about the walk.

        Returns:
            Dictionary containing operation statistics
        """
        return self._stats.copy()

    def reset_stats(self) -> None:
        """Reset the statistics counters."""
        self._stats = self._empty_stats()
