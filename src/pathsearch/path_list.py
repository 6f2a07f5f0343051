"""
Ordered, deduplicated list of inclusion/exclusion search paths.

The PathList owns every IncludePath it holds, reports structural changes to
registered listeners, and persists itself to a line-oriented rule file.
"""

import logging
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional, Union

from .models.config import PathSearchConfig, DEFAULT_RULE_FILE
from .models.events import ChangeType, ListChangeEvent
from .models.include_path import IncludePath
from .rules import (
    ALL_ROOTS,
    ParseError,
    RuleFileError,
    format_rules,
    has_valid_sign,
    is_ignored_line,
    list_filesystem_roots,
    parse_rule,
)


logger = logging.getLogger(__name__)

ChangeListener = Callable[[ListChangeEvent], None]
StatusSink = Callable[[str], None]


class PathList:
    """
    Ordered collection of IncludePaths with no two entries sharing a path.

    Insertion order is the search order. Listeners registered with
    add_listener are called synchronously, on the mutating thread, with a
    ListChangeEvent after each structural change.

    The list is not locked. Callers must not mutate it while a search over it
    is running.
    """

    def __init__(self, rule_file: Union[str, Path] = DEFAULT_RULE_FILE,
                 encoding: str = 'utf-8', status_sink: Optional[StatusSink] = None):
        """
        Initialize an empty path list.

        Args:
            rule_file: Location of the rule file used by load_paths and save_paths
            encoding: Text encoding of the rule file
            status_sink: Optional receiver of human-readable progress lines
        """
        self.rule_file = Path(rule_file)
        self.encoding = encoding
        self.status_sink = status_sink
        self._entries: List[IncludePath] = []
        self._listeners: List[ChangeListener] = []

    @classmethod
    def from_config(cls, config: PathSearchConfig,
                    status_sink: Optional[StatusSink] = None) -> 'PathList':
        """Create an empty path list bound to the configured rule file."""
        return cls(config.get_rule_file_path(), encoding=config.encoding, status_sink=status_sink)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[IncludePath]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> IncludePath:
        return self._entries[index]

    def __contains__(self, entry: object) -> bool:
        return entry in self._entries

    def __repr__(self) -> str:
        return f"PathList({self.rule_file}, entries={len(self._entries)})"

    def entries(self) -> List[IncludePath]:
        """Get a copy of the current entries in list order."""
        return list(self._entries)

    def add_listener(self, listener: ChangeListener) -> None:
        """Register a callable that receives every ListChangeEvent."""
        self._listeners.append(listener)

    def remove_listener(self, listener: ChangeListener) -> None:
        """Unregister a listener; unknown listeners are ignored."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _fire(self, change_type: ChangeType, index0: int, index1: int) -> None:
        event = ListChangeEvent(type=change_type, index0=index0, index1=index1)
        for listener in list(self._listeners):
            listener(event)

    def _status(self, message: str) -> None:
        logger.info(message)
        if self.status_sink is not None:
            self.status_sink(message)

    def add(self, entry: Union[str, IncludePath]) -> bool:
        """
        Add a rule line or an IncludePath to the list.

        A string is a rule line: ``all`` adds every filesystem root and always
        succeeds; otherwise the first character is the sign (``+`` includes,
        anything else excludes) and the trimmed remainder is the path.

        An existing entry for the same path is removed first, before the new
        path is checked, so adding a path that does not exist drops the old
        entry for that location as well.

        Args:
            entry: A rule line or an IncludePath

        Returns:
            Whether the path exists and is now in the list
        """
        if isinstance(entry, str):
            if entry == ALL_ROOTS:
                self._status("The tool will search all drives except any excluded directories specified")
                self.add_all_drives()
                return True
            if not entry:
                raise ValueError("Rule line cannot be empty")
            if not entry[1:].strip():
                logger.warning(f"Rule line has no path: {entry!r}")
                return False
            entry = parse_rule(entry)

        self.remove(entry)

        if not entry.exists():
            logger.warning(f"Path does not exist, not added: {entry.path}")
            return False

        self._entries.append(entry)
        index = len(self._entries) - 1
        logger.debug(f"Added {entry} at index {index}")
        self._fire(ChangeType.INTERVAL_ADDED, index, index)
        return True

    def add_all_drives(self) -> None:
        """Add every filesystem root as an inclusion entry."""
        for root in list_filesystem_roots():
            self.add(IncludePath(path=root, include=True))

    def remove(self, target: Union[IncludePath, Iterable[int]]) -> Optional[bool]:
        """
        Remove a single entry by value, or a selection of entries by index.

        Given an IncludePath, the matching entry (if any) is removed and a
        single-index removal is reported; the return value says whether an
        entry was found.

        Given indices, out-of-range values are ignored, the remaining entries
        are removed from highest index to lowest, and one removal spanning the
        lowest to the highest removed index is reported. Returns None.
        """
        if isinstance(target, IncludePath):
            return self._remove_entry(target)
        self._remove_indices(target)
        return None

    def _remove_entry(self, entry: IncludePath) -> bool:
        try:
            index = self._entries.index(entry)
        except ValueError:
            return False
        del self._entries[index]
        logger.debug(f"Removed {entry} from index {index}")
        self._fire(ChangeType.INTERVAL_REMOVED, index, index)
        return True

    def _remove_indices(self, indices: Iterable[int]) -> None:
        valid = self.validate_indices(indices)
        if not valid:
            return
        for index in reversed(valid):
            del self._entries[index]
        logger.debug(f"Removed {len(valid)} entries between {valid[0]} and {valid[-1]}")
        self._fire(ChangeType.INTERVAL_REMOVED, valid[0], valid[-1])

    def remove_all(self) -> None:
        """Clear the list."""
        if self._entries:
            last = len(self._entries) - 1
            self._entries.clear()
            self._fire(ChangeType.INTERVAL_REMOVED, 0, last)

    def validate_indices(self, indices: Iterable[int]) -> List[int]:
        """
        Sort and deduplicate indices, dropping any outside the current list.

        Returns:
            Valid indices in ascending order (empty if none)
        """
        size = len(self._entries)
        return sorted({index for index in indices if 0 <= index < size})

    def load_paths(self) -> None:
        """
        Load rules from the rule file, adding them in file order.

        Loading stops at the first bad line; entries added from earlier lines
        stay in the list.

        Raises:
            ParseError: If a line is neither ``all`` nor signed, or names a path
                that does not exist
            RuleFileError: If the rule file is missing or unreadable
        """
        filename = str(self.rule_file)
        self._status(f"Scanning {filename} file...")

        try:
            with open(self.rule_file, 'r', encoding=self.encoding) as f:
                lines = f.readlines()
        except FileNotFoundError as e:
            raise RuleFileError(f"Error in {filename}: The {filename} file doesn't exist.") from e
        except (OSError, UnicodeDecodeError) as e:
            raise RuleFileError(f"Error in {filename}: Could not read the {filename} file.") from e

        self._status(f"{filename} file contains")
        for line_number, raw_line in enumerate(lines, 1):
            line = raw_line.strip()
            if is_ignored_line(line):
                continue

            self._status(line)
            if not has_valid_sign(line):
                raise ParseError(
                    "Each path entry must start with a + or - to denote inclusion/exclusion",
                    line_number, filename)
            if not self.add(line):
                raise ParseError(
                    f"\"{line[1:].strip()}\" is not a valid file or directory "
                    f"(perhaps it does not exist?)",
                    line_number, filename)

        logger.info(f"Loaded {len(self._entries)} path entries from {filename}")

    def save_paths(self) -> None:
        """
        Write the current entries to the rule file, one rule per line.

        Raises:
            RuleFileError: If the rule file cannot be written
        """
        filename = str(self.rule_file)
        header = [
            "pathsearch rule file",
            "+<path> includes a path, -<path> excludes it, 'all' adds every drive",
        ]
        content = format_rules(self._entries, header)

        try:
            if self.rule_file.parent != Path('.'):
                self.rule_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.rule_file, 'w', encoding=self.encoding) as f:
                f.write(content)
        except OSError as e:
            raise RuleFileError(f"Error in {filename}: Could not write the {filename} file.") from e

        logger.info(f"Saved {len(self._entries)} path entries to {filename}")
