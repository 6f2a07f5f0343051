"""
Search dispatch for pathsearch.

The SearchDispatcher projects a selection of a PathList onto an array of
IncludePaths and hands it to a search delegate, the routine that actually
walks the filesystem and reports matching artifacts.

A search delegate is any callable with the signature::

    delegate(result_sink, status_sink, paths, recurse_subdirs, backup_dir) -> None

It appends each discovered artifact to ``result_sink`` as soon as it is found
and raises InterruptedError when the search is cancelled.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Any, Callable, Iterable, Optional, Sequence, Tuple, Union

from .models.include_path import IncludePath
from .path_list import PathList, StatusSink


logger = logging.getLogger(__name__)

SearchDelegate = Callable[[Any, Optional[StatusSink], Sequence[IncludePath], bool, Optional[Path]], None]


class SearchDispatcher:
    """
    Runs searches over all or part of a PathList through a search delegate.

    Cancellation is cooperative: cancel() sets an Event that the dispatcher
    checks before delegating and that a delegate such as FSWalker checks at
    every path and directory boundary.
    """

    def __init__(self, path_list: PathList, delegate: SearchDelegate,
                 cancel_event: Optional[threading.Event] = None):
        """
        Initialize the dispatcher.

        Args:
            path_list: The list whose entries are searched
            delegate: Routine that performs the recursive search
            cancel_event: Event shared with the delegate; a new one is created if omitted
        """
        self.path_list = path_list
        self.delegate = delegate
        self.cancel_event = cancel_event if cancel_event is not None else threading.Event()
        self._executor: Optional[ThreadPoolExecutor] = None
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def cancel(self) -> None:
        """Ask the running search to stop."""
        self.cancel_event.set()

    def reset(self) -> None:
        """Clear a previous cancellation request."""
        self.cancel_event.clear()

    @property
    def is_cancelled(self) -> bool:
        return self.cancel_event.is_set()

    def _check_cancelled(self) -> None:
        if self.cancel_event.is_set():
            raise InterruptedError("Search was cancelled")

    def project(self, indices: Iterable[int]) -> Tuple[IncludePath, ...]:
        """
        Select entries by index in a single pass over the list.

        Indices are sorted ascending and out-of-range values are dropped, so
        the result follows index order rather than request order.
        """
        wanted = self.path_list.validate_indices(indices)
        if not wanted:
            return ()

        paths = []
        k = 0
        for i, entry in enumerate(self.path_list):
            if k == len(wanted):
                break
            if i == wanted[k]:
                paths.append(entry)
                k += 1
        return tuple(paths)

    def search(self, result_sink, indices: Iterable[int], recurse_subdirs: bool,
               backup_dir: Optional[Union[str, Path]], status_sink: Optional[StatusSink] = None) -> None:
        """
        Search the entries at the given indices.

        Does nothing if the list is empty or no valid index is given. Results
        are written to result_sink by the delegate as they are found; if the
        search is interrupted, those already written stay there and a sink
        with an ``interrupted`` attribute has it set.

        Args:
            result_sink: Append-only destination for discovered artifacts
            indices: Indices of the path list to search
            recurse_subdirs: Whether to search subdirectories
            backup_dir: Where artifacts are backed up before modification
            status_sink: Optional receiver of progress text

        Raises:
            InterruptedError: If the search is cancelled
        """
        if len(self.path_list) == 0:
            return
        paths = self.project(indices)
        if not paths:
            return
        self._delegate(result_sink, paths, recurse_subdirs, backup_dir, status_sink)

    def search_all(self, result_sink, recurse_subdirs: bool,
                   backup_dir: Optional[Union[str, Path]], status_sink: Optional[StatusSink] = None) -> None:
        """
        Search every entry in the list.

        Same contract as search, without index selection.

        Raises:
            InterruptedError: If the search is cancelled
        """
        paths = tuple(self.path_list)
        if not paths:
            return
        self._delegate(result_sink, paths, recurse_subdirs, backup_dir, status_sink)

    def _delegate(self, result_sink, paths: Tuple[IncludePath, ...], recurse_subdirs: bool,
                  backup_dir: Optional[Union[str, Path]], status_sink: Optional[StatusSink]) -> None:
        backup_path = Path(backup_dir) if backup_dir is not None else None
        try:
            self._check_cancelled()
            self.logger.info(f"Searching {len(paths)} path entries (subdirectories: {recurse_subdirs})")
            self.delegate(result_sink, status_sink, paths, recurse_subdirs, backup_path)
        except InterruptedError:
            self.logger.info("Search interrupted")
            if hasattr(result_sink, 'interrupted'):
                result_sink.interrupted = True
            raise
        self.logger.info("Search finished")

    def submit_search(self, result_sink, indices: Iterable[int], recurse_subdirs: bool,
                      backup_dir: Optional[Union[str, Path]],
                      status_sink: Optional[StatusSink] = None) -> Future:
        """
        Run search on a background worker.

        Clears any earlier cancellation first. The returned Future raises
        InterruptedError from result() if the search is cancelled.
        """
        indices = list(indices)
        self.reset()
        return self._get_executor().submit(
            self.search, result_sink, indices, recurse_subdirs, backup_dir, status_sink)

    def submit_search_all(self, result_sink, recurse_subdirs: bool,
                          backup_dir: Optional[Union[str, Path]],
                          status_sink: Optional[StatusSink] = None) -> Future:
        """Run search_all on a background worker."""
        self.reset()
        return self._get_executor().submit(
            self.search_all, result_sink, recurse_subdirs, backup_dir, status_sink)

    def _get_executor(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="pathsearch")
        return self._executor

    def shutdown(self, wait: bool = True) -> None:
        """Stop the background worker, cancelling any running search."""
        if self._executor is not None:
            if not wait:
                self.cancel()
            self._executor.shutdown(wait=wait)
            self._executor = None

    def __enter__(self) -> 'SearchDispatcher':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.shutdown()
