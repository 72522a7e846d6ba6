"""
Bounded-depth recursive matcher for Visiofinder.

This module locates the first filesystem entry whose base name matches a
target regex, descending at most a given number of folder levels below a root
path. Each level may constrain which subfolders are entered with a filter
regex.
"""

import os
import re
import logging
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple, Union

from ..models.search_spec import RootPath


logger = logging.getLogger(__name__)


class RecursiveMatcher:
    """
    Depth-limited search for a target name below a root path.

    The walk visits entries in the same order as a recursive pre-order
    traversal, with children sorted by name, and stops at the first match.
    It uses an explicit work stack, and a folder already present on the
    current ancestor chain (a symlink loop) is not entered again.
    """

    def __init__(self):
        self._stats = {
            'entries_checked': 0,
            'directories_traversed': 0,
            'cycles_skipped': 0,
            'errors': 0
        }

    def find(self,
             pattern: re.Pattern,
             entry: Union[str, Path],
             depth: int = 1,
             filters: Sequence[re.Pattern] = ()) -> Optional[str]:
        """
        Search for the target below an entry.

        Args:
            pattern: Regex matched against entry base names
            entry: Root file or folder to start from
            depth: Folder levels to descend; 0 only checks the entry itself,
                -1 searches without limit
            filters: Empty, or one regex per level that subfolder names must
                match to be entered (filters[0] applies to the root's children)

        Returns:
            Absolute path of the first match, None if nothing matched

        Raises:
            ValueError: If the filters do not fit the depth
        """
        if filters and len(filters) != depth:
            raise ValueError(f"Expected 0 or {depth} filters, got {len(filters)}")

        # An empty path (e.g. an unresolved marker) never exists
        if not str(entry):
            return None

        stack: List[Tuple[str, int, FrozenSet[str]]] = [(os.path.abspath(str(entry)), depth, frozenset())]

        while stack:
            path, level, ancestors = stack.pop()
            self._stats['entries_checked'] += 1

            if not os.path.exists(path):
                continue

            if pattern.search(os.path.basename(path)):
                logger.debug(f"Matched {pattern.pattern} at {path}")
                return path

            if level == 0 or not os.path.isdir(path):
                continue

            real_path = os.path.realpath(path)
            if real_path in ancestors:
                logger.debug(f"Skipping symlink loop at {path}")
                self._stats['cycles_skipped'] += 1
                continue

            self._stats['directories_traversed'] += 1
            nested = ancestors | {real_path}
            candidates = [
                child for child in self._list_children(path)
                if self._passes_filter(os.path.basename(child), level, filters)
            ]
            # Reversed so the first child is popped first
            for child in reversed(candidates):
                stack.append((child, level - 1, nested))

        return None

    def find_in_root(self, pattern: re.Pattern, root: RootPath) -> Optional[str]:
        """Search for the target below a configured root path."""
        return self.find(pattern, root.root_path, root.recursion_level, root.filters)

    def _passes_filter(self, name: str, level: int, filters: Sequence[re.Pattern]) -> bool:
        """
        Check if a child may be entered at the given remaining depth.

        Filters are consumed from the start of the list as the remaining
        depth decreases.
        """
        if not filters:
            return True
        return filters[len(filters) - level].search(name) is not None

    def _list_children(self, path: str) -> List[str]:
        """
        List the entries of a folder sorted by name.

        Args:
            path: Folder to list

        Returns:
            Absolute child paths, empty if the folder cannot be read
        """
        try:
            with os.scandir(path) as entries:
                names = [entry.name for entry in entries]
        except OSError as e:
            logger.warning(f"Cannot list directory {path}: {e}")
            self._stats['errors'] += 1
            return []

        names.sort(key=lambda name: (name.lower(), name))
        return [os.path.join(path, name) for name in names]

    def get_stats(self) -> Dict[str, int]:
        """
        Get statistics about the searches run by this matcher.

        Returns:
            Dictionary containing operation statistics
        """
        return self._stats.copy()

    def reset_stats(self) -> None:
        """Reset the statistics counters."""
        self._stats = {
            'entries_checked': 0,
            'directories_traversed': 0,
            'cycles_skipped': 0,
            'errors': 0
        }


def find_target(pattern: re.Pattern,
                entry: Union[str, Path],
                depth: int = 1,
                filters: Sequence[re.Pattern] = ()) -> Optional[str]:
    """Convenience function to run a single search with a fresh matcher."""
    return RecursiveMatcher().find(pattern, entry, depth, filters)
