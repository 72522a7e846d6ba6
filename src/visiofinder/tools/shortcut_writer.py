"""
Shortcut creation for Visiofinder.

Creates a ``<linkName>.lnk`` link in the target folder for each search object
that was found. Failures are reported per shortcut and never stop the
remaining shortcuts from being written.
"""

import os
import logging
from pathlib import Path

from ..models.search_spec import SearchSpecification
from ..models.search_results import SearchReport, SearchResult, ShortcutReport, ShortcutResult


logger = logging.getLogger(__name__)


class ShortcutError(Exception):
    """Raised when a shortcut cannot be created."""
    pass


class ShortcutWriter:
    """
    Writes a link for every found target into the target folder.

    Links are symbolic links named after the search object's link name with
    a ``.lnk`` suffix.
    """

    LINK_SUFFIX = '.lnk'

    def __init__(self, overwrite: bool = False):
        """
        Initialize the shortcut writer.

        Args:
            overwrite: If True, replace an existing file or link at the
                shortcut path instead of reporting an error
        """
        self.overwrite = overwrite
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def write(self, spec: SearchSpecification, report: SearchReport) -> ShortcutReport:
        """
        Create the shortcuts of a search report.

        Args:
            spec: The specification that was searched
            report: Results of the search

        Returns:
            ShortcutReport describing every shortcut and error; empty when the
            specification has no target folder
        """
        if not spec.has_target_folder():
            self.logger.info("No target folder configured, skipping shortcut creation")
            return ShortcutReport()

        target_dir = Path(spec.target_folder)
        shortcut_report = ShortcutReport(target_folder=str(target_dir))

        try:
            target_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            message = f"Cannot create target folder {target_dir}: {e}"
            self.logger.error(message)
            shortcut_report.add_error(message)
            return shortcut_report

        for result in report.results:
            if not result.found:
                continue
            shortcut_report.add_shortcut(self._write_shortcut(target_dir, result))

        self.logger.info(f"Shortcuts written to {target_dir}: {shortcut_report}")
        return shortcut_report

    def get_link_path(self, target_dir: Path, link_name: str) -> Path:
        """Get the path of the shortcut for a link name."""
        return target_dir / f"{link_name}{self.LINK_SUFFIX}"

    def _write_shortcut(self, target_dir: Path, result: SearchResult) -> ShortcutResult:
        link_path = self.get_link_path(target_dir, result.link_name)
        shortcut = ShortcutResult(
            link_name=result.link_name,
            target=result.path,
            link_path=str(link_path)
        )

        try:
            self._check_link_name(result.link_name)
            self._create_link(Path(result.path), link_path)
            shortcut.created = True
            self.logger.info(f"Created shortcut {link_path} -> {result.path}")
        except ShortcutError as e:
            shortcut.error = str(e)
            self.logger.error(shortcut.error)

        return shortcut

    def _check_link_name(self, link_name: str) -> None:
        """Link names become a single file name inside the target folder."""
        if not link_name:
            raise ShortcutError("Invalid link name: link name is empty")
        if '/' in link_name or '\\' in link_name:
            raise ShortcutError(f"Invalid link name {link_name!r}: contains a path separator")

    def _create_link(self, target: Path, link_path: Path) -> None:
        """
        Create a symbolic link at link_path pointing at target.

        Raises:
            ShortcutError: If the link cannot be created
        """
        if link_path.is_symlink() or link_path.exists():
            if not self.overwrite:
                raise ShortcutError(f"Shortcut already exists: {link_path}")
            if link_path.is_dir() and not link_path.is_symlink():
                raise ShortcutError(f"Cannot replace directory with shortcut: {link_path}")
            try:
                link_path.unlink()
            except OSError as e:
                raise ShortcutError(f"Cannot remove existing shortcut {link_path}: {e}") from e

        try:
            os.symlink(target, link_path, target_is_directory=target.is_dir())
        except OSError as e:
            raise ShortcutError(f"Cannot create shortcut {link_path}: {e}") from e


def write_shortcuts(spec: SearchSpecification, report: SearchReport, overwrite: bool = False) -> ShortcutReport:
    """
    Convenience function to create the shortcuts of a search report.

    Args:
        spec: The specification that was searched
        report: Results of the search
        overwrite: Whether to replace existing shortcuts

    Returns:
        ShortcutReport describing every shortcut and error
    """
    return ShortcutWriter(overwrite=overwrite).write(spec, report)
