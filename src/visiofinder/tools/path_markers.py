"""
Path marker substitution for Visiofinder.

Configured paths may contain symbolic markers such as ``<Home>`` or
``<ProgramFiles>`` which are replaced with concrete platform folders before a
search. Platform lookups go through a ``PlatformLocations`` object so callers
and tests can supply their own locations.
"""

import os
import logging
from pathlib import Path
from typing import Dict, Optional, Protocol

import platformdirs


logger = logging.getLogger(__name__)


START_MENU_PROGRAMS_DIR = "C:/ProgramData/Microsoft/Windows/Start Menu/Programs"


class PlatformLocations(Protocol):
    """Source of the concrete folders behind each path marker."""

    def app_data(self) -> Optional[str]: ...

    def app_data_local(self) -> Optional[str]: ...

    def app_data_start_dir(self) -> Optional[str]: ...

    def program_files(self) -> Optional[str]: ...

    def program_files_x86(self) -> Optional[str]: ...

    def home(self) -> Optional[str]: ...


class SystemPlatformLocations:
    """Platform locations read from the running system."""

    def app_data(self) -> Optional[str]:
        return os.environ.get("APPDATA")

    def app_data_local(self) -> Optional[str]:
        return platformdirs.user_data_dir()

    def app_data_start_dir(self) -> Optional[str]:
        return START_MENU_PROGRAMS_DIR

    def program_files(self) -> Optional[str]:
        return os.environ.get("PROGRAMFILES")

    def program_files_x86(self) -> Optional[str]:
        return os.environ.get("PROGRAMFILES(X86)")

    def home(self) -> Optional[str]:
        try:
            return str(Path.home())
        except RuntimeError:
            return None


class StaticPlatformLocations:
    """
    Platform locations taken from a fixed mapping.

    Keys are marker tokens (e.g. ``"<Home>"``); missing keys resolve to None.
    """

    def __init__(self, locations: Dict[str, str]):
        self.locations = dict(locations)

    def app_data(self) -> Optional[str]:
        return self.locations.get("<AppData>")

    def app_data_local(self) -> Optional[str]:
        return self.locations.get("<AppDataLocal>")

    def app_data_start_dir(self) -> Optional[str]:
        return self.locations.get("<AppDataStartDir>")

    def program_files(self) -> Optional[str]:
        return self.locations.get("<ProgramFiles>")

    def program_files_x86(self) -> Optional[str]:
        return self.locations.get("<ProgramFilesX86>")

    def home(self) -> Optional[str]:
        return self.locations.get("<Home>")


class PathMarkerResolver:
    """
    Replaces path markers with platform folders.

    Recognized markers are ``<AppData>``, ``<AppDataLocal>``,
    ``<AppDataStartDir>``, ``<ProgramFiles>``, ``<ProgramFilesX86>`` and
    ``<Home>``. Unknown tokens are left untouched. A marker whose location
    cannot be determined is replaced with an empty string.
    """

    MARKERS = (
        "<AppData>",
        "<AppDataLocal>",
        "<AppDataStartDir>",
        "<ProgramFiles>",
        "<ProgramFilesX86>",
        "<Home>",
    )

    def __init__(self, locations: Optional[PlatformLocations] = None):
        self.locations = locations if locations is not None else SystemPlatformLocations()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def _lookup(self, marker: str) -> str:
        lookups = {
            "<AppData>": self.locations.app_data,
            "<AppDataLocal>": self.locations.app_data_local,
            "<AppDataStartDir>": self.locations.app_data_start_dir,
            "<ProgramFiles>": self.locations.program_files,
            "<ProgramFilesX86>": self.locations.program_files_x86,
            "<Home>": self.locations.home,
        }
        value = lookups[marker]()
        if not value:
            self.logger.warning(f"Location for marker {marker} could not be determined, using empty string")
            return ""
        return value

    def resolve(self, path: str) -> str:
        """
        Replace every recognized marker in a path.

        Args:
            path: Path possibly containing markers

        Returns:
            The path with all recognized markers substituted
        """
        for marker in self.MARKERS:
            if marker in path:
                path = path.replace(marker, self._lookup(marker))
        return path


def resolve_markers(path: str, locations: Optional[PlatformLocations] = None) -> str:
    """Convenience function to resolve the markers of a single path."""
    return PathMarkerResolver(locations).resolve(path)
