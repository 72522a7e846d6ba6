"""
Search results data models for Visiofinder.

This module defines the structures produced by a search run and by the
shortcut writer. Results are kept apart from the parsed specification so that
a specification can be searched any number of times without being mutated.
"""

from typing import Dict, List, Optional, Any
from datetime import datetime
from pathlib import Path
from pydantic import BaseModel, Field

from .search_spec import SearchObject, RootPath


class SearchResult(BaseModel):
    """
    Outcome of the search for a single search object.

    Attributes:
        search_object: The search object that was searched for
        path: Absolute path of the first match, None if nothing was found
        root_path: The root path in which the match was found
    """

    search_object: SearchObject = Field(..., description="The search object that was searched for")
    path: Optional[str] = Field(None, description="Absolute path of the first match")
    root_path: Optional[RootPath] = Field(None, description="Root path in which the match was found")

    @property
    def found(self) -> bool:
        """Whether a match was recorded."""
        return bool(self.path)

    @property
    def link_name(self) -> str:
        return self.search_object.link_name

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary representation."""
        return {
            'linkName': self.link_name,
            'targetName': self.search_object.target_name.pattern,
            'path': self.path,
            'rootPath': self.root_path.root_path if self.root_path else None,
            'found': self.found,
        }

    def __str__(self) -> str:
        if self.found:
            return f"{self.link_name}: {self.path}"
        return f"{self.link_name}: not found"


class SearchReport(BaseModel):
    """
    Results of a search run, one entry per search object in declared order.

    Attributes:
        results: Search results in the order of the specification
        execution_time: Time taken to run the search in seconds
        timestamp: When the search was executed
    """

    results: List[SearchResult] = Field(default_factory=list, description="Search results")
    execution_time: float = Field(0.0, ge=0.0, description="Time taken to run the search")
    timestamp: datetime = Field(default_factory=datetime.now, description="When the search was executed")

    def get(self, link_name: str) -> Optional[SearchResult]:
        """Get the result of a search object by its link name."""
        for result in self.results:
            if result.link_name == link_name:
                return result
        return None

    def get_path(self, link_name: str) -> Optional[str]:
        """Get the path found for a search object, None if missing or not found."""
        result = self.get(link_name)
        return result.path if result else None

    def found(self) -> List[SearchResult]:
        """Get the results for which a path was found."""
        return [result for result in self.results if result.found]

    def missing(self) -> List[SearchResult]:
        """Get the results for which nothing was found."""
        return [result for result in self.results if not result.found]

    def add_result(self, result: SearchResult) -> None:
        self.results.append(result)

    def to_dict(self) -> Dict[str, Any]:
        """Convert report to dictionary representation."""
        return {
            'results': [result.to_dict() for result in self.results],
            'found_count': len(self.found()),
            'missing_count': len(self.missing()),
            'execution_time': self.execution_time,
            'timestamp': self.timestamp.isoformat(),
        }

    def __str__(self) -> str:
        parts = [f"Found {len(self.found())}/{len(self.results)} targets"]
        parts.append(f"Took {self.execution_time:.2f}s")
        return " | ".join(parts)


class ShortcutResult(BaseModel):
    """
    Outcome of creating one shortcut.

    Attributes:
        link_name: Link name of the search object
        target: Path the shortcut points at
        link_path: Path of the shortcut file
        created: Whether the shortcut was created
        error: Error message when creation failed
    """

    link_name: str = Field(..., description="Link name of the search object")
    target: str = Field(..., description="Path the shortcut points at")
    link_path: str = Field(..., description="Path of the shortcut file")
    created: bool = Field(False, description="Whether the shortcut was created")
    error: Optional[str] = Field(None, description="Error message when creation failed")

    def get_link_filename(self) -> str:
        return Path(self.link_path).name

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


class ShortcutReport(BaseModel):
    """
    Results of writing the shortcuts of a search report.

    Attributes:
        target_folder: Folder the shortcuts were written to, None if disabled
        shortcuts: Per-shortcut results
        errors: Every failure encountered, including target folder creation
    """

    target_folder: Optional[str] = Field(None, description="Folder the shortcuts were written to")
    shortcuts: List[ShortcutResult] = Field(default_factory=list, description="Per-shortcut results")
    errors: List[str] = Field(default_factory=list, description="Errors encountered while writing")

    def has_errors(self) -> bool:
        """Check if any shortcut could not be written."""
        return len(self.errors) > 0

    def add_error(self, error: str) -> None:
        self.errors.append(error)

    def add_shortcut(self, shortcut: ShortcutResult) -> None:
        """Add a shortcut result, recording its error if any."""
        self.shortcuts.append(shortcut)
        if shortcut.error:
            self.errors.append(shortcut.error)

    def created(self) -> List[ShortcutResult]:
        """Get the shortcuts that were created."""
        return [shortcut for shortcut in self.shortcuts if shortcut.created]

    def to_dict(self) -> Dict[str, Any]:
        """Convert report to dictionary representation."""
        return {
            'target_folder': self.target_folder,
            'shortcuts': [shortcut.to_dict() for shortcut in self.shortcuts],
            'created_count': len(self.created()),
            'errors': list(self.errors),
            'has_errors': self.has_errors(),
        }

    def __str__(self) -> str:
        parts = [f"Created {len(self.created())} shortcuts"]
        if self.has_errors():
            parts.append(f"Errors: {len(self.errors)}")
        return " | ".join(parts)
