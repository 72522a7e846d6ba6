"""
Data models for Visiofinder.

This module contains all the core data structures used throughout the system.
"""

from .search_spec import RootPath, SearchObject, SearchSpecification
from .search_results import SearchResult, SearchReport, ShortcutResult, ShortcutReport

__all__ = [
    'RootPath',
    'SearchObject',
    'SearchSpecification',
    'SearchResult',
    'SearchReport',
    'ShortcutResult',
    'ShortcutReport'
]
