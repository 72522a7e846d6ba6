"""
Visiofinder - Core Package

Finds files and folders described by a search configuration and creates
shortcuts to them in a target folder.
"""

__version__ = "1.0.0"
__author__ = "Visiofinder Team"

from .config.parser import (
    ConfigurationError,
    load_specification,
    parse_specification,
    validate_config_file,
    create_config_template
)
from .tools.search_coordinator import run_search
from .tools.shortcut_writer import write_shortcuts

__all__ = [
    'ConfigurationError',
    'load_specification',
    'parse_specification',
    'validate_config_file',
    'create_config_template',
    'run_search',
    'write_shortcuts'
]
