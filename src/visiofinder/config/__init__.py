"""
Configuration management package for Visiofinder.

This package provides parsing and validation of search configuration
documents into search specifications.
"""

from .parser import (
    ConfigParser,
    ConfigParseResult,
    ConfigurationError,
    ConfigFileError,
    MalformedConfigError,
    MissingSearchObjectsError,
    NoValidSearchObjectsError,
    InvalidRootPathError,
    InvalidSearchObjectError,
    compile_target_name,
    load_specification,
    parse_specification,
    validate_config_file,
    create_config_template
)

__all__ = [
    'ConfigParser',
    'ConfigParseResult',
    'ConfigurationError',
    'ConfigFileError',
    'MalformedConfigError',
    'MissingSearchObjectsError',
    'NoValidSearchObjectsError',
    'InvalidRootPathError',
    'InvalidSearchObjectError',
    'compile_target_name',
    'load_specification',
    'parse_specification',
    'validate_config_file',
    'create_config_template'
]
