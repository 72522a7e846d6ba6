"""
Configuration parser for Visiofinder.

This module loads a search configuration document (JSON, or the same schema
written in YAML), validates it and converts it into a SearchSpecification.
Malformed search objects are skipped with a warning, while malformed root path
entries abort the whole load.
"""

import re
import json
import yaml
import logging
from pathlib import Path
from typing import Dict, Any, Optional, List, Union
from dataclasses import dataclass, field
from pydantic import ValidationError

from ..models.search_spec import (
    DEFAULT_RECURSION_LEVEL,
    UNBOUNDED_RECURSION,
    RootPath,
    SearchObject,
    SearchSpecification,
)
from ..tools.path_markers import PathMarkerResolver, PlatformLocations


logger = logging.getLogger(__name__)


@dataclass
class ConfigParseResult:
    """
    Result of configuration parsing operation.

    Attributes:
        specification: The parsed and validated search specification
        warnings: Skipped entries and ignored values, in document order
        config_path: Path to the configuration file used, if loaded from a file
    """
    specification: SearchSpecification
    warnings: List[str] = field(default_factory=list)
    config_path: Optional[Path] = None


class ConfigurationError(Exception):
    """Raised when configuration parsing or validation fails."""
    pass


class ConfigFileError(ConfigurationError):
    """Raised when the configuration file is missing or unreadable."""
    pass


class MalformedConfigError(ConfigurationError):
    """Raised when the document cannot be parsed or its root is not an object."""
    pass


class MissingSearchObjectsError(ConfigurationError):
    """Raised when the document has no 'searchObjects' list."""
    pass


class NoValidSearchObjectsError(ConfigurationError):
    """Raised when no search object survived validation."""
    pass


class InvalidRootPathError(ConfigurationError):
    """Raised when an explicit root path entry is malformed."""
    pass


class InvalidSearchObjectError(ConfigurationError):
    """Raised in strict mode when a search object would have been skipped."""
    pass


def compile_target_name(target_name: str, is_regex: bool = False) -> re.Pattern:
    """
    Compile a configured target name.

    Literal names are escaped and anchored so that they only match an entry
    with exactly that name.

    Raises:
        re.error: If a regex target name is invalid
    """
    if is_regex:
        return re.compile(target_name)
    return re.compile(f"^{re.escape(target_name)}$")


def _as_integer(value: Any) -> Optional[int]:
    """Return value as an int if it is an integral number, None otherwise."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


class ConfigParser:
    """
    Search configuration parser with validation and error handling.

    This class reads configuration documents, validates every search object
    and root path, resolves path markers and builds a SearchSpecification.
    Invalid search objects are skipped with a warning; invalid root path
    entries abort the whole parse. In strict mode every skipped or ignored
    entry is an error.
    """

    def __init__(self, strict_mode: bool = False, locations: Optional[PlatformLocations] = None):
        """
        Initialize the configuration parser.

        Args:
            strict_mode: If True, fail on any malformed entry instead of skipping it
            locations: Platform locations used to resolve path markers
        """
        self.strict_mode = strict_mode
        self.resolver = PathMarkerResolver(locations)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def load_config(self, config_path: Union[str, Path]) -> ConfigParseResult:
        """
        Load and parse a configuration file.

        Args:
            config_path: Path to the configuration file

        Returns:
            ConfigParseResult containing the specification and warnings

        Raises:
            ConfigurationError: If the file cannot be read or is invalid
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigFileError(f"Configuration file not found: {config_path}")

        try:
            document = config_path.read_bytes()
        except OSError as e:
            raise ConfigFileError(f"Cannot read configuration file {config_path}: {e}") from e

        result = self.parse(document)
        result.config_path = config_path

        self.logger.info(
            f"Configuration loaded from {config_path}: "
            f"{len(result.specification.search_objects)} search objects, {len(result.warnings)} warnings"
        )
        return result

    def parse(self, document: Union[bytes, str]) -> ConfigParseResult:
        """
        Parse a configuration document.

        Args:
            document: Raw JSON or YAML content

        Returns:
            ConfigParseResult containing the specification and warnings

        Raises:
            ConfigurationError: If the document is invalid
        """
        try:
            data = self._load_document(document)
            return self._parse_config_data(data)

        except Exception as e:
            if isinstance(e, ConfigurationError):
                raise
            else:
                raise ConfigurationError(f"Failed to load configuration: {e}") from e

    def _load_document(self, document: Union[bytes, str]) -> Dict[str, Any]:
        """
        Decode a document into a dictionary.

        Documents starting with '{' or '[' are read as JSON, anything else as YAML.

        Raises:
            MalformedConfigError: If the document cannot be parsed or is not an object
        """
        if isinstance(document, bytes):
            try:
                document = document.decode('utf-8-sig')
            except UnicodeDecodeError as e:
                raise MalformedConfigError(f"Configuration is not valid UTF-8: {e}") from e

        if document.lstrip().startswith(('{', '[')):
            try:
                data = json.loads(document)
            except json.JSONDecodeError as e:
                raise MalformedConfigError(f"Invalid configuration syntax: {e}") from e
        else:
            try:
                data = yaml.safe_load(document)
            except yaml.YAMLError as e:
                raise MalformedConfigError(f"Invalid configuration syntax: {e}") from e

        if not isinstance(data, dict):
            raise MalformedConfigError(f"Configuration must contain an object, got {type(data).__name__}")

        return data

    def _parse_config_data(self, data: Dict[str, Any]) -> ConfigParseResult:
        search_objects_data = data.get('searchObjects')
        if not isinstance(search_objects_data, list):
            raise MissingSearchObjectsError("Configuration must contain a 'searchObjects' list")

        warnings: List[str] = []

        target_folder = None
        if 'targetFolder' in data:
            raw_folder = data['targetFolder']
            if isinstance(raw_folder, str):
                target_folder = self.resolver.resolve(raw_folder) or None
            else:
                self._warn(warnings, "'targetFolder' must be a string, ignoring it")

        search_objects = []
        for index, item in enumerate(search_objects_data):
            search_object = self._parse_search_object(f"searchObjects[{index}]", item, warnings)
            if search_object is not None:
                search_objects.append(search_object)

        if not search_objects:
            raise NoValidSearchObjectsError("Configuration does not contain any valid search object")

        specification = SearchSpecification(target_folder=target_folder, search_objects=search_objects)
        return ConfigParseResult(specification=specification, warnings=warnings)

    def _parse_search_object(self, label: str, item: Any, warnings: List[str]) -> Optional[SearchObject]:
        """
        Validate one element of 'searchObjects'.

        Returns:
            The SearchObject, or None if the element was skipped

        Raises:
            InvalidRootPathError: If one of its root path entries is malformed
        """
        if not isinstance(item, dict):
            return self._skip(warnings, f"{label} is not an object")

        target_name = item.get('targetName')
        link_name = item.get('linkName')
        root_paths_data = item.get('rootPaths')

        if not isinstance(target_name, str):
            return self._skip(warnings, f"{label} requires a string 'targetName'")
        if not isinstance(link_name, str):
            return self._skip(warnings, f"{label} requires a string 'linkName'")
        if not isinstance(root_paths_data, list):
            return self._skip(warnings, f"{label} requires a 'rootPaths' list")

        recursion_level = self._parse_object_recursion_level(label, item, warnings)

        is_regex = item.get('isRegex', False)
        if not isinstance(is_regex, bool):
            self._warn(warnings, f"{label}.isRegex must be a boolean, using false")
            is_regex = False

        # Root path errors abort the parse, so they are checked before anything that only skips
        root_paths = [
            self._parse_root_path(f"{label}.rootPaths[{index}]", entry, recursion_level)
            for index, entry in enumerate(root_paths_data)
        ]
        if not root_paths:
            return self._skip(warnings, f"{label} has no root paths")

        try:
            pattern = compile_target_name(target_name, is_regex)
        except re.error as e:
            return self._skip(warnings, f"{label} has an invalid 'targetName' regex {target_name!r}: {e}")

        try:
            return SearchObject(
                target_name=pattern,
                link_name=link_name,
                is_regex=is_regex,
                recursion_level=recursion_level,
                root_paths=root_paths
            )
        except ValidationError as e:
            return self._skip(warnings, f"{label} is invalid: {e}")

    def _parse_object_recursion_level(self, label: str, item: Dict[str, Any], warnings: List[str]) -> int:
        """Get the object-level recursion level, falling back to the default."""
        if 'recursionLevel' not in item:
            return DEFAULT_RECURSION_LEVEL

        value = item['recursionLevel']
        level = _as_integer(value)
        if level is None or level < UNBOUNDED_RECURSION:
            self._warn(
                warnings,
                f"{label}.recursionLevel {value!r} is not a valid level, using {DEFAULT_RECURSION_LEVEL}"
            )
            return DEFAULT_RECURSION_LEVEL
        return level

    def _parse_root_path(self, label: str, entry: Any, default_level: int) -> RootPath:
        """
        Validate one element of 'rootPaths'.

        A string entry inherits the object's recursion level and has no
        filters. An object entry may override both.

        Raises:
            InvalidRootPathError: If the entry is malformed
        """
        if isinstance(entry, str):
            return RootPath(root_path=self.resolver.resolve(entry), recursion_level=default_level)

        if not isinstance(entry, dict):
            raise InvalidRootPathError(f"{label} must be a string or an object")

        root_path = entry.get('rootPath')
        if not isinstance(root_path, str):
            raise InvalidRootPathError(f"{label} requires a string 'rootPath'")

        level = default_level
        if 'recursionLevel' in entry:
            level = _as_integer(entry['recursionLevel'])
            if level is None:
                raise InvalidRootPathError(f"{label}.recursionLevel must be an integer, got {entry['recursionLevel']!r}")
            if level < UNBOUNDED_RECURSION:
                raise InvalidRootPathError(f"{label}.recursionLevel must be >= {UNBOUNDED_RECURSION}, got {level}")

        filters = []
        if 'filters' in entry:
            filters_data = entry['filters']
            if not isinstance(filters_data, list):
                raise InvalidRootPathError(f"{label}.filters must be a list")
            if filters_data and level == UNBOUNDED_RECURSION:
                raise InvalidRootPathError(f"{label}.filters cannot be used with an unbounded recursion level")
            if filters_data and len(filters_data) != level:
                raise InvalidRootPathError(
                    f"{label}.filters must be empty or contain {level} filters, got {len(filters_data)}"
                )
            for filter_value in filters_data:
                if not isinstance(filter_value, str):
                    raise InvalidRootPathError(f"{label}.filters must only contain strings")
                try:
                    filters.append(re.compile(filter_value))
                except re.error as e:
                    raise InvalidRootPathError(f"{label}.filters has an invalid regex {filter_value!r}: {e}") from e

        try:
            return RootPath(root_path=self.resolver.resolve(root_path), recursion_level=level, filters=filters)
        except ValidationError as e:
            raise InvalidRootPathError(f"{label} is invalid: {e}") from e

    def _warn(self, warnings: List[str], message: str) -> None:
        """Record a warning, or fail in strict mode."""
        if self.strict_mode:
            raise InvalidSearchObjectError(message)
        self.logger.warning(message)
        warnings.append(message)

    def _skip(self, warnings: List[str], message: str) -> None:
        """Record a skipped search object, or fail in strict mode."""
        self._warn(warnings, f"Skipping {message}")
        return None

    def validate_config_file(self, config_path: Union[str, Path]) -> List[str]:
        """
        Validate a configuration file without keeping the specification.

        Args:
            config_path: Path to configuration file

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        try:
            self.load_config(config_path)
        except ConfigurationError as e:
            errors.append(str(e))

        return errors

    def get_config_template(self) -> str:
        """
        Get a template configuration file showing every option.

        Returns:
            JSON template as string
        """
        template_config = {
            'targetFolder': '<Home>/Shortcuts',
            'searchObjects': [
                {
                    'targetName': 'notepad++.exe',
                    'linkName': 'Notepad++',
                    'rootPaths': ['<ProgramFiles>', '<ProgramFilesX86>']
                },
                {
                    'targetName': r'^python3?(\.exe)?$',
                    'linkName': 'Python',
                    'isRegex': True,
                    'recursionLevel': 2,
                    'rootPaths': [
                        '<AppDataLocal>/Programs',
                        {
                            'rootPath': '/usr',
                            'recursionLevel': 1,
                            'filters': ['^bin$']
                        }
                    ]
                }
            ]
        }

        return json.dumps(template_config, indent=4) + "\n"


def load_specification(config_path: Union[str, Path],
                       strict_mode: bool = False,
                       locations: Optional[PlatformLocations] = None) -> ConfigParseResult:
    """
    Convenience function to load a search configuration file.

    Args:
        config_path: Path to configuration file
        strict_mode: Whether to fail on any malformed entry
        locations: Platform locations used to resolve path markers

    Returns:
        ConfigParseResult containing the parsed specification

    Raises:
        ConfigurationError: If configuration is invalid
    """
    parser = ConfigParser(strict_mode=strict_mode, locations=locations)
    return parser.load_config(config_path)


def parse_specification(document: Union[bytes, str],
                        strict_mode: bool = False,
                        locations: Optional[PlatformLocations] = None) -> ConfigParseResult:
    """
    Convenience function to parse a search configuration document.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    parser = ConfigParser(strict_mode=strict_mode, locations=locations)
    return parser.parse(document)


def validate_config_file(config_path: Union[str, Path], strict_mode: bool = False) -> List[str]:
    """
    Convenience function to validate a configuration file.

    Args:
        config_path: Path to configuration file
        strict_mode: Whether to fail on any malformed entry

    Returns:
        List of validation errors (empty if valid)
    """
    parser = ConfigParser(strict_mode=strict_mode)
    return parser.validate_config_file(config_path)


def create_config_template(output_path: Union[str, Path]) -> None:
    """
    Create a template configuration file.

    Args:
        output_path: Where to save the template

    Raises:
        ConfigurationError: If template cannot be created
    """
    parser = ConfigParser()
    template_content = parser.get_config_template()

    try:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(template_content)

    except OSError as e:
        raise ConfigurationError(f"Cannot create template file {output_path}: {e}") from e
