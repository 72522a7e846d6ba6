"""
Unit tests for search specification and result data models.

Tests the RootPath, SearchObject, SearchSpecification, SearchReport and
ShortcutReport classes to ensure proper validation and functionality.
"""

import re

import pytest
from pydantic import ValidationError

from visiofinder.config.parser import compile_target_name
from visiofinder.models.search_spec import RootPath, SearchObject, SearchSpecification
from visiofinder.models.search_results import (
    SearchResult, SearchReport, ShortcutResult, ShortcutReport
)


def make_object(link_name: str = "Notes", **fields) -> SearchObject:
    data = {
        'target_name': compile_target_name("notes.txt"),
        'link_name': link_name,
        'root_paths': [RootPath(root_path="/data")],
    }
    data.update(fields)
    return SearchObject(**data)


class TestRootPath:
    """Test cases for RootPath class."""

    def test_defaults(self):
        root = RootPath(root_path="/data")

        assert root.recursion_level == 1
        assert root.filters == []
        assert root.is_unbounded() is False

    def test_string_filters_are_compiled(self):
        root = RootPath(root_path="/data", recursion_level=2, filters=["^a$", "^b$"])

        assert all(isinstance(f, re.Pattern) for f in root.filters)
        assert root.filters[1].search("b")

    def test_filter_count_must_match_level(self):
        """Test filters must be empty or one per level."""
        with pytest.raises(ValidationError, match="Expected 2 filters"):
            RootPath(root_path="/data", recursion_level=2, filters=["^a$"])

    def test_unbounded_with_filters(self):
        with pytest.raises(ValidationError, match="unbounded"):
            RootPath(root_path="/data", recursion_level=-1, filters=["^a$"])

    def test_unbounded(self):
        assert RootPath(root_path="/data", recursion_level=-1).is_unbounded()

    def test_level_below_unbounded(self):
        with pytest.raises(ValidationError):
            RootPath(root_path="/data", recursion_level=-2)

    def test_frozen(self):
        root = RootPath(root_path="/data")

        with pytest.raises(ValidationError):
            root.root_path = "/other"

    def test_to_dict(self):
        root = RootPath(root_path="/data", recursion_level=1, filters=["^bin$"])

        assert root.to_dict() == {'rootPath': '/data', 'recursionLevel': 1, 'filters': ['^bin$']}


class TestSearchObject:
    """Test cases for SearchObject class."""

    def test_basic_creation(self):
        search_object = make_object()

        assert search_object.link_name == "Notes"
        assert search_object.is_regex is False
        assert search_object.recursion_level == 1
        assert search_object.matches("notes.txt")
        assert not search_object.matches("old-notes.txt")

    def test_requires_root_paths(self):
        """Test a search object cannot exist without root paths."""
        with pytest.raises(ValidationError):
            make_object(root_paths=[])

    @pytest.mark.parametrize("link_name", ["", "sub/Notes"])
    def test_link_name_is_kept_as_given(self, link_name):
        """Test link names are only checked when the shortcut is written."""
        assert make_object(link_name=link_name).link_name == link_name

    def test_to_dict(self):
        data = make_object().to_dict()

        assert data['targetName'] == "^notes\\.txt$"
        assert data['linkName'] == "Notes"
        assert data['rootPaths'] == [{'rootPath': '/data', 'recursionLevel': 1, 'filters': []}]

    def test_str(self):
        assert str(make_object()) == "Notes (^notes\\.txt$, 1 root paths)"


class TestSearchSpecification:
    """Test cases for SearchSpecification class."""

    def test_requires_search_objects(self):
        with pytest.raises(ValidationError):
            SearchSpecification(search_objects=[])

    def test_target_folder(self):
        spec = SearchSpecification(target_folder="/links", search_objects=[make_object()])

        assert spec.has_target_folder()
        assert spec.to_dict()['targetFolder'] == "/links"

    def test_without_target_folder(self):
        spec = SearchSpecification(search_objects=[make_object()])

        assert not spec.has_target_folder()
        assert 'targetFolder' not in spec.to_dict()

    def test_get_search_object(self):
        spec = SearchSpecification(search_objects=[make_object("A"), make_object("B")])

        assert spec.get_search_object("B").link_name == "B"
        assert spec.get_search_object("C") is None


class TestSearchReport:
    """Test cases for SearchResult and SearchReport classes."""

    def setup_method(self):
        self.found = SearchResult(
            search_object=make_object("Found"),
            path="/data/notes.txt",
            root_path=RootPath(root_path="/data")
        )
        self.missing = SearchResult(search_object=make_object("Missing"))
        self.report = SearchReport(results=[self.found, self.missing], execution_time=0.5)

    def test_result_found(self):
        assert self.found.found is True
        assert self.missing.found is False
        assert str(self.found) == "Found: /data/notes.txt"
        assert str(self.missing) == "Missing: not found"

    def test_get(self):
        assert self.report.get("Found") is self.found
        assert self.report.get("Other") is None
        assert self.report.get_path("Found") == "/data/notes.txt"
        assert self.report.get_path("Missing") is None

    def test_found_and_missing(self):
        assert self.report.found() == [self.found]
        assert self.report.missing() == [self.missing]

    def test_add_result(self):
        report = SearchReport()
        report.add_result(self.found)

        assert report.results == [self.found]

    def test_to_dict(self):
        data = self.report.to_dict()

        assert data['found_count'] == 1
        assert data['missing_count'] == 1
        assert data['results'][0]['rootPath'] == "/data"
        assert data['results'][1]['path'] is None

    def test_str(self):
        assert str(self.report) == "Found 1/2 targets | Took 0.50s"


class TestShortcutReport:
    """Test cases for ShortcutResult and ShortcutReport classes."""

    def test_add_shortcut_records_errors(self):
        report = ShortcutReport(target_folder="/links")
        report.add_shortcut(ShortcutResult(
            link_name="A", target="/a", link_path="/links/A.lnk", created=True
        ))
        report.add_shortcut(ShortcutResult(
            link_name="B", target="/b", link_path="/links/B.lnk", error="Shortcut already exists"
        ))

        assert report.has_errors()
        assert report.errors == ["Shortcut already exists"]
        assert [s.link_name for s in report.created()] == ["A"]
        assert str(report) == "Created 1 shortcuts | Errors: 1"

    def test_empty_report(self):
        report = ShortcutReport()

        assert not report.has_errors()
        assert report.to_dict()['created_count'] == 0
        assert str(report) == "Created 0 shortcuts"

    def test_link_filename(self):
        result = ShortcutResult(link_name="A", target="/a", link_path="/links/A.lnk")

        assert result.get_link_filename() == "A.lnk"
