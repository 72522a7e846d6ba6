"""
Search coordination for Visiofinder.

Runs the recursive matcher over the root paths of every search object and
collects the first match of each object into a search report.
"""

import time
import logging
from typing import Optional

from ..models.search_spec import SearchObject, SearchSpecification
from ..models.search_results import SearchReport, SearchResult
from .recursive_matcher import RecursiveMatcher


logger = logging.getLogger(__name__)


class SearchCoordinator:
    """
    Searches every target of a specification.

    Root paths are tried in declared order and the first one yielding a match
    wins; later root paths of that object are not searched.
    """

    def __init__(self, matcher: Optional[RecursiveMatcher] = None):
        self.matcher = matcher if matcher is not None else RecursiveMatcher()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def run(self, spec: SearchSpecification) -> SearchReport:
        """
        Search every object of a specification.

        Args:
            spec: Validated search specification

        Returns:
            SearchReport with one result per search object, in declared order
        """
        start_time = time.perf_counter()
        report = SearchReport()

        for search_object in spec.search_objects:
            report.add_result(self.search_object(search_object))

        report.execution_time = time.perf_counter() - start_time
        self.logger.info(f"Search finished: {report}")
        return report

    def search_object(self, search_object: SearchObject) -> SearchResult:
        """
        Search a single object through its root paths.

        Args:
            search_object: The object to search for

        Returns:
            SearchResult holding the first match, or no path
        """
        for root in search_object.root_paths:
            path = self.matcher.find_in_root(search_object.target_name, root)
            if path:
                self.logger.info(f"Found {search_object.link_name} at {path}")
                return SearchResult(search_object=search_object, path=path, root_path=root)
            self.logger.debug(f"{search_object.link_name} not found in {root.root_path}")

        self.logger.warning(f"Target {search_object.link_name} not found in any root path")
        return SearchResult(search_object=search_object)


def run_search(spec: SearchSpecification) -> SearchReport:
    """
    Convenience function to search every target of a specification.

    Args:
        spec: Validated search specification

    Returns:
        SearchReport with one result per search object
    """
    return SearchCoordinator().run(spec)
