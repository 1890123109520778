"""JSONPath utilities for docassert."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from jsonpath_ng import parse as jsonpath_parse
from jsonpath_ng.exceptions import JsonPathLexerError, JsonPathParserError
from jsonpath_ng.jsonpath import Child, Fields, Index

from .exceptions import ConfigurationError


# Cache for compiled JSONPath expressions
@lru_cache(maxsize=256)
def _compile_path(path: str):
    """Compile and cache a JSONPath expression."""
    return jsonpath_parse(path)


class JSONPathMatcher:
    """Utility class for compiling JSONPath expressions and locating their matches."""

    @classmethod
    def compile(cls, path: str):
        """Compile a JSONPath expression, raising a configuration error when it is invalid."""
        try:
            return _compile_path(path)
        except (JsonPathLexerError, JsonPathParserError) as e:
            raise ConfigurationError(f"Invalid JSONPath expression '{path}': {e}", option="ignored_paths")

    @classmethod
    def find_segments(cls, data: Any, path: str) -> list[tuple]:
        """
        Find all concrete locations matching a JSONPath expression.

        Args:
            data: Plain dict/list data to evaluate the expression against
            path: The JSONPath expression

        Returns:
            List of segment tuples, property names as ``str`` and array indexes as ``int``
        """
        expr = cls.compile(path)
        return [_segments(match.full_path) for match in expr.find(data)]


def _segments(path) -> tuple:
    """Flatten a concrete jsonpath-ng path into its field names and indexes."""
    if isinstance(path, Child):
        return _segments(path.left) + _segments(path.right)
    if isinstance(path, Fields):
        return tuple(path.fields)
    if isinstance(path, Index):
        indices = getattr(path, "indices", None)
        return tuple(indices) if indices else (path.index,)
    # Root and This do not add a segment
    return ()
