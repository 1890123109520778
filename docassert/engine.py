"""Comparison engine that enumerates every difference between two documents."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Union

from .csv_differ import CsvDiffer
from .csv_loader import CsvTable, load_csv
from .differ import Differ
from .exceptions import ConfigurationError, LoadError
from .json_differ import JsonDiffer
from .json_loader import load_json
from .models import ComparisonReport, ErrorResponse
from .options import CsvOptions, JsonOptions, XmlOptions
from .values import ValueNode
from .xml_differ import XmlDiffer
from .xml_loader import XmlNode, load_xml


logger = logging.getLogger(__name__)


class ComparisonEngine:
    """
    Compares documents and reports all of their differences instead of
    raising on the first one.

    Every comparison ends in exactly one of two outcomes: a
    ``ComparisonReport`` (matching or not), or an ``ErrorResponse`` when the
    documents could not be loaded or the options cannot be applied to them.

    Usage:
        engine = ComparisonEngine()
        report = engine.compare_json('{"a": 1}', '{"a": 2}')
        if not report.is_match:
            print(report.first)
    """

    def __init__(self, fail_fast: bool = False):
        """
        Initialize the engine.

        Args:
            fail_fast: Stop each comparison after its first difference
        """
        self.fail_fast = fail_fast

    def compare_json(
        self,
        expected: Union[str, ValueNode],
        actual: Union[str, ValueNode],
        options: Optional[JsonOptions] = None,
        contains: bool = False
    ) -> ComparisonReport | ErrorResponse:
        """
        Compare two JSON documents.

        Args:
            expected: The raw expected JSON contents, or an already loaded document
            actual: The raw actual JSON contents, or an already loaded document
            options: JSON comparison options (uses defaults if not provided)
            contains: Only require the expected properties to be present in actual

        Returns:
            ComparisonReport on success, ErrorResponse on load or configuration errors
        """
        options = options or JsonOptions()

        def load(contents):
            return contents if isinstance(contents, ValueNode) else load_json(contents, options)

        differ = JsonDiffer(options, fail_fast=self.fail_fast, contains=contains, method_name="compare_json")
        return self._compare("JSON", load, differ, expected, actual)

    def compare_xml(
        self,
        expected: Union[str, XmlNode],
        actual: Union[str, XmlNode],
        options: Optional[XmlOptions] = None
    ) -> ComparisonReport | ErrorResponse:
        """Compare two XML documents."""
        options = options or XmlOptions()

        def load(contents):
            return contents if isinstance(contents, XmlNode) else load_xml(contents, options)

        differ = XmlDiffer(options, fail_fast=self.fail_fast, method_name="compare_xml")
        return self._compare("XML", load, differ, expected, actual)

    def compare_csv(
        self,
        expected: Union[str, CsvTable],
        actual: Union[str, CsvTable],
        options: Optional[CsvOptions] = None
    ) -> ComparisonReport | ErrorResponse:
        """Compare two CSV tables; blank raw contents load as empty tables."""
        options = options or CsvOptions()

        def load(contents):
            return contents if isinstance(contents, CsvTable) else load_csv(contents, options)

        differ = CsvDiffer(options, fail_fast=self.fail_fast, method_name="compare_csv")
        return self._compare("CSV", load, differ, expected, actual)

    def _compare(
        self,
        format_name: str,
        load: Callable[[Any], Any],
        differ: Differ,
        expected: Any,
        actual: Any
    ) -> ComparisonReport | ErrorResponse:
        try:
            expected_doc = load(expected)
            actual_doc = load(actual)

            logger.debug("Comparing %s documents (fail_fast=%s)", format_name, self.fail_fast)
            is_match = differ.compare(expected_doc, actual_doc)
            logger.debug("Compared %s documents: %d difference(s)", format_name, len(differ.diffs))

            return ComparisonReport(
                format_name=format_name,
                is_match=is_match and len(differ.diffs) == 0,
                differences=differ.diffs
            )

        except LoadError as e:
            return self._create_error_response(
                "LOAD_ERROR",
                e.message,
                {"format": e.format_name}
            )
        except ConfigurationError as e:
            return self._create_error_response(
                "CONFIGURATION_ERROR",
                e.message,
                {"format": format_name, "option": e.option}
            )

    def _create_error_response(self, code: str, message: str, details: dict) -> ErrorResponse:
        """Create an error response."""
        logger.debug("Comparison ended with %s: %s", code, message)
        return ErrorResponse(
            success=False,
            error={
                "code": code,
                "message": message,
                "details": details
            }
        )
