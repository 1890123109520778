"""Test assertions on the structural equivalence of JSON, XML and CSV documents."""

from __future__ import annotations

import logging
from typing import Optional, Union

from .csv_differ import CsvDiffer
from .csv_loader import CsvTable, load_csv
from .exceptions import AssertionFailure, LoadError
from .json_differ import JsonDiffer
from .json_loader import load_json
from .options import CsvOptions, JsonOptions, XmlOptions
from .report import ReportBuilder, format_report
from .utils import is_blank
from .values import ValueNode
from .xml_differ import XmlDiffer
from .xml_loader import XmlNode, load_xml


logger = logging.getLogger(__name__)

JSON_EQUAL_METHOD_NAME = "assert_json_equal"
JSON_CONTAINS_METHOD_NAME = "assert_json_contains"
XML_EQUAL_METHOD_NAME = "assert_xml_equal"
CSV_EQUAL_METHOD_NAME = "assert_csv_equal"


def assert_json_equal(
    expected: Union[str, ValueNode],
    actual: Union[str, ValueNode],
    options: Optional[JsonOptions] = None
):
    """
    Assert that two JSON documents are structurally equivalent.

    Args:
        expected: The raw expected JSON contents, or an already loaded document
        actual: The raw actual JSON contents, or an already loaded document
        options: Options controlling array order, ignored nodes and the report

    Raises:
        AssertionFailure: When the documents are not equivalent
        LoadError: When either raw contents cannot be loaded
    """
    _assert_json(expected, actual, options, JSON_EQUAL_METHOD_NAME, contains=False)


def assert_json_contains(
    expected: Union[str, ValueNode],
    actual: Union[str, ValueNode],
    options: Optional[JsonOptions] = None
):
    """
    Assert that the actual JSON document contains the expected one.

    The actual objects may have additional properties; everything present in
    the expected document must be present and equivalent in the actual one.
    """
    _assert_json(expected, actual, options, JSON_CONTAINS_METHOD_NAME, contains=True)


def _assert_json(expected, actual, options: Optional[JsonOptions], method_name: str, contains: bool):
    options = options or JsonOptions()
    expected_doc = expected if isinstance(expected, ValueNode) else load_json(expected, options)
    actual_doc = actual if isinstance(actual, ValueNode) else load_json(actual, options)

    differ = JsonDiffer(options, fail_fast=True, contains=contains, method_name=method_name)
    if differ.compare(expected_doc, actual_doc):
        return

    general_message = (
        "expected JSON contents are not contained in actual JSON contents"
        if contains else "expected and actual JSON contents do not match"
    )
    _fail(method_name, general_message, differ.first,
          expected_doc.render(), actual_doc.render(), options, options.describe())


def assert_xml_equal(
    expected: Union[str, XmlNode],
    actual: Union[str, XmlNode],
    options: Optional[XmlOptions] = None
):
    """
    Assert that two XML documents are structurally equivalent.

    Raises:
        AssertionFailure: When the documents are not equivalent
        LoadError: When either raw contents cannot be loaded
        ConfigurationError: When the root element is one of the ignored nodes
    """
    options = options or XmlOptions()
    expected_doc = expected if isinstance(expected, XmlNode) else load_xml(expected, options)
    actual_doc = actual if isinstance(actual, XmlNode) else load_xml(actual, options)

    differ = XmlDiffer(options, fail_fast=True, method_name=XML_EQUAL_METHOD_NAME)
    if differ.compare(expected_doc, actual_doc):
        return

    _fail(XML_EQUAL_METHOD_NAME, "expected and actual XML documents do not match", differ.first,
          expected_doc.render(), actual_doc.render(), options, options.describe())


def assert_csv_equal(
    expected: Union[str, CsvTable],
    actual: Union[str, CsvTable],
    options: Optional[CsvOptions] = None
):
    """
    Assert that two CSV tables are structurally equivalent.

    Raw contents must not be blank; load them with ``load_csv`` first to
    compare empty tables.

    Raises:
        AssertionFailure: When the tables are not equivalent
        LoadError: When either raw contents are blank or cannot be loaded
        ConfigurationError: When the ignored columns make the comparison ambiguous
    """
    options = options or CsvOptions()
    expected_table = _as_csv_table(expected, options, "expected")
    actual_table = _as_csv_table(actual, options, "actual")

    differ = CsvDiffer(options, fail_fast=True, method_name=CSV_EQUAL_METHOD_NAME)
    if differ.compare(expected_table, actual_table):
        return

    _fail(CSV_EQUAL_METHOD_NAME, "expected and actual CSV contents do not match", differ.first,
          expected_table.render(), actual_table.render(), options, options.describe())


def _as_csv_table(contents: Union[str, CsvTable], options: CsvOptions, side: str) -> CsvTable:
    if isinstance(contents, CsvTable):
        return contents
    if isinstance(contents, str) and is_blank(contents):
        raise LoadError("CSV", ReportBuilder.for_method(
            CSV_EQUAL_METHOD_NAME, f"cannot compare the {side} CSV contents as they are blank").build())
    return load_csv(contents, options, allow_blank=False)


def _fail(method_name, general_message, difference, expected_document, actual_document, options, description):
    report = format_report(
        method_name,
        general_message,
        difference,
        expected_document,
        actual_document,
        options,
        description
    )
    logger.debug("%s found a difference: %s", method_name, difference)
    raise AssertionFailure(report, difference)
