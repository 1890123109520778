"""
docassert - Structural equivalence assertions for JSON, XML and CSV

Loads raw documents into format-specific trees, compares them while
honoring per-format order and ignore options, and reports the first
difference in a humanly-readable failure report.
"""

from .assertions import (
    assert_csv_equal,
    assert_json_contains,
    assert_json_equal,
    assert_xml_equal,
)
from .config import load_options, options_from_dict
from .csv_loader import CsvCell, CsvRow, CsvTable, load_csv
from .engine import ComparisonEngine
from .exceptions import (
    AssertionFailure,
    ConfigurationError,
    DocAssertError,
    LoadError,
    TransformationFailure,
)
from .json_loader import load_json
from .models import (
    ComparisonReport,
    Difference,
    DifferenceKind,
    ErrorResponse,
    Header,
    Order,
    ReportFormat,
    ReportScope,
)
from .options import CsvOptions, JsonOptions, XmlOptions
from .values import ValueKind, ValueNode
from .xml_loader import XmlAttribute, XmlNode, load_xml
from .xslt import load_stylesheet, transform_to_csv, transform_to_json, transform_to_xml

__version__ = "1.0.0"
__all__ = [
    # Assertions
    "assert_json_equal",
    "assert_json_contains",
    "assert_xml_equal",
    "assert_csv_equal",
    # Loading
    "load_json",
    "load_xml",
    "load_csv",
    "ValueNode",
    "ValueKind",
    "XmlNode",
    "XmlAttribute",
    "CsvTable",
    "CsvRow",
    "CsvCell",
    # Options
    "JsonOptions",
    "XmlOptions",
    "CsvOptions",
    "Order",
    "Header",
    "ReportFormat",
    "ReportScope",
    "load_options",
    "options_from_dict",
    # Engine
    "ComparisonEngine",
    "ComparisonReport",
    "ErrorResponse",
    "Difference",
    "DifferenceKind",
    # Transforms
    "load_stylesheet",
    "transform_to_xml",
    "transform_to_json",
    "transform_to_csv",
    # Errors
    "DocAssertError",
    "LoadError",
    "AssertionFailure",
    "ConfigurationError",
    "TransformationFailure",
]
