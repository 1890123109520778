"""
Wrappers around an external XSLT transform.

docassert ships no XSLT engine. A transform is any callable taking the
stylesheet, the serialized XML input and the run-time arguments, and
returning the serialized output::

    def transform(stylesheet: str, input_xml: str, arguments: Mapping[str, Any]) -> str: ...

The wrappers turn any failure of that callable into a
``TransformationFailure`` and load the output into the target format.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import Any, Callable, Mapping, Optional, Union

from .csv_loader import CsvTable, load_csv
from .exceptions import LoadError, TransformationFailure
from .json_loader import load_json
from .options import CsvOptions, JsonOptions, XmlOptions
from .report import ReportBuilder
from .values import ValueNode
from .xml_loader import XmlNode, load_xml


logger = logging.getLogger(__name__)

TRANSFORM_METHOD_NAME = "transform"
LOAD_METHOD_NAME = "load_stylesheet"

Transform = Callable[[str, str, Mapping[str, Any]], str]


def load_stylesheet(text: str) -> str:
    """
    Check that raw XSLT contents are well-formed XML.

    Returns:
        The stylesheet contents, unchanged

    Raises:
        LoadError: When the contents are not well-formed XML
    """
    try:
        ET.fromstring(text)
    except (ET.ParseError, TypeError) as e:
        raise LoadError("XSLT", ReportBuilder.for_method(
            LOAD_METHOD_NAME, f"cannot correctly load the XSLT contents due to a deserialization failure: {e}")
            .append_input(str(text))
            .build()) from e
    return text


def transform_to_xml(
    transform: Transform,
    stylesheet: str,
    input: Union[str, XmlNode],
    arguments: Optional[Mapping[str, Any]] = None,
    options: Optional[XmlOptions] = None
) -> XmlNode:
    """
    Transform an XML input to an XML document.

    Raises:
        TransformationFailure: When the transform fails or returns no text
        LoadError: When the output is not well-formed XML
    """
    output = _transform(transform, stylesheet, input, arguments, "XML")
    return load_xml(output, options)


def transform_to_json(
    transform: Transform,
    stylesheet: str,
    input: Union[str, XmlNode],
    arguments: Optional[Mapping[str, Any]] = None,
    options: Optional[JsonOptions] = None
) -> ValueNode:
    """
    Transform an XML input to a JSON document.

    Raises:
        TransformationFailure: When the transform fails or returns no text
        LoadError: When the output is not valid JSON
    """
    output = _transform(transform, stylesheet, input, arguments, "JSON")
    return load_json(output, options)


def transform_to_csv(
    transform: Transform,
    stylesheet: str,
    input: Union[str, XmlNode],
    arguments: Optional[Mapping[str, Any]] = None,
    options: Optional[CsvOptions] = None
) -> CsvTable:
    """
    Transform an XML input to a CSV table.

    Raises:
        TransformationFailure: When the transform fails or returns no text
        LoadError: When the output cannot be loaded as a CSV table
    """
    output = _transform(transform, stylesheet, input, arguments, "CSV")
    return load_csv(output, options)


def _transform(
    transform: Transform,
    stylesheet: str,
    input: Union[str, XmlNode],
    arguments: Optional[Mapping[str, Any]],
    format_name: str
) -> str:
    input_xml = _serialize(input)
    try:
        output = transform(stylesheet, input_xml, dict(arguments or {}))
    except Exception as e:
        raise TransformationFailure(format_name, ReportBuilder.for_method(
            TRANSFORM_METHOD_NAME,
            f"cannot correctly transform XML input to {format_name} due to a transformation failure: {e}")
            .append_input(input_xml)
            .build()) from e

    if not isinstance(output, str):
        raise TransformationFailure(format_name, ReportBuilder.for_method(
            TRANSFORM_METHOD_NAME,
            f"cannot correctly transform XML input to {format_name} due to a transformation failure: "
            f"the transform returned {type(output).__name__} instead of text")
            .append_input(input_xml)
            .build())

    logger.debug("Transformed XML input of %d characters to %s output of %d characters",
                 len(input_xml), format_name, len(output))
    return output


def _serialize(input: Union[str, XmlNode]) -> str:
    if isinstance(input, XmlNode):
        if input.element is not None:
            return ET.tostring(input.element, encoding="unicode")
        return input.render()
    return input
