"""Loading raw XML contents into element trees."""

from __future__ import annotations

import copy
import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Optional

from .exceptions import LoadError
from .loader import ensure_loadable
from .options import XmlOptions
from .report import ReportBuilder


logger = logging.getLogger(__name__)

FORMAT_NAME = "XML"
LOAD_METHOD_NAME = "load_xml"


def split_name(tag: str) -> tuple[str, str]:
    """Split an ElementTree '{uri}local' name into its namespace and local name."""
    if tag.startswith("{"):
        namespace, _, local_name = tag[1:].partition("}")
        return namespace, local_name
    return "", tag


@dataclass(frozen=True)
class XmlAttribute:
    namespace: str
    local_name: str
    value: str


@dataclass(frozen=True)
class XmlNode:
    """
    An XML element with its namespace-qualified name, attributes in
    document order, child elements in document order and its text.

    Prefixes are resolved while loading, so two elements whose prefixes
    differ but that map to the same namespace are equal.
    """
    namespace: str
    local_name: str
    attributes: tuple[XmlAttribute, ...] = ()
    children: tuple[XmlNode, ...] = ()
    text: Optional[str] = None
    element: Optional[ET.Element] = field(default=None, compare=False, repr=False)

    @property
    def qualified_name(self) -> str:
        return f"{{{self.namespace}}}{self.local_name}" if self.namespace else self.local_name

    def render(self) -> str:
        """Render the element and its descendants as indented XML."""
        if self.element is None:
            return f"<{self.qualified_name}/>"

        element = copy.deepcopy(self.element)
        element.tail = None
        ET.indent(element)
        return ET.tostring(element, encoding="unicode")

    def __str__(self) -> str:
        return self.render()


def load_xml(text: str, options: Optional[XmlOptions] = None) -> XmlNode:
    """
    Load raw XML contents into an element tree.

    Args:
        text: The raw XML contents
        options: Options controlling the maximum input characters

    Returns:
        The root element of the loaded document

    Raises:
        LoadError: When the contents are blank, too large, or not well-formed XML
    """
    options = options or XmlOptions()
    ensure_loadable(text, options, FORMAT_NAME, LOAD_METHOD_NAME)

    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise LoadError(FORMAT_NAME, ReportBuilder.for_method(
            LOAD_METHOD_NAME, f"cannot correctly load the XML contents due to a deserialization failure: {e}")
            .append_input(text)
            .build()) from e

    logger.debug("Loaded XML contents of %d characters", len(text))
    return _to_node(root)


def _to_node(element: ET.Element) -> XmlNode:
    namespace, local_name = split_name(element.tag)

    attributes = []
    for key, value in element.attrib.items():
        attribute_namespace, attribute_name = split_name(key)
        attributes.append(XmlAttribute(attribute_namespace, attribute_name, value))

    # Text directly under this element, whitespace-only segments dropped
    segments = [element.text] + [child.tail for child in element]
    text = "".join(segment for segment in segments if segment and segment.strip())

    return XmlNode(
        namespace=namespace,
        local_name=local_name,
        attributes=tuple(attributes),
        children=tuple(_to_node(child) for child in element),
        text=text or None,
        element=element
    )
