"""Element-by-element comparison of XML documents."""

from __future__ import annotations

from collections import Counter
from typing import Optional

from .comparators import describe_text, scalars_equal
from .differ import Differ
from .exceptions import ConfigurationError
from .models import DifferenceKind, Order
from .options import XmlOptions
from .xml_loader import XmlNode


NO_NAMESPACE = "no namespace"


class XmlDiffer(Differ):
    """
    Compares two XML element trees.

    Per element the namespace, local name and text are checked first, then
    the attributes (by position, or by namespace and local name when their
    order is ignored) and finally the child elements by position.
    """

    def __init__(
        self,
        options: Optional[XmlOptions] = None,
        fail_fast: bool = False,
        method_name: str = "assert_xml_equal"
    ):
        super().__init__(fail_fast)
        self.options = options or XmlOptions()
        self.method_name = method_name

    def compare(self, expected: XmlNode, actual: XmlNode) -> bool:
        """
        Compare two documents from their root elements.

        Raises:
            ConfigurationError: When a root element is one of the ignored nodes
        """
        for root in (expected, actual):
            if root.local_name in self.options.ignored_nodes:
                raise ConfigurationError(
                    f"Cannot configure {self.method_name} options with node name: '{root.local_name}' "
                    f"as this is the root of the XML contents, "
                    f"which would mean that the entire document should be ignored for assertion",
                    option="ignored_nodes")

        return self.diff(expected, actual, f"/{expected.local_name}")

    def diff(self, expected: XmlNode, actual: XmlNode, path: str) -> bool:
        """
        Compare two elements and their descendants.

        Args:
            expected: The expected element
            actual: The actual element
            path: XPath-like location of the expected element

        Returns:
            True if the elements are equivalent, False otherwise
        """
        if self._aborted:
            return False

        if expected.namespace != actual.namespace:
            self._add_element_diff(
                expected, actual, path,
                kind=DifferenceKind.DIFFERENT_NAMESPACE,
                expected_value=_describe_namespace(expected.namespace),
                actual_value=_describe_namespace(actual.namespace),
                message="actual XML has a different namespace at {path}, expected {expected} while actual {actual}"
            )
            return False

        if expected.local_name != actual.local_name:
            self._add_element_diff(
                expected, actual, path,
                kind=DifferenceKind.DIFFERENT_NAME,
                expected_value=f"an element: <{expected.local_name}>",
                actual_value=f"an element: <{actual.local_name}>",
                message="actual XML has a different name at {path}, expected {expected} while actual {actual}"
            )
            return False

        all_match = True
        if not self._texts_equal(expected.text, actual.text):
            self._add_element_diff(
                expected, actual, f"{path}/text()",
                kind=DifferenceKind.DIFFERENT_VALUE,
                expected_value=self._describe_content(expected),
                actual_value=self._describe_content(actual),
                message="actual XML has a different value at {path}, expected {expected} while actual {actual}"
            )
            all_match = False
            if self._aborted:
                return False

        if not self._diff_attributes(expected, actual, path):
            all_match = False
            if self._aborted:
                return False

        if not self._diff_children(expected, actual, path):
            all_match = False

        return all_match and not self._aborted

    def _diff_attributes(self, expected: XmlNode, actual: XmlNode, path: str) -> bool:
        expected_attributes = self._included(expected.attributes)
        actual_attributes = self._included(actual.attributes)

        if len(expected_attributes) != len(actual_attributes):
            self._add_element_diff(
                expected, actual, path,
                kind=DifferenceKind.DIFFERENT_ATTRIBUTE_COUNT,
                expected_value=str(len(expected_attributes)),
                actual_value=str(len(actual_attributes)),
                message="has {actual} attribute(s) instead of {expected} at {path}"
            )
            return False

        all_match = True
        for index, expected_attribute in enumerate(expected_attributes):
            if self._aborted:
                return False

            attribute_path = f"{path}[@{expected_attribute.local_name}]"
            if self.options.order == Order.IGNORE:
                actual_attribute = next(
                    (a for a in actual_attributes
                     if a.local_name == expected_attribute.local_name
                     and a.namespace == expected_attribute.namespace),
                    None
                )
            else:
                actual_attribute = actual_attributes[index]

            if actual_attribute is None:
                self._add_element_diff(
                    expected, actual, attribute_path,
                    kind=DifferenceKind.MISSING_ATTRIBUTE,
                    expected_value=f"an attribute: {expected_attribute.local_name}",
                    actual_value="",
                    message="actual XML misses {expected} at {path}"
                )
                all_match = False
            elif expected_attribute.namespace != actual_attribute.namespace:
                self._add_element_diff(
                    expected, actual, attribute_path,
                    kind=DifferenceKind.DIFFERENT_NAMESPACE,
                    expected_value=_describe_namespace(expected_attribute.namespace),
                    actual_value=_describe_namespace(actual_attribute.namespace),
                    message="actual XML has a different namespace at {path}, expected {expected} while actual {actual}"
                )
                all_match = False
            elif expected_attribute.local_name != actual_attribute.local_name:
                self._add_element_diff(
                    expected, actual, attribute_path,
                    kind=DifferenceKind.DIFFERENT_NAME,
                    expected_value=f"an attribute: {expected_attribute.local_name}",
                    actual_value=f"an attribute: {actual_attribute.local_name}",
                    message="actual XML has a different name at {path}, expected {expected} while actual {actual}"
                )
                all_match = False
            elif not scalars_equal(expected_attribute.value, actual_attribute.value, self.options.culture):
                self._add_element_diff(
                    expected, actual, attribute_path,
                    kind=DifferenceKind.DIFFERENT_VALUE,
                    expected_value=describe_text(expected_attribute.value, self.options.culture),
                    actual_value=describe_text(actual_attribute.value, self.options.culture),
                    message="actual XML has a different value at {path}, expected {expected} while actual {actual}"
                )
                all_match = False

        return all_match

    def _diff_children(self, expected: XmlNode, actual: XmlNode, path: str) -> bool:
        expected_children = self._included(expected.children)
        actual_children = self._included(actual.children)

        if len(expected_children) != len(actual_children):
            self._add_element_diff(
                expected, actual, f"{path}/",
                kind=DifferenceKind.DIFFERENT_ELEMENT_COUNT,
                expected_value=str(len(expected_children)),
                actual_value=str(len(actual_children)),
                message="has {actual} element(s) instead of {expected} at {path}"
            )
            return False

        all_match = True
        paths = _child_paths(expected_children, path)
        for child_path, expected_child, actual_child in zip(paths, expected_children, actual_children):
            if self._aborted:
                return False
            if not self.diff(expected_child, actual_child, child_path):
                all_match = False

        return all_match

    def _included(self, nodes: tuple) -> list:
        """Drop the elements or attributes whose local name is ignored."""
        return [node for node in nodes if node.local_name not in self.options.ignored_nodes]

    def _texts_equal(self, expected: Optional[str], actual: Optional[str]) -> bool:
        if expected is None or actual is None:
            return expected is None and actual is None
        return scalars_equal(expected, actual, self.options.culture)

    def _describe_content(self, node: XmlNode) -> str:
        """Describe what an element starts with: its text or else its first child element."""
        if node.text is not None:
            return describe_text(node.text, self.options.culture)
        children = self._included(node.children)
        if children:
            return f"an element: <{children[0].local_name}>"
        return "null"

    def _add_element_diff(
        self,
        expected: XmlNode,
        actual: XmlNode,
        path: str,
        kind: DifferenceKind,
        expected_value: str,
        actual_value: str,
        message: str
    ):
        """Add a difference scoped to the elements being compared."""
        self._add_diff(
            path=path,
            kind=kind,
            expected=expected_value,
            actual=actual_value,
            message=message.format(path=path, expected=expected_value, actual=actual_value),
            expected_scope=expected.render(),
            actual_scope=actual.render()
        )


def _child_paths(children: list[XmlNode], path: str) -> list[str]:
    """Paths of sibling elements; only repeated local names get a 0-based index."""
    counts = Counter(child.local_name for child in children)
    seen: Counter = Counter()
    paths = []
    for child in children:
        if counts[child.local_name] == 1:
            paths.append(f"{path}/{child.local_name}")
        else:
            paths.append(f"{path}/{child.local_name}[{seen[child.local_name]}]")
        seen[child.local_name] += 1
    return paths


def _describe_namespace(namespace: str) -> str:
    return namespace or NO_NAMESPACE

