"""Typed deep comparison of JSON value trees."""

from __future__ import annotations

from typing import Optional

from .differ import Differ, has_complete_matching
from .exceptions import LoadError
from .jsonpath_utils import JSONPathMatcher
from .models import DifferenceKind, Order
from .options import JsonOptions
from .report import ReportBuilder
from .utils import build_path
from .values import ValueKind, ValueNode


ROOT_PATH = "$"


class JsonDiffer(Differ):
    """
    Performs typed deep comparison of JSON documents.

    Handles:
    - null, type and value differences of scalars
    - objects by case-insensitive property name
    - arrays by position, or as multisets when the order is ignored
    - contains mode, where the actual object may have extra properties
    """

    def __init__(
        self,
        options: Optional[JsonOptions] = None,
        fail_fast: bool = False,
        contains: bool = False,
        method_name: str = "assert_json_equal"
    ):
        super().__init__(fail_fast)
        self.options = options or JsonOptions()
        self.contains = contains
        self.method_name = method_name

    def compare(self, expected: ValueNode, actual: ValueNode) -> bool:
        """
        Prune the ignored nodes from both documents and compare them from the root.

        A location an ignored path matches in either document is removed from both.
        """
        locations = (find_ignored_locations(expected, self.options)
                     | find_ignored_locations(actual, self.options))
        return self.diff(
            prune(expected, self.options, locations),
            prune(actual, self.options, locations),
            ROOT_PATH
        )

    def diff(self, expected: ValueNode, actual: ValueNode, path: str = ROOT_PATH) -> bool:
        """
        Perform deep diff comparison.

        Args:
            expected: The expected node
            actual: The actual node
            path: Current JSONPath of the expected node

        Returns:
            True if the nodes are equivalent, False otherwise
        """
        if self._aborted:
            return False

        if expected.is_null and actual.is_null:
            return True

        if actual.is_null:
            self._add_diff(
                path=path,
                kind=DifferenceKind.ACTUAL_IS_NULL,
                expected=expected.describe(),
                actual=actual.describe(),
                message=f"actual JSON is null at {path}, expected {expected.describe()}"
            )
            return False

        if expected.is_null:
            self._add_diff(
                path=path,
                kind=DifferenceKind.EXPECTED_IS_NULL,
                expected=expected.describe(),
                actual=actual.describe(),
                message=f"expected JSON is null at {path}, actual {actual.describe()}"
            )
            return False

        if expected.kind != actual.kind:
            self._add_diff(
                path=path,
                kind=DifferenceKind.DIFFERENT_TYPE,
                expected=expected.describe(),
                actual=actual.describe(),
                message=f"actual JSON has a different type at {path}, "
                        f"expected {expected.describe()} while actual {actual.describe()}"
            )
            return False

        if expected.kind == ValueKind.OBJECT:
            return self._diff_objects(expected, actual, path)
        elif expected.kind == ValueKind.ARRAY:
            return self._diff_arrays(expected, actual, path)
        else:
            return self._diff_scalars(expected, actual, path)

    def _diff_objects(self, expected: ValueNode, actual: ValueNode, path: str) -> bool:
        """Compare two objects."""
        expected_props = self._index_properties(expected, path)
        actual_props = self._index_properties(actual, path)

        all_match = True
        start = len(self.diffs)

        for folded, (key, _) in expected_props.items():
            if folded not in actual_props:
                child_path = build_path(path, key)
                self._add_diff(
                    path=child_path,
                    kind=DifferenceKind.MISSING_PROPERTY,
                    expected=f"a property: {key}",
                    actual="no property",
                    message=f"actual JSON misses property at {child_path}"
                )
                all_match = False
                if self._aborted:
                    break

        if not self.contains and not self._aborted:
            for folded, (key, _) in actual_props.items():
                if folded not in expected_props:
                    child_path = build_path(path, key)
                    self._add_diff(
                        path=child_path,
                        kind=DifferenceKind.MISSING_PROPERTY,
                        expected="no property",
                        actual=f"a property: {key}",
                        message=f"expected JSON misses property at {child_path}"
                    )
                    all_match = False
                    if self._aborted:
                        break

        for folded, (key, expected_child) in expected_props.items():
            if self._aborted:
                break
            if folded not in actual_props:
                continue

            _, actual_child = actual_props[folded]
            if not self.diff(expected_child, actual_child, build_path(path, key)):
                all_match = False

        if len(self.diffs) > start:
            self._fill_scope(start, expected.render(), actual.render())

        return all_match and not self._aborted

    def _index_properties(self, node: ValueNode, path: str) -> dict[str, tuple[str, ValueNode]]:
        """Index the properties of an object by case-folded name."""
        index = {}
        for key, child in node.items():
            folded = key.casefold()
            if folded in index:
                raise LoadError("JSON", ReportBuilder.for_method(
                    self.method_name,
                    f"cannot load the JSON contents to a dictionary due to invalid keys, "
                    f"please use unique JSON keys: duplicate key '{key}' at {path}")
                    .append_input(node.render())
                    .build())
            index[folded] = (key, child)
        return index

    def _diff_arrays(self, expected: ValueNode, actual: ValueNode, path: str) -> bool:
        """Compare two arrays based on the configured order."""
        expected_items, actual_items = expected.value, actual.value

        if len(expected_items) != len(actual_items):
            self._add_diff(
                path=path,
                kind=DifferenceKind.DIFFERENT_ELEMENT_COUNT,
                expected=str(len(expected_items)),
                actual=str(len(actual_items)),
                message=f"has {len(actual_items)} elements instead of {len(expected_items)} at {path}",
                expected_scope=expected.render(),
                actual_scope=actual.render()
            )
            return False

        start = len(self.diffs)
        if self.options.order == Order.IGNORE and len(expected_items) > 1:
            all_match = self._diff_unordered_arrays(expected_items, actual_items, path)
        else:
            all_match = self._diff_strict_arrays(expected_items, actual_items, path)

        if len(self.diffs) > start:
            self._fill_scope(start, expected.render(), actual.render())

        return all_match

    def _diff_strict_arrays(self, expected_items: tuple, actual_items: tuple, path: str) -> bool:
        """Compare arrays index-by-index (order matters)."""
        all_match = True
        for index, (expected_item, actual_item) in enumerate(zip(expected_items, actual_items)):
            if self._aborted:
                return False
            if not self.diff(expected_item, actual_item, f"{path}[{index}]"):
                all_match = False
        return all_match

    def _diff_unordered_arrays(self, expected_items: tuple, actual_items: tuple, path: str) -> bool:
        """
        Compare arrays as multisets (order ignored, duplicates matter).

        The arrays match when every expected item pairs with its own fully
        equal actual item. Otherwise each actual item consumes the first
        unconsumed, equal expected item, and an actual item without such a
        match is reported against the first unconsumed expected item.
        """
        candidates = [
            [self._items_equal(expected_item, actual_item, f"{path}[{i}]") for actual_item in actual_items]
            for i, expected_item in enumerate(expected_items)
        ]
        if has_complete_matching(candidates):
            return True

        all_match = True
        consumed = [False] * len(expected_items)

        for j, actual_item in enumerate(actual_items):
            if self._aborted:
                return False

            match = next(
                (i for i in range(len(expected_items)) if not consumed[i] and candidates[i][j]),
                None
            )
            if match is not None:
                consumed[match] = True
                continue

            all_match = False
            index = consumed.index(False)
            consumed[index] = True

            counterpart = expected_items[index]
            item_path = f"{path}[{index}]"
            if counterpart.is_container and counterpart.kind == actual_item.kind:
                self.diff(counterpart, actual_item, item_path)
            else:
                self._add_diff(
                    path=item_path,
                    kind=DifferenceKind.DIFFERENT_VALUE,
                    expected=counterpart.describe(),
                    actual=actual_item.describe(),
                    message=f"actual JSON has a different value at {item_path}, "
                            f"expected JSON does not contain an element equal to {actual_item.describe()}"
                )

        return all_match

    def _diff_scalars(self, expected: ValueNode, actual: ValueNode, path: str) -> bool:
        """Compare scalar values; numbers by decimal value."""
        if expected.value == actual.value:
            return True

        self._add_diff(
            path=path,
            kind=DifferenceKind.DIFFERENT_VALUE,
            expected=expected.describe(),
            actual=actual.describe(),
            message=f"actual JSON has a different value at {path}, "
                    f"expected {expected.describe()} while actual {actual.describe()}"
        )
        return False

    def _items_equal(self, expected: ValueNode, actual: ValueNode, path: str) -> bool:
        """Check if two items are equal (for unordered array comparison)."""
        # Create a temporary differ to avoid polluting our diffs
        temp_differ = JsonDiffer(
            self.options,
            fail_fast=True,
            contains=self.contains,
            method_name=self.method_name
        )
        return temp_differ.diff(expected, actual, path)


def prune(node: ValueNode, options: JsonOptions, locations: Optional[set] = None) -> ValueNode:
    """
    Remove the ignored nodes from a document.

    Properties named in ``ignored_nodes`` are removed at any depth, and every
    location matched by an ``ignored_paths`` expression is removed as well.
    Property names in the locations are matched case-insensitively.

    Args:
        node: The document to prune
        options: The options holding the ignored nodes and paths
        locations: Ignored locations to use instead of the ones matched in ``node``
    """
    if not options.ignored_nodes and not options.ignored_paths:
        return node

    if locations is None:
        locations = find_ignored_locations(node, options)

    return _prune(node, frozenset(options.ignored_nodes), locations, ())


def find_ignored_locations(node: ValueNode, options: JsonOptions) -> set:
    """Find the concrete locations the ignored paths match, with case-folded property names."""
    locations = set()
    if options.ignored_paths:
        data = node.to_python()
        for path in options.ignored_paths:
            locations.update(_fold(segments) for segments in JSONPathMatcher.find_segments(data, path))
    return locations


def _fold(segments: tuple) -> tuple:
    return tuple(s.casefold() if isinstance(s, str) else s for s in segments)


def _prune(node: ValueNode, names: frozenset, locations: set, segments: tuple) -> ValueNode:
    if node.kind == ValueKind.OBJECT:
        pairs = []
        for key, child in node.items():
            child_segments = segments + (key.casefold(),)
            if key in names or child_segments in locations:
                continue
            pairs.append((key, _prune(child, names, locations, child_segments)))
        return ValueNode.object(pairs)

    if node.kind == ValueKind.ARRAY:
        return ValueNode.array(
            _prune(item, names, locations, segments + (index,))
            for index, item in enumerate(node.value)
            if segments + (index,) not in locations
        )

    return node
