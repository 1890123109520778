"""Shared deep-compare machinery for the JSON, XML and CSV differs."""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from .models import Difference, DifferenceKind


class Differ:
    """
    Collects the differences found while comparing two documents.

    Subclasses walk their document trees depth-first, left-to-right and call
    ``_add_diff`` for each difference. With ``fail_fast`` the walk stops
    after the first difference; without it every difference is enumerated
    in the same order, so the first one is identical in both modes.
    """

    def __init__(self, fail_fast: bool = False):
        self.fail_fast = fail_fast
        self.diffs: list[Difference] = []
        self._aborted = False

    @property
    def first(self) -> Optional[Difference]:
        return self.diffs[0] if self.diffs else None

    def _add_diff(
        self,
        path: str,
        kind: DifferenceKind,
        expected: str,
        actual: str,
        message: str,
        expected_scope: Optional[str] = None,
        actual_scope: Optional[str] = None
    ):
        """Add a difference entry."""
        self.diffs.append(Difference(
            path=path,
            kind=kind,
            expected=expected,
            actual=actual,
            message=message,
            expected_scope=expected_scope,
            actual_scope=actual_scope
        ))

        if self.fail_fast:
            self._aborted = True

    def _fill_scope(self, start: int, expected_scope: str, actual_scope: str):
        """Give the differences added since ``start`` a scope when they have none yet."""
        for index in range(start, len(self.diffs)):
            diff = self.diffs[index]
            if diff.expected_scope is None and diff.actual_scope is None:
                self.diffs[index] = replace(diff, expected_scope=expected_scope, actual_scope=actual_scope)


def has_complete_matching(candidates: list[list[bool]]) -> bool:
    """
    Check whether every expected item can be paired with its own actual item.

    Runs a maximum bipartite matching with augmenting paths, so an early
    pairing is moved when a later expected item needs its actual item.

    Args:
        candidates: ``candidates[i][j]`` tells whether expected item ``i``
            may be paired with actual item ``j``

    Returns:
        True if all expected items are paired
    """
    owners: dict[int, int] = {}

    def augment(i: int, visited: set) -> bool:
        for j, allowed in enumerate(candidates[i]):
            if not allowed or j in visited:
                continue
            visited.add(j)
            if j not in owners or augment(owners[j], visited):
                owners[j] = i
                return True
        return False

    return all(augment(i, set()) for i in range(len(candidates)))
