"""Data models for docassert."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Order(Enum):
    INCLUDE = "include"
    IGNORE = "ignore"


class Header(Enum):
    PRESENT = "present"
    MISSING = "missing"


class ReportFormat(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class ReportScope(Enum):
    LIMITED = "limited"
    COMPLETE = "complete"


class DifferenceKind(Enum):
    MISSING_PROPERTY = "MISSING_PROPERTY"
    DIFFERENT_TYPE = "DIFFERENT_TYPE"
    DIFFERENT_VALUE = "DIFFERENT_VALUE"
    DIFFERENT_ELEMENT_COUNT = "DIFFERENT_ELEMENT_COUNT"
    DIFFERENT_ATTRIBUTE_COUNT = "DIFFERENT_ATTRIBUTE_COUNT"
    DIFFERENT_NAME = "DIFFERENT_NAME"
    DIFFERENT_NAMESPACE = "DIFFERENT_NAMESPACE"
    MISSING_ATTRIBUTE = "MISSING_ATTRIBUTE"
    ACTUAL_IS_NULL = "ACTUAL_IS_NULL"
    EXPECTED_IS_NULL = "EXPECTED_IS_NULL"
    MISSING_COLUMN = "MISSING_COLUMN"
    MISSING_ROW = "MISSING_ROW"
    DIFFERENT_COLUMN_COUNT = "DIFFERENT_COLUMN_COUNT"
    DIFFERENT_ROW_COUNT = "DIFFERENT_ROW_COUNT"
    DIFFERENT_HEADER_CONFIG = "DIFFERENT_HEADER_CONFIG"


@dataclass(frozen=True)
class Difference:
    """A single difference found during comparison.

    ``expected_scope`` and ``actual_scope`` hold the rendered smallest
    subtree (or row) that contains the difference; ``None`` means the whole
    document is the smallest scope.
    """
    path: str
    kind: DifferenceKind
    expected: str
    actual: str
    message: str
    expected_scope: Optional[str] = None
    actual_scope: Optional[str] = None

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "kind": self.kind.value,
            "expected": self.expected,
            "actual": self.actual,
            "message": self.message,
        }


@dataclass
class ComparisonReport:
    """Complete comparison report of two documents."""
    format_name: str
    is_match: bool
    differences: list[Difference] = field(default_factory=list)

    @property
    def first(self) -> Optional[Difference]:
        return self.differences[0] if self.differences else None

    def to_dict(self) -> dict:
        return {
            "format": self.format_name,
            "is_match": self.is_match,
            "differences_count": len(self.differences),
            "differences": [d.to_dict() for d in self.differences],
        }


@dataclass
class ErrorResponse:
    """Error response structure for documents that could not be compared."""
    success: bool = False
    error: Optional[dict] = None

    def to_dict(self) -> dict:
        result = {"success": self.success}
        if self.error:
            result["error"] = self.error
        return result
