"""Humanly-readable failure reports for docassert assertions."""

from __future__ import annotations

from typing import Optional

from .models import Difference, ReportFormat, ReportScope
from .options import DEFAULT_MAX_REPORT_CHARACTERS, ReportOptions
from .utils import is_blank, trim


EXPECTED_TITLE = "Expected:"
ACTUAL_TITLE = "Actual:"
COLUMN_GAP = 4


class ReportBuilder:
    """
    Buildable report of a test assertion failure.

    Usage:
        report = (ReportBuilder.for_method("assert_json_equal", "expected and actual JSON contents do not match")
                               .append_line(str(difference))
                               .append_diff(expected_json, actual_json)
                               .build())
    """

    def __init__(self, method_name: str, general_message: str):
        if is_blank(method_name):
            raise ValueError("Requires a non-blank method name for the test assertion report")
        if is_blank(general_message):
            raise ValueError("Requires a non-blank general message for the test assertion report")

        self._lines: list[str] = [f"{method_name} failure: {general_message}"]

    @classmethod
    def for_method(cls, method_name: str, general_message: str) -> ReportBuilder:
        """Start a new report for a specific test assertion."""
        return cls(method_name, general_message)

    def append_line(self, message: str = "", max_characters: int = 1000) -> ReportBuilder:
        self._lines.append(trim(message, max_characters))
        return self

    def append_input(self, text: str) -> ReportBuilder:
        """Append the raw input that was passed to the test assertion."""
        self._lines.extend(["", "Input:", text])
        return self

    def append_diff(
        self,
        expected: str,
        actual: str,
        max_characters: int = DEFAULT_MAX_REPORT_CHARACTERS,
        report_format: ReportFormat = ReportFormat.HORIZONTAL
    ) -> ReportBuilder:
        """
        Append the expected and actual documents to the report.

        Args:
            expected: The rendered expected document (or scope)
            actual: The rendered actual document (or scope)
            max_characters: Maximum characters taken from either side, 0 omits the section
            report_format: Side-by-side or stacked layout

        Returns:
            The current builder
        """
        if max_characters <= 0:
            return self

        expected = trim(expected, max_characters)
        actual = trim(actual, max_characters)

        self._lines.append("")
        if report_format == ReportFormat.VERTICAL:
            self._lines.extend([EXPECTED_TITLE, expected, "", ACTUAL_TITLE, actual, ""])
        else:
            self._lines.extend(format_horizontal(expected, actual))
            self._lines.append("")
        return self

    def build(self) -> str:
        return "\n".join(self._lines)

    def __str__(self) -> str:
        return self.build()


def format_horizontal(expected: str, actual: str) -> list[str]:
    """Lay out two texts side by side with a fixed-width left column."""
    expected_lines = [EXPECTED_TITLE] + expected.splitlines()
    actual_lines = [ACTUAL_TITLE] + actual.splitlines()
    width = max(len(line) for line in expected_lines) + COLUMN_GAP

    lines = []
    for index in range(max(len(expected_lines), len(actual_lines))):
        left = expected_lines[index] if index < len(expected_lines) else ""
        right = actual_lines[index] if index < len(actual_lines) else ""
        lines.append((left.ljust(width) + right).rstrip())
    return lines


def format_report(
    method_name: str,
    general_message: str,
    difference: Difference,
    expected_document: str,
    actual_document: str,
    options: ReportOptions,
    options_description: Optional[str] = None
) -> str:
    """
    Render a difference between two documents into a failure report.

    ``LIMITED`` scope shows the smallest subtree (or row) containing the
    difference on both sides, ``COMPLETE`` scope the entire documents.
    """
    expected, actual = expected_document, actual_document
    if options.report_scope == ReportScope.LIMITED:
        if difference.expected_scope is not None:
            expected = difference.expected_scope
        if difference.actual_scope is not None:
            actual = difference.actual_scope

    builder = ReportBuilder.for_method(method_name, general_message).append_line(str(difference))
    if options_description:
        builder.append_line().append_line(options_description)

    return builder.append_diff(expected, actual, options.max_report_characters, options.report_format).build()
