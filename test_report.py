"""Tests for failure report formatting."""

import pytest
from docassert import AssertionFailure, JsonOptions, ReportFormat, ReportScope, assert_json_equal
from docassert.models import Difference, DifferenceKind
from docassert.options import ReportOptions
from docassert.report import ReportBuilder, format_horizontal, format_report


class TestReportBuilder:
    """Test building reports line by line."""

    def test_first_line(self):
        """Test that reports start with the method and general message."""
        report = ReportBuilder.for_method("assert_json_equal", "expected and actual JSON contents do not match").build()
        assert report == "assert_json_equal failure: expected and actual JSON contents do not match"

    def test_blank_method_name(self):
        """Test that a method name is required."""
        with pytest.raises(ValueError):
            ReportBuilder.for_method(" ", "message")

    def test_append_input(self):
        """Test that the raw input is appended under its own title."""
        report = ReportBuilder.for_method("load_json", "cannot load").append_input("{").build()
        assert report.splitlines()[-2:] == ["Input:", "{"]

    def test_vertical_diff(self):
        """Test that the vertical layout stacks expected above actual."""
        report = (ReportBuilder.for_method("m", "g")
                               .append_diff("1", "2", report_format=ReportFormat.VERTICAL)
                               .build())
        assert report.splitlines()[1:] == ["", "Expected:", "1", "", "Actual:", "2"]

    def test_diff_is_truncated(self):
        """Test that each side is trimmed to the maximum characters."""
        report = (ReportBuilder.for_method("m", "g")
                               .append_diff("abcdef", "ab", max_characters=3, report_format=ReportFormat.VERTICAL)
                               .build())
        assert "abc..." in report
        assert "abcdef" not in report

    def test_diff_omitted_without_characters(self):
        """Test that a zero maximum omits the expected and actual documents."""
        report = ReportBuilder.for_method("m", "g").append_diff("1", "2", max_characters=0).build()
        assert "Expected:" not in report


class TestHorizontalFormat:
    """Test the side-by-side layout."""

    def test_fixed_width_left_column(self):
        """Test that the actual column starts after the widest expected line."""
        lines = format_horizontal("a\nbb", "x")
        assert lines == [
            "Expected:    Actual:",
            "a            x",
            "bb",
        ]

    def test_actual_longer_than_expected(self):
        """Test that extra actual lines are padded on the left."""
        lines = format_horizontal("a", "x\ny")
        assert lines[2] == " " * 13 + "y"


class TestReportScope:
    """Test limited and complete report scopes."""

    def setup_method(self):
        self.difference = Difference(
            path="$.a.b",
            kind=DifferenceKind.DIFFERENT_VALUE,
            expected="a number: 1",
            actual="a number: 2",
            message="actual JSON has a different value at $.a.b, expected a number: 1 while actual a number: 2",
            expected_scope='{"b": 1}',
            actual_scope='{"b": 2}'
        )

    def test_limited_scope(self):
        """Test that the limited scope shows the differing subtree only."""
        options = ReportOptions(report_format=ReportFormat.VERTICAL)
        report = format_report("m", "g", self.difference, '{"a": {"b": 1}, "c": 3}', '{"a": {"b": 2}, "c": 3}', options)

        assert 'Expected:\n{"b": 1}' in report
        assert '"c": 3' not in report

    def test_complete_scope(self):
        """Test that the complete scope shows both entire documents."""
        options = ReportOptions(report_format=ReportFormat.VERTICAL, report_scope=ReportScope.COMPLETE)
        report = format_report("m", "g", self.difference, '{"a": {"b": 1}, "c": 3}', '{"a": {"b": 2}, "c": 3}', options)

        assert 'Expected:\n{"a": {"b": 1}, "c": 3}' in report
        assert 'Actual:\n{"a": {"b": 2}, "c": 3}' in report

    def test_options_description(self):
        """Test that the options description follows the difference."""
        report = format_report("m", "g", self.difference, "{}", "{}", ReportOptions(), "Options: \n\t- x")
        assert report.splitlines()[1:5] == [self.difference.message, "", "Options: ", "\t- x"]


class TestAssertionReports:
    """Test reports raised by the assertions."""

    def test_json_limited_scope(self):
        """Test that a nested JSON difference reports the containing object."""
        options = JsonOptions(report_format=ReportFormat.VERTICAL)
        with pytest.raises(AssertionFailure) as exc_info:
            assert_json_equal('{"a": {"b": 1}, "c": 2}', '{"a": {"b": 2}, "c": 2}', options)

        message = str(exc_info.value)
        assert 'Expected:\n{\n  "b": 1\n}' in message
        assert 'Actual:\n{\n  "b": 2\n}' in message
        assert '"c"' not in message

    def test_json_complete_scope(self):
        """Test that the complete scope reports the entire documents."""
        options = JsonOptions(report_format=ReportFormat.VERTICAL, report_scope=ReportScope.COMPLETE)
        with pytest.raises(AssertionFailure) as exc_info:
            assert_json_equal('{"a": {"b": 1}, "c": 2}', '{"a": {"b": 2}, "c": 2}', options)

        assert '"c": 2' in str(exc_info.value)

    def test_options_are_described(self):
        """Test that the comparison options are part of the report."""
        with pytest.raises(AssertionFailure) as exc_info:
            assert_json_equal('{"a": 1}', '{"a": 2}')

        assert "\t- array order: ignore" in str(exc_info.value)
