"""Table comparison of CSV contents."""

from __future__ import annotations

from collections import Counter
from dataclasses import replace
from typing import Optional

from .comparators import scalars_equal
from .csv_loader import CsvCell, CsvRow, CsvTable
from .differ import Differ, has_complete_matching
from .exceptions import ConfigurationError
from .models import DifferenceKind, Order
from .options import CsvOptions
from .report import ReportBuilder
from .utils import quote_value_upon_spaces


class CsvDiffer(Differ):
    """
    Compares two CSV tables.

    The tables are first compared on their shape (column count, row count,
    header configuration and header names) and only then on their rows,
    either by position or as a multiset when the row order is ignored.
    """

    def __init__(
        self,
        options: Optional[CsvOptions] = None,
        fail_fast: bool = False,
        method_name: str = "assert_csv_equal"
    ):
        super().__init__(fail_fast)
        self.options = options or CsvOptions()
        self.method_name = method_name

    def compare(self, expected: CsvTable, actual: CsvTable) -> bool:
        """
        Compare two tables after removing the ignored columns from both.

        Raises:
            ConfigurationError: When the column order is ignored while the
                expected table has duplicate header names that are not ignored
        """
        expected = self.apply_options(expected)
        actual = self.apply_options(actual)
        self._ensure_unique_headers(expected)

        if len(expected.header_names) != len(actual.header_names):
            self._add_table_diff(
                DifferenceKind.DIFFERENT_COLUMN_COUNT,
                len(expected.header_names),
                len(actual.header_names),
                "actual CSV has {actual} columns instead of {expected}"
            )
            return False

        if len(expected.rows) != len(actual.rows):
            self._add_table_diff(
                DifferenceKind.DIFFERENT_ROW_COUNT,
                len(expected.rows),
                len(actual.rows),
                "actual CSV has {actual} rows instead of {expected}"
            )
            return False

        if not self._diff_headers(expected, actual):
            return False

        return self._diff_rows(expected, actual)

    def apply_options(self, table: CsvTable) -> CsvTable:
        """Remove the ignored columns (by name and by index) from a table."""
        included = [
            column for column, name in enumerate(table.header_names)
            if self.options.is_column_included(name, column)
        ]
        if len(included) == len(table.header_names):
            return table

        rows = tuple(
            replace(row, cells=tuple(row.cells[column] for column in included))
            for row in table.rows
        )
        return replace(
            table,
            header_names=tuple(table.header_names[column] for column in included),
            rows=rows
        )

    def _ensure_unique_headers(self, table: CsvTable):
        if self.options.column_order != Order.IGNORE:
            return

        duplicates = [name for name, count in Counter(table.header_names).items() if count > 1]
        if duplicates:
            raise ConfigurationError(ReportBuilder.for_method(
                self.method_name, "cannot compare expected and actual CSV contents")
                .append_line(
                    f"columns can only be ignored when the header names are unique, "
                    f"but got duplicates: [{', '.join(duplicates)}], "
                    f"please either remove the 'column_order=ignore' or ignore these columns")
                .build(),
                option="column_order")

    def _diff_headers(self, expected: CsvTable, actual: CsvTable) -> bool:
        if expected.header != actual.header:
            self._add_table_diff(
                DifferenceKind.DIFFERENT_HEADER_CONFIG,
                expected.header.value,
                actual.header.value,
                "expected CSV is configured with '{expected}' CSV header "
                "while actual is configured with '{actual}' CSV header"
            )
            return False

        expected_headers, actual_headers = expected.header_names, actual.header_names
        if self.options.column_order == Order.IGNORE:
            expected_headers, actual_headers = sorted(expected_headers), sorted(actual_headers)

        all_match = True
        for expected_header, actual_header in zip(expected_headers, actual_headers):
            if self._aborted:
                return False
            if expected_header != actual_header:
                self._add_table_diff(
                    DifferenceKind.MISSING_COLUMN,
                    expected_header,
                    actual_header,
                    "actual CSV is missing a column: {expected}"
                )
                all_match = False

        return all_match

    def _diff_rows(self, expected: CsvTable, actual: CsvTable) -> bool:
        expected_rows = [self._ordered_cells(row) for row in expected.rows]
        actual_rows = [self._ordered_cells(row) for row in actual.rows]

        if self.options.row_order == Order.IGNORE and len(expected_rows) > 1:
            return self._diff_unordered_rows(expected, expected_rows, actual_rows)

        all_match = True
        for expected_row, actual_row in zip(expected_rows, actual_rows):
            for expected_cell, actual_cell in zip(expected_row, actual_row):
                if self._aborted:
                    return False
                if self._cells_equal(expected_cell, actual_cell):
                    continue

                expected_value = quote_value_upon_spaces(expected_cell.value, self.options.quote)
                actual_value = quote_value_upon_spaces(actual_cell.value, self.options.quote)
                self._add_diff(
                    path=f"row {expected_cell.row_number}, column {expected_cell.header_name}",
                    kind=DifferenceKind.DIFFERENT_VALUE,
                    expected=expected_value,
                    actual=actual_value,
                    message=f"actual CSV cell has a different value at row number {expected_cell.row_number} "
                            f"(index-based, excluding header), expected {expected_value} while actual {actual_value} "
                            f"for column {expected_cell.header_name}",
                    expected_scope=_row_scope(expected, expected.rows[expected_cell.row_number]),
                    actual_scope=_row_scope(actual, actual.rows[actual_cell.row_number])
                )
                all_match = False

        return all_match

    def _diff_unordered_rows(self, expected_table: CsvTable, expected_rows: list, actual_rows: list) -> bool:
        """
        Match each expected row to an equal, not yet matched actual row.

        The tables match when every expected row pairs with its own equal
        actual row. Otherwise each expected row without an equal unconsumed
        actual row is reported as missing.
        """
        candidates = [
            [self._rows_equal(expected_row, actual_row) for actual_row in actual_rows]
            for expected_row in expected_rows
        ]
        if has_complete_matching(candidates):
            return True

        all_match = True
        consumed = [False] * len(actual_rows)

        for i, row in enumerate(expected_table.rows):
            if self._aborted:
                return False

            match = next((j for j in range(len(actual_rows)) if not consumed[j] and candidates[i][j]), None)
            if match is not None:
                consumed[match] = True
                continue

            row_text = quote_value_upon_spaces(self.options.separator.join(row.values), self.options.quote)
            self._add_diff(
                path=f"row {row.row_number}",
                kind=DifferenceKind.MISSING_ROW,
                expected=row_text,
                actual="",
                message=f"actual CSV does not contain a row: {row_text} which was found in expected CSV "
                        f"at row number {row.row_number} (index-based, excluding header)"
            )
            all_match = False

        return all_match

    def _ordered_cells(self, row: CsvRow) -> tuple[CsvCell, ...]:
        if self.options.column_order == Order.IGNORE:
            return tuple(sorted(row.cells, key=lambda cell: cell.header_name))
        return row.cells

    def _rows_equal(self, expected_row: tuple, actual_row: tuple) -> bool:
        return all(self._cells_equal(e, a) for e, a in zip(expected_row, actual_row))

    def _cells_equal(self, expected: CsvCell, actual: CsvCell) -> bool:
        """Numbers compare by value in the configured culture; otherwise the unquoted texts must match."""
        quote = self.options.quote
        culture = self.options.culture
        if scalars_equal(expected.value, actual.value, culture):
            return True
        return expected.value.strip(quote) == actual.value.strip(quote)

    def _add_table_diff(self, kind: DifferenceKind, expected, actual, message: str):
        expected_value = quote_value_upon_spaces(str(expected), self.options.quote)
        actual_value = quote_value_upon_spaces(str(actual), self.options.quote)
        self._add_diff(
            path="",
            kind=kind,
            expected=expected_value,
            actual=actual_value,
            message=message.format(expected=expected_value, actual=actual_value)
        )


def _row_scope(table: CsvTable, row: CsvRow) -> str:
    """The header line followed by the source of a single row."""
    if table.header_source is None:
        return row.source
    return f"{table.header_source}{table.newline}{row.source}"
