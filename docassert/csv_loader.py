"""Loading raw CSV contents into tables."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Optional

from .exceptions import LoadError
from .loader import ensure_loadable
from .models import Header
from .options import CsvOptions
from .report import ReportBuilder
from .utils import is_blank


logger = logging.getLogger(__name__)

FORMAT_NAME = "CSV"
LOAD_METHOD_NAME = "load_csv"
MISSING_HEADER_PREFIX = "Col #"


@dataclass(frozen=True)
class CsvCell:
    header_name: str
    column_number: int
    row_number: int
    value: str


@dataclass(frozen=True)
class CsvRow:
    """A data row; ``row_number`` is 0-based and excludes the header row."""
    cells: tuple[CsvCell, ...]
    row_number: int
    source: str

    @property
    def values(self) -> tuple[str, ...]:
        return tuple(cell.value for cell in self.cells)


@dataclass(frozen=True)
class CsvTable:
    header_names: tuple[str, ...]
    rows: tuple[CsvRow, ...]
    header: Header = Header.PRESENT
    header_source: Optional[str] = None
    newline: str = "\n"

    def render(self) -> str:
        lines = [self.header_source] if self.header_source is not None else []
        lines.extend(row.source for row in self.rows)
        return self.newline.join(lines)

    def __str__(self) -> str:
        return self.render()


def load_csv(text: str, options: Optional[CsvOptions] = None, allow_blank: bool = True) -> CsvTable:
    """
    Load raw CSV contents into a table.

    Args:
        text: The raw CSV contents
        options: Options controlling the separator, escape, quote, new row
            characters, header presence and maximum input characters
        allow_blank: Whether blank contents load as an empty table

    Returns:
        The loaded table

    Raises:
        LoadError: When the contents are blank while not allowed, too large,
            contain an unterminated quote, or rows with a different amount of
            columns than the header
    """
    options = options or CsvOptions()
    ensure_loadable(text, options, FORMAT_NAME, LOAD_METHOD_NAME, allow_blank=allow_blank)

    if is_blank(text):
        return CsvTable(
            header_names=(f"{MISSING_HEADER_PREFIX}0",),
            rows=(),
            header=options.header,
            newline=options.newline
        )

    scanned = _scan(text, options)
    first_cells, first_source = scanned[0]

    if options.header == Header.PRESENT:
        header_names = tuple(first_cells)
        header_source = first_source
        data = scanned[1:]
    else:
        header_names = tuple(f"{MISSING_HEADER_PREFIX}{index}" for index in range(len(first_cells)))
        header_source = None
        data = scanned

    _ensure_same_column_count(header_names, data, text, options)

    rows = tuple(
        CsvRow(
            cells=tuple(
                CsvCell(header_name=name, column_number=column, row_number=row_number, value=value)
                for column, (name, value) in enumerate(zip(header_names, cells))
            ),
            row_number=row_number,
            source=source
        )
        for row_number, (cells, source) in enumerate(data)
    )

    logger.debug("Loaded CSV contents with %d columns and %d rows", len(header_names), len(rows))
    return CsvTable(
        header_names=header_names,
        rows=rows,
        header=options.header,
        header_source=header_source,
        newline=options.newline
    )


def _ensure_same_column_count(header_names: tuple, data: list, text: str, options: CsvOptions):
    counts = Counter(len(cells) for cells, _ in data if len(cells) != len(header_names))
    if not counts:
        return

    summary = ", ".join(f"{rows} row(s) with {columns} columns" for columns, rows in counts.items())
    raise LoadError(FORMAT_NAME, ReportBuilder.for_method(
        LOAD_METHOD_NAME,
        f"cannot correctly load the CSV contents as not all rows have the same amount of columns, "
        f"expected {len(header_names)} columns: {summary}")
        .append_line()
        .append_line(options.describe_for_load())
        .append_input(text)
        .build())


def _scan(text: str, options: CsvOptions) -> list[tuple[list[str], str]]:
    """
    Split raw contents into rows of raw cell values, with each row's source text.

    Quotes are kept in the cell values. Empty lines are skipped.
    """
    separator, escape, quote, newline = options.separator, options.escape, options.quote, options.newline
    rows = []
    cells: list[str] = []
    cell: list[str] = []
    in_quotes = False
    row_start = 0
    index = 0

    def end_row(end: int):
        source = text[row_start:end]
        if source:
            rows.append((cells + ["".join(cell)], source))

    while index < len(text):
        char = text[index]

        if char == escape and index + 1 < len(text):
            following = text[index + 1]
            if following in (separator, escape, quote):
                cell.append(following)
                index += 2
            elif text.startswith(newline, index + 1):
                cell.append(newline)
                index += 1 + len(newline)
            else:
                cell.append(char)
                index += 1
            continue

        if char == quote:
            in_quotes = not in_quotes
            cell.append(char)
            index += 1
            continue

        if in_quotes:
            cell.append(char)
            index += 1
            continue

        if char == separator:
            cells.append("".join(cell))
            cell = []
            index += 1
            continue

        line_break = _line_break_at(text, index, newline)
        if line_break:
            end_row(index)
            cells, cell = [], []
            index += len(line_break)
            row_start = index
            continue

        cell.append(char)
        index += 1

    if in_quotes:
        raise LoadError(FORMAT_NAME, ReportBuilder.for_method(
            LOAD_METHOD_NAME,
            f"cannot correctly load the CSV contents due to a deserialization failure: "
            f"unterminated quote {quote} in row starting at character {row_start}")
            .append_line()
            .append_line(options.describe_for_load())
            .append_input(text)
            .build())

    end_row(len(text))
    return rows


def _line_break_at(text: str, index: int, newline: str) -> Optional[str]:
    if newline == "\n" and text.startswith("\r\n", index):
        return "\r\n"
    if text.startswith(newline, index):
        return newline
    return None
