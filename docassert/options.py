"""Per-format comparison options for docassert."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from .comparators import resolve_locale
from .exceptions import ConfigurationError
from .jsonpath_utils import JSONPathMatcher
from .models import Header, Order, ReportFormat, ReportScope


DEFAULT_MAX_REPORT_CHARACTERS = 500


def _require_enum(value, enum_type, option: str):
    if not isinstance(value, enum_type):
        raise ConfigurationError(
            f"Requires a {enum_type.__name__} value for '{option}', got: {value!r}", option=option)


def _require_names(names: tuple, option: str):
    for name in names:
        if not isinstance(name, str) or not name.strip():
            raise ConfigurationError(f"Requires non-blank names in '{option}', got: {name!r}", option=option)


@dataclass(frozen=True)
class ReportOptions:
    """Options shared by all formats: input limits and failure report layout."""
    max_input_characters: Optional[int] = None
    max_report_characters: int = DEFAULT_MAX_REPORT_CHARACTERS
    report_format: ReportFormat = ReportFormat.HORIZONTAL
    report_scope: ReportScope = ReportScope.LIMITED

    def __post_init__(self):
        if self.max_input_characters is not None and self.max_input_characters < 0:
            raise ConfigurationError(
                "Maximum input characters cannot be lower than zero", option="max_input_characters")
        if self.max_report_characters < 0:
            raise ConfigurationError(
                "Maximum report characters cannot be lower than zero", option="max_report_characters")
        _require_enum(self.report_format, ReportFormat, "report_format")
        _require_enum(self.report_scope, ReportScope, "report_scope")


@dataclass(frozen=True)
class JsonOptions(ReportOptions):
    """
    Options for comparing JSON documents.

    ``order`` applies to array elements; object properties are always
    matched by (case-insensitive) name.
    """
    order: Order = Order.IGNORE
    ignored_nodes: tuple[str, ...] = ()
    ignored_paths: tuple[str, ...] = ()

    def __post_init__(self):
        super().__post_init__()
        _require_enum(self.order, Order, "order")
        object.__setattr__(self, "ignored_nodes", tuple(self.ignored_nodes))
        object.__setattr__(self, "ignored_paths", tuple(self.ignored_paths))
        _require_names(self.ignored_nodes, "ignored_nodes")
        _require_names(self.ignored_paths, "ignored_paths")
        for path in self.ignored_paths:
            JSONPathMatcher.compile(path)

    def ignore_node(self, name: str) -> JsonOptions:
        return replace(self, ignored_nodes=self.ignored_nodes + (name,))

    def ignore_path(self, path: str) -> JsonOptions:
        return replace(self, ignored_paths=self.ignored_paths + (path,))

    def describe(self) -> str:
        return (
            "Options: \n"
            f"\t- array order: {self.order.value}\n"
            f"\t- ignored node names: [{', '.join(self.ignored_nodes)}]\n"
            f"\t- ignored paths: [{', '.join(self.ignored_paths)}]"
        )


@dataclass(frozen=True)
class XmlOptions(ReportOptions):
    """
    Options for comparing XML documents.

    ``order`` applies to attributes only; child elements are always
    compared by position.
    """
    order: Order = Order.IGNORE
    ignored_nodes: tuple[str, ...] = ()
    culture: Optional[str] = None

    def __post_init__(self):
        super().__post_init__()
        _require_enum(self.order, Order, "order")
        object.__setattr__(self, "ignored_nodes", tuple(self.ignored_nodes))
        _require_names(self.ignored_nodes, "ignored_nodes")
        resolve_locale(self.culture)

    def ignore_node(self, local_name: str) -> XmlOptions:
        return replace(self, ignored_nodes=self.ignored_nodes + (local_name,))

    def describe(self) -> str:
        return (
            "Options: \n"
            f"\t- attribute order: {self.order.value}\n"
            f"\t- ignored node (local) names: [{', '.join(self.ignored_nodes)}]"
        )


@dataclass(frozen=True)
class CsvOptions(ReportOptions):
    """Options for loading and comparing CSV tables."""
    report_format: ReportFormat = ReportFormat.VERTICAL
    header: Header = Header.PRESENT
    row_order: Order = Order.INCLUDE
    column_order: Order = Order.INCLUDE
    ignored_columns: tuple[str, ...] = ()
    ignored_column_indexes: tuple[int, ...] = ()
    separator: str = ";"
    escape: str = "\\"
    quote: str = '"'
    newline: str = "\n"
    culture: Optional[str] = None

    def __post_init__(self):
        super().__post_init__()
        _require_enum(self.header, Header, "header")
        _require_enum(self.row_order, Order, "row_order")
        _require_enum(self.column_order, Order, "column_order")
        object.__setattr__(self, "ignored_columns", tuple(self.ignored_columns))
        object.__setattr__(self, "ignored_column_indexes", tuple(self.ignored_column_indexes))
        _require_names(self.ignored_columns, "ignored_columns")
        resolve_locale(self.culture)

        for index in self.ignored_column_indexes:
            if isinstance(index, bool) or not isinstance(index, int) or index < 0:
                raise ConfigurationError(
                    f"Requires zero-based column indexes that are not lower than zero, got: {index!r}",
                    option="ignored_column_indexes")

        for name in ("separator", "escape", "quote"):
            value = getattr(self, name)
            if not isinstance(value, str) or len(value) != 1:
                raise ConfigurationError(f"Requires a single character as CSV {name}, got: {value!r}", option=name)
        if len({self.separator, self.escape, self.quote}) != 3:
            raise ConfigurationError(
                "Requires different characters for the CSV separator, escape and quote", option="separator")
        if not isinstance(self.newline, str) or not self.newline:
            raise ConfigurationError("Requires a non-empty CSV new row character", option="newline")

        if self.ignored_column_indexes and self.column_order == Order.IGNORE:
            raise ConfigurationError(
                "columns can only be ignored by their indexes when column order is included, "
                "please remove the ignored column indexes, or remove the 'column_order=ignore'",
                option="ignored_column_indexes")
        if self.header == Header.MISSING and self.ignored_columns:
            raise ConfigurationError(
                "specific column(s) can only be ignored when the header names are present, "
                "please provide such headers in the contents, or remove the ignored column names",
                option="ignored_columns")
        if self.header == Header.MISSING and self.column_order == Order.IGNORE:
            raise ConfigurationError(
                "order of columns can only be ignored when the header names are present, "
                "please provide such headers in the contents, or remove the 'column_order=ignore'",
                option="column_order")

    def ignore_column(self, column: str | int) -> CsvOptions:
        if isinstance(column, int) and not isinstance(column, bool):
            return replace(self, ignored_column_indexes=self.ignored_column_indexes + (column,))
        return replace(self, ignored_columns=self.ignored_columns + (column,))

    def is_column_included(self, header_name: str, column_number: int) -> bool:
        return header_name not in self.ignored_columns and column_number not in self.ignored_column_indexes

    def describe_for_load(self) -> str:
        return (
            "Options: \n"
            f"\t- separator: {self.separator}\n"
            f"\t- escape: {self.escape}\n"
            f"\t- quote: {self.quote}\n"
            f"\t- header: {self.header.value}"
        )

    def describe(self) -> str:
        return (
            "Options: \n"
            f"\t- ignored columns: [{', '.join(self.ignored_columns)}]\n"
            f"\t- ignored column indexes: [{', '.join(str(i) for i in self.ignored_column_indexes)}]\n"
            f"\t- column order: {self.column_order.value}\n"
            f"\t- row order: {self.row_order.value}"
        )
