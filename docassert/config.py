"""Loading comparison options from YAML or JSON configuration."""

from __future__ import annotations

import dataclasses
from enum import Enum
from pathlib import Path
from typing import Any, Union

import yaml

from .exceptions import ConfigurationError
from .models import Header, Order, ReportFormat, ReportScope
from .options import CsvOptions, JsonOptions, ReportOptions, XmlOptions


OPTIONS_BY_FORMAT = {
    "json": JsonOptions,
    "xml": XmlOptions,
    "csv": CsvOptions,
}

ENUM_FIELDS = {
    "order": Order,
    "row_order": Order,
    "column_order": Order,
    "header": Header,
    "report_format": ReportFormat,
    "report_scope": ReportScope,
}

TUPLE_FIELDS = {"ignored_nodes", "ignored_paths", "ignored_columns", "ignored_column_indexes"}


def load_options(source: Union[str, Path], format: str) -> ReportOptions:
    """
    Load comparison options from a YAML (or JSON) file or text.

    A ``Path``, or a string naming an existing ``.yaml``/``.yml``/``.json``
    file, is read from disk; any other string is parsed as the configuration
    itself.

    Example configuration::

        order: ignore
        ignored_nodes: [id, timestamp]
        report_format: vertical

    Args:
        source: The configuration file path or contents
        format: One of 'json', 'xml' or 'csv'

    Returns:
        The options instance for the format

    Raises:
        FileNotFoundError: When a configuration file path does not exist
        ConfigurationError: When the configuration is not valid YAML or
            holds unknown keys or invalid values
    """
    content = _read_source(source)

    # JSON is valid YAML, so one loader handles both
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse options configuration: {e}")

    return options_from_dict(data or {}, format)


def options_from_dict(data: dict, format: str) -> ReportOptions:
    """
    Build comparison options from a mapping of option names to values.

    Enum values are given by name ('ignore', 'present', 'vertical', ...),
    lists become tuples.
    """
    options_type = OPTIONS_BY_FORMAT.get(str(format).lower())
    if options_type is None:
        raise ConfigurationError(
            f"Unknown format '{format}', expected one of: {', '.join(OPTIONS_BY_FORMAT)}", option="format")

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Options configuration must be a mapping, got: {type(data).__name__}")

    known = {f.name for f in dataclasses.fields(options_type)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigurationError(
            f"Unknown {options_type.__name__} option(s): {', '.join(map(str, unknown))}", option=unknown[0])

    values = {name: _convert(name, value) for name, value in data.items()}
    return options_type(**values)


def _read_source(source: Union[str, Path]) -> str:
    if isinstance(source, Path) or (
            isinstance(source, str) and source.lower().endswith((".yaml", ".yml", ".json")) and "\n" not in source):
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"Options file not found: {path}")
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()
    return source


def _convert(name: str, value: Any) -> Any:
    enum_type = ENUM_FIELDS.get(name)
    if enum_type is not None:
        return _to_enum(name, value, enum_type)

    if name in TUPLE_FIELDS:
        if isinstance(value, (str, int)):
            return (value,)
        if not isinstance(value, (list, tuple)):
            raise ConfigurationError(
                f"Requires a list for '{name}', got: {type(value).__name__}", option=name)
        return tuple(value)

    return value


def _to_enum(name: str, value: Any, enum_type: type[Enum]) -> Enum:
    if isinstance(value, enum_type):
        return value
    for member in enum_type:
        if str(value).strip().lower() == member.value:
            return member
    allowed = ", ".join(member.value for member in enum_type)
    raise ConfigurationError(f"Invalid value for '{name}': {value!r}, expected one of: {allowed}", option=name)
