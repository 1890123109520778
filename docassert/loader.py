"""Checks shared by the JSON, XML and CSV loaders."""

from __future__ import annotations

from .exceptions import LoadError
from .options import ReportOptions
from .report import ReportBuilder
from .utils import is_blank, trim


def ensure_loadable(
    text: str,
    options: ReportOptions,
    format_name: str,
    method_name: str,
    allow_blank: bool = False
):
    """
    Validate raw contents before parsing them.

    Raises:
        LoadError: When the contents are not text, are blank while blankness
            is not allowed, or exceed the maximum input characters
    """
    if not isinstance(text, str):
        raise LoadError(format_name, ReportBuilder.for_method(
            method_name, f"cannot correctly load the {format_name} contents as they are not text, "
                         f"got: {type(text).__name__}").build())

    if options.max_input_characters is not None and len(text) > options.max_input_characters:
        raise LoadError(format_name, ReportBuilder.for_method(
            method_name, f"cannot load the {format_name} contents as they have {len(text)} characters, "
                         f"which exceeds the maximum of {options.max_input_characters} characters")
            .append_input(trim(text, options.max_report_characters))
            .build())

    if not allow_blank and is_blank(text):
        raise LoadError(format_name, ReportBuilder.for_method(
            method_name, f"cannot load the {format_name} contents as they are blank").build())
