"""Custom exceptions for docassert."""

from __future__ import annotations

from typing import Optional


class DocAssertError(Exception):
    """Base exception for docassert errors."""
    pass


class LoadError(DocAssertError):
    """Raised when raw contents cannot be loaded into a document of its format."""
    def __init__(self, format_name: str, message: str):
        super().__init__(message)
        self.format_name = format_name
        self.message = message


class ConfigurationError(DocAssertError):
    """Raised when comparison options are constructed with an invalid combination."""
    def __init__(self, message: str, option: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.option = option


class TransformationFailure(DocAssertError):
    """Raised when the external transform could not transform its input."""
    def __init__(self, format_name: str, message: str):
        super().__init__(message)
        self.format_name = format_name
        self.message = message


class AssertionFailure(DocAssertError, AssertionError):
    """Raised when two loaded documents are not equivalent."""
    def __init__(self, message: str, difference=None):
        super().__init__(message)
        self.message = message
        self.difference = difference
