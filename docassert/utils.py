"""Utility functions for docassert."""

from __future__ import annotations

import re


def build_path(parent_path: str, key: str | int) -> str:
    """Build a JSONPath from parent path and key."""
    if isinstance(key, int):
        return f"{parent_path}[{key}]"
    else:
        # Handle special characters in key names
        if re.match(r'^[a-zA-Z_][a-zA-Z0-9_]*$', str(key)):
            return f"{parent_path}.{key}"
        else:
            return f"{parent_path}['{key}']"


def quote_value_upon_spaces(value: str, quote: str = '"') -> str:
    """Quote a value containing blank spaces so the spaces stay visible in messages."""
    if " " in value and not value.startswith(quote) and not value.endswith(quote):
        return f"{quote}{value}{quote}"
    return value


def trim(text: str, max_characters: int) -> str:
    """Trim a text to a maximum amount of characters, marking the cut with '...'."""
    if len(text) > max_characters:
        return text[:max_characters] + "..."
    return text


def is_blank(text: str | None) -> bool:
    return text is None or not text.strip()
