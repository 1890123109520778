"""Scalar comparison functions shared by the JSON, XML and CSV differs."""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from functools import lru_cache
from typing import Optional

from babel import Locale, UnknownLocaleError
from babel.numbers import NumberFormatError, parse_decimal

from .exceptions import ConfigurationError


INVARIANT_CULTURE = "invariant"
QUOTE = '"'


# Cache for resolved cultures
@lru_cache(maxsize=64)
def resolve_locale(culture: Optional[str] = None) -> Locale:
    """
    Resolve a culture name like 'nl-NL' or 'nl_NL' into a Babel locale.

    Args:
        culture: The culture name, ``None`` or 'invariant' for the invariant culture

    Returns:
        The Babel locale whose number symbols should be used
    """
    if culture is None or culture.strip().lower() in ("", INVARIANT_CULTURE):
        return Locale("en")

    try:
        return Locale.parse(culture.strip().replace("-", "_"))
    except (UnknownLocaleError, ValueError, TypeError) as e:
        raise ConfigurationError(f"Unknown culture '{culture}': {e}", option="culture")


def parse_number(text: Optional[str], culture: Optional[str] = None) -> Optional[Decimal]:
    """
    Parse a text as a decimal number in the given culture.

    Whitespace is never trimmed: a text containing any whitespace is not a number.

    Args:
        text: The raw text
        culture: The culture name that provides the decimal and group symbols

    Returns:
        The parsed decimal, or ``None`` when the text is not a finite number
    """
    if not text or "_" in text or any(ch.isspace() for ch in text):
        return None

    try:
        number = parse_decimal(text, locale=resolve_locale(culture))
    except NumberFormatError:
        return None

    return number if number.is_finite() else None


def scalars_equal(expected: str, actual: str, culture: Optional[str] = None) -> bool:
    """
    Compare two raw scalar texts.

    Both texts parsing as numbers compare by decimal value, so trailing
    fractional zeros are insignificant; otherwise the raw texts must be equal.
    """
    expected_number = parse_number(expected, culture)
    actual_number = parse_number(actual, culture)
    if expected_number is not None and actual_number is not None:
        return expected_number == actual_number

    return expected == actual


class TextKind(Enum):
    NULL = "null"
    NUMBER = "number"
    QUOTED_STRING = "quoted string"
    RAW_TEXT = "raw text"


def infer_kind(text: Optional[str], culture: Optional[str] = None) -> TextKind:
    """Infer the kind of a raw text from its literal form, for messages only."""
    if not text:
        return TextKind.NULL
    if parse_number(text, culture) is not None:
        return TextKind.NUMBER
    if len(text) >= 2 and text.startswith(QUOTE) and text.endswith(QUOTE):
        return TextKind.QUOTED_STRING
    return TextKind.RAW_TEXT


def describe_text(text: Optional[str], culture: Optional[str] = None) -> str:
    """Describe a raw text in a humanly-readable way: 'a number: 12', 'a string: "abc"', 'a text: abc'."""
    kind = infer_kind(text, culture)
    if kind == TextKind.NULL:
        return "null"
    if kind == TextKind.NUMBER:
        return f"a number: {text}"
    if kind == TextKind.QUOTED_STRING:
        return f"a string: {text}"
    return f"a text: {text}"
