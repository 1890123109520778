"""Loading raw JSON contents into value trees."""

from __future__ import annotations

import json
import logging
from decimal import Decimal
from typing import Any, Optional

from .exceptions import LoadError
from .loader import ensure_loadable
from .options import JsonOptions
from .report import ReportBuilder
from .values import ValueNode


logger = logging.getLogger(__name__)

FORMAT_NAME = "JSON"
LOAD_METHOD_NAME = "load_json"


class _Pairs(list):
    """Object members in source order, duplicates included."""


def _reject_constant(name: str):
    raise ValueError(f"'{name}' is not a valid JSON value")


def load_json(text: str, options: Optional[JsonOptions] = None) -> ValueNode:
    """
    Load raw JSON contents into a value tree.

    Args:
        text: The raw JSON contents
        options: Options controlling the maximum input characters

    Returns:
        The root node of the loaded document

    Raises:
        LoadError: When the contents are blank, too large, or not valid JSON
    """
    options = options or JsonOptions()
    ensure_loadable(text, options, FORMAT_NAME, LOAD_METHOD_NAME)

    try:
        data = json.loads(
            text,
            object_pairs_hook=_Pairs,
            parse_float=Decimal,
            parse_int=Decimal,
            parse_constant=_reject_constant
        )
    except ValueError as e:
        raise LoadError(FORMAT_NAME, ReportBuilder.for_method(
            LOAD_METHOD_NAME, f"cannot correctly load the JSON contents due to a deserialization failure: {e}")
            .append_input(text)
            .build()) from e

    logger.debug("Loaded JSON contents of %d characters", len(text))
    return _to_node(data)


def _to_node(data: Any) -> ValueNode:
    if isinstance(data, _Pairs):
        return ValueNode.object((key, _to_node(value)) for key, value in data)
    if isinstance(data, list):
        return ValueNode.array(_to_node(item) for item in data)
    return ValueNode.from_python(data)
