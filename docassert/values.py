"""Format-agnostic value model for docassert."""

from __future__ import annotations

import json
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Iterator, Optional


class ValueKind(Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    ARRAY = "array"
    OBJECT = "object"


@dataclass(frozen=True)
class ValueNode:
    """
    A single node of a loaded JSON document.

    Scalars keep their value (``str``, ``Decimal``, ``bool`` or ``None``),
    arrays a tuple of nodes and objects a tuple of ``(key, node)`` pairs in
    source order, duplicates included.
    """
    kind: ValueKind
    value: Any = None

    @classmethod
    def string(cls, value: str) -> ValueNode:
        return cls(ValueKind.STRING, value)

    @classmethod
    def number(cls, value: Decimal | int | float | str) -> ValueNode:
        return cls(ValueKind.NUMBER, Decimal(str(value)))

    @classmethod
    def boolean(cls, value: bool) -> ValueNode:
        return cls(ValueKind.BOOLEAN, bool(value))

    @classmethod
    def null(cls) -> ValueNode:
        return cls(ValueKind.NULL, None)

    @classmethod
    def array(cls, items) -> ValueNode:
        return cls(ValueKind.ARRAY, tuple(items))

    @classmethod
    def object(cls, pairs) -> ValueNode:
        return cls(ValueKind.OBJECT, tuple((str(k), v) for k, v in pairs))

    @classmethod
    def from_python(cls, data: Any) -> ValueNode:
        """Build a node tree from plain ``json.loads``-style data."""
        if data is None:
            return cls.null()
        if isinstance(data, bool):
            return cls.boolean(data)
        if isinstance(data, (int, float, Decimal)):
            return cls.number(data)
        if isinstance(data, str):
            return cls.string(data)
        if isinstance(data, dict):
            return cls.object((k, cls.from_python(v)) for k, v in data.items())
        if isinstance(data, (list, tuple)):
            return cls.array(cls.from_python(item) for item in data)
        raise TypeError(f"Cannot represent a {type(data).__name__} as a JSON node")

    @property
    def is_null(self) -> bool:
        return self.kind == ValueKind.NULL

    @property
    def is_container(self) -> bool:
        return self.kind in (ValueKind.ARRAY, ValueKind.OBJECT)

    def items(self) -> Iterator[tuple[str, ValueNode]]:
        """Iterate the ``(key, node)`` pairs of an object node."""
        return iter(self.value) if self.kind == ValueKind.OBJECT else iter(())

    def get(self, key: str) -> Optional[ValueNode]:
        """Case-insensitive property lookup; the first matching pair wins."""
        wanted = key.casefold()
        for name, node in self.items():
            if name.casefold() == wanted:
                return node
        return None

    def to_python(self) -> Any:
        """Convert to plain dict/list data; the last duplicate key wins."""
        if self.kind == ValueKind.ARRAY:
            return [item.to_python() for item in self.value]
        if self.kind == ValueKind.OBJECT:
            return {key: node.to_python() for key, node in self.value}
        return self.value

    def render(self, indent: Optional[int] = 2) -> str:
        """Render as JSON text, preserving the literal form of numbers."""
        return _render(self, indent, 0)

    def describe(self) -> str:
        """Describe the kind and value in a humanly-readable way."""
        if self.kind == ValueKind.OBJECT:
            return f"an object: {self.render(indent=None)}"
        if self.kind == ValueKind.ARRAY:
            return f"an array: {self.render(indent=None)}"
        if self.kind == ValueKind.STRING:
            return f"a string: {self.value}"
        if self.kind == ValueKind.NUMBER:
            return f"a number: {self.value}"
        if self.kind == ValueKind.BOOLEAN:
            return "true boolean" if self.value else "false boolean"
        return "type null"

    def __str__(self) -> str:
        return self.render()


def _render(node: ValueNode, indent: Optional[int], depth: int) -> str:
    if node.kind == ValueKind.STRING:
        return json.dumps(node.value, ensure_ascii=False)
    if node.kind == ValueKind.NUMBER:
        return str(node.value)
    if node.kind == ValueKind.BOOLEAN:
        return "true" if node.value else "false"
    if node.kind == ValueKind.NULL:
        return "null"

    if node.kind == ValueKind.ARRAY:
        parts = [_render(item, indent, depth + 1) for item in node.value]
        open_, close = "[", "]"
    else:
        parts = [
            f"{json.dumps(key, ensure_ascii=False)}:{'' if indent is None else ' '}"
            f"{_render(child, indent, depth + 1)}"
            for key, child in node.value
        ]
        open_, close = "{", "}"

    if not parts:
        return open_ + close
    if indent is None:
        return open_ + ",".join(parts) + close

    pad = " " * (indent * (depth + 1))
    end_pad = " " * (indent * depth)
    return open_ + "\n" + ",\n".join(pad + p for p in parts) + "\n" + end_pad + close
