"""Load ESTree JSON (acorn/espree output) into linked ``Node`` trees."""

from __future__ import annotations

import json
from bisect import bisect_left, bisect_right
from pathlib import Path
from typing import Any

from ..models.node import Node, SourceLocation

# Keys that carry position or trivia rather than syntax.
_SKIP_KEYS = {
    "type",
    "loc",
    "range",
    "start",
    "end",
    "parent",
    "comments",
    "tokens",
    "leadingComments",
    "trailingComments",
    "innerComments",
    "extra",
}


class AstLoadError(RuntimeError):
    """Raised when AST JSON cannot be read or does not look like ESTree."""


def _is_node(value: Any) -> bool:
    return isinstance(value, dict) and isinstance(value.get("type"), str)


def _range_of(data: dict[str, Any]) -> tuple[int, int] | None:
    rng = data.get("range")
    if not (isinstance(rng, list) and len(rng) == 2):
        rng = [data.get("start"), data.get("end")]
    start, end = rng[0], rng[1]
    if isinstance(start, int) and isinstance(end, int) and 0 <= start <= end:
        return start, end
    return None


def _new_node(data: dict[str, Any], parent: Node | None) -> Node:
    loc = data.get("loc")
    name = data.get("name")
    return Node(
        type=data["type"],
        name=name if isinstance(name, str) else None,
        range=_range_of(data),
        loc=SourceLocation.from_estree(loc) if isinstance(loc, dict) else None,
        parent=parent,
    )


def build_tree(data: Any) -> Node:
    """Convert an ESTree JSON document into a ``Node`` tree with parent links.

    Built with an explicit work stack so deeply nested expressions load
    without hitting the interpreter's recursion limit.
    """
    if not _is_node(data):
        raise AstLoadError("AST root must be an object with a string 'type' field")

    root = _new_node(data, None)
    pending: list[tuple[Node, dict[str, Any]]] = [(root, data)]

    while pending:
        node, payload = pending.pop()

        # Shorthand entries (``{a}``, ``import {a}``) serialise the same
        # identifier twice; load them as one node so identity dedup sees one.
        shared: dict[tuple[str, tuple[int, int]], Node] = {}

        def attach(value: dict[str, Any]) -> Node:
            child_range = _range_of(value)
            key = (str(value.get("name")), child_range)
            if value["type"] == "Identifier" and child_range is not None and key in shared:
                return shared[key]
            child = _new_node(value, node)
            if value["type"] == "Identifier" and child_range is not None:
                shared[key] = child
            pending.append((child, value))
            return child

        for key, value in payload.items():
            if key in _SKIP_KEYS or (key == "name" and isinstance(value, str)):
                continue
            if _is_node(value):
                node.children[key] = attach(value)
            elif isinstance(value, list) and all(item is None or _is_node(item) for item in value):
                node.children[key] = [attach(item) if _is_node(item) else None for item in value]
            else:
                # computed, shorthand, kind, Literal.value, ...
                node.attributes[key] = value

    return root


def load_ast(path: Path) -> Node:
    """Read and convert the ESTree JSON stored at ``path``."""
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise AstLoadError(f"Failed to read AST file {path}: {exc}") from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise AstLoadError(f"Invalid JSON in AST file {path}: {exc}") from exc
    except RecursionError as exc:
        raise AstLoadError(f"AST file {path} is nested too deeply to decode") from exc

    return build_tree(data)


class SourceCode:
    """Source text with offset-to-position lookup.

    ESTree producers written in JavaScript (acorn, espree) report offsets in
    UTF-16 code units. Characters outside the BMP take two units but one
    Python index, so offsets are mapped back before slicing.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self._line_starts = [0]
        for index, char in enumerate(text):
            if char == "\n":
                self._line_starts.append(index + 1)

        # _unit_offsets[i] is the UTF-16 offset of text[i]; None when they agree.
        self._unit_offsets: list[int] | None = None
        if any(ord(char) > 0xFFFF for char in text):
            offsets = [0]
            for char in text:
                offsets.append(offsets[-1] + (2 if ord(char) > 0xFFFF else 1))
            self._unit_offsets = offsets

    def index(self, offset: int) -> int:
        """Return the Python string index of a UTF-16 ``offset``."""
        if self._unit_offsets is None:
            return offset
        return bisect_left(self._unit_offsets, offset)

    def span(self, node: Node) -> tuple[int, int] | None:
        """Return the node's range as Python string indices."""
        if node.range is None:
            return None
        start, end = node.range
        return self.index(start), self.index(end)

    def get_text(self, node: Node) -> str:
        """Return the literal source text spanned by ``node``."""
        span = self.span(node)
        if span is None:
            return node.name or ""
        return self.text[span[0] : span[1]]

    def position(self, offset: int) -> tuple[int, int]:
        """Return the (1-based line, 0-based column) of a UTF-16 ``offset``."""
        index = self.index(offset)
        line_index = bisect_right(self._line_starts, index) - 1
        return line_index + 1, index - self._line_starts[line_index]
