"""Syntax tree node model consumed by the checker."""

from __future__ import annotations

from dataclasses import dataclass, field
from collections.abc import Iterator
from typing import Any, Union

ChildValue = Union["Node", list[Union["Node", None]], None]


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Line/column span of a node (line 1-based, column 0-based as in ESTree)."""

    start_line: int
    start_column: int
    end_line: int
    end_column: int

    @classmethod
    def from_estree(cls, loc: dict[str, Any]) -> SourceLocation:
        start = loc.get("start") or {}
        end = loc.get("end") or {}
        return cls(
            start_line=int(start.get("line", 0)),
            start_column=int(start.get("column", 0)),
            end_line=int(end.get("line", 0)),
            end_column=int(end.get("column", 0)),
        )


@dataclass(eq=False, slots=True)
class Node:
    """A syntax tree node with a read-only back-reference to its parent.

    Nodes compare and hash by identity: two nodes with the same type and name
    are still different syntactic nodes.
    """

    type: str
    name: str | None = None
    range: tuple[int, int] | None = None
    loc: SourceLocation | None = None
    children: dict[str, ChildValue] = field(default_factory=dict)
    attributes: dict[str, Any] = field(default_factory=dict)
    parent: Node | None = field(default=None, repr=False)

    def child(self, key: str) -> Node | None:
        """Return the single child stored under ``key``, if any."""
        value = self.children.get(key)
        return value if isinstance(value, Node) else None

    def iter_children(self) -> Iterator[Node]:
        for value in self.children.values():
            if isinstance(value, Node):
                yield value
            elif isinstance(value, list):
                for item in value:
                    if item is not None:
                        yield item

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        if self.name is not None:
            return f"Node({self.type} {self.name!r} @ {self.range})"
        return f"Node({self.type} @ {self.range})"
