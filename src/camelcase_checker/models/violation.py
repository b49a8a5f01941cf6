"""Violation record model."""

from __future__ import annotations

from dataclasses import dataclass

from .node import Node


@dataclass(frozen=True, slots=True)
class Fix:
    """Replace the source text in ``range`` with ``text``."""

    range: tuple[int, int]
    text: str

    def __post_init__(self) -> None:
        start, end = self.range
        if start < 0 or end < start:
            raise ValueError(f"Invalid fix range: {self.range}")

    def to_dict(self) -> dict[str, object]:
        return {"range": list(self.range), "text": self.text}


@dataclass(frozen=True, slots=True)
class Violation:
    """A single naming-convention violation reported for one node."""

    rule_id: str
    node: Node
    message: str
    line: int = 0
    column: int = 0
    end_line: int = 0
    end_column: int = 0
    fix: Fix | None = None

    @property
    def offset(self) -> int:
        if self.node.range is not None:
            return self.node.range[0]
        return 0

    def to_dict(self) -> dict[str, object]:
        return {
            "ruleId": self.rule_id,
            "message": self.message,
            "name": self.node.name,
            "line": self.line,
            "column": self.column,
            "endLine": self.end_line,
            "endColumn": self.end_column,
            "fix": self.fix.to_dict() if self.fix is not None else None,
        }
