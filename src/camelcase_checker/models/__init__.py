"""Data models for the camelcase checker."""

from __future__ import annotations

from .node import Node, SourceLocation
from .violation import Fix, Violation

__all__ = [
    "Fix",
    "Node",
    "SourceLocation",
    "Violation",
]
