"""Tree walking: run a rule over every identifier of one tree."""

from __future__ import annotations

from collections.abc import Iterator

from .models.node import Node
from .models.violation import Violation
from .rules.camelcase import CamelcaseRule

IDENTIFIER_TYPES = {"Identifier"}


def iter_nodes(root: Node) -> Iterator[Node]:
    """Yield ``root`` and its descendants depth first, in field order.

    A node reachable through two fields (a shorthand property key/value) is
    yielded once per field, as a tree walker would visit it.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(list(node.iter_children())))


def check_tree(root: Node, rule: CamelcaseRule) -> list[Violation]:
    """Run ``rule`` on each identifier under ``root``.

    ``rule`` carries the reported set for this traversal, so pass a fresh
    instance for each tree. Violations come back in source order.
    """
    violations: list[Violation] = []
    for node in iter_nodes(root):
        if node.type not in IDENTIFIER_TYPES:
            continue
        violation = rule.check(node)
        if violation is not None:
            violations.append(violation)
    return sorted(violations, key=lambda v: v.offset)
