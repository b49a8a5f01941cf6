"""Rule to flag non-camelcased identifiers.

The rule inspects ``Identifier`` nodes and looks at the parent and grandparent
node kinds to decide whether the name is one the author controls. Property
names in member expressions, object literals and destructuring patterns can be
exempted with ``{"properties": "never"}``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any, Protocol

from ..models.node import Node
from ..models.violation import Fix, Violation
from ..naming import is_underscored, rewrite, strip_private_flags

logger = logging.getLogger(__name__)

RULE_ID = "camelcase"
MESSAGE = "Identifier '{name}' is not in camel case."

OPTIONS_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "properties": {"type": "string"},
    },
    "additionalProperties": False,
}

META: dict[str, Any] = {
    "docs": {
        "description": "enforce camelcase naming convention",
        "category": "Stylistic Issues",
        "recommended": False,
    },
    "schema": [OPTIONS_SCHEMA],
    "fixable": "whitespace",
}


class TextSource(Protocol):
    """Structural protocol for source text retrieval."""

    def span(self, node: Node) -> tuple[int, int] | None: ...

    def get_text(self, node: Node) -> str: ...

    def position(self, offset: int) -> tuple[int, int]: ...


class Mode(str, Enum):
    """How property-like identifiers are treated."""

    ALWAYS = "always"
    NEVER = "never"

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None) -> Mode:
        """Resolve the mode from rule options; unknown values mean ``always``."""
        value = (options or {}).get("properties")
        if value == cls.NEVER.value:
            return cls.NEVER
        return cls.ALWAYS


class NodeKind(Enum):
    """The parent node shapes this rule distinguishes."""

    MEMBER_EXPRESSION = "MemberExpression"
    PROPERTY = "Property"
    OBJECT_PATTERN = "ObjectPattern"
    IMPORT_SPECIFIER = "ImportSpecifier"
    ASSIGNMENT = "AssignmentExpression"
    CALL = "CallExpression"
    OTHER = "other"

    @classmethod
    def of(cls, node: Node | None) -> NodeKind:
        if node is None:
            return cls.OTHER
        return _KIND_BY_TYPE.get(node.type, cls.OTHER)


_KIND_BY_TYPE = {
    "MemberExpression": NodeKind.MEMBER_EXPRESSION,
    "Property": NodeKind.PROPERTY,
    "ObjectPattern": NodeKind.OBJECT_PATTERN,
    "ImportSpecifier": NodeKind.IMPORT_SPECIFIER,
    "ImportDefaultSpecifier": NodeKind.IMPORT_SPECIFIER,
    "ImportNamespaceSpecifier": NodeKind.IMPORT_SPECIFIER,
    "AssignmentExpression": NodeKind.ASSIGNMENT,
    "CallExpression": NodeKind.CALL,
    "NewExpression": NodeKind.CALL,
}


class ContextKind(Enum):
    """Syntactic role of an identifier, derived from its ancestors."""

    PLAIN_REFERENCE = "plain-reference"
    MEMBER_OBJECT = "member-object"
    MEMBER_ACCESS = "member-access"
    ASSIGNMENT_TARGET = "assignment-target"
    PROPERTY_KEY_OR_VALUE = "property-key-or-value"
    PATTERN_KEY = "pattern-key"
    IMPORT_BINDING = "import-binding"
    CALL_ARGUMENT = "call-argument"


def effective_parent(node: Node) -> Node | None:
    """Return the parent, looking through one member expression wrapper."""
    parent = node.parent
    if NodeKind.of(parent) is NodeKind.MEMBER_EXPRESSION:
        return parent.parent
    return parent


def _is_member_object(node: Node, member: Node) -> bool:
    obj = member.child("object")
    return obj is not None and obj.type == "Identifier" and obj.name == node.name


def _is_assigned_member(node: Node, assignment: Node) -> bool:
    right = assignment.child("right")
    if NodeKind.of(right) is not NodeKind.MEMBER_EXPRESSION:
        return True
    left = assignment.child("left")
    if NodeKind.of(left) is not NodeKind.MEMBER_EXPRESSION:
        return False
    prop = left.child("property")
    return prop is not None and prop.name == node.name


def context_of(node: Node) -> ContextKind:
    """Classify the syntactic position of an identifier node."""
    parent = node.parent
    kind = NodeKind.of(parent)

    if kind is NodeKind.MEMBER_EXPRESSION:
        if _is_member_object(node, parent):
            return ContextKind.MEMBER_OBJECT
        outer = effective_parent(node)
        if NodeKind.of(outer) is NodeKind.ASSIGNMENT and _is_assigned_member(node, outer):
            return ContextKind.ASSIGNMENT_TARGET
        return ContextKind.MEMBER_ACCESS

    if kind is NodeKind.PROPERTY:
        if (
            NodeKind.of(parent.parent) is NodeKind.OBJECT_PATTERN
            and parent.child("key") is node
            and parent.child("value") is not node
        ):
            return ContextKind.PATTERN_KEY
        return ContextKind.PROPERTY_KEY_OR_VALUE

    if kind is NodeKind.IMPORT_SPECIFIER:
        return ContextKind.IMPORT_BINDING

    if kind is NodeKind.CALL:
        return ContextKind.CALL_ARGUMENT

    return ContextKind.PLAIN_REFERENCE


def is_violation(node: Node, mode: Mode = Mode.ALWAYS) -> bool:
    """Return True if ``node`` breaks the camelcase convention under ``mode``."""
    if node.name is None:
        return False
    # Leading and trailing underscores flag private/protected identifiers.
    underscored = is_underscored(strip_private_flags(node.name))
    if not underscored:
        return False

    context = context_of(node)

    if context in (ContextKind.MEMBER_OBJECT, ContextKind.ASSIGNMENT_TARGET):
        return mode is Mode.ALWAYS
    if context is ContextKind.MEMBER_ACCESS:
        return False

    if context is ContextKind.PATTERN_KEY:
        return False
    if context is ContextKind.PROPERTY_KEY_OR_VALUE:
        if mode is Mode.NEVER:
            return False
        # Object literals passed straight to a call often mirror an external API.
        container = node.parent.parent
        return NodeKind.of(container.parent if container else None) is not NodeKind.CALL

    if context is ContextKind.IMPORT_BINDING:
        local = node.parent.child("local")
        return local is not None and local.name == node.name

    return context is not ContextKind.CALL_ARGUMENT


def _location(node: Node, source: TextSource | None) -> tuple[int, int, int, int]:
    if node.loc is not None:
        loc = node.loc
        return loc.start_line, loc.start_column + 1, loc.end_line, loc.end_column + 1
    if source is not None and node.range is not None:
        start_line, start_col = source.position(node.range[0])
        end_line, end_col = source.position(node.range[1])
        return start_line, start_col + 1, end_line, end_col + 1
    return 0, 0, 0, 0


def classify(
    node: Node,
    mode: Mode = Mode.ALWAYS,
    source: TextSource | None = None,
) -> Violation | None:
    """Return a violation for ``node`` or None when its name is acceptable.

    Without ``source``, without a node range, or when the span does not hold
    the identifier's name, the violation carries no fix.
    """
    if not is_violation(node, mode):
        return None

    fix = None
    span = source.span(node) if source is not None else None
    if span is not None:
        text = source.get_text(node)
        if text == node.name:
            fix = Fix(range=span, text=rewrite(text))
        else:
            logger.debug("No fix for %r: source span holds %r", node.name, text)

    line, column, end_line, end_column = _location(node, source)
    return Violation(
        rule_id=RULE_ID,
        node=node,
        message=MESSAGE.format(name=node.name),
        line=line,
        column=column,
        end_line=end_line,
        end_column=end_column,
        fix=fix,
    )


class CamelcaseRule:
    """One traversal's worth of rule state.

    Keeps the set of already reported nodes so an identifier shared between
    two syntactic roles (shorthand destructuring, shorthand imports) is only
    reported once. Create a new instance per traversal.
    """

    def __init__(self, mode: Mode = Mode.ALWAYS, source: TextSource | None = None) -> None:
        self.mode = mode
        self.source = source
        self._reported: set[Node] = set()

    def check(self, node: Node) -> Violation | None:
        if node in self._reported:
            return None
        violation = classify(node, self.mode, self.source)
        if violation is not None:
            self._reported.add(node)
            logger.debug("%s: %s", RULE_ID, violation.message)
        return violation


def create_rule(
    options: Mapping[str, Any] | None = None,
    source: TextSource | None = None,
) -> CamelcaseRule:
    """Build a rule instance for one traversal from rule options."""
    return CamelcaseRule(mode=Mode.from_options(options), source=source)
