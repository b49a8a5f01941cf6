"""Identifier name helpers: underscore detection and camelCase rewriting.

Leading and trailing underscore runs are treated as visibility markers
(``_private``, ``__dunder__``): they are never judged and always survive a
rewrite.
"""

from __future__ import annotations

import re

_PRIVATE_PREFIX = re.compile(r"^_+")
_PRIVATE_SUFFIX = re.compile(r"_+$")
_PRIVATE_FLAGS = re.compile(r"^_+|_+$")


def strip_private_flags(name: str) -> str:
    """Remove leading and trailing underscore runs from ``name``."""
    return _PRIVATE_FLAGS.sub("", name)


def is_underscored(name: str) -> bool:
    """Return True if ``name`` contains an underscore and is not all upper-case.

    ``MAX_SIZE`` style constants are allowed.
    """
    return "_" in name and name != name.upper()


def rewrite(text: str) -> str:
    """Remove internal underscores, upper-casing the character after each run.

    The prefix/suffix underscore runs are kept verbatim; other characters keep
    their case, so ``FOO_bar`` becomes ``FOOBar``.
    """
    prefix_match = _PRIVATE_PREFIX.search(text)
    suffix_match = _PRIVATE_SUFFIX.search(text)
    prefix = prefix_match.group(0) if prefix_match else ""
    suffix = suffix_match.group(0) if suffix_match else ""

    chars: list[str] = []
    was_underscore = False
    for char in strip_private_flags(text):
        if char == "_":
            was_underscore = True
            continue
        if was_underscore:
            char = char.upper()
            was_underscore = False
        chars.append(char)

    return prefix + "".join(chars) + suffix
