"""camelcase-checker core package.

This package provides the camelcase naming rule for ESTree syntax trees and
the scanning logic around it, callable from the CLI or from other tools.
"""

from .naming import is_underscored, rewrite
from .rules.camelcase import Mode, classify, create_rule

__all__ = [
    "Mode",
    "classify",
    "create_rule",
    "core",
    "is_underscored",
    "rewrite",
]
