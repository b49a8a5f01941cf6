"""Core linting entrypoints.

This module MUST NOT contain CLI concerns so it can be used both by the
command-line wrapper and by editor or CI integrations.
"""

from __future__ import annotations

import logging
from pathlib import Path
from collections.abc import Mapping
from typing import Any

from .config import RuleConfig, load_config
from .discovery import discover_asts
from .fixer import apply_fixes
from .models.node import Node
from .models.violation import Violation
from .parsers.estree import SourceCode, build_tree, load_ast
from .report import aggregate
from .rules.camelcase import CamelcaseRule, Mode
from .traversal import check_tree

logger = logging.getLogger(__name__)


def lint_source(
    text: str,
    ast: Node | dict[str, Any],
    options: Mapping[str, Any] | Mode | None = None,
) -> list[Violation]:
    """Check one source text against its syntax tree.

    Params:
        text: the source the tree was parsed from (used for fixes/positions)
        ast: a ``Node`` tree or raw ESTree JSON
        options: rule options, e.g. ``{"properties": "never"}``, or a resolved
            ``Mode``

    Returns: violations in source order
    """
    root = ast if isinstance(ast, Node) else build_tree(ast)
    source = SourceCode(text)
    mode = options if isinstance(options, Mode) else Mode.from_options(options)
    rule = CamelcaseRule(mode=mode, source=source)
    return check_tree(root, rule)


def lint_file(
    source_path: Path,
    ast_path: Path,
    config: RuleConfig | None = None,
    fix: bool = False,
) -> dict[str, Any]:
    """Lint one source file using its AST file; optionally rewrite it in place.

    Returns a per-file entry for ``report.aggregate``.
    """
    config = config or RuleConfig()
    text = source_path.read_text(encoding="utf-8")

    violations: list[Violation] = []
    if config.enabled:
        violations = lint_source(text, load_ast(ast_path), config.mode)

    fixed = 0
    if fix and violations:
        result = apply_fixes(text, violations)
        if result.changed:
            source_path.write_text(result.output, encoding="utf-8")
            logger.info("Fixed %d identifier(s) in %s", result.applied, source_path)
        fixed = result.applied

    return {
        "path": str(source_path),
        "severity": config.severity,
        "violations": [v.to_dict() for v in violations],
        "fixed": fixed,
    }


def lint_repository(
    root: Path,
    config_source: Path | str | None = None,
    fix: bool = False,
) -> dict[str, Any]:
    """Lint every source file under ``root`` that has an ``.ast.json`` beside it.

    Params:
        root: directory to scan
        config_source: optional path or URL for the rule configuration; when
            None the environment or a ``.camelcaserc.*`` file in root is used
        fix: write fixed sources back to disk

    Returns: dict report (see ``report.aggregate``)
    """
    root = root.resolve()
    config = load_config(config_source, root=root)

    files: list[dict[str, Any]] = []
    for source_path, ast_path in discover_asts(root):
        entry = lint_file(source_path, ast_path, config=config, fix=fix)
        entry["path"] = str(source_path.relative_to(root))
        files.append(entry)

    return aggregate(files, severity=config.severity)
