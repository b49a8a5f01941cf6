"""Source and AST file discovery utilities."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

EXCLUDES = {"node_modules", ".git", ".venv"}
AST_SUFFIX = ".ast.json"


def source_for(ast_path: Path) -> Path:
    """Return the source file an AST file describes (``a.js.ast.json`` -> ``a.js``)."""
    return ast_path.with_name(ast_path.name[: -len(AST_SUFFIX)])


def discover_asts(root: Path) -> list[tuple[Path, Path]]:
    """Find ``*.ast.json`` files under root, paired with their source files.

    Vendor directories are excluded. AST files whose source file is missing
    are skipped.
    """
    root = root.resolve()
    found: list[tuple[Path, Path]] = []

    def should_skip(p: Path) -> bool:
        parts = set(p.parts)
        return any(ex in parts for ex in EXCLUDES)

    for path in sorted(root.rglob(f"*{AST_SUFFIX}")):
        if not path.is_file():
            continue
        if should_skip(path.relative_to(root)):
            continue
        source = source_for(path)
        if not source.is_file():
            logger.warning("Skipping %s: source file %s not found", path, source.name)
            continue
        found.append((source, path))

    logger.debug("Discovered %d AST file(s) under %s", len(found), root)
    return found
