from __future__ import annotations

import json
from pathlib import Path
from collections.abc import Callable
from typing import Any

import pytest

from camelcase_checker.config import CONFIG_PATH_ENV_VAR
from camelcase_checker.core import lint_source


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(CONFIG_PATH_ENV_VAR, raising=False)
    monkeypatch.delenv("CAMELCASE_CHECKER_WARN_ONLY", raising=False)


@pytest.fixture
def reported() -> Callable[..., list[str]]:
    """Return the names reported for an ESTree document."""

    def _reported(
        tree: dict[str, Any],
        options: dict[str, Any] | None = None,
        text: str = "",
    ) -> list[str]:
        return [v.node.name for v in lint_source(text, tree, options)]

    return _reported


@pytest.fixture
def write_source(tmp_path: Path) -> Callable[..., Path]:
    """Write a source file and its ``.ast.json`` under tmp_path."""

    def _write(relative: str, text: str, tree: dict[str, Any]) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        path.with_name(path.name + ".ast.json").write_text(json.dumps(tree), encoding="utf-8")
        return path

    return _write
