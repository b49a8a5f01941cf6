from __future__ import annotations

import json
from pathlib import Path

import pytest

from camelcase_checker.cli import EXIT_ERROR, EXIT_OK, EXIT_VIOLATIONS, main
from camelcase_checker.config import RuleConfig
from camelcase_checker.core import lint_file, lint_repository
from camelcase_checker.discovery import discover_asts, source_for
from camelcase_checker.report import aggregate
from camelcase_checker.summary import render_summary

from estree_builders import call, const, expr, ident, literal, obj, program, prop

BAD_TEXT = "const my_var = 1;\n"
GOOD_TEXT = "const myVar = 1;\nfoo({my_option: 1});\n"


def _bad_tree(text: str = BAD_TEXT) -> dict:
    return program(const(ident("my_var", text), literal(1)))


def _good_tree(text: str = GOOD_TEXT) -> dict:
    return program(
        const(ident("myVar", text), literal(1)),
        expr(call(ident("foo", text), obj(prop(ident("my_option", text), literal(1))))),
    )


def test_discover_asts_pairs_sources_and_skips_vendor_dirs(tmp_path: Path, write_source):
    write_source("src/a.js", BAD_TEXT, _bad_tree())
    write_source("node_modules/lib/b.js", BAD_TEXT, _bad_tree())
    (tmp_path / "orphan.js.ast.json").write_text("{}", encoding="utf-8")

    found = discover_asts(tmp_path)

    assert [(s.name, a.name) for s, a in found] == [("a.js", "a.js.ast.json")]


def test_source_for():
    assert source_for(Path("x/a.mjs.ast.json")) == Path("x/a.mjs")


def test_lint_repository_reports_violations(tmp_path: Path, write_source):
    write_source("a.js", BAD_TEXT, _bad_tree())
    write_source("b.js", GOOD_TEXT, _good_tree())

    report = lint_repository(tmp_path)

    assert report["hasViolations"] is True
    assert report["totals"] == {"files": 2, "violations": 1, "fixable": 1, "fixed": 0}
    by_path = {f["path"]: f for f in report["files"]}
    [violation] = by_path["a.js"]["violations"]
    assert violation["message"] == "Identifier 'my_var' is not in camel case."
    assert violation["line"] == 1
    assert violation["column"] == 7
    assert by_path["b.js"]["violations"] == []


def test_lint_repository_fix_rewrites_source(tmp_path: Path, write_source):
    path = write_source("a.js", BAD_TEXT, _bad_tree())

    report = lint_repository(tmp_path, fix=True)

    assert path.read_text(encoding="utf-8") == "const myVar = 1;\n"
    assert report["totals"]["fixed"] == 1


def test_lint_repository_respects_disabled_rule(tmp_path: Path, write_source):
    write_source("a.js", BAD_TEXT, _bad_tree())
    (tmp_path / ".camelcaserc.json").write_text(
        json.dumps({"rules": {"camelcase": "off"}}), encoding="utf-8"
    )

    report = lint_repository(tmp_path)

    assert report["hasViolations"] is False
    assert report["severity"] == "off"


def test_aggregate_empty():
    report = aggregate([])
    assert report["hasViolations"] is False
    assert report["totals"] == {"files": 0, "violations": 0, "fixable": 0, "fixed": 0}


def test_render_summary_lists_violations(tmp_path: Path, write_source):
    write_source("a.js", BAD_TEXT, _bad_tree())
    write_source("b.js", GOOD_TEXT, _good_tree())

    summary = render_summary(lint_repository(tmp_path))

    assert "Files checked: 2 | Violations: 1" in summary
    assert "| a.js | 1:7 | `my_var` | myVar |" in summary
    assert "| b.js | n/a | No violations | n/a |" in summary


def test_render_summary_without_files():
    assert "(no files checked)" in render_summary(aggregate([]))


# ---- CLI ------------------------------------------------------------------------------


def test_cli_exit_code_on_violations(tmp_path: Path, write_source, capsys):
    write_source("a.js", BAD_TEXT, _bad_tree())

    assert main(["--root", str(tmp_path)]) == EXIT_VIOLATIONS
    assert json.loads(capsys.readouterr().out)["totals"]["violations"] == 1


def test_cli_clean_tree(tmp_path: Path, write_source):
    write_source("b.js", GOOD_TEXT, _good_tree())
    assert main(["--root", str(tmp_path)]) == EXIT_OK


@pytest.mark.parametrize("use_env", [False, True])
def test_cli_warn_only(tmp_path: Path, write_source, monkeypatch, use_env):
    write_source("a.js", BAD_TEXT, _bad_tree())
    argv = ["--root", str(tmp_path)]
    if use_env:
        monkeypatch.setenv("CAMELCASE_CHECKER_WARN_ONLY", "yes")
    else:
        argv.append("--warn-only")

    assert main(argv) == EXIT_OK


def test_cli_warn_severity_does_not_fail(tmp_path: Path, write_source):
    write_source("a.js", BAD_TEXT, _bad_tree())
    config = tmp_path / "cfg.yaml"
    config.write_text("rules:\n  camelcase: warn\n", encoding="utf-8")

    assert main(["--root", str(tmp_path), "--config", str(config)]) == EXIT_OK


def test_cli_fix_and_summary(tmp_path: Path, write_source):
    path = write_source("a.js", BAD_TEXT, _bad_tree())
    summary = tmp_path / "summary.md"

    assert main(["--root", str(tmp_path), "--fix", "--summary", str(summary)]) == EXIT_OK
    assert path.read_text(encoding="utf-8") == "const myVar = 1;\n"
    assert summary.read_text(encoding="utf-8").startswith("# camelcase-checker Summary")


def test_cli_config_error(tmp_path: Path, capsys):
    config = tmp_path / "cfg.json"
    config.write_text(json.dumps({"bogus": 1}), encoding="utf-8")

    assert main(["--root", str(tmp_path), "--config", str(config)]) == EXIT_ERROR
    assert capsys.readouterr().err.startswith("ERROR: Invalid configuration")


def test_cli_ast_error(tmp_path: Path, capsys):
    (tmp_path / "a.js").write_text(BAD_TEXT, encoding="utf-8")
    (tmp_path / "a.js.ast.json").write_text("[]", encoding="utf-8")

    assert main(["--root", str(tmp_path)]) == EXIT_ERROR
    assert "AST root" in capsys.readouterr().err


def test_report_describes_the_rule():
    rule = aggregate([])["rule"]
    assert rule == {
        "id": "camelcase",
        "description": "enforce camelcase naming convention",
        "fixable": True,
    }


def test_lint_file_uses_configured_mode(tmp_path: Path, write_source):
    text = "const cfg = {my_key: 1};\n"
    tree = program(const(ident("cfg", text), obj(prop(ident("my_key", text), literal(1)))))
    path = write_source("a.js", text, tree)
    ast_path = path.with_name("a.js.ast.json")

    never = lint_file(path, ast_path, config=RuleConfig(options={"properties": "never"}))
    always = lint_file(path, ast_path, config=RuleConfig())

    assert never["violations"] == []
    assert [v["name"] for v in always["violations"]] == ["my_key"]


def test_cli_deeply_nested_ast_does_not_crash(tmp_path: Path, write_source):
    tree: dict = ident("my_var")
    for _ in range(600):
        tree = {"type": "UnaryExpression", "operator": "!", "prefix": True, "argument": tree}
    write_source("deep.js", "!my_var;\n", program(expr(tree)))

    assert main(["--root", str(tmp_path)]) in (EXIT_OK, EXIT_VIOLATIONS)
