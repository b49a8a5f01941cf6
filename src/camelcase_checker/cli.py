"""CLI entrypoint for checking identifier naming across a source tree."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from .config import ConfigError
from .core import lint_repository
from .parsers.estree import AstLoadError
from .summary import render_summary

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_VIOLATIONS = 10

WARN_ONLY_ENV_VAR = "CAMELCASE_CHECKER_WARN_ONLY"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--root",
        type=Path,
        default=Path("."),
        help="Directory scanned for *.ast.json files and their sources",
    )
    parser.add_argument(
        "--config",
        dest="config_source",
        type=str,
        default=None,
        help="Path or URL of the rule configuration (JSON or YAML)",
    )
    parser.add_argument("--fix", action="store_true", help="Rewrite fixable identifiers in place")
    parser.add_argument(
        "--warn-only", action="store_true", help="Report violations without failing"
    )
    parser.add_argument(
        "--summary",
        type=Path,
        default=None,
        help="Write a Markdown summary to this path",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def _warn_only_from_env() -> bool:
    return os.getenv(WARN_ONLY_ENV_VAR, "").strip().lower() in {"1", "true", "yes", "y"}


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        report = lint_repository(args.root, config_source=args.config_source, fix=args.fix)
    except (ConfigError, AstLoadError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return EXIT_ERROR
    except OSError as exc:
        print(f"ERROR: Failed to read or write a source file: {exc}", file=sys.stderr)
        return EXIT_ERROR

    print(json.dumps(report, indent=2))

    if args.summary is not None:
        args.summary.write_text(render_summary(report), encoding="utf-8")

    totals = report.get("totals", {})
    remaining = totals.get("violations", 0) - totals.get("fixed", 0)
    if remaining <= 0 or report.get("severity") != "error":
        return EXIT_OK
    if args.warn_only or _warn_only_from_env():
        return EXIT_OK
    return EXIT_VIOLATIONS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
