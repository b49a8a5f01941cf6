#!/usr/bin/env python3
"""Local entrypoint to run the checker from a source checkout.

Usage:
  python scripts/lint.py --root . [--config path_or_url] [--fix] [--warn-only]

Each source file to check needs its ESTree JSON beside it as
``<file>.ast.json`` (e.g. produced with ``acorn --ecma2020 --locations``).
This calls the same entrypoint as the installed ``camelcase-checker`` command.
"""

from __future__ import annotations

from camelcase_checker.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
