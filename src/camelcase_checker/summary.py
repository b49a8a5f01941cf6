"""Human-readable Markdown summary of a lint report."""

from __future__ import annotations

from typing import Any


def render_summary(report: dict[str, Any]) -> str:
    """Return a Markdown string with totals and a table of violations."""
    totals = report.get("totals", {})
    files = report.get("files", [])

    lines = []
    lines.append("# camelcase-checker Summary")
    lines.append("")
    lines.append(
        f"Files checked: {totals.get('files', 0)} | Violations: {totals.get('violations', 0)}"
        f" | Fixable: {totals.get('fixable', 0)} | Fixed: {totals.get('fixed', 0)}"
    )
    lines.append("")
    lines.append("| File | Line | Identifier | Suggested |")
    lines.append("| --- | --- | --- | --- |")

    has_rows = False

    for entry in files:
        path = entry.get("path") or "(unknown file)"
        violations = entry.get("violations") or []
        if not violations:
            lines.append(f"| {path} | n/a | No violations | n/a |")
            has_rows = True
            continue

        for violation in violations:
            line = f"{violation.get('line', 0)}:{violation.get('column', 0)}"
            fix = violation.get("fix") or {}
            suggested = fix.get("text") or "n/a"
            lines.append(f"| {path} | {line} | `{violation.get('name', '')}` | {suggested} |")
            has_rows = True

    if not has_rows:
        lines.append("| (no files checked) | n/a | No violations | n/a |")

    return "\n".join(lines) + "\n"
