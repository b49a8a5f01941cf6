"""Report aggregation and schema-friendly output."""

from __future__ import annotations

from typing import Any

from .rules.camelcase import META, RULE_ID


def aggregate(files: list[dict[str, Any]], severity: str = "error") -> dict[str, Any]:
    """Aggregate per-file violations into a single report.

    The input ``files`` is expected to be a list of dicts with at least
    ``path`` and ``violations`` keys; ``fixed`` is optional. ``violations`` is a
    list of ``Violation.to_dict()`` payloads.
    """

    total_violations = sum(len(f.get("violations", [])) for f in files)
    fixable = sum(
        1 for f in files for v in f.get("violations", []) if v.get("fix") is not None
    )

    report: dict[str, Any] = {
        "version": "1",
        "rule": {
            "id": RULE_ID,
            "description": META["docs"]["description"],
            "fixable": META["fixable"] is not None,
        },
        "severity": severity,
        "hasViolations": total_violations > 0,
        "files": files,
        "totals": {
            "files": len(files),
            "violations": total_violations,
            "fixable": fixable,
            "fixed": sum(f.get("fixed", 0) for f in files),
        },
    }

    return report
