"""Apply violation fixes to source text."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from collections.abc import Iterable

from .models.violation import Fix, Violation

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FixResult:
    """Outcome of splicing fixes into a text."""

    output: str
    applied: int
    skipped: int

    @property
    def changed(self) -> bool:
        return self.applied > 0


def apply_fixes(text: str, violations: Iterable[Violation]) -> FixResult:
    """Return ``text`` with every non-overlapping fix applied.

    Fixes are taken in range order; a fix that overlaps one already accepted
    is skipped and left for a later run.
    """
    fixes: list[Fix] = sorted(
        (v.fix for v in violations if v.fix is not None),
        key=lambda f: f.range,
    )

    parts: list[str] = []
    cursor = 0
    applied = 0
    skipped = 0
    for fix in fixes:
        start, end = fix.range
        if start < cursor or end > len(text):
            logger.warning("Skipping overlapping or out-of-range fix at %d-%d", start, end)
            skipped += 1
            continue
        parts.append(text[cursor:start])
        parts.append(fix.text)
        cursor = end
        applied += 1
    parts.append(text[cursor:])

    logger.debug("Applied %d fix(es), skipped %d", applied, skipped)
    return FixResult(output="".join(parts), applied=applied, skipped=skipped)
