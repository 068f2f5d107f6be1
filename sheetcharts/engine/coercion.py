"""Cell value -> float coercion.

Spreadsheet cells arrive as strings, numbers or nulls. Anything that does not
read as a finite number becomes ``0.0``; this is the silent fallback the chart
builders rely on. ``NumericTracker`` counts those fallbacks per column so the
opt-in strict mode can report them.
"""
from __future__ import annotations

import math
import numbers
import re
from typing import Any, Dict, List, Optional

# Leading numeric prefix: "12%" -> 12, "3.5kg" -> 3.5, " -4e2 " -> -400
_NUMERIC_PREFIX_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_number(value: Any) -> Optional[float]:
    """Return the finite float a cell denotes, or None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real):
        numeric = float(value)
        return numeric if math.isfinite(numeric) else None
    text = str(value).strip()
    if not text:
        return None
    match = _NUMERIC_PREFIX_RE.match(text)
    if not match:
        return None
    try:
        numeric = float(match.group(0))
    except ValueError:
        return None
    return numeric if math.isfinite(numeric) else None


def coerce_number(value: Any, default: float = 0.0) -> float:
    parsed = parse_number(value)
    return default if parsed is None else parsed


class NumericTracker:
    """Coerce cells while counting non-numeric ones per column."""

    def __init__(self, *, strict: bool = False) -> None:
        self.strict = strict
        self._failures: Dict[str, int] = {}

    def coerce(self, value: Any, column: str) -> float:
        parsed = parse_number(value)
        if parsed is None:
            self._failures[column] = self._failures.get(column, 0) + 1
            return 0.0
        return parsed

    def failures(self) -> Dict[str, int]:
        return dict(self._failures)

    def warnings(self) -> List[str]:
        if not self.strict:
            return []
        return [
            f"{count} row(s) had non-numeric values in column '{column}'"
            for column, count in self._failures.items()
        ]
