"""First-occurrence value indexing for category axes."""
from __future__ import annotations

from typing import Any, Dict, Iterable, List


def unique_values(values: Iterable[Any]) -> List[Any]:
    """Distinct values in order of first occurrence (not sorted)."""
    seen = set()
    unique: List[Any] = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        unique.append(value)
    return unique


def index_values(values: Iterable[Any]) -> Dict[Any, int]:
    """Map each distinct value to its first-occurrence position."""
    return {value: position for position, value in enumerate(unique_values(values))}


def label_text(value: Any) -> str:
    # 2020.0 -> "2020" so numeric category cells read like the sheet shows them
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
