"""Column type inference and summaries for column pickers.

The inferred types are advisory: they drive role suggestions in the UI and
never change how a chart is built.
"""
from __future__ import annotations

import math
from typing import Any, Dict, List

import pandas as pd

from sheetcharts.models.chart_data import Dataset

_TYPE_SAMPLE_SIZE = 10
_EXAMPLE_SIZE = 3

COLUMN_TYPES = ("number", "date", "string")


def _sample_values(dataset: Dataset, column: str, sample_size: int) -> List[Any]:
    sample: List[Any] = []
    for value in dataset.column_values(column):
        if value is None:
            continue
        sample.append(value)
        if len(sample) >= sample_size:
            break
    return sample


def _is_finite_number(value: Any) -> bool:
    # bool is an int subclass; flags never count as numbers
    if isinstance(value, bool):
        return False
    numeric = pd.to_numeric(value, errors="coerce")
    if pd.isna(numeric):
        return False
    return math.isfinite(float(numeric))


def _is_date(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    parsed = pd.to_datetime(value, errors="coerce")
    return not pd.isna(parsed)


def infer_column_type(
    dataset: Dataset,
    column: str,
    sample_size: int = _TYPE_SAMPLE_SIZE,
) -> str:
    """Classify a column as ``number``, ``date`` or ``string`` from its first non-null values."""
    sample = _sample_values(dataset, column, sample_size)
    if not sample:
        return "string"
    if all(_is_finite_number(value) for value in sample):
        return "number"
    if all(_is_date(value) for value in sample):
        return "date"
    return "string"


def _safe_value(value: Any) -> Any:
    if isinstance(value, (int, float, str, bool)) or value is None:
        return value
    return str(value)


def summarize_columns(dataset: Dataset, sample_size: int = _EXAMPLE_SIZE) -> Dict[str, Any]:
    frame = dataset.to_frame()
    rows = int(len(frame))

    column_types: Dict[str, str] = {}
    unique_counts: Dict[str, int] = {}
    null_counts: Dict[str, int] = {}
    examples: Dict[str, List[Any]] = {}
    by_type: Dict[str, List[str]] = {name: [] for name in COLUMN_TYPES}

    for col in dataset.columns:
        series = frame[col]
        inferred = infer_column_type(dataset, col)
        column_types[col] = inferred
        by_type[inferred].append(col)
        unique_counts[col] = int(series.nunique(dropna=True))
        null_counts[col] = int(series.isna().sum())
        examples[col] = [_safe_value(v) for v in series.dropna().head(sample_size).tolist()]

    return {
        "columns": list(dataset.columns),
        "rows": rows,
        "column_types": column_types,
        "unique_counts": unique_counts,
        "null_counts": null_counts,
        "examples": examples,
        "columns_by_type": by_type,
    }
