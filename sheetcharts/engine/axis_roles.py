"""Role mapping normalization.

The UI sends mappings with several spellings per role (``x`` / ``xAxis``,
``labels`` / ``label`` ...). ``resolve_mapping`` is the one place that knows
about those spellings; everything downstream reads the canonical
``AxisMapping``.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Tuple

from sheetcharts.engine.column_types import infer_column_type
from sheetcharts.models.chart_data import MULTI_COLUMN_ROLES, AxisMapping, AxisRole, Dataset

# Accepted keys per role, checked in order; the first non-empty one wins
ROLE_SYNONYMS: Dict[AxisRole, Tuple[str, ...]] = {
    AxisRole.X: ("x", "xAxis", "x_axis"),
    AxisRole.Y: ("y", "yAxis", "y_axis"),
    AxisRole.Z: ("z", "zAxis", "z_axis"),
    AxisRole.LABELS: ("labels", "label"),
    AxisRole.VALUES: ("values", "value"),
    AxisRole.GROUP: ("group", "category"),
    AxisRole.COLOR: ("color", "colour"),
    AxisRole.SIZE: ("size",),
    AxisRole.DATASETS: ("datasets", "dataset"),
}

ROLE_DISPLAY: Dict[AxisRole, Tuple[str, str]] = {
    AxisRole.X: ("X Axis", "Horizontal axis data"),
    AxisRole.Y: ("Y Axis", "Vertical axis values"),
    AxisRole.Z: ("Z Axis", "Depth axis values"),
    AxisRole.LABELS: ("Labels", "Category names for each slice or spoke"),
    AxisRole.VALUES: ("Values", "Numeric value for each label"),
    AxisRole.DATASETS: ("Datasets", "One series per selected column"),
    AxisRole.GROUP: ("Group By", "Split data into series by this column"),
    AxisRole.SIZE: ("Point Size", "Numeric column controlling point size"),
    AxisRole.COLOR: ("Color", "Color points by this column"),
}

NUMERIC_ROLES = frozenset({AxisRole.Y, AxisRole.Z, AxisRole.VALUES, AxisRole.SIZE})


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def _column_list(raw: Any) -> List[str]:
    if isinstance(raw, str):
        return [] if _is_blank(raw) else [raw]
    if isinstance(raw, (list, tuple)):
        columns: List[str] = []
        for item in raw:
            if _is_blank(item) or item in columns:
                continue
            columns.append(item)
        return columns
    return []


def _resolve_role(raw_mapping: Mapping[str, Any], role: AxisRole) -> Optional[Any]:
    for key in ROLE_SYNONYMS[role]:
        columns = _column_list(raw_mapping.get(key))
        if not columns:
            continue
        if role in MULTI_COLUMN_ROLES:
            return columns
        return columns[0]
    return None


def resolve_mapping(raw_mapping: Optional[Mapping[str, Any]]) -> AxisMapping:
    """Normalize a raw UI mapping into a canonical ``AxisMapping``. Never fails."""
    if isinstance(raw_mapping, AxisMapping):
        return raw_mapping
    if not isinstance(raw_mapping, Mapping):
        return AxisMapping()
    resolved = {role.value: _resolve_role(raw_mapping, role) for role in AxisRole}
    return AxisMapping(**{name: value for name, value in resolved.items() if value is not None})


def role_info(role: AxisRole) -> Dict[str, Any]:
    name, description = ROLE_DISPLAY[role]
    return {
        "role": role.value,
        "name": name,
        "description": description,
        "numeric": role in NUMERIC_ROLES,
        "multiple": role in MULTI_COLUMN_ROLES,
    }


def suggest_columns(dataset: Dataset, role: AxisRole) -> List[str]:
    """Columns that fit a role; numeric roles only offer number columns."""
    if role not in NUMERIC_ROLES:
        return list(dataset.columns)
    return [col for col in dataset.columns if infer_column_type(dataset, col) == "number"]


def suggest_all_roles(dataset: Dataset) -> Dict[str, List[str]]:
    types = {col: infer_column_type(dataset, col) for col in dataset.columns}
    numeric = [col for col in dataset.columns if types[col] == "number"]
    return {
        role.value: (list(numeric) if role in NUMERIC_ROLES else list(dataset.columns))
        for role in AxisRole
    }
