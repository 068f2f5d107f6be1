"""Chart kind catalog and the per-kind transform contract."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

from sheetcharts.engine.coercion import NumericTracker
from sheetcharts.models.chart_data import AxisMapping, AxisRole, ChartKind, ChartOptions, Dataset

# Accepted spellings for kinds coming from the UI or stored analyses
_KIND_ALIASES: Dict[str, ChartKind] = {
    "2d-bar": ChartKind.BAR,
    "2d-line": ChartKind.LINE,
    "2d-area": ChartKind.AREA,
    "2d-pie": ChartKind.PIE,
    "2d-doughnut": ChartKind.DOUGHNUT,
    "2d-scatter": ChartKind.SCATTER,
    "2d-radar": ChartKind.RADAR,
    "bubble": ChartKind.SCATTER,
    "3d-bar": ChartKind.BAR3D,
    "3d-column": ChartKind.BAR3D,
    "bar-3d": ChartKind.BAR3D,
    "3d-scatter": ChartKind.SCATTER3D,
    "scatter-3d": ChartKind.SCATTER3D,
    "3d-surface": ChartKind.SURFACE3D,
    "surface-3d": ChartKind.SURFACE3D,
}


def parse_chart_kind(raw: Any) -> Optional[ChartKind]:
    if isinstance(raw, ChartKind):
        return raw
    text = str(raw or "").strip().lower()
    if not text:
        return None
    try:
        return ChartKind(text)
    except ValueError:
        return _KIND_ALIASES.get(text)


@dataclass
class BuildContext:
    """Everything a per-kind transform reads for one invocation."""

    kind: ChartKind
    dataset: Dataset
    mapping: AxisMapping
    options: ChartOptions
    numbers: NumericTracker = field(default_factory=NumericTracker)

    def number(self, row: Dict[str, Any], column: str) -> float:
        return self.numbers.coerce(self.dataset.value(row, column), column)


Transform = Callable[[BuildContext], Any]


@dataclass(frozen=True)
class ChartKindSpec:
    kind: ChartKind
    title: str
    description: str
    required: Tuple[AxisRole, ...]
    optional: Tuple[AxisRole, ...]
    transform: Transform

    def describe(self) -> Dict[str, Any]:
        return {
            "id": self.kind.value,
            "title": self.title,
            "description": self.description,
            "dimension": self.kind.dimension,
            "required_roles": [role.value for role in self.required],
            "optional_roles": [role.value for role in self.optional],
        }
