"""Chart data builder: single entry point of the engine.

- Resolve the role mapping, check the kind's required roles, then hand off to
  the per-kind transform registered in ``CHART_KINDS``.
- Always returns exactly one result: a typed chart structure or ``ErrorResult``.
  Internal faults are logged and converted, never raised to the caller.
"""
from __future__ import annotations

from time import perf_counter
from typing import Any, Dict, List, Mapping, Optional, Union

from sheetcharts.engine import charts_2d, charts_3d
from sheetcharts.engine.axis_roles import resolve_mapping
from sheetcharts.engine.chart_kinds import BuildContext, ChartKindSpec, parse_chart_kind
from sheetcharts.engine.coercion import NumericTracker
from sheetcharts.engine.display_options import build_display_options
from sheetcharts.models.chart_data import (
    AxisMapping,
    ChartKind,
    ChartOptions,
    ChartResult,
    Dataset,
    ErrorKind,
    ErrorResult,
)
from sheetcharts.utils.logging import log_event

CHART_KINDS: Dict[ChartKind, ChartKindSpec] = {
    spec.kind: spec for spec in (*charts_2d.KIND_SPECS, *charts_3d.KIND_SPECS)
}

TRANSFORM_FAILURE_MESSAGE = "could not build chart"


def chart_kind_catalog() -> List[Dict[str, Any]]:
    return [CHART_KINDS[kind].describe() for kind in ChartKind]


def _error(kind: ErrorKind, message: str) -> ErrorResult:
    return ErrorResult(kind=kind, message=message)


def _check_required(
    spec: ChartKindSpec,
    mapping: AxisMapping,
    dataset: Dataset,
    request_id: Optional[str],
) -> Optional[ErrorResult]:
    for role in spec.required:
        columns = mapping.columns_for(role)
        if not columns:
            return _error(ErrorKind.MISSING_MAPPING, f"{role.value} is required")
        missing = [col for col in columns if not dataset.has_column(col)]
        if missing:
            log_event(
                "chart.mapping.column_not_found",
                {"request_id": request_id, "role": role.value, "columns": missing},
                level="warning",
            )
            return _error(ErrorKind.MISSING_MAPPING, f"{role.value} is required")
    return None


def _drop_unknown_optional(
    spec: ChartKindSpec,
    mapping: AxisMapping,
    dataset: Dataset,
    request_id: Optional[str],
) -> AxisMapping:
    """Keep required roles and usable optional roles; everything else is unmapped."""
    kept: Dict[str, Any] = {}
    for role in spec.required:
        kept[role.value] = getattr(mapping, role.value)
    for role in spec.optional:
        if not mapping.is_mapped(role):
            continue
        columns = mapping.columns_for(role)
        if all(dataset.has_column(col) for col in columns):
            kept[role.value] = getattr(mapping, role.value)
            continue
        log_event(
            "chart.mapping.optional_dropped",
            {"request_id": request_id, "role": role.value, "columns": columns},
            level="warning",
        )
    return AxisMapping(**kept)


def build_chart_data(
    dataset: Dataset,
    chart_kind: Union[ChartKind, str],
    mapping: Union[AxisMapping, Mapping[str, Any], None],
    options: Union[ChartOptions, Mapping[str, Any], None] = None,
    *,
    request_id: Optional[str] = None,
) -> ChartResult:
    """Build the renderer-ready structure for one chart."""
    started = perf_counter()
    kind = parse_chart_kind(chart_kind)
    if kind is None:
        log_event(
            "chart.build.rejected",
            {"request_id": request_id, "chart_kind": str(chart_kind), "reason": ErrorKind.UNSUPPORTED_CHART_KIND.value},
            level="warning",
        )
        return _error(ErrorKind.UNSUPPORTED_CHART_KIND, f"unsupported chart kind: {chart_kind}")

    spec = CHART_KINDS[kind]
    resolved = resolve_mapping(mapping)
    log_event(
        "chart.build.start",
        {
            "request_id": request_id,
            "chart_kind": kind.value,
            "row_count": len(dataset.rows),
            "column_count": len(dataset.columns),
            "mapping": resolved.model_dump(exclude_none=True),
        },
    )

    rejected = _check_required(spec, resolved, dataset, request_id)
    if rejected is None and not dataset.rows:
        rejected = _error(ErrorKind.EMPTY_DATASET, "dataset has no rows")
    if rejected is not None:
        log_event(
            "chart.build.rejected",
            {"request_id": request_id, "chart_kind": kind.value, "reason": rejected.kind.value, "message": rejected.message},
            level="warning",
        )
        return rejected

    try:
        chart_options = options if isinstance(options, ChartOptions) else ChartOptions.model_validate(options or {})
        ctx = BuildContext(
            kind=kind,
            dataset=dataset,
            mapping=_drop_unknown_optional(spec, resolved, dataset, request_id),
            options=chart_options,
            numbers=NumericTracker(strict=chart_options.strict_numeric),
        )
        result = spec.transform(ctx)
        result.display = build_display_options(kind, chart_options)
        result.warnings = ctx.numbers.warnings()
    except Exception as exc:
        log_event(
            "chart.build.error",
            {
                "request_id": request_id,
                "chart_kind": kind.value,
                "error_type": type(exc).__name__,
                "error": str(exc),
            },
            level="error",
        )
        return _error(ErrorKind.TRANSFORM_FAILURE, TRANSFORM_FAILURE_MESSAGE)

    log_event(
        "chart.build.done",
        {
            "request_id": request_id,
            "chart_kind": kind.value,
            "result_type": result.type,
            "warning_count": len(result.warnings),
            "latency_ms": round((perf_counter() - started) * 1000, 2),
        },
    )
    return result
