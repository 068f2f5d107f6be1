from __future__ import annotations

import math
from typing import Any, Dict

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from sheetcharts.config.app_config import CORS_ALLOW_ORIGINS, MAX_COLUMNS, MAX_ROWS
from sheetcharts.engine.axis_roles import role_info, suggest_all_roles
from sheetcharts.engine.chart_data_builder import build_chart_data, chart_kind_catalog
from sheetcharts.engine.column_types import summarize_columns
from sheetcharts.models.chart_data import AxisRole, ChartOptions, Dataset
from sheetcharts.utils.logging import log_event, new_request_id

app = FastAPI(title="Sheet Charts API")

if CORS_ALLOW_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


class ColumnsRequest(BaseModel):
    dataset: Dataset


class ChartDataRequest(BaseModel):
    dataset: Dataset
    chart_type: str = Field(..., min_length=1, max_length=64)
    mapping: Dict[str, Any] = Field(default_factory=dict)
    options: ChartOptions = Field(default_factory=ChartOptions)


def _sanitize_non_finite(value: Any) -> Any:
    if isinstance(value, bool) or value is None:
        return value
    if isinstance(value, (int, float)):
        return value if math.isfinite(float(value)) else None
    if isinstance(value, dict):
        return {str(k): _sanitize_non_finite(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_sanitize_non_finite(item) for item in value]
    return value


def _validate_dataset(dataset: Dataset) -> None:
    if len(dataset.rows) > MAX_ROWS:
        raise HTTPException(
            status_code=413,
            detail={"code": "ROWS_LIMIT_EXCEEDED", "message": f"rows size must be <= {MAX_ROWS}"},
        )
    if len(dataset.columns) > MAX_COLUMNS:
        raise HTTPException(
            status_code=413,
            detail={"code": "COLUMNS_LIMIT_EXCEEDED", "message": f"columns size must be <= {MAX_COLUMNS}"},
        )


@app.get("/health")
def health_check() -> dict:
    return {"status": "ok"}


@app.get("/chart-kinds")
def chart_kinds() -> dict:
    return {
        "chart_kinds": chart_kind_catalog(),
        "roles": [role_info(role) for role in AxisRole],
    }


@app.post("/columns")
def columns(req: ColumnsRequest) -> dict:
    _validate_dataset(req.dataset)
    request_id = new_request_id()
    log_event(
        "request.columns",
        {
            "request_id": request_id,
            "row_count": len(req.dataset.rows),
            "column_count": len(req.dataset.columns),
        },
    )
    summary = summarize_columns(req.dataset)
    summary["role_suggestions"] = suggest_all_roles(req.dataset)
    return _sanitize_non_finite(summary)


@app.post("/chart-data")
def chart_data(req: ChartDataRequest) -> Dict[str, Any]:
    _validate_dataset(req.dataset)
    request_id = new_request_id()
    log_event(
        "request.chart_data",
        {
            "request_id": request_id,
            "chart_type": req.chart_type,
            "row_count": len(req.dataset.rows),
            "column_count": len(req.dataset.columns),
        },
    )
    result = build_chart_data(
        req.dataset,
        req.chart_type,
        req.mapping,
        req.options,
        request_id=request_id,
    )
    payload: Dict[str, Any] = _sanitize_non_finite(result.model_dump(mode="json"))
    payload["request_id"] = request_id
    return payload
