"""Chart-data engine input and output types."""
from __future__ import annotations

import math
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

Color = str


class ErrorKind(str, Enum):
    MISSING_MAPPING = "MissingMapping"
    EMPTY_DATASET = "EmptyDataset"
    TRANSFORM_FAILURE = "TransformFailure"
    UNSUPPORTED_CHART_KIND = "UnsupportedChartKind"


class AxisRole(str, Enum):
    X = "x"
    Y = "y"
    Z = "z"
    LABELS = "labels"
    VALUES = "values"
    GROUP = "group"
    COLOR = "color"
    SIZE = "size"
    DATASETS = "datasets"


# Roles that take an ordered list of columns instead of a single one
MULTI_COLUMN_ROLES = frozenset({AxisRole.Y, AxisRole.DATASETS})


class ChartKind(str, Enum):
    BAR = "bar"
    LINE = "line"
    AREA = "area"
    PIE = "pie"
    DOUGHNUT = "doughnut"
    SCATTER = "scatter"
    RADAR = "radar"
    BAR3D = "bar3d"
    SCATTER3D = "scatter3d"
    SURFACE3D = "surface3d"

    @property
    def is_3d(self) -> bool:
        return self in (ChartKind.BAR3D, ChartKind.SCATTER3D, ChartKind.SURFACE3D)

    @property
    def dimension(self) -> str:
        return "3D" if self.is_3d else "2D"


# 입력: columns, rows
# 출력: Dataset 모델
# 업로드된 시트 한 장을 나타낸다 (파서가 만든 결과)
class Dataset(BaseModel):
    # 컬럼 이름 (순서 유지, 중복 불가)
    columns: List[str]
    # 행 목록 (컬럼 이름 -> 원시 값)
    rows: List[Dict[str, Any]] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_columns(self) -> "Dataset":
        if len(set(self.columns)) != len(self.columns):
            raise ValueError("column names must be unique")
        known = set(self.columns)
        for index, row in enumerate(self.rows):
            unknown = [key for key in row if key not in known]
            if unknown:
                raise ValueError(f"row {index} has keys not in columns: {unknown}")
        return self

    def has_column(self, column: Optional[str]) -> bool:
        return bool(column) and column in self.columns

    def value(self, row: Dict[str, Any], column: str) -> Any:
        """Read one cell; missing keys and NaN read as None."""
        raw = row.get(column)
        if isinstance(raw, float) and math.isnan(raw):
            return None
        return raw

    def column_values(self, column: str) -> List[Any]:
        return [self.value(row, column) for row in self.rows]

    @classmethod
    def from_frame(cls, df: pd.DataFrame) -> "Dataset":
        frame = df.copy()
        frame.columns = [str(col) for col in frame.columns]
        frame = frame.astype(object).where(frame.notna(), None)
        return cls(columns=list(frame.columns), rows=frame.to_dict(orient="records"))

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame.from_records(self.rows, columns=self.columns)


# 입력: 역할별 컬럼 이름
# 출력: AxisMapping 모델
# 정규화된 역할 -> 컬럼 매핑 (미지정 역할은 None)
class AxisMapping(BaseModel):
    x: Optional[str] = None
    y: Optional[List[str]] = None
    z: Optional[str] = None
    labels: Optional[str] = None
    values: Optional[str] = None
    group: Optional[str] = None
    color: Optional[str] = None
    size: Optional[str] = None
    datasets: Optional[List[str]] = None

    def columns_for(self, role: AxisRole) -> List[str]:
        mapped = getattr(self, role.value)
        if mapped is None:
            return []
        if isinstance(mapped, list):
            return list(mapped)
        return [mapped]

    def column(self, role: AxisRole) -> Optional[str]:
        mapped = self.columns_for(role)
        return mapped[0] if mapped else None

    def is_mapped(self, role: AxisRole) -> bool:
        return bool(self.columns_for(role))


AggregateName = Literal["first", "last", "sum", "avg", "mean", "min", "max", "count", "median"]


class ChartOptions(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    # 사용자 지정 색상 (부족하면 기본 팔레트로 채운다)
    colors: List[Color] = Field(default_factory=list)
    # 표시 전용 플래그 (데이터 형태에는 영향 없음)
    show_legend: bool = True
    legend_position: str = "top"
    animation: bool = True
    dark_mode: bool = False
    title: Optional[str] = None
    subtitle: Optional[str] = None
    x_axis_title: Optional[str] = None
    y_axis_title: Optional[str] = None
    show_grid: bool = True
    begin_at_zero: bool = True
    horizontal: bool = False
    show_labels: bool = False
    # 같은 x 라벨을 가진 행이 여러 개일 때의 값 선택 방식
    aggregate: AggregateName = "first"
    # 숫자가 아닌 셀을 경고로 보고할지 여부
    strict_numeric: bool = False
    # 서피스 격자에서 같은 셀에 여러 샘플이 올 때 (last | mean)
    surface_duplicates: Literal["last", "mean"] = "last"


class DisplayOptions(BaseModel):
    show_legend: bool = True
    legend_position: str = "top"
    title: Optional[str] = None
    subtitle: Optional[str] = None
    animation_duration_ms: int = 1000
    dark_mode: bool = False
    show_grid: Optional[bool] = None
    x_axis_title: Optional[str] = None
    y_axis_title: Optional[str] = None
    begin_at_zero: Optional[bool] = None
    horizontal: Optional[bool] = None
    fill: Optional[bool] = None
    cutout: Optional[str] = None
    border_color: Optional[Color] = None
    show_labels: Optional[bool] = None


class Series(BaseModel):
    name: str
    values: List[float]
    color: Color


class RadarSeriesItem(Series):
    background_color: Color


class Point2D(BaseModel):
    x: float
    y: float
    size: Optional[float] = None


class PointGroup(BaseModel):
    name: str
    color: Color
    points: List[Point2D]


class Point3D(BaseModel):
    x: float
    y: float
    z: float
    size: Optional[float] = None
    # 정규화 이전의 원래 값
    original: Dict[str, Optional[float]] = Field(default_factory=dict)


class PointGroup3D(BaseModel):
    name: str
    color: Color
    points: List[Point3D]


class AxisTick(BaseModel):
    position: List[float]
    label: Union[str, float]


class Bar3D(BaseModel):
    position: List[float]
    size: List[float]
    color: Color
    original_value: float
    label: str


class ChartResultBase(BaseModel):
    chart_kind: ChartKind
    display: DisplayOptions = Field(default_factory=DisplayOptions)
    warnings: List[str] = Field(default_factory=list)


class CategoricalSeries(ChartResultBase):
    type: Literal["categorical"] = "categorical"
    labels: List[str]
    series: List[Series]


class ProportionSeries(ChartResultBase):
    type: Literal["proportion"] = "proportion"
    labels: List[str]
    values: List[float]
    colors: List[Color]


class PointGroups(ChartResultBase):
    type: Literal["points"] = "points"
    groups: List[PointGroup]


class RadarSeries(ChartResultBase):
    type: Literal["radar"] = "radar"
    labels: List[str]
    series: List[RadarSeriesItem]


class Bars3D(ChartResultBase):
    type: Literal["bars3d"] = "bars3d"
    bars: List[Bar3D]
    axis_labels: Dict[str, List[AxisTick]]
    axis_titles: Dict[str, str] = Field(default_factory=dict)


class Points3D(ChartResultBase):
    type: Literal["points3d"] = "points3d"
    groups: List[PointGroup3D]
    axis_labels: Dict[str, List[AxisTick]]
    axis_titles: Dict[str, str] = Field(default_factory=dict)


class SurfaceMesh3D(ChartResultBase):
    type: Literal["surface3d"] = "surface3d"
    vertices: List[List[float]]
    faces: List[List[int]]
    vertex_colors: List[Color]
    axis_labels: Dict[str, List[AxisTick]]
    axis_titles: Dict[str, str] = Field(default_factory=dict)


class ErrorResult(BaseModel):
    type: Literal["error"] = "error"
    kind: ErrorKind
    message: str


ChartResult = Union[
    CategoricalSeries,
    ProportionSeries,
    PointGroups,
    RadarSeries,
    Bars3D,
    Points3D,
    SurfaceMesh3D,
    ErrorResult,
]
