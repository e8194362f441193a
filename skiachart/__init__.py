from skiachart.bounds import AxisBounds, compute_bounds, tick_values
from skiachart.errors import (
  ChartError,
  EmptySeries,
  InvalidConfig,
  InvalidDatasetShape,
  InvalidTickCount,
  SurfaceUnavailable,
  UnsupportedChartType,
)
from skiachart.layout import LayoutMetrics
from skiachart.options import FontSpec, RenderConfig
from skiachart.renderer import Axis, ChartKind, ChartRenderer, RenderContext, RenderResult
from skiachart.surface import RecordingSurface, Surface

__all__ = [
  "Axis",
  "AxisBounds",
  "ChartError",
  "ChartKind",
  "ChartRenderer",
  "EmptySeries",
  "FontSpec",
  "InvalidConfig",
  "InvalidDatasetShape",
  "InvalidTickCount",
  "LayoutMetrics",
  "RecordingSurface",
  "RenderConfig",
  "RenderContext",
  "RenderResult",
  "Surface",
  "SurfaceUnavailable",
  "UnsupportedChartType",
  "compute_bounds",
  "tick_values",
]
