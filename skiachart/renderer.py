from __future__ import annotations

import dataclasses
import enum
import logging
import threading
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Union

import numpy as np
import numpy.typing as npt

from skiachart.bounds import AxisBounds, check_dataset, compute_bounds, tick_values
from skiachart.errors import ChartError, SurfaceUnavailable, UnsupportedChartType
from skiachart.layout import TICK_HALF, LayoutMetrics, compute_layout
from skiachart.options import RenderConfig
from skiachart.surface import Surface
from skiachart.utils import format_tick

logger = logging.getLogger(__name__)

SurfaceFactory = Callable[[int, int], Surface]
ConfigLike = Union[RenderConfig, Mapping[str, Any], None]


class Axis(enum.IntEnum):
  X = 0
  Y = 1


class ChartKind(enum.Enum):
  SCATTER = "scatter"

  @classmethod
  def parse(cls, name: Any) -> ChartKind:
    if isinstance(name, cls):
      return name
    try:
      return cls(str(name).lower())
    except ValueError:
      raise UnsupportedChartType(str(name))

  def draw(self, renderer: ChartRenderer, data: Any, config: RenderConfig) -> RenderResult:
    return _DRAWERS[self](renderer, data, config)


@dataclasses.dataclass(frozen=True)
class RenderContext:
  config: RenderConfig
  surface: Surface = dataclasses.field(compare=False, repr=False)
  bounds: Tuple[AxisBounds, AxisBounds]
  ticks: Tuple[Tuple[float, ...], Tuple[float, ...]]
  layout: LayoutMetrics
  series: Tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]] = dataclasses.field(compare=False, repr=False)

  @property
  def width(self) -> int:
    return self.layout.width

  @property
  def height(self) -> int:
    return self.layout.height


@dataclasses.dataclass(frozen=True)
class RenderResult:
  renderer: ChartRenderer
  kind: Optional[ChartKind] = None
  context: Optional[RenderContext] = None
  error: Optional[ChartError] = None

  @property
  def ok(self) -> bool:
    return self.error is None

  @property
  def surface(self) -> Optional[Surface]:
    return self.context.surface if self.context is not None else None

  def unwrap(self) -> RenderContext:
    if self.error is not None:
      raise self.error
    return self.context


def _default_surface_factory(width: int, height: int) -> Surface:
  # skia is only needed once a surface has to be created
  from skiachart.render import create_surface
  return create_surface(width, height)


class ChartRenderer:
  """
  Draws a chart of a two-series dataset onto a Surface.

  The renderer keeps only the surface it acquired; everything computed for
  one call lives in the RenderContext of that call. Renders on the same
  instance are serialized because they share the surface.
  """

  def __init__(self, surface_factory: Optional[SurfaceFactory] = None, config: Optional[RenderConfig] = None):
    self.surface_factory = surface_factory or _default_surface_factory
    self.config = config or RenderConfig()
    self.surface: Optional[Surface] = None
    self._lock = threading.Lock()

  def resolve_config(self, config: ConfigLike = None) -> RenderConfig:
    if isinstance(config, RenderConfig):
      return config
    return RenderConfig.from_options(config, base=self.config)

  # Setup

  def setup(self, config: RenderConfig) -> Surface:
    """Attach (or create) the surface, then size it and set the label font."""
    if config.surface is not None:
      self.surface = config.surface
    elif self.surface is None:
      if not config.auto_create:
        raise SurfaceUnavailable("no surface given and auto_create is off")
      self.surface = self.surface_factory(config.width, config.height)
      logger.debug("created surface %dx%d", config.width, config.height)
    surface = self.surface
    surface.resize(config.width, config.height)
    surface.set_font(config.font)
    return surface

  # Computation

  @staticmethod
  def compute_bounds(data: Any, override=None) -> Tuple[AxisBounds, AxisBounds]:
    return compute_bounds(data, override)

  @staticmethod
  def compute_ticks(bounds: Tuple[AxisBounds, AxisBounds], config: RenderConfig) -> Tuple[Tuple[float, ...], Tuple[float, ...]]:
    return (
      tick_values(bounds[Axis.X], config.scale[Axis.X], config.round, axis=Axis.X),
      tick_values(bounds[Axis.Y], config.scale[Axis.Y], config.round, axis=Axis.Y),
    )

  @staticmethod
  def compute_layout(surface: Surface, config: RenderConfig, ticks) -> LayoutMetrics:
    return compute_layout(surface.measure_text, ticks[Axis.Y], config.font.size, config.width, config.height)

  # Drawing

  def draw_background(self, ctx: RenderContext):
    surface = ctx.surface
    surface.set_fill_color(ctx.config.background_color)
    surface.fill_rect(0, 0, ctx.width, ctx.height)

  def draw_axis(self, ctx: RenderContext, axis: Axis):
    if axis == Axis.X:
      self._draw_x_axis(ctx)
    else:
      self._draw_y_axis(ctx)

  def _draw_x_axis(self, ctx: RenderContext):
    s = ctx.surface
    cfg = ctx.config
    lay = ctx.layout
    bh = lay.base_height
    y = lay.axis_y
    tip = ctx.width - bh

    if cfg.draw_axis_line:
      s.begin_path()
      s.move_to(lay.base_width - TICK_HALF, y)
      s.line_to(tip, y)
      s.stroke()

    if cfg.draw_axis_arrow:
      spread = cfg.font.size * 0.5
      s.begin_path()
      s.move_to(tip, y)
      s.line_to(ctx.width - bh * 1.5, y + spread)
      s.move_to(tip, y)
      s.line_to(ctx.width - bh * 1.5, y - spread)
      s.stroke()

    if cfg.draw_axis_label:
      ticks = ctx.ticks[Axis.X]
      s.begin_path()
      for i, value in enumerate(ticks):
        x = lay.tick_x(i, len(ticks))
        label = format_tick(value)
        s.fill_text(label, x - s.measure_text(label) / 2, ctx.height - bh)
        s.move_to(x, y - TICK_HALF)
        s.line_to(x, y + TICK_HALF)
      s.stroke()

  def _draw_y_axis(self, ctx: RenderContext):
    s = ctx.surface
    cfg = ctx.config
    lay = ctx.layout
    bw = lay.base_width
    bh = lay.base_height

    if cfg.draw_axis_line:
      s.begin_path()
      s.move_to(bw, lay.axis_y + TICK_HALF)
      s.line_to(bw, bh / 2)
      s.stroke()

    if cfg.draw_axis_arrow:
      s.begin_path()
      s.move_to(bw, bh / 2)
      s.line_to(bw + bh * 0.5, bh)
      s.move_to(bw, bh / 2)
      s.line_to(bw - bh * 0.5, bh)
      s.stroke()

    if cfg.draw_axis_label:
      ticks = ctx.ticks[Axis.Y]
      s.begin_path()
      for i, value in enumerate(ticks):
        y = lay.tick_label_y(i, len(ticks))
        s.fill_text(format_tick(value), 0, y)
        s.move_to(bw - TICK_HALF, y - bh / 3)
        s.line_to(bw + TICK_HALF, y - bh / 3)
      s.stroke()

  def draw_axes(self, ctx: RenderContext):
    """Y axis then X axis, lines and labels in the legend color."""
    ctx.surface.set_fill_color(ctx.config.legend_color)
    ctx.surface.set_stroke_color(ctx.config.legend_color)
    self.draw_axis(ctx, Axis.Y)
    self.draw_axis(ctx, Axis.X)

  def draw_markers(self, ctx: RenderContext):
    xs, ys = ctx.series
    n = min(xs.size, ys.size)
    if xs.size != ys.size:
      logger.warning("series lengths differ (%d vs %d), plotting the first %d points", xs.size, ys.size, n)
    x = xs[:n]
    y = ys[:n]
    mask = np.isfinite(x) & np.isfinite(y)
    px = ctx.layout.value_to_x(x[mask], ctx.bounds[Axis.X])
    py = ctx.layout.value_to_y(y[mask], ctx.bounds[Axis.Y])

    size = float(ctx.config.marker_size)
    half = size / 2.0
    ctx.surface.set_fill_color(ctx.config.marker_color)
    for cx, cy in zip(px.tolist(), py.tolist()):
      ctx.surface.fill_rect(cx - half, cy - half, size, size)

  # Entry points

  def render(self, data: Any, config: ConfigLike = None) -> RenderContext:
    """
    Validate, then draw. Raises ChartError; nothing is drawn when it does,
    since every check runs before the first surface call.
    """
    cfg = self.resolve_config(config).validate()
    xs, ys = check_dataset(data)
    bounds = self.compute_bounds((xs, ys), cfg.bounds)
    ticks = self.compute_ticks(bounds, cfg)
    series = (
      np.asarray(xs, dtype=np.float64).ravel(),
      np.asarray(ys, dtype=np.float64).ravel(),
    )

    with self._lock:
      surface = self.setup(cfg)
      layout = self.compute_layout(surface, cfg, ticks)
      ctx = RenderContext(config=cfg, surface=surface, bounds=bounds, ticks=ticks, layout=layout, series=series)
      self.draw_background(ctx)
      self.draw_axes(ctx)
      if cfg.draw_markers:
        self.draw_markers(ctx)
    return ctx

  def scatter(self, data: Any, config: ConfigLike = None) -> RenderResult:
    data, config = _split_options(data, config)
    try:
      ctx = self.render(data, config)
    except ChartError as e:
      logger.error("scatter plot failed: %s", e)
      return RenderResult(renderer=self, kind=ChartKind.SCATTER, error=e)

    log = logger.info if ctx.config.debug else logger.debug
    log("scatter plot %dx%d x=[%g..%g] y=[%g..%g]", ctx.width, ctx.height,
        ctx.bounds[Axis.X].rounded_min, ctx.bounds[Axis.X].rounded_max,
        ctx.bounds[Axis.Y].rounded_min, ctx.bounds[Axis.Y].rounded_max)
    return RenderResult(renderer=self, kind=ChartKind.SCATTER, context=ctx)

  def plot(self, data: Any = None, config: ConfigLike = None) -> RenderResult:
    """Draw the chart kind named by config.type."""
    data, config = _split_options(data, config)
    try:
      cfg = self.resolve_config(config)
      kind = ChartKind.parse(cfg.type)
    except ChartError as e:
      logger.error("plot failed: %s", e)
      return RenderResult(renderer=self, error=e)
    return kind.draw(self, data, cfg)


_DRAWERS: Dict[ChartKind, Callable[[ChartRenderer, Any, RenderConfig], RenderResult]] = {
  ChartKind.SCATTER: ChartRenderer.scatter,
}


def _split_options(data: Any, config: ConfigLike) -> Tuple[Any, ConfigLike]:
  # accept the single-mapping form: plot({"type": "scatter", "data": [...]})
  if isinstance(data, Mapping) and config is None:
    data, config = data.get("data"), data
  elif data is None and isinstance(config, Mapping):
    data = config.get("data")
  return data, config
