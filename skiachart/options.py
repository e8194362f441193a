from __future__ import annotations

import dataclasses
import math
from typing import Any, Mapping, Optional, Sequence, Tuple

from skiachart import config
from skiachart.errors import InvalidConfig, InvalidTickCount
from skiachart.utils import Color, parse_color

FONT_DECORATIONS = ("", "bold", "italic", "bold italic")


@dataclasses.dataclass(frozen=True)
class FontSpec:
  decoration: str = config.FONT_DECORATION
  size: float = config.FONT_SIZE
  family: str = config.FONT_FAMILY

  @property
  def css(self) -> str:
    return f"{self.decoration} {self.size:g}px {self.family}".strip()


@dataclasses.dataclass(frozen=True)
class RenderConfig:
  # Surface acquisition
  surface: Optional[Any] = None
  auto_create: bool = True
  size: Tuple[int, int] = (config.WIDTH, config.HEIGHT)

  font: FontSpec = dataclasses.field(default_factory=FontSpec)

  # Ticks per axis (x, y) and precision of interpolated tick values
  scale: Tuple[int, int] = (config.X_TICKS, config.Y_TICKS)
  round: int = config.ROUND

  # Axis parts
  draw_axis_line: bool = True
  draw_axis_arrow: bool = True
  draw_axis_label: bool = True

  # Colors
  background_color: Color = config.BACKGROUND_COLOR
  legend_color: Color = config.LEGEND_COLOR

  # Data points
  draw_markers: bool = False
  marker_color: Color = config.MARKER_COLOR
  marker_size: float = config.MARKER_SIZE

  type: str = "scatter"
  bounds: Optional[Sequence[Any]] = None
  debug: bool = config.DEBUG

  @property
  def width(self) -> int:
    return int(self.size[0])

  @property
  def height(self) -> int:
    return int(self.size[1])

  def replace(self, **changes: Any) -> RenderConfig:
    return dataclasses.replace(self, **changes)

  def validate(self) -> RenderConfig:
    """Raise InvalidConfig (or a subclass) for any value drawing cannot work with."""
    if any(v <= 0 for v in _int_pair(self.size, "size")):
      raise InvalidConfig(f"size must be two positive integers, got {self.size!r}")
    for axis, count in enumerate(_int_pair(self.scale, "scale")):
      if count < 2:
        raise InvalidTickCount(axis, count)
    if not (math.isfinite(self.font.size) and self.font.size > 0):
      raise InvalidConfig(f"font size must be positive, got {self.font.size!r}")
    if self.font.decoration not in FONT_DECORATIONS:
      raise InvalidConfig(f"unknown font decoration: {self.font.decoration!r}")
    if not isinstance(self.round, int) or self.round < 0:
      raise InvalidConfig(f"round must be a non-negative integer, got {self.round!r}")
    if not (math.isfinite(self.marker_size) and self.marker_size > 0):
      raise InvalidConfig(f"marker size must be positive, got {self.marker_size!r}")
    for color in (self.background_color, self.legend_color, self.marker_color):
      parse_color(color)
    return self

  @classmethod
  def from_options(cls, options: Optional[Mapping[str, Any]] = None, base: Optional[RenderConfig] = None) -> RenderConfig:
    """
    Build a config from a plain mapping on top of `base` (or the defaults).
    Keys may be snake_case or the camelCase of the original option objects;
    unknown keys (including "data") are ignored.
    """
    base = base or cls()
    if not options:
      return base
    opts = {_OPTION_ALIASES.get(k, k): v for k, v in options.items()}

    font = base.font
    font_changes = {}
    for key, attr in (("font_decoration", "decoration"), ("font_size", "size"), ("font_family", "family")):
      if opts.get(key) is not None:
        font_changes[attr] = opts[key]
    if isinstance(opts.get("font"), FontSpec):
      font = opts["font"]
    if font_changes:
      if "size" in font_changes:
        font_changes["size"] = _number(font_changes["size"], "font size")
      font = dataclasses.replace(font, **font_changes)

    changes: dict = {"font": font}
    for f in dataclasses.fields(cls):
      if f.name == "font" or f.name not in opts or opts[f.name] is None:
        continue
      changes[f.name] = opts[f.name]

    if "size" in changes:
      changes["size"] = _int_pair(changes["size"], "size")
    if "scale" in changes:
      changes["scale"] = _int_pair(changes["scale"], "scale")
    if "round" in changes:
      changes["round"] = _int(changes["round"], "round")
    if "marker_size" in changes:
      changes["marker_size"] = _number(changes["marker_size"], "marker size")
    for key in ("auto_create", "draw_axis_line", "draw_axis_arrow", "draw_axis_label", "draw_markers", "debug"):
      if key in changes:
        value = changes[key]
        changes[key] = config._bool(value) if isinstance(value, str) else bool(value)
    return dataclasses.replace(base, **changes)


_OPTION_ALIASES = {
  "autoCreate": "auto_create",
  "fontDecoration": "font_decoration",
  "fontSize": "font_size",
  "fontFamily": "font_family",
  "drawAxisLine": "draw_axis_line",
  "drawAxisArrow": "draw_axis_arrow",
  "drawAxisLabel": "draw_axis_label",
  "backgroundColor": "background_color",
  "legendColor": "legend_color",
  "drawMarkers": "draw_markers",
  "markerColor": "marker_color",
  "markerSize": "marker_size",
}


def _number(value: Any, what: str) -> float:
  try:
    num = float(value)
  except (TypeError, ValueError):
    raise InvalidConfig(f"{what} must be a number, got {value!r}")
  if not math.isfinite(num):
    raise InvalidConfig(f"{what} must be finite, got {value!r}")
  return num


def _int(value: Any, what: str) -> int:
  return int(_number(value, what))


def _int_pair(value: Any, what: str) -> Tuple[int, int]:
  try:
    a, b = value
    return _int(a, what), _int(b, what)
  except (TypeError, ValueError):
    raise InvalidConfig(f"{what} must be a pair of integers, got {value!r}")
