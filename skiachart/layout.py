from __future__ import annotations

import dataclasses
from typing import Sequence

import numpy as np
import numpy.typing as npt

from skiachart.bounds import AxisBounds
from skiachart.utils import format_tick

# half length of a tick mark, and the X axis line overhang past the Y axis
TICK_HALF = 5.0


@dataclasses.dataclass(frozen=True)
class LayoutMetrics:
  width: int
  height: int
  base_width: float  # left margin: widest Y label plus spacing
  base_height: float  # vertical unit: the font size

  @property
  def axis_y(self) -> float:
    """Pixel row of the X axis line."""
    return self.height - self.base_height * (2 + 1 / 3)

  @property
  def x_extent(self) -> float:
    return self.width - self.base_height - self.base_width * 1.5

  @property
  def y_extent(self) -> float:
    return self.height - self.base_height * 4

  def tick_x(self, i: int, count: int) -> float:
    return self.base_width + (self.x_extent / (count - 1)) * i

  def tick_label_y(self, i: int, count: int) -> float:
    # text baseline of Y label i; its tick mark sits base_height / 3 higher
    return self.height - (self.base_height * 2 + (self.y_extent / (count - 1)) * i)

  def value_to_x(self, values: npt.ArrayLike, bounds: AxisBounds) -> npt.NDArray[np.float64]:
    v = np.asarray(values, dtype=np.float64)
    if bounds.span <= 0:
      return np.full(v.shape, self.base_width)
    norm = (v - bounds.rounded_min) / bounds.span
    return self.base_width + norm * self.x_extent

  def value_to_y(self, values: npt.ArrayLike, bounds: AxisBounds) -> npt.NDArray[np.float64]:
    v = np.asarray(values, dtype=np.float64)
    if bounds.span <= 0:
      return np.full(v.shape, self.height - self.base_height * 2 - self.base_height / 3)
    norm = (v - bounds.rounded_min) / bounds.span
    return self.height - (self.base_height * 2 + norm * self.y_extent) - self.base_height / 3


def compute_layout(measure, y_ticks: Sequence[float], font_size: float, width: int, height: int) -> LayoutMetrics:
  """
  Left margin from the widest Y tick label, measured with `measure(text) -> float`,
  plus twice the width of "x" as spacing.
  """
  delta = measure("x")
  text_width = max(measure(format_tick(v)) for v in y_ticks) + delta
  return LayoutMetrics(
    width=width,
    height=height,
    base_width=text_width + delta,
    base_height=float(font_size),
  )
