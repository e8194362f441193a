from __future__ import annotations

import dataclasses
import math
from typing import Any, Mapping, Optional, Sequence, Tuple

import numpy as np
import numpy.typing as npt

from skiachart.errors import EmptySeries, InvalidConfig, InvalidDatasetShape, InvalidTickCount

# Labels truncate to one decimal; fewer cleanup digits than this could change them
MIN_TICK_DIGITS = 9


@dataclasses.dataclass(frozen=True)
class AxisBounds:
  raw_min: float
  raw_max: float
  rounded_min: float
  rounded_max: float

  @property
  def span(self) -> float:
    return self.rounded_max - self.rounded_min


def as_series(values: Any, axis: int) -> npt.NDArray[np.float64]:
  """Finite values of one series as float64; raises EmptySeries if none are left."""
  try:
    arr = np.asarray(values, dtype=np.float64).ravel()
  except (TypeError, ValueError):
    raise EmptySeries(axis)
  arr = arr[np.isfinite(arr)]
  if arr.size == 0:
    raise EmptySeries(axis)
  return arr


def check_dataset(data: Any) -> Tuple[Sequence[Any], Sequence[Any]]:
  if data is None or isinstance(data, (str, bytes)):
    raise InvalidDatasetShape("data must be [x, y] where x and y are sequences of numbers")
  try:
    series = list(data)
  except TypeError:
    raise InvalidDatasetShape("data must be [x, y] where x and y are sequences of numbers")
  if len(series) != 2:
    raise InvalidDatasetShape(f"data must hold exactly 2 series, got {len(series)}")
  return series[0], series[1]


def series_bounds(values: Any, axis: int = 0) -> AxisBounds:
  arr = as_series(values, axis)
  lo = float(np.min(arr))
  hi = float(np.max(arr))
  return AxisBounds(
    raw_min=lo,
    raw_max=hi,
    rounded_min=float(math.floor(lo / 10) * 10),
    rounded_max=float(math.ceil(hi / 10) * 10),
  )


def _override_pair(item: Any, axis: int) -> Tuple[float, float]:
  if isinstance(item, AxisBounds):
    return item.rounded_min, item.rounded_max
  try:
    if isinstance(item, Mapping):
      lo, hi = item["min"], item["max"]
    else:
      lo, hi = item
    lo, hi = float(lo), float(hi)
  except (KeyError, TypeError, ValueError):
    raise InvalidConfig(f"bounds override for axis {axis} must be (min, max), got {item!r}")
  if not (math.isfinite(lo) and math.isfinite(hi)):
    raise InvalidConfig(f"bounds override for axis {axis} must be finite, got {item!r}")
  return lo, hi


def compute_bounds(data: Any, override: Optional[Sequence[Any]] = None) -> Tuple[AxisBounds, AxisBounds]:
  """
  Per-axis raw min/max and bounds rounded outward to multiples of 10.
  An override replaces the rounded bounds of both axes verbatim; raw values
  still come from the data.
  """
  xs, ys = check_dataset(data)
  computed = (series_bounds(xs, 0), series_bounds(ys, 1))
  if override is None:
    return computed

  items = list(override)
  if len(items) != 2:
    raise InvalidConfig(f"bounds override must hold 2 axes, got {len(items)}")
  out = []
  for axis, (item, b) in enumerate(zip(items, computed)):
    lo, hi = _override_pair(item, axis)
    out.append(dataclasses.replace(b, rounded_min=lo, rounded_max=hi))
  return out[0], out[1]


def tick_values(bounds: AxisBounds, count: int, precision: Optional[int] = None, axis: int = 0) -> Tuple[float, ...]:
  """
  Evenly spaced ticks from rounded_min to rounded_max over count - 1 intervals.
  `precision` strips float noise (3.7499999 -> 3.75) and is never taken below
  MIN_TICK_DIGITS, so cleaning cannot move a value across a label boundary.
  """
  if count < 2:
    raise InvalidTickCount(axis, count)
  step = bounds.span / (count - 1)
  values = step * np.arange(count, dtype=np.float64) + bounds.rounded_min
  if precision is not None:
    values = np.round(values, max(int(precision), MIN_TICK_DIGITS))
  return tuple(float(v) for v in values)
