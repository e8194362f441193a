import math
from typing import Sequence, Tuple, Union

from skiachart.errors import InvalidConfig

Color = Union[str, Sequence[int]]
ARGB = Tuple[int, int, int, int]

NAMED_COLORS = {
  "white": (255, 255, 255, 255),
  "black": (255, 0, 0, 0),
  "red": (255, 255, 0, 0),
  "green": (255, 0, 128, 0),
  "blue": (255, 0, 0, 255),
  "gray": (255, 128, 128, 128),
  "grey": (255, 128, 128, 128),
  "orange": (255, 255, 165, 0),
  "yellow": (255, 255, 255, 0),
  "transparent": (0, 0, 0, 0),
}


def parse_color(color: Color) -> ARGB:
  """
  Resolve a color to an (a, r, g, b) tuple.
  Accepts names, "rrggbb", "#rgb", "#rrggbb", "#aarrggbb" and (r, g, b[, a]) tuples.
  """
  if isinstance(color, str):
    s = color.strip().lower()
    if s in NAMED_COLORS:
      return NAMED_COLORS[s]
    if s.startswith("#"):
      s = s[1:]
      if len(s) == 3:
        s = "".join(ch * 2 for ch in s)
    try:
      if len(s) == 6:
        return 255, int(s[0:2], 16), int(s[2:4], 16), int(s[4:6], 16)
      if len(s) == 8:
        return int(s[0:2], 16), int(s[2:4], 16), int(s[4:6], 16), int(s[6:8], 16)
    except ValueError:
      pass
    raise InvalidConfig(f"unknown color: {color!r}")

  parts = tuple(color)
  if len(parts) not in (3, 4) or not all(isinstance(p, int) and 0 <= p <= 255 for p in parts):
    raise InvalidConfig(f"unknown color: {color!r}")
  a = parts[3] if len(parts) == 4 else 255
  return a, parts[0], parts[1], parts[2]


def truncate_tick(value: float) -> float:
  # one decimal, toward -inf; +0.0 folds a negative zero
  return math.floor(value * 10) / 10 + 0.0


def format_tick(value: float) -> str:
  s = f"{truncate_tick(value):.1f}"
  return s[:-2] if s.endswith(".0") else s
