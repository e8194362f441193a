from __future__ import annotations

from typing import Any, List, Protocol, Tuple

from skiachart.options import FontSpec
from skiachart.utils import Color, parse_color

Command = Tuple[Any, ...]


class Surface(Protocol):
  """The drawing primitives a chart needs from its host backend."""

  width: int
  height: int

  def resize(self, width: int, height: int) -> None: ...

  def set_font(self, font: FontSpec) -> None: ...

  def set_fill_color(self, color: Color) -> None: ...

  def set_stroke_color(self, color: Color) -> None: ...

  def fill_rect(self, x: float, y: float, w: float, h: float) -> None: ...

  def begin_path(self) -> None: ...

  def move_to(self, x: float, y: float) -> None: ...

  def line_to(self, x: float, y: float) -> None: ...

  def stroke(self) -> None: ...

  def fill_text(self, text: str, x: float, y: float) -> None: ...

  def measure_text(self, text: str) -> float: ...


class RecordingSurface:
  """
  Surface that keeps every drawing call in `commands` instead of rasterizing.
  Text is measured with a fixed advance of font.size * advance_ratio per character,
  so layouts do not depend on installed fonts.
  """

  def __init__(self, width: int = 0, height: int = 0, advance_ratio: float = 0.6):
    self.width = width
    self.height = height
    self.advance_ratio = advance_ratio
    self.font = FontSpec()
    self.commands: List[Command] = []
    self._path: List[Tuple[str, float, float]] = []

  def clear(self):
    self.commands.clear()
    self._path = []

  def resize(self, width: int, height: int) -> None:
    self.width = width
    self.height = height
    self.commands.append(("resize", width, height))

  def set_font(self, font: FontSpec) -> None:
    self.font = font
    self.commands.append(("set_font", font.css))

  def set_fill_color(self, color: Color) -> None:
    self.commands.append(("fill_color", parse_color(color)))

  def set_stroke_color(self, color: Color) -> None:
    self.commands.append(("stroke_color", parse_color(color)))

  def fill_rect(self, x: float, y: float, w: float, h: float) -> None:
    self.commands.append(("fill_rect", x, y, w, h))

  def begin_path(self) -> None:
    self._path = []

  def move_to(self, x: float, y: float) -> None:
    self._path.append(("M", x, y))

  def line_to(self, x: float, y: float) -> None:
    self._path.append(("L", x, y))

  def stroke(self) -> None:
    self.commands.append(("stroke", tuple(self._path)))

  def fill_text(self, text: str, x: float, y: float) -> None:
    self.commands.append(("fill_text", text, x, y))

  def measure_text(self, text: str) -> float:
    return len(text) * self.font.size * self.advance_ratio
