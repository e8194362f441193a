from __future__ import annotations

import logging
from typing import Optional

import skia

from skiachart import config
from skiachart.options import FontSpec
from skiachart.utils import Color, parse_color

logger = logging.getLogger(__name__)

FONT_STYLES = {
  "": skia.FontStyle.Normal,
  "bold": skia.FontStyle.Bold,
  "italic": skia.FontStyle.Italic,
  "bold italic": skia.FontStyle.BoldItalic,
}


def skia_color(color: Color) -> int:
  a, r, g, b = parse_color(color)
  return skia.ColorSetARGB(a, r, g, b)


def make_font(spec: FontSpec) -> skia.Font:
  style = FONT_STYLES.get(spec.decoration, skia.FontStyle.Normal)()
  tf = skia.Typeface(spec.family, style)
  return skia.Font(tf, float(spec.size))


class SkiaSurface:
  """Raster surface backed by skia; keeps canvas-like fill/stroke/font state."""

  def __init__(self, width: int, height: int, font: Optional[FontSpec] = None):
    self.width = 0
    self.height = 0
    self._surface: Optional[skia.Surface] = None
    self._canvas: Optional[skia.Canvas] = None
    self.resize(width, height)

    self._fill_paint = skia.Paint(AntiAlias=True, Style=skia.Paint.kFill_Style, Color=skia.ColorBLACK)
    self._stroke_paint = skia.Paint(AntiAlias=True, Style=skia.Paint.kStroke_Style, Color=skia.ColorBLACK,
                                    StrokeWidth=1.0)
    self._path = skia.Path()
    self.set_font(font or FontSpec())

  def resize(self, width: int, height: int) -> None:
    if self._surface is not None and (width, height) == (self.width, self.height):
      return
    self._surface = skia.Surface(int(width), int(height))
    self._canvas = self._surface.getCanvas()
    self.width = int(width)
    self.height = int(height)
    logger.debug("skia surface %dx%d", self.width, self.height)

  def set_font(self, font: FontSpec) -> None:
    self.font_spec = font
    self._font = make_font(font)

  def set_fill_color(self, color: Color) -> None:
    self._fill_paint.setColor(skia_color(color))

  def set_stroke_color(self, color: Color) -> None:
    self._stroke_paint.setColor(skia_color(color))

  def fill_rect(self, x: float, y: float, w: float, h: float) -> None:
    self._canvas.drawRect(skia.Rect.MakeXYWH(float(x), float(y), float(w), float(h)), self._fill_paint)

  def begin_path(self) -> None:
    self._path = skia.Path()

  def move_to(self, x: float, y: float) -> None:
    self._path.moveTo(float(x), float(y))

  def line_to(self, x: float, y: float) -> None:
    self._path.lineTo(float(x), float(y))

  def stroke(self) -> None:
    self._canvas.drawPath(self._path, self._stroke_paint)

  def fill_text(self, text: str, x: float, y: float) -> None:
    self._canvas.drawString(text, float(x), float(y), self._font, self._fill_paint)

  def measure_text(self, text: str) -> float:
    return float(self._font.measureText(text))

  def snapshot(self) -> skia.Image:
    return self._surface.makeImageSnapshot()

  def encode_png(self) -> bytes:
    data = self.snapshot().encodeToData(skia.kPNG, 100)
    return bytes(data) if data is not None else b""

  def encode_jpeg(self, quality: int = config.JPEG_QUALITY) -> bytes:
    data = self.snapshot().encodeToData(skia.kJPEG, quality)
    return bytes(data) if data is not None else b""


def create_surface(width: int, height: int) -> SkiaSurface:
  return SkiaSurface(width, height)
