from __future__ import annotations

import math

import pytest

from skiachart import (
  Axis,
  ChartKind,
  ChartRenderer,
  EmptySeries,
  FontSpec,
  InvalidDatasetShape,
  InvalidTickCount,
  RecordingSurface,
  RenderConfig,
  SurfaceUnavailable,
  UnsupportedChartType,
)
from skiachart.renderer import _DRAWERS

DATA = [[3, 7, 22], [1, 2]]
BASE = RenderConfig(
  size=(500, 500),
  font=FontSpec("", 10, "DejaVu Sans"),
  scale=(9, 5),
  background_color="white",
  legend_color="black",
)


def strokes(surface: RecordingSurface):
  return [c[1] for c in surface.commands if c[0] == "stroke"]


def texts(surface: RecordingSurface):
  return [c[1] for c in surface.commands if c[0] == "fill_text"]


def rects(surface: RecordingSurface):
  return [c[1:] for c in surface.commands if c[0] == "fill_rect"]


def test_plot_scatter_matches_direct_scatter():
  s1, s2 = RecordingSurface(), RecordingSurface()
  r1 = ChartRenderer(surface_factory=lambda w, h: s1)
  r2 = ChartRenderer(surface_factory=lambda w, h: s2)

  res1 = r1.plot({"type": "scatter", "data": [[1, 2], [3, 4]]})
  res2 = r2.scatter([[1, 2], [3, 4]])

  assert res1.ok and res2.ok
  assert res1.kind is ChartKind.SCATTER
  assert s1.commands
  assert s1.commands == s2.commands


def test_unknown_chart_type_is_reported_without_drawing(renderer, surface):
  res = renderer.plot([[1, 2], [3, 4]], {"type": "unknown"})
  assert not res.ok
  assert isinstance(res.error, UnsupportedChartType)
  assert res.error.chart_type == "unknown"
  assert surface.commands == []
  assert renderer.surface is None


def test_single_series_is_reported_without_drawing(renderer, surface):
  res = renderer.scatter([[1, 2]])
  assert isinstance(res.error, InvalidDatasetShape)
  assert surface.commands == []


def test_missing_data_is_reported(renderer, surface):
  res = renderer.scatter(None)
  assert isinstance(res.error, InvalidDatasetShape)
  assert surface.commands == []


def test_empty_series_is_reported_without_drawing(renderer, surface):
  res = renderer.scatter([[], [1, 2]])
  assert isinstance(res.error, EmptySeries)
  assert surface.commands == []
  with pytest.raises(EmptySeries):
    res.unwrap()


def test_single_tick_is_reported_without_drawing(renderer, surface):
  res = renderer.scatter(DATA, {"scale": [1, 5]})
  assert isinstance(res.error, InvalidTickCount)
  assert surface.commands == []


def test_failure_is_logged(renderer, caplog):
  with caplog.at_level("ERROR", logger="skiachart"):
    renderer.scatter([[1, 2]])
  assert "exactly 2 series" in caplog.text


def test_default_scatter_labels_and_layout(renderer, surface):
  ctx = renderer.scatter(DATA, BASE).unwrap()

  assert (ctx.bounds[Axis.X].rounded_min, ctx.bounds[Axis.X].rounded_max) == (0, 30)
  assert (ctx.bounds[Axis.Y].rounded_min, ctx.bounds[Axis.Y].rounded_max) == (0, 10)
  # widest Y label "2.5" is 3 * 6px, plus two "x" widths
  assert ctx.layout.base_width == pytest.approx(30.0)
  assert ctx.layout.base_height == 10.0

  # Y axis is drawn before X axis
  assert texts(surface) == [
    "0", "2.5", "5", "7.5", "10",
    "0", "3.7", "7.5", "11.2", "15", "18.7", "22.5", "26.2", "30",
  ]


@pytest.mark.parametrize("precision", [0, 1])
def test_low_round_keeps_truncated_labels(renderer, surface, precision):
  renderer.scatter(DATA, BASE.replace(round=precision))
  assert texts(surface) == [
    "0", "2.5", "5", "7.5", "10",
    "0", "3.7", "7.5", "11.2", "15", "18.7", "22.5", "26.2", "30",
  ]


def test_background_then_legend_colors(renderer, surface):
  renderer.scatter(DATA, BASE.replace(background_color="#102030", legend_color="red"))
  assert surface.commands[:6] == [
    ("resize", 500, 500),
    ("set_font", "10px DejaVu Sans"),
    ("fill_color", (255, 16, 32, 48)),
    ("fill_rect", 0, 0, 500, 500),
    ("fill_color", (255, 255, 0, 0)),
    ("stroke_color", (255, 255, 0, 0)),
  ]


def test_axis_geometry(renderer, surface):
  renderer.scatter(DATA, BASE)
  axis_y = 500 - 10 * (2 + 1 / 3)
  y_line, y_arrow, y_ticks, x_line, x_arrow, x_ticks = strokes(surface)

  assert y_line == (("M", 30.0, pytest.approx(axis_y + 5)), ("L", 30.0, 5.0))
  assert y_arrow == (("M", 30.0, 5.0), ("L", 35.0, 10.0), ("M", 30.0, 5.0), ("L", 25.0, 10.0))
  assert x_line == (("M", 25.0, pytest.approx(axis_y)), ("L", 490, pytest.approx(axis_y)))
  assert x_arrow[1] == ("L", 485.0, pytest.approx(axis_y + 5))
  assert x_arrow[3] == ("L", 485.0, pytest.approx(axis_y - 5))

  # one move/line pair per tick
  assert len(y_ticks) == 2 * 5
  assert len(x_ticks) == 2 * 9
  # first and last X tick span the plot width: 500 - 10 - 1.5 * 30
  assert x_ticks[0] == ("M", 30.0, pytest.approx(axis_y - 5))
  assert x_ticks[-1] == ("L", pytest.approx(30 + 445), pytest.approx(axis_y + 5))
  # Y tick marks sit a third of the font size above the label baseline
  assert y_ticks[0] == ("M", 25.0, pytest.approx(480 - 10 / 3))
  assert y_ticks[-1] == ("L", 35.0, pytest.approx(20 - 10 / 3))


def test_label_positions(renderer, surface):
  renderer.scatter(DATA, BASE)
  labels = [c for c in surface.commands if c[0] == "fill_text"]
  assert labels[0] == ("fill_text", "0", 0, 480.0)
  assert labels[4] == ("fill_text", "10", 0, 20.0)
  # X labels are centered on their tick at baseline height - font size
  assert labels[5] == ("fill_text", "0", 27.0, 490)


def test_toggles_skip_axis_parts(renderer, surface):
  renderer.scatter(DATA, BASE.replace(draw_axis_line=False, draw_axis_arrow=False))
  assert len(strokes(surface)) == 2

  surface.clear()
  renderer.scatter(DATA, BASE.replace(draw_axis_label=False))
  assert texts(surface) == []
  assert len(strokes(surface)) == 4


def test_bounds_override_drives_ticks(renderer, surface):
  ctx = renderer.scatter(DATA, BASE.replace(bounds=[(0, 100), (0, 50)], scale=(3, 2))).unwrap()
  assert ctx.ticks == ((0.0, 50.0, 100.0), (0.0, 50.0))
  assert texts(surface) == ["0", "50", "0", "50", "100"]


def test_repeated_renders_issue_identical_commands(renderer, surface):
  renderer.scatter(DATA, BASE)
  first = list(surface.commands)
  surface.clear()
  renderer.scatter(DATA, BASE)
  assert surface.commands == first


def test_fresh_renderers_issue_identical_commands():
  surfaces = [RecordingSurface(), RecordingSurface()]
  for s in surfaces:
    ChartRenderer(surface_factory=lambda w, h, s=s: s).plot(DATA, BASE)
  assert surfaces[0].commands == surfaces[1].commands


def test_markers_follow_tick_mapping(renderer, surface):
  cfg = BASE.replace(draw_markers=True, marker_size=4, marker_color="blue")
  renderer.scatter([[0, 30], [0, 10]], cfg)

  marker_rects = rects(surface)[1:]
  assert len(marker_rects) == 2
  (x0, y0, w0, h0), (x1, y1, _, _) = marker_rects
  assert (w0, h0) == (4.0, 4.0)
  assert x0 == pytest.approx(30 - 2)
  assert y0 == pytest.approx(480 - 10 / 3 - 2)
  assert x1 == pytest.approx(475 - 2)
  assert y1 == pytest.approx(20 - 10 / 3 - 2)
  assert ("fill_color", (255, 0, 0, 255)) in surface.commands


def test_markers_skip_non_finite_and_unpaired_points(renderer, surface):
  cfg = BASE.replace(draw_markers=True)
  renderer.scatter([[0, math.nan, 30, 5], [0, 5, 10]], cfg)
  assert len(rects(surface)) == 1 + 2


def test_degenerate_bounds_still_render(renderer, surface):
  ctx = renderer.scatter([[10, 10], [10, 10]], BASE.replace(draw_markers=True)).unwrap()
  assert ctx.ticks[Axis.X] == (10.0,) * 9
  assert all(math.isfinite(v) for r in rects(surface) for v in r)


def test_supplied_surface_is_used():
  def factory(w, h):
    raise AssertionError("factory must not be called")

  given = RecordingSurface()
  res = ChartRenderer(surface_factory=factory).scatter(DATA, BASE.replace(surface=given))
  assert res.surface is given
  assert given.commands


def test_no_surface_without_auto_create(surface):
  r = ChartRenderer(surface_factory=lambda w, h: surface)
  res = r.scatter(DATA, BASE.replace(auto_create=False))
  assert isinstance(res.error, SurfaceUnavailable)
  assert surface.commands == []


def test_surface_is_created_once_and_resized(surface):
  calls = []

  def factory(w, h):
    calls.append((w, h))
    return surface

  r = ChartRenderer(surface_factory=factory)
  r.scatter(DATA, BASE)
  r.scatter(DATA, BASE.replace(size=(200, 100)))
  assert calls == [(500, 500)]
  assert (surface.width, surface.height) == (200, 100)


def test_every_chart_kind_has_a_drawer():
  assert set(_DRAWERS) == set(ChartKind)
  assert ChartKind.parse("SCATTER") is ChartKind.SCATTER
  with pytest.raises(UnsupportedChartType):
    ChartKind.parse("pie")
