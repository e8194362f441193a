from __future__ import annotations

import argparse
import csv
import io
import json
import logging
import sys
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from skiachart import config
from skiachart.errors import ChartError, InvalidDatasetShape
from skiachart.logging_conf import setup_logging
from skiachart.options import RenderConfig
from skiachart.renderer import ChartRenderer

logger = logging.getLogger(__name__)


def _parse_csv(text: str) -> List[List[float]]:
  xs: List[float] = []
  ys: List[float] = []
  for lineno, row in enumerate(csv.reader(io.StringIO(text)), start=1):
    if not row or not "".join(row).strip():
      continue
    if len(row) < 2:
      raise InvalidDatasetShape(f"line {lineno}: expected 2 columns, got {len(row)}")
    try:
      x, y = float(row[0]), float(row[1])
    except ValueError:
      if lineno == 1:
        continue  # header
      raise InvalidDatasetShape(f"line {lineno}: not a number: {row[:2]!r}")
    xs.append(x)
    ys.append(y)
  return [xs, ys]


def load_dataset(text: str, fmt: str = "json") -> Tuple[Any, Dict[str, Any]]:
  """
  Returns (data, options). JSON is either [[x...], [y...]] or an object with
  a "data" key plus render options; CSV is two columns.
  """
  if fmt == "csv":
    return _parse_csv(text), {}
  try:
    doc = json.loads(text)
  except json.JSONDecodeError as e:
    raise InvalidDatasetShape(f"invalid JSON input: {e}")
  if isinstance(doc, dict):
    opts = {k: v for k, v in doc.items() if k != "data"}
    return doc.get("data"), opts
  return doc, {}


def _infer_format(path: str, explicit: Optional[str]) -> str:
  if explicit:
    return explicit
  return "csv" if path.lower().endswith(".csv") else "json"


def _pick(value, default):
  return default if value is None else value


def _cli_options(args: argparse.Namespace, base: RenderConfig) -> Dict[str, Any]:
  opts: Dict[str, Any] = {"debug": args.debug or None}
  if args.no_markers:
    opts["draw_markers"] = False
  if args.width is not None or args.height is not None:
    opts["size"] = (_pick(args.width, base.width), _pick(args.height, base.height))
  if args.x_ticks is not None or args.y_ticks is not None:
    opts["scale"] = (_pick(args.x_ticks, base.scale[0]), _pick(args.y_ticks, base.scale[1]))
  opts["font_size"] = args.font_size
  opts["font_family"] = args.font_family
  opts["background_color"] = args.background
  opts["legend_color"] = args.legend_color
  return opts


def build_config(file_opts: Dict[str, Any], args: argparse.Namespace) -> RenderConfig:
  # markers default on here; the input file and --no-markers can turn them off
  cfg = RenderConfig.from_options({"draw_markers": True, **file_opts})
  return RenderConfig.from_options(_cli_options(args, cfg), base=cfg)


def build_parser() -> argparse.ArgumentParser:
  p = argparse.ArgumentParser(description="Render a scatter chart of two numeric series to PNG or JPEG")
  p.add_argument("input", help="JSON or CSV file with the two series, '-' for stdin")
  p.add_argument("--format", choices=["json", "csv"], help="Input format (default: by file suffix, else json)")
  p.add_argument("--out", type=Path, default=Path("scatter.png"), help="Output image, .jpg/.jpeg writes JPEG")
  p.add_argument("--width", type=int, help="Image width")
  p.add_argument("--height", type=int, help="Image height")
  p.add_argument("--font-size", type=float, help="Label font size in pixels")
  p.add_argument("--font-family", help="Label font family")
  p.add_argument("--x-ticks", type=int, help="Number of ticks on the X axis")
  p.add_argument("--y-ticks", type=int, help="Number of ticks on the Y axis")
  p.add_argument("--background", help="Background color")
  p.add_argument("--legend-color", help="Axis and label color")
  p.add_argument("--no-markers", action="store_true", help="Draw axes only")
  p.add_argument("--quality", type=int, default=config.JPEG_QUALITY, help="JPEG quality 1-100")
  p.add_argument("--debug", action="store_true", help="Verbose logging")
  return p


def main(argv=None) -> int:
  args = build_parser().parse_args(argv)

  setup_logging(logging.DEBUG if args.debug else logging.WARNING)

  t0 = time.time()
  try:
    text = sys.stdin.read() if args.input == "-" else Path(args.input).read_text(encoding="utf-8")
    data, file_opts = load_dataset(text, _infer_format(args.input, args.format))
    cfg = build_config(file_opts, args)
  except (ChartError, OSError) as e:
    print(f"error: {e}", file=sys.stderr)
    return 2
  t_load = time.time()

  renderer = ChartRenderer()
  result = renderer.plot(data, cfg)
  if not result.ok:
    print(f"error: {result.error}", file=sys.stderr)
    return 2
  t_render = time.time()

  surface = result.surface
  if args.out.suffix.lower() in (".jpg", ".jpeg"):
    image = surface.encode_jpeg(args.quality)
  else:
    image = surface.encode_png()
  args.out.write_bytes(image)

  t1 = time.time()
  logger.info(
    "load=%.1fms render=%.1fms encode=%.1fms size=%.1fKB",
    1000 * (t_load - t0),
    1000 * (t_render - t_load),
    1000 * (t1 - t_render),
    len(image) / 1024.0,
  )
  print(f"Wrote {args.out}")
  return 0


if __name__ == "__main__":
  raise SystemExit(main())
