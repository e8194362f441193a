import os

from dotenv import find_dotenv, load_dotenv

# .env from the working directory; real environment variables win
load_dotenv(find_dotenv(usecwd=True), override=False)


def _bool(val: str, default: bool = False) -> bool:
  if val is None:
    return default
  return val.lower() in ("1", "true", "yes", "on")


# Surface
WIDTH = int(os.getenv("SKIACHART_WIDTH", "500"))
HEIGHT = int(os.getenv("SKIACHART_HEIGHT", "500"))

# Font used for measuring and drawing tick labels
FONT_DECORATION = os.getenv("SKIACHART_FONT_DECORATION", "")
FONT_SIZE = float(os.getenv("SKIACHART_FONT_SIZE", "10"))
FONT_FAMILY = os.getenv("SKIACHART_FONT_FAMILY", "DejaVu Sans")

# Ticks per axis and digits kept when cleaning interpolated tick values (at least 9)
X_TICKS = int(os.getenv("SKIACHART_X_TICKS", "9"))
Y_TICKS = int(os.getenv("SKIACHART_Y_TICKS", "5"))
ROUND = int(os.getenv("SKIACHART_ROUND", "9"))

# Colors: names, "rrggbb" or "#rrggbb"
BACKGROUND_COLOR = os.getenv("SKIACHART_BACKGROUND", "white")
LEGEND_COLOR = os.getenv("SKIACHART_LEGEND_COLOR", "black")
MARKER_COLOR = os.getenv("SKIACHART_MARKER_COLOR", "1f77b4")
MARKER_SIZE = float(os.getenv("SKIACHART_MARKER_SIZE", "3"))

DEBUG = _bool(os.getenv("SKIACHART_DEBUG"), False)
JPEG_QUALITY = int(os.getenv("SKIACHART_JPEG_QUALITY", "82"))
