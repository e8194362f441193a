import logging
import sys
from typing import Optional, TextIO

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: int = logging.INFO, stream: Optional[TextIO] = None):
  # stderr by default: the CLI may write image bytes to stdout
  handler = logging.StreamHandler(stream or sys.stderr)
  handler.setFormatter(logging.Formatter(LOG_FORMAT))

  root = logging.getLogger()
  root.setLevel(level)
  root.handlers.clear()
  root.addHandler(handler)
  logging.getLogger("skiachart").setLevel(level)
