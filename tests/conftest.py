from __future__ import annotations

import logging

import pytest

from skiachart import ChartRenderer, RecordingSurface


@pytest.fixture(autouse=True)
def _restore_logging():
  # the CLI installs its own root handler
  root = logging.getLogger()
  handlers, level = list(root.handlers), root.level
  yield
  root.handlers[:] = handlers
  root.setLevel(level)
  logging.getLogger("skiachart").setLevel(logging.NOTSET)


@pytest.fixture()
def surface() -> RecordingSurface:
  return RecordingSurface()


@pytest.fixture()
def renderer(surface: RecordingSurface) -> ChartRenderer:
  return ChartRenderer(surface_factory=lambda w, h: surface)
