class ChartError(ValueError):
  """Base class for every failure reported by the chart renderer."""


class InvalidDatasetShape(ChartError):
  pass


class EmptySeries(ChartError):
  def __init__(self, axis: int):
    super().__init__(f"empty or non-numeric series on axis {axis}")
    self.axis = axis


class InvalidConfig(ChartError):
  pass


class InvalidTickCount(InvalidConfig):
  def __init__(self, axis: int, count: int):
    super().__init__(f"axis {axis} needs at least 2 ticks, got {count}")
    self.axis = axis
    self.count = count


class SurfaceUnavailable(InvalidConfig):
  pass


class UnsupportedChartType(ChartError):
  def __init__(self, chart_type: str):
    super().__init__(f"unsupported chart type: {chart_type!r}")
    self.chart_type = chart_type
