"""Series whose x axis is time: kept sorted, searchable and trimmed to a window."""

from __future__ import annotations

import bisect
import sys
from typing import Any, Optional

from plotseries.plotdatabase import PlotDataBase, PlotGroup

__all__ = ["TimeseriesBase", "PlotData", "PlotDataAny"]


def _x_of(point: Any) -> float:
    return point.x


class TimeseriesBase(PlotDataBase):
    """Points ordered by time, optionally limited to a maximum time span."""

    numeric_x = True

    def __init__(self, name: str, group: Optional[PlotGroup] = None) -> None:
        super().__init__(name, group)
        self._max_range_x = sys.float_info.max

    @property
    def maximum_range_x(self) -> float:
        """Largest time span kept between the first and the last point."""
        return self._max_range_x

    def set_maximum_range_x(self, max_range: float) -> None:
        self._max_range_x = max_range
        self._trim_range()

    def get_index_from_x(self, x: float) -> int:
        """Index of the point whose time is nearest to ``x``; -1 if empty."""
        if not self._points:
            return -1
        index = bisect.bisect_left(self._points, x, key=_x_of)
        if index >= len(self._points):
            return len(self._points) - 1
        if index > 0 and abs(self._points[index - 1].x - x) < abs(self._points[index].x - x):
            index -= 1
        return index

    def get_y_from_x(self, x: float) -> Any:
        """Value of the point nearest to ``x``, or None if the series is empty."""
        index = self.get_index_from_x(x)
        return None if index < 0 else self._points[index].y

    def push_back(self, point: Any) -> None:
        """Add a point, keeping the series sorted by time, then trim the window."""
        p = self._as_point(point)
        if self._points and p.x < self.back().x:
            index = bisect.bisect_right(self._points, p.x, key=_x_of)
            super().insert(index, p)
        else:
            super().push_back(p)
        self._trim_range()

    def _trim_range(self) -> None:
        while len(self._points) > 2 and (
            self._points[-1].x - self._points[0].x
        ) > self._max_range_x:
            self.pop_front()


class PlotData(TimeseriesBase):
    """Numeric time series."""

    numeric_y = True


class PlotDataAny(TimeseriesBase):
    """Time series holding arbitrary values."""

    numeric_y = False