"""Generic series of (x, y) points with cached ranges, attributes and groups."""

from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, Dict, Iterator, Optional

__all__ = ["Range", "Point", "PlotGroup", "PlotDataBase"]


@dataclass
class Range:
    """Closed interval ``[min, max]``."""

    min: float
    max: float


@dataclass
class Point:
    """One sample of a series."""

    x: Any
    y: Any


def _is_finite(value: Any) -> bool:
    return math.isfinite(float(value))


class PlotGroup:
    """A named set of sibling series sharing attributes."""

    def __init__(self, name: str) -> None:
        self._name = name
        self.attributes: Dict[str, Any] = {}

    @property
    def name(self) -> str:
        return self._name

    def set_attribute(self, name: str, value: Any) -> None:
        self.attributes[name] = value

    def attribute(self, name: str) -> Any:
        """Return the attribute's value, or None when it is not set."""
        return self.attributes.get(name)

    def __repr__(self) -> str:
        return f"PlotGroup({self._name!r})"


class PlotDataBase:
    """An ordered collection of points.

    ``numeric_x`` and ``numeric_y`` tell whether the coordinates are numbers;
    only numeric coordinates are validated (NaN and infinity are dropped) and
    have a range.
    """

    MAX_CAPACITY = 1024 * 1024
    ASYNC_BUFFER_CAPACITY = 1024

    numeric_x = True
    numeric_y = True

    def __init__(self, name: str, group: Optional[PlotGroup] = None) -> None:
        self.plot_name = name
        self.group = group
        self.attributes: Dict[str, Any] = {}
        self._points: Deque[Point] = deque()
        self._range_x = Range(0.0, 0.0)
        self._range_y = Range(0.0, 0.0)
        self._range_x_dirty = True
        self._range_y_dirty = True

    def __len__(self) -> int:
        return len(self._points)

    def __getitem__(self, index: int) -> Point:
        return self._points[index]

    def __iter__(self) -> Iterator[Point]:
        return iter(self._points)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.plot_name!r}, size={len(self)})"

    def clear(self) -> None:
        self._points.clear()
        self._range_x_dirty = True
        self._range_y_dirty = True

    def set_attribute(self, name: str, value: Any) -> None:
        self.attributes[name] = value

    def attribute(self, name: str) -> Any:
        """Return the attribute's value, or None when it is not set."""
        return self.attributes.get(name)

    def change_group(self, group: Optional[PlotGroup]) -> None:
        self.group = group

    def front(self) -> Point:
        """First point; IndexError if the series is empty."""
        return self._points[0]

    def back(self) -> Point:
        """Last point; IndexError if the series is empty."""
        return self._points[-1]

    def range_x(self) -> Optional[Range]:
        """Range of the x values, or None if empty or not numeric."""
        if not self.numeric_x or not self._points:
            return None
        if self._range_x_dirty:
            xs = [p.x for p in self._points]
            self._range_x = Range(min(xs), max(xs))
            self._range_x_dirty = False
        return Range(self._range_x.min, self._range_x.max)

    def range_y(self) -> Optional[Range]:
        """Range of the y values, or None if empty or not numeric."""
        if not self.numeric_y or not self._points:
            return None
        if self._range_y_dirty:
            ys = [p.y for p in self._points]
            self._range_y = Range(min(ys), max(ys))
            self._range_y_dirty = False
        return Range(self._range_y.min, self._range_y.max)

    @staticmethod
    def _as_point(point: Any) -> Point:
        if isinstance(point, Point):
            return Point(point.x, point.y)
        x, y = point
        return Point(x, y)

    def _accept(self, point: Point) -> bool:
        """Validate a point and update the cached ranges; False if it must be dropped."""
        if self.numeric_x and not _is_finite(point.x):
            return False
        if self.numeric_y and not _is_finite(point.y):
            return False
        if self.numeric_x:
            self._update_range_x(point)
        if self.numeric_y:
            self._update_range_y(point)
        return True

    def _update_range_x(self, point: Point) -> None:
        if not self._points:
            self._range_x = Range(point.x, point.x)
            self._range_x_dirty = False
        elif not self._range_x_dirty:
            if point.x > self._range_x.max:
                self._range_x.max = point.x
            elif point.x < self._range_x.min:
                self._range_x.min = point.x
            else:
                self._range_x_dirty = True

    def _update_range_y(self, point: Point) -> None:
        if not self._range_y_dirty:
            if point.y > self._range_y.max:
                self._range_y.max = point.y
            elif point.y < self._range_y.min:
                self._range_y.min = point.y
            else:
                self._range_y_dirty = True

    def push_back(self, point: Any) -> None:
        """Append a point; points with non-finite numeric coordinates are skipped."""
        p = self._as_point(point)
        if self._accept(p):
            self._points.append(p)

    def insert(self, index: int, point: Any) -> None:
        """Insert a point before ``index``; invalid points are skipped."""
        p = self._as_point(point)
        if self._accept(p):
            self._points.insert(index, p)

    def pop_front(self) -> Point:
        """Remove and return the first point; IndexError if empty."""
        p = self._points[0]
        if self.numeric_x and not self._range_x_dirty:
            if p.x == self._range_x.max or p.x == self._range_x.min:
                self._range_x_dirty = True
        if self.numeric_y and not self._range_y_dirty:
            if p.y == self._range_y.max or p.y == self._range_y.min:
                self._range_y_dirty = True
        return self._points.popleft()