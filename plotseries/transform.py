"""Transforms that derive one time series from another, and a registry of them."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional

from plotseries.plotdatabase import Point
from plotseries.timeseries import PlotData

__all__ = ["TimeSeriesTransform", "TransformFactory"]


class TimeSeriesTransform(ABC):
    """Computes an output series point by point from a source series."""

    def __init__(self) -> None:
        self._src_data: Optional[PlotData] = None
        self.alias = ""
        self._last_timestamp = -sys.float_info.max
        self.init()

    @property
    @abstractmethod
    def name(self) -> str:
        """Name under which the transform is registered."""

    @property
    def data_source(self) -> Optional[PlotData]:
        return self._src_data

    def set_data_source(self, src_data: Optional[PlotData]) -> None:
        self._src_data = src_data

    def init(self) -> None:
        """Reset the state so the next calculation starts from the beginning."""
        self._last_timestamp = -sys.float_info.max

    def calculate(self, dst_data: PlotData) -> None:
        """Append to ``dst_data`` the points computed from new source points."""
        src = self._src_data
        if src is None:
            raise RuntimeError("transform has no data source")
        if len(src) == 0:
            return
        dst_data.set_maximum_range_x(src.maximum_range_x)
        if len(dst_data) != 0:
            self._last_timestamp = dst_data.back().x

        start = max(src.get_index_from_x(self._last_timestamp), 0)
        for index in range(start, len(src)):
            in_point = src[index]
            if in_point.x >= self._last_timestamp:
                out_point = self.calculate_next_point(index)
                if out_point is not None:
                    dst_data.push_back(out_point)
                self._last_timestamp = in_point.x

    @abstractmethod
    def calculate_next_point(self, index: int) -> Optional[Point]:
        """Output point for the source point at ``index``, or None to skip it."""


class TransformFactory:
    """Registry of transform classes, looked up by their name."""

    def __init__(self) -> None:
        self._creators: Dict[str, Callable[[], TimeSeriesTransform]] = {}

    def register_transform(self, transform_class: Callable[[], TimeSeriesTransform]) -> str:
        """Register ``transform_class`` under its ``name`` and return that name."""
        name = transform_class().name
        self._creators[name] = transform_class
        return name

    def registered_transforms(self) -> List[str]:
        """Names of the registered transforms, sorted."""
        return sorted(self._creators)

    def create(self, name: str) -> Optional[TimeSeriesTransform]:
        """A new instance of the named transform, or None if it is unknown."""
        creator = self._creators.get(name)
        return None if creator is None else creator()