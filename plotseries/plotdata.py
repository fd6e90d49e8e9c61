"""Collection of every series known to the application, keyed by name."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, TypeVar

from plotseries.plotdatabase import PlotGroup
from plotseries.stringseries import StringSeries
from plotseries.timeseries import PlotData, PlotDataAny

__all__ = ["PlotDataMapRef", "add_prefix_to_plot_data"]

_S = TypeVar("_S")


def _get_or_add(
    series: Dict[str, _S],
    factory: Callable[[str, Optional[PlotGroup]], _S],
    name: str,
    group: Optional[PlotGroup],
) -> _S:
    existing = series.get(name)
    if existing is None:
        existing = series[name] = factory(name, group)
    return existing


@dataclass
class PlotDataMapRef:
    """Numeric, string and generic series plus the groups they belong to."""

    numeric: Dict[str, PlotData] = field(default_factory=dict)
    user_defined: Dict[str, PlotDataAny] = field(default_factory=dict)
    strings: Dict[str, StringSeries] = field(default_factory=dict)
    groups: Dict[str, PlotGroup] = field(default_factory=dict)

    def add_numeric(self, name: str, group: Optional[PlotGroup] = None) -> PlotData:
        """Add a numeric series; an existing one with that name is kept and returned."""
        return _get_or_add(self.numeric, PlotData, name, group)

    def add_user_defined(self, name: str, group: Optional[PlotGroup] = None) -> PlotDataAny:
        return _get_or_add(self.user_defined, PlotDataAny, name, group)

    def add_string_series(self, name: str, group: Optional[PlotGroup] = None) -> StringSeries:
        return _get_or_add(self.strings, StringSeries, name, group)

    def get_or_create_numeric(self, name: str, group: Optional[PlotGroup] = None) -> PlotData:
        return _get_or_add(self.numeric, PlotData, name, group)

    def get_or_create_string_series(
        self, name: str, group: Optional[PlotGroup] = None
    ) -> StringSeries:
        return _get_or_add(self.strings, StringSeries, name, group)

    def get_or_create_user_defined(
        self, name: str, group: Optional[PlotGroup] = None
    ) -> PlotDataAny:
        return _get_or_add(self.user_defined, PlotDataAny, name, group)

    def get_or_create_group(self, name: str) -> PlotGroup:
        """Return the group called ``name``, creating it if needed."""
        if not name:
            raise ValueError("Group name can not be empty")
        group = self.groups.get(name)
        if group is None:
            group = self.groups[name] = PlotGroup(name)
        return group

    def clear(self) -> None:
        """Drop every series; groups are kept."""
        self.numeric.clear()
        self.strings.clear()
        self.user_defined.clear()

    def set_maximum_range_x(self, max_range: float) -> None:
        for collection in (self.numeric, self.strings, self.user_defined):
            for series in collection.values():
                series.set_maximum_range_x(max_range)

    def erase(self, name: str) -> bool:
        """Remove every series called ``name``; True if any was removed."""
        erased = False
        for collection in (self.numeric, self.strings, self.user_defined):
            if collection.pop(name, None) is not None:
                erased = True
        return erased


def add_prefix_to_plot_data(prefix: str, data: Dict[str, _S]) -> None:
    """Rename every key of ``data`` in place to ``prefix/key``."""
    if not prefix:
        return
    renamed = {
        (prefix + key if key.startswith("/") else f"{prefix}/{key}"): value
        for key, value in data.items()
    }
    data.clear()
    data.update(renamed)