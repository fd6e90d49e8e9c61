"""Time series of text values with de-duplicated storage of long strings."""

from __future__ import annotations

from typing import Any, Dict, Optional

from plotseries.plotdatabase import PlotGroup
from plotseries.timeseries import TimeseriesBase

__all__ = ["StringSeries"]

# Strings up to this length are stored as they are; longer ones are shared.
_SHORT_STRING_SIZE = 15


class StringSeries(TimeseriesBase):
    """Time series of strings; empty values are ignored."""

    numeric_y = False

    def __init__(self, name: str, group: Optional[PlotGroup] = None) -> None:
        super().__init__(name, group)
        self._storage: Dict[str, str] = {}

    def clear(self) -> None:
        self._storage.clear()
        super().clear()

    def push_back(self, point: Any) -> None:
        """Add a point; equal long strings share a single stored copy."""
        p = self._as_point(point)
        text = p.y
        if not text:
            return
        if len(text) > _SHORT_STRING_SIZE:
            p.y = self._storage.setdefault(text, text)
        super().push_back(p)