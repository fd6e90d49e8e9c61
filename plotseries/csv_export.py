"""Export series as CSV: per-series statistics or a merged table of a time range."""

from __future__ import annotations

import math
import sys
from pathlib import Path
from typing import List, Optional

from plotseries.plotdata import PlotDataMapRef
from plotseries.plugins import StatePublisher

__all__ = ["generate_statistics_csv", "generate_range_csv", "CsvExporter"]

_NAN = float("nan")
_EPSILON = sys.float_info.epsilon


def _short(value: float) -> str:
    """Shortest general form with six significant digits."""
    return "%g" % value


def _fixed(value: float) -> str:
    return "%f" % value


def generate_statistics_csv(
    datamap: PlotDataMapRef, time_start: float, time_end: float, current_time: float
) -> str:
    """Current value, minimum, maximum and average of every numeric series in a range."""
    lines = [
        "Series,Current,Min,Max,Average\n",
        f"Start Time,{_short(time_start)}\n",
        f"End Time,{_short(time_end)}\n",
        f"Current Time,{_short(current_time)}\n",
    ]
    for name in sorted(datamap.numeric):
        plot = datamap.numeric[name]
        index = plot.get_index_from_x(time_start)
        if index < 0:
            continue
        current_value = plot.get_y_from_x(current_time)
        first = plot[index]
        if first.x > time_end or index + 1 == len(plot):
            continue

        values = [first.y]
        for index in range(index + 1, len(plot)):
            point = plot[index]
            if point.x > time_end:
                break
            values.append(point.y)

        current = "" if current_value is None else _fixed(current_value)
        lines.append(
            f"{name},{current},{_fixed(min(values))},{_fixed(max(values))},"
            f"{_fixed(sum(values) / len(values))}\n"
        )
    return "".join(lines)


def generate_range_csv(datamap: PlotDataMapRef, time_start: float, time_end: float) -> str:
    """A table with one column per series and one row per distinct time in the range."""
    plots = sorted(
        (
            (name, series)
            for name, series in datamap.numeric.items()
            if len(series) != 0
            and not (series.front().x > time_end or series.back().x < time_start)
        ),
        key=lambda item: item[0],
    )
    count = len(plots)

    labels = "__time," + ",".join(name for name, _ in plots) + ("\n" if plots else "")
    indices: List[int] = []
    for _, series in plots:
        index = series.get_index_from_x(time_start)
        if index < 0:
            index = len(series)
        indices.append(index + 1)

    rows = [labels]
    row_values = [_NAN] * count
    while True:
        done = True
        min_time = sys.float_info.max
        for i, (_, series) in enumerate(plots):
            index = indices[i]
            row_values[i] = _NAN
            if index >= len(series):
                continue
            point = series[index]
            if point.x > time_end:
                continue
            done = False
            if min_time > point.x:
                min_time = point.x
                row_values[:i] = [_NAN] * i
                row_values[i] = point.y
            elif abs(min_time - point.x) < _EPSILON:
                row_values[i] = point.y

        if min_time > time_end or done:
            break

        cells = []
        for i, value in enumerate(row_values):
            if math.isnan(value):
                cells.append("")
            else:
                cells.append("%.6f" % value)
                indices[i] += 1
        rows.append("%.6f," % min_time + ",".join(cells) + "\n")
    return "".join(rows)


class CsvExporter(StatePublisher):
    """State publisher that exports the data around the current time as CSV."""

    def __init__(self, datamap: Optional[PlotDataMapRef] = None) -> None:
        super().__init__()
        self._datamap = datamap
        self._enabled = False
        self._previous_time = 0.0
        self._start_time = _NAN
        self._end_time = _NAN
        self._play_interval: Optional[float] = None

    @property
    def name(self) -> str:
        return "CSV Exporter"

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def start_time(self) -> float:
        return self._start_time

    @property
    def end_time(self) -> float:
        return self._end_time

    @property
    def play_interval(self) -> Optional[float]:
        """Interval of the last playback tick, or None before any."""
        return self._play_interval

    def update_state(self, current_time: float) -> None:
        self._previous_time = current_time

    def play(self, interval: float) -> None:
        """Record the playback interval; the exported range is not affected."""
        self._play_interval = interval

    def set_enabled(self, enabled: bool) -> None:
        """Enabling resets the time range; disabling emits ``closed``."""
        self._enabled = enabled
        if enabled:
            self._start_time = _NAN
            self._end_time = _NAN
        else:
            self.emit("closed")

    def set_start_to_current(self, use_first: bool) -> None:
        """Start the range at the first sample, or at the current time."""
        self._start_time = -sys.float_info.max if use_first else self._previous_time

    def set_end_to_current(self, use_last: bool) -> None:
        """End the range at the last sample, or at the current time."""
        self._end_time = sys.float_info.max if use_last else self._previous_time

    def can_export(self) -> bool:
        """True when both ends of the range are set and in order."""
        return self._start_time <= self._end_time

    def _require_datamap(self) -> PlotDataMapRef:
        if self._datamap is None:
            raise RuntimeError("no data map set")
        return self._datamap

    def statistics_csv(self) -> str:
        return generate_statistics_csv(
            self._require_datamap(), self._start_time, self._end_time, self._previous_time
        )

    def range_csv(self) -> str:
        return generate_range_csv(self._require_datamap(), self._start_time, self._end_time)

    def save_file(self, text: str, filename: str) -> Path:
        """Write ``text`` as UTF-8, adding a ``.csv`` suffix if missing; return the path."""
        if not filename.endswith(".csv"):
            filename += ".csv"
        path = Path(filename)
        path.write_bytes(text.encode("utf-8"))
        return path