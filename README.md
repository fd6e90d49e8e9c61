# plotseries

Data structures and helpers for applications that plot time series.

## Modules

- `plotseries.plotdatabase` – `Point`, `Range`, `PlotGroup` and `PlotDataBase`.
  `PlotDataBase` holds points in order, drops points whose numeric coordinates
  are NaN or infinite, and caches the X/Y ranges (`range_x()`, `range_y()`),
  recomputing them only when needed. Series and groups carry attributes
  (`set_attribute`, `attribute`).
- `plotseries.timeseries` – `TimeseriesBase`, `PlotData` (numeric values) and
  `PlotDataAny` (any values). Points are kept sorted by time; out-of-order points
  are inserted in place. `get_index_from_x` returns the index of the nearest
  point (-1 when empty), `get_y_from_x` its value (None when empty), and
  `set_maximum_range_x` limits the time span kept, dropping the oldest points.
- `plotseries.stringseries` – `StringSeries`, a time series of strings that
  ignores empty values and shares one stored copy of equal strings longer than
  15 characters.
- `plotseries.plotdata` – `PlotDataMapRef`, holding `numeric`, `strings`,
  `user_defined` series and `groups` by name, with `add_*`/`get_or_create_*`
  methods, `get_or_create_group` (raises `ValueError` for an empty name),
  `erase`, `clear` and `set_maximum_range_x`; and `add_prefix_to_plot_data`,
  which renames the keys of a dictionary to `prefix/key`.
- `plotseries.alphanum` – natural ordering of strings, where runs of digits
  compare by value: `alphanum_compare`, `alphanum_less`, `alphanum_key`,
  `alphanum_sorted`.
- `plotseries.transform` – `TimeSeriesTransform`, an abstract base that computes
  an output series from a source series incrementally (`calculate`), and
  `TransformFactory`, a registry of transform classes by name.
- `plotseries.realslider` – `RealSlider`, a model of an integer slider mapped
  onto a range of real numbers, calling connected callbacks with the real value
  when its position changes.
- `plotseries.plugins` – abstract bases `PlotJugglerPlugin`, `MessageParser`,
  `MessageParserCreator`, `DataStreamer`, `StatePublisher` and `DataLoader`,
  plus the `FileLoadInfo` dataclass. Plugins save and load the attributes named
  in `STATE_ATTRIBUTES` to and from XML elements (`xml_save_state`,
  `xml_load_state`, `to_xml`). Streamers and publishers have named signals
  (`on`, `emit`).
- `plotseries.csv_export` – `generate_statistics_csv` (current value, min, max
  and average of each numeric series in a time range), `generate_range_csv`
  (one column per series, one row per distinct time), and `CsvExporter`, a
  state publisher that tracks a start/end range around the current time and
  writes CSV files with `save_file`.
- `plotseries.stylesheet` – `apply_palette`, which expands `${name}`
  placeholders from a `PALETTE START`/`PALETTE END` block and returns the
  stylesheet and its `theme` value (raising `StyleSheetError` on an unclosed
  or unknown placeholder), and `recolor_svg`, which swaps black and white in
  SVG data for light or dark styles.
- `plotseries.state_server` – `StateServer`, which keeps the value of every
  numeric series at the current time (`update_state`) and answers
  `[get_data_names]` and `[get_data]a;b` requests (`handle_request`), over a
  ZeroMQ REP socket with `serve` (default address `tcp://*:6665`).
- `plotseries.zmq_stream` – `ZmqSubscriber`, a `DataStreamer` that connects a
  ZeroMQ SUB socket (default `tcp://localhost:9872`), receives messages on a
  background thread and passes each one, with its arrival time, to the parser
  of the chosen protocol. A parsing error stops it, is kept in `error`, and
  emits `closed`.

## Installation

```
pip install plotseries
```

## Example

```python
from plotseries.plotdata import PlotDataMapRef
from plotseries.plotdatabase import Point
from plotseries.alphanum import alphanum_sorted
from plotseries.csv_export import generate_range_csv

data = PlotDataMapRef()
speed = data.get_or_create_numeric("speed")
for t, v in [(0.0, 1.0), (1.0, 2.0), (2.0, 4.0)]:
    speed.push_back(Point(t, v))

print(speed.get_y_from_x(1.2))               # 2.0
print(alphanum_sorted(["x10", "x2", "x1"]))  # ['x1', 'x2', 'x10']
print(generate_range_csv(data, 0.0, 2.0))
```

## What it does not do

- It draws nothing: there is no plotting, window or widget; `RealSlider` is
  only a model of a slider.
- It has no command-line program.
- It ships no concrete message parsers, data loaders or transforms. To use
  `ZmqSubscriber`, register your own `MessageParserCreator` for each protocol
  with `set_available_parsers`; without one, `start` raises `RuntimeError`.

## Running the tests

```
pip install -e ".[test]"
pytest
```