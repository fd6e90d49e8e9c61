"""Time series containers, natural sorting, plugin bases, CSV export and ZeroMQ streaming."""

__version__ = "0.1.0"

__all__ = [
    "alphanum",
    "csv_export",
    "plotdata",
    "plotdatabase",
    "plugins",
    "realslider",
    "state_server",
    "stringseries",
    "stylesheet",
    "timeseries",
    "transform",
    "zmq_stream",
]