"""Request/reply server answering queries about the series values at the current time."""

from __future__ import annotations

import threading
from typing import Dict, Optional

import zmq

from plotseries.plotdata import PlotDataMapRef

__all__ = ["StateServer"]

_ERROR = b"Error"
_NAMES_REQUEST = b"[get_data_names]"
_DATA_REQUEST = b"[get_data]"


def _format_number(value: float) -> str:
    return "%g" % value


class StateServer:
    """Keeps the value of every numeric series at the current time and serves it.

    Requests:

    * ``[get_data_names]`` replies with every known name, each followed by a space;
    * ``[get_data]a;b`` replies with the values of ``a`` and ``b``, each followed
      by a space, or ``Error`` if any name is unknown;
    * anything else replies ``Error``.
    """

    def __init__(self, context: Optional[zmq.Context] = None) -> None:
        self._context = context
        self._lock = threading.Lock()
        self._current_data: Dict[str, float] = {}
        self._prev_datamap: Optional[PlotDataMapRef] = None
        self._prev_time = 0.0

    @property
    def current_data(self) -> Dict[str, float]:
        """A copy of the values by series name."""
        with self._lock:
            return dict(self._current_data)

    def update_state(self, datamap: Optional[PlotDataMapRef], current_time: float) -> None:
        """Refresh the values from ``datamap`` at ``current_time``; None clears them."""
        if datamap is None:
            with self._lock:
                self._current_data.clear()
        else:
            with self._lock:
                if datamap is not self._prev_datamap or current_time != self._prev_time:
                    for name, series in datamap.numeric.items():
                        value = series.get_y_from_x(current_time)
                        if value is not None:
                            self._current_data[name] = value
        self._prev_datamap = datamap
        self._prev_time = current_time

    def handle_request(self, request: bytes) -> bytes:
        """The reply to one request."""
        if request.startswith(_NAMES_REQUEST):
            with self._lock:
                names = sorted(self._current_data)
            return "".join(f"{name} " for name in names).encode("utf-8")

        if request.startswith(_DATA_REQUEST):
            names = request[len(_DATA_REQUEST):].decode("utf-8", errors="replace").split(";")
            parts = []
            with self._lock:
                for name in names:
                    if name not in self._current_data:
                        return _ERROR
                    parts.append(_format_number(self._current_data[name]) + " ")
            return "".join(parts).encode("utf-8")

        return _ERROR

    def serve(
        self,
        address: str = "tcp://*:6665",
        stop_event: Optional[threading.Event] = None,
    ) -> None:
        """Answer requests on ``address`` until ``stop_event`` is set (forever if None)."""
        context = self._context or zmq.Context.instance()
        socket = context.socket(zmq.REP)
        try:
            socket.bind(address)
            while stop_event is None or not stop_event.is_set():
                if socket.poll(100, zmq.POLLIN):
                    request = socket.recv()
                    socket.send(self.handle_request(request))
        finally:
            socket.close(linger=0)