"""Streamer that subscribes to a ZeroMQ publisher and parses every message received."""

from __future__ import annotations

import logging
import threading
import time
from typing import Optional

import zmq

from plotseries.plugins import DataStreamer, MessageParser

__all__ = ["ZmqSubscriber"]

_log = logging.getLogger(__name__)


class ZmqSubscriber(DataStreamer):
    """Receives messages on a SUB socket and feeds them to a MessageParser.

    If parsing fails the subscriber stops, keeps the exception in ``error``
    and emits ``closed``.
    """

    def __init__(self, context: Optional[zmq.Context] = None) -> None:
        super().__init__()
        self._context = context or zmq.Context.instance()
        self._running = threading.Event()
        self._socket: Optional[zmq.Socket] = None
        self._parser: Optional[MessageParser] = None
        self._thread: Optional[threading.Thread] = None
        self.socket_address = ""
        self.error: Optional[Exception] = None

    @property
    def name(self) -> str:
        return "ZMQ Subscriber"

    def start(
        self,
        address: str = "localhost",
        port: int = 9872,
        protocol: str = "JSON",
        transport: str = "tcp://",
    ) -> bool:
        """Connect to ``transport + address:port`` and parse messages with ``protocol``.

        Raises RuntimeError when no parsers are available, KeyError for an
        unknown protocol and ValueError for a port outside 0..65535.
        """
        if self.is_running():
            return True

        parsers = self.available_parsers()
        if parsers is None:
            raise RuntimeError("No available MessageParsers")
        creator = parsers[protocol]

        port = int(port)
        if not 0 <= port <= 65535:
            raise ValueError(f"invalid port: {port}")

        self._parser = creator.create_instance("", self.data_map)
        self.socket_address = f"{transport}{address}:{port}"
        self.error = None

        socket = self._context.socket(zmq.SUB)
        try:
            socket.connect(self.socket_address)
            socket.setsockopt(zmq.SUBSCRIBE, b"")
            socket.setsockopt(zmq.RCVTIMEO, 100)
        except zmq.ZMQError:
            socket.close(linger=0)
            raise
        self._socket = socket

        _log.debug("ZMQ listening on address %s", self.socket_address)
        self._running.set()
        self._thread = threading.Thread(target=self._receive_loop, daemon=True)
        self._thread.start()
        return True

    def shutdown(self) -> None:
        """Stop receiving and disconnect."""
        if not self._running.is_set():
            return
        self._running.clear()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()
        self._thread = None
        self._close_socket()

    def is_running(self) -> bool:
        return self._running.is_set()

    def _close_socket(self) -> None:
        socket, self._socket = self._socket, None
        if socket is None:
            return
        try:
            socket.disconnect(self.socket_address)
        except zmq.ZMQError:
            pass
        socket.close(linger=0)

    def _receive_loop(self) -> None:
        socket = self._socket
        parser = self._parser
        if socket is None or parser is None:
            return
        while self._running.is_set():
            try:
                data = socket.recv()
            except zmq.Again:
                continue
            if not data:
                continue
            timestamp = (time.time_ns() // 1000) * 1e-6
            try:
                with self.mutex:
                    parser.parse_message(data, timestamp)
            except Exception as err:  # any parser failure stops the stream
                _log.warning(
                    "Problem parsing the message. ZMQ Subscriber will be stopped.\n%s", err
                )
                self.error = err
                self._running.clear()
                self._close_socket()
                self.emit("closed")
                return
            self.emit("data_received")