"""Base classes for the plugins that load, stream, parse and publish series data."""

from __future__ import annotations

import threading
import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Tuple

from plotseries.plotdata import PlotDataMapRef
from plotseries.stringseries import StringSeries
from plotseries.timeseries import PlotData

__all__ = [
    "PlotJugglerPlugin",
    "MessageParser",
    "MessageParserCreator",
    "DataStreamer",
    "StatePublisher",
    "FileLoadInfo",
    "DataLoader",
]


class _Signals:
    """Named signals with callbacks; unknown signal names raise ValueError."""

    def __init__(self, names: FrozenSet[str]) -> None:
        self._handlers: Dict[str, List[Callable[..., Any]]] = {name: [] for name in names}

    def _handlers_for(self, signal: str) -> List[Callable[..., Any]]:
        try:
            return self._handlers[signal]
        except KeyError:
            raise ValueError(f"unknown signal: {signal!r}") from None

    def connect(self, signal: str, callback: Callable[..., Any]) -> None:
        self._handlers_for(signal).append(callback)

    def emit(self, signal: str, *args: Any) -> None:
        for callback in list(self._handlers_for(signal)):
            callback(*args)


def _convert_like(current: Any, text: str) -> Any:
    """Convert ``text`` to the type of ``current``."""
    if isinstance(current, bool):
        return text.strip().lower() in ("1", "true", "yes", "on")
    if isinstance(current, int):
        return int(text)
    if isinstance(current, float):
        return float(text)
    return text


class PlotJugglerPlugin(ABC):
    """Common interface of every plugin.

    Subclasses list in ``STATE_ATTRIBUTES`` the names of the attributes that
    make up their configuration; these are saved to and loaded from XML.
    """

    STATE_ATTRIBUTES: Tuple[str, ...] = ()

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique name of the plugin."""

    @property
    def is_debug_plugin(self) -> bool:
        return False

    def xml_save_state(self, parent_element: ET.Element) -> bool:
        """Store the plugin configuration into ``parent_element``; True if anything was saved."""
        saved = False
        for attr in self.STATE_ATTRIBUTES:
            value = getattr(self, attr)
            parent_element.set(attr, str(value))
            saved = True
        return saved

    def xml_load_state(self, parent_element: ET.Element) -> bool:
        """Restore the configuration from ``parent_element``; True on success."""
        if not self.STATE_ATTRIBUTES:
            return False
        loaded = True
        for attr in self.STATE_ATTRIBUTES:
            text = parent_element.get(attr)
            if text is None:
                loaded = False
                continue
            try:
                setattr(self, attr, _convert_like(getattr(self, attr, ""), text))
            except ValueError:
                loaded = False
        return loaded

    def to_xml(self) -> ET.Element:
        """A ``<plugin ID="...">`` element holding the saved state."""
        element = ET.Element("plugin", {"ID": self.name})
        self.xml_save_state(element)
        return element


class MessageParser(ABC):
    """Turns raw messages of one source into samples of a PlotDataMapRef."""

    def __init__(self, topic_name: str, plot_data: PlotDataMapRef) -> None:
        self.topic_name = topic_name
        self.plot_data = plot_data

    @abstractmethod
    def parse_message(self, message: bytes, timestamp: float) -> bool:
        """Parse one serialized message received at ``timestamp``."""

    def get_series(self, key: str) -> PlotData:
        return self.plot_data.get_or_create_numeric(key)

    def get_string_series(self, key: str) -> StringSeries:
        return self.plot_data.get_or_create_string_series(key)


class MessageParserCreator(PlotJugglerPlugin):
    """Plugin that builds a MessageParser for each data source."""

    @abstractmethod
    def create_instance(self, topic_name: str, data: PlotDataMapRef) -> MessageParser:
        """A new parser writing into ``data``."""


class DataStreamer(PlotJugglerPlugin):
    """Plugin that receives live data.

    Every update of ``data_map`` must happen while holding ``mutex``.
    Signals: ``clear_buffers``, ``remove_group``, ``data_received``, ``closed``.
    """

    SIGNALS = frozenset({"clear_buffers", "remove_group", "data_received", "closed"})

    def __init__(self) -> None:
        self._signals = _Signals(self.SIGNALS)
        self.mutex = threading.Lock()
        self.data_map = PlotDataMapRef()
        self._available_parsers: Optional[Dict[str, MessageParserCreator]] = None

    @abstractmethod
    def start(self, *args: Any) -> bool:
        """Start streaming; True if the streamer is running afterwards."""

    @abstractmethod
    def shutdown(self) -> None:
        """Stop streaming."""

    @abstractmethod
    def is_running(self) -> bool:
        """True while data is being received."""

    def set_maximum_range_x(self, max_range: float) -> None:
        with self.mutex:
            self.data_map.set_maximum_range_x(max_range)

    def set_available_parsers(self, parsers: Optional[Dict[str, MessageParserCreator]]) -> None:
        self._available_parsers = parsers

    def available_parsers(self) -> Optional[Dict[str, MessageParserCreator]]:
        """The parser creators by protocol name, or None when there are none."""
        if not self._available_parsers:
            return None
        return self._available_parsers

    def on(self, signal: str, callback: Callable[..., Any]) -> None:
        """Call ``callback(*args)`` every time ``signal`` is emitted."""
        self._signals.connect(signal, callback)

    def emit(self, signal: str, *args: Any) -> None:
        """Invoke every callback registered for ``signal``."""
        self._signals.emit(signal, *args)


class StatePublisher(PlotJugglerPlugin):
    """Plugin notified of the current time while data is being explored.

    Signal: ``closed``.
    """

    SIGNALS = frozenset({"closed"})

    def __init__(self) -> None:
        self._signals = _Signals(self.SIGNALS)
        self._datamap: Optional[PlotDataMapRef] = None

    @property
    @abstractmethod
    def enabled(self) -> bool:
        """True while the publisher is active."""

    @abstractmethod
    def update_state(self, current_time: float) -> None:
        """Called when the current time changes."""

    @abstractmethod
    def play(self, interval: float) -> None:
        """Called periodically during playback."""

    @abstractmethod
    def set_enabled(self, enabled: bool) -> None:
        """Activate or deactivate the publisher."""

    def set_data_map(self, datamap: Optional[PlotDataMapRef]) -> None:
        self._datamap = datamap

    def on(self, signal: str, callback: Callable[..., Any]) -> None:
        """Call ``callback(*args)`` every time ``signal`` is emitted."""
        self._signals.connect(signal, callback)

    def emit(self, signal: str, *args: Any) -> None:
        """Invoke every callback registered for ``signal``."""
        self._signals.emit(signal, *args)


@dataclass
class FileLoadInfo:
    """What a DataLoader needs to open one file."""

    filename: str
    prefix: str = ""
    selected_datasources: List[str] = field(default_factory=list)
    plugin_config: Optional[ET.Element] = None


class DataLoader(PlotJugglerPlugin):
    """Plugin that reads series from files."""

    @abstractmethod
    def compatible_file_extensions(self) -> List[str]:
        """File extensions this loader can open."""

    @abstractmethod
    def read_data_from_file(self, fileload_info: FileLoadInfo, destination: PlotDataMapRef) -> bool:
        """Load the file into ``destination``; True on success."""