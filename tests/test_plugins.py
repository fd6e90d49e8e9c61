import xml.etree.ElementTree as ET

import pytest

from plotseries.plotdata import PlotDataMapRef
from plotseries.plugins import (
    DataLoader,
    DataStreamer,
    FileLoadInfo,
    MessageParser,
    MessageParserCreator,
    PlotJugglerPlugin,
    StatePublisher,
)


class _Parser(MessageParser):
    def parse_message(self, message, timestamp):
        self.get_series(self.topic_name).push_back((timestamp, float(message.decode())))
        return True


class _Creator(MessageParserCreator):
    @property
    def name(self):
        return "Plain"

    def create_instance(self, topic_name, data):
        return _Parser(topic_name, data)


class _Streamer(DataStreamer):
    def __init__(self):
        super().__init__()
        self.running = False

    @property
    def name(self):
        return "Dummy Streamer"

    def start(self, *args):
        self.running = True
        return True

    def shutdown(self):
        self.running = False
        self.emit("closed")

    def is_running(self):
        return self.running


class _Saving(PlotJugglerPlugin):
    @property
    def name(self):
        return "Saver"

    def xml_save_state(self, parent_element):
        ET.SubElement(parent_element, "option", {"value": "1"})
        return True


class _Publisher(StatePublisher):
    def __init__(self):
        super().__init__()
        self._on = False
        self.time = None

    @property
    def name(self):
        return "Pub"

    @property
    def enabled(self):
        return self._on

    def update_state(self, current_time):
        self.time = current_time

    def play(self, interval):
        pass

    def set_enabled(self, enabled):
        self._on = enabled
        if not enabled:
            self.emit("closed")


class _Loader(DataLoader):
    @property
    def name(self):
        return "Loader"

    def compatible_file_extensions(self):
        return ["txt"]

    def read_data_from_file(self, fileload_info, destination):
        destination.get_or_create_numeric(fileload_info.prefix + "x").push_back((0.0, 1.0))
        return True


def test_to_xml_has_plugin_tag_and_id():
    element = PlotJugglerPlugin.to_xml(_Creator())
    assert element.tag == "plugin"
    assert element.get("ID") == "Plain"
    assert list(element) == []


def test_to_xml_includes_saved_state():
    element = PlotJugglerPlugin.to_xml(_Saving())
    children = list(element)
    assert [c.tag for c in children] == ["option"]
    assert element.get("ID") == "Saver"


def test_default_load_state_returns_false():
    creator = _Creator()
    assert PlotJugglerPlugin.xml_load_state(creator, ET.Element("plugin")) is False
    assert PlotJugglerPlugin.xml_save_state(creator, ET.Element("plugin")) is False
    assert creator.is_debug_plugin is False


def test_parser_writes_into_map():
    data = PlotDataMapRef()
    parser = _Creator().create_instance("topic", data)
    assert parser.parse_message(b"3.5", 1.0) is True
    assert data.numeric["topic"][0].y == 3.5
    assert parser.get_series("topic") is data.numeric["topic"]


def test_parser_string_series_is_shared():
    data = PlotDataMapRef()
    parser = _Parser("t", data)
    assert parser.get_string_series("s") is data.strings["s"]


def test_available_parsers_empty_is_none():
    streamer = _Streamer()
    assert DataStreamer.available_parsers(streamer) is None
    DataStreamer.set_available_parsers(streamer, {})
    assert DataStreamer.available_parsers(streamer) is None


def test_available_parsers_returns_mapping():
    streamer = _Streamer()
    parsers = {"Plain": _Creator()}
    DataStreamer.set_available_parsers(streamer, parsers)
    assert DataStreamer.available_parsers(streamer) is parsers


def test_streamer_set_maximum_range_trims():
    streamer = _Streamer()
    series = streamer.data_map.get_or_create_numeric("a")
    for t in range(10):
        series.push_back((float(t), 1.0))
    DataStreamer.set_maximum_range_x(streamer, 3.0)
    assert series.back().x - series.front().x <= 3.0
    assert series.maximum_range_x == 3.0


def test_streamer_signals():
    streamer = _Streamer()
    received = []
    DataStreamer.on(streamer, "remove_group", received.append)
    DataStreamer.emit(streamer, "remove_group", "grp")
    assert received == ["grp"]


def test_unknown_signal_raises():
    streamer = _Streamer()
    with pytest.raises(ValueError):
        DataStreamer.on(streamer, "nope", print)
    with pytest.raises(ValueError):
        DataStreamer.emit(streamer, "nope")


def test_start_and_shutdown_emits_closed():
    streamer = _Streamer()
    closed = []
    DataStreamer.on(streamer, "closed", lambda: closed.append(True))
    assert streamer.start() is True
    assert streamer.is_running() is True
    streamer.shutdown()
    assert streamer.is_running() is False
    assert closed == [True]


def test_state_publisher_closed_signal():
    publisher = _Publisher()
    closed = []
    StatePublisher.on(publisher, "closed", lambda: closed.append(True))
    publisher.set_enabled(True)
    assert publisher.enabled is True
    assert closed == []
    publisher.set_enabled(False)
    assert closed == [True]
    assert publisher.enabled is False


def test_file_load_info_defaults_and_loader():
    info = FileLoadInfo("data.txt", prefix="p/")
    assert info.selected_datasources == []
    assert info.plugin_config is None
    dest = PlotDataMapRef()
    assert _Loader().read_data_from_file(info, dest) is True
    assert "p/x" in dest.numeric
    assert _Loader().compatible_file_extensions() == ["txt"]


def test_abstract_plugin_cannot_be_instantiated():
    with pytest.raises(TypeError):
        DataStreamer()