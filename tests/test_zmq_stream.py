import threading
import time

import pytest
import zmq

from plotseries.plugins import MessageParser, MessageParserCreator
from plotseries.zmq_stream import ZmqSubscriber


class _ValueParser(MessageParser):
    def parse_message(self, message, timestamp):
        self.get_series("value").push_back((timestamp, float(message)))
        return True


class _FailingParser(MessageParser):
    def parse_message(self, message, timestamp):
        raise ValueError("bad message")


class _Creator(MessageParserCreator):
    def __init__(self, parser_class):
        self._parser_class = parser_class

    @property
    def name(self):
        return "test"

    def create_instance(self, topic_name, data):
        return self._parser_class(topic_name, data)


@pytest.fixture
def context():
    ctx = zmq.Context()
    yield ctx
    ctx.destroy(linger=0)


@pytest.fixture
def publisher(context):
    pub = context.socket(zmq.PUB)
    pub.bind("inproc://stream-test:9872")
    return pub


def _subscriber(context, parser_class):
    sub = ZmqSubscriber(context=context)
    sub.set_available_parsers({"JSON": _Creator(parser_class)})
    return sub


def _publish_until(publisher, event):
    for _ in range(200):
        publisher.send(b"3.5")
        if event.wait(0.05):
            return True
    return False


def test_name():
    assert ZmqSubscriber(context=zmq.Context.instance()).name == "ZMQ Subscriber"


def test_receives_and_parses_messages(context, publisher):
    sub = _subscriber(context, _ValueParser)
    received = threading.Event()
    sub.on("data_received", received.set)
    assert sub.start("stream-test", 9872, "JSON", "inproc://") is True
    assert sub.socket_address == "inproc://stream-test:9872"
    try:
        assert _publish_until(publisher, received)
    finally:
        sub.shutdown()
    assert not sub.is_running()
    series = sub.data_map.numeric["value"]
    assert series[0].y == 3.5
    assert series[0].x > 0


def test_start_twice_keeps_running(context, publisher):
    sub = _subscriber(context, _ValueParser)
    sub.start("stream-test", 9872, "JSON", "inproc://")
    try:
        assert sub.start("stream-test", 9872, "JSON", "inproc://") is True
        assert sub.is_running()
    finally:
        sub.shutdown()
    assert not sub.is_running()


def test_parse_error_stops_and_emits_closed(context, publisher):
    sub = _subscriber(context, _FailingParser)
    closed = threading.Event()
    sub.on("closed", closed.set)
    sub.start("stream-test", 9872, "JSON", "inproc://")
    assert _publish_until(publisher, closed)
    deadline = time.monotonic() + 5
    while sub.is_running() and time.monotonic() < deadline:
        time.sleep(0.01)
    assert not sub.is_running()
    assert isinstance(sub.error, ValueError)
    sub.shutdown()


def test_no_parsers_raises(context):
    sub = ZmqSubscriber(context=context)
    with pytest.raises(RuntimeError):
        sub.start()
    assert not sub.is_running()


def test_empty_parser_map_raises(context):
    sub = ZmqSubscriber(context=context)
    sub.set_available_parsers({})
    with pytest.raises(RuntimeError):
        sub.start()


def test_unknown_protocol_raises(context):
    sub = _subscriber(context, _ValueParser)
    with pytest.raises(KeyError):
        sub.start("stream-test", 9872, "CSV", "inproc://")
    assert not sub.is_running()


def test_invalid_port_raises(context):
    sub = _subscriber(context, _ValueParser)
    with pytest.raises(ValueError):
        sub.start("localhost", 70000, "JSON")
    assert not sub.is_running()


def test_shutdown_when_not_running_is_harmless(context):
    sub = _subscriber(context, _ValueParser)
    sub.shutdown()
    assert sub.is_running() is False