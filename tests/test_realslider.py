import pytest

from plotseries.realslider import RealSlider


def test_default_limits():
    slider = RealSlider()
    assert slider.min_value == 0.0
    assert slider.max_value == 1.0
    assert slider.maximum == 1
    assert slider.real_value() == 0.0


def test_real_value_round_trip():
    slider = RealSlider()
    slider.set_limits(0.0, 10.0, 100)
    slider.set_real_value(5.0)
    assert slider.real_value() == pytest.approx(5.0)


def test_callback_receives_real_value():
    slider = RealSlider()
    slider.set_limits(-2.0, 2.0, 40)
    received = []
    slider.connect(received.append)
    slider.set_real_value(1.0)
    assert received == [pytest.approx(1.0)]


def test_no_callback_when_position_unchanged():
    slider = RealSlider()
    slider.set_limits(0.0, 10.0, 100)
    received = []
    slider.connect(received.append)
    slider.set_real_value(3.0)
    slider.set_real_value(3.0)
    assert len(received) == 1


def test_real_value_clamped_to_limits():
    slider = RealSlider()
    slider.set_limits(0.0, 10.0, 100)
    slider.set_real_value(20.0)
    assert slider.real_value() == pytest.approx(10.0)
    slider.set_real_value(-3.0)
    assert slider.real_value() == pytest.approx(0.0)


def test_integer_value_clamped():
    slider = RealSlider()
    slider.set_limits(0.0, 1.0, 50)
    slider.set_value(500)
    assert slider.value == 50
    slider.set_value(-5)
    assert slider.value == 0


def test_shrinking_range_clamps_position():
    slider = RealSlider()
    slider.set_limits(0.0, 1.0, 100)
    slider.set_value(80)
    slider.set_limits(0.0, 1.0, 10)
    assert slider.value == 10


def test_step_value_has_minimum_of_one():
    slider = RealSlider()
    slider.set_limits(0.0, 10.0, 100)
    slider.set_real_step_value(1e-9)
    assert slider.single_step == 1


def test_step_value_spanning_range():
    slider = RealSlider()
    slider.set_limits(0.0, 10.0, 100)
    slider.set_real_step_value(10.0)
    assert slider.single_step == 100


def test_empty_real_range_rejected():
    slider = RealSlider()
    slider.set_limits(1.0, 1.0, 10)
    with pytest.raises(ZeroDivisionError):
        slider.set_real_value(1.0)