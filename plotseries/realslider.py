"""Integer slider that maps its positions onto a range of real numbers."""

from __future__ import annotations

import math
from typing import Callable, List

__all__ = ["RealSlider"]


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


class RealSlider:
    """A slider with integer steps ``0..steps`` spanning ``[min_value, max_value]``.

    Callbacks registered with :meth:`connect` receive the real value each time
    the integer position changes.
    """

    def __init__(self) -> None:
        self._callbacks: List[Callable[[float], None]] = []
        self.minimum = 0
        self.maximum = 99
        self.value = 0
        self.single_step = 1
        self.min_value = 0.0
        self.max_value = 1.0
        self.set_limits(0.0, 1.0, 1)

    def connect(self, callback: Callable[[float], None]) -> None:
        """Call ``callback(real_value)`` whenever the position changes."""
        self._callbacks.append(callback)

    def set_limits(self, min_value: float, max_value: float, steps: int) -> None:
        self.min_value = min_value
        self.max_value = max_value
        self.minimum = 0
        self.maximum = steps
        self.set_value(self.value)

    def set_value(self, value: int) -> None:
        """Move to integer position ``value``, clamped to the slider range."""
        value = min(max(int(value), self.minimum), self.maximum)
        if value == self.value:
            return
        self.value = value
        real = self.real_value()
        for callback in self._callbacks:
            callback(real)

    def set_real_value(self, val: float) -> None:
        """Move to the position nearest to the real value ``val``."""
        val = min(max(val, self.min_value), self.max_value)
        ratio = (val - self.min_value) / (self.max_value - self.min_value)
        pos = _round_half_away((self.maximum - self.minimum) * ratio + self.minimum)
        self.set_value(pos)

    def set_real_step_value(self, step: float) -> None:
        """Set the single step to the number of positions nearest to ``step``."""
        ratio = (self.max_value - self.min_value) / (self.maximum - self.minimum)
        self.single_step = max(1, _round_half_away(step / ratio))

    def real_value(self) -> float:
        """The real number for the current position."""
        ratio = self.value / (self.maximum - self.minimum)
        return (self.max_value - self.min_value) * ratio + self.min_value