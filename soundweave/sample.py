"""Sample formats and conversion of samples between them."""

from __future__ import annotations

import enum
import math
import operator
from collections.abc import Iterable, Iterator

_I16_MIN = -32768
_I16_MAX = 32767
_U16_MAX = 65535
_U16_OFFSET = 32768


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _saturating_cast(x: float, lo: int, hi: int) -> int:
    """Truncate a float to an integer, clamping to ``[lo, hi]``; NaN gives 0."""
    if math.isnan(x):
        return 0
    if x <= lo:
        return lo
    if x >= hi:
        return hi
    return math.trunc(x)


def _wrap_i16(value: int) -> int:
    return ((value - _I16_MIN) % 65536) + _I16_MIN


def _wrap_u16(value: int) -> int:
    return value % 65536


def _size_hint(iterator) -> tuple[int, int | None]:
    hint = getattr(iterator, "size_hint", None)
    if callable(hint):
        return hint()
    length = operator.length_hint(iterator, -1)
    if length < 0:
        return (0, None)
    return (length, length)


class SampleFormat(enum.Enum):
    """The numeric representation of a single audio sample.

    - ``I16``: silence is 0, amplitudes span -32768..32767.
    - ``U16``: silence is 32768, amplitudes span 0..65535.
    - ``F32``: silence is 0.0, amplitudes span -1.0..1.0.
    """

    I16 = "i16"
    U16 = "u16"
    F32 = "f32"

    def lerp(self, first, second, numerator: int, denominator: int):
        """Linear interpolation from ``first`` towards ``second`` by ``numerator / denominator``."""
        if self is SampleFormat.F32:
            return first + (second - first) * numerator / denominator
        value = first + _trunc_div((second - first) * numerator, denominator)
        if self is SampleFormat.I16:
            return _wrap_i16(value)
        return _wrap_u16(value)

    def amplify(self, value, factor: float):
        """Multiply a sample by ``factor``."""
        scaled = float(value) * factor
        if self is SampleFormat.F32:
            return scaled
        if self is SampleFormat.I16:
            return _saturating_cast(scaled, _I16_MIN, _I16_MAX)
        return _saturating_cast(scaled, 0, _U16_MAX)

    def saturating_add(self, first, second):
        """Add two samples, clamping integer formats to their range."""
        total = first + second
        if self is SampleFormat.I16:
            return max(_I16_MIN, min(_I16_MAX, total))
        if self is SampleFormat.U16:
            return max(0, min(_U16_MAX, total))
        return total

    def zero_value(self):
        """The sample value that means silence."""
        if self is SampleFormat.I16:
            return 0
        if self is SampleFormat.U16:
            return _U16_OFFSET
        return 0.0

    def to_f32(self, value) -> float:
        """Convert a sample of this format to a float in -1.0..1.0."""
        if self is SampleFormat.F32:
            return float(value)
        if self is SampleFormat.U16:
            value = value - _U16_OFFSET
        return value / 32768.0

    def from_f32(self, value: float):
        """Convert a float in -1.0..1.0 to a sample of this format."""
        if self is SampleFormat.F32:
            return float(value)
        as_i16 = _saturating_cast(value * 32768.0, _I16_MIN, _I16_MAX)
        if self is SampleFormat.I16:
            return as_i16
        return as_i16 + _U16_OFFSET

    def convert(self, value, target: SampleFormat):
        """Convert a sample of this format to ``target``."""
        if self is target:
            return value
        if target is SampleFormat.F32:
            return self.to_f32(value)
        if self is SampleFormat.F32:
            return target.from_f32(value)
        if self is SampleFormat.I16:
            return value + _U16_OFFSET
        return value - _U16_OFFSET


class DataConverter:
    """Iterator converting every sample of ``source`` to another sample format."""

    def __init__(self, source: Iterable, from_format: SampleFormat, to_format: SampleFormat):
        self._source = source
        self._input: Iterator = iter(source)
        self.from_format = from_format
        self.to_format = to_format

    def __iter__(self) -> DataConverter:
        return self

    def __next__(self):
        return self.from_format.convert(next(self._input), self.to_format)

    def size_hint(self) -> tuple[int, int | None]:
        """Bounds on the number of samples left."""
        return _size_hint(self._input)

    def __length_hint__(self) -> int:
        return self.size_hint()[0]

    def into_inner(self):
        """Return the wrapped source."""
        return self._source