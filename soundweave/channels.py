"""Conversion between channel counts of interleaved samples."""

from __future__ import annotations

import operator
from collections.abc import Iterable, Iterator

_MISSING = object()


def _size_hint(iterator) -> tuple[int, int | None]:
    hint = getattr(iterator, "size_hint", None)
    if callable(hint):
        return hint()
    length = operator.length_hint(iterator, -1)
    if length < 0:
        return (0, None)
    return (length, length)


class ChannelCountConverter:
    """Iterator that turns interleaved samples with one channel count into another.

    Extra input channels are dropped; missing output channels repeat the last
    input channel of the frame.
    """

    def __init__(self, source: Iterable, from_channels: int, to_channels: int):
        if from_channels < 1:
            raise ValueError("from_channels must be at least 1")
        if to_channels < 1:
            raise ValueError("to_channels must be at least 1")
        self._source = source
        self._input: Iterator = iter(source)
        self._from = from_channels
        self._to = to_channels
        self._sample_repeat = _MISSING
        self._next_output_sample_pos = 0

    def __iter__(self) -> ChannelCountConverter:
        return self

    def __next__(self):
        pos = self._next_output_sample_pos
        if pos == self._from - 1:
            result = next(self._input, _MISSING)
            self._sample_repeat = result
        elif pos < self._from:
            result = next(self._input, _MISSING)
        else:
            result = self._sample_repeat

        self._next_output_sample_pos += 1
        if self._next_output_sample_pos == self._to:
            self._next_output_sample_pos = 0
            for _ in range(self._to, self._from):
                next(self._input, None)

        if result is _MISSING:
            raise StopIteration
        return result

    def size_hint(self) -> tuple[int, int | None]:
        """Bounds on the number of samples left."""
        low, high = _size_hint(self._input)

        def scale(count: int) -> int:
            return (count // self._from) * self._to + self._next_output_sample_pos

        return scale(low), None if high is None else scale(high)

    def __length_hint__(self) -> int:
        return self.size_hint()[0]

    def into_inner(self):
        """Return the wrapped source."""
        return self._source