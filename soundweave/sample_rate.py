"""Conversion between sample rates by linear interpolation."""

from __future__ import annotations

import math
import operator
from collections.abc import Iterable, Iterator

from soundweave.sample import SampleFormat

_MISSING = object()


def _size_hint(iterator) -> tuple[int, int | None]:
    hint = getattr(iterator, "size_hint", None)
    if callable(hint):
        return hint()
    length = operator.length_hint(iterator, -1)
    if length < 0:
        return (0, None)
    return (length, length)


class SampleRateConverter:
    """Iterator that resamples interleaved samples from one rate to another.

    Chunks of ``from_rate / gcd`` input frames become chunks of
    ``to_rate / gcd`` output frames, each output frame being a linear
    interpolation between two neighbouring input frames.
    """

    def __init__(
        self,
        source: Iterable,
        from_rate: int,
        to_rate: int,
        channels: int,
        sample_format: SampleFormat = SampleFormat.F32,
    ):
        if from_rate < 1:
            raise ValueError("from_rate must be at least 1")
        if to_rate < 1:
            raise ValueError("to_rate must be at least 1")
        if channels < 1:
            raise ValueError("channels must be at least 1")

        self._source = source
        self._input: Iterator = iter(source)
        self._format = sample_format
        self._channels = channels

        divisor = math.gcd(from_rate, to_rate)
        if from_rate == to_rate:
            current: list = []
            following: list = []
        else:
            current = self._read_frame()
            following = self._read_frame()

        self._from = from_rate // divisor
        self._to = to_rate // divisor
        self._current_frame = current
        self._next_frame = following
        self._current_frame_pos_in_chunk = 0
        self._next_output_frame_pos_in_chunk = 0
        self._output_buffer: list = []

    def _read_frame(self) -> list:
        frame = []
        for _ in range(self._channels):
            sample = next(self._input, _MISSING)
            if sample is _MISSING:
                break
            frame.append(sample)
        return frame

    def _next_input_frame(self) -> None:
        self._current_frame_pos_in_chunk += 1
        self._current_frame = self._next_frame
        self._next_frame = self._read_frame()

    def __iter__(self) -> SampleRateConverter:
        return self

    def __next__(self):
        if self._from == self._to:
            return next(self._input)

        if self._output_buffer:
            return self._output_buffer.pop(0)

        if self._next_output_frame_pos_in_chunk == self._to:
            self._next_output_frame_pos_in_chunk = 0
            self._next_input_frame()
            while self._current_frame_pos_in_chunk != self._from:
                self._next_input_frame()
            self._current_frame_pos_in_chunk = 0
        else:
            req_left_sample = (
                self._from * self._next_output_frame_pos_in_chunk // self._to
            ) % self._from
            while self._current_frame_pos_in_chunk != req_left_sample:
                self._next_input_frame()

        numerator = (self._from * self._next_output_frame_pos_in_chunk) % self._to
        result = _MISSING
        for offset, (cur, nxt) in enumerate(zip(self._current_frame, self._next_frame)):
            sample = self._format.lerp(cur, nxt, numerator, self._to)
            if offset == 0:
                result = sample
            else:
                self._output_buffer.append(sample)

        self._next_output_frame_pos_in_chunk += 1

        if result is not _MISSING:
            return result
        if self._current_frame:
            first = self._current_frame.pop(0)
            self._output_buffer = self._current_frame
            self._current_frame = []
            return first
        raise StopIteration

    def size_hint(self) -> tuple[int, int | None]:
        """Bounds on the number of samples left (an estimate when resampling)."""
        low, high = _size_hint(self._input)
        if self._from == self._to:
            return low, high

        def apply(samples: int) -> int:
            after_chunk = samples
            if self._current_frame_pos_in_chunk == self._from - 1:
                after_chunk += len(self._next_frame)
            unread = max(0, self._from - (self._current_frame_pos_in_chunk + 2))
            after_chunk = max(0, after_chunk - unread * self._channels)
            after_chunk = after_chunk * self._to // self._from
            current_chunk = (self._to - self._next_output_frame_pos_in_chunk) * self._channels
            return current_chunk + after_chunk + len(self._output_buffer)

        return apply(low), None if high is None else apply(high)

    def __length_hint__(self) -> int:
        return self.size_hint()[0]

    def into_inner(self):
        """Return the wrapped source."""
        return self._source