"""A source whose samples come from an in-memory buffer."""

from __future__ import annotations

import math
from collections import deque
from collections.abc import Iterable
from datetime import timedelta

from soundweave.sample import SampleFormat
from soundweave.source import SeekError, Source

_U64_MAX = 2**64 - 1
_NANOS_PER_SECOND = 1_000_000_000


class SamplesBuffer(Source):
    """A list of samples played as a source."""

    def __init__(
        self,
        channels: int,
        sample_rate: int,
        data: Iterable,
        sample_format: SampleFormat = SampleFormat.F32,
    ):
        if channels == 0:
            raise ValueError("channels must not be zero")
        if sample_rate == 0:
            raise ValueError("sample_rate must not be zero")

        samples = deque(data)
        scaled = _NANOS_PER_SECOND * len(samples)
        if scaled > _U64_MAX:
            raise OverflowError("buffer too long for its duration to be computed")
        duration_ns = scaled // sample_rate // channels

        self._data = samples
        self._channels = channels
        self._sample_rate = sample_rate
        self._duration = timedelta(microseconds=duration_ns // 1000)
        self.sample_format = sample_format

    def __next__(self):
        if not self._data:
            raise StopIteration
        return self._data.popleft()

    def current_frame_len(self) -> int | None:
        return None

    def channels(self) -> int:
        return self._channels

    def sample_rate(self) -> int:
        return self._sample_rate

    def total_duration(self) -> timedelta:
        return self._duration

    def seek(self, position: timedelta) -> timedelta:
        """Skip forward by the samples ``position`` covers; raises SeekError past the end."""
        millis = position // timedelta(milliseconds=1)
        count = math.floor(self._sample_rate / 1000.0 * millis + 0.5)
        if count > len(self._data):
            self._data.clear()
            raise SeekError("seek position lies beyond the end of the buffer")
        for _ in range(count):
            self._data.popleft()
        return position

    def size_hint(self) -> tuple[int, int | None]:
        remaining = len(self._data)
        return (remaining, remaining)