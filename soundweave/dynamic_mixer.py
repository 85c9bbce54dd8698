"""Mixer that plays several sources at the same time."""

from __future__ import annotations

import threading
from datetime import timedelta
from itertools import islice

from soundweave.channels import ChannelCountConverter
from soundweave.sample import DataConverter, SampleFormat
from soundweave.sample_rate import SampleRateConverter
from soundweave.source import SeekError, Source


class _UniformSource(Source):
    """Presents a source with a fixed channel count, sample rate and format."""

    def __init__(self, source: Source, channels: int, sample_rate: int, sample_format: SampleFormat):
        self._inner = source
        self._target_channels = channels
        self._target_rate = sample_rate
        self.sample_format = sample_format
        self._pipeline = self._bind()

    def _bind(self):
        source = self._inner
        source_format = getattr(source, "sample_format", SampleFormat.F32)
        frame_len = source.current_frame_len()
        samples = source if frame_len is None else islice(source, frame_len)
        from_channels = source.channels()
        pipeline = SampleRateConverter(
            samples, source.sample_rate(), self._target_rate, from_channels, source_format
        )
        pipeline = ChannelCountConverter(pipeline, from_channels, self._target_channels)
        return DataConverter(pipeline, source_format, self.sample_format)

    def __next__(self):
        try:
            return next(self._pipeline)
        except StopIteration:
            self._pipeline = self._bind()
            return next(self._pipeline)

    def channels(self) -> int:
        return self._target_channels

    def sample_rate(self) -> int:
        return self._target_rate

    def total_duration(self) -> timedelta | None:
        return self._inner.total_duration()

    def seek(self, position: timedelta) -> timedelta:
        return self._inner.seek(position)

    def size_hint(self) -> tuple[int, int | None]:
        return self._pipeline.size_hint()


class DynamicMixerController:
    """The input side of a mixer: sources added here are played together."""

    def __init__(self, channels: int, sample_rate: int, sample_format: SampleFormat):
        self.channels = channels
        self.sample_rate = sample_rate
        self.sample_format = sample_format
        self._lock = threading.Lock()
        self._pending: list[Source] = []
        self._has_pending = False

    def add(self, source: Source) -> None:
        """Add a source to mix with the existing ones."""
        uniform = _UniformSource(source, self.channels, self.sample_rate, self.sample_format)
        with self._lock:
            self._pending.append(uniform)
            self._has_pending = True

    def _take_pending(self, sample_count: int) -> list[Source]:
        """Remove and return the pending sources whose channels line up with ``sample_count``."""
        with self._lock:
            ready = [s for s in self._pending if sample_count % s.channels() == 0]
            self._pending = [s for s in self._pending if sample_count % s.channels() != 0]
            self._has_pending = bool(self._pending)
        return ready


class DynamicMixer(Source):
    """The output side of a mixer: the sum of every playing source."""

    def __init__(self, controller: DynamicMixerController):
        self._input = controller
        self._current: list[Source] = []
        self._sample_count = 0
        self.sample_format = controller.sample_format

    def __next__(self):
        if self._input._has_pending:
            # Sources start only on a frame boundary so channels stay in place.
            self._current.extend(self._input._take_pending(self._sample_count))

        self._sample_count += 1

        fmt = self.sample_format
        total = fmt.zero_value()
        still_playing = []
        for source in self._current:
            value = next(source, None)
            if value is not None:
                total = fmt.saturating_add(total, value)
                still_playing.append(source)
        self._current = still_playing

        if not self._current:
            raise StopIteration
        return total

    def current_frame_len(self) -> int | None:
        return None

    def channels(self) -> int:
        return self._input.channels

    def sample_rate(self) -> int:
        return self._input.sample_rate

    def total_duration(self) -> timedelta | None:
        return None

    def seek(self, position: timedelta) -> timedelta:
        """Seek the first playing source."""
        if not self._current:
            raise SeekError("no source is playing")
        return self._current[0].seek(position)

    def size_hint(self) -> tuple[int, int | None]:
        return (0, None)


def mixer(
    channels: int, sample_rate: int, sample_format: SampleFormat = SampleFormat.F32
) -> tuple[DynamicMixerController, DynamicMixer]:
    """Build a mixer; every added source is converted to these output characteristics."""
    controller = DynamicMixerController(channels, sample_rate, sample_format)
    return controller, DynamicMixer(controller)