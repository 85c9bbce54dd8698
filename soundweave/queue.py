"""Queue that plays sources one after the other."""

from __future__ import annotations

import threading
from collections import deque
from datetime import timedelta

from soundweave.sample import SampleFormat
from soundweave.source import Source

# Upper bound on the frame length reported when nothing better is known; also
# the length of the silence played while a kept-alive queue is empty.
_THRESHOLD = 512

_MISSING = object()


class _Empty(Source):
    """A source that has no samples at all."""

    def __init__(self, sample_format: SampleFormat):
        self.sample_format = sample_format

    def __next__(self):
        raise StopIteration

    def current_frame_len(self) -> int | None:
        return 0

    def channels(self) -> int:
        return 1

    def sample_rate(self) -> int:
        return 48000

    def total_duration(self) -> timedelta:
        return timedelta(0)

    def seek(self, position: timedelta) -> timedelta:
        return position

    def size_hint(self) -> tuple[int, int | None]:
        return (0, 0)


class _Zero(Source):
    """A fixed number of silent samples."""

    def __init__(self, channels: int, sample_rate: int, num_samples: int, sample_format: SampleFormat):
        self._channels = channels
        self._sample_rate = sample_rate
        self._remaining = num_samples
        self.sample_format = sample_format

    def __next__(self):
        if self._remaining == 0:
            raise StopIteration
        self._remaining -= 1
        return self.sample_format.zero_value()

    def current_frame_len(self) -> int | None:
        return self._remaining

    def channels(self) -> int:
        return self._channels

    def sample_rate(self) -> int:
        return self._sample_rate

    def seek(self, position: timedelta) -> timedelta:
        return position

    def size_hint(self) -> tuple[int, int | None]:
        return (self._remaining, self._remaining)


class SourcesQueueInput:
    """The input side of a queue: sources appended here play in order."""

    def __init__(self, keep_alive_if_empty: bool):
        self._lock = threading.Lock()
        self._next_sounds: list[tuple[Source, threading.Event | None]] = []
        self.keep_alive_if_empty = keep_alive_if_empty

    def append(self, source: Source) -> None:
        """Add a source to the end of the queue."""
        with self._lock:
            self._next_sounds.append((source, None))

    def append_with_signal(self, source: Source) -> threading.Event:
        """Add a source to the end of the queue; the returned event is set once it has finished."""
        finished = threading.Event()
        with self._lock:
            self._next_sounds.append((source, finished))
        return finished

    def set_keep_alive_if_empty(self, keep_alive_if_empty: bool) -> None:
        """Choose whether the queue plays silence instead of ending when it runs dry."""
        self.keep_alive_if_empty = keep_alive_if_empty

    def clear(self) -> int:
        """Remove every queued source and return how many there were."""
        with self._lock:
            count = len(self._next_sounds)
            self._next_sounds.clear()
        return count

    def _is_empty(self) -> bool:
        with self._lock:
            return not self._next_sounds

    def _pop_next(self) -> tuple[Source, threading.Event | None] | None:
        with self._lock:
            if not self._next_sounds:
                return None
            return self._next_sounds.pop(0)


class SourcesQueueOutput(Source):
    """The output side of a queue: plays the queued sources one after the other."""

    def __init__(self, queue_input: SourcesQueueInput, sample_format: SampleFormat):
        self._input = queue_input
        self.sample_format = sample_format
        self._current: Source = _Empty(sample_format)
        self._signal_after_end: threading.Event | None = None
        self._sample_cache: deque = deque()

    def __next__(self):
        while True:
            if self._sample_cache:
                sample = self._sample_cache.popleft()
                if sample is _MISSING:
                    raise StopIteration
                return sample
            sample = next(self._current, _MISSING)
            if sample is not _MISSING:
                return sample
            if not self._go_next():
                raise StopIteration

    def _go_next(self) -> bool:
        """Switch to the next queued source; False when playback should stop."""
        if self._signal_after_end is not None:
            self._signal_after_end.set()
            self._signal_after_end = None

        entry = self._input._pop_next()
        if entry is None:
            if not self._input.keep_alive_if_empty:
                return False
            # A short silence avoids spinning while nothing is queued.
            self._current = _Zero(1, 44100, _THRESHOLD, self.sample_format)
            return True

        source, signal = entry
        # Leading silent pairs are dropped before playback starts.
        while True:
            left = next(source, _MISSING)
            right = next(source, _MISSING)
            if (
                left is not _MISSING
                and right is not _MISSING
                and float(left) == 0.0
                and float(right) == 0.0
            ):
                continue
            self._sample_cache.append(left)
            self._sample_cache.append(right)
            break

        self._current = source
        self._signal_after_end = signal
        return True

    def current_frame_len(self) -> int | None:
        # The boundary between two queued sources must also be a frame boundary.
        value = self._current.current_frame_len()
        if value is not None:
            if value != 0:
                return value
            if self._input.keep_alive_if_empty and self._input._is_empty():
                return _THRESHOLD

        lower_bound = self._current.size_hint()[0]
        if lower_bound > 0:
            return lower_bound
        return _THRESHOLD

    def channels(self) -> int:
        return self._current.channels()

    def sample_rate(self) -> int:
        return self._current.sample_rate()

    def total_duration(self) -> timedelta | None:
        return None

    def seek(self, position: timedelta) -> timedelta:
        """Seek within the source currently playing."""
        return self._current.seek(position)

    def size_hint(self) -> tuple[int, int | None]:
        return (self._current.size_hint()[0], None)


def queue(
    keep_alive_if_empty: bool, sample_format: SampleFormat = SampleFormat.F32
) -> tuple[SourcesQueueInput, SourcesQueueOutput]:
    """Build a queue as an input to append to and an output that plays.

    With ``keep_alive_if_empty`` the output plays silence while nothing is
    queued; otherwise it ends once the queue runs dry.
    """
    queue_input = SourcesQueueInput(keep_alive_if_empty)
    return queue_input, SourcesQueueOutput(queue_input, sample_format)