"""The common interface of every stream of audio samples."""

from __future__ import annotations

import abc
from datetime import timedelta

from soundweave.sample import SampleFormat


class SeekError(Exception):
    """Raised when a source cannot move to the requested position."""


class Source(abc.ABC):
    """A stream of interleaved audio samples.

    A source is an iterator of samples that also reports how they are laid
    out: the number of channels, the sample rate and the sample format.
    """

    sample_format: SampleFormat = SampleFormat.F32

    def __iter__(self) -> Source:
        return self

    @abc.abstractmethod
    def __next__(self):
        """Return the next sample, or raise StopIteration when finished."""

    def current_frame_len(self) -> int | None:
        """Samples left before channels or sample rate may change; None if they never do."""
        return None

    @abc.abstractmethod
    def channels(self) -> int:
        """Number of interleaved channels."""

    @abc.abstractmethod
    def sample_rate(self) -> int:
        """Samples per second for each channel."""

    def total_duration(self) -> timedelta | None:
        """Total playing time, or None when unknown or infinite."""
        return None

    def seek(self, position: timedelta) -> timedelta:
        """Move to ``position`` and return where playback now is."""
        raise SeekError(f"{type(self).__name__} does not support seeking")

    def size_hint(self) -> tuple[int, int | None]:
        """Lower and upper bounds on the number of samples left."""
        return (0, None)

    def __length_hint__(self) -> int:
        return self.size_hint()[0]