"""Detection of audio formats and decoding of audio files into sources."""

from __future__ import annotations

import enum
from datetime import timedelta
from typing import BinaryIO

from soundweave.sample import SampleFormat
from soundweave.source import Source
from soundweave.wav import WavDecoder, is_wave

_MISSING = object()


class DecoderError(Exception):
    """Raised when a decoder cannot be created for some data."""

    def __init__(self, message: str = "Unrecognized format"):
        super().__init__(message)


class Mp4Type(enum.Enum):
    """The file extensions of the MP4 container family."""

    MP4 = "mp4"
    M4A = "m4a"
    M4P = "m4p"
    M4B = "m4b"
    M4R = "m4r"
    M4V = "m4v"
    MOV = "mov"

    @classmethod
    def parse(cls, text: str) -> Mp4Type:
        """Parse an extension, ignoring case; raises ValueError if it is unknown."""
        try:
            return cls(text.lower())
        except ValueError:
            raise ValueError(f"{text} is not a valid mp4 extension") from None

    def __str__(self) -> str:
        return self.value


def _open_wav(data: BinaryIO) -> WavDecoder:
    if not is_wave(data):
        raise DecoderError()
    return WavDecoder(data)


class Decoder(Source):
    """Source of 16-bit samples decoded from audio data of a detected format."""

    sample_format = SampleFormat.I16

    def __init__(self, data: BinaryIO):
        self._inner = _open_wav(data)

    @classmethod
    def new_wav(cls, data: BinaryIO) -> Decoder:
        """Build a decoder for WAV data; raises DecoderError for anything else."""
        return cls(data)

    @classmethod
    def new_looped(cls, data: BinaryIO) -> LoopedDecoder:
        """Build a decoder that starts over from the beginning whenever it ends."""
        return LoopedDecoder(cls(data))

    def __next__(self) -> int:
        return next(self._inner)

    def current_frame_len(self) -> int | None:
        return self._inner.current_frame_len()

    def channels(self) -> int:
        return self._inner.channels()

    def sample_rate(self) -> int:
        return self._inner.sample_rate()

    def total_duration(self) -> timedelta | None:
        return self._inner.total_duration()

    def seek(self, position: timedelta) -> timedelta:
        return self._inner.seek(position)

    def size_hint(self) -> tuple[int, int | None]:
        return self._inner.size_hint()


class LoopedDecoder(Source):
    """A decoder that rewinds its data and plays it again each time it ends."""

    sample_format = SampleFormat.I16

    def __init__(self, decoder: Decoder):
        self._inner: WavDecoder | None = decoder._inner

    def _restart(self):
        """Rewind the data and return its first sample, or _MISSING if it cannot."""
        inner, self._inner = self._inner, None
        if inner is None:
            return _MISSING
        reader = inner.into_inner()
        try:
            reader.seek(0)
            if not is_wave(reader):
                return _MISSING
            source = WavDecoder(reader)
        except (OSError, ValueError):
            return _MISSING
        sample = next(source, _MISSING)
        self._inner = source
        return sample

    def __next__(self) -> int:
        if self._inner is not None:
            sample = next(self._inner, _MISSING)
            if sample is not _MISSING:
                return sample
        sample = self._restart()
        if sample is _MISSING:
            raise StopIteration
        return sample

    def current_frame_len(self) -> int | None:
        if self._inner is None:
            return 0
        return self._inner.current_frame_len()

    def channels(self) -> int:
        if self._inner is None:
            return 0
        return self._inner.channels()

    def sample_rate(self) -> int:
        if self._inner is None:
            return 1
        return self._inner.sample_rate()

    def total_duration(self) -> timedelta | None:
        return None

    def seek(self, position: timedelta) -> timedelta:
        if self._inner is None:
            return position
        return self._inner.seek(position)

    def size_hint(self) -> tuple[int, int | None]:
        if self._inner is None:
            return (0, None)
        return (self._inner.size_hint()[0], None)