"""Decoding of RIFF WAVE audio into 16-bit samples."""

from __future__ import annotations

import io
import math
import struct
from dataclasses import dataclass
from datetime import timedelta
from typing import BinaryIO

from soundweave.sample import SampleFormat
from soundweave.source import SeekError, Source

_FORMAT_PCM = 1
_FORMAT_FLOAT = 3
_FORMAT_EXTENSIBLE = 0xFFFE
_SUBFORMAT_GUID_TAIL = b"\x00\x00\x00\x00\x10\x00\x80\x00\x00\xaa\x00\x38\x9b\x71"
_I16_MAX = 32767


@dataclass(frozen=True)
class _WavSpec:
    channels: int
    sample_rate: int
    bits_per_sample: int
    bytes_per_sample: int
    is_float: bool
    data_start: int
    num_samples: int


def _read_exact(data: BinaryIO, size: int) -> bytes:
    chunk = data.read(size)
    if len(chunk) != size:
        raise ValueError("unexpected end of WAV header")
    return chunk


def _parse_fmt(body: bytes) -> tuple[bool, int, int, int, int]:
    """Return (is_float, channels, sample_rate, bits_per_sample, bytes_per_sample)."""
    if len(body) < 16:
        raise ValueError("fmt chunk too short")
    tag, channels, sample_rate, _byte_rate, block_align, bits = struct.unpack_from("<HHIIHH", body)

    if tag == _FORMAT_EXTENSIBLE:
        if len(body) < 40:
            raise ValueError("extensible fmt chunk too short")
        (valid_bits,) = struct.unpack_from("<H", body, 18)
        (tag,) = struct.unpack_from("<H", body, 24)
        if body[26:40] != _SUBFORMAT_GUID_TAIL:
            raise ValueError("unknown WAV sub-format")
        if valid_bits:
            bits = valid_bits

    if tag not in (_FORMAT_PCM, _FORMAT_FLOAT):
        raise ValueError(f"unsupported WAV format tag {tag}")
    if channels == 0:
        raise ValueError("WAV stream has no channels")
    if sample_rate == 0:
        raise ValueError("WAV stream has a zero sample rate")
    if block_align == 0 or block_align % channels:
        raise ValueError("invalid WAV block alignment")

    bytes_per_sample = block_align // channels
    if not 1 <= bytes_per_sample <= 4 or not 1 <= bits <= bytes_per_sample * 8:
        raise ValueError("invalid WAV sample size")
    is_float = tag == _FORMAT_FLOAT
    if is_float and (bits != 32 or bytes_per_sample != 4):
        raise ValueError("only 32-bit float WAV is supported")
    return is_float, channels, sample_rate, bits, bytes_per_sample


def _read_header(data: BinaryIO) -> _WavSpec:
    riff = _read_exact(data, 12)
    if riff[:4] != b"RIFF" or riff[8:12] != b"WAVE":
        raise ValueError("not a RIFF WAVE stream")

    fmt = None
    while True:
        head = _read_exact(data, 8)
        tag = head[:4]
        (size,) = struct.unpack("<I", head[4:])
        if tag == b"fmt ":
            fmt = _parse_fmt(_read_exact(data, size))
            if size % 2:
                data.read(1)
        elif tag == b"data":
            if fmt is None:
                raise ValueError("data chunk found before fmt chunk")
            is_float, channels, sample_rate, bits, bytes_per_sample = fmt
            return _WavSpec(
                channels=channels,
                sample_rate=sample_rate,
                bits_per_sample=bits,
                bytes_per_sample=bytes_per_sample,
                is_float=is_float,
                data_start=data.tell(),
                num_samples=size // bytes_per_sample,
            )
        else:
            data.seek(size + (size & 1), io.SEEK_CUR)


def is_wave(data: BinaryIO) -> bool:
    """Whether ``data`` holds WAV audio; its position is restored either way."""
    position = data.tell()
    try:
        _read_header(data)
    except (ValueError, struct.error, OSError):
        return False
    finally:
        data.seek(position)
    return True


def _f32_to_i16(value: float) -> int:
    # Clip rather than be excessively loud; NaN ends up at the lower bound.
    if math.isnan(value):
        value = -1.0
    clipped = min(max(value, -1.0), 1.0)
    return math.trunc(clipped * _I16_MAX)


def _i8_to_i16(value: int) -> int:
    return value * 256


def _i24_to_i16(value: int) -> int:
    return value >> 8


def _i32_to_i16(value: int) -> int:
    return value >> 16


class WavDecoder(Source):
    """Source of 16-bit samples decoded from a WAV stream."""

    sample_format = SampleFormat.I16

    def __init__(self, data: BinaryIO):
        if not is_wave(data):
            raise ValueError("data is not a WAV stream")
        self._data = data
        self._spec = _read_header(data)
        self._position = 0
        spec = self._spec
        self._total_duration = timedelta(
            microseconds=1_000_000 * spec.num_samples // (spec.sample_rate * spec.channels)
        )

    def _read_raw(self):
        """Read one stored sample; None when the stream is cut short."""
        spec = self._spec
        raw = self._data.read(spec.bytes_per_sample)
        if len(raw) != spec.bytes_per_sample:
            return None
        if spec.is_float:
            return struct.unpack("<f", raw)[0]
        if spec.bytes_per_sample == 1:
            return raw[0] - 128
        value = int.from_bytes(raw, "little", signed=True)
        return value >> (spec.bytes_per_sample * 8 - spec.bits_per_sample)

    def __next__(self) -> int:
        spec = self._spec
        key = (spec.is_float, spec.bits_per_sample)
        converters = {
            (True, 32): _f32_to_i16,
            (False, 8): _i8_to_i16,
            (False, 16): int,
            (False, 24): _i24_to_i16,
            (False, 32): _i32_to_i16,
        }
        convert = converters.get(key)
        if convert is None:
            kind = "Float" if spec.is_float else "Int"
            raise ValueError(f"Unimplemented wav spec: {kind}, {spec.bits_per_sample}")
        if self._position >= spec.num_samples:
            raise StopIteration
        self._position += 1
        value = self._read_raw()
        if value is None:
            return 0
        return convert(value)

    def current_frame_len(self) -> int | None:
        return None

    def channels(self) -> int:
        return self._spec.channels

    def sample_rate(self) -> int:
        return self._spec.sample_rate

    def total_duration(self) -> timedelta:
        return self._total_duration

    def seek(self, position: timedelta) -> timedelta:
        """Jump to the start of the whole second ``position`` falls in."""
        seconds = position // timedelta(seconds=1)
        if seconds < 0:
            raise SeekError("cannot seek to a negative position")
        spec = self._spec
        num_frames = spec.num_samples // spec.channels
        target = min(seconds * spec.sample_rate, num_frames) * spec.channels
        try:
            self._data.seek(spec.data_start + target * spec.bytes_per_sample)
        except OSError as exc:
            raise SeekError(str(exc)) from exc
        self._position = target
        return position

    def size_hint(self) -> tuple[int, int | None]:
        remaining = max(0, self._spec.num_samples - self._position)
        return (remaining, remaining)

    def into_inner(self) -> BinaryIO:
        """Return the underlying stream."""
        return self._data