from datetime import timedelta
import operator

import pytest

from soundweave.sample import SampleFormat
from soundweave.source import SeekError, Source


class _Countdown(Source):
    def __init__(self, start):
        self._value = start

    def __next__(self):
        if self._value <= 0:
            raise StopIteration
        self._value -= 1
        return float(self._value)

    def channels(self):
        return 2

    def sample_rate(self):
        return 8000


def test_abstract_source_cannot_be_instantiated():
    with pytest.raises(TypeError):
        Source()


def test_iteration_yields_all_samples():
    assert list(Source.__iter__(_Countdown(3))) == [2.0, 1.0, 0.0]


def test_iter_returns_same_object():
    source = _Countdown(1)
    assert Source.__iter__(source) is source


def test_defaults():
    source = _Countdown(2)
    assert Source.current_frame_len(source) is None
    assert Source.total_duration(source) is None
    assert Source.size_hint(source) == (0, None)
    assert source.sample_format is SampleFormat.F32


def test_default_seek_raises():
    with pytest.raises(SeekError):
        Source.seek(_Countdown(2), timedelta(seconds=1))


def test_length_hint_follows_size_hint():
    source = _Countdown(5)
    assert Source.size_hint(source) == (0, None)
    assert operator.length_hint(source, 42) == 0


def test_partial_iteration_keeps_defaults():
    source = _Countdown(3)
    iterator = Source.__iter__(source)
    assert next(iterator) == 2.0
    assert Source.size_hint(source) == (0, None)
    assert list(iterator) == [1.0, 0.0]