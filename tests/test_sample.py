import pytest

from soundweave.sample import DataConverter, SampleFormat

FORMAT_NAMES = [member.name for member in SampleFormat]


def test_zero_values():
    assert SampleFormat.I16.zero_value() == 0
    assert SampleFormat.U16.zero_value() == 32768
    assert SampleFormat.F32.zero_value() == 0.0


@pytest.mark.parametrize(
    "fmt,first,second",
    [
        (SampleFormat.I16, -300, 900),
        (SampleFormat.I16, 900, -300),
        (SampleFormat.U16, 10, 40000),
        (SampleFormat.F32, -0.5, 0.75),
    ],
)
def test_lerp_endpoints(fmt, first, second):
    assert fmt.lerp(first, second, 0, 7) == first
    assert fmt.lerp(first, second, 7, 7) == second


@pytest.mark.parametrize("name", FORMAT_NAMES)
def test_lerp_stays_between_endpoints(name):
    first, second = (0.1, 0.9) if name == "F32" else (100, 1000)
    values = [SampleFormat[name].lerp(first, second, n, 10) for n in range(11)]
    assert values == sorted(values)
    assert all(first <= v <= second for v in values)


@pytest.mark.parametrize("fmt,value", [(SampleFormat.I16, -1234), (SampleFormat.U16, 4321), (SampleFormat.F32, 0.25)])
def test_amplify_by_one_is_identity(fmt, value):
    assert fmt.amplify(value, 1.0) == value


def test_amplify_by_zero_gives_zero():
    assert SampleFormat.I16.amplify(-1234, 0.0) == 0


def test_amplify_saturates_integer_formats():
    assert SampleFormat.I16.amplify(32767, 2.0) == 32767
    assert SampleFormat.I16.amplify(-32768, 2.0) == -32768


def test_saturating_add_clamps():
    assert SampleFormat.I16.saturating_add(32767, 1) == 32767
    assert SampleFormat.I16.saturating_add(-32768, -1) == -32768
    assert SampleFormat.U16.saturating_add(65535, 1) == 65535


def test_saturating_add_within_range_is_sum():
    assert SampleFormat.I16.saturating_add(10, -15) == -5
    assert SampleFormat.I16.saturating_add(10, 5) == 15


def test_to_f32_extremes():
    assert SampleFormat.I16.to_f32(-32768) == -1.0
    assert SampleFormat.I16.to_f32(0) == 0.0
    assert SampleFormat.U16.to_f32(32768) == 0.0
    assert SampleFormat.U16.to_f32(0) == -1.0


@pytest.mark.parametrize("value", [-32768, -10, 0, 10, 20, 32767])
def test_i16_float_round_trip(value):
    as_float = SampleFormat.I16.to_f32(value)
    assert SampleFormat.I16.from_f32(as_float) == value


@pytest.mark.parametrize("value", [0, 1, 32768, 65535])
def test_u16_float_round_trip(value):
    as_float = SampleFormat.U16.to_f32(value)
    assert SampleFormat.U16.from_f32(as_float) == value


def test_from_f32_clamps():
    assert SampleFormat.I16.from_f32(2.0) == 32767
    assert SampleFormat.I16.from_f32(-2.0) == -32768


@pytest.mark.parametrize("value", [-32768, -5, 0, 5, 32767])
def test_convert_i16_u16_round_trip(value):
    unsigned = SampleFormat.I16.convert(value, SampleFormat.U16)
    assert 0 <= unsigned <= 65535
    assert SampleFormat.U16.convert(unsigned, SampleFormat.I16) == value


@pytest.mark.parametrize("source_name", FORMAT_NAMES)
@pytest.mark.parametrize("target_name", FORMAT_NAMES)
def test_convert_silence_maps_to_silence(source_name, target_name):
    silence = SampleFormat[source_name].zero_value()
    converted = SampleFormat[source_name].convert(silence, SampleFormat[target_name])
    assert converted == SampleFormat[target_name].zero_value()


def test_convert_same_format_is_identity():
    assert SampleFormat.I16.convert(-77, SampleFormat.I16) == -77


def test_data_converter_i16_to_f32():
    converter = DataConverter([0, -32768, 10], SampleFormat.I16, SampleFormat.F32)
    assert list(converter) == [0.0, -1.0, 10 / 32768]


def test_data_converter_size_hint_and_inner():
    data = [1, 2, 3]
    converter = DataConverter(data, SampleFormat.I16, SampleFormat.U16)
    assert converter.size_hint() == (3, 3)
    next(converter)
    assert converter.size_hint() == (2, 2)
    assert converter.into_inner() is data