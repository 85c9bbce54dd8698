import pytest

from soundweave.channels import ChannelCountConverter


def test_remove_channels():
    output = list(ChannelCountConverter(iter([1, 2, 3, 1, 2, 3]), 3, 2))
    assert output == [1, 2, 1, 2]

    output = list(ChannelCountConverter(iter([1, 2, 3, 4, 1, 2, 3, 4]), 4, 1))
    assert output == [1, 1]


def test_add_channels():
    output = list(ChannelCountConverter(iter([1, 2, 1, 2]), 2, 3))
    assert output == [1, 2, 2, 1, 2, 2]

    output = list(ChannelCountConverter(iter([1, 2, 1, 2]), 2, 4))
    assert output == [1, 2, 2, 2, 1, 2, 2, 2]


def test_len_more():
    output = ChannelCountConverter(iter([1, 2, 1, 2]), 2, 3)
    assert output.size_hint() == (6, 6)
    assert len(list(output)) == 6


def test_len_less():
    output = ChannelCountConverter(iter([1, 2, 1, 2]), 2, 1)
    assert output.size_hint() == (2, 2)
    assert len(list(output)) == 2


def test_same_channel_count_passes_through():
    data = [5, -3, 7, 9, 0, 2]
    assert list(ChannelCountConverter(data, 2, 2)) == data


def test_accepts_plain_list():
    assert list(ChannelCountConverter([1, 2, 1, 2], 2, 1)) == [1, 1]


def test_unknown_length_gives_open_hint():
    converter = ChannelCountConverter((x for x in [1, 2]), 1, 2)
    assert converter.size_hint() == (0, None)
    assert list(converter) == [1, 1, 2, 2]


@pytest.mark.parametrize("from_channels,to_channels", [(0, 2), (2, 0)])
def test_zero_channels_rejected(from_channels, to_channels):
    with pytest.raises(ValueError):
        ChannelCountConverter([1, 2], from_channels, to_channels)


def test_into_inner_returns_source():
    data = [1, 2]
    assert ChannelCountConverter(data, 1, 2).into_inner() is data