import pytest

from robotiq_gripper.data_utils import (
    bytes_to_hex,
    get_lsb,
    get_msb,
    to_binary_string,
    words_to_hex,
)


def test_bytes_to_hex():
    assert bytes_to_hex([255, 121, 56, 33, 125, 60]) == "FF 79 38 21 7D 3C"


def test_words_to_hex():
    words = [1169, 58544, 14917, 42884, 36112, 16512, 33207, 62584, 30418]
    assert words_to_hex(words) == "0491 E4B0 3A45 A784 8D10 4080 81B7 F478 76D2"


def test_to_binary_string():
    assert to_binary_string(155) == "10011011"


def test_get_msb():
    assert get_msb(0x14A2) == 0x14


def test_get_lsb():
    assert get_lsb(0x14A2) == 0xA2


def test_empty_sequences_give_empty_string():
    assert bytes_to_hex([]) == ""
    assert words_to_hex([]) == ""


def test_bytes_to_hex_round_trip():
    data = bytes(range(0, 256, 7))
    assert bytes.fromhex(bytes_to_hex(data)) == data


def test_binary_string_round_trip():
    for value in range(256):
        text = to_binary_string(value)
        assert len(text) == 8
        assert int(text, 2) == value


def test_msb_and_lsb_recombine():
    for value in (0x0000, 0x00FF, 0x0100, 0x07D0, 0x03E8, 0xFFFF):
        assert (get_msb(value) << 8) | get_lsb(value) == value


@pytest.mark.parametrize("func", [get_msb, get_lsb])
@pytest.mark.parametrize("value", [-1, 0x10000])
def test_split_rejects_out_of_range(func, value):
    with pytest.raises(ValueError):
        func(value)


def test_hex_rejects_out_of_range():
    with pytest.raises(ValueError):
        bytes_to_hex([256])
    with pytest.raises(ValueError):
        words_to_hex([0x10000])
    with pytest.raises(ValueError):
        to_binary_string(256)