import pytest

from elma_core.errors import (
    InvalidTimeFormatError,
    NonASCIIError,
    PaddingTooShortError,
    StringDecodeError,
)
from elma_core.text import ascii_pad, format_time, parse_time, trim_cstring


def test_format_time_examples():
    assert format_time(2039) == "00:20,39"
    assert format_time(0) == "00:00,00"
    assert format_time(595999) == "59:59,99"
    assert format_time(599999) == "59:59,99"
    assert format_time(600000) == "59:59,99"
    assert format_time(1_000_000) == "59:59,99"
    assert format_time(123456) == "12:34,56"


@pytest.mark.parametrize("hs", [6000, 6100, 76000, 96000, 9999, -1])
def test_format_time_rejects_unrepresentable(hs):
    with pytest.raises(InvalidTimeFormatError):
        format_time(hs)


def test_format_time_parses_back():
    for mm in range(0, 60, 7):
        for ss in range(0, 60, 3):
            for hh in (0, 1, 9, 50, 99):
                t = mm * 10000 + ss * 100 + hh
                assert parse_time(format_time(t)) == t


@pytest.mark.parametrize("text", ["00:60,00", "0:00,000", "00-00,00", "ab:cd,ef"])
def test_parse_time_rejects(text):
    with pytest.raises(InvalidTimeFormatError):
        parse_time(text)


def test_ascii_pad():
    assert ascii_pad("Elma", 10) == bytes([0x45, 0x6C, 0x6D, 0x61, 0, 0, 0, 0, 0, 0])
    assert ascii_pad("", 3) == b"\x00\x00\x00"
    assert ascii_pad("exactly12chr", 12) == b"exactly12chr"


def test_ascii_pad_gates():
    with pytest.raises(NonASCIIError):
        ascii_pad("Elmä", 10)
    with pytest.raises(PaddingTooShortError) as exc:
        ascii_pad("ElmaElma", 6)
    assert exc.value.deficit == 2


def test_trim_cstring():
    raw = bytes([0x45, 0x6C, 0x6D, 0x61, 0, 0, 0, 0x7E, 0x7E, 0x7E])
    assert trim_cstring(raw) == "Elma"
    assert trim_cstring(b"no null") == "no null"
    # Garbage after the terminator is ignored even when it is not ASCII.
    assert trim_cstring(b"ok\x00\xff\xfe") == "ok"


def test_trim_cstring_non_ascii():
    with pytest.raises(NonASCIIError) as exc:
        trim_cstring(b"E\xc3\xa4\x00")
    assert exc.value.valid_up_to == 1
    assert isinstance(exc.value, StringDecodeError)


@pytest.mark.parametrize("text", ["", "a", "Rust test", "tutor14.lev", "x" * 15])
def test_pad_then_trim(text):
    assert trim_cstring(ascii_pad(text, 15)) == text
