"""Fixed-width C-string and time helpers."""
from __future__ import annotations

from .errors import InvalidTimeFormatError, NonASCIIError, PaddingTooShortError

TIME_TEMPLATE = "00:00,00"
MAX_TIME = "59:59,99"
MAX_TIME_HS = 595999

# Template slots filled by decimal digits, least significant first.
_DIGIT_SLOTS = (7, 6, 4, 3, 1, 0)
# Slots holding the tens digit of seconds and minutes.
_SEXAGESIMAL_SLOTS = (3, 0)


def trim_cstring(data: bytes) -> str:
    """Return the ASCII text before the first null byte.

    Anything after the null is garbage left over in game files and is ignored.
    """
    raw = bytes(data).split(b"\x00", 1)[0]
    for i, b in enumerate(raw):
        if b > 0x7F:
            raise NonASCIIError(i)
    return raw.decode("ascii")


def ascii_pad(text: str, pad: int) -> bytes:
    """Encode ``text`` as ASCII and right-pad it with null bytes to ``pad`` bytes."""
    for i, ch in enumerate(text):
        if ord(ch) > 0x7F:
            raise NonASCIIError(i)
    if len(text) > pad:
        raise PaddingTooShortError(len(text) - pad)
    return text.encode("ascii").ljust(pad, b"\x00")


def format_time(hs: int) -> str:
    """Format hundredths of a second as ``MM:SS,HH``.

    Times past the largest representable value clamp to ``59:59,99``.
    A six-digit time whose minutes or seconds tens digit is above 5 cannot be
    shown and raises ``InvalidTimeFormatError``.
    """
    if hs < 0:
        raise InvalidTimeFormatError()
    digits = str(hs)
    if len(digits) > len(_DIGIT_SLOTS) or hs > MAX_TIME_HS:
        return MAX_TIME

    formatted = list(TIME_TEMPLATE)
    for slot, digit in zip(_DIGIT_SLOTS, reversed(digits)):
        if slot in _SEXAGESIMAL_SLOTS and digit > "5":
            raise InvalidTimeFormatError()
        formatted[slot] = digit
    return "".join(formatted)


def parse_time(text: str) -> int:
    """Inverse of ``format_time``: ``"01:02,03"`` -> 6203."""
    if len(text) != len(TIME_TEMPLATE) or text[2] != ":" or text[5] != ",":
        raise InvalidTimeFormatError()
    digits = text[0:2] + text[3:5] + text[6:8]
    if not digits.isdigit() or digits[0] > "5" or digits[2] > "5":
        raise InvalidTimeFormatError()
    return int(digits)
