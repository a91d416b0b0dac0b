"""Replay event records."""
from __future__ import annotations

import struct

from elma_core.binary import ByteReader
from elma_core.errors import InvalidEventError
from elma_core.protocol import EVENT_FMT, EVENT_WRITE_FMT

from .model import Event, EventType, Ground, Touch, Turn, VoltLeft, VoltRight

_DECODE = {
    1: Ground(alternative=False),
    4: Ground(alternative=True),
    5: Turn(),
    6: VoltRight(),
    7: VoltLeft(),
}

# Trailing (info, code, pad, float) words as the game writes them.
_ENCODE = {
    Ground(alternative=False): (131071, 1050605825),
    Ground(alternative=True): (327679, 1065185444),
    Turn(): (393215, 1065185444),
    VoltRight(): (458751, 1065185444),
    VoltLeft(): (524287, 1065185444),
}


def _decode_type(info: int, code: int) -> EventType:
    if code == 0:
        return Touch(index=info)
    try:
        return _DECODE[code]
    except KeyError:
        raise InvalidEventError(code) from None


def parse_events(r: ByteReader) -> list[Event]:
    """Read the event count and that many 16-byte events."""
    count = r.read_one("<i")
    events = []
    for _ in range(count):
        time, info, code, _pad, _unknown = r.read(EVENT_FMT)
        events.append(Event(time=time, event_type=_decode_type(info, code)))
    return events


def _encode_words(event_type: EventType) -> tuple[int, int]:
    if isinstance(event_type, Touch):
        # info in the low half, event code 0 and padding above it.
        return event_type.index & 0xFFFF, 0
    return _ENCODE[event_type]


def write_events(events: list[Event]) -> bytes:
    out = bytearray(struct.pack("<i", len(events)))
    for event in events:
        out += struct.pack(EVENT_WRITE_FMT, event.time, *_encode_words(event.event_type))
    return bytes(out)
