"""Best-times tables embedded in level files."""
from __future__ import annotations

import struct
from warnings import warn

from elma_core.crypt import crypt_top10
from elma_core.protocol import TOP10_BLOCK_LEN, TOP10_ENTRIES, TOP10_NAME_LEN, TOP10_TABLE_LEN
from elma_core.text import ascii_pad, trim_cstring

from .model import Top10Entry

# [Count(4) | Times(10*4) | Names1(10*15) | Names2(10*15)]
_TIMES_FMT = f"<i{TOP10_ENTRIES}i"
_NAMES1_OFF = struct.calcsize(_TIMES_FMT)
_NAMES2_OFF = _NAMES1_OFF + TOP10_ENTRIES * TOP10_NAME_LEN


def _name_at(table: bytes, base: int, n: int) -> str:
    start = base + n * TOP10_NAME_LEN
    return trim_cstring(table[start:start + TOP10_NAME_LEN])


def parse_table(table: bytes) -> list[Top10Entry]:
    """Parse one decrypted 344-byte table."""
    count, *times = struct.unpack_from(_TIMES_FMT, table)
    if count > TOP10_ENTRIES:
        warn(f"Top-10 table claims {count} entries, keeping {TOP10_ENTRIES}")
        count = TOP10_ENTRIES
    return [
        Top10Entry(
            time=times[n],
            player1_name=_name_at(table, _NAMES1_OFF, n),
            player2_name=_name_at(table, _NAMES2_OFF, n),
        )
        for n in range(max(count, 0))
    ]


def write_table(entries: list[Top10Entry]) -> bytes:
    """Serialize up to 10 entries, fastest first. Unused slots are zero-filled."""
    ranked = sorted(entries, key=lambda e: e.time)[:TOP10_ENTRIES]
    times = [e.time for e in ranked] + [0] * (TOP10_ENTRIES - len(ranked))
    names1 = b"".join(ascii_pad(e.player1_name, TOP10_NAME_LEN) for e in ranked)
    names2 = b"".join(ascii_pad(e.player2_name, TOP10_NAME_LEN) for e in ranked)

    table = bytearray(TOP10_TABLE_LEN)
    struct.pack_into(_TIMES_FMT, table, 0, len(ranked), *times)
    table[_NAMES1_OFF:_NAMES1_OFF + len(names1)] = names1
    table[_NAMES2_OFF:_NAMES2_OFF + len(names2)] = names2
    return bytes(table)


def read_top10_block(block: bytes) -> tuple[list[Top10Entry], list[Top10Entry]]:
    """Decrypt the 688-byte block and return (single, multi) tables."""
    plain = crypt_top10(block)
    return parse_table(plain[:TOP10_TABLE_LEN]), parse_table(plain[TOP10_TABLE_LEN:TOP10_BLOCK_LEN])


def write_top10_block(single: list[Top10Entry], multi: list[Top10Entry]) -> bytes:
    return crypt_top10(write_table(single) + write_table(multi))
