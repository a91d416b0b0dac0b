"""Top-10 table obfuscation."""
from __future__ import annotations

from .protocol import CRYPT_EBP8, CRYPT_EBP10, CRYPT_MOD, CRYPT_MUL, TOP10_BLOCK_LEN


def _wrap16(value: int) -> int:
    """Wrap to a signed 16-bit integer."""
    return ((value + 0x8000) & 0xFFFF) - 0x8000


def _trunc_rem(a: int, b: int) -> int:
    """Remainder with the sign of the dividend, as the game computes it."""
    r = abs(a) % b
    return -r if a < 0 else r


def crypt_top10(data: bytes) -> bytes:
    """Encrypt or decrypt a 688-byte top-10 block.

    The cipher XORs each byte with a 16-bit keystream, so applying it twice
    returns the input unchanged.
    """
    if len(data) != TOP10_BLOCK_LEN:
        raise ValueError(f"Top-10 block must be {TOP10_BLOCK_LEN} bytes, got {len(data)}")

    out = bytearray(data)
    ebp8 = CRYPT_EBP8
    ebp10 = CRYPT_EBP10
    for i in range(TOP10_BLOCK_LEN):
        out[i] ^= ebp8 & 0xFF
        ebp10 = _wrap16(ebp10 + _wrap16(_trunc_rem(ebp8, CRYPT_MOD) * CRYPT_MOD))
        ebp8 = _wrap16(ebp10 * CRYPT_MUL + CRYPT_MOD)
    return bytes(out)
