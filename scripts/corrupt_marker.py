import sys
from pathlib import Path

MARKER_LEN = 4


def main():
    if len(sys.argv) != 2:
        print("Usage: corrupt_marker.py <file.lev|file.rec>")
        raise SystemExit(2)

    p = Path(sys.argv[1])
    b = bytearray(p.read_bytes())
    if len(b) < 64:
        print("File too small to corrupt safely.")
        raise SystemExit(2)

    # Both formats end with a 4-byte marker: EOF for levels, EOR for
    # (single-player) replays. Flip its lowest byte.
    idx = len(b) - MARKER_LEN
    b[idx] ^= 0x01
    p.write_bytes(bytes(b))
    print(f"Corrupted 1 byte at offset {idx} in {p}")


if __name__ == "__main__":
    main()
