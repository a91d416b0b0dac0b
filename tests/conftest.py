"""Independent writers for reference level and replay files.

These build files byte by byte with ``struct`` so the codecs are checked
against layouts that do not share their code.
"""
import struct
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))

# Encrypted block the game writes for a level with no best times.
EMPTY_TOP10 = bytes.fromhex(
    "15056ab789ed59c448ff8f7376bc70c0df57b42f0d9e07bc63086f8a0928ad38e073f9a08000008a376f696017097741"
    "ac8c2634ac02a798c9a5fe80dfc097b450d71dca4441fb47f7d8603884cb4c8231249a9176c90e6bcc75fcccf8a57498"
    "8e02bb6844cb4cbd99c434f48b7a4c6858539a70cd4f2bccd11ae0802e8f7334e70ed4461dbd029abf332784065811a4"
    "10e41d752ab0782fe60686efa4d5f9fc912e54745df891b1f6a255f923fb478e0f45f4e75d54398cd12e8f38bf8fbb68"
    "a038d3c88949913bbd020388e52c7f9cb5935f57a0a1e44b115cfd6b8434c6fc91b11709913b96a574983fbd5e7da689"
    "8427e05264a7a5a290404f73349804901fcdb8a5814388c4d8c9cc192d1e976546fc355832d72a2dfd4a169881da849d"
    "195b8cb0851555be38a5fe9495cbe3da56226904b18d0746936ca6345d54d0f884901fe1c3b667ed389860f660c85b02"
    "5f1cc2a75da37ecf24a71b7f7bde42a7d3f6afabcca364032c2315beae404f45f450057ee9f7cbfd8cff8f52fb47531d"
    "3376bcabbf40b8e017ef000d423e6613f653f68e1cb5b450caba1eb81b02104de68984ece1f103ddeb9eb8bfa932fecf"
    "8021c32c7f264ec04868ade315ecba11484ed47471249a28adb5b498041a56d3e2be94d012fbb05765bcab567706e23b"
    "5bf53e450115e5af69046f21e431d534ac300f24d506a73c915cb52a68ce6b84413660c813b4b9fcab639fb33b19c4d8"
    "11a41da308b789cceb9e0000f3cb1ec5e7777c28a0804889491bd488c45506cea6aaff8fbb2d3891b1bba38b59b7c4ec"
    "304ae8a0dc7ae3b9a038edc2d5be382816986dcf7355134b4c19f2a9049deb428d21d74b2b079bdb23506e82d5d80434"
    "15be38edb510b65379f558328820e9d698eade972a966aa35d0cf82fc5ac6b56c67951d2292567ed59ff9c38d3a784cb"
    "04486fc52297c136af14c395d860e94c"
)

LEVEL_EOD = 0x0067103A
LEVEL_EOF = 0x00845D52
REPLAY_EOR = 0x00492F75

REFERENCE_INTEGRITY = (-1148375.210607791, 1164056.210607791, 1162467.210607791, 1162283.210607791)

REFERENCE_POLYGONS = [
    (0, [(-23.993693053024586, -3.135779367971911),
         (-15.989070625361132, -3.135779367971911),
         (-15.989070625361132, 1.995755366905195),
         (-24.0, 2.0)]),
    (1, [(-23.83645939819548, 2.310222676563402),
         (-17.60428907951465, 2.2816347393217473),
         (-17.53281923641051, 1.8956975865594021),
         (-23.96510511578293, 1.924285523801057)]),
]

# (x, y, type, gravity, animation as stored on disk)
REFERENCE_OBJECTS = [
    (-23.221818747499896, -1.3204453531268072, 3, 0, 0),
    (-20.37252715482359, -0.3124543521844827, 2, 0, 8),
    (-20.3914786548306, 0.5277288147929609, 2, 1, 0),
    (-19.526026821177144, 0.36348248139887396, 2, 4, 4),
    (-21.269564821822065, 0.38243398140588436, 2, 3, 0),
    (-19.55761265452216, -0.4387976855645497, 2, 1, 0),
    (-20.075620321380434, -1.2473950191969765, 1, 0, 0),
    (-22.94993115577695, 1.5068896484884773, 4, 0, 0),
]

# (name, texture, mask, x, y, distance, clip)
REFERENCE_PICTURES = [
    (b"barrel", b"", b"", -19.37674118849727, 0.895119783101471, 380, 2),
    (b"", b"stone1", b"maskbig", -24.465394017511894, -3.964829547979911, 750, 2),
]


def build_level(
    *,
    magic=b"POT14",
    link=1524269776,
    integrity=REFERENCE_INTEGRITY,
    name=b"Rust test",
    lgr=b"default",
    ground=b"ground",
    sky=b"sky",
    polygons=REFERENCE_POLYGONS,
    objects=REFERENCE_OBJECTS,
    pictures=REFERENCE_PICTURES,
    top10=EMPTY_TOP10,
    eod=LEVEL_EOD,
    eof=LEVEL_EOF,
) -> bytes:
    b = bytearray(magic)
    b += struct.pack("<H", link & 0xFFFF)
    b += struct.pack("<I", link)
    b += struct.pack("<4d", *integrity)
    b += name.ljust(51, b"\x00") + lgr.ljust(16, b"\x00") + ground.ljust(10, b"\x00") + sky.ljust(10, b"\x00")

    b += struct.pack("<d", len(polygons) + 0.4643643)
    for grass, vertices in polygons:
        b += struct.pack("<ii", grass, len(vertices))
        for x, y in vertices:
            b += struct.pack("<dd", x, y)

    b += struct.pack("<d", len(objects) + 0.4643643)
    for obj in objects:
        b += struct.pack("<ddiii", *obj)

    b += struct.pack("<d", len(pictures) + 0.4643643)
    for pic_name, texture, mask, x, y, distance, clip in pictures:
        b += pic_name.ljust(10, b"\x00") + texture.ljust(10, b"\x00") + mask.ljust(10, b"\x00")
        b += struct.pack("<ddii", x, y, distance, clip)

    b += struct.pack("<i", eod)
    b += top10
    b += struct.pack("<i", eof)
    return bytes(b)


# Trailing words written by the game for each event code.
EVENT_WORDS = {
    1: (131071, 1050605825),
    4: (327679, 1065185444),
    5: (393215, 1065185444),
    6: (458751, 1065185444),
    7: (524287, 1065185444),
}


def touch(time, index):
    return (time, index & 0xFFFF, 0)


def event(time, code):
    return (time, *EVENT_WORDS[code])


def reference_frames(count=440):
    """Frame tuples: (bike_x, bike_y, lwx, lwy, rwx, rwy, hx, hy, rot, lwr, rwr, data, volume)."""
    frames = [(34.3025, -1.1253119, -850, -524, 849, -524, 0, 439, 10000, 250, 0, 0xA5, 5120)]
    for i in range(1, count):
        frames.append((
            34.3025 + i * 0.01,
            -1.1253119 - i * 0.002,
            -850 + i % 13,
            -524 - i % 7,
            849 - i % 5,
            -524 + i % 3,
            i % 11,
            439 - i % 17,
            10000 - i,
            (250 + i) % 256,
            (i * 3) % 256,
            (i * 37) % 256,
            5120 - i,
        ))
    return frames


def reference_events():
    events = [event(0.5 + 0.2 * i, 5) for i in range(24)]
    events[0] = event(1.57728480001688, 6)
    events[1] = event(1.6974048000097273, 1)
    events[2] = event(1.8, 4)
    events[11] = event(3.9464880000114437, 7)
    events[20] = touch(5.9, 1)
    events[23] = touch(6.398683200001716, 3)
    for i in range(3, 23):
        if i not in (11, 20):
            events[i] = event(1.8 + 0.2 * i, 5)
    return events


def build_replay_block(
    *,
    frames,
    events,
    multi=0,
    flag_tag=0,
    link=2549082363,
    level=b"tutor14.lev",
    eor=REPLAY_EOR,
) -> bytes:
    n = len(frames)
    b = bytearray(struct.pack("<iiiiI", n, 0x83, multi, flag_tag, link))
    b += level.ljust(12, b"\x00")
    b += struct.pack("<i", 0)
    codes = "ffhhhhhhhBBBh"
    for col, code in enumerate(codes):
        b += struct.pack(f"<{n}{code}", *(f[col] for f in frames))
    b += struct.pack("<i", len(events))
    for ev in events:
        b += struct.pack("<dII", *ev)
    b += struct.pack("<i", eor)
    return bytes(b)


def build_replay(**kwargs) -> bytes:
    kwargs.setdefault("frames", reference_frames())
    kwargs.setdefault("events", reference_events())
    return build_replay_block(**kwargs)


def flip_byte(data: bytes, idx: int) -> bytes:
    b = bytearray(data)
    b[idx] ^= 0x01
    return bytes(b)


@pytest.fixture
def level_bytes():
    return build_level()


@pytest.fixture
def level_path(tmp_path, level_bytes):
    p = tmp_path / "test_1.lev"
    p.write_bytes(level_bytes)
    return p


@pytest.fixture
def replay_bytes():
    return build_replay()


@pytest.fixture
def replay_path(tmp_path, replay_bytes):
    p = tmp_path / "test_1.rec"
    p.write_bytes(replay_bytes)
    return p


@pytest.fixture
def multi_replay_bytes():
    first = build_replay(multi=1, frames=reference_frames(300), events=[touch(2.0, 0), event(2.5, 5)])
    second = build_replay(multi=1, frames=reference_frames(120), events=[event(0.3, 7), touch(4.0, 2)])
    return first + second
