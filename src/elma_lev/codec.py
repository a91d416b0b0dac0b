"""Level (.lev) parser and writer."""
from __future__ import annotations

import logging
import math
import struct
from pathlib import Path
from typing import Union

from elma_core.binary import INVALID_DATA, ByteReader, Source, read_source, write_sink
from elma_core.errors import (
    AcrossUnsupportedError,
    EODMismatchError,
    EOFMismatchError,
    ElmaIOError,
    InvalidClippingError,
    InvalidGravityError,
    InvalidLevelFileError,
    InvalidObjectError,
)
from elma_core.position import Position
from elma_core.protocol import (
    COUNT_OFFSET,
    EOD,
    EOF,
    GROUND_NAME_LEN,
    LEVEL_HEADER_FMT,
    LEVEL_NAME_LEN,
    LGR_NAME_LEN,
    MAGIC_LEN,
    MAGIC_LEVEL_ACROSS,
    MAGIC_LEVEL_ELMA,
    OBJECT_FMT,
    PICTURE_FMT,
    PICTURE_NAME_LEN,
    POLYGON_HEADER_FMT,
    SKY_NAME_LEN,
    TOP10_BLOCK_LEN,
    VERTEX_FMT,
)
from elma_core.text import ascii_pad, trim_cstring

from .integrity import calculate_integrity
from .model import (
    Apple,
    Clip,
    Direction,
    Exit,
    Killer,
    Level,
    Object,
    ObjectType,
    Picture,
    Player,
    Polygon,
    Version,
)
from .top10 import read_top10_block, write_top10_block

logger = logging.getLogger(__name__)

_SIMPLE_OBJECTS = {1: Exit, 3: Killer, 4: Player}


def _read_count(r: ByteReader) -> int:
    # Stored as count + 0.4643643; round since the subtraction is inexact.
    value = r.read_one("<d")
    if not math.isfinite(value):
        raise ElmaIOError(INVALID_DATA)
    return int(round(value - COUNT_OFFSET))


def _parse_object(x: float, y: float, type_code: int, gravity: int, animation: int) -> Object:
    if type_code != 2 and type_code not in _SIMPLE_OBJECTS:
        raise InvalidObjectError(type_code)
    # Every record carries a gravity field, checked even where it is unused.
    try:
        direction = Direction(gravity)
    except ValueError:
        raise InvalidGravityError(gravity) from None
    if type_code == 2:
        obj_type: ObjectType = Apple(gravity=direction, animation=animation + 1)
    else:
        obj_type = _SIMPLE_OBJECTS[type_code]()
    return Object(position=Position(x, y), object_type=obj_type)


def parse_level(data: bytes) -> Level:
    """Parse a complete level file. Raises an ``ElmaError`` on any malformed field."""
    r = ByteReader(data)

    # 1. Magic and header
    magic = r.read_bytes(MAGIC_LEN)
    if magic == MAGIC_LEVEL_ACROSS:
        raise AcrossUnsupportedError()
    if magic != MAGIC_LEVEL_ELMA:
        raise InvalidLevelFileError()
    r.skip(2)  # low 16 bits of the link
    link = r.read_one("<I")
    integrity = r.read("<4d")

    name = trim_cstring(r.read_bytes(LEVEL_NAME_LEN))
    lgr = trim_cstring(r.read_bytes(LGR_NAME_LEN))
    ground = trim_cstring(r.read_bytes(GROUND_NAME_LEN))
    sky = trim_cstring(r.read_bytes(SKY_NAME_LEN))

    # 2. Polygons
    polygons: list[Polygon] = []
    for _ in range(_read_count(r)):
        grass, vertex_count = r.read(POLYGON_HEADER_FMT)
        vertices = [Position(*r.read(VERTEX_FMT)) for _ in range(vertex_count)]
        polygons.append(Polygon(grass=grass > 0, vertices=vertices))

    # 3. Objects
    objects = [_parse_object(*r.read(OBJECT_FMT)) for _ in range(_read_count(r))]

    # 4. Pictures
    pictures: list[Picture] = []
    for _ in range(_read_count(r)):
        pic_name, texture, mask, x, y, distance, clip = r.read(PICTURE_FMT)
        try:
            clipping = Clip(clip)
        except ValueError:
            raise InvalidClippingError(clip) from None
        pictures.append(Picture(
            name=trim_cstring(pic_name),
            texture=trim_cstring(texture),
            mask=trim_cstring(mask),
            position=Position(x, y),
            distance=distance,
            clip=clipping,
        ))

    # 5. End of data, top-10 block, end of file
    if r.read_one("<i") != EOD:
        raise EODMismatchError()
    top10_single, top10_multi = read_top10_block(r.read_bytes(TOP10_BLOCK_LEN))
    if r.read_one("<i") != EOF:
        raise EOFMismatchError()

    logger.debug(
        "Parsed level %r: %d polygons, %d objects, %d pictures",
        name, len(polygons), len(objects), len(pictures),
    )
    return Level(
        version=Version.ELMA,
        link=link,
        integrity=list(integrity),
        name=name,
        lgr=lgr,
        ground=ground,
        sky=sky,
        polygons=polygons,
        objects=objects,
        pictures=pictures,
        top10_single=top10_single,
        top10_multi=top10_multi,
    )


def _pack_count(n: int) -> bytes:
    return struct.pack("<d", n + COUNT_OFFSET)


def _pack_object(obj: Object) -> bytes:
    t = obj.object_type
    if isinstance(t, Apple):
        gravity, animation = int(t.gravity), t.animation - 1
    else:
        gravity, animation = 0, 0
    return struct.pack(OBJECT_FMT, obj.position.x, obj.position.y, t.code, gravity, animation)


def write_level(level: Level, rng=None) -> bytes:
    """Serialize ``level`` to the game's binary layout.

    Integrity sums are recomputed with ``rng`` and written back to ``level.integrity``.
    """
    if level.version != Version.ELMA:
        raise AcrossUnsupportedError()

    level.integrity = calculate_integrity(level, rng=rng)
    try:
        out = _pack_level(level)
    except struct.error as e:
        # A field does not fit its on-disk width.
        raise ElmaIOError(INVALID_DATA) from e

    logger.debug("Wrote level %r (%d bytes)", level.name, len(out))
    return out


def _pack_level(level: Level) -> bytes:
    out = bytearray()
    out += struct.pack(LEVEL_HEADER_FMT, MAGIC_LEVEL_ELMA, level.link & 0xFFFF, level.link, *level.integrity)
    out += ascii_pad(level.name, LEVEL_NAME_LEN)
    out += ascii_pad(level.lgr, LGR_NAME_LEN)
    out += ascii_pad(level.ground, GROUND_NAME_LEN)
    out += ascii_pad(level.sky, SKY_NAME_LEN)

    out += _pack_count(len(level.polygons))
    for poly in level.polygons:
        out += struct.pack(POLYGON_HEADER_FMT, 1 if poly.grass else 0, len(poly.vertices))
        for v in poly.vertices:
            out += struct.pack(VERTEX_FMT, v.x, v.y)

    out += _pack_count(len(level.objects))
    for obj in level.objects:
        out += _pack_object(obj)

    out += _pack_count(len(level.pictures))
    for pic in level.pictures:
        out += struct.pack(
            PICTURE_FMT,
            ascii_pad(pic.name, PICTURE_NAME_LEN),
            ascii_pad(pic.texture, PICTURE_NAME_LEN),
            ascii_pad(pic.mask, PICTURE_NAME_LEN),
            pic.position.x,
            pic.position.y,
            pic.distance,
            int(pic.clip),
        )

    out += struct.pack("<i", EOD)
    out += write_top10_block(level.top10_single, level.top10_multi)
    out += struct.pack("<i", EOF)
    return bytes(out)


def load_level(source: Source) -> Level:
    return parse_level(read_source(source))


def save_level(level: Level, path: Union[str, Path], rng=None) -> None:
    write_sink(path, write_level(level, rng=rng))
