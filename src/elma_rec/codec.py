"""Replay (.rec) parser and writer.

A replay is one player block, or two concatenated blocks for multi-player
replays. The second block repeats the header; only its frame count is used.
"""
from __future__ import annotations

import logging
import random
import struct
from pathlib import Path
from typing import Union
from warnings import warn

from elma_core.binary import INVALID_DATA, ByteReader, Source, read_source, write_sink
from elma_core.errors import EORMismatchError, ElmaIOError
from elma_core.protocol import EOR, REPLAY_HEADER_FMT, REPLAY_LEVEL_LEN, REPLAY_MAGIC
from elma_core.text import ascii_pad, trim_cstring

from .events import parse_events, write_events
from .frames import parse_frames, write_frames
from .model import Event, Frame, Replay

logger = logging.getLogger(__name__)


def _read_block(r: ByteReader) -> tuple[tuple, list[Frame], list[Event]]:
    start = r.offset
    header = r.read(REPLAY_HEADER_FMT)
    frame_count, magic = header[0], header[1]
    if magic != REPLAY_MAGIC:
        warn(f"Unexpected replay header value {magic:#x} in block at offset {start}")

    frames = parse_frames(r, frame_count)
    events = parse_events(r)

    if r.read_one("<i") != EOR:
        raise EORMismatchError()
    return header, frames, events


def parse_replay(data: bytes) -> Replay:
    r = ByteReader(data)

    # 1. Player one
    (_, _, multi, flag_tag, link, level, _), frames, events = _read_block(r)
    replay = Replay(
        multi=multi > 0,
        flag_tag=flag_tag > 0,
        link=link,
        level=trim_cstring(level),
        frames=frames,
        events=events,
    )

    # 2. Player two
    if replay.multi:
        _, replay.frames_2, replay.events_2 = _read_block(r)

    logger.debug(
        "Parsed replay of %r: %d frames, %d events, multi=%s",
        replay.level, len(replay.frames), len(replay.events), replay.multi,
    )
    return replay


def _write_block(replay: Replay, frames: list[Frame], events: list[Event], rng) -> bytes:
    header = struct.pack(
        REPLAY_HEADER_FMT,
        len(frames),
        REPLAY_MAGIC,
        1 if replay.multi else 0,
        1 if replay.flag_tag else 0,
        replay.link,
        ascii_pad(replay.level, REPLAY_LEVEL_LEN),
        0,
    )
    return header + write_frames(frames, rng=rng) + write_events(events) + struct.pack("<i", EOR)


def write_replay(replay: Replay, rng=None) -> bytes:
    """Serialize ``replay``; ``rng`` fills the unused bits of each frame's data byte."""
    rng = rng or random
    try:
        out = _write_block(replay, replay.frames, replay.events, rng)
        if replay.multi:
            out += _write_block(replay, replay.frames_2, replay.events_2, rng)
    except struct.error as e:
        # A field does not fit its on-disk width.
        raise ElmaIOError(INVALID_DATA) from e
    logger.debug("Wrote replay of %r (%d bytes)", replay.level, len(out))
    return out


def load_replay(source: Source) -> Replay:
    return parse_replay(read_source(source))


def save_replay(replay: Replay, path: Union[str, Path], rng=None) -> None:
    write_sink(path, write_replay(replay, rng=rng))
