"""Column-major frame codec and tabular export."""
from __future__ import annotations

import random
import struct
from pathlib import Path

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

from elma_core.binary import ByteReader
from elma_core.position import Position
from elma_core.protocol import FRAME_COLUMNS

from .model import Frame, Replay

THROTTLE_BIT = 0x01
RIGHT_BIT = 0x02
FLAG_MASK = THROTTLE_BIT | RIGHT_BIT


def parse_frames(r: ByteReader, count: int) -> list[Frame]:
    """Read ``count`` frames stored one column after another."""
    cols = {name: r.read_array(code, count) for name, code in FRAME_COLUMNS}
    return [
        Frame(
            bike=Position(cols["bike_x"][i], cols["bike_y"][i]),
            left_wheel=Position(cols["left_wheel_x"][i], cols["left_wheel_y"][i]),
            right_wheel=Position(cols["right_wheel_x"][i], cols["right_wheel_y"][i]),
            head=Position(cols["head_x"][i], cols["head_y"][i]),
            rotation=cols["rotation"][i],
            left_wheel_rotation=cols["left_wheel_rotation"][i],
            right_wheel_rotation=cols["right_wheel_rotation"][i],
            throttle=bool(cols["data"][i] & THROTTLE_BIT),
            right=bool(cols["data"][i] & RIGHT_BIT),
            volume=cols["volume"][i],
        )
        for i in range(count)
    ]


def _data_byte(frame: Frame, rng) -> int:
    # Upper six bits are uninitialized memory in game files.
    data = rng.getrandbits(8) & ~FLAG_MASK & 0xFF
    if frame.throttle:
        data |= THROTTLE_BIT
    if frame.right:
        data |= RIGHT_BIT
    return data


def _frame_row(frame: Frame, data: int) -> dict:
    return {
        "bike_x": frame.bike.x,
        "bike_y": frame.bike.y,
        "left_wheel_x": frame.left_wheel.x,
        "left_wheel_y": frame.left_wheel.y,
        "right_wheel_x": frame.right_wheel.x,
        "right_wheel_y": frame.right_wheel.y,
        "head_x": frame.head.x,
        "head_y": frame.head.y,
        "rotation": frame.rotation,
        "left_wheel_rotation": frame.left_wheel_rotation,
        "right_wheel_rotation": frame.right_wheel_rotation,
        "data": data,
        "volume": frame.volume,
    }


def write_frames(frames: list[Frame], rng=None) -> bytes:
    rng = rng or random
    rows = [_frame_row(f, _data_byte(f, rng)) for f in frames]
    out = bytearray()
    for name, code in FRAME_COLUMNS:
        out += struct.pack(f"<{len(rows)}{code}", *(row[name] for row in rows))
    return bytes(out)


FRAMES_SCHEMA = pa.schema(
    [
        ("player", pa.int8()),
        ("frame", pa.int32()),
        ("bike_x", pa.float32()),
        ("bike_y", pa.float32()),
        ("left_wheel_x", pa.int16()),
        ("left_wheel_y", pa.int16()),
        ("right_wheel_x", pa.int16()),
        ("right_wheel_y", pa.int16()),
        ("head_x", pa.int16()),
        ("head_y", pa.int16()),
        ("rotation", pa.int16()),
        ("left_wheel_rotation", pa.uint8()),
        ("right_wheel_rotation", pa.uint8()),
        ("throttle", pa.bool_()),
        ("right", pa.bool_()),
        ("volume", pa.int16()),
    ]
)


def _table_rows(frames: list[Frame], player: int) -> list[dict]:
    rows = []
    for n, frame in enumerate(frames):
        row = _frame_row(frame, 0)
        del row["data"]
        row.update(player=player, frame=n, throttle=frame.throttle, right=frame.right)
        rows.append(row)
    return rows


def frames_to_dataframe(frames: list[Frame], player: int = 1) -> pd.DataFrame:
    """One row per frame; the packed data byte is split into flag columns."""
    return pd.DataFrame(_table_rows(frames, player), columns=FRAMES_SCHEMA.names)


def write_frames_parquet(replay: Replay, out_path: Path) -> int:
    """Write both players' frames to a parquet file. Returns the row count."""
    rows = _table_rows(replay.frames, 1) + _table_rows(replay.frames_2, 2)
    df = pd.DataFrame(rows, columns=FRAMES_SCHEMA.names)

    table = pa.Table.from_pandas(df, schema=FRAMES_SCHEMA, preserve_index=False)
    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    pq.write_table(table, out_path)
    return table.num_rows
