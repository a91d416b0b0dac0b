"""Elma Rec - Read and write Elasto Mania replay files."""
from .codec import load_replay, parse_replay, save_replay, write_replay
from .frames import frames_to_dataframe, write_frames_parquet
from .model import Event, EventType, Frame, Ground, Replay, Touch, Turn, VoltLeft, VoltRight
from .timing import time_hs, time_ms

__all__ = [
    "Replay", "Frame", "Event", "EventType", "Touch", "Ground", "Turn", "VoltRight", "VoltLeft",
    "load_replay", "save_replay", "parse_replay", "write_replay", "time_ms", "time_hs",
    "frames_to_dataframe", "write_frames_parquet",
]
