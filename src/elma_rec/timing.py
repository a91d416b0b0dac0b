"""Replay length inference.

A replay file does not record whether the run ended on the flower. The
heuristic below assumes a run finished when its last touch event lines up
with the last recorded frame. A final apple touch in mid-air looks the same.
"""
from __future__ import annotations

from elma_core.protocol import EVENT_TO_MS, FRAME_PERIOD_MS

from .model import Event, Replay, Touch


def _round_half_up(ms: float) -> int:
    return int(ms + 0.5)


def _last_touch(events: list[Event]) -> float:
    touches = [e.time for e in events if isinstance(e.event_type, Touch)]
    return max(touches, default=0.0)


def time_ms(replay: Replay) -> tuple[int, bool]:
    event_ms = max(_last_touch(replay.events), _last_touch(replay.events_2)) * EVENT_TO_MS
    frame_ms = max(len(replay.frames), len(replay.frames_2)) * FRAME_PERIOD_MS

    if event_ms == 0.0:
        return _round_half_up(frame_ms), False
    # Frames run on past the last touch: still riding, not a finish.
    if frame_ms > event_ms + FRAME_PERIOD_MS:
        return _round_half_up(frame_ms), False
    return _round_half_up(event_ms), True


def time_hs(replay: Replay) -> tuple[int, bool]:
    ms, finished = time_ms(replay)
    return ms // 10, finished
