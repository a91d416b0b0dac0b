"""Replay object model."""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from elma_core.binary import Source, read_source, write_sink
from elma_core.position import Position


@dataclass
class Frame:
    """Bike state sampled every 1/30 s."""
    bike: Position[float] = field(default_factory=lambda: Position(0.0, 0.0))
    left_wheel: Position[int] = field(default_factory=lambda: Position(0, 0))
    right_wheel: Position[int] = field(default_factory=lambda: Position(0, 0))
    head: Position[int] = field(default_factory=lambda: Position(0, 0))
    rotation: int = 0  # 0..10000
    left_wheel_rotation: int = 0  # 0..255
    right_wheel_rotation: int = 0  # 0..255
    throttle: bool = False
    right: bool = False  # facing direction
    volume: int = 0  # spring sound volume


class EventType:
    """Base of the event variants. ``code`` is the on-disk event byte."""
    code = 0


@dataclass(frozen=True)
class Touch(EventType):
    """Apple or flower touch; ``index`` is the object index."""
    index: int = 0

    code = 0


@dataclass(frozen=True)
class Ground(EventType):
    """Ground contact, for sound effects. Two variants on disk."""
    alternative: bool = False

    @property
    def code(self) -> int:
        return 4 if self.alternative else 1


@dataclass(frozen=True)
class Turn(EventType):
    code = 5


@dataclass(frozen=True)
class VoltRight(EventType):
    code = 6


@dataclass(frozen=True)
class VoltLeft(EventType):
    code = 7


@dataclass
class Event:
    time: float = 0.0  # event time-base, see timing.EVENT_TO_MS
    event_type: EventType = field(default_factory=Touch)


def _random_link() -> int:
    return random.getrandbits(32)


@dataclass
class Replay:
    multi: bool = False
    flag_tag: bool = False
    link: int = field(default_factory=_random_link)
    level: str = ""  # 12-byte field; a full 12-character name is stored without a terminator
    frames: list[Frame] = field(default_factory=list)
    events: list[Event] = field(default_factory=list)
    frames_2: list[Frame] = field(default_factory=list)
    events_2: list[Event] = field(default_factory=list)

    @classmethod
    def from_bytes(cls, data: bytes) -> "Replay":
        from .codec import parse_replay
        return parse_replay(data)

    @classmethod
    def load(cls, source: Source) -> "Replay":
        """Load a replay from a path or an in-memory buffer."""
        return cls.from_bytes(read_source(source))

    def to_bytes(self, rng=None) -> bytes:
        from .codec import write_replay
        return write_replay(self, rng=rng)

    def save(self, path: Union[str, Path], rng=None) -> None:
        write_sink(path, self.to_bytes(rng=rng))

    def time_ms(self) -> tuple[int, bool]:
        """Replay length in milliseconds and a best-guess finished flag."""
        from .timing import time_ms
        return time_ms(self)

    def time_hs(self) -> tuple[int, bool]:
        from .timing import time_hs
        return time_hs(self)
