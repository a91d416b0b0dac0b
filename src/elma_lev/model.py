"""Level object model."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from pathlib import Path
from typing import Union

from elma_core.binary import Source, read_source, write_sink
from elma_core.position import Position


class Version(Enum):
    ELMA = "Elma"
    ACROSS = "Across"


class Direction(IntEnum):
    """Apple gravity, as stored on disk."""
    NORMAL = 0
    UP = 1
    DOWN = 2
    LEFT = 3
    RIGHT = 4


class Clip(IntEnum):
    UNCLIPPED = 0
    GROUND = 1
    SKY = 2


class ObjectType:
    """Base of the object variants. ``code`` is the on-disk type value."""
    code = 0


@dataclass(frozen=True)
class Exit(ObjectType):
    code = 1


@dataclass(frozen=True)
class Apple(ObjectType):
    gravity: Direction = Direction.NORMAL
    animation: int = 1  # 1-based; stored 0-based

    code = 2


@dataclass(frozen=True)
class Killer(ObjectType):
    code = 3


@dataclass(frozen=True)
class Player(ObjectType):
    code = 4


@dataclass
class Polygon:
    grass: bool = False
    vertices: list[Position[float]] = field(default_factory=list)


@dataclass
class Object:
    position: Position[float] = field(default_factory=lambda: Position(0.0, 0.0))
    object_type: ObjectType = field(default_factory=Apple)


@dataclass
class Picture:
    """Either a bitmap ``name``, or a ``texture`` + ``mask`` pair."""
    name: str = ""
    texture: str = ""
    mask: str = ""
    position: Position[float] = field(default_factory=lambda: Position(0.0, 0.0))
    distance: int = 600
    clip: Clip = Clip.SKY


@dataclass
class Top10Entry:
    time: int = 0  # hundredths
    player1_name: str = ""
    player2_name: str = ""


@dataclass
class Level:
    version: Version = Version.ELMA
    link: int = 0
    integrity: list[float] = field(default_factory=lambda: [0.0, 0.0, 0.0, 0.0])
    name: str = ""
    lgr: str = "default"
    ground: str = "ground"
    sky: str = "sky"
    polygons: list[Polygon] = field(default_factory=list)
    objects: list[Object] = field(default_factory=list)
    pictures: list[Picture] = field(default_factory=list)
    top10_single: list[Top10Entry] = field(default_factory=list)
    top10_multi: list[Top10Entry] = field(default_factory=list)

    @classmethod
    def from_bytes(cls, data: bytes) -> "Level":
        from .codec import parse_level
        return parse_level(data)

    @classmethod
    def load(cls, source: Source) -> "Level":
        """Load a level from a path or an in-memory buffer."""
        return cls.from_bytes(read_source(source))

    def to_bytes(self, rng=None) -> bytes:
        """Serialize the level. Integrity sums are recomputed and stored on ``self``."""
        from .codec import write_level
        return write_level(self, rng=rng)

    def save(self, path: Union[str, Path], rng=None) -> None:
        write_sink(path, self.to_bytes(rng=rng))

    def apple_count(self) -> int:
        return sum(1 for o in self.objects if isinstance(o.object_type, Apple))
