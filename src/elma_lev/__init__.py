"""Elma Lev - Read and write Elasto Mania level files."""
from elma_core.crypt import crypt_top10

from .codec import load_level, parse_level, save_level, write_level
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
    Top10Entry,
    Version,
)

__all__ = [
    "Level", "Version", "Polygon", "Object", "ObjectType", "Exit", "Apple", "Killer", "Player",
    "Direction", "Picture", "Clip", "Top10Entry",
    "load_level", "save_level", "parse_level", "write_level", "calculate_integrity", "crypt_top10",
]
