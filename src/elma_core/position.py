from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T", int, float)


@dataclass
class Position(Generic[T]):
    """Shared (x, y) pair. Floats for level geometry, f32/i16 values in replays."""
    x: T
    y: T
