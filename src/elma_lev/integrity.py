"""Integrity sums stored in the level header.

The game recomputes the first sum from geometry and compares the other
three against it, so they are written as ``random - sum`` within fixed
ranges. Each save therefore produces slightly different values.
"""
from __future__ import annotations

import random

from elma_core.protocol import (
    INTEGRITY_MULTIPLIER,
    INTEGRITY_OBJECT_BASE,
    INTEGRITY_OBJECT_SPAN,
    INTEGRITY_SHAPE_BASE,
    INTEGRITY_SHAPE_SPAN,
)

from .model import Level


def geometry_sum(level: Level) -> float:
    """Weighted coordinate sum over polygons, objects and pictures."""
    pol_sum = 0.0
    obj_sum = 0.0
    pic_sum = 0.0

    for poly in level.polygons:
        for v in poly.vertices:
            pol_sum += v.x + v.y

    for obj in level.objects:
        obj_sum += obj.position.x + obj.position.y + obj.object_type.code

    for pic in level.pictures:
        pic_sum += pic.position.x + pic.position.y

    return (pol_sum + obj_sum + pic_sum) * INTEGRITY_MULTIPLIER


def calculate_integrity(level: Level, rng=None) -> list[float]:
    rng = rng or random
    total = geometry_sum(level)
    return [
        total,
        float(INTEGRITY_SHAPE_BASE + rng.randrange(INTEGRITY_SHAPE_SPAN)) - total,
        float(INTEGRITY_SHAPE_BASE + rng.randrange(INTEGRITY_SHAPE_SPAN)) - total,
        float(INTEGRITY_OBJECT_BASE + rng.randrange(INTEGRITY_OBJECT_SPAN)) - total,
    ]
