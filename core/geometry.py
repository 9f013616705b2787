"""core/geometry.py — Distance primitives.

Comparisons (nearest enemy, pick radius, attack range) always use
``squared_distance`` against a pre-squared threshold.  ``distance``
is only for numbers a human reads, e.g. the "too far" HUD text.
"""

from __future__ import annotations
import math


def squared_distance(ax: float, ay: float, bx: float, by: float) -> float:
    dx = ax - bx
    dy = ay - by
    return dx * dx + dy * dy


def distance(ax: float, ay: float, bx: float, by: float) -> float:
    return math.sqrt(squared_distance(ax, ay, bx, by))
