"""components.resources — World-level singletons (not per-entity)."""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class GameClock:
    """Monotonic game time — accumulated ``dt`` since session start.

    Updated once per frame by ``logic.tick.advance_clock``.  Used to
    timestamp DevLog entries.
    """
    time: float = 0.0


@dataclass
class Camera:
    """Camera focus point (metres) and zoom multiplier.

    Converted to a per-frame ``core.viewport.Viewport`` before drawing
    or picking.
    """
    x: float = 0.0
    y: float = 0.0
    zoom: float = 1.0


@dataclass
class Player:
    """Marks the player entity."""
    speed: float = 5.0         # m/s
    level: int = 1
    xp: int = 0                # towards the next level
    xp_needed: int = 100
    enemies_defeated: int = 0
