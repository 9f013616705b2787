"""logic/targeting/cycler.py — Tab-style cycling through enemies.

The candidate list is rebuilt on every call: alive enemies sorted by
ascending squared distance from the player's centre.  ``sorted`` is
stable, so equal-distance enemies keep their input order and repeated
cycles over an unchanged room visit them in the same sequence.

Cycling wraps in both directions.  With no valid current target
(none held, or the held enemy died / left) the direction is ignored
and the nearest enemy is returned — cycling never gets stuck.
"""

from __future__ import annotations
from enum import Enum
from typing import Iterable

from core.geometry import squared_distance
from logic.targeting.snapshot import EnemySnapshot, PlayerSnapshot


class CycleDirection(Enum):
    FORWARD = 1
    BACKWARD = -1


def ordered_candidates(player: PlayerSnapshot | None,
                       enemies: Iterable[EnemySnapshot]) -> list[EnemySnapshot]:
    """Alive enemies, nearest first, stable on ties."""
    if player is None:
        return []
    px, py = player.center
    alive = [e for e in enemies if e.alive]
    return sorted(alive, key=lambda e: squared_distance(px, py, e.x, e.y))


def cycle(direction: CycleDirection,
          player: PlayerSnapshot | None,
          enemies: Iterable[EnemySnapshot],
          current_id: int | None) -> EnemySnapshot | None:
    """Return the next target along the candidate order, or ``None``."""
    candidates = ordered_candidates(player, enemies)
    if not candidates:
        return None
    for i, enemy in enumerate(candidates):
        if enemy.id == current_id:
            return candidates[(i + direction.value) % len(candidates)]
    return candidates[0]
