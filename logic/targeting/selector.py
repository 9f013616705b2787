"""logic/targeting/selector.py — Nearest-enemy and point-pick queries.

Pure queries over a frame's snapshots — no mutations, no side effects.
Dead enemies are filtered before any distance is computed.

Ties go to whichever enemy comes first in the input sequence: the scan
only replaces the best candidate on a strictly smaller distance, so
identical input always yields the identical pick.
"""

from __future__ import annotations
from typing import Iterable

from core.geometry import squared_distance
from core.viewport import Viewport, screen_to_world
from logic.targeting.snapshot import EnemySnapshot, PlayerSnapshot


def select_nearest(player: PlayerSnapshot | None,
                   enemies: Iterable[EnemySnapshot]) -> EnemySnapshot | None:
    """Return the alive enemy closest to the player's centre, or ``None``.

    Used on room entry, by ``SelectNearest``, and as the fallback for
    cycling and auto-retarget.
    """
    if player is None:
        return None
    px, py = player.center
    best: EnemySnapshot | None = None
    best_dsq = 0.0
    for enemy in enemies:
        if not enemy.alive:
            continue
        dsq = squared_distance(px, py, enemy.x, enemy.y)
        if best is None or dsq < best_dsq:
            best = enemy
            best_dsq = dsq
    return best


def select_at_point(wx: float, wy: float,
                    enemies: Iterable[EnemySnapshot],
                    pick_radius: float) -> EnemySnapshot | None:
    """Return the alive enemy closest to world point ``(wx, wy)``.

    Only enemies whose centre lies within *pick_radius* (inclusive)
    qualify.  *pick_radius* is the click/tap tolerance, not the attack
    range.
    """
    r_sq = pick_radius * pick_radius
    best: EnemySnapshot | None = None
    best_dsq = 0.0
    for enemy in enemies:
        if not enemy.alive:
            continue
        dsq = squared_distance(wx, wy, enemy.x, enemy.y)
        if dsq > r_sq:
            continue
        if best is None or dsq < best_dsq:
            best = enemy
            best_dsq = dsq
    return best


def pick_at_screen(sx: float, sy: float, viewport: Viewport | None,
                   enemies: Iterable[EnemySnapshot],
                   pick_radius: float) -> EnemySnapshot | None:
    """Resolve a click/tap at screen ``(sx, sy)`` to an enemy.

    Declines (``None``) if the viewport can't map the point.
    """
    world_pt = screen_to_world(sx, sy, viewport)
    if world_pt is None:
        return None
    return select_at_point(world_pt[0], world_pt[1], enemies, pick_radius)
