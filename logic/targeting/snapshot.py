"""logic/targeting/snapshot.py — The data contract targeting depends on.

Targeting never reads ECS components directly.  Once per frame the
tick builds immutable snapshots of the player and of every enemy in
the player's room, and all selection / cycling / range math runs over
those.  Any engine representation that can produce these two shapes
can drive the targeting core.

Snapshots are rebuilt every frame — never cached — because both the
player and the enemies move, and enemies die between frames.
"""

from __future__ import annotations
from dataclasses import dataclass

from core.ecs import World
from components import Position, Collider, Health, Hostile, Player


@dataclass(frozen=True)
class EnemySnapshot:
    """One enemy as targeting sees it.  ``(x, y)`` is the body centre."""
    id: int
    x: float
    y: float
    alive: bool = True


@dataclass(frozen=True)
class PlayerSnapshot:
    """Player position (top-left) plus half-size.

    ``center`` is what every distance is measured from.
    """
    x: float
    y: float
    half_w: float = 0.0
    half_h: float = 0.0
    eid: int | None = None
    room: str = ""

    @property
    def center(self) -> tuple[float, float]:
        return self.x + self.half_w, self.y + self.half_h


def snapshot_player(world: World) -> PlayerSnapshot | None:
    """Return the player's snapshot, or ``None`` if there is no player."""
    res = world.query_one(Player, Position)
    if res is None:
        return None
    eid, _player, pos = res
    col = world.get(eid, Collider)
    half_w = col.half_w if col else 0.0
    half_h = col.half_h if col else 0.0
    return PlayerSnapshot(x=pos.x, y=pos.y, half_w=half_w, half_h=half_h,
                          eid=eid, room=pos.room)


def snapshot_enemies(world: World, room: str) -> list[EnemySnapshot]:
    """Snapshot every hostile in *room*, ascending entity-id order.

    An enemy is alive while the world has not killed it and its HP is
    above zero; an HP-zero enemy that has not been purged yet is still
    listed, flagged ``alive=False``, so it can never be targeted.
    """
    out: list[EnemySnapshot] = []
    for eid, _hostile, pos in world.query_room(room, Hostile, Position):
        col = world.get(eid, Collider)
        cx = pos.x + (col.half_w if col else 0.0)
        cy = pos.y + (col.half_h if col else 0.0)
        hp = world.get(eid, Health)
        alive = world.alive(eid) and (hp is None or hp.alive)
        out.append(EnemySnapshot(id=eid, x=cx, y=cy, alive=alive))
    return out
