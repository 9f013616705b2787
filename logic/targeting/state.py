"""logic/targeting/state.py — The lock-on state machine.

States::

    NoTarget ──select / cycle / pick (found)──▶ Targeting(id)
    Targeting(id) ──select / cycle / pick (other)──▶ Targeting(new_id)
    Targeting(id) ──select / cycle (nothing alive)──▶ NoTarget
    Targeting(id) ──target dead or gone──▶ NoTarget ──auto──▶ Targeting(nearest)
    any ──reset──▶ NoTarget

``TargetState`` stores only the enemy *id*.  Every use re-resolves it
against the frame's enemy snapshots, since the enemy may have died or
been removed since the id was stored.

Each transition returns a ``TargetChange`` when the held id actually
moved, or ``None`` when it did not, so the caller can emit events and
log without diffing state itself.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from core.viewport import Viewport
from logic.targeting.snapshot import EnemySnapshot, PlayerSnapshot
from logic.targeting.selector import select_nearest, pick_at_screen
from logic.targeting.cycler import CycleDirection, cycle


class TargetMode(Enum):
    NO_TARGET = "no_target"
    TARGETING = "targeting"


@dataclass
class TargetState:
    """The player's current lock-on.  Owned by the scene, one per session."""
    target_id: int | None = None

    @property
    def mode(self) -> TargetMode:
        if self.target_id is None:
            return TargetMode.NO_TARGET
        return TargetMode.TARGETING


@dataclass(frozen=True)
class TargetChange:
    old_id: int | None
    new_id: int | None
    reason: str


def resolve_target(state: TargetState,
                   enemies: Sequence[EnemySnapshot]) -> EnemySnapshot | None:
    """Return the held enemy if it is still present and alive."""
    if state.target_id is None:
        return None
    for enemy in enemies:
        if enemy.id == state.target_id:
            return enemy if enemy.alive else None
    return None


def _set(state: TargetState, new_id: int | None, reason: str) -> TargetChange | None:
    old_id = state.target_id
    if old_id == new_id:
        return None
    state.target_id = new_id
    return TargetChange(old_id=old_id, new_id=new_id, reason=reason)


def apply_select_nearest(state: TargetState, player: PlayerSnapshot | None,
                         enemies: Sequence[EnemySnapshot]) -> TargetChange | None:
    found = select_nearest(player, enemies)
    return _set(state, found.id if found else None, "select")


def apply_cycle(state: TargetState, direction: CycleDirection,
                player: PlayerSnapshot | None,
                enemies: Sequence[EnemySnapshot]) -> TargetChange | None:
    found = cycle(direction, player, enemies, state.target_id)
    return _set(state, found.id if found else None, "cycle")


def apply_pick(state: TargetState, sx: float, sy: float,
               viewport: Viewport | None,
               enemies: Sequence[EnemySnapshot],
               pick_radius: float) -> TargetChange | None:
    """Lock on to the enemy under a click/tap.

    A miss, or a viewport that can't map the point, leaves the current
    target alone — a stray click shouldn't drop an intentional lock.
    """
    found = pick_at_screen(sx, sy, viewport, enemies, pick_radius)
    if found is None:
        return None
    return _set(state, found.id, "pick")


def validate_target(state: TargetState, player: PlayerSnapshot | None,
                    enemies: Sequence[EnemySnapshot]) -> list[TargetChange]:
    """Drop a dead/missing target and immediately retarget the nearest.

    Returns the transitions taken, in order: ``lost`` then ``auto``
    when a replacement was found, just ``lost`` when the room is clear,
    or nothing when the held target is still valid (or none is held).
    """
    if state.target_id is None or resolve_target(state, enemies) is not None:
        return []
    changes = [_set(state, None, "lost")]
    found = select_nearest(player, enemies)
    if found is not None:
        changes.append(_set(state, found.id, "auto"))
    return changes


def reset_target(state: TargetState) -> TargetChange | None:
    """Force NoTarget (room exit / entry)."""
    return _set(state, None, "reset")
