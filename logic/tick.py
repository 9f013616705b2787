"""logic/tick.py — Per-frame system orchestration.

Houses the targeting pipeline plus the tiny movement/clock systems
the dungeon scene needs.  Input is drained *before* the combat pass,
so a cycle and an attack queued in the same frame see the same
TargetState.

Usage::

    from logic.tick import targeting_tick, input_system, movement_system

    frame = targeting_tick(world, scene.target, scene.input.actions(),
                           viewport=viewport)
    frame.target_id, frame.range, frame.outcomes
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable

from components import GameClock, Player, Position, Velocity, DevLog
from core.constants import ATTACK_RANGE, PICK_RADIUS
from core.events import EventBus, TargetChanged, AttackResolved
from core.tuning import get as _tun
from core.viewport import Viewport, point_in_canvas
from logic.damage import apply_damage
from logic.targeting import (
    TargetState, TargetChange, RangeReport, AttackOutcome, AttackResult,
    CycleDirection, snapshot_player, snapshot_enemies, resolve_target,
    apply_select_nearest, apply_cycle, apply_pick, validate_target,
    reset_target, evaluate_range, attack,
    SelectNearest, CycleForward, CycleBackward, PointerPick,
    ResetTarget, Attack, TargetAction,
)

if TYPE_CHECKING:
    from core.ecs import World


@dataclass
class FrameResult:
    """What rendering / HUD read after the targeting pass."""
    target_id: int | None = None
    range: RangeReport | None = None
    outcomes: list[AttackOutcome] = field(default_factory=list)
    changes: list[TargetChange] = field(default_factory=list)


# ── Tiny per-frame systems ───────────────────────────────────────────

def advance_clock(world: "World", dt: float) -> None:
    clock = world.res(GameClock)
    if clock:
        clock.time += dt


def input_system(world: "World", move: tuple[float, float] | None = None) -> None:
    """Set Player velocity from a normalised ``(dx, dy)`` movement input."""
    if move is None:
        return
    dx, dy = move
    for _eid, player, vel in world.query(Player, Velocity):
        vel.x = dx * player.speed
        vel.y = dy * player.speed


def movement_system(world: "World", dt: float,
                    bounds: tuple[float, float] | None = None) -> None:
    """Integrate Velocity into Position, clamped to ``(0..w, 0..h)``."""
    for _eid, pos, vel in world.query(Position, Velocity):
        pos.x += vel.x * dt
        pos.y += vel.y * dt
        if bounds is not None:
            w, h = bounds
            pos.x = max(0.0, min(w - 1.0, pos.x))
            pos.y = max(0.0, min(h - 1.0, pos.y))


# ── Targeting pipeline ───────────────────────────────────────────────

def targeting_tick(world: "World", state: TargetState,
                   actions: Iterable[TargetAction] = (),
                   *,
                   viewport: Viewport | None = None,
                   attack_range: float | None = None,
                   pick_radius: float | None = None) -> FrameResult:
    """Run one frame of lock-on: validate, apply actions, evaluate range.

    Parameters
    ----------
    world : World
        The ECS world; player and enemies are snapshotted from it.
    state : TargetState
        The caller-owned lock-on.  Mutated in place.
    actions : iterable of TargetAction
        This frame's logical input, applied in order.
    viewport : Viewport | None
        Needed for ``PointerPick``; picks are declined without it and
        outside its canvas rect.
    attack_range, pick_radius : float | None
        Override the tuning values (metres, not squared).
    """
    if attack_range is None:
        attack_range = _tun("targeting", "attack_range", ATTACK_RANGE)
    if pick_radius is None:
        pick_radius = _tun("targeting", "pick_radius", PICK_RADIUS)
    range_sq = attack_range * attack_range

    player = snapshot_player(world)
    room = player.room if player else ""
    enemies = snapshot_enemies(world, room) if player else []

    frame = FrameResult()
    frame.changes.extend(validate_target(state, player, enemies))

    for action in actions:
        change: TargetChange | None = None
        if isinstance(action, SelectNearest):
            change = apply_select_nearest(state, player, enemies)
        elif isinstance(action, CycleForward):
            change = apply_cycle(state, CycleDirection.FORWARD, player, enemies)
        elif isinstance(action, CycleBackward):
            change = apply_cycle(state, CycleDirection.BACKWARD, player, enemies)
        elif isinstance(action, PointerPick):
            # Off-canvas clicks (HUD bar) would hit enemies that are not drawn
            if point_in_canvas(action.sx, action.sy, viewport):
                change = apply_pick(state, action.sx, action.sy, viewport,
                                    enemies, pick_radius)
        elif isinstance(action, ResetTarget):
            change = reset_target(state)
        elif isinstance(action, Attack):
            frame.changes.extend(validate_target(state, player, enemies))
            outcome = attack(player, lambda: resolve_target(state, enemies),
                             range_sq)
            frame.outcomes.append(outcome)
            if outcome.kind is AttackResult.EXECUTED:
                _dealt, killed = apply_damage(world, player.eid, outcome.target.id)
                if killed:
                    enemies = snapshot_enemies(world, room)
                    frame.changes.extend(validate_target(state, player, enemies))
        if change is not None:
            frame.changes.append(change)

    _publish(world, frame)

    frame.target_id = state.target_id
    frame.range = evaluate_range(player, resolve_target(state, enemies), range_sq)
    return frame


def _publish(world: "World", frame: FrameResult) -> None:
    """Log and emit this frame's target changes and attack outcomes."""
    bus = world.res(EventBus)
    log = world.res(DevLog)
    clock = world.res(GameClock)
    t = clock.time if clock else 0.0

    for ch in frame.changes:
        print(f"[TARGET] {ch.old_id} → {ch.new_id} ({ch.reason})")
        if log:
            log.record(ch.new_id, "target", ch.reason, t=t,
                       details={"from": ch.old_id})
        if bus:
            bus.emit(TargetChanged(old_id=ch.old_id, new_id=ch.new_id,
                                   reason=ch.reason))

    for outcome in frame.outcomes:
        tid = outcome.target.id if outcome.target else None
        if log:
            log.record(tid, "combat", outcome.kind.value, t=t,
                       details={"distance": outcome.distance})
        if bus:
            bus.emit(AttackResolved(kind=outcome.kind.value, target_id=tid,
                                    distance=outcome.distance))

    if bus:
        bus.drain()
