"""test_tick.py — Headless integration tests for the per-frame targeting
pipeline.

Each test builds a small room in a fresh ECS World, feeds logical
actions into ``targeting_tick`` and checks the resulting TargetState,
attack outcomes, events, and DevLog entries.  No pygame display.

Run:  python test_tick.py
"""
from __future__ import annotations
import sys, math, traceback

from core.ecs import World
from core.events import EventBus
from core.viewport import viewport_from_camera, world_to_screen, point_in_canvas
from components import (
    Position, Collider, Health, Combat, Hostile, Player, Camera,
    GameClock, DevLog, HitFlash,
)
from logic.damage import apply_damage, tick_hit_flash, gain_xp
from logic.entity_factory import spawn_player, spawn_enemy, populate_room
from logic.targeting import (
    TargetState, AttackResult, snapshot_player, snapshot_enemies,
    SelectNearest, CycleForward, CycleBackward, PointerPick,
    ResetTarget, Attack,
)
from logic.tick import targeting_tick

# ── Test harness ─────────────────────────────────────────────────────

_passed = 0
_failed = 0

def ok(label: str):
    global _passed
    _passed += 1
    print(f"  [PASS] {label}")

def fail(label: str, detail: str = ""):
    global _failed
    _failed += 1
    print(f"  [FAIL] {label}")
    if detail:
        for line in detail.strip().splitlines():
            print(f"         {line}")


# ── Scenario builder ─────────────────────────────────────────────────

ROOM = "_test_room"
RANGE = 8.0          # attack range → 64 m²
PICK = 1.0


def _make_world() -> World:
    w = World()
    w.set_res(GameClock(time=1.0))
    w.set_res(EventBus())
    w.set_res(DevLog())
    return w


def _spawn_player(w: World, x: float = 0.0, y: float = 0.0,
                  damage: float = 10.0) -> int:
    """Point-sized player so distances match the hand-computed ones."""
    eid = w.spawn()
    w.add(eid, Position(x=x, y=y, room=ROOM))
    w.add(eid, Player())
    w.add(eid, Combat(damage=damage, defense=0.0))
    w.room_add(eid, ROOM)
    return eid


def _spawn_enemy(w: World, x: float, y: float, hp: float = 10.0) -> int:
    eid = w.spawn()
    w.add(eid, Position(x=x, y=y, room=ROOM))
    w.add(eid, Health(current=hp, maximum=hp))
    w.add(eid, Combat(damage=5.0, defense=0.0))
    w.add(eid, Hostile())
    w.room_add(eid, ROOM)
    return eid


def _tick(w: World, state: TargetState, *actions, viewport=None):
    return targeting_tick(w, state, list(actions), viewport=viewport,
                          attack_range=RANGE, pick_radius=PICK)


# ═══════════════════════════════════════════════════════════════════
#  1. Snapshots
# ═══════════════════════════════════════════════════════════════════

def test_snapshots():
    print("\n=== 1: Snapshots from the ECS ===")
    w = _make_world()
    pid = spawn_player(w, 4.0, 4.0, ROOM)
    e1 = spawn_enemy(w, 10.0, 2.0, ROOM)
    e2 = spawn_enemy(w, 1.0, 1.0, ROOM, kind="strong")
    other = spawn_enemy(w, 5.0, 5.0, "elsewhere")

    p = snapshot_player(w)
    col = w.get(pid, Collider)
    assert p.eid == pid and p.room == ROOM
    assert p.center == (4.0 + col.width / 2, 4.0 + col.height / 2)
    ok("Player snapshot carries the collider centre and room")

    enemies = snapshot_enemies(w, ROOM)
    assert [e.id for e in enemies] == [e1, e2]
    assert other not in [e.id for e in enemies]
    ecol = w.get(e1, Collider)
    assert (enemies[0].x, enemies[0].y) == (10.0 + ecol.half_w, 2.0 + ecol.half_h)
    ok("Enemy snapshots: room-filtered, spawn order, body centres")

    w.get(e1, Health).current = 0.0
    enemies = snapshot_enemies(w, ROOM)
    assert [e.alive for e in enemies] == [False, True]
    w.kill(e2)
    assert [e.id for e in snapshot_enemies(w, ROOM)] == [e1]
    ok("Zero HP → listed dead; killed → not listed")

    assert w.get(e2, Hostile).xp_reward == 50
    ok("Strong preset applied")

    assert snapshot_player(World()) is None
    ok("No player → None")


# ═══════════════════════════════════════════════════════════════════
#  2. Selection, cycling, reset through the tick
# ═══════════════════════════════════════════════════════════════════

def test_select_cycle_reset():
    print("\n=== 2: Select / cycle / reset ===")
    w = _make_world()
    _spawn_player(w)
    a = _spawn_enemy(w, 10.0, 0.0)
    b = _spawn_enemy(w, 3.0, 4.0)
    state = TargetState()

    frame = _tick(w, state)
    assert frame.target_id is None and frame.range is None
    ok("No actions → stays NoTarget (no implicit acquisition)")

    frame = _tick(w, state, SelectNearest())
    assert frame.target_id == b
    assert frame.range.in_range and frame.range.distance is None
    ok("SelectNearest → B (25 m²), in range")

    frame = _tick(w, state, CycleForward())
    assert frame.target_id == a
    assert not frame.range.in_range and math.isclose(frame.range.distance, 10.0)
    ok("CycleForward → A, out of range at 10.0 m")

    frame = _tick(w, state, CycleBackward(), CycleBackward())
    assert frame.target_id == a
    assert [c.new_id for c in frame.changes] == [b, a]
    ok("Two CycleBackward in one frame apply in order")

    frame = _tick(w, state, ResetTarget())
    assert frame.target_id is None and frame.range is None
    ok("ResetTarget → NoTarget")


# ═══════════════════════════════════════════════════════════════════
#  3. Attack gating
# ═══════════════════════════════════════════════════════════════════

def test_attack_gating():
    print("\n=== 3: Attack gating ===")
    w = _make_world()
    _spawn_player(w)
    a = _spawn_enemy(w, 10.0, 0.0, hp=50.0)
    b = _spawn_enemy(w, 3.0, 4.0, hp=50.0)
    state = TargetState()

    frame = _tick(w, state, Attack())
    assert frame.outcomes[0].kind is AttackResult.NO_TARGET
    assert w.get(a, Health).current == 50.0 and w.get(b, Health).current == 50.0
    ok("Attack with no target → blocked, nobody damaged")

    frame = _tick(w, state, SelectNearest(), Attack())
    assert frame.outcomes[0].kind is AttackResult.EXECUTED
    assert frame.outcomes[0].target.id == b
    assert w.get(b, Health).current == 40.0
    assert w.get(a, Health).current == 50.0
    assert w.has(b, HitFlash)
    ok("Select + attack in one frame hits only B")

    # B walks away to 100 m²
    w.get(b, Position).x, w.get(b, Position).y = 6.0, 8.0
    frame = _tick(w, state, Attack())
    out = frame.outcomes[0]
    assert out.kind is AttackResult.OUT_OF_RANGE
    assert math.isclose(out.distance, 10.0)
    assert w.get(b, Health).current == 40.0
    assert w.get(a, Health).current == 50.0
    ok("Target moved to 10 m → blocked, out of range 10.0")

    log = w.res(DevLog)
    cats = [e["msg"] for e in log.for_cat("combat")]
    assert cats == ["no_target", "executed", "out_of_range"], cats
    ok("DevLog records every attack outcome")


# ═══════════════════════════════════════════════════════════════════
#  4. Auto-retarget
# ═══════════════════════════════════════════════════════════════════

def test_auto_retarget_on_kill():
    print("\n=== 4: Auto-retarget ===")
    w = _make_world()
    pid = _spawn_player(w)
    a = _spawn_enemy(w, 10.0, 0.0)
    b = _spawn_enemy(w, 3.0, 4.0)
    state = TargetState()
    changed = []
    died = []
    bus = w.res(EventBus)
    bus.subscribe("TargetChanged", lambda ev: changed.append((ev.new_id, ev.reason)))
    bus.subscribe("EnemyDied", lambda ev: died.append(ev.eid))

    frame = _tick(w, state, SelectNearest(), Attack())
    assert frame.outcomes[0].kind is AttackResult.EXECUTED
    assert not w.alive(b)
    assert frame.target_id == a
    assert [c.reason for c in frame.changes] == ["select", "lost", "auto"]
    ok("Killing B retargets A within the same tick")

    assert died == [b]
    assert changed == [(b, "select"), (None, "lost"), (a, "auto")]
    assert w.get(pid, Player).enemies_defeated == 1
    assert w.get(pid, Player).xp == w.get(b, Hostile).xp_reward
    ok("EnemyDied + TargetChanged events drained; XP awarded")

    frame = _tick(w, state, Attack())
    assert frame.outcomes[0].kind is AttackResult.OUT_OF_RANGE
    assert frame.outcomes[0].target is None
    ok("Follow-up attack gates on A, never the dead B")


def test_death_between_frames():
    print("\n=== 5: Death outside the tick ===")
    w = _make_world()
    _spawn_player(w)
    a = _spawn_enemy(w, 10.0, 0.0)
    b = _spawn_enemy(w, 3.0, 4.0)
    state = TargetState()
    _tick(w, state, SelectNearest())
    assert state.target_id == b

    # Something else (a trap) drops B to 0 HP; not purged yet
    w.get(b, Health).current = 0.0
    frame = _tick(w, state, Attack())
    assert frame.target_id == a
    assert frame.outcomes[0].kind is AttackResult.OUT_OF_RANGE
    ok("0-HP target is dropped before the attack is gated")

    w.kill(a)
    frame = _tick(w, state, Attack())
    assert frame.target_id is None
    assert frame.outcomes[0].kind is AttackResult.NO_TARGET
    ok("Last enemy gone → NoTarget, attack blocked")

    frame = _tick(w, state, SelectNearest(), CycleForward())
    assert frame.target_id is None and frame.changes == []
    ok("Select / cycle in an empty room stay NoTarget")


def test_apply_damage_rules():
    print("\n=== 6: Damage collaborator ===")
    w = _make_world()
    pid = _spawn_player(w, damage=10.0)
    e = _spawn_enemy(w, 1.0, 0.0, hp=30.0)
    w.get(e, Combat).defense = 4.0

    dealt, killed = apply_damage(w, pid, e)
    assert dealt == 8.0 and not killed
    assert w.get(e, Health).current == 22.0
    ok("Defense is halved before subtraction (10 − 4/2 = 8)")

    dealt, _ = apply_damage(w, pid, e, raw_damage=0.5)
    assert dealt == 1.0
    ok("Minimum 1 damage per hit")

    tick_hit_flash(w, 1.0)
    assert not w.has(e, HitFlash)
    ok("HitFlash expires")

    w.get(e, Health).current = 3.0
    dealt, killed = apply_damage(w, pid, e)
    assert killed and not w.alive(e)
    assert apply_damage(w, pid, e) == (0.0, False)
    ok("Lethal hit kills once; dead enemies take no damage")


# ═══════════════════════════════════════════════════════════════════
#  7. Pointer picks through the tick
# ═══════════════════════════════════════════════════════════════════

def test_pointer_pick():
    print("\n=== 7: Pointer picks ===")
    w = _make_world()
    _spawn_player(w, 5.0, 5.0)
    a = _spawn_enemy(w, 8.0, 5.0)
    b = _spawn_enemy(w, 5.0, 9.0)
    cam = Camera(x=5.0, y=5.0, zoom=2.0)
    vp = viewport_from_camera(cam, (0, 40, 960, 600), 32)
    state = TargetState()

    sx, sy = world_to_screen(5.2, 8.8, vp)
    frame = _tick(w, state, PointerPick(sx, sy), viewport=vp)
    assert frame.target_id == b
    ok("Click on B locks B")

    sx, sy = world_to_screen(1.0, 1.0, vp)
    frame = _tick(w, state, PointerPick(sx, sy), viewport=vp)
    assert frame.target_id == b
    ok("Click on empty floor keeps B")

    sx, sy = world_to_screen(8.0, 5.0, vp)
    frame = _tick(w, state, PointerPick(sx, sy))
    assert frame.target_id == b
    ok("No viewport → pick declined")

    frame = _tick(w, state, PointerPick(sx, sy), viewport=vp)
    assert frame.target_id == a
    ok("Click on A switches the lock to A")


def test_pick_outside_canvas():
    print("\n=== 8: Clicks outside the canvas ===")
    w = _make_world()
    _spawn_player(w, 5.0, 5.0)
    hidden = _spawn_enemy(w, 5.0, 0.0)
    cam = Camera(x=5.0, y=5.0, zoom=2.0)
    vp = viewport_from_camera(cam, (0, 40, 960, 600), 32)
    state = TargetState()

    # Enemy centre draws inside the HUD band above the canvas
    sx, sy = world_to_screen(5.0, 0.0, vp)
    assert (sx, sy) == (480.0, 20.0)
    assert not point_in_canvas(sx, sy, vp)
    frame = _tick(w, state, PointerPick(sx, sy), Attack(), viewport=vp)
    assert frame.target_id is None
    assert frame.outcomes[0].kind is AttackResult.NO_TARGET
    assert w.get(hidden, Health).current == 10.0
    ok("Click in the HUD band locks nothing and the attack is blocked")

    frame = _tick(w, state, PointerPick(480.0, 40.0), viewport=vp)
    assert frame.target_id == hidden
    ok("Canvas top edge is inside; the same enemy is pickable there")


def test_attack_revalidates():
    print("\n=== 9: Attack re-validates the held id ===")
    w = _make_world()
    _spawn_player(w)
    a = _spawn_enemy(w, 3.0, 4.0)
    state = TargetState(target_id=999)

    frame = _tick(w, state, Attack(), Attack())
    assert [c.reason for c in frame.changes[:2]] == ["lost", "auto"]
    assert frame.changes[1].new_id == a
    assert [o.kind for o in frame.outcomes] == [AttackResult.EXECUTED,
                                                AttackResult.NO_TARGET]
    assert not w.alive(a)
    ok("Stale id replaced before gating; second swing finds nothing alive")


def test_level_up():
    print("\n=== 10: XP and level-ups ===")
    w = _make_world()
    pid = _spawn_player(w, damage=10.0)
    w.add(pid, Health(current=60.0, maximum=100.0))
    w.get(pid, Combat).defense = 5.0
    levels = []
    w.res(EventBus).subscribe("PlayerLeveledUp", lambda ev: levels.append(ev.level))

    assert gain_xp(w, pid, 99) == 0
    assert w.get(pid, Player).level == 1
    ok("Below the threshold: no level")

    assert gain_xp(w, pid, 161) == 2
    player = w.get(pid, Player)
    # 260 → level 2 (−100, next 150) → level 3 (−150, next 225)
    assert (player.level, player.xp, player.xp_needed) == (3, 10, 225)
    hp = w.get(pid, Health)
    assert hp.maximum == 140.0 and hp.current == 140.0
    stats = w.get(pid, Combat)
    assert stats.damage == 20.0 and stats.defense == 9.0
    ok("Carry-over XP can level twice; stats raised and health refilled")

    w.res(EventBus).drain()
    assert levels == [2, 3]
    ok("PlayerLeveledUp emitted per level")

    e = _spawn_enemy(w, 1.0, 0.0, hp=5.0)
    w.get(e, Hostile).xp_reward = 215
    _dealt, killed = apply_damage(w, pid, e)
    assert killed and w.get(pid, Player).level == 4
    assert w.get(pid, Player).enemies_defeated == 1
    ok("Kill rewards flow through the same level-up path")


def test_populate_room():
    print("\n=== 11: Room population ===")
    import random
    w = _make_world()
    eids = populate_room(w, ROOM, 20, 12, 8, rng=random.Random(3),
                         strong_chance=0.5)
    assert len(eids) == 8
    for eid in eids:
        pos = w.get(eid, Position)
        assert 2.0 <= pos.x <= 17.0 and 2.0 <= pos.y <= 9.0
    assert len(snapshot_enemies(w, ROOM)) == 8
    ok("Enemies land inside the walls and are targetable")


# ═══════════════════════════════════════════════════════════════════
#  MAIN
# ═══════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    sections = [
        ("Snapshots", test_snapshots),
        ("Select / cycle / reset", test_select_cycle_reset),
        ("Attack gating", test_attack_gating),
        ("Auto-retarget", test_auto_retarget_on_kill),
        ("Death between frames", test_death_between_frames),
        ("Damage", test_apply_damage_rules),
        ("Pointer pick", test_pointer_pick),
        ("Pick outside canvas", test_pick_outside_canvas),
        ("Attack re-validates", test_attack_revalidates),
        ("Level-up", test_level_up),
        ("Populate room", test_populate_room),
    ]

    for name, fn in sections:
        try:
            fn()
        except Exception:
            fail(name, traceback.format_exc())

    total = _passed + _failed
    print(f"\n{'=' * 60}")
    print(f"  Tick Tests: {_passed} passed, {_failed} failed  "
          f"(total {total})")
    print(f"{'=' * 60}")
    sys.exit(1 if _failed else 0)
