"""logic/damage.py — Damage application and the death sequence.

Executed attacks funnel through ``apply_damage()`` so hit-flash,
death, XP, level-ups and the ``EnemyDied`` event stay consistent.  Armour is
halved before subtraction and every hit deals at least 1 HP.
"""

from __future__ import annotations

from core.ecs import World
from core.events import EventBus, EnemyDied, PlayerLeveledUp
from core.tuning import get as _tun
from components import (
    Health, Combat, HitFlash, Hostile, Player, Position,
)


def apply_damage(world: World, attacker_eid: int | None, defender_eid: int,
                 raw_damage: float | None = None) -> tuple[float, bool]:
    """Deal damage to *defender_eid*.

    Returns ``(damage_dealt, killed)``.  *raw_damage* defaults to the
    attacker's ``Combat.damage``.
    """
    health = world.get(defender_eid, Health)
    if health is None or not health.alive or not world.alive(defender_eid):
        return 0.0, False

    if raw_damage is None:
        atk = world.get(attacker_eid, Combat) if attacker_eid is not None else None
        raw_damage = atk.damage if atk else _tun("player", "damage", 10.0)

    stats = world.get(defender_eid, Combat)
    armour = stats.defense if stats else 0.0
    min_dmg = _tun("combat", "min_damage", 1.0)
    damage = max(min_dmg, raw_damage - armour / 2.0)

    health.current = max(0.0, health.current - damage)
    world.add(defender_eid, HitFlash())

    if health.current > 0.0:
        return damage, False

    handle_death(world, defender_eid, killer_eid=attacker_eid)
    return damage, True


def handle_death(world: World, eid: int, killer_eid: int | None = None) -> None:
    """Kill *eid*, emit ``EnemyDied``, and pay XP to a killing player."""
    pos = world.get(eid, Position)
    hostile = world.get(eid, Hostile)
    world.kill(eid)

    print(f"[COMBAT] enemy {eid} died")
    bus = world.res(EventBus)
    if bus:
        bus.emit(EnemyDied(eid=eid, killer_eid=killer_eid,
                           room=pos.room if pos else ""))

    if killer_eid is not None and hostile is not None:
        player = world.get(killer_eid, Player)
        if player is not None:
            player.enemies_defeated += 1
            gain_xp(world, killer_eid, hostile.xp_reward)


def gain_xp(world: World, eid: int, amount: int) -> int:
    """Bank *amount* XP on the player *eid*, levelling up as often as
    the total allows.  Returns the number of levels gained.
    """
    player = world.get(eid, Player)
    if player is None:
        return 0
    player.xp += amount
    gained = 0
    while player.xp >= player.xp_needed:
        level_up(world, eid)
        gained += 1
    return gained


def level_up(world: World, eid: int) -> None:
    """Spend one level's XP and raise the player's stats.

    The next threshold grows by ``xp_growth`` (floored); health is
    raised and fully restored.
    """
    player = world.get(eid, Player)
    player.level += 1
    player.xp -= player.xp_needed
    player.xp_needed = int(player.xp_needed * _tun("progression", "xp_growth", 1.5))

    hp = world.get(eid, Health)
    if hp is not None:
        hp.maximum += _tun("progression", "health_per_level", 20.0)
        hp.current = hp.maximum
    stats = world.get(eid, Combat)
    if stats is not None:
        stats.damage += _tun("progression", "damage_per_level", 5.0)
        stats.defense += _tun("progression", "defense_per_level", 2.0)

    print(f"[COMBAT] player {eid} reached level {player.level}")
    bus = world.res(EventBus)
    if bus:
        bus.emit(PlayerLeveledUp(eid=eid, level=player.level))


def tick_hit_flash(world: World, dt: float) -> None:
    """Count down and remove expired HitFlash markers."""
    expired = []
    for eid, flash in world.query(HitFlash):
        flash.remaining -= dt
        if flash.remaining <= 0.0:
            expired.append(eid)
    for eid in expired:
        world.remove(eid, HitFlash)
