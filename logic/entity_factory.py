"""logic/entity_factory.py — Tuning-driven entity spawning.

Enemy stat presets live under ``[enemies.<kind>]`` in
``data/tuning.toml``; the built-in ``_PRESETS`` are the fallbacks when
the file or a key is missing.  Spawned entities are registered in the
room index so room snapshots pick them up in spawn order.
"""

from __future__ import annotations
import random
from typing import Any

from core.ecs import World
from core.constants import (
    PLAYER_WIDTH, PLAYER_HEIGHT, ENEMY_WIDTH, ENEMY_HEIGHT,
)
from core.tuning import get as _tun, section as _tun_sec
from components import (
    Position, Velocity, Collider, Health, Combat, Hostile,
    Identity, Sprite, Player,
)


_PRESETS: dict[str, dict[str, Any]] = {
    "basic": {
        "health": 30.0, "damage": 8.0, "defense": 2.0,
        "xp_reward": 25, "color": (255, 107, 107), "char": "g",
    },
    "strong": {
        "health": 60.0, "damage": 15.0, "defense": 5.0,
        "xp_reward": 50, "color": (255, 51, 51), "char": "O",
    },
}


def _float(v: Any, default: float = 0.0) -> float:
    try:
        return float(v)
    except (TypeError, ValueError):
        return default


def enemy_preset(kind: str) -> dict[str, Any]:
    """Merge ``[enemies.<kind>]`` over the built-in preset."""
    preset = dict(_PRESETS.get(kind, _PRESETS["basic"]))
    preset.update(_tun_sec(f"enemies.{kind}"))
    return preset


def spawn_player(world: World, x: float, y: float, room: str) -> int:
    eid = world.spawn()
    world.add(eid, Position(x=x, y=y, room=room))
    world.add(eid, Velocity())
    world.add(eid, Collider(width=_tun("player", "width", PLAYER_WIDTH),
                            height=_tun("player", "height", PLAYER_HEIGHT)))
    world.add(eid, Player(speed=_tun("player", "speed", 5.0),
                          xp_needed=int(_tun("progression", "xp_first_level", 100))))
    world.add(eid, Health(current=100.0, maximum=100.0))
    world.add(eid, Combat(damage=_tun("player", "damage", 10.0),
                          defense=_tun("player", "defense", 5.0)))
    world.add(eid, Identity(name="Player", kind="player"))
    world.add(eid, Sprite(char="@", color=(76, 175, 80), layer=2))
    world.room_add(eid, room)
    return eid


def spawn_enemy(world: World, x: float, y: float, room: str,
                kind: str = "basic") -> int:
    preset = enemy_preset(kind)
    hp = _float(preset.get("health"), 30.0)
    eid = world.spawn()
    world.add(eid, Position(x=x, y=y, room=room))
    world.add(eid, Collider(width=ENEMY_WIDTH, height=ENEMY_HEIGHT))
    world.add(eid, Health(current=hp, maximum=hp))
    world.add(eid, Combat(damage=_float(preset.get("damage"), 8.0),
                          defense=_float(preset.get("defense"), 2.0)))
    world.add(eid, Hostile(kind=kind, xp_reward=int(preset.get("xp_reward", 25))))
    world.add(eid, Identity(name=f"{kind.title()} #{eid}", kind="enemy"))
    world.add(eid, Sprite(char=str(preset.get("char", "g")),
                          color=tuple(preset.get("color", (255, 107, 107))),
                          layer=1))
    world.room_add(eid, room)
    return eid


def populate_room(world: World, room: str, width: int, height: int,
                  count: int, *, rng: random.Random | None = None,
                  strong_chance: float | None = None) -> list[int]:
    """Scatter *count* enemies inside the room walls."""
    rng = rng or random.Random()
    if strong_chance is None:
        strong_chance = _tun("enemies", "strong_chance", 0.3)
    eids = []
    for _ in range(count):
        x = rng.uniform(2.0, max(2.0, width - 3.0))
        y = rng.uniform(2.0, max(2.0, height - 3.0))
        kind = "strong" if rng.random() < strong_chance else "basic"
        eids.append(spawn_enemy(world, x, y, room, kind))
    return eids
