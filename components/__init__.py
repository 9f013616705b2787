"""components — ECS component dataclasses, organised by domain.

Submodules
----------
spatial        Position, Velocity, Collider
rendering      Identity, Sprite, HitFlash
rpg            Health
combat         Combat, Hostile
resources      Camera, GameClock, Player
dev_log        DevLog

All public names are re-exported here so callers can write
``from components import Position``.
"""

# ── Spatial ──────────────────────────────────────────────────────────
from components.spatial import Position, Velocity, Collider

# ── Rendering ────────────────────────────────────────────────────────
from components.rendering import Identity, Sprite, HitFlash

# ── RPG ──────────────────────────────────────────────────────────────
from components.rpg import Health

# ── Combat ───────────────────────────────────────────────────────────
from components.combat import Combat, Hostile

# ── World resources / singletons ─────────────────────────────────────
from components.resources import Camera, GameClock, Player

# ── Debug ────────────────────────────────────────────────────────────
from components.dev_log import DevLog

__all__ = [
    # spatial
    "Position", "Velocity", "Collider",
    # rendering
    "Identity", "Sprite", "HitFlash",
    # rpg
    "Health",
    # combat
    "Combat", "Hostile",
    # resources
    "Camera", "GameClock", "Player",
    # debug
    "DevLog",
]
