"""components.combat — Fighting stats and the enemy marker."""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class Combat:
    """Entity that can fight."""
    damage: float = 10.0       # base damage per hit
    defense: float = 0.0       # halved before subtraction


@dataclass
class Hostile:
    """Marks an entity the player may lock on to.

    ``kind`` picks the stat preset ("basic", "strong") and
    ``xp_reward`` is granted when it dies.
    """
    kind: str = "basic"
    xp_reward: int = 25
