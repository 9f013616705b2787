"""components.rpg — Hit points."""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class Health:
    current: float = 30.0      # HP
    maximum: float = 30.0      # HP

    @property
    def alive(self) -> bool:
        return self.current > 0.0
