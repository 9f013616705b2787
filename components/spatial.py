"""components.spatial — Position and body size.

All coordinates and dimensions are in metres (1 tile = 1 m).
``Position`` is the top-left corner of the body; targeting math uses
the body centre (position + half the collider size).
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class Position:
    x: float = 0.0        # m
    y: float = 0.0        # m
    room: str = "entrance"


@dataclass
class Velocity:
    x: float = 0.0        # m/s
    y: float = 0.0        # m/s


@dataclass
class Collider:
    width: float = 0.8    # m
    height: float = 0.8   # m

    @property
    def half_w(self) -> float:
        return self.width / 2.0

    @property
    def half_h(self) -> float:
        return self.height / 2.0
