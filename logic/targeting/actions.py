"""logic/targeting/actions.py — Logical input actions.

The closed set of requests the targeting tick understands.  Raw device
decoding (which key, tap vs. drag, double-tap suppression) happens in
``logic.input_manager``; by the time an action lands here it is
already a decision.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class SelectNearest:
    pass


@dataclass(frozen=True)
class CycleForward:
    pass


@dataclass(frozen=True)
class CycleBackward:
    pass


@dataclass(frozen=True)
class PointerPick:
    sx: float       # screen px
    sy: float


@dataclass(frozen=True)
class ResetTarget:
    pass


@dataclass(frozen=True)
class Attack:
    pass


TargetAction = SelectNearest | CycleForward | CycleBackward | PointerPick | ResetTarget | Attack
