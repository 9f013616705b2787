"""logic/targeting/binding.py — Attacks act on the current target only.

An attack is executed only when a target is held, it re-resolves to an
alive enemy, and it is within attack range.  Everything else is a
blocked outcome with a reason the HUD can show; there is no fallback
to "whatever is nearby".
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from logic.targeting.snapshot import EnemySnapshot, PlayerSnapshot
from logic.targeting.range_eval import evaluate_range


class AttackResult(Enum):
    EXECUTED = "executed"
    NO_TARGET = "no_target"
    OUT_OF_RANGE = "out_of_range"


@dataclass(frozen=True)
class AttackOutcome:
    kind: AttackResult
    target: EnemySnapshot | None = None
    distance: float | None = None       # m, set for OUT_OF_RANGE

    @classmethod
    def executed(cls, target: EnemySnapshot) -> AttackOutcome:
        return cls(AttackResult.EXECUTED, target=target)

    @classmethod
    def no_target(cls) -> AttackOutcome:
        return cls(AttackResult.NO_TARGET)

    @classmethod
    def out_of_range(cls, distance: float) -> AttackOutcome:
        return cls(AttackResult.OUT_OF_RANGE, distance=distance)

    @property
    def blocked(self) -> bool:
        return self.kind is not AttackResult.EXECUTED

    @property
    def message(self) -> str:
        if self.kind is AttackResult.EXECUTED:
            return "Hit!"
        if self.kind is AttackResult.OUT_OF_RANGE:
            return f"Too far! ({self.distance:.1f} m)"
        return "No target"


def attack(player: PlayerSnapshot | None,
           resolve_target: Callable[[], EnemySnapshot | None],
           attack_range_sq: float) -> AttackOutcome:
    """Gate one attack request on the current target.

    *resolve_target* re-resolves the held id against the live enemies
    and returns ``None`` for no target / dead / removed.
    """
    if player is None:
        return AttackOutcome.no_target()
    target = resolve_target()
    if target is None or not target.alive:
        return AttackOutcome.no_target()
    report = evaluate_range(player, target, attack_range_sq)
    if not report.in_range:
        return AttackOutcome.out_of_range(report.distance)
    return AttackOutcome.executed(target)
