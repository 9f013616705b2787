"""logic/targeting/range_eval.py — In-range / too-far classification.

Recomputed every frame the target is held; nothing is cached because
player and target both move.

The boundary is inclusive: a target at exactly the attack range is in
range.  The threshold arrives pre-squared so the hot comparison needs
no square root; the real distance is only computed for the "too far"
readout.
"""

from __future__ import annotations
from dataclasses import dataclass

from core.geometry import squared_distance
from logic.targeting.snapshot import EnemySnapshot, PlayerSnapshot


@dataclass(frozen=True)
class RangeReport:
    in_range: bool
    distance: float | None = None   # m, only set when out of range


def evaluate_range(player: PlayerSnapshot | None,
                   target: EnemySnapshot | None,
                   attack_range_sq: float) -> RangeReport | None:
    if player is None or target is None:
        return None
    px, py = player.center
    dsq = squared_distance(px, py, target.x, target.y)
    if dsq <= attack_range_sq:
        return RangeReport(in_range=True)
    return RangeReport(in_range=False, distance=dsq ** 0.5)


def range_text(report: RangeReport | None) -> str:
    """HUD line for the current target."""
    if report is None:
        return "No target"
    if report.in_range:
        return "In range"
    return f"Too far: {report.distance:.1f} m"
