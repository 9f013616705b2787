"""logic/targeting — Single-target lock-on.

Modules
-------
snapshot    — EnemySnapshot / PlayerSnapshot + builders from the ECS
selector    — select_nearest, select_at_point, pick_at_screen
cycler      — CycleDirection, ordered_candidates, cycle
range_eval  — RangeReport, evaluate_range, range_text
state       — TargetState + transitions (select, cycle, pick, validate, reset)
binding     — AttackOutcome, attack()
actions     — logical input actions fed to ``logic.tick.targeting_tick``

Public symbols are re-exported here for ``from logic.targeting import X``.
"""

from logic.targeting.snapshot import (               # noqa: F401
    EnemySnapshot, PlayerSnapshot, snapshot_player, snapshot_enemies,
)
from logic.targeting.selector import (               # noqa: F401
    select_nearest, select_at_point, pick_at_screen,
)
from logic.targeting.cycler import (                 # noqa: F401
    CycleDirection, ordered_candidates, cycle,
)
from logic.targeting.range_eval import (             # noqa: F401
    RangeReport, evaluate_range, range_text,
)
from logic.targeting.state import (                  # noqa: F401
    TargetMode, TargetState, TargetChange, resolve_target,
    apply_select_nearest, apply_cycle, apply_pick,
    validate_target, reset_target,
)
from logic.targeting.binding import (                # noqa: F401
    AttackResult, AttackOutcome, attack,
)
from logic.targeting.actions import (                # noqa: F401
    SelectNearest, CycleForward, CycleBackward, PointerPick,
    ResetTarget, Attack, TargetAction,
)
