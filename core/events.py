"""core/events.py — Lightweight event bus.

Decouples systems that need to *signal* something from systems that
*react* to it.  The bus lives as an ECS resource::

    from core.events import EventBus
    bus = world.res(EventBus)
    bus.emit(EnemyDied(eid=42, killer_eid=1))

Consumers subscribe with a callable::

    bus.subscribe("TargetChanged", hud.on_target_changed)

And the orchestrator drains once per frame::

    bus.drain()          # calls all handlers for pending events

Design rules:
  - Events are plain dataclasses — no behaviour.
  - ``emit()`` is O(1) (just appends).
  - ``drain()`` processes all queued events in FIFO order.
  - Handlers may emit new events; those are processed in the same drain.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable
from collections import defaultdict


# ═══════════════════════════════════════════════════════════════════
#  Event definitions
# ═══════════════════════════════════════════════════════════════════

@dataclass
class EnemyDied:
    """An enemy's HP dropped to zero."""
    eid: int
    killer_eid: int | None = None
    room: str = ""


@dataclass
class TargetChanged:
    """The player's lock-on moved.  ``new_id`` is None for NoTarget."""
    old_id: int | None = None
    new_id: int | None = None
    reason: str = ""               # "select", "cycle", "pick", "auto", "reset", "lost"


@dataclass
class AttackResolved:
    """Outcome of one attack request, for HUD / sound feedback."""
    kind: str = ""                 # AttackResult value
    target_id: int | None = None
    distance: float | None = None


@dataclass
class PlayerLeveledUp:
    """Enough XP banked for the next level; stats already raised."""
    eid: int
    level: int = 1


# ═══════════════════════════════════════════════════════════════════
#  Event Bus
# ═══════════════════════════════════════════════════════════════════

class EventBus:
    """Fire-and-forget event bus stored as an ECS resource."""

    def __init__(self):
        self._queue: list[Any] = []
        self._subs: dict[str, list[Callable]] = defaultdict(list)

    # ── Public API ───────────────────────────────────────────────────

    def emit(self, event) -> None:
        """Queue an event for processing on next ``drain()``."""
        self._queue.append(event)

    def subscribe(self, event_type: str, handler: Callable) -> None:
        """Register *handler* to receive events of *event_type*.

        *event_type* is the class name, e.g. ``"EnemyDied"``.
        """
        self._subs[event_type].append(handler)

    def drain(self) -> int:
        """Process all queued events.  Returns number processed.

        A failing handler is reported and skipped; the remaining
        handlers and events still run.
        """
        processed = 0
        safety = 100  # prevent infinite emit loops
        while self._queue and safety > 0:
            batch = self._queue[:]
            self._queue.clear()
            for event in batch:
                name = type(event).__name__
                for handler in self._subs.get(name, []):
                    try:
                        handler(event)
                    except Exception as exc:
                        print(f"[EVENT] handler error for {name}: {exc}")
                        import traceback; traceback.print_exc()
            processed += len(batch)
            safety -= 1
        return processed

    def __repr__(self) -> str:
        return f"EventBus(pending={len(self._queue)}, subs={len(self._subs)})"
