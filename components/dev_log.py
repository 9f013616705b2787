"""components.dev_log — Structured targeting / combat event log.

A ring-buffer resource that records timestamped lock-on changes,
auto-retargets, and attack outcomes.  The dungeon scene's debug
overlay shows the tail of it; tests read it to check *why* the
target moved.

Usage:
    log = world.res(DevLog)
    log.record(eid, "target", "acquired", t=clock.time,
               details={"reason": "cycle"})

Each entry is a dict:
    {"t": float, "eid": int | None, "cat": str, "msg": str,
     "details": dict | None}
"""

from __future__ import annotations
from dataclasses import dataclass, field


@dataclass
class DevLog:
    """Ring-buffer of targeting events."""

    entries: list[dict] = field(default_factory=list)
    max_entries: int = 200

    def record(self, eid: int | None, cat: str, msg: str, *,
               t: float = 0.0, details: dict | None = None) -> None:
        self.entries.append({
            "t": t,
            "eid": eid,
            "cat": cat,
            "msg": msg,
            "details": details,
        })
        if len(self.entries) > self.max_entries:
            self.entries = self.entries[-self.max_entries:]

    def recent(self, n: int = 20) -> list[dict]:
        """Return the *n* most recent entries (newest last)."""
        return self.entries[-n:]

    def for_cat(self, cat: str, n: int = 50) -> list[dict]:
        """Return last *n* entries in a category."""
        return [e for e in self.entries if e["cat"] == cat][-n:]
