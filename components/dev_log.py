"""components.dev_log — Per-run event log for debugging.

Bounded buffer of timestamped records: rebuilds, scheduled
transitions, autopath changes, kills and captures.  The game state
machine owns one for the whole run and installs it as a resource on
every level's World::

    log = world.res(DevLog)
    log.record("path", "auto-path on", eid=pid, t=clock.time,
               details={"cells": 27})

Record layout: ``{"t", "level", "eid", "cat", "msg", "details"}``.
Nothing here prints; stdout is reserved for lifecycle ``[TAG]`` lines.
"""

from __future__ import annotations
from dataclasses import dataclass, field


@dataclass
class DevLog:
    entries: list[dict] = field(default_factory=list)
    max_entries: int = 500
    level: int = 1              # stamped on each record
    # Empty means keep every category.
    cat_filter: set[str] = field(default_factory=set)

    def record(self, cat: str, msg: str, *, eid: int = -1, t: float = 0.0,
               details: dict | None = None) -> None:
        if self.cat_filter and cat not in self.cat_filter:
            return
        self.entries.append({"t": t, "level": self.level, "eid": eid,
                             "cat": cat, "msg": msg, "details": details})
        overflow = len(self.entries) - self.max_entries
        if overflow > 0:
            del self.entries[:overflow]

    def recent(self, n: int = 50) -> list[dict]:
        """Newest *n* records, oldest first."""
        return self.entries[-n:]

    def for_cat(self, cat: str, n: int = 50) -> list[dict]:
        return [e for e in self.entries if e["cat"] == cat][-n:]
