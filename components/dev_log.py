"""components.dev_log — Structured diagnostics log.

A ring-buffer sink that the map loader, the validator and the World
write to.  It is passed in explicitly (never a module global) so tests
and tools can inspect exactly what a load or a turn reported.

Usage:
    log = DevLog()
    world = load_world("maps/demo.map", log=log)
    for e in log.for_cat("validate"):
        print(e["msg"])

Each entry is a dict:
    {"t": float, "cat": str, "level": str, "msg": str,
     "details": dict | None}
"""

from __future__ import annotations
from dataclasses import dataclass, field

LEVELS = ("info", "warning", "error")


@dataclass
class DevLog:
    """Ring-buffer of load diagnostics and gameplay events."""

    entries: list[dict] = field(default_factory=list)
    max_entries: int = 500
    _paused: bool = False

    # If non-empty, only entries whose ``cat`` is in the set are kept.
    cat_filter: set[str] = field(default_factory=set)

    def record(self, cat: str, msg: str, *,
               level: str = "info", t: float = 0.0,
               details: dict | None = None) -> None:
        if self._paused:
            return
        if self.cat_filter and cat not in self.cat_filter:
            return
        if level not in LEVELS:
            raise ValueError(f"unknown log level {level!r}")
        entry = {
            "t": t,
            "cat": cat,
            "level": level,
            "msg": msg,
            "details": details,
        }
        self.entries.append(entry)
        if len(self.entries) > self.max_entries:
            self.entries = self.entries[-self.max_entries:]

    def error(self, cat: str, msg: str, **details) -> None:
        self.record(cat, msg, level="error", details=details or None)

    def warning(self, cat: str, msg: str, **details) -> None:
        self.record(cat, msg, level="warning", details=details or None)

    def clear(self):
        self.entries.clear()

    def pause(self):
        self._paused = True

    def resume(self):
        self._paused = False

    def recent(self, n: int = 50) -> list[dict]:
        """Return the *n* most recent entries (newest last)."""
        return self.entries[-n:]

    def for_cat(self, cat: str, n: int = 50) -> list[dict]:
        """Return last *n* entries in a category."""
        return [e for e in self.entries if e["cat"] == cat][-n:]

    def errors(self) -> list[dict]:
        return [e for e in self.entries if e["level"] == "error"]
