"""core/tuning.py — Data-driven tuning constants.

Gameplay numbers live in ``data/tuning.toml`` and are loaded once at
startup.  Any module can read a value with::

    from core.tuning import get
    interval = get("world", "enemy_interval", 1.0)

Every key also has an in-code default in ``DEFAULTS`` so a missing or
partial file is never fatal.  ``reload()`` re-reads the file.
"""

from __future__ import annotations
from pathlib import Path

try:
    import tomllib                         # Python 3.11+
except ModuleNotFoundError:  # Python < 3.11
    import tomli as tomllib


DEFAULTS: dict[str, dict] = {
    "world":  {"enemy_interval": 1.0},
    "player": {"base_damage": 2, "inventory_slots": 6},
    "items":  {"pizza_heal": 5},
    "input":  {"debounce_ms": 200, "poll_timeout_ms": 10},
    "render": {"tile_size": 32, "window_width": 960,
               "window_height": 640, "fps": 60},
}

_data: dict = {}
_path: Path | None = None


def default_path() -> Path:
    return Path(__file__).resolve().parent.parent / "data" / "tuning.toml"


def load(path: str | Path | None = None) -> None:
    """Load (or reload) tuning constants from *path*.

    If *path* is ``None``, default to ``data/tuning.toml`` relative to
    the project root (one level above ``core/``).
    """
    global _data, _path

    path = default_path() if path is None else Path(path)
    _path = path

    if not path.exists():
        print(f"[TUNING] {path} not found, using defaults")
        _data = {}
        return

    with open(path, "rb") as f:
        _data = tomllib.load(f)

    print(f"[TUNING] Loaded {_count_leaves(_data)} values from {path}")


def reload() -> None:
    """Re-read the tuning file from disk."""
    load(_path)


def _lookup(root: dict, section_path: str):
    node = root
    for part in section_path.split("."):
        if not isinstance(node, dict):
            return None
        node = node.get(part)
        if node is None:
            return None
    return node if isinstance(node, dict) else None


def get(section: str, key: str, default=None):
    """Read a tuning value.

    Lookup order is the loaded file, then ``DEFAULTS``, then *default*.
    *section* uses dot-notation for nested tables.

    >>> get("player", "base_damage")
    2
    """
    for root in (_data, DEFAULTS):
        node = _lookup(root, section)
        if node is not None and key in node:
            return node[key]
    return default


def section(section_path: str) -> dict:
    """Defaults for *section_path* overlaid with the file's values."""
    merged = dict(_lookup(DEFAULTS, section_path) or {})
    merged.update(_lookup(_data, section_path) or {})
    return merged


def _count_leaves(d: dict, _n: int = 0) -> int:
    for v in d.values():
        if isinstance(v, dict):
            _n = _count_leaves(v, _n)
        else:
            _n += 1
    return _n
