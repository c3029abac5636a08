"""core/loader.py — Map file → World.

Reads, validates, builds directives, then applies them to a fresh
World.  Loading is all-or-nothing: any validation failure raises
``MapValidationError`` before a World exists.

Usage:
    world = load_world("maps/demo.map")
    world = load_world_from_text(text, log=DevLog())
"""

from __future__ import annotations
import random
import time
from pathlib import Path
from typing import Callable

from components.dev_log import DevLog
from core import tuning
from core.directives import build_directives
from core.map_parser import read_map
from core.validate import validate
from core.world import World


def load_world_from_text(text: str, log: DevLog | None = None, *,
                         clock: Callable[[], float] = time.monotonic,
                         rng: random.Random | None = None,
                         source: str = "<text>") -> World:
    raw = read_map(text)
    width, height = validate(raw, log)

    world = World(width, height, log=log, clock=clock, rng=rng, tuning={
        "world": tuning.section("world"),
        "player": tuning.section("player"),
        "items": tuning.section("items"),
    })
    for directive in build_directives(raw):
        world.apply_directive(directive)

    print(f"[MAP] Loaded {width}x{height} from {source}: "
          f"{len(raw.elements)} elements, {len(world.enemies)} enemies")
    return world


def load_world(path: str | Path, log: DevLog | None = None, **kwargs) -> World:
    """Load a map file.  ``FileNotFoundError`` propagates."""
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    return load_world_from_text(text, log, source=str(path), **kwargs)
