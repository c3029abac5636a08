"""components.ground — Environment layer: decorations, obstacles, biomes.

Every Case has exactly one Environment.  Decorations are walkable;
obstacles and biomes (water, lava, ice) block movement.

The three skin tables are disjoint.  Lookup is case-insensitive and
returns the canonical upper-case skin.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class GroundKind(Enum):
    DECORATION = "decoration"
    OBSTACLE   = "obstacle"
    BIOME      = "biome"


DECORATIONS = frozenset({
    "ALGAE", "CLOUD", "FLOWER", "FOLIAGE", "GRASS", "LADDER", "LILY",
    "PLANK", "REED", "ROAD", "SPROUT", "TILE", "TRACK", "VINE", "VOID",
})

OBSTACLES = frozenset({
    "BED", "BOG", "BOMB", "BRICK", "CHAIR", "CLIFF", "DOOR", "FENCE",
    "FORT", "GATE", "HEDGE", "HOUSE", "HUSK", "HUSKS", "LOCK", "MONITOR",
    "PIANO", "PILLAR", "PIPE", "ROCK", "RUBBLE", "SHELL", "SIGN", "SPIKE",
    "STATUE", "STUMP", "TABLE", "TOWER", "TREE", "TREES", "WALL",
})

BIOMES = frozenset({"ICE", "LAVA", "WATER"})

# Implicit ground for space cells and opened doors
VOID = "VOID"
DOOR = "DOOR"

_KIND_BY_TABLE = (
    (DECORATIONS, GroundKind.DECORATION),
    (OBSTACLES, GroundKind.OBSTACLE),
    (BIOMES, GroundKind.BIOME),
)


@dataclass(frozen=True, slots=True)
class Environment:
    skin: str
    kind: GroundKind = GroundKind.DECORATION

    @property
    def is_obstacle(self) -> bool:
        return self.kind is not GroundKind.DECORATION

    @property
    def is_door(self) -> bool:
        return self.skin == DOOR


def ground_kind(skin: str) -> GroundKind | None:
    """Which ground table *skin* belongs to, or ``None``."""
    key = skin.strip().upper()
    for table, kind in _KIND_BY_TABLE:
        if key in table:
            return kind
    return None


def make_environment(skin: str) -> Environment | None:
    kind = ground_kind(skin)
    if kind is None:
        return None
    return Environment(skin=skin.strip().upper(), kind=kind)


def empty_ground() -> Environment:
    """Walkable, un-typed ground."""
    return Environment(skin=VOID, kind=GroundKind.DECORATION)
