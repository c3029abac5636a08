"""components — Value types and entity dataclasses, organised by domain.

Submodules
----------
spatial      Position, Direction, PatrolZone
ground       Environment, GroundKind, skin tables
items        Sword, Key, Pizza, ItemType, Inventory
characters   Player, Enemy, Ally, as_fighter
case         Case, ActionType, CellView
dev_log      DevLog

All public names are re-exported here so callers can do
``from components import Position``.
"""

# ── Spatial ──────────────────────────────────────────────────────────
from components.spatial import Position, Direction, PatrolZone

# ── Ground ───────────────────────────────────────────────────────────
from components.ground import Environment, GroundKind, make_environment, empty_ground

# ── Items ────────────────────────────────────────────────────────────
from components.items import Item, ItemType, Sword, Key, Pizza, Inventory, create_item

# ── Characters ───────────────────────────────────────────────────────
from components.characters import (
    Character, Fighter, Player, Enemy, Ally, as_fighter, create_character,
)

# ── Cells ────────────────────────────────────────────────────────────
from components.case import Case, ActionType, CellView, MissingOccupantError

# ── Diagnostics ──────────────────────────────────────────────────────
from components.dev_log import DevLog

__all__ = [
    # spatial
    "Position", "Direction", "PatrolZone",
    # ground
    "Environment", "GroundKind", "make_environment", "empty_ground",
    # items
    "Item", "ItemType", "Sword", "Key", "Pizza", "Inventory", "create_item",
    # characters
    "Character", "Fighter", "Player", "Enemy", "Ally", "as_fighter",
    "create_character",
    # cells
    "Case", "ActionType", "CellView", "MissingOccupantError",
    # diagnostics
    "DevLog",
]
