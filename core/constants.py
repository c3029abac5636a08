"""core/constants.py — Shared constants used across the codebase.

Palette and layout for the tile renderer.  Gameplay numbers do not live
here; they are in ``data/tuning.toml`` (see ``core.tuning``).

Rendering converts tile coordinates to pixels via ``TILE_SIZE``.
No gameplay code should reference pixels, only the renderer.
"""

from components.ground import GroundKind

# Render
TILE_SIZE = 32
HUD_HEIGHT = 40
BACKGROUND = (20, 20, 24)

# Ground palette: specific skins first, then a colour per ground kind
GROUND_COLORS = {
    "VOID":   (40, 40, 40),
    "GRASS":  (50, 80, 40),
    "FLOWER": (70, 95, 55),
    "ROAD":   (80, 70, 50),
    "TILE":   (95, 95, 100),
    "WALL":   (90, 90, 90),
    "BRICK":  (110, 60, 50),
    "TREE":   (30, 60, 30),
    "ROCK":   (70, 70, 75),
    "DOOR":   (130, 90, 40),
    "WATER":  (30, 60, 90),
    "LAVA":   (150, 50, 20),
    "ICE":    (170, 200, 220),
}

KIND_COLORS = {
    GroundKind.DECORATION: (60, 70, 50),
    GroundKind.OBSTACLE:   (80, 80, 80),
    GroundKind.BIOME:      (40, 70, 110),
}

CHARACTER_COLORS = {
    "player": (255, 255, 100),
    "MONSTER": (220, 60, 60),
    "BADBAD": (120, 180, 255),
}

ITEM_COLORS = {
    "SWORD": (200, 200, 220),
    "KEY":   (230, 200, 60),
    "PIZZA": (230, 140, 60),
}

# Inventory overlay
INVENTORY_COLUMNS = 3
SLOT_SIZE = 48
SLOT_COLOR = (50, 50, 60)
CURSOR_COLOR = (255, 255, 100)
