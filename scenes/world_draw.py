"""
scenes/world_draw.py — Drawing helpers for WorldScene.

Everything here reads ``CellView`` projections or plain character
fields; nothing touches a Case directly.
"""

from __future__ import annotations
import pygame
from core.app import App
from core.constants import (
    GROUND_COLORS, KIND_COLORS, CHARACTER_COLORS, ITEM_COLORS,
    HUD_HEIGHT, BACKGROUND, INVENTORY_COLUMNS, SLOT_SIZE, SLOT_COLOR,
    CURSOR_COLOR,
)
from components import CellView, Inventory, Player, Position


def tile_rect(pos: Position, ox: int, oy: int, size: int) -> pygame.Rect:
    return pygame.Rect(ox + pos.x * size, oy + pos.y * size, size, size)


# ── Tiles ───────────────────────────────────────────────────────────

def draw_cell(surface: pygame.Surface, view: CellView, rect: pygame.Rect):
    color = GROUND_COLORS.get(view.environment, KIND_COLORS[view.ground])
    pygame.draw.rect(surface, color, rect)

    if view.item is not None:
        # Small diamond in the middle of the tile
        c = rect.center
        r = rect.width // 5
        pygame.draw.polygon(surface, ITEM_COLORS.get(view.item, (255, 0, 255)), [
            (c[0], c[1] - r), (c[0] + r, c[1]), (c[0], c[1] + r), (c[0] - r, c[1]),
        ])

    if view.character is not None:
        key = "player" if view.is_player else view.character
        pygame.draw.circle(surface, CHARACTER_COLORS.get(key, (200, 200, 200)),
                           rect.center, rect.width // 3)


def draw_facing(surface: pygame.Surface, player: Player,
                ox: int, oy: int, size: int):
    """Tick on the player's tile edge pointing at the faced tile."""
    rect = tile_rect(player.position, ox, oy, size)
    dx = player.facing.x - player.position.x
    dy = player.facing.y - player.position.y
    cx, cy = rect.center
    end = (cx + dx * (size // 2 - 2), cy + dy * (size // 2 - 2))
    pygame.draw.line(surface, (0, 0, 0), (cx, cy), end, 3)


# ── HUD ─────────────────────────────────────────────────────────────

def draw_hud(surface: pygame.Surface, app: App, world):
    band = pygame.Rect(0, 0, surface.get_width(), HUD_HEIGHT)
    pygame.draw.rect(surface, BACKGROUND, band)
    player = world.player
    if player is None:
        app.draw_text(surface, "No player on this map", 8, 12, (200, 200, 200))
        return
    held = player.inventory.hand()
    hand = held.name if held is not None else "-"
    app.draw_text(surface, f"Health: {player.health}", 8, 12, (255, 100, 100))
    app.draw_text(surface, f"Hand: {hand}", 160, 12, (220, 220, 220))
    app.draw_text(surface, f"Enemies: {len(world.enemies)}", 360, 12,
                  (220, 140, 140))


def draw_inventory(surface: pygame.Surface, app: App, inv: Inventory,
                   cursor: int):
    rows = (inv.size + INVENTORY_COLUMNS - 1) // INVENTORY_COLUMNS
    pad = 8
    w = INVENTORY_COLUMNS * (SLOT_SIZE + pad) + pad
    h = rows * (SLOT_SIZE + pad) + pad + 20
    x0 = (surface.get_width() - w) // 2
    y0 = (surface.get_height() - h) // 2

    panel = pygame.Surface((w, h), pygame.SRCALPHA)
    panel.fill((0, 0, 0, 200))
    surface.blit(panel, (x0, y0))
    app.draw_text(surface, "Inventory (SPACE: hold, I: close)", x0 + pad, y0 + 4)

    for i in range(inv.size):
        col, row = i % INVENTORY_COLUMNS, i // INVENTORY_COLUMNS
        rect = pygame.Rect(x0 + pad + col * (SLOT_SIZE + pad),
                           y0 + 20 + pad + row * (SLOT_SIZE + pad),
                           SLOT_SIZE, SLOT_SIZE)
        pygame.draw.rect(surface, SLOT_COLOR, rect)
        item = inv.get(i)
        if item is not None:
            color = ITEM_COLORS.get(item.item_type.value, (255, 0, 255))
            pygame.draw.circle(surface, color, rect.center, SLOT_SIZE // 4)
            app.draw_text(surface, item.name[:6], rect.x + 2, rect.bottom - 14)
        if i == 0:
            pygame.draw.rect(surface, (150, 150, 150), rect, 1)
        if i == cursor:
            pygame.draw.rect(surface, CURSOR_COLOR, rect, 2)
