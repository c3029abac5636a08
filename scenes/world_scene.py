"""
scenes/world_scene.py — Top-down tile view of one loaded map

Arrows/WASD move, SPACE interacts, I opens the inventory, F4 re-reads
the tuning file, ESC quits.
In the inventory the arrows move a cursor over a 3-column slot grid
and SPACE puts the selected item in the hand.

Tiles are coloured rectangles.  After the first full frame only the
tiles the World reports dirty are redrawn.
"""

from __future__ import annotations
import pygame
from core.scene import Scene
from core.app import App
from core.constants import TILE_SIZE, HUD_HEIGHT, BACKGROUND, INVENTORY_COLUMNS
from core import tuning as tuning_mod
from core.tuning import get as _tun
from core.world import World
from components import Direction
from logic.input_manager import (
    InputManager, InputContext, MOVE_INTENTS, CURSOR_INTENTS,
)
from scenes.world_draw import (
    tile_rect, draw_cell, draw_facing, draw_hud, draw_inventory,
)


class WorldScene(Scene):
    def __init__(self, world: World):
        self.world = world
        self.input = InputManager()
        self.tile = int(_tun("render", "tile_size", TILE_SIZE))
        self.ox = 0
        self.oy = HUD_HEIGHT
        self.cursor = 0
        self._full_redraw = True

    # -- lifecycle --

    def on_enter(self, app: App):
        w, h = app._virtual_size
        self.ox = max(0, (w - self.world.width * self.tile) // 2)
        self.oy = HUD_HEIGHT + max(
            0, (h - HUD_HEIGHT - self.world.height * self.tile) // 2)
        self._full_redraw = True

    # -- input --

    def handle_event(self, event: pygame.event.Event, app: App):
        intent = self.input.feed(event)
        if intent is None:
            return
        if intent == "quit":
            app.running = False
            return
        player = self.world.player
        if player is None:
            return

        if self.input.context is InputContext.INVENTORY:
            self._inventory_command(intent, player)
        elif intent in MOVE_INTENTS:
            self.world.move_entity(player, MOVE_INTENTS[intent])
        elif intent == "interact":
            self.world.interact(player)
        elif intent == "inventory":
            self.input.toggle_inventory()
            self.cursor = 0
        elif intent == "tuning_reload":
            tuning_mod.reload()
            self.input.debounce_ms = int(_tun("input", "debounce_ms", 200))
            self.world.scheduler.interval = float(_tun("world", "enemy_interval", 1.0))
            print("[GAME] Tuning reloaded")

    def _inventory_command(self, intent: str, player):
        size = player.inventory.size
        if intent in CURSOR_INTENTS:
            d: Direction = CURSOR_INTENTS[intent]
            col = self.cursor % INVENTORY_COLUMNS + d.dx
            row = self.cursor // INVENTORY_COLUMNS + d.dy
            idx = row * INVENTORY_COLUMNS + col
            if 0 <= col < INVENTORY_COLUMNS and 0 <= idx < size:
                self.cursor = idx
        elif intent == "ui_equip":
            self.world.equip(player, self.cursor)
        elif intent == "ui_close":
            self.input.toggle_inventory()
            self._full_redraw = True

    # -- update --

    def update(self, dt: float, app: App):
        self.world.tick()
        if self.world.is_over():
            print(f"[GAME] {self.world.player.name} was defeated")
            app.running = False

    # -- draw --

    def draw(self, surface: pygame.Surface, app: App):
        if self._full_redraw:
            surface.fill(BACKGROUND)
            todo = set(self.world.grid)
            self.world.take_dirty()
            self._full_redraw = False
        else:
            todo = self.world.take_dirty()

        for pos in todo:
            view = self.world.cell_at(pos)
            if view is not None:
                draw_cell(surface, view, tile_rect(pos, self.ox, self.oy, self.tile))

        player = self.world.player
        if player is not None:
            draw_facing(surface, player, self.ox, self.oy, self.tile)
        draw_hud(surface, app, self.world)

        if self.input.context is InputContext.INVENTORY and player is not None:
            draw_inventory(surface, app, player.inventory, self.cursor)
