"""logic/input_manager.py — Key events → commands.

Sits between raw pygame events and the World.  The scene feeds in one
event at a time; the manager maps it to an *intent* string based on
the current **input context** (gameplay or inventory) and applies the
repeat filter: the same key pressed again within ``debounce_ms`` is
dropped.

The repeat filter's state (last key, last accept time) lives on the
instance, so each control loop owns its own.

    self.input = InputManager()
    intent = self.input.feed(event)          # None if nothing to do
    if intent in MOVE_INTENTS:
        world.move_entity(player, MOVE_INTENTS[intent])
"""

from __future__ import annotations
from enum import Enum, auto
import pygame

from components.spatial import Direction
from core.tuning import get as _tun


# ── Input contexts ──────────────────────────────────────────────────

class InputContext(Enum):
    """Determines which key-bindings are active."""
    GAMEPLAY  = auto()   # walking around the map
    INVENTORY = auto()   # slot grid open, cursor moves instead


# ── Default key bindings ────────────────────────────────────────────

_GAMEPLAY_BINDS: dict[str, list[int]] = {
    "move_up":    [pygame.K_w, pygame.K_UP],
    "move_down":  [pygame.K_s, pygame.K_DOWN],
    "move_left":  [pygame.K_a, pygame.K_LEFT],
    "move_right": [pygame.K_d, pygame.K_RIGHT],
    "interact":   [pygame.K_SPACE],
    "inventory":  [pygame.K_i],
    "tuning_reload": [pygame.K_F4],
    "quit":       [pygame.K_ESCAPE],
}

_INVENTORY_BINDS: dict[str, list[int]] = {
    "ui_up":      [pygame.K_w, pygame.K_UP],
    "ui_down":    [pygame.K_s, pygame.K_DOWN],
    "ui_left":    [pygame.K_a, pygame.K_LEFT],
    "ui_right":   [pygame.K_d, pygame.K_RIGHT],
    "ui_equip":   [pygame.K_SPACE],
    "ui_close":   [pygame.K_i],
    "quit":       [pygame.K_ESCAPE],
}

MOVE_INTENTS: dict[str, Direction] = {
    "move_up":    Direction.UP,
    "move_down":  Direction.DOWN,
    "move_left":  Direction.LEFT,
    "move_right": Direction.RIGHT,
}

CURSOR_INTENTS: dict[str, Direction] = {
    "ui_up":      Direction.UP,
    "ui_down":    Direction.DOWN,
    "ui_left":    Direction.LEFT,
    "ui_right":   Direction.RIGHT,
}


# ── InputManager ────────────────────────────────────────────────────

class InputManager:
    """Context-aware, debounced key mapper."""

    def __init__(self, debounce_ms: int | None = None):
        self.context: InputContext = InputContext.GAMEPLAY
        self.debounce_ms = (int(_tun("input", "debounce_ms", 200))
                            if debounce_ms is None else debounce_ms)
        self.last_key: int | None = None
        self.last_time: int = 0

    def feed(self, event: pygame.event.Event,
             now_ms: int | None = None) -> str | None:
        """Map one event to an intent, or ``None``.

        ``QUIT`` always maps to ``"quit"``.  Only ``KEYDOWN`` events
        otherwise produce intents.
        """
        if event.type == pygame.QUIT:
            return "quit"
        if event.type != pygame.KEYDOWN:
            return None

        intent = self._lookup(event.key)
        if intent is None:
            return None

        now = pygame.time.get_ticks() if now_ms is None else now_ms
        if event.key == self.last_key and now - self.last_time < self.debounce_ms:
            return None
        self.last_key = event.key
        self.last_time = now
        return intent

    def toggle_inventory(self) -> InputContext:
        if self.context is InputContext.GAMEPLAY:
            self.context = InputContext.INVENTORY
        else:
            self.context = InputContext.GAMEPLAY
        return self.context

    # ── internal ────────────────────────────────────────────────

    def _active_binds(self) -> dict[str, list[int]]:
        if self.context is InputContext.INVENTORY:
            return _INVENTORY_BINDS
        return _GAMEPLAY_BINDS

    def _lookup(self, key: int) -> str | None:
        for intent, keys in self._active_binds().items():
            if key in keys:
                return intent
        return None
