"""core/world.py — The authoritative grid.

``World`` owns the sparse ``Position → Case`` map for one loaded level
plus the things that change it over time: the player, the enemy roster
and the enemy scheduler.  Positions missing from the map are outside
the level.

Cases are never edited in place.  Every change goes through
``replace_case`` which swaps in the new value and marks the tile dirty
for the renderer (``take_dirty``).

    world = load_world("maps/demo.map")
    world.move_entity(world.player, Direction.RIGHT)
    world.interact(world.player)
    world.tick()
"""

from __future__ import annotations
import random
import time
from typing import Callable, Iterator

from components.case import ActionType, Case, CellView, MissingOccupantError
from components.characters import (
    Character, Enemy, Player, create_character, display_name, inventory_of,
    is_character_skin,
)
from components.dev_log import DevLog
from components.ground import empty_ground, make_environment
from components.items import create_item
from components.spatial import Direction, Position
from core.directives import Directive
from logic import actions, movement
from logic.enemies import EnemyScheduler


class World:
    def __init__(self, width: int, height: int, *,
                 log: DevLog | None = None,
                 tuning: dict[str, dict] | None = None,
                 clock: Callable[[], float] = time.monotonic,
                 rng: random.Random | None = None):
        tuning = tuning or {}
        self.width = width
        self.height = height
        self.log = log
        self.clock = clock
        self.grid: dict[Position, Case] = {}
        self.dirty: set[Position] = set()
        self.player: Player | None = None
        self.enemies: list[Enemy] = []
        self._player_tuning = tuning.get("player", {})
        self._pizza_heal = int(tuning.get("items", {}).get("pizza_heal", 5))
        self.scheduler = EnemyScheduler(
            float(tuning.get("world", {}).get("enemy_interval", 1.0)),
            clock=clock, rng=rng,
        )

    # ── diagnostics ──────────────────────────────────────────────────

    def note(self, cat: str, msg: str, *, t: float | None = None,
             level: str = "info", **details) -> None:
        if self.log is None:
            return
        self.log.record(cat, msg, level=level,
                        t=self.clock() if t is None else t,
                        details=details or None)

    # ── building ─────────────────────────────────────────────────────

    def apply_directive(self, d: Directive) -> None:
        """Layer one directive onto the grid.

        Ground directives create the Case.  Entity directives resolve
        their skin as character, then ground, then item, and only ever
        *add* to an existing Case.
        """
        pos = d.position
        if not d.is_entity:
            self._place_ground(pos, d.skin)
            return

        if is_character_skin(d.skin):
            character = create_character(d.skin, d.fields, self._player_tuning)
            if character is not None:
                self._place_character(pos, character)
                return

        env = make_environment(d.skin)
        if env is not None:
            if pos in self.grid:
                self.note("validate", f"{d.skin} at {pos} ignored, "
                                      f"ground already set", level="warning")
            else:
                self.grid[pos] = Case(env)
            return

        item = create_item(d.skin, d.fields, pizza_heal=self._pizza_heal)
        if item is not None:
            case = self._case_or_ground(pos)
            if case.item is not None:
                self.note("validate", f"{d.skin} at {pos} ignored, "
                                      f"tile already holds an item", level="warning")
                return
            self.grid[pos] = case.with_item(item)
            return

        self.note("validate", f"unknown skin {d.skin!r} at {pos}",
                  level="warning")

    def _place_ground(self, pos: Position, skin: str):
        env = make_environment(skin)
        if env is None:
            self.note("validate", f"{skin} at {pos} is not ground, using VOID",
                      level="warning")
            env = empty_ground()
        if pos in self.grid:
            return
        self.grid[pos] = Case(env)

    def _case_or_ground(self, pos: Position) -> Case:
        case = self.grid.get(pos)
        return case if case is not None else Case(empty_ground())

    def _place_character(self, pos: Position, character: Character):
        case = self._case_or_ground(pos)
        if case.character is not None:
            self.note("validate", f"{character.skin} at {pos} ignored, "
                                  f"tile already occupied", level="warning")
            return
        self.grid[pos] = case.with_character(character)
        if isinstance(character, Player):
            self.player = character
        elif isinstance(character, Enemy):
            self.enemies.append(character)

    # ── access ───────────────────────────────────────────────────────

    def case_at(self, pos: Position) -> Case | None:
        return self.grid.get(pos)

    def cell_at(self, pos: Position) -> CellView | None:
        case = self.grid.get(pos)
        if case is None:
            return None
        is_player = self.player is not None and case.character is self.player
        return CellView.of(pos, case, is_player=is_player)

    def cases(self) -> Iterator[tuple[Position, Case]]:
        return iter(list(self.grid.items()))

    def positions(self) -> list[Position]:
        return sorted(self.grid, key=lambda p: (p.y, p.x))

    def __len__(self) -> int:
        return len(self.grid)

    # ── mutation ─────────────────────────────────────────────────────

    def replace_case(self, pos: Position, case: Case) -> None:
        if pos not in self.grid:
            raise KeyError(f"{pos} is outside the map")
        self.grid[pos] = case
        self.dirty.add(pos)

    def mark_dirty(self, *positions: Position) -> None:
        self.dirty.update(p for p in positions if p in self.grid)

    def take_dirty(self) -> set[Position]:
        dirty, self.dirty = self.dirty, set()
        return dirty

    def remove_character(self, pos: Position) -> Character:
        case = self.grid.get(pos)
        if case is None or case.character is None:
            raise MissingOccupantError(f"no character at {pos}")
        character = case.character
        self.replace_case(pos, case.with_character(None))
        if isinstance(character, Enemy) and character in self.enemies:
            self.enemies.remove(character)
        return character

    # ── turn operations ──────────────────────────────────────────────

    def move_entity(self, entity: Character, direction: Direction) -> bool:
        moved, dirty = movement.move(self.grid, entity, direction)
        self.dirty |= dirty
        if moved:
            self.note("move", f"{display_name(entity)} → {entity.position}")
        return moved

    def interact(self, entity: Character) -> ActionType | None:
        return actions.dispatch(self, entity)

    def equip(self, entity: Character, index: int) -> bool:
        """Move inventory slot *index* into the hand."""
        inv = inventory_of(entity)
        if inv is None or not inv.hold(index):
            return False
        self.note("action", f"{display_name(entity)} holds {inv.hand().name}")
        return True

    def tick(self) -> int:
        return self.scheduler.tick(self)

    def is_over(self) -> bool:
        return self.player is not None and self.player.health <= 0
