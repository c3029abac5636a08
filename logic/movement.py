"""logic/movement.py — One-step grid movement.

A move goes exactly one tile.  It succeeds only when the destination
exists and is walkable; either way the mover ends up *facing* the tile
one step beyond where it stands, so bumping into a door or a monster
still lets the next ``interact`` reach it.
"""

from __future__ import annotations

from components.case import Case, MissingOccupantError
from components.characters import Character
from components.spatial import Direction, Position


def move(grid: dict[Position, Case], entity: Character,
         direction: Direction) -> tuple[bool, set[Position]]:
    """Step *entity* in *direction* on *grid*.

    Returns ``(moved, dirty)`` where *dirty* holds every position whose
    rendering changed.  Blocked moves are not errors.
    """
    src = entity.position
    here = grid.get(src)
    if here is None or here.character is not entity:
        raise MissingOccupantError(f"{entity.skin} is not at {src}")

    dirty: set[Position] = set()
    dst = src.step(direction)
    target = grid.get(dst)
    moved = target is not None and target.is_walkable()
    if moved:
        grid[src] = here.with_character(None)
        grid[dst] = target.with_character(entity)
        entity.position = dst
        dirty.update((src, dst))

    facing = entity.position.step(direction)
    if facing != entity.facing:
        # Facing marker is drawn on the mover's own tile
        dirty.add(entity.position)
    entity.facing = facing
    return moved, dirty
