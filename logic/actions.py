"""logic/actions.py — What ``interact`` does with the tile an actor faces.

The faced Case's ``action_state`` picks exactly one handler from
``HANDLERS``.  Handlers take the World, the actor and the faced
position, and write changes back through ``world.replace_case`` so
dirty tracking stays in one place.

    CONTAINS_ITEM        pick the item up (first free slot)
    CONTAINS_ENEMY       one combat exchange; defeated enemies vanish
    CONTAINS_DOOR        open it if a KEY is in the hand
    NO_ACTION_AVAILABLE  eat the PIZZA in the hand, if any
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Callable

from components.case import ActionType, MissingOccupantError
from components.characters import Character, as_fighter, display_name, inventory_of
from components.ground import empty_ground
from components.items import Item, ItemType
from components.spatial import Position
from logic.combat import is_defeated, resolve_exchange

if TYPE_CHECKING:
    from core.world import World


def _hand(actor: Character) -> Item | None:
    inv = inventory_of(actor)
    return inv.hand() if inv is not None else None


def take_item(world: World, actor: Character, pos: Position) -> None:
    case = world.case_at(pos)
    if case.item is None:
        raise MissingOccupantError(f"no item at {pos}")
    inv = inventory_of(actor)
    if inv is None or not inv.add(case.item):
        world.note("action", f"{display_name(actor)} cannot carry {case.item.name}")
        return
    world.replace_case(pos, case.with_item(None))
    world.note("action", f"{display_name(actor)} picked up {case.item.name}",
               pos=str(pos))


def fight(world: World, actor: Character, pos: Position) -> None:
    case = world.case_at(pos)
    if case.character is None:
        raise MissingOccupantError(f"no enemy at {pos}")
    attacker = as_fighter(actor)
    defender = as_fighter(case.character)
    if attacker is None or defender is None:
        raise TypeError(
            f"{display_name(actor)} cannot fight {display_name(case.character)}")

    result = resolve_exchange(attacker, defender)
    world.note("combat",
               f"{display_name(attacker)} hits {display_name(defender)} for "
               f"{result.dealt}, takes {result.taken}",
               dealt=result.dealt, taken=result.taken, in_range=result.in_range)
    world.mark_dirty(attacker.position, pos)
    if is_defeated(defender):
        world.remove_character(pos)
        world.note("combat", f"{display_name(defender)} defeated", pos=str(pos))


def open_door(world: World, actor: Character, pos: Position) -> None:
    held = _hand(actor)
    if held is None or held.item_type is not ItemType.KEY:
        return
    case = world.case_at(pos)
    world.replace_case(pos, case.with_environment(empty_ground()))
    world.note("action", f"{display_name(actor)} opened the door at {pos}")


def eat_from_hand(world: World, actor: Character, pos: Position) -> None:
    held = _hand(actor)
    if held is None or held.item_type is not ItemType.PIZZA:
        return
    inventory_of(actor).remove(0)
    actor.heal(held.heal)
    world.mark_dirty(actor.position)
    world.note("action", f"{display_name(actor)} ate {held.name}, "
                         f"health {actor.health}")


HANDLERS: dict[ActionType, Callable[[World, Character, Position], None]] = {
    ActionType.CONTAINS_ITEM:       take_item,
    ActionType.CONTAINS_ENEMY:      fight,
    ActionType.CONTAINS_DOOR:       open_door,
    ActionType.NO_ACTION_AVAILABLE: eat_from_hand,
}


def dispatch(world: World, actor: Character) -> ActionType | None:
    """Run the handler for the tile *actor* faces.

    Returns the action that ran, or ``None`` when the actor faces
    outside the map.
    """
    pos = actor.facing
    case = world.case_at(pos)
    if case is None:
        return None
    action = case.action_state
    HANDLERS[action](world, actor, pos)
    return action
