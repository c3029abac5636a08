"""components.case — One grid cell's full state.

A Case is a frozen value: environment (always present), an optional
character, an optional item.  ``action_state`` is derived from those
three on construction and tells ``interact`` what facing this cell
means.  Every change builds a new Case via the ``with_*`` helpers.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum

from components.characters import Character, is_enemy
from components.ground import Environment, GroundKind
from components.items import Item
from components.spatial import Position


class MissingOccupantError(LookupError):
    """A Case lacks the character/item its classification promised."""


class ActionType(Enum):
    CONTAINS_DOOR       = "door"
    CONTAINS_ITEM       = "item"
    CONTAINS_ENEMY      = "enemy"
    NO_ACTION_AVAILABLE = "none"


def classify(environment: Environment, character: Character | None,
             item: Item | None) -> ActionType:
    """First match wins: door, item, enemy, nothing."""
    if environment.is_door:
        return ActionType.CONTAINS_DOOR
    if item is not None:
        return ActionType.CONTAINS_ITEM
    if character is not None and is_enemy(character):
        return ActionType.CONTAINS_ENEMY
    return ActionType.NO_ACTION_AVAILABLE


@dataclass(frozen=True)
class Case:
    environment: Environment
    character: Character | None = None
    item: Item | None = None
    action_state: ActionType = field(init=False, compare=False)

    def __post_init__(self):
        if self.environment is None:
            raise ValueError("Case needs an environment")
        object.__setattr__(self, "action_state",
                           classify(self.environment, self.character, self.item))

    def with_character(self, character: Character | None) -> Case:
        return replace(self, character=character)

    def with_item(self, item: Item | None) -> Case:
        return replace(self, item=item)

    def with_environment(self, environment: Environment) -> Case:
        return replace(self, environment=environment)

    def is_walkable(self) -> bool:
        return (not self.environment.is_obstacle
                and self.character is None
                and self.item is None)


@dataclass(frozen=True, slots=True)
class CellView:
    """Read-only projection of a Case for renderers."""
    position: Position
    environment: str
    ground: GroundKind
    character: str | None
    item: str | None
    action_state: ActionType
    walkable: bool
    is_player: bool = False

    @classmethod
    def of(cls, position: Position, case: Case, *,
           is_player: bool = False) -> CellView:
        return cls(
            position=position,
            environment=case.environment.skin,
            ground=case.environment.kind,
            character=case.character.skin if case.character is not None else None,
            item=case.item.item_type.value if case.item is not None else None,
            action_state=case.action_state,
            walkable=case.is_walkable(),
            is_player=is_player,
        )
