"""components.items — Pick-up items: swords, keys, pizzas.

Items are frozen value objects.  ``ItemType`` names the variant and
``ITEM_FACTORIES`` maps each variant to the function that builds it
from an ``[element]`` block's fields.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Union


class ItemType(Enum):
    SWORD = "SWORD"
    KEY   = "KEY"
    PIZZA = "PIZZA"


@dataclass(frozen=True, slots=True)
class Sword:
    name: str
    damage: int = 0
    heal: int = 0

    @property
    def item_type(self) -> ItemType:
        return ItemType.SWORD


@dataclass(frozen=True, slots=True)
class Key:
    name: str
    damage: int = 0
    heal: int = 0

    @property
    def item_type(self) -> ItemType:
        return ItemType.KEY


@dataclass(frozen=True, slots=True)
class Pizza:
    """Healing item.  Consumed from the hand by the default interact."""
    name: str
    heal: int = 5
    damage: int = 0

    @property
    def item_type(self) -> ItemType:
        return ItemType.PIZZA


Item = Union[Sword, Key, Pizza]


def item_type(skin: str) -> ItemType | None:
    return ItemType.__members__.get(skin.strip().upper())


# ── Factories ────────────────────────────────────────────────────────

def _sword(fields: dict[str, str], pizza_heal: int) -> Item:
    return Sword(name=fields.get("name", "sword"),
                 damage=int(fields.get("damage", 0)))


def _key(fields: dict[str, str], pizza_heal: int) -> Item:
    return Key(name=fields.get("name", "key"))


def _pizza(fields: dict[str, str], pizza_heal: int) -> Item:
    # ``health`` is the heal amount; tuning covers blocks without one
    return Pizza(name=fields.get("name", "pizza"),
                 heal=int(fields.get("health", pizza_heal)))


ITEM_FACTORIES: dict[ItemType, Callable[[dict[str, str], int], Item]] = {
    ItemType.SWORD: _sword,
    ItemType.KEY:   _key,
    ItemType.PIZZA: _pizza,
}


def create_item(skin: str, fields: dict[str, str], *,
                pizza_heal: int = 5) -> Item | None:
    """Build the item for *skin*, or ``None`` when *skin* is not an item."""
    kind = item_type(skin)
    if kind is None:
        return None
    return ITEM_FACTORIES[kind](fields, pizza_heal)


# ── Inventory ────────────────────────────────────────────────────────

class Inventory:
    """Fixed number of slots; slot 0 is the hand.

    Empty slots hold ``None``.  Items go into the first free slot.
    """

    def __init__(self, size: int = 6):
        self.size = size
        self.slots: list[Item | None] = [None] * size

    def add(self, item: Item) -> bool:
        """Place *item* in the first free slot.  False when full."""
        for i, slot in enumerate(self.slots):
            if slot is None:
                self.slots[i] = item
                return True
        return False

    def hand(self) -> Item | None:
        return self.slots[0] if self.slots else None

    def get(self, index: int) -> Item | None:
        if 0 <= index < self.size:
            return self.slots[index]
        return None

    def remove(self, index: int) -> Item | None:
        """Empty slot *index* and return what was in it."""
        if not 0 <= index < self.size:
            return None
        item = self.slots[index]
        self.slots[index] = None
        return item

    def hold(self, index: int) -> bool:
        """Swap slot *index* into the hand.  False for empty/invalid slots."""
        if not 0 <= index < self.size or self.slots[index] is None:
            return False
        self.slots[0], self.slots[index] = self.slots[index], self.slots[0]
        return True

    def __repr__(self) -> str:
        names = [s.name if s is not None else "-" for s in self.slots]
        return f"Inventory({names})"
