"""components.characters — Player, enemies, and allies.

The character set is closed: ``Character = Player | Enemy | Ally``.
Only players and enemies can fight; ``as_fighter()`` is the single
capability check every combat/dispatch site goes through.

Characters are entities (compared by identity).  Their ``position``
and ``facing`` are immutable ``Position`` values that get *replaced*
when the character moves; the grid never shares a mutable
coordinate with them.
"""

from __future__ import annotations
import re
from dataclasses import dataclass, field
from typing import Callable, Union

from components.items import Inventory
from components.spatial import Direction, PatrolZone, Position


PLAYER_SKINS = frozenset({"BABA", "BADBAD", "FOFO", "IT"})
NPC_SKINS = frozenset({"MONSTER", "BADBAD"})
ENEMY_SKINS = frozenset({"MONSTER"})

_ZONE_RE = re.compile(r"\(\s*(\d+)\s*x\s*(\d+)\s*\)")
_POSITION_RE = re.compile(r"^\(\s*(-?\d+)\s*,\s*(-?\d+)\s*\)$")


def is_character_skin(skin: str) -> bool:
    key = skin.strip().upper()
    return key in PLAYER_SKINS or key in NPC_SKINS


def parse_position(text: str) -> Position:
    """``"(3,4)"`` → ``Position(3, 4)``.  Raises ValueError if malformed."""
    m = _POSITION_RE.match(text.strip())
    if not m:
        raise ValueError(f"bad position {text!r}, expected (x,y)")
    return Position(int(m.group(1)), int(m.group(2)))


def parse_zone(text: str) -> tuple[int, int]:
    """Extract ``(width, height)`` from a ``(W x H)`` tuple in *text*."""
    m = _ZONE_RE.search(text)
    if not m:
        raise ValueError(f"bad zone {text!r}, expected (W x H)")
    return int(m.group(1)), int(m.group(2))


def _initial_facing(pos: Position) -> Position:
    return pos.step(Direction.DOWN)


@dataclass(eq=False)
class Player:
    name: str
    skin: str
    health: int
    position: Position
    base_damage: int = 2
    inventory: Inventory = field(default_factory=Inventory)
    facing: Position | None = None

    def __post_init__(self):
        if self.facing is None:
            self.facing = _initial_facing(self.position)

    def damage_bonus(self) -> int:
        """Damage of whatever is in the hand."""
        held = self.inventory.hand()
        return held.damage if held is not None else 0

    def heal(self, amount: int):
        self.health += amount


@dataclass(eq=False)
class Enemy:
    name: str
    skin: str
    health: int
    position: Position
    damage: int = 0
    zone: PatrolZone | None = None
    behavior: str = ""
    facing: Position | None = None

    def __post_init__(self):
        if self.facing is None:
            self.facing = _initial_facing(self.position)
        if self.zone is None:
            self.zone = PatrolZone(origin=self.position)

    def damage_bonus(self) -> int:
        return 0


@dataclass(eq=False)
class Ally:
    """Friendly NPC.  Never fights, never wanders."""
    name: str
    skin: str
    position: Position
    facing: Position | None = None

    def __post_init__(self):
        if self.facing is None:
            self.facing = _initial_facing(self.position)


Character = Union[Player, Enemy, Ally]
Fighter = Union[Player, Enemy]


def as_fighter(character: Character) -> Fighter | None:
    if isinstance(character, (Player, Enemy)):
        return character
    if isinstance(character, Ally):
        return None
    raise TypeError(f"unknown character variant {type(character).__name__}")


def is_enemy(character: Character | None) -> bool:
    return isinstance(character, Enemy)


def inventory_of(character: Character) -> Inventory | None:
    if isinstance(character, Player):
        return character.inventory
    if isinstance(character, (Enemy, Ally)):
        return None
    raise TypeError(f"unknown character variant {type(character).__name__}")


def display_name(character: Character) -> str:
    return character.name or character.skin.lower()


# ── Factories ────────────────────────────────────────────────────────

def _player(skin: str, fields: dict[str, str], pos: Position,
            tuning: dict) -> Character:
    return Player(
        name=fields.get("name", skin.lower()),
        skin=skin,
        health=int(fields["health"]),
        position=pos,
        base_damage=int(tuning.get("base_damage", 2)),
        inventory=Inventory(int(tuning.get("inventory_slots", 6))),
    )


def _enemy(skin: str, fields: dict[str, str], pos: Position,
           tuning: dict) -> Character:
    zone = None
    if "zone" in fields:
        w, h = parse_zone(fields["zone"])
        zone = PatrolZone(origin=pos, width=w, height=h)
    return Enemy(
        name=fields.get("name", skin.lower()),
        skin=skin,
        health=int(fields["health"]),
        position=pos,
        damage=int(fields.get("damage", 0)),
        zone=zone,
        behavior=fields.get("behavior", ""),
    )


def _ally(skin: str, fields: dict[str, str], pos: Position,
          tuning: dict) -> Character:
    return Ally(name=fields.get("name", skin.lower()), skin=skin, position=pos)


CHARACTER_FACTORIES: dict[str, Callable[..., Character]] = {
    "player": _player,
    "enemy": _enemy,
    "ally": _ally,
}


def character_role(skin: str, fields: dict[str, str]) -> str | None:
    """Which factory a character block goes to, or ``None``."""
    key = skin.strip().upper()
    if fields.get("player", "").strip().lower() == "true":
        return "player" if key in PLAYER_SKINS else None
    if key in ENEMY_SKINS:
        return "enemy"
    if key in NPC_SKINS or key in PLAYER_SKINS:
        return "ally"
    return None


def create_character(skin: str, fields: dict[str, str],
                     tuning: dict | None = None) -> Character | None:
    """Build the character an ``[element]`` block describes.

    *tuning* carries the ``[player]`` section (base damage, slots).
    """
    role = character_role(skin, fields)
    if role is None:
        return None
    pos = parse_position(fields["position"])
    return CHARACTER_FACTORIES[role](skin.strip().upper(), fields, pos,
                                     tuning or {})
