"""logic/combat.py — Melee exchange between two fighters.

Both sides hit in the same call.  Damage for each side is worked out
before either is applied, so the result does not depend on who is the
attacker.  A fighter already at 0 HP still lands its blow.
"""

from __future__ import annotations
from dataclasses import dataclass

from components.characters import Enemy, Fighter, Player


@dataclass(frozen=True, slots=True)
class Exchange:
    """Outcome of one exchange.  ``dealt`` is attacker → defender."""
    dealt: int = 0
    taken: int = 0
    in_range: bool = False


def strike_damage(fighter: Fighter) -> int:
    """Base damage plus bonus."""
    if isinstance(fighter, Player):
        return fighter.base_damage + fighter.damage_bonus()
    if isinstance(fighter, Enemy):
        return fighter.damage + fighter.damage_bonus()
    raise TypeError(f"{type(fighter).__name__} cannot fight")


def resolve_exchange(attacker: Fighter, defender: Fighter) -> Exchange:
    if not attacker.position.is_adjacent(defender.position):
        return Exchange()
    dealt = strike_damage(attacker)
    taken = strike_damage(defender)
    defender.health -= dealt
    attacker.health -= taken
    return Exchange(dealt=dealt, taken=taken, in_range=True)


def is_defeated(fighter: Fighter) -> bool:
    return fighter.health <= 0
