"""test_world.py — Gameplay rules on a loaded World.

Deterministic scenarios on tiny hand-written maps: cell
classification, one-step movement and facing, the combat exchange,
every interact branch, inventory handling and the enemy scheduler
(fake clock, seeded RNG).

Run:  python test_world.py
"""
from __future__ import annotations
import sys, random, traceback

# ── Bootstrap ────────────────────────────────────────────────────────
from core.tuning import load as _load_tuning
_load_tuning()

from core.loader import load_world_from_text
from core.world import World
from components import (
    ActionType, Case, Direction, DevLog, Enemy, Inventory, Key, Pizza,
    Player, Position, Sword, empty_ground, make_environment,
)
from components.case import MissingOccupantError
from logic import actions
from logic.combat import resolve_exchange


# ── Test harness ─────────────────────────────────────────────────────

_passed = 0
_failed = 0

def ok(label: str):
    global _passed
    _passed += 1
    print(f"  [PASS] {label}")

def fail(label: str, detail: str = ""):
    global _failed
    _failed += 1
    msg = f"  [FAIL] {label}"
    if detail:
        msg += f": {detail}"
    print(msg)

def check(cond: bool, label: str, detail: str = ""):
    if cond:
        ok(label)
    else:
        fail(label, detail)
        raise AssertionError(f"{label} {detail}".strip())


# ── Scenario builders ────────────────────────────────────────────────

HEADER = 'encodings: WALL: W  GRASS: G  DOOR: D\n'

#   WWWWW
#   WG GW     player (1,1), gap at (2,1)
#   WGDGW     door   (2,2)
#   WWWWW
ROOM = HEADER + '''size: (5 x 4)
data: """
WWWWW
WG GW
WGDGW
WWWWW
"""
[element]
name: Hero
skin: BABA
player: true
position: (1,1)
health: 10
'''


def _room(extra: str = "", **kwargs) -> World:
    return load_world_from_text(ROOM + extra, **kwargs)


def _enemy_block(x: int, y: int, health: int, damage: int) -> str:
    return (f"[element]\nname: Grunt\nskin: MONSTER\nposition: ({x},{y})\n"
            f"health: {health}\ndamage: {damage}\n")


# ═══════════════════════════════════════════════════════════════════
#  1. Case classification
# ═══════════════════════════════════════════════════════════════════

def test_case_classification():
    print("\n=== 1: Case classification ===")
    grass = make_environment("grass")
    base = Case(grass)
    check(base.action_state is ActionType.NO_ACTION_AVAILABLE, "1a: bare ground")

    sword = Sword("blade", damage=3)
    with_sword = base.with_item(sword)
    check(with_sword.action_state is ActionType.CONTAINS_ITEM, "1b: item on ground")
    restored = with_sword.with_item(None)
    check(restored == base and restored.action_state is base.action_state,
          "1c: with_item(None) restores the original case")

    grunt = Enemy("grunt", "MONSTER", 5, Position(0, 0), damage=1)
    check(base.with_character(grunt).action_state is ActionType.CONTAINS_ENEMY,
          "1d: enemy on ground")
    check(base.with_character(grunt).with_item(sword).action_state
          is ActionType.CONTAINS_ITEM, "1e: item wins over enemy")

    door = Case(make_environment("DOOR")).with_item(sword)
    check(door.action_state is ActionType.CONTAINS_DOOR, "1f: door wins over item")
    check(not door.is_walkable() and not with_sword.is_walkable()
          and base.is_walkable(), "1g: walkable only when empty decoration")
    check(not Case(make_environment("water")).is_walkable(), "1h: biomes block")

    try:
        Case(None)
        fail("1i: Case without environment rejected")
        raise AssertionError("no error")
    except ValueError:
        ok("1i: Case without environment rejected")


# ═══════════════════════════════════════════════════════════════════
#  2. Movement + facing
# ═══════════════════════════════════════════════════════════════════

def test_movement():
    print("\n=== 2: Movement ===")
    world = _room()
    hero = world.player
    check(hero.facing == Position(1, 2), "2a: spawn facing is one step down")
    world.take_dirty()

    moved = world.move_entity(hero, Direction.RIGHT)
    check(moved and hero.position == Position(2, 1), "2b: step into open gap")
    check(world.case_at(Position(1, 1)).character is None, "2c: source emptied")
    dest = world.case_at(Position(2, 1)).character
    check(dest is hero and dest.position == Position(2, 1),
          "2d: destination holds the mover")
    check(hero.facing == Position(3, 1), "2e: facing is one step beyond")
    check({Position(1, 1), Position(2, 1)} <= world.take_dirty(),
          "2f: both tiles dirty")

    moved = world.move_entity(hero, Direction.DOWN)
    check(not moved and hero.position == Position(2, 1), "2g: door blocks the move")
    check(hero.facing == Position(2, 2), "2h: still turned to face the door")

    moved = world.move_entity(hero, Direction.UP)
    check(not moved and hero.facing == Position(2, 0), "2i: wall blocks, facing updates")
    check(world.cell_at(Position(2, 1)).is_player, "2j: CellView flags the player")


# ═══════════════════════════════════════════════════════════════════
#  3. Combat exchange
# ═══════════════════════════════════════════════════════════════════

def test_combat_exchange():
    print("\n=== 3: Combat exchange ===")
    def pair():
        p = Player("hero", "BABA", 10, Position(0, 0))
        e = Enemy("grunt", "MONSTER", 7, Position(1, 0), damage=3)
        return p, e

    p, e = pair()
    result = resolve_exchange(p, e)
    check((p.health, e.health) == (7, 5), "3a: h1-d2 and h2-d1",
          f"{p.health}, {e.health}")
    check(result.dealt == 2 and result.taken == 3 and result.in_range,
          "3b: exchange reports both hits")

    p, e = pair()
    resolve_exchange(e, p)
    check((p.health, e.health) == (7, 5), "3c: same outcome either order")

    p, e = pair()
    p.inventory.add(Sword("blade", damage=3))
    resolve_exchange(p, e)
    check(e.health == 2, "3d: hand sword adds its damage", str(e.health))

    p, e = pair()
    e.position = Position(2, 0)
    result = resolve_exchange(p, e)
    check((p.health, e.health) == (10, 7) and not result.in_range,
          "3e: out of range deals nothing")

    p, e = pair()
    e.health = 0
    resolve_exchange(p, e)
    check(p.health == 7, "3f: a downed fighter still lands its hit")


def test_interact_enemy():
    print("\n=== 4: Interact with an enemy ===")
    log = DevLog()
    world = _room(_enemy_block(3, 1, 8, 2), log=log)
    hero = world.player
    grunt = world.enemies[0]
    world.move_entity(hero, Direction.RIGHT)          # (2,1), facing (3,1)

    action = world.interact(hero)
    check(action is ActionType.CONTAINS_ENEMY, "4a: dispatched to combat")
    check((hero.health, grunt.health) == (8, 6), "4b: both took damage",
          f"{hero.health}, {grunt.health}")

    hero.inventory.add(Sword("blade", damage=3))
    world.interact(hero)                               # grunt 6 - 5 = 1
    world.interact(hero)                               # grunt dies
    check(grunt.health <= 0, "4c: grunt defeated")
    check(world.enemies == [] and world.case_at(Position(3, 1)).character is None,
          "4d: defeated enemy removed from roster and tile")
    check(hero.health == 4, "4e: hero took every counter-hit", str(hero.health))
    check(any("defeated" in e["msg"] for e in log.for_cat("combat")),
          "4f: defeat recorded under 'combat'")
    check(not world.is_over(), "4g: game goes on")

    hero.health = 0
    check(world.is_over(), "4h: is_over once the player is down")

    ally_block = "[element]\nname: Bob\nskin: BADBAD\nposition: (3,1)\n"
    world = _room(ally_block + _enemy_block(3, 2, 8, 2))
    bob = world.case_at(Position(3, 1)).character
    try:
        actions.fight(world, bob, Position(3, 2))      # Bob faces the grunt
        fail("4i: an ally cannot start a fight")
        raise AssertionError("no error")
    except TypeError:
        ok("4i: an ally cannot start a fight")
    check(world.enemies[0].health == 8, "4j: nobody was hurt")


# ═══════════════════════════════════════════════════════════════════
#  5. Doors, items, pizza
# ═══════════════════════════════════════════════════════════════════

def test_door():
    print("\n=== 5: Door ===")
    world = _room()
    hero = world.player
    world.move_entity(hero, Direction.RIGHT)
    world.move_entity(hero, Direction.DOWN)            # facing the door

    check(world.interact(hero) is ActionType.CONTAINS_DOOR, "5a: door dispatched")
    check(world.cell_at(Position(2, 2)).environment == "DOOR", "5b: no key, stays shut")

    key = Key("rusty")
    hero.inventory.add(key)
    world.interact(hero)
    cell = world.cell_at(Position(2, 2))
    check(cell.environment == "VOID" and cell.walkable, "5c: key opens the door")
    check(hero.inventory.hand() is key, "5d: key is kept")

    again = world.interact(hero)
    check(again is ActionType.NO_ACTION_AVAILABLE
          and world.cell_at(Position(2, 2)).environment == "VOID",
          "5e: second interact is a no-op")
    check(world.move_entity(hero, Direction.DOWN), "5f: can walk through")


def test_pickup():
    print("\n=== 6: Item pickup ===")
    sword_block = "[element]\nname: Blade\nskin: SWORD\nposition: (1,2)\ndamage: 3\n"
    world = _room(sword_block)
    hero = world.player
    check(world.interact(hero) is ActionType.CONTAINS_ITEM, "6a: item dispatched")
    held = hero.inventory.hand()
    check(isinstance(held, Sword) and held.damage == 3, "6b: sword in first free slot")
    check(world.case_at(Position(1, 2)).item is None, "6c: tile cleared")

    world = _room(sword_block)
    hero = world.player
    for i in range(hero.inventory.size):
        hero.inventory.add(Key(f"k{i}"))
    world.interact(hero)
    check(world.case_at(Position(1, 2)).item is not None, "6d: full inventory leaves it")

    world = _room()
    try:
        actions.take_item(world, world.player, Position(1, 2))
        fail("6e: empty tile raises MissingOccupantError")
        raise AssertionError("no error")
    except MissingOccupantError:
        ok("6e: empty tile raises MissingOccupantError")


def test_pizza():
    print("\n=== 7: Pizza ===")
    world = _room()
    hero = world.player
    hero.inventory.add(Pizza("slice", heal=5))
    action = world.interact(hero)                      # facing empty grass
    check(action is ActionType.NO_ACTION_AVAILABLE, "7a: default branch")
    check(hero.health == 15, "7b: healed by 5", str(hero.health))
    check(hero.inventory.hand() is None, "7c: slot 0 emptied")

    hero.inventory.add(Key("k"))
    hero.inventory.add(Pizza("slice", heal=5))
    world.interact(hero)
    check(hero.health == 15, "7d: pizza outside the hand is not eaten")

    slice_block = "[element]\nname: Slice\nskin: PIZZA\nposition: (1,2)\nhealth: 12\n"
    world = _room(slice_block)
    hero = world.player
    check(world.case_at(Position(1, 2)).item.heal == 12, "7e: block health is the heal")
    world.interact(hero)                               # pick it up
    world.interact(hero)                               # eat from the hand
    check(hero.health == 22, "7f: eating a map pizza heals by its health",
          str(hero.health))

    world = _room("[element]\nskin: PIZZA\nposition: (1,2)\n")
    check(world.case_at(Position(1, 2)).item.heal == 5,
          "7g: no health field falls back to items.pizza_heal")


def test_out_of_map_facing():
    print("\n=== 8: Facing outside the map ===")
    text = ('size: (2 x 1)\nencodings: GRASS: G\ndata: """\nGG\n"""\n'
            '[element]\nskin: FOFO\nplayer: true\nposition: (0,0)\nhealth: 3\n')
    world = load_world_from_text(text)
    check(world.interact(world.player) is None, "8a: interact is a no-op")
    check(not world.move_entity(world.player, Direction.DOWN), "8b: move off-map refused")


# ═══════════════════════════════════════════════════════════════════
#  9. Inventory
# ═══════════════════════════════════════════════════════════════════

def test_inventory():
    print("\n=== 9: Inventory ===")
    inv = Inventory(3)
    a, b, c, d = Key("a"), Key("b"), Key("c"), Key("d")
    check(inv.add(a) and inv.add(b) and inv.add(c), "9a: fills slots in order")
    check(not inv.add(d), "9b: full inventory refuses")
    check(inv.hold(2) and inv.hand() is c and inv.get(2) is a, "9c: hold swaps into hand")
    check(not inv.hold(5), "9d: out-of-range hold refused")
    check(inv.remove(1) is b and inv.get(1) is None, "9e: remove empties the slot")
    check(not inv.hold(1), "9f: empty slot hold refused")
    check(inv.add(d) and inv.get(1) is d, "9g: first free slot reused")

    world = _room()
    hero = world.player
    hero.inventory.add(Key("k"))
    hero.inventory.add(Sword("s", damage=1))
    check(world.equip(hero, 1) and isinstance(hero.inventory.hand(), Sword),
          "9h: World.equip puts the sword in hand")
    check(not world.equip(hero, 4), "9i: equip of an empty slot refused")


# ═══════════════════════════════════════════════════════════════════
#  10. Enemy scheduler
# ═══════════════════════════════════════════════════════════════════

def test_scheduler():
    print("\n=== 10: Enemy scheduler ===")
    text = ('size: (6 x 6)\nencodings: WALL: W  GRASS: G\ndata: """\n'
            'WWWWWW\nWGGGGW\nWGGGGW\nWGGGGW\nWGGGGW\nWWWWWW\n"""\n'
            + _enemy_block(1, 1, 5, 1) + _enemy_block(3, 3, 5, 1))
    now = [0.0]
    world = load_world_from_text(text, clock=lambda: now[0], rng=random.Random(11))
    before = {id(e): e.position for e in world.enemies}

    now[0] = 0.5
    check(world.tick() == 0, "10a: nothing before the interval")
    check(all(e.position == before[id(e)] for e in world.enemies),
          "10b: positions unchanged")

    now[0] = 1.0
    check(world.tick() == 2, "10c: both enemies stepped at the interval")
    check(all(e.position.manhattan(before[id(e)]) <= 1 for e in world.enemies),
          "10d: at most one step each")
    check(all(world.case_at(e.position).character is e for e in world.enemies),
          "10e: grid and enemy positions agree")

    now[0] = 1.5
    check(world.tick() == 0, "10f: interval restarts after a tick")

    boxed = ('size: (3 x 3)\nencodings: WALL: W  GRASS: G\ndata: """\n'
             'WWW\nWGW\nWWW\n"""\n' + _enemy_block(1, 1, 5, 1))
    now[0] = 0.0
    world = load_world_from_text(boxed, clock=lambda: now[0], rng=random.Random(2))
    now[0] = 2.0
    check(world.tick() == 1 and world.enemies[0].position == Position(1, 1),
          "10g: boxed-in enemy stays put")


def test_dirty_tracking():
    print("\n=== 11: Dirty tracking ===")
    world = _room()
    world.take_dirty()
    check(world.take_dirty() == set(), "11a: take_dirty clears")
    world.replace_case(Position(1, 2), Case(empty_ground()))
    check(world.take_dirty() == {Position(1, 2)}, "11b: replace_case marks dirty")
    try:
        world.replace_case(Position(9, 9), Case(empty_ground()))
        fail("11c: replacing outside the map raises")
        raise AssertionError("no error")
    except KeyError:
        ok("11c: replacing outside the map raises")


# ═══════════════════════════════════════════════════════════════════
#  MAIN
# ═══════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    sections = [
        ("Case classification", test_case_classification),
        ("Movement", test_movement),
        ("Combat exchange", test_combat_exchange),
        ("Interact enemy", test_interact_enemy),
        ("Door", test_door),
        ("Pickup", test_pickup),
        ("Pizza", test_pizza),
        ("Out-of-map facing", test_out_of_map_facing),
        ("Inventory", test_inventory),
        ("Scheduler", test_scheduler),
        ("Dirty tracking", test_dirty_tracking),
    ]

    for name, fn in sections:
        try:
            fn()
        except AssertionError:
            pass
        except Exception:
            _failed += 1
            print(f"\n  [CRASH] {name}: unhandled exception")
            traceback.print_exc()

    total = _passed + _failed
    print(f"\n{'=' * 60}")
    print(f"  World Tests: {_passed} passed, {_failed} failed  "
          f"(total {total})")
    print(f"{'=' * 60}")
    sys.exit(1 if _failed else 0)
