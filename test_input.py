"""test_input.py — Key decoding and the repeat filter.

Builds pygame events directly; no window is opened.

Run:  python test_input.py
"""
from __future__ import annotations
import sys, traceback

import pygame

from components import Direction
from logic.input_manager import (
    InputManager, InputContext, MOVE_INTENTS, CURSOR_INTENTS,
)


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


def _key(k: int) -> pygame.event.Event:
    return pygame.event.Event(pygame.KEYDOWN, key=k)


def test_gameplay_keys():
    print("\n=== 1: Gameplay bindings ===")
    mgr = InputManager(debounce_ms=200)
    t = 0
    for key, intent in [(pygame.K_UP, "move_up"), (pygame.K_s, "move_down"),
                        (pygame.K_a, "move_left"), (pygame.K_RIGHT, "move_right"),
                        (pygame.K_SPACE, "interact"), (pygame.K_i, "inventory"),
                        (pygame.K_F4, "tuning_reload"), (pygame.K_ESCAPE, "quit")]:
        t += 1000
        got = mgr.feed(_key(key), now_ms=t)
        check(got == intent, f"1a: key {key} → {intent}", repr(got))
    check(MOVE_INTENTS["move_left"] is Direction.LEFT, "1b: move intents map to directions")
    check(mgr.feed(pygame.event.Event(pygame.QUIT)) == "quit", "1c: window close quits")
    check(mgr.feed(pygame.event.Event(pygame.KEYUP, key=pygame.K_UP), now_ms=t) is None,
          "1d: key release ignored")


def test_debounce():
    print("\n=== 2: Repeat filter ===")
    mgr = InputManager(debounce_ms=200)
    up = _key(pygame.K_UP)
    check(mgr.feed(up, now_ms=1000) == "move_up", "2a: first press accepted")
    check(mgr.feed(up, now_ms=1150) is None, "2b: same key within 200 ms dropped")
    check(mgr.feed(up, now_ms=1250) == "move_up", "2c: same key after 200 ms accepted")
    check(mgr.feed(_key(pygame.K_LEFT), now_ms=1260) == "move_left",
          "2d: a different key is never filtered")
    check(mgr.feed(_key(pygame.K_F12), now_ms=1270) is None
          and mgr.last_key == pygame.K_LEFT, "2e: unbound key leaves state alone")

    other = InputManager(debounce_ms=200)
    check(other.feed(up, now_ms=1300) == "move_up", "2f: state is per instance")


def test_inventory_context():
    print("\n=== 3: Inventory bindings ===")
    mgr = InputManager(debounce_ms=0)
    check(mgr.toggle_inventory() is InputContext.INVENTORY, "3a: toggle opens")
    check(mgr.feed(_key(pygame.K_UP), now_ms=0) == "ui_up", "3b: arrows move the cursor")
    check(CURSOR_INTENTS["ui_up"] is Direction.UP, "3c: cursor intents map to directions")
    check(mgr.feed(_key(pygame.K_SPACE), now_ms=1) == "ui_equip", "3d: SPACE equips")
    check(mgr.feed(_key(pygame.K_i), now_ms=2) == "ui_close", "3e: I closes")
    check(mgr.toggle_inventory() is InputContext.GAMEPLAY, "3f: toggle closes")


if __name__ == "__main__":
    sections = [
        ("Gameplay bindings", test_gameplay_keys),
        ("Repeat filter", test_debounce),
        ("Inventory bindings", test_inventory_context),
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
    print(f"  Input Tests: {_passed} passed, {_failed} failed  "
          f"(total {total})")
    print(f"{'=' * 60}")
    sys.exit(1 if _failed else 0)
