"""logic/enemies.py — Wall-clock gated enemy wandering.

Once per ``interval`` seconds every enemy tries one step in a random
cardinal direction.  No pathing, no zone clamping, no combat: a blocked
step just leaves the enemy where it was (facing the new way).

The clock and RNG are injectable for tests::

    now = [0.0]
    sched = EnemyScheduler(1.0, clock=lambda: now[0], rng=random.Random(7))
    sched.tick(world)   # 0, interval not elapsed
    now[0] = 1.0
    sched.tick(world)   # number of enemies moved
"""

from __future__ import annotations
import random
import time
from typing import TYPE_CHECKING, Callable

from components.case import ActionType
from components.spatial import Direction

if TYPE_CHECKING:
    from core.world import World


class EnemyScheduler:
    def __init__(self, interval: float = 1.0,
                 clock: Callable[[], float] = time.monotonic,
                 rng: random.Random | None = None):
        self.interval = interval
        self.clock = clock
        self.rng = rng or random.Random()
        self._last = clock()

    def tick(self, world: World) -> int:
        """Move every enemy once if the interval elapsed.

        Returns how many enemies were asked to move.
        """
        now = self.clock()
        if now - self._last < self.interval:
            return 0
        self._last = now

        # Snapshot first so nobody moves twice in one tick
        movers = [
            case.character for _, case in world.cases()
            if case.action_state is ActionType.CONTAINS_ENEMY
        ]
        for enemy in movers:
            world.move_entity(enemy, Direction.random(self.rng))
        world.note("enemy", f"{len(movers)} enemies stepped", t=now)
        return len(movers)
