"""
Monte Carlo search for an approximate fixed point of one transform.

Each round picks a transform uniformly at random (any map's fixed point is
a valid seed for the orbit) and tries FIXED_PT_TRIES random canvas pixels,
returning the first window point p with |T(p) - p| <= POINT_TOLERANCE on
both axes. A failed round starts over with a new transform.

The number of rounds is capped by max_rounds, after which SearchExhausted
is raised. max_rounds=None keeps retrying forever; with a table that has no
fixed point anywhere on the canvas this never returns.
"""

import logging
import math
import random

from .errors import SearchExhausted

log = logging.getLogger(__name__)

POINT_TOLERANCE = 2
FIXED_PT_TRIES = 1000
DEFAULT_MAX_ROUNDS = 1000

class FixedPointLocator:
    def __init__(self, table, mapper, rng=None, tries: int = FIXED_PT_TRIES,
                 tolerance: float = POINT_TOLERANCE, max_rounds=DEFAULT_MAX_ROUNDS):
        self.table = table
        self.mapper = mapper
        self.rng = rng or random.Random()
        self.tries = int(tries)
        self.tolerance = float(tolerance)
        self.max_rounds = None if max_rounds is None else int(max_rounds)
        self.rounds = 0
        self.last_transform = None

    def random_transform(self):
        n = len(self.table)
        return self.table.transforms[min(math.floor(self.rng.random() * n), n - 1)]

    def is_fixed(self, t, p) -> bool:
        q = t.apply(p)
        return abs(q.x - p.x) <= self.tolerance and abs(q.y - p.y) <= self.tolerance

    def try_transform(self, t):
        for _ in range(self.tries):
            p = self.mapper.to_window(self.mapper.random_pixel(self.rng))
            if self.is_fixed(t, p):
                return p
        return None

    def locate(self):
        self.rounds = 0
        while self.max_rounds is None or self.rounds < self.max_rounds:
            t = self.random_transform()
            self.rounds += 1
            p = self.try_transform(t)
            if p is not None:
                self.last_transform = t
                log.debug("fixed point %s of %r found in round %d", p, t, self.rounds)
                return p
        log.warning("fixed point search gave up after %d rounds", self.rounds)
        raise SearchExhausted(self.rounds, self.tries)
