"""
Random Iterated Function System.

The orbit is seeded with a fixed point of one of the transforms (or a point
supplied by the caller) and then advanced by applying a randomly chosen,
probability weighted transform once per emitted point. The orbit lives in
window space; emissions are handed out in pixel space.
"""

import enum
import logging
import random
from typing import NamedTuple

from .coordinate_mapper import CoordinateMapper, PixelPoint, WindowBounds, WindowPoint
from .errors import ConfigurationError
from .fixed_point import DEFAULT_MAX_ROUNDS, FixedPointLocator
from .probability_table import ProbabilityTable

log = logging.getLogger(__name__)

HIGHLIGHT_COUNT = 10
COOLDOWN_MS = 500
DEFAULT_NUM_POINTS = 1000

class EmissionKind(str, enum.Enum):
    HIGHLIGHT = "highlight"   # seed region: larger marker, distinct color
    NORMAL = "normal"

class Emission(NamedTuple):
    point: PixelPoint
    kind: EmissionKind

class OrbitPhase(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"

class OrbitIterator:
    """
    Per-step state of one orbit. `sink`, when given, receives every emission
    through sink.emit(point, kind) in addition to the list iterate() returns.
    """
    def __init__(self, table: ProbabilityTable, mapper: CoordinateMapper, num_points: int,
                 start: WindowPoint, rng=None, sink=None):
        self.phase = OrbitPhase.IDLE
        if isinstance(num_points, bool) or not isinstance(num_points, int) or num_points <= 0:
            raise ConfigurationError(f"num_points must be a positive integer, got {num_points!r}")
        if not isinstance(start, WindowPoint):
            raise ConfigurationError(f"start must be a WindowPoint, got {type(start).__name__}")

        self.table = table
        self.mapper = mapper
        self.num_points = num_points
        self.rng = rng or random.Random()
        self.sink = sink

        self._current = start
        self._iterations = 0
        self._emitted = 0
        self.phase = OrbitPhase.RUNNING

    @property
    def current_point(self) -> WindowPoint:
        return self._current

    @property
    def iteration_count(self) -> int:
        return self._iterations

    @property
    def points_emitted(self) -> int:
        return self._emitted

    def calculate_cooldown(self) -> int:
        return COOLDOWN_MS

    def iterate(self):
        self._iterations += 1
        out = []
        for _ in range(self.num_points):
            kind = EmissionKind.HIGHLIGHT if self._emitted < HIGHLIGHT_COUNT else EmissionKind.NORMAL
            em = Emission(self.mapper.to_pixel(self._current), kind)
            if self.sink is not None:
                self.sink.emit(em.point, em.kind)
            out.append(em)
            self.step()
            self._emitted += 1
        return out

    def step(self) -> WindowPoint:
        t = self.table.sample(self.rng.random())
        self._current = t.apply(self._current)
        return self._current


def construct(transforms, window, dimensions, num_points: int = DEFAULT_NUM_POINTS, start=None,
              rng=None, sink=None, max_rounds=DEFAULT_MAX_ROUNDS) -> OrbitIterator:
    """
    Validate the configuration, calibrate the transforms to the canvas and
    seed a new orbit.

    transforms: a ProbabilityTable or [a, b, c, d, e, f, p] rows.
    window:     WindowBounds or a dict with a1, b1, a2, b2.
    dimensions: (width, height) of the canvas in pixels.
    start:      optional window point (WindowPoint or (x, y)); when omitted
                a fixed point is searched for.

    Raises ConfigurationError on bad input and SearchExhausted when the
    bounded search fails (max_rounds=None searches without a cap).
    """
    if isinstance(window, dict):
        window = WindowBounds.from_dict(window)
    elif not isinstance(window, WindowBounds):
        try:
            window = WindowBounds(*(float(v) for v in window))
        except (TypeError, ValueError):
            raise ConfigurationError(f"window must be (a1, b1, a2, b2), got {window!r}") from None
    try:
        width, height = dimensions
    except (TypeError, ValueError):
        raise ConfigurationError(f"dimensions must be (width, height), got {dimensions!r}") from None

    mapper = CoordinateMapper(window, width, height)
    table = transforms if isinstance(transforms, ProbabilityTable) else ProbabilityTable.from_rows(transforms)
    mapper.calibrate(table)

    rng = rng or random.Random()
    if start is None:
        locator = FixedPointLocator(table, mapper, rng=rng, max_rounds=max_rounds)
        start = locator.locate()
    elif not isinstance(start, WindowPoint):
        try:
            start = WindowPoint(float(start[0]), float(start[1]))
        except (TypeError, ValueError, IndexError, KeyError):
            raise ConfigurationError(f"start must be (x, y), got {start!r}") from None

    log.info("orbit seeded at %s with %d transforms on %dx%d", start, len(table), mapper.width, mapper.height)
    return OrbitIterator(table, mapper, num_points, start, rng=rng, sink=sink)
