"""
Window space <-> pixel space.

Window space is the mathematical domain the transforms act on; pixel space
is the integral canvas grid. The two point types are distinct classes so a
point can only cross between spaces through CoordinateMapper.
"""

import logging
import math
from typing import NamedTuple

from .errors import ConfigurationError

log = logging.getLogger(__name__)

def _floor_px(v):
    # non-finite coordinates pass through unfloored
    if not math.isfinite(v):
        return v
    # snap values a few ULPs off an integer back onto it
    r = round(v)
    if math.isclose(v, r, rel_tol=1e-9, abs_tol=1e-9):
        return int(r)
    return math.floor(v)

class WindowPoint(NamedTuple):
    x: float
    y: float

class PixelPoint(NamedTuple):
    x: float
    y: float

class WindowBounds(NamedTuple):
    a1: float   # min x
    b1: float   # max x
    a2: float   # min y
    b2: float   # max y

    @classmethod
    def from_dict(cls, d: dict) -> "WindowBounds":
        try:
            return cls(*(float(d[k]) for k in ("a1", "b1", "a2", "b2")))
        except KeyError as e:
            raise ConfigurationError(f"window is missing {e.args[0]!r}") from None
        except (TypeError, ValueError):
            raise ConfigurationError(f"window bounds must be numbers, got {d!r}") from None

    def to_dict(self) -> dict:
        return self._asdict()

class CoordinateMapper:
    def __init__(self, window: WindowBounds, width: int, height: int):
        a1, b1, a2, b2 = window
        if not all(math.isfinite(v) for v in window):
            raise ConfigurationError(f"window bounds must be finite: {window}")
        if not (b1 > a1 and b2 > a2):
            raise ConfigurationError(f"degenerate window: {window}")
        for name, v in (("width", width), ("height", height)):
            if (isinstance(v, bool) or not isinstance(v, (int, float))
                    or not math.isfinite(v) or v != int(v) or v <= 0):
                raise ConfigurationError(f"canvas {name} must be a positive integer, got {v!r}")

        self.window = WindowBounds(a1, b1, a2, b2)
        self.width = int(width)
        self.height = int(height)
        self._sx = b1 - a1
        self._sy = b2 - a2

        # pixel coordinates of the window origin
        self.x0 = (-a1 / self._sx) * self.width
        self.y0 = (-a2 / self._sy) * self.height

    def to_window(self, p: PixelPoint) -> WindowPoint:
        return WindowPoint((p.x - self.x0) * self._sx, (p.y - self.y0) * self._sy)

    def to_pixel(self, q: WindowPoint) -> PixelPoint:
        return PixelPoint(_floor_px(q.x / self._sx + self.x0),
                          _floor_px(q.y / self._sy + self.y0))

    def contains(self, p: PixelPoint) -> bool:
        return 0 <= p.x < self.width and 0 <= p.y < self.height

    def random_pixel(self, rng) -> PixelPoint:
        return PixelPoint(math.floor(rng.random() * self.width),
                          math.floor(rng.random() * self.height))

    def calibrate(self, table):
        """Rescale each transform's translation to canvas scale."""
        for t in table.transforms:
            t.calibrate(self.width, self.height)
        log.debug("calibrated %d transforms to %dx%d", len(table), self.width, self.height)
        return table
