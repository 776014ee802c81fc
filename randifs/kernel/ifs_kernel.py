import logging
import math
import random
import time
import uuid

from .errors import ConfigurationError
from .fixed_point import DEFAULT_MAX_ROUNDS
from .presets import UNIT_WINDOW, get_preset
from .random_ifs import DEFAULT_NUM_POINTS, construct

log = logging.getLogger(__name__)

MAX_SESSIONS = 256

def json_point(p):
    """Point as a JSON-safe dict; inf and nan become None."""
    return {k: (v if math.isfinite(v) else None) for k, v in zip("xy", p)}

class IFSKernel:
    """
    Registry of live orbit sessions keyed by id. Sessions share nothing;
    each one owns its own table, mapper and random source.
    """
    def __init__(self, max_rounds=DEFAULT_MAX_ROUNDS, max_sessions=MAX_SESSIONS):
        self.sessions = {}
        self.created = {}
        self.max_rounds = max_rounds
        self.max_sessions = max_sessions

    def create(self, transforms=None, window=None, width=None, height=None, preset=None,
               num_points=DEFAULT_NUM_POINTS, start=None, seed=None, sink=None, max_rounds=...) -> str:
        if preset is not None:
            transforms = get_preset(preset)
            if window is None:
                window = UNIT_WINDOW
        if seed is not None and (isinstance(seed, bool) or not isinstance(seed, (int, str))):
            raise ConfigurationError(f"seed must be an integer or a string, got {seed!r}")
        rng = random.Random(seed)
        orbit = construct(transforms, window, (width, height), num_points=num_points,
                          start=start, rng=rng, sink=sink,
                          max_rounds=self.max_rounds if max_rounds is ... else max_rounds)
        self.evict(self.max_sessions - 1)
        sid = str(uuid.uuid4())
        self.sessions[sid] = orbit
        self.created[sid] = time.time()
        log.info("session %s created (%d sessions live)", sid, len(self.sessions))
        return sid

    def evict(self, keep: int):
        """Drop the oldest sessions until at most `keep` remain."""
        for sid in sorted(self.created, key=self.created.get)[:max(len(self.sessions) - keep, 0)]:
            log.info("session %s evicted", sid)
            self.drop(sid)

    def get(self, sid: str):
        return self.sessions[sid]

    def iterate(self, sid: str):
        return self.sessions[sid].iterate()

    def drop(self, sid: str):
        del self.sessions[sid]
        self.created.pop(sid, None)

    def clear(self):
        self.sessions.clear()
        self.created.clear()

    def describe(self, sid: str) -> dict:
        o = self.sessions[sid]
        return {
            "id": sid,
            "t": self.created.get(sid),
            "phase": o.phase.value,
            "current_point": json_point(o.current_point),
            "pixel": json_point(o.mapper.to_pixel(o.current_point)),
            "iteration_count": o.iteration_count,
            "points_emitted": o.points_emitted,
            "num_points": o.num_points,
            "window": o.mapper.window.to_dict(),
            "width": o.mapper.width,
            "height": o.mapper.height,
            "transforms": [[v if math.isfinite(v) else None for v in row] for row in o.table.to_rows()],
            "cooldown_ms": o.calculate_cooldown(),
        }

    def snapshot(self):
        return {"sessions": [self.describe(sid) for sid in self.sessions]}
