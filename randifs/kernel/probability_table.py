import math
from bisect import bisect_right

from .affine_transform import AffineTransform
from .errors import ConfigurationError

PROB_TOLERANCE = 1e-6

class ProbabilityTable:
    """
    Ordered transforms with a cumulative probability array of length n+1.
    Transform i owns the half-open interval [cum[i], cum[i+1]).
    Read-only once built.
    """
    def __init__(self, pairs):
        pairs = list(pairs)
        if not pairs:
            raise ConfigurationError("probability table is empty")

        transforms, probs = [], []
        for i, (t, p) in enumerate(pairs):
            if not isinstance(t, AffineTransform):
                raise ConfigurationError(f"row {i}: expected AffineTransform, got {type(t).__name__}")
            try:
                p = float(p)
            except (TypeError, ValueError):
                raise ConfigurationError(f"row {i}: probability {p!r} is not a number") from None
            if not math.isfinite(p) or p < 0.0:
                raise ConfigurationError(f"row {i}: probability {p} must be finite and >= 0")
            transforms.append(t); probs.append(p)

        total = math.fsum(probs)
        if abs(total - 1.0) > PROB_TOLERANCE:
            raise ConfigurationError(f"probabilities sum to {total}, expected 1.0")

        cum = [0.0]
        for p in probs:
            cum.append(min(cum[-1] + p, 1.0))
        cum[-1] = 1.0

        self._transforms = tuple(transforms)
        self._probs = tuple(probs)
        self._cum = tuple(cum)

    @classmethod
    def from_rows(cls, rows) -> "ProbabilityTable":
        """Build from [a, b, c, d, e, f, p] rows."""
        pairs = []
        for i, row in enumerate(rows or []):
            try:
                a, b, c, d, e, f, p = row
                t = AffineTransform(a, b, c, d, e, f)
            except (TypeError, ValueError):
                raise ConfigurationError(f"row {i}: expected [a, b, c, d, e, f, p], got {row!r}") from None
            pairs.append((t, p))
        return cls(pairs)

    @property
    def transforms(self):
        return self._transforms

    @property
    def probabilities(self):
        return self._probs

    @property
    def cumulative(self):
        return self._cum

    def __len__(self):
        return len(self._transforms)

    def __iter__(self):
        return iter(zip(self._transforms, self._probs))

    def index_of(self, u: float) -> int:
        if u < 0.0:
            raise ValueError(f"sample value {u} is below 0")
        if u >= 1.0:
            return len(self._transforms) - 1
        # smallest i with cum[i] <= u < cum[i+1]
        return min(bisect_right(self._cum, u) - 1, len(self._transforms) - 1)

    def sample(self, u: float) -> AffineTransform:
        return self._transforms[self.index_of(u)]

    def to_rows(self):
        return [list(t.coefficients()) + [p] for t, p in self]
