import logging

log = logging.getLogger(__name__)

class AffineTransform:
    """
    Affine map of the plane given by six coefficients:
        x' = a*x + b*y + e
        y' = c*x + d*y + f
    The translation (e, f) is rescaled once to canvas scale by calibrate().
    """
    __slots__ = ("a", "b", "c", "d", "_e", "_f", "_calibrated", "_scale")

    def __init__(self, a: float, b: float, c: float, d: float, e: float, f: float):
        self.a = float(a); self.b = float(b)
        self.c = float(c); self.d = float(d)
        self._e = float(e); self._f = float(f)
        self._calibrated = False
        self._scale = None

    @property
    def e(self) -> float:
        return self._e

    @property
    def f(self) -> float:
        return self._f

    @property
    def calibrated(self) -> bool:
        return self._calibrated

    def calibrate(self, scale_x: float, scale_y: float) -> "AffineTransform":
        # only the first call rescales
        if self._calibrated:
            if (scale_x, scale_y) != self._scale:
                log.warning("transform %r already calibrated to %s, ignoring (%s, %s)",
                            self, self._scale, scale_x, scale_y)
            return self
        self._e *= scale_x
        self._f *= scale_y
        self._calibrated = True
        self._scale = (scale_x, scale_y)
        return self

    def apply(self, p):
        return type(p)(self.a * p.x + self.b * p.y + self._e,
                       self.c * p.x + self.d * p.y + self._f)

    @property
    def matrix(self):
        """2x3 form [[a, b, e], [c, d, f]]."""
        return [[self.a, self.b, self._e], [self.c, self.d, self._f]]

    @staticmethod
    def from_matrix(rows) -> "AffineTransform":
        (a, b, e), (c, d, f) = rows
        return AffineTransform(a, b, c, d, e, f)

    def coefficients(self):
        return (self.a, self.b, self.c, self.d, self._e, self._f)

    def __eq__(self, other):
        if not isinstance(other, AffineTransform):
            return NotImplemented
        return self.coefficients() == other.coefficients()

    __hash__ = None

    def __repr__(self):
        return "AffineTransform(a=%g, b=%g, c=%g, d=%g, e=%g, f=%g)" % self.coefficients()
