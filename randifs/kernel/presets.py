"""
Named transform tables, as [a, b, c, d, e, f, p] rows on the unit window.
Translations are in window units; construct() rescales them to the canvas.
"""

from .coordinate_mapper import WindowBounds
from .errors import ConfigurationError

UNIT_WINDOW = WindowBounds(0.0, 1.0, 0.0, 1.0)

_THIRD = 1.0 / 3.0

PRESETS = {
    "sierpinski": [
        [0.5, 0.0, 0.0, 0.5, 0.0,  0.0, 1 / 3],
        [0.5, 0.0, 0.0, 0.5, 0.5,  0.0, 1 / 3],
        [0.5, 0.0, 0.0, 0.5, 0.25, 0.5, 1 / 3],
    ],
    "carpet": [
        [_THIRD, 0.0, 0.0, _THIRD, i * _THIRD, j * _THIRD, 0.125]
        for j in range(3) for i in range(3) if (i, j) != (1, 1)
    ],
    "vicsek": [
        [_THIRD, 0.0, 0.0, _THIRD, i * _THIRD, j * _THIRD, 0.2]
        for i, j in ((0, 0), (2, 0), (1, 1), (0, 2), (2, 2))
    ],
    # Barnsley fern scaled by 0.1 and shifted to x = 0.5
    "fern": [
        [0.0,    0.0,   0.0,  0.16, 0.5,   0.0,    0.01],
        [0.85,   0.04, -0.04, 0.85, 0.075, 0.18,   0.85],
        [0.20,  -0.26,  0.23, 0.22, 0.4,   0.045,  0.07],
        [-0.15,  0.28,  0.26, 0.24, 0.575, -0.086, 0.07],
    ],
}

def preset_names():
    return sorted(PRESETS)

def get_preset(name: str):
    try:
        rows = PRESETS[name]
    except KeyError:
        raise ConfigurationError(f"unknown preset {name!r}; known: {', '.join(preset_names())}") from None
    return [list(r) for r in rows]
