"""logic/noise.py — Seedable 2D simplex noise.

Builds a shuffled 256-entry permutation (Fisher–Yates, driven by a
``random.Random`` seeded with *seed*), doubles it to 512 entries plus a
mod-12 copy for gradient lookup, and returns a closure that sums the
three simplex-corner contributions::

    noise = make_noise2d(1234)
    v = noise(x * 0.05, y * 0.05)     # -1.0 .. 1.0

Same seed → identical field.  Pure after construction.
"""

from __future__ import annotations
import math
import random
from typing import Callable

_F2 = 0.5 * (math.sqrt(3.0) - 1.0)
_G2 = (3.0 - math.sqrt(3.0)) / 6.0

# 12 gradient directions (x, y): the z component of the 3D set is unused
_GRAD3 = (
    (1, 1), (-1, 1), (1, -1), (-1, -1),
    (1, 0), (-1, 0), (1, 0), (-1, 0),
    (0, 1), (0, -1), (0, 1), (0, -1),
)


def make_perm(rng: random.Random) -> list[int]:
    p = list(range(256))
    for i in range(255, 0, -1):
        j = int(rng.random() * (i + 1))
        p[i], p[j] = p[j], p[i]
    return p * 2


def make_noise2d(seed: int | None = None) -> Callable[[float, float], float]:
    """Return a deterministic noise function for *seed*."""
    rng = random.Random(seed)
    perm = make_perm(rng)
    perm_mod12 = [v % 12 for v in perm]

    def _corner(t: float, gi: int, x: float, y: float) -> float:
        if t < 0:
            return 0.0
        t *= t
        gx, gy = _GRAD3[gi]
        return t * t * (gx * x + gy * y)

    def noise2d(x: float, y: float) -> float:
        # Skew input space to find the simplex cell
        s = (x + y) * _F2
        i = math.floor(x + s)
        j = math.floor(y + s)
        t = (i + j) * _G2
        x0 = x - (i - t)
        y0 = y - (j - t)

        # Which triangle of the cell?
        if x0 > y0:
            i1, j1 = 1, 0
        else:
            i1, j1 = 0, 1

        x1 = x0 - i1 + _G2
        y1 = y0 - j1 + _G2
        x2 = x0 - 1.0 + 2.0 * _G2
        y2 = y0 - 1.0 + 2.0 * _G2

        ii = i & 255
        jj = j & 255
        n0 = _corner(0.5 - x0 * x0 - y0 * y0,
                     perm_mod12[ii + perm[jj]], x0, y0)
        n1 = _corner(0.5 - x1 * x1 - y1 * y1,
                     perm_mod12[ii + i1 + perm[jj + j1]], x1, y1)
        n2 = _corner(0.5 - x2 * x2 - y2 * y2,
                     perm_mod12[ii + 1 + perm[jj + 1]], x2, y2)
        # Scale to roughly [-1, 1]
        return max(-1.0, min(1.0, 70.0 * (n0 + n1 + n2)))

    return noise2d
