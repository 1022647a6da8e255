"""Variation functions, indexed.

The first block follows Scott Draves' flame variations (numbering kept in the
names for cross-reference); the rest are home-grown. In the Draves forms theta
is the argument of the swapped point (y, x), not of (x, y).

Indices are part of saved snapshots, so entries are only ever appended.
"""
from __future__ import annotations

from typing import Callable, List

import numpy as np

from fractagons.cplx import (
    PI, TWO_OVER_PI, ZERO, Point, arg, div, mod, mod2, mult, polar, real, sq, swap,
)

Variation = Callable[[Point], Point]


def _twice(x):
    return 2.0 * x


def _cube(x):
    return x * x * x


def vari0(z: Point) -> Point:
    """Linear; the identity."""
    return z


def vari1(z: Point) -> Point:
    """Sinusoidal, doubled."""
    x, y = z
    return (_twice(np.sin(x)), _twice(np.sin(y)))


def vari2(z: Point) -> Point:
    """Spherical. The origin maps to itself."""
    x, y = z
    if x == 0.0 and y == 0.0:
        return ZERO
    r2 = mod2(z)
    return (x / r2, y / r2)


def vari3(z: Point) -> Point:
    """Swirl."""
    x, y = z
    r2 = mod2(z)
    sr2 = np.sin(r2)
    cr2 = np.cos(r2)
    return (x * sr2 - y * cr2, x * cr2 + y * sr2)


def vari4(z: Point) -> Point:
    """Horseshoe."""
    return div(sq(z), real(mod(z)))


def vari5(z: Point) -> Point:
    """Polar."""
    r = mod(z)
    theta = arg(swap(z))
    return (theta / PI, r - 1.0)


def vari6(z: Point) -> Point:
    """Handkerchief."""
    r = mod(z)
    theta = arg(swap(z))
    return (r * np.sin(theta + r), r * np.cos(theta - r))


def vari7(z: Point) -> Point:
    """Heart."""
    r = mod(z)
    thr = r * arg(swap(z))
    return (r * np.sin(thr), -r * np.cos(thr))


def vari8(z: Point) -> Point:
    """Disc."""
    r = mod(z)
    thopi = arg(swap(z)) / PI
    pir = r * PI
    return (thopi * np.sin(pir), thopi * np.cos(pir))


def vari9(z: Point) -> Point:
    """Spiral."""
    r = mod(z)
    theta = arg(swap(z))
    return div((np.cos(theta) + np.sin(r), np.sin(theta) - np.cos(r)), real(r))


def vari10(z: Point) -> Point:
    """Hyperbolic."""
    r = mod(z)
    theta = arg(swap(z))
    return (np.sin(theta) / r, r * np.cos(theta))


def vari11(z: Point) -> Point:
    """Diamond."""
    r = mod(z)
    theta = arg(swap(z))
    return (np.sin(theta) * np.cos(r), np.cos(theta) * np.sin(r))


def vari12(z: Point) -> Point:
    """Ex."""
    r = mod(z)
    theta = arg(swap(z))
    p0c = _cube(np.sin(theta + r))
    p1c = _cube(np.cos(theta - r))
    return (r * (p0c + p1c), r * (p0c - p1c))


def vari16(z: Point) -> Point:
    """Fisheye (components swapped)."""
    x, y = z
    t = 0.5 * (mod(z) + 1.0)
    return (t * y, t * x)


def vari18(z: Point) -> Point:
    """Exponential."""
    x, y = z
    t = np.exp(x - 1.0)
    angle = PI * y
    return (t * np.cos(angle), t * np.sin(angle))


def vari19(z: Point) -> Point:
    """Power: modulus raised to sin(theta)."""
    theta = arg(swap(z))
    sin_theta = np.sin(theta)
    t = np.power(mod(z), sin_theta)
    return (t * np.cos(theta), t * sin_theta)


def vari27(z: Point) -> Point:
    """Eyefish."""
    x, y = z
    t = 0.5 * (mod(z) + 1.0)
    return (t * x, t * y)


def vari28(z: Point) -> Point:
    """Bubble."""
    x, y = z
    t = 1.0 + 4.0 / mod2(z)
    return (t * x, t * y)


def vari29(z: Point) -> Point:
    """Cylinder."""
    x, y = z
    return (np.sin(x), y)


def vari42(z: Point) -> Point:
    """Tangent."""
    x, y = z
    return (np.sin(x) / np.cos(y), np.tan(y))


def vari48(z: Point) -> Point:
    """Cross."""
    x, y = z
    t = x * x - y * y
    u = np.sqrt(1.0 / (t * t))
    return (u * x, u * y)


def duck(z: Point) -> Point:
    x, y = z
    return (np.sin(x) + np.cos(y), np.cos(x) - np.sin(y))


def minkowski(z: Point) -> Point:
    x, y = z
    c = np.cos(x)
    s = np.sin(y)
    return (_twice(x * c - y * s), _twice(x * s + y * c))


# Forms returning (radius, argument); they look best re-read through polar.

def d_fn(z: Point) -> Point:
    x, y = z
    return (PI * np.cos(x) * np.sin(y), arg(z))


def d_fn_polar(z: Point) -> Point:
    return polar(d_fn(z))


def ts390(z: Point) -> Point:
    x, y = z
    return (np.e * np.sqrt(np.abs(max(np.cos(x), np.cos(y)))), arg(z))


def ts323(z: Point) -> Point:
    x, y = z
    return polar((2.0 * np.sqrt(2.0) * np.sin(x) * np.cos(y), arg(z)))


def fg010(z: Point) -> Point:
    x, y = z
    return (_twice(np.sin(x) + np.cos(y)), arg(z))


def fg011(z: Point) -> Point:
    x, y = z
    return (4.0 * np.sin(x) * np.cos(y), arg(z))


def fg012(z: Point) -> Point:
    x, y = z
    return (_twice(np.cos(x) + np.sin(y)), arg(z))


def fg013(z: Point) -> Point:
    x, y = z
    return (4.0 * np.cos(x) * np.sin(y), arg(z))


def e_fn(z: Point) -> Point:
    x, y = z
    return (2.0 * np.sin(x) * np.cos(y), arg(z))


def e_fn_polar(z: Point) -> Point:
    return polar(e_fn(z))


def fg014(z: Point) -> Point:
    x, y = z
    return (4.0 * np.cos(np.sin(y)), 4.0 * np.sin(np.sin(x)))


def fg015(z: Point) -> Point:
    x, y = z
    return (x * y, x + y)


def fg016(z: Point) -> Point:
    x, y = z
    return (np.e * np.sqrt(np.abs(min(np.cos(x), np.cos(y)))), arg(z))


def fg017(z: Point) -> Point:
    x, y = z
    return (np.e * np.sqrt(np.abs(max(np.sin(x), np.sin(y)))), arg(z))


def fg018(z: Point) -> Point:
    x, y = z
    return (np.e * np.cbrt(np.abs(min(np.cos(x), np.cos(y)))), arg(z))


def fg019(z: Point) -> Point:
    x, y = z
    return (np.e * np.sqrt(np.abs(max(np.cos(x), np.cos(y)))),
            np.e * np.sqrt(np.abs(min(np.sin(x), np.sin(y)))))


def fg020(z: Point) -> Point:
    r = mod(z)
    theta = arg(z)
    return (r - np.sin(theta), r + np.cos(theta))


def fg021(z: Point) -> Point:
    r = mod(z)
    theta = arg(z)
    return mult((theta * np.cos(r), theta * np.sin(r)), real(TWO_OVER_PI))


def fg023(z: Point) -> Point:
    r = mod(z)
    theta = arg(z)
    return (_twice(np.cos(r * theta)), _twice(np.sin(r + theta)))


def fg024(z: Point) -> Point:
    x, y = z
    return (np.cos(x), y)


VARIATIONS: List[Variation] = [
    vari0, vari1, vari2, vari3, vari4, vari5, vari6, vari7, vari8, vari9,
    vari10, vari11, vari12, vari16, vari18, vari19, vari27, vari28, vari29, vari42,
    vari48, duck, minkowski, d_fn, d_fn_polar, ts390, ts323, fg010, fg011, fg012,
    fg013, e_fn, e_fn_polar, fg014, fg015, fg016, fg017, fg018, fg019, fg020,
    fg021, fg021, fg023, fg024,
]

VARIATION_COUNT = len(VARIATIONS)


def step_index(index: int, delta: int) -> int:
    return (index + delta) % VARIATION_COUNT


def polarised(vfunc: Variation) -> Variation:
    def wrapped(z: Point) -> Point:
        return polar(vfunc(z))
    wrapped.__name__ = f"polar_{vfunc.__name__}"
    return wrapped


def select(index: int, polarise: bool = False) -> Variation:
    vfunc = VARIATIONS[index]
    return polarised(vfunc) if polarise else vfunc
