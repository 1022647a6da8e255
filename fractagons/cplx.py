# cplx.py
#
# Points (x, y) doubling as 2D vectors and complex numbers x+iy.
# Everything goes through numpy float64 so inf/NaN propagate instead of raising;
# callers that care run under numpy.errstate(all="ignore").

import sys
from typing import Tuple

import numpy as np

Point = Tuple[float, float]

PI = np.pi
TWO_PI = 2.0 * np.pi
QUARTER_PI = 0.25 * np.pi
TWO_OVER_PI = 2.0 / np.pi

ZERO: Point = (0.0, 0.0)
ONE: Point = (1.0, 0.0)
I: Point = (0.0, 1.0)

# Returned instead of a non-finite value whenever a denominator has zero modulus.
SENTINEL: Point = (sys.float_info.max, sys.float_info.max)


def point(x, y) -> Point:
    return (np.float64(x), np.float64(y))


def real(x) -> Point:
    return (np.float64(x), np.float64(0.0))


def add(z: Point, w: Point) -> Point:
    return (z[0] + w[0], z[1] + w[1])


def sub(z: Point, w: Point) -> Point:
    return (z[0] - w[0], z[1] - w[1])


def mult(z: Point, w: Point) -> Point:
    x, y = z
    u, v = w
    return (x * u - y * v, x * v + y * u)


def mod(z: Point):
    return np.hypot(z[0], z[1])


def mod2(z: Point):
    x, y = z
    return x * x + y * y


def arg(z: Point):
    """Argument of x+iy, i.e. atan2(y, x)."""
    return np.arctan2(z[1], z[0])


def conj(z: Point) -> Point:
    return (z[0], -z[1])


def swap(z: Point) -> Point:
    return (z[1], z[0])


def neg(z: Point) -> Point:
    return (-z[0], -z[1])


def neg_real(z: Point) -> Point:
    return (-z[0], z[1])


def neg_imag(z: Point) -> Point:
    return (z[0], -z[1])


def recip(z: Point) -> Point:
    x, y = z
    denom = x * x + y * y
    if denom == 0.0:
        return SENTINEL
    return (x / denom, -y / denom)


def div(z: Point, w: Point) -> Point:
    if mod2(w) == 0.0:
        return SENTINEL
    return mult(z, recip(w))


def sq(z: Point) -> Point:
    x, y = z
    return (x * x - y * y, 2.0 * x * y)


def root(z: Point) -> Point:
    """Principal square root via the modulus and half the argument."""
    rr = np.sqrt(mod(z))
    half_theta = 0.5 * arg(z)
    return (rr * np.cos(half_theta), rr * np.sin(half_theta))


def sqrt_copy_sign(x):
    return np.copysign(np.sqrt(np.abs(x)), x)


def sq_components_signed(z: Point) -> Point:
    """Square each component, keeping its sign so the quadrant is preserved."""
    x, y = z
    return (np.copysign(x * x, x), np.copysign(y * y, y))


def root_components_signed(z: Point) -> Point:
    return (sqrt_copy_sign(z[0]), sqrt_copy_sign(z[1]))


def polar(z: Point) -> Point:
    """Read (r, theta) and return the Cartesian point."""
    r, theta = z
    return (r * np.cos(theta), r * np.sin(theta))


def uvec(theta) -> Point:
    return (np.cos(theta), np.sin(theta))


def rotate(z: Point, psi) -> Point:
    return mult(z, uvec(psi))


def scale(z: Point, k) -> Point:
    return (z[0] * k, z[1] * k)


def dot(z: Point, w: Point):
    return z[0] * w[0] + z[1] * w[1]


def sep(z: Point, w: Point):
    """Distance between two points."""
    return np.hypot(z[0] - w[0], z[1] - w[1])


def is_finite(z: Point) -> bool:
    return bool(np.isfinite(z[0]) and np.isfinite(z[1]))
