from __future__ import annotations

import numpy as np

from fractagons.cplx import TWO_PI, Point, div, mod, real, rotate
from fractagons.catalog.variations import Variation


def ball_fold(z: Point, r, R) -> Point:
    """Invert inside |r|, fold by |z|^2 inside |R|, leave the rest alone."""
    zabs = mod(z)
    rabs = np.abs(r)
    Rabs = np.abs(R)
    if zabs < rabs:
        return div(z, real(rabs * rabs))
    if zabs < Rabs:
        return div(z, real(zabs * zabs))
    return z


def polygon_step(z: Point, t, u, a, b, n: int, spoke: int, vfunc: Variation) -> Point:
    """The n-gon affine step.

    Applies the variation, scales by (t, u), translates by (a, b) and rotates onto
    spoke ``spoke`` of ``n``. With t=u=0.5, a=0.75, b=0, n=3 and the identity
    variation this is the Sierpinski triangle chaos game.
    """
    x, y = vfunc(z)
    temp = (t * x + a, u * y + b)
    return rotate(temp, TWO_PI * spoke / n)
