from __future__ import annotations

from typing import Callable, Dict

import numpy as np

from fractagons.cplx import (
    PI, Point, arg, mod, polar, recip, root, root_components_signed,
    sq, sq_components_signed, sqrt_copy_sign,
)

PRE_TRANS_COUNT = 21


def _sin2(x):
    s = np.sin(x)
    return s * s


def _cos2(x):
    c = np.cos(x)
    return c * c


def _root_sin(x):
    return sqrt_copy_sign(np.sin(x))


def _root_cos(x):
    return sqrt_copy_sign(np.cos(x))


def _doubled(fx, fy) -> Callable[[Point], Point]:
    def pre(z: Point) -> Point:
        x, y = z
        return (2.0 * fx(x), 2.0 * fy(y))
    return pre


def _mixed_root(z: Point) -> Point:
    x, y = z
    return (2.0 * np.sin(_root_cos(x)), 2.0 * np.cos(_root_sin(y)))


def _trig_sum_self(z: Point) -> Point:
    x, y = z
    return (np.cos(x) + np.sin(x), np.sin(y) - np.cos(y))


def _trig_sum_cross(z: Point) -> Point:
    x, y = z
    return (np.cos(x) + np.sin(y), np.sin(x) - np.cos(y))


def _recip_polar(z: Point) -> Point:
    return polar((1.0 / mod(z), arg(z)))


def _through(f) -> Callable[[Point], Point]:
    def pre(z: Point) -> Point:
        x, y = z
        return (PI * np.cos(f(x)), PI * np.sin(f(y)))
    return pre


def _log_abs(x):
    return np.log(np.abs(x))


def _log1p_abs(x):
    return np.log1p(np.abs(x))


PRE_TRANSFORMS: Dict[int, Callable[[Point], Point]] = {
    0: _doubled(np.cos, np.sin),
    1: _doubled(np.sin, np.cos),
    2: _doubled(np.cos, np.cos),
    3: _doubled(np.sin, np.sin),
    4: _doubled(_cos2, _sin2),
    5: _doubled(_sin2, _cos2),
    6: _doubled(_cos2, _cos2),
    7: _doubled(_sin2, _sin2),
    8: _doubled(_root_cos, _root_sin),
    9: _doubled(_root_sin, _root_cos),
    10: _doubled(_root_cos, _root_cos),
    11: _doubled(_root_sin, _root_sin),
    12: _mixed_root,
    13: _trig_sum_self,
    14: _trig_sum_cross,
    15: recip,
    16: _recip_polar,
    17: _through(np.exp),
    18: _through(np.expm1),
    19: _through(_log_abs),
    20: _through(_log1p_abs),
}


def step_index(index: int, delta: int) -> int:
    return (index + delta) % PRE_TRANS_COUNT


def pre_transform(z: Point, index: int) -> Point:
    return PRE_TRANSFORMS[index](z)


def apply(
    z: Point,
    index: int,
    *,
    sq_components: bool = False,
    root_components: bool = False,
    sq_whole: bool = False,
    root_whole: bool = False,
) -> Point:
    """Catalog lookup, then the per-component adjustment, then the whole-value one."""
    p = pre_transform(z, index)
    if sq_components:
        p = sq_components_signed(p)
    elif root_components:
        p = root_components_signed(p)
    if root_whole:
        p = root(p)
    elif sq_whole:
        p = sq(p)
    return p
