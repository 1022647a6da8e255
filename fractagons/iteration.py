from __future__ import annotations

import math
from dataclasses import dataclass, replace

import numpy as np

from fractagons import cplx
from fractagons.affine import ball_fold, polygon_step
from fractagons.catalog import pre_transforms, variations
from fractagons.state import ParameterState

FRAME_INTERVAL_FACTOR = 20


@dataclass(frozen=True)
class IterationState:
    x: float = 0.0
    y: float = 0.0
    x0: float = 0.0
    y0: float = 0.0
    curvature: float = 1.0
    level: int = 0
    frame_num: int = 0

    @property
    def current(self) -> cplx.Point:
        return (self.x, self.y)

    @property
    def previous(self) -> cplx.Point:
        return (self.x0, self.y0)

    def with_frame_saved(self) -> "IterationState":
        return replace(self, frame_num=self.frame_num + 1)


def seeded(x: float, y: float) -> IterationState:
    return IterationState(x=x, y=y)


def _prepare(params: ParameterState, z: cplx.Point) -> cplx.Point:
    if params.pre_transform:
        p = pre_transforms.apply(
            z,
            params.pre_trans_index,
            sq_components=params.sq_pre_trans_components,
            root_components=params.root_pre_trans_components,
            sq_whole=params.sq_pre_trans,
            root_whole=params.root_pre_trans,
        )
    else:
        p = z
    if params.swap_xy:
        p = cplx.swap(p)
    if params.treat_as_polar:
        p = cplx.polar(p)
    if params.apply_ballfold:
        p = ball_fold(p, params.a, params.b)
    return p


def curvature(new: cplx.Point, current: cplx.Point, previous: cplx.Point):
    """Turning angle between the last two displacements, offset by 2*pi."""
    return cplx.TWO_PI + (cplx.arg(cplx.sub(new, current)) - cplx.arg(cplx.sub(current, previous)))


def advance(params: ParameterState, it: IterationState, rng: np.random.Generator) -> IterationState:
    """One chaos-game step. Never raises; bad arithmetic shows up as inf/NaN."""
    spoke = int(rng.integers(params.polygon_order))
    vfunc = variations.select(params.variation, params.polarise_vfunc)
    z = cplx.point(it.x, it.y)
    with np.errstate(all="ignore"):
        p = _prepare(params, z)
        z_new = polygon_step(p, params.t, params.u, params.a, params.b,
                             params.polygon_order, spoke, vfunc)
        if params.reapply_vfunc:
            z_new = vfunc(z_new)
        curv = 0.0 if params.colour_by_speed else curvature(z_new, z, it.previous)
    return replace(
        it,
        x0=it.x,
        y0=it.y,
        x=float(z_new[0]),
        y=float(z_new[1]),
        curvature=float(curv),
        level=it.level + 1,
    )


def frame_due(params: ParameterState, level: int) -> bool:
    """Video frames get sparser as the image fills in: every floor(20 ln level) steps."""
    if not params.making_video_seq or params.size <= 0 or level < 2:
        return False
    interval = int(FRAME_INTERVAL_FACTOR * math.log(level))
    return interval >= 1 and level % interval == 0
