from __future__ import annotations

import numpy as np

from fractagons.catalog.pre_transforms import PRE_TRANS_COUNT
from fractagons.catalog.variations import VARIATION_COUNT
from fractagons.state import ParameterState

RANDOM_FLAGS = (
    "pre_transform",
    "treat_as_polar",
    "polarise_vfunc",
    "swap_xy",
    "apply_ballfold",
    "root_pre_trans",
    "sq_pre_trans",
    "root_pre_trans_components",
    "sq_pre_trans_components",
)


def _coin(rng: np.random.Generator) -> bool:
    return bool(rng.integers(2))


def create_random_state(state: ParameterState, rng: np.random.Generator, symmetrical: bool = False) -> ParameterState:
    """Pot-luck state: fresh variation, pre-transform, t/u/w and pipeline flags.

    Polygon order, dot size and colour settings carry over. With ``symmetrical``
    the variation is never reapplied, so the image keeps its n-fold symmetry.
    """
    drawn = {
        "variation": int(rng.integers(VARIATION_COUNT)),
        "pre_trans_index": int(rng.integers(PRE_TRANS_COUNT)),
        "x_scale": 1.0,
        "y_scale": 1.0,
        "x_shift": 0,
        "y_shift": 0,
        "making_video_seq": False,
        "t": float(rng.uniform(-2.0, 2.0)),
        "u": float(rng.uniform(-2.0, 2.0)),
        "w": float(rng.uniform(-2.0, 2.0)),
    }
    for name in RANDOM_FLAGS:
        drawn[name] = _coin(rng)
    drawn["reapply_vfunc"] = False if symmetrical else _coin(rng)

    if drawn["sq_pre_trans"]:
        drawn["root_pre_trans"] = False
    if drawn["sq_pre_trans_components"]:
        drawn["root_pre_trans_components"] = False
    return state.replace(**drawn)
