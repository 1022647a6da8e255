# color.py
#
# Colours are HSB triples on a 0..255 scale; the canvas blends in that space.

import numpy as np

from fractagons import cplx
from fractagons.state import ParameterState

BACKGROUND = (0.0, 0.0, 0.0)

SPEED_MULT = 255.0 / np.sqrt(32.0)
CURVATURE_MULT = 21.0

# This band of hues comes out a murky green; it gets folded onto the top of the wheel.
_UGLY_BAND = (64.0, 85.0)


def hue_source(params: ParameterState, current: cplx.Point, previous: cplx.Point, curvature: float) -> float:
    if params.colour_by_speed:
        return float(cplx.sep(previous, current) * SPEED_MULT)
    return float(curvature * CURVATURE_MULT)


def final_hue(source: float, hue_offset: float = 0, invert: bool = False) -> float:
    hue = (source + hue_offset) % 256.0
    if invert:
        hue = (hue + 128.0) % 256.0
    if _UGLY_BAND[0] <= hue < _UGLY_BAND[1]:
        hue = 255.0 - hue
    return hue


def hsb(hue: float):
    return (hue, 255.0, 255.0)


def blend_weight(old) -> float:
    return 0.75 if tuple(old) == BACKGROUND else 0.5


def blend(old, new):
    """Lerp from the colour already on the pixel towards the new one."""
    old = np.asarray(old, dtype=np.float64)
    new = np.asarray(new, dtype=np.float64)
    w = blend_weight(old)
    return old + (new - old) * w
