from __future__ import annotations

from typing import List, Tuple

import numpy as np

from fractagons import cplx
from fractagons.errors import RenderFault
from fractagons.state import ParameterState

Pixel = Tuple[int, int]


class Viewport:
    """Maps the tetra-unit square [-2, 2) x [-2, 2) onto a width x height canvas.

    The origin sits in the middle of the canvas and y points down, as on screen.
    """

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError("width/height must be positive.")
        self.width = width
        self.height = height
        self.scale_factor = height / 4.0
        self.x_trans = (width - height) / 2.0

    def xy_to_display(self, x, y, x_scale: float = 1.0, y_scale: float = 1.0) -> Pixel:
        with np.errstate(all="ignore"):
            fx = (np.float64(x) * x_scale + 2.0) * self.scale_factor
            fy = (np.float64(y) * y_scale + 2.0) * self.scale_factor
        if not (np.isfinite(fx) and np.isfinite(fy)):
            raise RenderFault(f"non-finite point ({x}, {y})")
        return int(self.x_trans + round(fx)), int(round(fy))

    def display_to_xy(self, px, py, x_scale: float = 1.0, y_scale: float = 1.0) -> cplx.Point:
        x = ((px - self.x_trans) / self.scale_factor - 2.0) / x_scale
        y = (py / self.scale_factor - 2.0) / y_scale
        return x, y

    def project(self, params: ParameterState, x, y) -> Pixel:
        """Plane point to pixel with every display flag applied.

        Rotations go quarter turn, then pi/4, then half a sector; the shift is added
        after projection and the reflections come last.
        """
        if params.rotate_by_half_pi:
            x, y = -y, x
        if params.rotate_by_quarter_pi:
            x, y = cplx.rotate((x, y), cplx.QUARTER_PI)
        if params.rotate_by_half_a_sector:
            x, y = cplx.rotate((x, y), cplx.PI / params.polygon_order)
        px, py = self.xy_to_display(x, y, params.x_scale, params.y_scale)
        px += params.x_shift
        py += params.y_shift
        if params.reflect_lr:
            px = self.width - px - 1
        if params.reflect_ud:
            py = self.height - py - 1
        return px, py

    def contains(self, px: int, py: int) -> bool:
        return 0 <= px < self.width and 0 <= py < self.height


def mirror_pixel(i: int, j: int, width: int, height: int) -> List[Pixel]:
    """The four mirror images of the half-scale pixel, or none for odd coordinates."""
    if i % 2 or j % 2:
        return []
    p = i // 2
    q = j // 2
    r = width - p - 1
    s = height - q - 1
    return [(p, q), (r, q), (p, s), (r, s)]
