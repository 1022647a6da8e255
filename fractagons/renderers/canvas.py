from __future__ import annotations

from typing import Iterable, Optional, Tuple

import numpy as np
from PIL import Image

from fractagons.iteration import IterationState
from fractagons.renderers import color
from fractagons.renderers.projection import Pixel, Viewport, mirror_pixel
from fractagons.state import ParameterState


def _disc_offsets(size: int) -> Tuple[Tuple[int, int], ...]:
    """Offsets of a filled disc `size` pixels across.

    Odd sizes centre on the pixel; even sizes centre on its top-left corner.
    """
    r = size / 2.0
    half = size // 2
    if size % 2:
        span = range(-half, half + 1)
        c = 0.0
    else:
        span = range(-half, half)
        c = 0.5
    return tuple(
        (dx, dy)
        for dy in span
        for dx in span
        if (dx + c) ** 2 + (dy + c) ** 2 <= r * r
    )


_DISCS = {size: _disc_offsets(size) for size in range(2, 9)}


class Canvas:
    """HSB pixel buffer, height x width x 3, background black."""

    def __init__(self, width: int, height: int):
        self.viewport = Viewport(width, height)
        self.width = width
        self.height = height
        self.buf = np.zeros((height, width, 3), dtype=np.float64)

    def clear(self) -> None:
        self.buf[...] = color.BACKGROUND

    def get_pixel(self, px: int, py: int) -> Tuple[float, float, float]:
        if not self.viewport.contains(px, py):
            return color.BACKGROUND
        return tuple(float(c) for c in self.buf[py, px])

    def set_pixel(self, px: int, py: int, col) -> None:
        if self.viewport.contains(px, py):
            self.buf[py, px] = col

    def draw_dot(self, pixel: Pixel, size: int, col) -> None:
        if size <= 0:
            return
        px, py = pixel
        if size == 1:
            self.set_pixel(px, py, col)
            return
        for dx, dy in _DISCS.get(size) or _disc_offsets(size):
            self.set_pixel(px + dx, py + dy, col)

    def draw_dots(self, pixels: Iterable[Pixel], size: int, col) -> None:
        pixels = list(pixels)
        if len(pixels) != 4:
            return
        for pixel in pixels:
            self.draw_dot(pixel, size, col)

    def paint(self, params: ParameterState, it: IterationState) -> Optional[Pixel]:
        """Project the current point, blend its colour in and draw it.

        Raises RenderFault when the point is not finite. Returns the target pixel,
        or None when nothing is drawn at dot size 0.
        """
        if params.size <= 0:
            # still validate the point so faults surface while drawing is paused
            self.viewport.project(params, it.x, it.y)
            return None
        pixel = self.viewport.project(params, it.x, it.y)
        source = color.hue_source(params, it.current, it.previous, it.curvature)
        hue = color.final_hue(source, params.hue_offset, params.invert_colours)
        col = color.blend(self.get_pixel(*pixel), color.hsb(hue))
        if params.mirror:
            self.draw_dots(mirror_pixel(pixel[0], pixel[1], self.width, self.height), params.size, col)
        else:
            self.draw_dot(pixel, params.size, col)
        return pixel

    def to_image(self) -> Image.Image:
        hsv = np.clip(np.rint(self.buf), 0, 255).astype(np.uint8)
        bands = [Image.fromarray(np.ascontiguousarray(hsv[..., i])) for i in range(3)]
        return Image.merge("HSV", bands).convert("RGB")

    def load_image(self, img: Image.Image) -> None:
        if img.size != (self.width, self.height):
            img = img.resize((self.width, self.height), Image.LANCZOS)
        self.buf[...] = np.asarray(img.convert("RGB").convert("HSV"), dtype=np.float64)
