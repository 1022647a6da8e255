import math

import numpy as np
import pytest
from PIL import Image

from fractagons.errors import RenderFault
from fractagons.iteration import IterationState
from fractagons.renderers import color
from fractagons.renderers.canvas import Canvas
from fractagons.renderers.projection import Viewport, mirror_pixel
from fractagons.state import ParameterState


@pytest.mark.parametrize("point", [(0.3, -1.2), (1.7, 1.9), (-2.0, -2.0), (0.0, 0.0)])
def test_forward_then_inverse_within_a_pixel(point):
    vp = Viewport(768, 768)
    px, py = vp.xy_to_display(*point)
    x, y = vp.display_to_xy(px, py)
    assert abs(x - point[0]) <= 1.0 / vp.scale_factor
    assert abs(y - point[1]) <= 1.0 / vp.scale_factor


def test_centering_on_wide_canvas():
    vp = Viewport(1024, 768)
    assert vp.xy_to_display(0.0, 0.0) == (128 + 384, 384)


def test_non_finite_point_is_a_render_fault():
    vp = Viewport(64, 64)
    with pytest.raises(RenderFault):
        vp.xy_to_display(float("nan"), 0.0)
    with pytest.raises(RenderFault):
        vp.xy_to_display(1e308, 0.0, x_scale=10.0)


def test_display_flags():
    vp = Viewport(768, 768)
    assert vp.project(ParameterState(reflect_lr=True), 0.0, 0.0) == (383, 384)
    assert vp.project(ParameterState(reflect_ud=True), 0.0, 0.0) == (384, 383)
    assert vp.project(ParameterState(x_shift=12, y_shift=-12), 0.0, 0.0) == (396, 372)
    # quarter turn sends (1, 0) to (0, 1)
    assert vp.project(ParameterState(rotate_by_half_pi=True), 1.0, 0.0) == (384, 576)
    # quarter turn, then pi/4: (1, 0) -> (0, 1) -> (-r, r)
    px, py = vp.project(ParameterState(rotate_by_half_pi=True, rotate_by_quarter_pi=True), 1.0, 0.0)
    r = math.sqrt(0.5)
    assert (px, py) == (round((2 - r) * 192), round((2 + r) * 192))


def test_mirror_pixel():
    assert mirror_pixel(2, 4, 768, 768) == [(1, 2), (766, 2), (1, 765), (766, 765)]
    assert mirror_pixel(3, 4, 768, 768) == []
    assert mirror_pixel(2, 5, 768, 768) == []


def test_blend_law():
    first = color.blend(color.BACKGROUND, color.hsb(128.0))
    assert first[0] == pytest.approx(96.0)
    assert tuple(first) == pytest.approx((96.0, 191.25, 191.25))
    second = color.blend(first, color.hsb(128.0))
    assert tuple(second) == tuple(0.5 * first + 0.5 * np.array(color.hsb(128.0)))
    assert second[0] == 112.0


def test_final_hue():
    assert color.final_hue(70.0) == 185.0
    assert color.final_hue(64.0) == 191.0
    assert color.final_hue(85.0) == 85.0
    assert color.final_hue(10.0, invert=True) == 138.0
    assert color.final_hue(250.0, 10) == 4.0


def test_hue_sources():
    speed = ParameterState(colour_by_speed=True)
    assert color.hue_source(speed, (3.0, 4.0), (0.0, 0.0), 0.0) == pytest.approx(5.0 * color.SPEED_MULT)
    assert color.hue_source(ParameterState(), (0.0, 0.0), (0.0, 0.0), 2.0) == 42.0


def test_paint_single_pixel():
    canvas = Canvas(768, 768)
    pixel = canvas.paint(ParameterState(), IterationState())
    assert pixel == (384, 384)
    assert canvas.get_pixel(384, 384) == pytest.approx((15.75, 191.25, 191.25))
    assert np.count_nonzero(canvas.buf.any(axis=2)) == 1


def test_size_zero_draws_nothing():
    canvas = Canvas(64, 64)
    assert canvas.paint(ParameterState(size=0), IterationState()) is None
    assert not canvas.buf.any()


@pytest.mark.parametrize("size,count", [(2, 4), (3, 9), (4, 12)])
def test_disc_sizes(size, count):
    canvas = Canvas(64, 64)
    canvas.paint(ParameterState(size=size), IterationState())
    assert np.count_nonzero(canvas.buf.any(axis=2)) == count


@pytest.mark.parametrize("size", range(2, 9))
def test_disc_is_size_pixels_across(size):
    canvas = Canvas(64, 64)
    canvas.paint(ParameterState(size=size), IterationState())
    rows, cols = np.nonzero(canvas.buf.any(axis=2))
    assert cols.max() - cols.min() + 1 == size
    assert rows.max() - rows.min() + 1 == size


def test_mirrored_paint():
    canvas = Canvas(768, 768)
    canvas.paint(ParameterState(mirror=True), IterationState())
    lit = {(int(x), int(y)) for y, x in zip(*np.nonzero(canvas.buf.any(axis=2)))}
    assert lit == {(192, 192), (575, 192), (192, 575), (575, 575)}


def test_offscreen_points_are_dropped():
    canvas = Canvas(64, 64)
    canvas.paint(ParameterState(), IterationState(x=50.0, y=50.0))
    assert not canvas.buf.any()


def test_image_conversion_round_trip():
    canvas = Canvas(4, 4)
    canvas.buf[...] = (0.0, 255.0, 255.0)
    img = canvas.to_image()
    assert img.mode == "RGB"
    assert img.size == (4, 4)
    assert img.getpixel((0, 0)) == (255, 0, 0)

    other = Canvas(4, 4)
    other.load_image(Image.new("RGB", (8, 8), (255, 0, 0)))
    assert tuple(other.buf[0, 0]) == (0.0, 255.0, 255.0)
