import numpy as np

from fractagons.catalog.variations import VARIATION_COUNT
from fractagons.random_state import create_random_state
from fractagons.state import ParameterState

BASE = ParameterState(polygon_order=7, size=3, hue_offset=5, colour_by_speed=True,
                      invert_colours=True, x_scale=2.0, x_shift=24, making_video_seq=True)


def test_symmetrical_draws_never_reapply(rng):
    for _ in range(1000):
        assert not create_random_state(BASE, rng, symmetrical=True).reapply_vfunc


def test_free_draws_sometimes_reapply(rng):
    hits = sum(create_random_state(BASE, rng).reapply_vfunc for _ in range(1000))
    assert 0 < hits < 1000
    assert 350 < hits < 650


def test_draws_respect_invariants_and_ranges(rng):
    seen = set()
    for _ in range(1000):
        s = create_random_state(BASE, rng)
        assert not (s.sq_pre_trans and s.root_pre_trans)
        assert not (s.sq_pre_trans_components and s.root_pre_trans_components)
        assert all(-2.0 <= v <= 2.0 for v in (s.t, s.u, s.w))
        seen.add(s.variation)
    assert seen == set(range(VARIATION_COUNT))


def test_view_reset_and_carried_fields(rng):
    s = create_random_state(BASE, rng)
    assert (s.x_scale, s.y_scale, s.x_shift, s.y_shift) == (1.0, 1.0, 0, 0)
    assert not s.making_video_seq
    assert (s.polygon_order, s.size, s.hue_offset) == (7, 3, 5)
    assert s.colour_by_speed and s.invert_colours


def test_same_seed_same_state():
    a = create_random_state(BASE, np.random.default_rng(7))
    b = create_random_state(BASE, np.random.default_rng(7))
    assert a == b
