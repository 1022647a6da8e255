import pytest

from fractagons import state as st
from fractagons.state import ParameterState


def test_defaults_are_the_sierpinski_triangle():
    s = ParameterState()
    assert (s.polygon_order, s.variation, s.t, s.u, s.a, s.b) == (3, 0, 0.5, 0.5, 0.75, 0.0)
    assert not s.reapply_vfunc and not s.pre_transform


@pytest.mark.parametrize("changes", [
    {"polygon_order": 2},
    {"variation": 44},
    {"variation": -1},
    {"pre_trans_index": 21},
    {"size": 9},
    {"sq_pre_trans": True, "root_pre_trans": True},
    {"sq_pre_trans_components": True, "root_pre_trans_components": True},
])
def test_invariants_are_enforced(changes):
    with pytest.raises(ValueError):
        ParameterState(**changes)


def test_state_is_immutable():
    s = ParameterState()
    with pytest.raises(Exception):
        s.t = 1.0
    assert s.toggle("mirror").mirror and not s.mirror


def test_from_mapping_layers_over_base():
    base = ParameterState(polygon_order=5)
    s = ParameterState.from_mapping({"variation": 3, "swap-xy": "true", "bogus": 1}, base=base)
    assert (s.polygon_order, s.variation, s.swap_xy) == (5, 3, True)


def test_from_mapping_rejects_bad_values():
    with pytest.raises(ValueError):
        ParameterState.from_mapping({"mirror": 3})
    with pytest.raises(ValueError):
        ParameterState.from_mapping({"polygon_order": 3.5})


def test_reset_keeps_order_variation_and_pre_transform():
    s = ParameterState(polygon_order=7, variation=12, pre_trans_index=4, t=1.5, mirror=True, size=3)
    r = st.reset(s)
    assert (r.polygon_order, r.variation, r.pre_trans_index) == (7, 12, 4)
    assert r.t == 0.5 and not r.mirror and r.size == 1


def test_default_params_and_reset_view():
    s = ParameterState(t=1.0, u=2.0, w=3.0, a=4.0, b=5.0, x_scale=2.0, x_shift=24, mirror=True)
    d = st.default_params(s)
    assert (d.t, d.u, d.w, d.a, d.b) == (0.5, 0.5, 1.0, 0.75, 0.0)
    v = st.reset_view(s)
    assert (v.x_scale, v.x_shift, v.mirror) == (1.0, 0, False)


def test_polygon_order_steps():
    assert st.next_polygon_order(3) == 4
    assert st.next_polygon_order(63) == 64
    assert st.next_polygon_order(64) == 128
    assert st.prev_polygon_order(128) == 64
    assert st.prev_polygon_order(64) == 32
    assert st.prev_polygon_order(4) == 3
    assert st.prev_polygon_order(3) == 3
