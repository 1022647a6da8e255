"""Key presses as pure ParameterState transitions.

Every handler takes the current state and returns a complete new one. Keys that
touch the canvas, the files on disk or the iteration history (save, load,
clear, random, video...) are session commands, see ``pipeline.Session``.
"""
from __future__ import annotations

import math
from typing import Callable, Dict

from fractagons import state as st
from fractagons.catalog import pre_transforms, variations
from fractagons.state import ParameterState
from fractagons.util.logging_setup import get_logger

ROOT2 = math.sqrt(2.0)
W_DELTA_FACTOR = 2.5
SHIFT_DIVISOR = 64

Handler = Callable[[ParameterState], ParameterState]


def _dec_mul(name: str) -> Handler:
    return lambda s: s.replace(**{name: getattr(s, name) / (1.0 + s.param_delta)})


def _inc_mul(name: str) -> Handler:
    return lambda s: s.replace(**{name: getattr(s, name) * (1.0 + s.param_delta)})


def _add(name: str, sign: float, factor: float = 1.0) -> Handler:
    return lambda s: s.replace(**{name: getattr(s, name) + sign * factor * s.param_delta})


def _negate(name: str) -> Handler:
    return lambda s: s.replace(**{name: -getattr(s, name)})


def _toggle(name: str) -> Handler:
    return lambda s: s.toggle(name)


def _exclusive(name: str, other: str) -> Handler:
    return lambda s: s.replace(**{name: not getattr(s, name), other: False})


def _view(axes: str, sign: int, width: int, height: int) -> Handler:
    """Scale or shift (per scale_not_shift) along the given axes."""
    def handler(s: ParameterState) -> ParameterState:
        changes = {}
        for axis in axes:
            if s.scale_not_shift:
                k = 1.0 + s.param_delta
                cur = getattr(s, f"{axis}_scale")
                changes[f"{axis}_scale"] = cur * k if sign > 0 else cur / k
            else:
                step = (width if axis == "x" else height) // SHIFT_DIVISOR
                changes[f"{axis}_shift"] = getattr(s, f"{axis}_shift") + sign * step
        return s.replace(**changes)
    return handler


def build_keymap(width: int = 768, height: int = 768) -> Dict[str, Handler]:
    keymap: Dict[str, Handler] = {
        "a": _add("a", -1), "A": _add("a", +1),
        "b": _add("b", -1), "B": _add("b", +1),
        "t": _dec_mul("t"), "T": _inc_mul("t"),
        "u": _dec_mul("u"), "U": _inc_mul("u"),
        "w": _add("w", -1, W_DELTA_FACTOR), "W": _add("w", +1, W_DELTA_FACTOR),

        "+": lambda s: s.replace(param_delta=s.param_delta * ROOT2),
        "-": lambda s: s.replace(param_delta=s.param_delta / ROOT2),
        "%": _toggle("scale_not_shift"),

        "x": _view("x", -1, width, height), "X": _view("x", +1, width, height),
        "y": _view("y", -1, width, height), "Y": _view("y", +1, width, height),
        "e": _view("xy", -1, width, height), "E": _view("xy", +1, width, height),

        "r": _toggle("reflect_lr"),
        "p": _toggle("reflect_ud"),
        "m": _toggle("mirror"),
        "O": _toggle("rotate_by_half_pi"),
        "o": _toggle("rotate_by_quarter_pi"),
        "*": _toggle("rotate_by_half_a_sector"),

        "c": _toggle("colour_by_speed"),
        "i": _toggle("invert_colours"),
        "h": lambda s: s.replace(hue_offset=s.hue_offset - 1),
        "H": lambda s: s.replace(hue_offset=s.hue_offset + 1),

        "<": lambda s: s.replace(size=max(0, s.size - 1)),
        ">": lambda s: s.replace(size=min(st.MAX_DOT_SIZE, s.size + 1)),

        "v": lambda s: s.replace(variation=variations.step_index(s.variation, -1)),
        "V": lambda s: s.replace(variation=variations.step_index(s.variation, +1)),
        "k": lambda s: s.replace(pre_trans_index=pre_transforms.step_index(s.pre_trans_index, -1)),
        "K": lambda s: s.replace(pre_trans_index=pre_transforms.step_index(s.pre_trans_index, +1)),
        "n": lambda s: s.replace(polygon_order=st.prev_polygon_order(s.polygon_order)),
        "N": lambda s: s.replace(polygon_order=st.next_polygon_order(s.polygon_order)),

        "=": _toggle("pre_transform"),
        "!": _toggle("reapply_vfunc"),
        "f": _toggle("apply_ballfold"),
        "?": _toggle("swap_xy"),
        "P": _toggle("treat_as_polar"),
        "$": _toggle("polarise_vfunc"),
        ".": _exclusive("root_pre_trans", "sq_pre_trans"),
        "/": _exclusive("sq_pre_trans", "root_pre_trans"),
        "#": _exclusive("sq_pre_trans_components", "root_pre_trans_components"),
        "'": _exclusive("root_pre_trans_components", "sq_pre_trans_components"),

        "D": st.default_params,
        "S": st.reset_view,
    }
    return keymap


ALT_KEYS: Dict[str, Handler] = {k: _negate(k) for k in "abtuw"}

_DEFAULT_KEYMAP = build_keymap()


def apply_key(params: ParameterState, key: str, *, alt: bool = False,
              width: int = 768, height: int = 768) -> ParameterState:
    if alt and key in ALT_KEYS:
        return ALT_KEYS[key](params)
    keymap = _DEFAULT_KEYMAP if (width, height) == (768, 768) else build_keymap(width, height)
    handler = keymap.get(key)
    if handler is None:
        get_logger().debug("No transition bound to key %r", key)
        return params
    return handler(params)


def is_bound(key: str) -> bool:
    return key in _DEFAULT_KEYMAP
