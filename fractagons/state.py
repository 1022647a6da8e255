from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, Mapping

from fractagons.catalog.pre_transforms import PRE_TRANS_COUNT
from fractagons.catalog.variations import VARIATION_COUNT
from fractagons.util.logging_setup import get_logger

# Default affine parameters; the Sierpinski triangle for order 3.
T = 0.5
U = 0.5
W = 1.0
A = 0.75
B = 0.0

MAX_DOT_SIZE = 8
POLYGON_DOUBLING_ORDER = 64

_EXCLUSIVE_PAIRS = (
    ("sq_pre_trans", "root_pre_trans"),
    ("sq_pre_trans_components", "root_pre_trans_components"),
)


@dataclass(frozen=True)
class ParameterState:
    polygon_order: int = 3
    variation: int = 0
    pre_trans_index: int = 0

    t: float = T
    u: float = U
    w: float = W
    a: float = A
    b: float = B
    param_delta: float = 0.2

    x_scale: float = 1.0
    y_scale: float = 1.0
    x_shift: int = 0
    y_shift: int = 0
    scale_not_shift: bool = True
    size: int = 1
    hue_offset: int = 0

    pre_transform: bool = False
    swap_xy: bool = False
    treat_as_polar: bool = False
    polarise_vfunc: bool = False
    apply_ballfold: bool = False
    reapply_vfunc: bool = False
    sq_pre_trans: bool = False
    root_pre_trans: bool = False
    sq_pre_trans_components: bool = False
    root_pre_trans_components: bool = False

    mirror: bool = False
    reflect_lr: bool = False
    reflect_ud: bool = False
    rotate_by_half_pi: bool = False
    rotate_by_quarter_pi: bool = False
    rotate_by_half_a_sector: bool = False

    colour_by_speed: bool = False
    invert_colours: bool = False
    making_video_seq: bool = False

    def __post_init__(self) -> None:
        if self.polygon_order < 3:
            raise ValueError(f"polygon_order must be >= 3, got {self.polygon_order}")
        if not 0 <= self.variation < VARIATION_COUNT:
            raise ValueError(f"variation must be in [0, {VARIATION_COUNT}), got {self.variation}")
        if not 0 <= self.pre_trans_index < PRE_TRANS_COUNT:
            raise ValueError(f"pre_trans_index must be in [0, {PRE_TRANS_COUNT}), got {self.pre_trans_index}")
        if not 0 <= self.size <= MAX_DOT_SIZE:
            raise ValueError(f"size must be in [0, {MAX_DOT_SIZE}], got {self.size}")
        for sq_name, root_name in _EXCLUSIVE_PAIRS:
            if getattr(self, sq_name) and getattr(self, root_name):
                raise ValueError(f"{sq_name} and {root_name} cannot both be set")

    def as_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)

    def replace(self, **changes: Any) -> "ParameterState":
        return dataclasses.replace(self, **changes)

    def toggle(self, name: str) -> "ParameterState":
        return self.replace(**{name: not getattr(self, name)})

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], base: "ParameterState" = None) -> "ParameterState":
        """Build a state from ``data`` layered over ``base`` (defaults if None)."""
        logger = get_logger()
        base = base if base is not None else cls()
        out = base.as_dict()
        for k, v in data.items():
            key = k.replace("-", "_")
            if key not in out:
                logger.warning("Ignoring unknown state field %r", k)
                continue
            out[key] = _coerce(key, v, out[key])
        return cls(**out)


def _coerce(name: str, value: Any, like: Any) -> Any:
    if isinstance(like, bool):
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.lower() in ("true", "false"):
            return value.lower() == "true"
        raise ValueError(f"{name} must be a boolean, got {value!r}")
    try:
        if isinstance(like, int):
            if isinstance(value, float) and not value.is_integer():
                raise ValueError
            return int(value)
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a {type(like).__name__}, got {value!r}") from None


def reset(state: ParameterState) -> ParameterState:
    """Defaults everywhere except polygon order, variation and pre-transform."""
    return ParameterState(
        polygon_order=state.polygon_order,
        variation=state.variation,
        pre_trans_index=state.pre_trans_index,
    )


def default_params(state: ParameterState) -> ParameterState:
    return state.replace(t=T, u=U, w=W, a=A, b=B)


def reset_view(state: ParameterState) -> ParameterState:
    return state.replace(x_scale=1.0, y_scale=1.0, x_shift=0, y_shift=0, mirror=False)


def next_polygon_order(n: int) -> int:
    return n + 1 if n < POLYGON_DOUBLING_ORDER else 2 * n


def prev_polygon_order(n: int) -> int:
    if n >= POLYGON_DOUBLING_ORDER:
        return n // 2
    return n - 1 if n > 3 else n
