from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Optional

import numpy as np
from tqdm import tqdm

from fractagons import controls
from fractagons import state as st
from fractagons.catalog import variations
from fractagons.errors import MissingResource, RenderFault
from fractagons.iteration import IterationState, advance, frame_due, seeded
from fractagons.persistence import SnapshotStore
from fractagons.random_state import create_random_state
from fractagons.renderers.canvas import Canvas
from fractagons.state import ParameterState
from fractagons.util.logging_setup import bind_params, format_state, get_logger

LOG_EVERY = 4096


class Session:
    """Owns the canvas, the iteration history and the live parameters.

    ``params`` is only ever replaced wholesale, between ticks.
    """

    def __init__(
        self,
        width: int = 768,
        height: int = 768,
        params: Optional[ParameterState] = None,
        *,
        seed: Optional[int] = None,
        store: Optional[SnapshotStore] = None,
    ):
        self.canvas = Canvas(width, height)
        self.params = params if params is not None else ParameterState()
        self.it = IterationState()
        self.rng = np.random.default_rng(seed)
        self.store = store if store is not None else SnapshotStore()
        self.video_dir: Optional[str] = None
        self.faults = 0
        bind_params(lambda: self.params)

    # -- the loop ---------------------------------------------------------

    def tick(self) -> None:
        logger = get_logger()
        try:
            it = advance(self.params, self.it, self.rng)
            self.canvas.paint(self.params, it)
        except (RenderFault, ArithmeticError, ValueError) as e:
            self.faults += 1
            vx = variations.step_index(self.params.variation, -1)
            logger.warning("Render fault (%s); stepping variation down to %s and resetting", e, vx)
            self.params = self.params.replace(variation=vx)
            self.reset()
            return
        if frame_due(self.params, it.level) and self.video_dir:
            self.store.save_frame(self.canvas, self.video_dir, it.frame_num)
            it = it.with_frame_saved()
        self.it = it
        if it.level % LOG_EVERY == 0:
            logger.debug("%s iterations", it.level)

    def run(self, iterations: int, *, progress: bool = True) -> IterationState:
        logger = get_logger()
        logger.info("Run start iterations=%s size=%sx%s order=%s variation=%s",
                    iterations, self.canvas.width, self.canvas.height,
                    self.params.polygon_order, self.params.variation)
        for _ in tqdm(range(iterations), disable=not progress, unit="it"):
            self.tick()
        logger.info("Run complete level=%s faults=%s", self.it.level, self.faults)
        return self.it

    # -- reset events -------------------------------------------------------

    def clear(self) -> None:
        self.canvas.clear()
        self.it = replace(self.it, level=0)

    def reset(self) -> None:
        get_logger().info("Resetting state to default for order %s fractagons with variation %s",
                          self.params.polygon_order, self.params.variation)
        self.params = st.reset(self.params)
        self.canvas.clear()
        self.it = IterationState()
        self.video_dir = None

    def set_params(self, params: ParameterState) -> None:
        self.params = params

    def randomise(self, symmetrical: bool = False) -> ParameterState:
        get_logger().info("Creating %srandom state...", "symmetrical " if symmetrical else "")
        self.params = create_random_state(self.params, self.rng, symmetrical)
        self.canvas.clear()
        self.it = IterationState()
        self.video_dir = None
        get_logger().info("State:\n%s", format_state(self.params))
        return self.params

    def seed_from_pixel(self, px: int, py: int) -> None:
        x, y = self.canvas.viewport.display_to_xy(px, py, self.params.x_scale, self.params.y_scale)
        self.canvas.clear()
        self.it = seeded(x, y)
        get_logger().info("Restarting from (%s, %s) at pixel (%s, %s)", x, y, px, py)

    # -- persistence ----------------------------------------------------------

    def save(self) -> str:
        return self.store.save_image(self.canvas, self.params, self.it.level)

    def load_state(self, path: str) -> bool:
        try:
            params = self.store.load_state(path, self.params)
        except MissingResource as e:
            get_logger().warning("%s. Ignoring.", e)
            return False
        self.params = params
        self.clear()
        return True

    def revert_to_last_image(self) -> bool:
        try:
            self.store.load_image(self.store.last_image_path(), self.canvas)
        except MissingResource as e:
            get_logger().warning("%s. Ignoring.", e)
            return False
        return True

    def toggle_video(self) -> bool:
        if self.params.making_video_seq:
            self.params = self.params.replace(making_video_seq=False)
            self.video_dir = None
            get_logger().info("Video capture off")
            return False
        self.canvas.clear()
        self.video_dir = self.store.create_video_dir(self.params)
        self.params = self.params.replace(making_video_seq=True)
        self.it = replace(self.it, frame_num=0)
        return True

    # -- input --------------------------------------------------------------

    def handle_key(self, key: str, *, alt: bool = False) -> Any:
        """Run a session command, or apply the key's state transition."""
        commands = {
            "s": self.save,
            "g": lambda: self.randomise(False),
            "G": lambda: self.randomise(True),
            "M": self.toggle_video,
            "R": self.revert_to_last_image,
            "z": self.clear,
            "Z": self.reset,
            "j": lambda: get_logger().info("Iteration count: %s", self.it.level),
            "L": lambda: get_logger().info("State:\n%s", format_state(self.params, only_set=False)),
        }
        if key in commands:
            return commands[key]()
        self.params = controls.apply_key(self.params, key, alt=alt,
                                         width=self.canvas.width, height=self.canvas.height)
        return self.params

    def summary(self) -> Dict[str, Any]:
        return {
            "width": self.canvas.width,
            "height": self.canvas.height,
            "level": self.it.level,
            "frames": self.it.frame_num,
            "faults": self.faults,
            "params": self.params.as_dict(),
        }
