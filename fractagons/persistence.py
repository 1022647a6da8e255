from __future__ import annotations

import json
import os
from typing import Optional

from PIL import Image

from fractagons.errors import MissingResource
from fractagons.renderers.canvas import Canvas
from fractagons.state import ParameterState
from fractagons.util.logging_setup import get_logger, shape_label

SNAPSHOT_EXT = ".frm"
IMAGE_EXT = ".png"
VIDEO_DIR_PREFIX = "fgonvid-"

# Session bookkeeping that never goes into a snapshot.
_NOT_SAVED = ("param_delta", "making_video_seq")
# Live values that survive loading a snapshot.
_PRESERVED_ON_LOAD = ("param_delta", "scale_not_shift", "making_video_seq")


def _ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)


def image_stem(params: ParameterState, level: int) -> str:
    return f"{shape_label(params)}-{level}"


def snapshot_dict(params: ParameterState) -> dict:
    data = params.as_dict()
    for k in _NOT_SAVED:
        data.pop(k, None)
    return data


def write_snapshot(path: str, params: ParameterState) -> str:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(snapshot_dict(params), f, indent=2, sort_keys=True)
        f.write("\n")
    return path


def read_snapshot(path: str) -> dict:
    if not os.path.isfile(path):
        raise MissingResource(f"No snapshot file at {path}")
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Snapshot {path} must contain a JSON object.")
    return data


def merge_snapshot(current: ParameterState, data: dict) -> ParameterState:
    data = {k.replace("-", "_"): v for k, v in data.items()}
    for k in _PRESERVED_ON_LOAD:
        data.pop(k, None)
    return ParameterState.from_mapping(data, base=current)


class SnapshotStore:
    """Everything the renderer reads from or writes to disk."""

    def __init__(self, images_dir: str = "images", video_root: str = "."):
        self.images_dir = images_dir
        self.video_root = video_root
        self.last_fname: Optional[str] = None

    def save_image(self, canvas: Canvas, params: ParameterState, level: int) -> str:
        logger = get_logger()
        _ensure_dir(self.images_dir)
        stem = os.path.join(self.images_dir, image_stem(params, level))
        path = stem + IMAGE_EXT
        canvas.to_image().save(path, format="PNG", optimize=True)
        write_snapshot(stem + SNAPSHOT_EXT, params)
        self.last_fname = stem
        logger.info("Saved image %s and snapshot %s", path, stem + SNAPSHOT_EXT)
        return path

    def load_state(self, path: str, current: ParameterState) -> ParameterState:
        params = merge_snapshot(current, read_snapshot(path))
        self.last_fname = os.path.splitext(path)[0]
        get_logger().info("Loaded snapshot %s", path)
        return params

    def load_image(self, path: str, canvas: Canvas) -> None:
        if not os.path.isfile(path):
            raise MissingResource(f"No image file at {path}")
        with Image.open(path) as img:
            canvas.load_image(img)
        get_logger().info("Displayed image %s", path)

    def last_image_path(self) -> str:
        if not self.last_fname:
            raise MissingResource("No image has been saved or loaded yet.")
        return self.last_fname + IMAGE_EXT

    def create_video_dir(self, params: ParameterState) -> str:
        """First free fgonvid-NNN directory, created, with the current snapshot inside."""
        _ensure_dir(self.video_root)
        num = 0
        while True:
            name = f"{VIDEO_DIR_PREFIX}{num:03d}"
            path = os.path.join(self.video_root, name)
            if not os.path.exists(path):
                break
            num += 1
        os.makedirs(path)
        write_snapshot(os.path.join(path, name + SNAPSHOT_EXT), params)
        get_logger().info("Video capture directory %s", path)
        return path

    def save_frame(self, canvas: Canvas, video_dir: str, frame_num: int) -> str:
        path = os.path.join(video_dir, f"img{frame_num:05d}{IMAGE_EXT}")
        canvas.to_image().save(path, format="PNG")
        get_logger().debug("Saved video frame %s", path)
        return path
