import json
import os

import pytest

from fractagons.errors import MissingResource
from fractagons.persistence import SnapshotStore, merge_snapshot, read_snapshot
from fractagons.renderers.canvas import Canvas
from fractagons.state import ParameterState


@pytest.fixture
def store(tmp_path):
    return SnapshotStore(images_dir=str(tmp_path / "images"), video_root=str(tmp_path))


def test_save_image_writes_png_and_snapshot(store):
    canvas = Canvas(16, 16)
    params = ParameterState(polygon_order=5, variation=7, param_delta=0.4)
    path = store.save_image(canvas, params, 1234)
    assert path.endswith("fgon5V7-1234.png")
    assert os.path.isfile(path)
    with open(path[:-4] + ".frm", encoding="utf-8") as f:
        data = json.load(f)
    assert data["polygon_order"] == 5 and data["variation"] == 7
    assert "param_delta" not in data and "making_video_seq" not in data


def test_load_state_preserves_session_fields(store):
    saved = ParameterState(polygon_order=6, t=1.25, mirror=True, scale_not_shift=False)
    store.save_image(Canvas(8, 8), saved, 10)
    live = ParameterState(param_delta=0.05, scale_not_shift=True)
    loaded = store.load_state(store.last_fname + ".frm", live)
    assert (loaded.polygon_order, loaded.t, loaded.mirror) == (6, 1.25, True)
    assert loaded.param_delta == 0.05 and loaded.scale_not_shift


def test_merge_accepts_kebab_case_keys():
    merged = merge_snapshot(ParameterState(), {"polygon-order": 9, "reflect-lr": True})
    assert merged.polygon_order == 9 and merged.reflect_lr


def test_missing_files(store, tmp_path):
    with pytest.raises(MissingResource):
        read_snapshot(str(tmp_path / "nope.frm"))
    with pytest.raises(MissingResource):
        store.load_image(str(tmp_path / "nope.png"), Canvas(8, 8))
    with pytest.raises(MissingResource):
        store.last_image_path()


def test_video_dirs_are_numbered(store, tmp_path):
    first = store.create_video_dir(ParameterState())
    second = store.create_video_dir(ParameterState())
    assert os.path.basename(first) == "fgonvid-000"
    assert os.path.basename(second) == "fgonvid-001"
    assert os.path.isfile(os.path.join(first, "fgonvid-000.frm"))
    frame = store.save_frame(Canvas(8, 8), first, 0)
    assert os.path.basename(frame) == "img00000.png"
    assert os.path.isfile(frame)
