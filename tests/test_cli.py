import json
import os

import pytest

from fractagons.cli import main
from fractagons.config import load_config, normalise_config


def test_normalise_config_defaults_and_validation():
    cfg = normalise_config(load_config(None))
    assert (cfg["width"], cfg["height"], cfg["random"]) == (768, 768, None)
    with pytest.raises(ValueError):
        normalise_config({"width": 0})
    with pytest.raises(ValueError):
        normalise_config({"random": "sometimes"})
    with pytest.raises(ValueError):
        normalise_config({"state": [1, 2]})


def test_render_command(tmp_path):
    config = tmp_path / "run.json"
    config.write_text(json.dumps({
        "width": 96, "height": 64,
        "state": {"polygon_order": 5},
        "video_root": str(tmp_path),
    }), encoding="utf-8")
    manifest = tmp_path / "artifacts" / "run.json"
    images = tmp_path / "images"

    rc = main([
        "--config", str(config), "--log-file", "", "--log-level", "WARNING",
        "render", "--iterations", "300", "--seed", "4", "--keys", "V",
        "--images-dir", str(images), "--manifest", str(manifest), "--no-progress",
    ])
    assert rc == 0
    pngs = [f for f in os.listdir(images) if f.endswith(".png")]
    assert pngs == ["fgon5V1-300.png"]
    data = json.loads(manifest.read_text(encoding="utf-8"))
    assert data["result"]["level"] == 300
    assert data["result"]["params"]["variation"] == 1
    assert data["config"]["seed"] == 4


def test_render_with_missing_snapshot_fails(tmp_path):
    rc = main([
        "--log-file", "", "--log-level", "ERROR",
        "render", "--iterations", "1", "--load-state", str(tmp_path / "missing.frm"),
        "--images-dir", str(tmp_path), "--manifest", str(tmp_path / "m.json"), "--no-progress",
    ])
    assert rc == 1


def test_bad_config_reports_error(tmp_path):
    config = tmp_path / "bad.json"
    config.write_text("[1, 2, 3]", encoding="utf-8")
    assert main(["--config", str(config), "--log-file", "", "render"]) == 2
