import json
from typing import Any, Dict, Optional

DEFAULTS: Dict[str, Any] = {
    "width": 768,
    "height": 768,
    "iterations": 200000,
    "seed": None,
    "images_dir": "images",
    "video_root": ".",
    "fps": 30,
    "output_video": "fractagons.mp4",
    "state": {},
    "keys": "",
    "random": None,
}

RANDOM_MODES = (None, "any", "symmetric")

def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    if not config_path:
        return dict(DEFAULTS)
    with open(config_path, "r", encoding="utf-8") as f:
        cfg = json.load(f)
    if not isinstance(cfg, dict):
        raise ValueError("Config JSON must be an object.")
    out = dict(DEFAULTS)
    out.update(cfg)
    return out

def normalise_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(DEFAULTS)
    out.update(cfg)

    width = int(out["width"])
    height = int(out["height"])
    iterations = int(out["iterations"])
    if width <= 0 or height <= 0:
        raise ValueError("width/height must be positive.")
    if iterations < 0:
        raise ValueError("iterations must be >= 0.")

    state = out.get("state") or {}
    if not isinstance(state, dict):
        raise ValueError("state must be an object of ParameterState fields.")

    random_mode = out.get("random")
    if random_mode not in RANDOM_MODES:
        raise ValueError(f"random must be one of {RANDOM_MODES}, got {random_mode!r}")

    out["width"] = width
    out["height"] = height
    out["iterations"] = iterations
    out["seed"] = None if out.get("seed") is None else int(out["seed"])
    out["images_dir"] = str(out["images_dir"])
    out["video_root"] = str(out["video_root"])
    out["fps"] = int(out["fps"])
    out["output_video"] = str(out["output_video"])
    out["state"] = dict(state)
    out["keys"] = str(out.get("keys") or "")
    out["random"] = random_mode
    return out
