from __future__ import annotations

import argparse
import logging
import os
from typing import Optional

from fractagons.config import load_config, normalise_config
from fractagons.persistence import SnapshotStore
from fractagons.pipeline import Session
from fractagons.state import ParameterState
from fractagons.util.logging_setup import configure_root_logging, format_state, get_logger
from fractagons.util.manifest import build_manifest, write_manifest
from fractagons.video.opencv_writer import encode_with_opencv

def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="fractagons", description="IFS chaos-game fractal renderer.")
    p.add_argument("--config", type=str, default=None, help="Path to config JSON. If omitted, built-in defaults are used.")
    p.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG","INFO","WARNING","ERROR"], help="Log level.")
    p.add_argument("--log-file", type=str, default="fractagons.log", help="Log file path (rotating). Set empty to disable file logging.")
    sub = p.add_subparsers(dest="cmd", required=True)

    r = sub.add_parser("render", help="Run the chaos game headless and save the image with its snapshot.")
    r.add_argument("--iterations", type=int, default=None, help="Number of iterations (defaults to config.iterations).")
    r.add_argument("--seed", type=int, default=None, help="Random seed for spokes and random states.")
    r.add_argument("--keys", type=str, default=None, help="Key presses to apply before rendering, e.g. 'NNV='.")
    g = r.add_mutually_exclusive_group()
    g.add_argument("--random", action="store_true", help="Start from a random state.")
    g.add_argument("--symmetric", action="store_true", help="Start from a random state that keeps n-fold symmetry.")
    r.add_argument("--load-state", type=str, default=None, help="Snapshot (.frm) to merge into the starting state.")
    r.add_argument("--video", action="store_true", help="Capture video frames while rendering.")
    r.add_argument("--images-dir", type=str, default=None, help="Override images_dir from config.")
    r.add_argument("--manifest", type=str, default=os.path.join("artifacts", "run.json"), help="Run manifest path.")
    r.add_argument("--no-progress", action="store_true", help="Hide the progress bar.")

    e = sub.add_parser("encode", help="Encode captured frames into an MP4 video using OpenCV.")
    e.add_argument("--input-dir", type=str, required=True, help="Frames directory, e.g. fgonvid-000.")
    e.add_argument("--output", type=str, default=None, help="Output MP4 file (defaults to config.output_video).")
    e.add_argument("--fps", type=int, default=None, help="Frames per second (defaults to config.fps).")

    return p

def _render(args: argparse.Namespace, cfg: dict) -> int:
    logger = get_logger()
    if args.iterations is not None:
        cfg["iterations"] = args.iterations
    if args.seed is not None:
        cfg["seed"] = args.seed
    if args.keys is not None:
        cfg["keys"] = args.keys
    if args.images_dir:
        cfg["images_dir"] = args.images_dir
    if args.random:
        cfg["random"] = "any"
    if args.symmetric:
        cfg["random"] = "symmetric"
    cfg = normalise_config(cfg)

    session = Session(
        cfg["width"], cfg["height"],
        ParameterState.from_mapping(cfg["state"]),
        seed=cfg["seed"],
        store=SnapshotStore(cfg["images_dir"], cfg["video_root"]),
    )
    if args.load_state and not session.load_state(args.load_state):
        return 1
    if cfg["random"]:
        session.randomise(symmetrical=cfg["random"] == "symmetric")
    for key in cfg["keys"]:
        session.handle_key(key)
    if args.video:
        session.toggle_video()

    logger.info("Starting state:\n%s", format_state(session.params))
    session.run(cfg["iterations"], progress=not args.no_progress)
    path = session.save()

    result = session.summary()
    result["image"] = path
    write_manifest(args.manifest, build_manifest(config=cfg, result=result))
    logger.info("Run manifest written: %s", args.manifest)
    return 0

def main(argv: Optional[list] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    log_level = getattr(logging, args.log_level.upper(), logging.INFO)
    log_file = args.log_file if args.log_file and args.log_file.strip() else None
    configure_root_logging(level=log_level, console=True, log_file=log_file)
    logger = get_logger()

    try:
        cfg = load_config(args.config)

        if args.cmd == "render":
            return _render(args, cfg)

        if args.cmd == "encode":
            cfg = normalise_config(cfg)
            output = args.output or cfg["output_video"]
            fps = args.fps or cfg["fps"]
            encode_with_opencv(input_dir=args.input_dir, output_file=output, fps=fps)
            return 0

        raise RuntimeError("Unknown command.")
    except (ValueError, OSError) as e:
        logger.error("%s", e)
        return 2
