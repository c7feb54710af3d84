"""CLI entry point for shoreline wave generation."""

from __future__ import annotations

import argparse
from datetime import datetime, timezone
import logging
import math
import platform
import time

import numpy as np
from shorewaves.config import DEFAULT_N0, DEFAULT_N1, AnimationConfig, DepthConfig, ShoreWavesConfig, WaveConfig
from shorewaves.depth import WaterDepthField
from shorewaves.derive import grayscale_u8, palette_rgb_u8
from shorewaves.gerstner import GerstnerWaveField
from shorewaves.io import resolve_output_dir, write_grid_npy, write_json, write_png
from shorewaves.metrics import wave_metrics


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Animated ocean waves approaching a synthetic shoreline")
    parser.add_argument("--seed", type=int, default=DepthConfig.seed, help="Bathymetry noise seed")
    parser.add_argument("--out", default="out", help="Output root directory")
    parser.add_argument("--n0", type=int, default=DEFAULT_N0, help="Grid cells along the cross-shore axis")
    parser.add_argument("--n1", type=int, default=DEFAULT_N1, help="Grid cells along the alongshore axis")
    parser.add_argument("--frames", type=int, default=AnimationConfig.frames, help="Number of frames to render")
    parser.add_argument("--dt", type=float, default=None, help="Time step per frame (default: kinf / 300)")
    parser.add_argument("--kinf", type=float, default=WaveConfig.kinf, help="Deep-water wavenumber")
    parser.add_argument(
        "--alpha-deg",
        type=float,
        default=math.degrees(WaveConfig.alpha),
        help="Wave direction in degrees",
    )
    parser.add_argument("--steepness", type=float, default=WaveConfig.steepness, help="Wave steepness")
    parser.add_argument("--overwrite", action="store_true", help="Overwrite files in existing output directory")
    parser.add_argument("--verbose", action="store_true", help="Log each recomputation")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.n0 < 2 or args.n1 < 2:
        parser.error("--n0 and --n1 must be at least 2")
    if args.frames < 1:
        parser.error("--frames must be at least 1")

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    config = ShoreWavesConfig(
        depth=DepthConfig(seed=args.seed),
        wave=WaveConfig(kinf=args.kinf, alpha=math.radians(args.alpha_deg), steepness=args.steepness),
        animation=AnimationConfig(frames=args.frames, time_step=args.dt),
    )

    generation_start = time.perf_counter()
    depth = WaterDepthField((args.n0, args.n1), config=config.depth)
    wave = GerstnerWaveField(config=config.wave)
    wave.update(depth.h)

    out_dir = resolve_output_dir(args.out, args.seed, args.n0, args.n1, overwrite=args.overwrite)
    write_grid_npy(out_dir / "bathymetry.npy", depth.h)
    write_png(out_dir / "bathymetry.png", palette_rgb_u8(depth.h))
    write_png(out_dir / "shore_dist.png", grayscale_u8(wave.shore_dist))
    write_png(out_dir / "phi_depth.png", grayscale_u8(wave.phi_depth))

    dt = config.animation.resolve_time_step(config.wave)
    frame_metrics = []
    for frame in range(config.animation.frames):
        dz = wave.generate(frame * dt, depth.h)
        write_png(out_dir / f"frame_{frame:04d}.png", palette_rgb_u8(dz, mask=depth.h))
        frame_metrics.append(wave_metrics(depth.h, dz).to_dict())
    generation_seconds = time.perf_counter() - generation_start

    meta = {
        "seed": args.seed,
        "n0": args.n0,
        "n1": args.n1,
        "time_step": dt,
        "config": config.to_dict(),
        "frames": frame_metrics,
        "generated_at_utc": datetime.now(timezone.utc).isoformat(),
        "generation_seconds": generation_seconds,
        "python_version": platform.python_version(),
        "numpy_version": np.__version__,
    }
    write_json(out_dir / "meta.json", meta)

    water_fraction = frame_metrics[0]["water_fraction"]
    print(f"Generated waves: {out_dir}")
    print(f"Bathymetry range [{depth.h.min():.3f}, {depth.h.max():.3f}]; water fraction {water_fraction:.3f}")
    print(f"Frames: {config.animation.frames} (dt={dt:.4f})")
    print(f"Generation time: {generation_seconds:.3f} s ({args.n0}x{args.n1})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
