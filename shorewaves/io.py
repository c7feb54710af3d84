"""Writers for rendered frames, raw grids and run metadata."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import numpy as np
from PIL import Image

from shorewaves.grid import Grid


def resolve_output_dir(
    out_root: str | Path,
    seed: int,
    n0: int,
    n1: int,
    *,
    overwrite: bool,
) -> Path:
    """Return `<out_root>/seed-<seed>/<n0>x<n1>`, refusing to reuse a populated run."""

    run_dir = Path(out_root) / f"seed-{seed}" / f"{n0}x{n1}"
    if not overwrite and run_dir.is_dir() and next(run_dir.iterdir(), None) is not None:
        raise FileExistsError(f"{run_dir} already holds a render; pass --overwrite to replace it")
    run_dir.mkdir(parents=True, exist_ok=True)
    return run_dir


def write_grid_npy(path: str | Path, grid: Grid) -> None:
    """Save the raw (n0, n1) float32 cells, indexed like the grid."""

    np.save(Path(path), np.asarray(grid.values, dtype=np.float32), allow_pickle=False)


def write_png(path: str | Path, raster: np.ndarray) -> None:
    """Save an 8-bit display raster: (rows, cols) grayscale or (rows, cols, 3) RGB."""

    if raster.ndim == 2:
        mode = "L"
    elif raster.ndim == 3 and raster.shape[2] == 3:
        mode = "RGB"
    else:
        raise ValueError(f"expected a grayscale or RGB raster, got shape {raster.shape}")
    Image.fromarray(np.ascontiguousarray(raster, dtype=np.uint8), mode=mode).save(Path(path))


def write_json(path: str | Path, payload: dict[str, Any]) -> None:
    Path(path).write_text(json.dumps(payload, indent=2, sort_keys=True) + "\n", encoding="utf-8")
