"""Summary statistics for generated wave fields."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

import numpy as np

from shorewaves.grid import Grid


@dataclass(frozen=True)
class WaveMetrics:
    """Coverage and displacement summary for one frame."""

    water_fraction: float
    dz_min: float
    dz_max: float
    dz_rms_water: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def wave_metrics(h: Grid, dz: Grid) -> WaveMetrics:
    if h.shape != dz.shape:
        raise ValueError(f"bathymetry shape {h.shape} does not match displacement shape {dz.shape}")

    water = h.values < 0.0
    water_cells = int(water.sum())
    if water_cells == 0:
        rms = 0.0
    else:
        rms = float(np.sqrt(np.mean(np.square(dz.values[water].astype(np.float64)))))

    return WaveMetrics(
        water_fraction=float(water_cells / h.size),
        dz_min=dz.min(),
        dz_max=dz.max(),
        dz_rms_water=rms,
    )
