"""Synthetic bathymetry: fBm noise on top of a linear cross-shore shelf."""

from __future__ import annotations

from dataclasses import replace
import logging
from typing import Any, Iterable

import numpy as np

from shorewaves.config import DepthConfig
from shorewaves.grid import Grid
from shorewaves.noise import fbm_perlin

logger = logging.getLogger(__name__)


class WaterDepthField:
    """Owns the bathymetry grid `h`.

    Negative values are submerged, positive values are exposed land. The
    slope runs along i, from deep water at i = 0 toward the shore at i = n0 - 1
    for a positive `slope`.
    """

    def __init__(self, shape: Iterable[int], *, config: DepthConfig | None = None) -> None:
        self.config = config or DepthConfig()
        self.h = Grid(shape)
        self.update()

    @property
    def shape(self) -> tuple[int, int]:
        return self.h.shape

    def set_shape(self, shape: Iterable[int]) -> None:
        """Resize the bathymetry; contents are zero until the next `update`."""

        self.h.reshape(shape)

    def configure(self, **changes: Any) -> DepthConfig:
        self.config = replace(self.config, **changes)
        return self.config

    def update(self) -> Grid:
        cfg = self.config
        noise = fbm_perlin(
            self.h.shape,
            cfg.kw,
            cfg.seed,
            octaves=cfg.octaves,
            weight=cfg.weight,
            persistence=cfg.persistence,
            lacunarity=cfg.lacunarity,
            shift=cfg.shift,
        )

        n0 = self.h.shape[0]
        dh = cfg.slope * (np.arange(n0, dtype=np.float32) - 0.5 * n0) / n0
        h = (noise.values + dh[:, None].astype(np.float32) + np.float32(cfg.offset)) * np.float32(cfg.scaling)
        self.h.assign(h)

        logger.debug(
            "bathymetry %s updated: seed=%d range=[%.3f, %.3f]",
            self.h.shape,
            cfg.seed,
            self.h.min(),
            self.h.max(),
        )
        return self.h
