"""Gerstner wave field refracted, shoaled and damped by the bathymetry."""

from __future__ import annotations

from dataclasses import replace
import enum
import logging
import math
from typing import Any
import weakref

import numpy as np

from shorewaves.config import WaveConfig
from shorewaves.distance import distance_transform
from shorewaves.grid import Grid
from shorewaves.interp import interp_bilinear, interp_nearest

logger = logging.getLogger(__name__)


class WaveState(enum.Enum):
    CONFIGURED = "configured"
    UPDATED = "updated"
    GENERATED = "generated"


class StaleWaveFieldError(RuntimeError):
    """Raised when `generate` would use static fields that no longer match their inputs."""


def base_coordinates(shape: tuple[int, int], extent: float = math.pi) -> tuple[Grid, Grid]:
    """World coordinates of each cell, spanning [-extent, extent] along i.

    Both axes are normalized by n0 - 1, so on a non-square grid the j axis
    keeps the i spacing instead of spanning [-extent, extent] itself.
    """

    n0, n1 = shape
    ii, jj = np.indices((n0, n1), dtype=np.float64)
    x = extent * (2.0 * ii / (n0 - 1) - 1.0)
    y = extent * (2.0 * jj / (n0 - 1) - 1.0)
    return Grid.from_array(x), Grid.from_array(y)


class GerstnerWaveField:
    """Two-phase wave generator.

    `update(h)` derives the static fields (base coordinates, shore distance
    ramp, depth phase lag) from the bathymetry `h` and the current
    configuration. `generate(t, h)` then produces the vertical displacement
    `dz` for time `t` as many times as needed. Changing the configuration,
    or writing to `h`, makes the static fields stale and `generate` refuses to
    run until `update` has been called again. The bathymetry grid is borrowed,
    never owned: only a weak reference and its revision are kept.
    """

    def __init__(self, *, config: WaveConfig | None = None) -> None:
        self.config = config or WaveConfig()
        self.state = WaveState.CONFIGURED
        self.shape: tuple[int, int] | None = None
        self.x0: Grid | None = None
        self.y0: Grid | None = None
        self.shore_dist: Grid | None = None
        self.phi_depth: Grid | None = None
        self.dz: Grid | None = None
        self._source: weakref.ref[Grid] | None = None
        self._source_revision = -1

    @property
    def r(self) -> float:
        """Deep-water orbital radius."""

        return self.config.steepness / self.config.kinf

    @property
    def omega(self) -> float:
        return self.config.kinf * self.config.phase_speed

    def configure(self, **changes: Any) -> WaveConfig:
        self.config = replace(self.config, **changes)
        self.state = WaveState.CONFIGURED
        return self.config

    def is_stale(self, h: Grid) -> bool:
        if self.state is WaveState.CONFIGURED or self._source is None:
            return True
        return self._source() is not h or h.revision != self._source_revision

    def update(self, h: Grid) -> None:
        n0, n1 = h.shape
        if n0 < 2 or n1 < 2:
            raise ValueError("wave field needs a bathymetry grid of at least 2x2 cells")

        cfg = self.config
        self.shape = (n0, n1)
        self.x0, self.y0 = base_coordinates(self.shape)
        self.shore_dist = self._shore_distance(h)
        self.phi_depth = self._depth_phase_lag(h)
        self.dz = Grid(self.shape)

        self._source = weakref.ref(h)
        self._source_revision = h.revision
        self.state = WaveState.UPDATED
        logger.debug(
            "wave field %s updated: kinf=%.3f alpha=%.3f phase lag range=[%.3f, %.3f]",
            self.shape,
            cfg.kinf,
            cfg.alpha,
            self.phi_depth.min(),
            self.phi_depth.max(),
        )

    def _shore_distance(self, h: Grid) -> Grid:
        """Saturating 0 -> 1 ramp of the squared distance to the nearest land cell."""

        cfg = self.config
        n0 = h.shape[0]
        dist2 = distance_transform(h).values.astype(np.float64)
        c_decay = 0.5 / (n0 / cfg.kinf * cfg.shore_dist_ratio) ** 2
        return Grid.from_array(1.0 - np.exp(-dist2 * c_decay))

    def _depth_phase_lag(self, h: Grid) -> Grid:
        """Phase accumulated by travelling through finite depth along `alpha`."""

        cfg = self.config
        n0, n1 = h.shape
        ca = math.cos(cfg.alpha)
        sa = math.sin(cfg.alpha)

        # rotated grid large enough to cover the domain for any direction
        scale = math.pi * math.sqrt(2.0)
        ii, jj = np.indices((n0, n1), dtype=np.float64)
        xb = scale * (2.0 * ii / (n0 - 1) - 1.0)
        yb = scale * (2.0 * jj / (n1 - 1) - 1.0)
        xr = Grid.from_array(xb * ca - yb * sa)
        yr = Grid.from_array(xb * sa + yb * ca)

        hr = interp_nearest(self.x0, self.y0, h, xr, yr).values.astype(np.float64)

        # land and zero-depth cells give NaN / inf here and end up clipped
        with np.errstate(divide="ignore", invalid="ignore"):
            amplification = 1.0 / np.sqrt(np.tanh(-cfg.kinf * hr))
        fk = cfg.kinf * (np.fmin(cfg.k_clipping_ratio, amplification) - 1.0)

        dxr = float(xr.values[1, 0]) - float(xr.values[0, 0])
        phi_depth_r = Grid.from_array(np.cumsum(dxr * fk, axis=0))

        # back onto the axis-aligned grid: the rotated frame is regular in its
        # own (xb, yb) coordinates, so sample it at the inverse-rotated cell positions
        x0 = self.x0.values.astype(np.float64)
        y0 = self.y0.values.astype(np.float64)
        xs = Grid.from_array(xb)
        ys = Grid.from_array(yb)
        x0r = Grid.from_array(x0 * ca + y0 * sa)
        y0r = Grid.from_array(-x0 * sa + y0 * ca)
        return interp_nearest(xs, ys, phi_depth_r, x0r, y0r)

    def generate(self, t: float, h: Grid) -> Grid:
        self._check_current(h)
        cfg = self.config
        ca = math.cos(cfg.alpha)
        sa = math.sin(cfg.alpha)

        x0 = self.x0.values.astype(np.float64)
        y0 = self.y0.values.astype(np.float64)
        shore = self.shore_dist.values.astype(np.float64)

        phi = (
            cfg.kinf * ca * x0
            + cfg.kinf * sa * y0
            - self.omega * t
            + self.phi_depth.values
            + cfg.phi0
        )

        rloc = self.r * (1.0 - cfg.shore_r_ratio * shore) * np.power(shore, 0.2)

        x = x0 - rloc * np.sin(phi) * ca
        y = y0 - rloc * np.sin(phi) * sa
        dz = -rloc * np.cos(phi)

        # single steepening pass, stronger close to the shore
        ck = (1.0 - shore) * cfg.kludge
        dz = -rloc * np.cos(phi - ck * dz)

        advected = interp_bilinear(
            self.x0,
            self.y0,
            Grid.from_array(dz),
            Grid.from_array(x),
            Grid.from_array(y),
        ).values
        self.dz.assign(np.where(h.values < 0.0, advected, 0.0))

        self.state = WaveState.GENERATED
        logger.debug("wave field generated at t=%.4f", t)
        return self.dz

    def _check_current(self, h: Grid) -> None:
        if self.state is WaveState.CONFIGURED:
            raise StaleWaveFieldError("wave parameters changed; call update() before generate()")
        if h.shape != self.shape:
            raise ValueError(f"bathymetry shape {h.shape} does not match wave field shape {self.shape}")
        if self.is_stale(h):
            raise StaleWaveFieldError("bathymetry changed since the last update(); call update() first")
