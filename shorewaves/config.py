"""Configuration models for bathymetry and wave generation."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
import math
from typing import Any


DEFAULT_N0 = 512
DEFAULT_N1 = 512


@dataclass(frozen=True)
class DepthConfig:
    """Controls the fBm bathymetry and its cross-shore slope profile."""

    kw: tuple[float, float] = (1.0, 4.0)
    seed: int = 1
    octaves: int = 3
    weight: float = 0.2
    persistence: float = 0.5
    lacunarity: float = 2.0
    shift: tuple[float, float] = (0.0, 0.0)
    slope: float = 2.8
    offset: float = -0.5
    scaling: float = 0.4


@dataclass(frozen=True)
class WaveConfig:
    """Controls the Gerstner wave field.

    `kinf` is the deep-water (peak) wavenumber and `alpha` the propagation
    direction in radians. `k_clipping_ratio` caps the shallow-water wavenumber
    amplification, `shore_dist_ratio` sets the width of the shore decay ramp
    relative to one wavelength and `shore_r_ratio` how much amplitude is lost
    at the shoreline.
    """

    kinf: float = 4.0
    alpha: float = 15.0 / 180.0 * math.pi
    steepness: float = 0.6
    phi0: float = 0.0
    phase_speed: float = 1.0
    kludge: float = 20.0
    k_clipping_ratio: float = 4.0
    shore_dist_ratio: float = 0.8
    shore_r_ratio: float = 0.9


@dataclass(frozen=True)
class AnimationConfig:
    """Frame sequencing for offline rendering."""

    frames: int = 16
    # None means kinf / 300 per frame
    time_step: float | None = None

    def resolve_time_step(self, wave: WaveConfig) -> float:
        if self.time_step is not None:
            return float(self.time_step)
        return wave.kinf / 300.0


@dataclass(frozen=True)
class ShoreWavesConfig:
    """Primary generation configuration."""

    depth: DepthConfig = field(default_factory=DepthConfig)
    wave: WaveConfig = field(default_factory=WaveConfig)
    animation: AnimationConfig = field(default_factory=AnimationConfig)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
