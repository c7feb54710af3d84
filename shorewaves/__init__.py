"""Procedural shoreline wave generation package."""

from .config import DEFAULT_N0, DEFAULT_N1, AnimationConfig, DepthConfig, ShoreWavesConfig, WaveConfig
from .depth import WaterDepthField
from .gerstner import GerstnerWaveField, StaleWaveFieldError, WaveState
from .grid import Grid

__all__ = [
    "DEFAULT_N0",
    "DEFAULT_N1",
    "AnimationConfig",
    "DepthConfig",
    "GerstnerWaveField",
    "Grid",
    "ShoreWavesConfig",
    "StaleWaveFieldError",
    "WaterDepthField",
    "WaveConfig",
    "WaveState",
]
