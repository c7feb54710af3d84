"""Coherent noise functions used by the bathymetry generator."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from shorewaves.grid import Grid
from shorewaves.rng import generator


_TABLE_SIZE = 256


def _quintic(t: np.ndarray) -> np.ndarray:
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def perlin_noise_2d(x: np.ndarray, y: np.ndarray, rng: np.random.Generator) -> np.ndarray:
    """Evaluate Perlin gradient noise in [-1, 1] at lattice coordinates (x, y).

    The lattice has unit spacing; gradients are random unit vectors drawn from
    `rng` and hashed through a 256-entry permutation table, so the field
    repeats every 256 units along each axis.
    """

    perm = rng.permutation(_TABLE_SIZE)
    perm = np.concatenate((perm, perm))
    angles = rng.uniform(0.0, 2.0 * math.pi, size=_TABLE_SIZE)
    grad_x = np.cos(angles)
    grad_y = np.sin(angles)

    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    xf = np.floor(x)
    yf = np.floor(y)
    tx = x - xf
    ty = y - yf

    x0 = xf.astype(np.int64) & (_TABLE_SIZE - 1)
    y0 = yf.astype(np.int64) & (_TABLE_SIZE - 1)
    x1 = (x0 + 1) & (_TABLE_SIZE - 1)
    y1 = (y0 + 1) & (_TABLE_SIZE - 1)

    def corner(ix: np.ndarray, iy: np.ndarray, dx: np.ndarray, dy: np.ndarray) -> np.ndarray:
        h = perm[perm[ix] + iy]
        return grad_x[h] * dx + grad_y[h] * dy

    n00 = corner(x0, y0, tx, ty)
    n10 = corner(x1, y0, tx - 1.0, ty)
    n01 = corner(x0, y1, tx, ty - 1.0)
    n11 = corner(x1, y1, tx - 1.0, ty - 1.0)

    u = _quintic(tx)
    v = _quintic(ty)
    nx0 = n00 + u * (n10 - n00)
    nx1 = n01 + u * (n11 - n01)
    # unit gradients peak at sqrt(2) / 2
    return math.sqrt(2.0) * (nx0 + v * (nx1 - nx0))


def fractal_bounding(octaves: int, gain: float) -> float:
    """Scale that keeps an `octaves`-term sum with ratio `gain` within [-1, 1]."""

    amplitude = gain
    total = 1.0
    for _ in range(1, octaves):
        total += amplitude
        amplitude *= gain
    return 1.0 / total


def fbm_perlin(
    shape: Sequence[int],
    kw: Sequence[float],
    seed: int,
    *,
    octaves: int,
    weight: float,
    persistence: float,
    lacunarity: float,
    shift: Sequence[float] = (0.0, 0.0),
) -> Grid:
    """Weighted fBm of Perlin noise over a grid of `shape`.

    `kw` holds the number of base-octave lattice periods across each axis and
    `shift` is added to the lattice coordinates before evaluation. With a
    non-zero `weight`, the amplitude of each octave is additionally scaled,
    cell by cell, by how high the previous octave was: 0 gives plain fBm, 1
    fully damps detail in the noise troughs.
    """

    if octaves < 1:
        raise ValueError("octaves must be >= 1")

    grid = Grid(shape)
    n0, n1 = grid.shape
    ii, jj = np.indices((n0, n1), dtype=np.float64)
    x = (kw[0] / n0) * ii + shift[0]
    y = (kw[1] / n1) * jj + shift[1]

    field = np.zeros((n0, n1), dtype=np.float64)
    amplitude: float | np.ndarray = fractal_bounding(octaves, persistence)

    for octave in range(octaves):
        layer = perlin_noise_2d(x, y, generator(seed, "octave", octave))
        field += amplitude * layer
        amplitude = amplitude * ((1.0 - weight) + weight * np.minimum(layer + 1.0, 2.0) * 0.5)
        amplitude = amplitude * persistence
        x = x * lacunarity
        y = y * lacunarity

    grid.assign(field)
    return grid
