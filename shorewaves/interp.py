"""Resampling between grids whose world coordinates are regular.

Both routines take the source coordinates as grids `x` and `y` holding, for
every cell (i, j), its world position. They rely on those grids being
linearly spaced along each axis (`x` varying with i only, `y` with j only):
the index of a world position is then an affine function of it and no search
over the source points is needed. Passing scattered or irregular coordinates
is outside their contract and gives meaningless results.
"""

from __future__ import annotations

import numpy as np
from scipy.interpolate import RegularGridInterpolator

from shorewaves.grid import Grid

# absorbs rounding so a position sitting on a source cell maps to that cell
_INDEX_EPS = 1e-6


def _check_source(x: Grid, y: Grid, z: Grid) -> None:
    if not (x.shape == y.shape == z.shape):
        raise ValueError(f"source grids must share a shape, got {x.shape}, {y.shape}, {z.shape}")


def _check_target(xi: Grid, yi: Grid) -> None:
    if xi.shape != yi.shape:
        raise ValueError(f"target coordinate grids must share a shape, got {xi.shape}, {yi.shape}")


def _affine_index(coord_min: float, coord_max: float, n: int) -> tuple[float, float]:
    if coord_max <= coord_min:
        return 0.0, 0.0
    a = (n - 1) / (coord_max - coord_min)
    return a, -coord_min * a


def interp_nearest(x: Grid, y: Grid, z: Grid, xi: Grid, yi: Grid) -> Grid:
    """Nearest-neighbor lookup of `z` at world positions (`xi`, `yi`).

    The fractional index is truncated, so a position maps to the source cell
    at or below it along each axis.

    Positions outside the source extent are clamped to the border cells.
    """

    _check_source(x, y, z)
    _check_target(xi, yi)
    n0, n1 = z.shape

    ax, bx = _affine_index(x.min(), x.max(), n0)
    ay, by = _affine_index(y.min(), y.max(), n1)

    p = np.floor(ax * xi.values.astype(np.float64) + bx + _INDEX_EPS)
    q = np.floor(ay * yi.values.astype(np.float64) + by + _INDEX_EPS)
    p = np.clip(p, 0, n0 - 1).astype(np.intp)
    q = np.clip(q, 0, n1 - 1).astype(np.intp)

    return Grid.from_array(z.values[p, q])


def interp_bilinear(x: Grid, y: Grid, z: Grid, xi: Grid, yi: Grid, *, fill_value: float = 0.0) -> Grid:
    """Bilinear interpolation of `z` at world positions (`xi`, `yi`).

    Positions outside the source extent evaluate to `fill_value`.
    """

    _check_source(x, y, z)
    _check_target(xi, yi)

    axis_x = x.values[:, 0].astype(np.float64)
    axis_y = y.values[0, :].astype(np.float64)
    interpolator = RegularGridInterpolator(
        (axis_x, axis_y),
        z.values.astype(np.float64),
        method="linear",
        bounds_error=False,
        fill_value=fill_value,
    )
    points = np.stack((xi.values.ravel(), yi.values.ravel()), axis=-1).astype(np.float64)
    return Grid.from_array(interpolator(points).reshape(xi.shape))
