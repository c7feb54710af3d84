"""Derived rasters: finite-difference gradients and display encodings."""

from __future__ import annotations

import numpy as np

from shorewaves.grid import Grid


# magma-like stops, evenly spaced over the normalized value range
PALETTE_RGB = np.array(
    [
        [0.001, 0.000, 0.014],
        [0.070, 0.050, 0.194],
        [0.198, 0.064, 0.404],
        [0.348, 0.083, 0.494],
        [0.494, 0.141, 0.508],
        [0.639, 0.190, 0.494],
        [0.786, 0.242, 0.450],
        [0.913, 0.330, 0.383],
        [0.980, 0.491, 0.368],
        [0.996, 0.661, 0.451],
        [0.995, 0.827, 0.586],
        [0.987, 0.991, 0.750],
    ],
    dtype=np.float64,
)


def gradient_x(grid: Grid) -> Grid:
    """Central difference along i, one-sided on the first and last rows."""

    if grid.shape[0] < 2:
        raise ValueError("gradient_x needs at least two rows")
    return Grid.from_array(np.gradient(grid.values, axis=0))


def gradient_y(grid: Grid) -> Grid:
    """Central difference along j, one-sided on the first and last columns."""

    if grid.shape[1] < 2:
        raise ValueError("gradient_y needs at least two columns")
    return Grid.from_array(np.gradient(grid.values, axis=1))


def gradient_angle(grid: Grid) -> Grid:
    dx = gradient_x(grid).values
    dy = gradient_y(grid).values
    return Grid.from_array(np.arctan2(dy, dx))


def _normalized(grid: Grid) -> np.ndarray | None:
    vmin = grid.min()
    vmax = grid.max()
    if vmax == vmin:
        return None
    v = (grid.values.astype(np.float64) - vmin) / (vmax - vmin)
    return np.clip(v, 0.0, 1.0)


def _display_orientation(cells: np.ndarray) -> np.ndarray:
    """Map (i, j) cells to image rows/columns with (0, 0) at the bottom left."""

    return np.ascontiguousarray(np.swapaxes(cells, 0, 1)[::-1])


def grayscale_u8(grid: Grid) -> np.ndarray:
    """Min/max normalized 8-bit grayscale image of shape (n1, n0).

    A flat grid encodes as an all-black image.
    """

    n0, n1 = grid.shape
    v = _normalized(grid)
    if v is None:
        return np.zeros((n1, n0), dtype=np.uint8)
    return _display_orientation(np.floor(255.0 * v).astype(np.uint8))


def palette_rgb_u8(grid: Grid, mask: Grid | None = None) -> np.ndarray:
    """Min/max normalized RGB image of shape (n1, n0, 3) using `PALETTE_RGB`.

    Cells where `mask` is positive are painted black. A flat grid encodes as
    an all-black image.
    """

    n0, n1 = grid.shape
    if mask is not None and mask.shape != grid.shape:
        raise ValueError(f"mask shape {mask.shape} does not match grid shape {grid.shape}")

    v = _normalized(grid)
    if v is None:
        return np.zeros((n1, n0, 3), dtype=np.uint8)

    stops = np.linspace(0.0, 1.0, num=PALETTE_RGB.shape[0])
    rgb = np.stack([np.interp(v, stops, PALETTE_RGB[:, c]) for c in range(3)], axis=-1)
    if mask is not None:
        rgb[mask.values > 0.0] = 0.0

    return _display_orientation(np.floor(255.0 * rgb).astype(np.uint8))
