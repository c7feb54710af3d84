"""Exact squared Euclidean distance transform.

A. Meijster, J. B. T. M. Roerdink, and W. H. Hesselink. A general algorithm
for computing distance transforms in linear time. In Mathematical Morphology
and its Applications to Image and Signal Processing, pages 331-340. Kluwer
Academic Publishers, 2000.
"""

from __future__ import annotations

import numpy as np

from shorewaves.grid import Grid


def distance_transform(grid: Grid) -> Grid:
    """Squared distance from each cell to the nearest cell with value > 0.

    Foreground cells get 0. Without any foreground cell the distances stay
    bounded by the (n0 + n1) sentinel propagated through both phases.
    """

    foreground = grid.values > 0.0
    g = _column_distances(foreground)

    n0, n1 = foreground.shape
    dt = np.empty((n0, n1), dtype=np.float32)
    for i in range(n0):
        dt[i, :] = _lower_envelope(g[i, :].tolist())
    return Grid.from_array(dt)


def _column_distances(foreground: np.ndarray) -> np.ndarray:
    """Vertical distance (in rows) to the nearest foreground cell of each column."""

    n0, n1 = foreground.shape
    sentinel = n0 + n1
    g = np.empty((n0, n1), dtype=np.int64)

    g[0] = np.where(foreground[0], 0, sentinel)
    for i in range(1, n0):
        g[i] = np.where(foreground[i], 0, g[i - 1] + 1)

    for i in range(n0 - 2, -1, -1):
        g[i] = np.minimum(g[i], g[i + 1] + 1)
    return g


def _f(delta: int, gi: int) -> int:
    return delta * delta + gi * gi


def _sep(i: int, u: int, gi: int, gu: int) -> int:
    # abscissa after which the parabola rooted at u lies below the one at i
    return (u * u - i * i + gu * gu - gi * gi) // (2 * (u - i))


def _lower_envelope(g: list[int]) -> list[int]:
    n = len(g)
    s = [0] * n
    t = [0] * n
    q = 0

    for u in range(1, n):
        while q >= 0 and _f(t[q] - s[q], g[s[q]]) > _f(t[q] - u, g[u]):
            q -= 1

        if q < 0:
            q = 0
            s[0] = u
        else:
            w = 1 + _sep(s[q], u, g[s[q]], g[u])
            if w < n:
                q += 1
                s[q] = u
                t[q] = w

    out = [0] * n
    for u in range(n - 1, -1, -1):
        out[u] = _f(u - s[q], g[s[q]])
        if u == t[q]:
            q -= 1
    return out
