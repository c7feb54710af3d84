from __future__ import annotations

import numpy as np
from scipy.ndimage import distance_transform_edt

from shorewaves.distance import distance_transform
from shorewaves.grid import Grid


def _water_with_land(shape: tuple[int, int], cells: list[tuple[int, int]]) -> Grid:
    h = np.full(shape, -1.0)
    for i, j in cells:
        h[i, j] = 1.0
    return Grid.from_array(h)


def test_single_foreground_cell_gives_exact_squared_distance() -> None:
    for shape, (a, b) in [((7, 7), (3, 3)), ((9, 4), (0, 3)), ((5, 11), (4, 0)), ((6, 6), (5, 5))]:
        dt = distance_transform(_water_with_land(shape, [(a, b)])).values
        ii, jj = np.indices(shape)
        assert np.array_equal(dt, (ii - a) ** 2 + (jj - b) ** 2)


def test_all_foreground_gives_zero() -> None:
    grid = Grid((6, 9))
    grid.fill(0.5)

    assert not np.any(distance_transform(grid).values)


def test_corner_land_on_small_grid() -> None:
    dt = distance_transform(_water_with_land((4, 4), [(0, 0)]))

    assert dt.at(3, 3) == 18.0
    assert dt.at(0, 0) == 0.0
    assert dt.at(0, 3) == 9.0


def test_single_row_and_single_column() -> None:
    row = distance_transform(_water_with_land((1, 5), [(0, 2)])).values
    col = distance_transform(_water_with_land((5, 1), [(2, 0)])).values

    assert row.ravel().tolist() == [4.0, 1.0, 0.0, 1.0, 4.0]
    assert col.ravel().tolist() == [4.0, 1.0, 0.0, 1.0, 4.0]


def test_matches_reference_euclidean_transform() -> None:
    rng = np.random.default_rng(3)
    for shape in [(32, 32), (17, 45), (40, 9)]:
        values = rng.uniform(-1.0, 1.0, size=shape)
        values[0, 0] = 1.0
        foreground = values > 0.8
        expected = np.rint(distance_transform_edt(~foreground) ** 2)

        dt = distance_transform(Grid.from_array(values)).values
        assert np.array_equal(dt, expected)


def test_no_foreground_stays_bounded() -> None:
    n0, n1 = 6, 10
    grid = Grid((n0, n1))
    grid.fill(-2.0)
    dt = distance_transform(grid).values

    sentinel = n0 + n1
    assert np.isfinite(dt).all()
    assert dt.min() >= sentinel**2
    assert dt.max() <= (n1 - 1) ** 2 + (sentinel + n0 - 1) ** 2
