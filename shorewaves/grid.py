"""Dense 2D float grid shared by every stage of the pipeline."""

from __future__ import annotations

from typing import Iterable

import numpy as np

from shorewaves.rng import generator


def _validate_shape(shape: Iterable[int]) -> tuple[int, int]:
    dims = tuple(int(n) for n in shape)
    if len(dims) != 2:
        raise ValueError("shape must have exactly two dimensions")
    if dims[0] <= 0 or dims[1] <= 0:
        raise ValueError("shape dimensions must be positive")
    return dims


class Grid:
    """Row-major (n0, n1) float32 buffer addressed as (i, j).

    `j` is contiguous within a row of length `n1`. Every write made through
    this class bumps `revision`, which lets consumers detect that a grid they
    derived static data from has changed underneath them. The `values` view is
    read-only; use `assign` to replace the contents in bulk.
    """

    def __init__(self, shape: Iterable[int]) -> None:
        self._revision = 0
        self.reshape(shape)

    @classmethod
    def from_array(cls, array: np.ndarray) -> "Grid":
        grid = cls(np.shape(array))
        grid.assign(array)
        return grid

    @property
    def shape(self) -> tuple[int, int]:
        return self._data.shape  # type: ignore[return-value]

    @property
    def size(self) -> int:
        return int(self._data.size)

    @property
    def revision(self) -> int:
        return self._revision

    @property
    def values(self) -> np.ndarray:
        view = self._data.view()
        view.flags.writeable = False
        return view

    def reshape(self, shape: Iterable[int]) -> None:
        """Reallocate as zeros; prior contents are discarded."""

        self._data = np.zeros(_validate_shape(shape), dtype=np.float32)
        self._touch()

    def at(self, i: int, j: int) -> float:
        n0, n1 = self._data.shape
        assert 0 <= i < n0 and 0 <= j < n1, f"index ({i}, {j}) outside grid of shape {(n0, n1)}"
        return float(self._data[i, j])

    def set(self, i: int, j: int, value: float) -> None:
        n0, n1 = self._data.shape
        assert 0 <= i < n0 and 0 <= j < n1, f"index ({i}, {j}) outside grid of shape {(n0, n1)}"
        self._data[i, j] = value
        self._touch()

    def __getitem__(self, index: tuple[int, int]) -> float:
        return self.at(*index)

    def __setitem__(self, index: tuple[int, int], value: float) -> None:
        self.set(index[0], index[1], value)

    def assign(self, array: np.ndarray) -> None:
        array = np.asarray(array)
        if array.shape != self._data.shape:
            raise ValueError(f"cannot assign array of shape {array.shape} to grid of shape {self._data.shape}")
        self._data[...] = array
        self._touch()

    def fill(self, value: float) -> None:
        self._data.fill(value)
        self._touch()

    def max(self) -> float:
        return float(self._data.max())

    def min(self) -> float:
        return float(self._data.min())

    def randomize(self, a: float, b: float, seed: int) -> None:
        """Fill uniformly in [a, b) from a seeded generator."""

        rng = generator(seed, "randomize")
        self._data[...] = rng.uniform(a, b, size=self._data.shape).astype(np.float32)
        self._touch()

    def copy(self) -> "Grid":
        return Grid.from_array(self._data)

    def _touch(self) -> None:
        self._revision += 1

    def __repr__(self) -> str:
        return f"Grid(shape={self.shape}, revision={self._revision})"
