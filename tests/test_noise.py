from __future__ import annotations

import numpy as np
import pytest

from shorewaves.noise import fbm_perlin, fractal_bounding, perlin_noise_2d
from shorewaves.rng import generator, stream_seed

FBM_ARGS = dict(octaves=4, weight=0.3, persistence=0.5, lacunarity=2.0)


def test_fbm_is_deterministic() -> None:
    a = fbm_perlin((64, 48), (2.0, 3.0), 42, **FBM_ARGS)
    b = fbm_perlin((64, 48), (2.0, 3.0), 42, **FBM_ARGS)

    assert np.array_equal(a.values, b.values)
    assert a.values.tobytes() == b.values.tobytes()


def test_fbm_depends_on_seed() -> None:
    a = fbm_perlin((32, 32), (2.0, 2.0), 1, **FBM_ARGS)
    b = fbm_perlin((32, 32), (2.0, 2.0), 2, **FBM_ARGS)

    assert not np.array_equal(a.values, b.values)


def test_single_unweighted_octave_is_plain_perlin() -> None:
    shape = (40, 24)
    kw = (3.0, 1.5)
    field = fbm_perlin(shape, kw, 9, octaves=1, weight=0.0, persistence=0.5, lacunarity=2.0)

    ii, jj = np.indices(shape, dtype=np.float64)
    x = (kw[0] / shape[0]) * ii
    y = (kw[1] / shape[1]) * jj
    direct = perlin_noise_2d(x, y, generator(9, "octave", 0)).astype(np.float32)

    assert np.array_equal(field.values, direct)


def test_fbm_stays_in_unit_range() -> None:
    field = fbm_perlin((64, 64), (4.0, 4.0), 5, octaves=6, weight=0.8, persistence=0.6, lacunarity=2.1)

    assert np.abs(field.values).max() <= 1.0 + 1e-6
    assert field.max() > field.min()


def test_perlin_vanishes_on_lattice_points() -> None:
    ii, jj = np.indices((5, 5), dtype=np.float64)
    values = perlin_noise_2d(ii - 2.0, jj + 7.0, np.random.default_rng(0))

    assert not np.any(values)


def test_shift_pans_the_field() -> None:
    shape = (32, 32)
    kw = (2.0, 2.0)
    base = fbm_perlin(shape, kw, 3, **FBM_ARGS)
    panned = fbm_perlin(shape, kw, 3, shift=(2 * kw[0] / shape[0], 0.0), **FBM_ARGS)

    assert np.allclose(panned.values[:-2], base.values[2:], atol=1e-5)


def test_fractal_bounding() -> None:
    assert fractal_bounding(1, 0.5) == 1.0
    assert fractal_bounding(3, 0.5) == pytest.approx(1.0 / 1.75)


def test_fbm_requires_an_octave() -> None:
    with pytest.raises(ValueError):
        fbm_perlin((8, 8), (1.0, 1.0), 0, octaves=0, weight=0.0, persistence=0.5, lacunarity=2.0)


def test_stream_seeds_are_stable_and_independent() -> None:
    assert stream_seed(4, "octave", 0) == stream_seed(4, "octave", 0)
    assert stream_seed(4, "octave", 0) != stream_seed(4, "octave", 1)
    assert stream_seed(4, "octave", 0) != stream_seed(5, "octave", 0)
    assert stream_seed(-1) == stream_seed((1 << 64) - 1)
