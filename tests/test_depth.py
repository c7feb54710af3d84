from __future__ import annotations

import numpy as np

from shorewaves.config import DepthConfig
from shorewaves.depth import WaterDepthField
from shorewaves.noise import fbm_perlin


def test_unweighted_single_octave_without_slope_matches_noise() -> None:
    config = DepthConfig(seed=5, octaves=1, weight=0.0, slope=0.0, offset=0.0, scaling=1.0)
    depth = WaterDepthField((32, 48), config=config)
    direct = fbm_perlin(
        (32, 48),
        config.kw,
        5,
        octaves=1,
        weight=0.0,
        persistence=config.persistence,
        lacunarity=config.lacunarity,
    )

    assert np.array_equal(depth.h.values, direct.values)


def test_slope_adds_cross_shore_ramp() -> None:
    flat = WaterDepthField((40, 16), config=DepthConfig(slope=0.0, offset=0.0, scaling=1.0))
    sloped = WaterDepthField((40, 16), config=DepthConfig(slope=2.8, offset=0.0, scaling=1.0))

    n0 = 40
    ramp = 2.8 * (np.arange(n0) - 0.5 * n0) / n0
    diff = sloped.h.values.astype(np.float64) - flat.h.values
    assert np.allclose(diff, ramp[:, None], atol=1e-5)


def test_offset_and_scaling_apply_after_ramp() -> None:
    base = WaterDepthField((24, 24), config=DepthConfig(offset=0.0, scaling=1.0))
    shifted = WaterDepthField((24, 24), config=DepthConfig(offset=-0.5, scaling=0.4))

    expected = (base.h.values.astype(np.float64) - 0.5) * 0.4
    assert np.allclose(shifted.h.values, expected, atol=1e-5)


def test_default_bathymetry_runs_from_deep_water_to_shore() -> None:
    depth = WaterDepthField((64, 64))

    assert np.all(depth.h.values[0] < 0.0)
    assert np.mean(depth.h.values[-1] > 0.0) > 0.5


def test_configure_takes_effect_on_update() -> None:
    depth = WaterDepthField((16, 16))
    before = depth.h.values.copy()
    revision = depth.h.revision

    depth.configure(seed=99)
    assert depth.h.revision == revision
    assert np.array_equal(depth.h.values, before)

    depth.update()
    assert depth.h.revision > revision
    assert not np.array_equal(depth.h.values, before)


def test_set_shape_resizes_bathymetry() -> None:
    depth = WaterDepthField((16, 16))
    depth.set_shape((8, 12))

    assert depth.shape == (8, 12)
    depth.update()
    assert depth.h.shape == (8, 12)
    assert depth.h.max() > depth.h.min()
