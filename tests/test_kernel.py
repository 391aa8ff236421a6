"""Tests for the lattice generators, 2D kernels and blend strategies."""

import numpy as np
import pytest

from valuenoise.blend import Weighting


def _recording_blend(calls):
    def blend(*args):
        calls.append(args)
        tl = args[0]
        return np.zeros(tl.shape[:2] + (4,), dtype=np.float32)
    return blend


# ---------------------------------------------------------------------------
# Lattices
# ---------------------------------------------------------------------------

def test_vector_lattice_unit_length():
    from valuenoise.lattice import vector_lattice
    grid = vector_lattice(47, 25, 35)
    assert grid.shape == (35, 25, 2)
    assert grid.dtype == np.float32
    lengths = np.hypot(grid[..., 0], grid[..., 1])
    np.testing.assert_allclose(lengths, 1.0, atol=1e-6)


def test_zero_draw_stays_zero_vector():
    from valuenoise.lattice import _normalize
    raw = np.array([[[0.0, 0.0], [1e-30, 0.0]],
                    [[0.3, -0.4], [-1.0, 1.0]]])
    grid = _normalize(raw)
    assert grid.dtype == np.float32
    assert np.isfinite(grid).all()
    np.testing.assert_array_equal(grid[0, 0], [0.0, 0.0])
    np.testing.assert_allclose(grid[0, 1], [1.0, 0.0])
    np.testing.assert_allclose(grid[1, 0], [0.6, -0.8], rtol=1e-6)
    lengths = np.hypot(grid[..., 0], grid[..., 1])
    np.testing.assert_allclose(lengths.ravel()[1:], 1.0, atol=1e-6)


def test_lattices_are_read_only():
    from valuenoise.lattice import color_lattice, scalar_lattice, vector_lattice
    for grid in (vector_lattice(1, 2, 2), color_lattice(1, 2, 2),
                 scalar_lattice(1, 4)):
        with pytest.raises(ValueError):
            grid[0] = 0


def test_color_lattice_alpha():
    from valuenoise.lattice import color_lattice
    opaque = color_lattice(5, 8, 6)
    clear = color_lattice(5, 8, 6, alpha=0)
    assert opaque.shape == (6, 8, 4)
    assert opaque.dtype == np.uint8
    assert np.all(opaque[..., 3] == 255)
    assert np.all(clear[..., 3] == 0)
    # alpha is not drawn, so the colors are the same stream
    np.testing.assert_array_equal(opaque[..., :3], clear[..., :3])


def test_lattice_determinism():
    from valuenoise.lattice import color_lattice, make_rng, vector_lattice
    np.testing.assert_array_equal(vector_lattice(7, 16, 9),
                                  vector_lattice(7, 16, 9))
    np.testing.assert_array_equal(color_lattice(7, 16, 9),
                                  color_lattice(make_rng(7), 16, 9))
    assert not np.array_equal(vector_lattice(7, 16, 9),
                              vector_lattice(8, 16, 9))


def test_draw_order_is_row_major():
    from valuenoise.lattice import color_lattice
    # a wider lattice continues the same stream row by row
    small = color_lattice(11, 4, 1)
    tall = color_lattice(11, 4, 3)
    np.testing.assert_array_equal(small[0], tall[0])


# ---------------------------------------------------------------------------
# Kernels
# ---------------------------------------------------------------------------

def test_kernel_defaults():
    from valuenoise import NoiseKernel
    kernel = NoiseKernel()
    assert (kernel.out_width, kernel.out_height) == (1024, 1024)
    assert (kernel.scale_x, kernel.scale_y) == (64, 64)
    assert kernel.seed == 47


@pytest.mark.parametrize("field", ["out_width", "out_height",
                                   "scale_x", "scale_y"])
@pytest.mark.parametrize("value", [0, -3, 2.5, True])
def test_bad_dimensions_rejected(field, value):
    from valuenoise import ColorNoiseKernel, ConfigurationError, NoiseKernel
    for cls in (NoiseKernel, ColorNoiseKernel):
        with pytest.raises(ConfigurationError):
            cls(**{field: value})


@pytest.mark.parametrize("seed", [-1, 2**64, "47"])
def test_bad_seed_rejected(seed):
    from valuenoise import ConfigurationError, NoiseKernel
    with pytest.raises(ConfigurationError):
        NoiseKernel(seed=seed)


def test_bad_color_options_rejected():
    from valuenoise import ColorNoiseKernel, ConfigurationError
    with pytest.raises(ConfigurationError):
        ColorNoiseKernel(alpha=256)
    with pytest.raises(ConfigurationError):
        ColorNoiseKernel(weighting="manhattan")


def test_vector_kernel_blend_arguments():
    from valuenoise import NoiseKernel
    kernel = NoiseKernel(out_width=32, out_height=24, scale_x=4, scale_y=3,
                         seed=5)
    calls = []
    field = kernel.make_noise(_recording_blend(calls))
    assert field.shape == (24, 32, 4)
    assert field.dtype == np.float32

    (tl, bl, tr, br, dx, dy), = calls
    for corner in (tl, bl, tr, br):
        assert corner.shape == (24, 32, 2)
    assert dx.shape == dy.shape == (24, 32)
    assert dx.min() >= 0 and dx.max() < 1
    assert dy.min() >= 0 and dy.max() < 1

    lattice = kernel.lattice()
    np.testing.assert_array_equal(tl[0, 0], lattice[0, 0])
    np.testing.assert_array_equal(br[0, 0], lattice[1, 1])
    # last column and row wrap back to lattice cell 0
    np.testing.assert_array_equal(br[-1, -1], lattice[0, 0])


def test_vector_kernel_reproducibility():
    from valuenoise import NoiseKernel
    from valuenoise.blend import dot_blend
    a = NoiseKernel(40, 30, 5, 6, seed=99).make_noise(dot_blend)
    b = NoiseKernel(40, 30, 5, 6, seed=99).make_noise(dot_blend)
    c = NoiseKernel(40, 30, 5, 6, seed=100).make_noise(dot_blend)
    np.testing.assert_array_equal(a, b)
    assert not np.array_equal(a, c)


def test_two_by_two_lattice_four_distinct_cells():
    from valuenoise import NoiseKernel
    kernel = NoiseKernel(out_width=4, out_height=4, scale_x=2, scale_y=2,
                         seed=1)
    calls = []
    kernel.make_noise(_recording_blend(calls))
    tl, bl, tr, br = calls[0][:4]
    seen = np.unique(np.concatenate(
        [c.reshape(-1, 2) for c in (tl, bl, tr, br)]), axis=0)
    assert len(seen) == 4


def test_wrong_blend_shape():
    from valuenoise import ColorNoiseKernel, NoiseKernel
    with pytest.raises(ValueError):
        NoiseKernel(8, 8, 2, 2).make_noise(lambda tl, *rest: tl)
    with pytest.raises(ValueError):
        ColorNoiseKernel(8, 8, 2, 2).make_noise(
            lambda tl, *rest: tl[..., :3])


def test_color_kernel_output():
    from valuenoise import ColorNoiseKernel
    from valuenoise.blend import average_blend
    kernel = ColorNoiseKernel(out_width=48, out_height=32, scale_x=6,
                              scale_y=4, seed=47)
    field = kernel.make_noise(average_blend)
    assert field.shape == (32, 48, 4)
    assert field.dtype == np.uint8
    assert np.all(field[..., 3] == 255)
    np.testing.assert_array_equal(field, kernel.make_noise(average_blend))


@pytest.mark.parametrize("weighting", list(Weighting))
def test_per_sample_matches_vectorized(weighting):
    from valuenoise import ColorNoiseKernel
    from valuenoise.blend import average_blend, per_sample

    def average_one(tl, bl, tr, br, w_tl, w_bl, w_tr, w_br):
        rgb = (tl[:3].astype(np.float32) * w_tl
               + bl[:3].astype(np.float32) * w_bl
               + tr[:3].astype(np.float32) * w_tr
               + br[:3].astype(np.float32) * w_br) / np.float32(4.0)
        return [rgb[0], rgb[1], rgb[2], 255.0]

    kernel = ColorNoiseKernel(8, 6, 3, 2, seed=12, weighting=weighting)
    np.testing.assert_array_equal(kernel.make_noise(per_sample(average_one)),
                                  kernel.make_noise(average_blend))


# ---------------------------------------------------------------------------
# Weights and blends
# ---------------------------------------------------------------------------

def test_distance_policies():
    from valuenoise.blend import corner_weights
    from valuenoise.mapping import map_grid
    grid_map = map_grid(4, 4, 2, 2)
    d_tl, d_bl, d_tr, d_br = corner_weights(grid_map, Weighting.DISTANCE)
    w_tl, w_bl, w_tr, w_br = corner_weights(grid_map, "inverse-distance")

    # output (0, 0) sits on its top-left corner
    assert d_tl[0, 0] == 0
    assert d_br[0, 0] == pytest.approx(1.0)
    assert d_bl[0, 0] == pytest.approx(1 / np.sqrt(2))
    assert w_tl[0, 0] == 1
    assert w_br[0, 0] == pytest.approx(0.0, abs=1e-6)

    for d, w in zip((d_tl, d_bl, d_tr, d_br), (w_tl, w_bl, w_tr, w_br)):
        np.testing.assert_allclose(w, 1 - d, atol=1e-7)
        assert d.min() >= 0 and d.max() <= 1 + 1e-6


def test_bilinear_weights_sum_to_one():
    from valuenoise.blend import bilinear_weights, corner_weights
    from valuenoise.mapping import map_grid
    grid_map = map_grid(13, 7, 3, 2)
    weights = corner_weights(grid_map, Weighting.FRACTIONAL)
    np.testing.assert_allclose(sum(weights), 1.0, atol=1e-6)

    w_tl, w_bl, w_tr, w_br = bilinear_weights(np.float32(0.25),
                                              np.float32(0.5))
    assert (w_tl, w_bl, w_tr, w_br) == (0.375, 0.375, 0.125, 0.125)


def test_to_channel_truncates():
    from valuenoise.blend import to_channel
    values = np.array([0.9, 1.999, 254.7, 255.5, 300.0, -3.0, np.nan])
    np.testing.assert_array_equal(to_channel(values),
                                  [0, 1, 254, 255, 255, 0, 0])
    assert to_channel(values).dtype == np.uint8


def test_dot_blend():
    from valuenoise.blend import dot_blend
    corner = np.array([[[1.0, 0.0]]], dtype=np.float32)
    other = np.array([[[0.0, 1.0]]], dtype=np.float32)
    dx = np.array([[0.25]], dtype=np.float32)
    dy = np.array([[0.5]], dtype=np.float32)
    out = dot_blend(corner, other, corner, other, dx, dy)
    np.testing.assert_allclose(out[0, 0], [0.25, 0.5, 0.25, 0.5])


def test_corner_blend_channels():
    from valuenoise.blend import corner_blend
    tl = np.array([[[100, 1, 1, 0]]], dtype=np.uint8)
    bl = np.array([[[50, 1, 1, 0]]], dtype=np.uint8)
    tr = np.array([[[200, 1, 1, 0]]], dtype=np.uint8)
    br = np.array([[[80, 1, 1, 0]]], dtype=np.uint8)
    half = np.array([[0.5]], dtype=np.float32)
    out = corner_blend(tl, bl, tr, br, half, half, half, half)
    np.testing.assert_allclose(out[0, 0], [50, 40, 100, 80])


def test_bilinear_blend_at_corner():
    from valuenoise import ColorNoiseKernel
    from valuenoise.blend import bilinear_blend
    kernel = ColorNoiseKernel(8, 8, 2, 2, seed=3,
                              weighting=Weighting.FRACTIONAL)
    field = kernel.make_noise(bilinear_blend)
    lattice = kernel.lattice()
    # samples on lattice points reproduce the lattice color
    np.testing.assert_array_equal(field[0, 0, :3], lattice[0, 0, :3])
    np.testing.assert_array_equal(field[4, 4, :3], lattice[1, 1, :3])
