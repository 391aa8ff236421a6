"""Seeded lattice generation.

A lattice is the small grid of random values that output samples are
interpolated from. Each lattice consumes its own generator stream in
row-major (2D) or index (1D) order, so the same seed always yields the
same lattice.
"""

import logging

import numpy as np

from .config import check_alpha, check_dimension, check_seed

logger = logging.getLogger(__name__)


def make_rng(seed):
    """Create a generator for one lattice.

    Uses the counter-based Philox bit generator, seeded explicitly. No
    global random state is touched.
    """
    seed = check_seed(seed)
    return np.random.Generator(np.random.Philox(seed))


def _resolve_rng(seed_or_rng):
    if isinstance(seed_or_rng, np.random.Generator):
        return seed_or_rng
    return make_rng(seed_or_rng)


def _freeze(arr):
    arr.flags.writeable = False
    return arr


def _normalize(vectors):
    """Scale 2D vectors (last axis) to unit length as float32.

    Zero vectors are returned unchanged.
    """
    vectors = np.asarray(vectors, dtype=np.float32)
    length = np.hypot(vectors[..., 0], vectors[..., 1])[..., None]
    safe = np.where(length > 0, length, np.float32(1.0))
    return (vectors / safe).astype(np.float32)


def vector_lattice(seed_or_rng, scale_x, scale_y):
    """Generate a lattice of unit 2D vectors.

    Args:
        seed_or_rng: Integer seed, or a Generator from ``make_rng``.
        scale_x: Lattice width (cells along x).
        scale_y: Lattice height (cells along y).

    Returns:
        Read-only float32 array of shape (scale_y, scale_x, 2). Both
        components of every cell are drawn from [-1, 1) before
        normalization. A zero-length draw stays the zero vector.
    """
    scale_x = check_dimension("scale_x", scale_x)
    scale_y = check_dimension("scale_y", scale_y)
    rng = _resolve_rng(seed_or_rng)

    raw = rng.uniform(-1.0, 1.0, size=(scale_y, scale_x, 2))
    grid = _normalize(raw)

    logger.debug("Built %dx%d vector lattice", scale_x, scale_y)
    return _freeze(grid)


def color_lattice(seed_or_rng, scale_x, scale_y, alpha=255):
    """Generate a lattice of RGBA cells.

    The three color channels are independent uniform bytes; alpha is
    fixed. Opaque grids use 255, blending grids use 0.

    Returns:
        Read-only uint8 array of shape (scale_y, scale_x, 4).
    """
    scale_x = check_dimension("scale_x", scale_x)
    scale_y = check_dimension("scale_y", scale_y)
    alpha = check_alpha(alpha)
    rng = _resolve_rng(seed_or_rng)

    grid = np.empty((scale_y, scale_x, 4), dtype=np.uint8)
    grid[..., :3] = rng.integers(0, 256, size=(scale_y, scale_x, 3),
                                 dtype=np.uint8)
    grid[..., 3] = alpha

    logger.debug("Built %dx%d color lattice (alpha=%d)",
                 scale_x, scale_y, alpha)
    return _freeze(grid)


def scalar_lattice(seed_or_rng, grid_len):
    """Generate a 1D lattice of values in [-1, 1).

    Returns:
        Read-only float32 array of length ``grid_len``.
    """
    grid_len = check_dimension("grid_len", grid_len)
    rng = _resolve_rng(seed_or_rng)

    grid = rng.uniform(-1.0, 1.0, size=grid_len).astype(np.float32)

    logger.debug("Built scalar lattice of %d nodes", grid_len)
    return _freeze(grid)
