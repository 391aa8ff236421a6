"""2D noise kernels.

A kernel holds output size, lattice size and seed. ``make_noise`` builds
the lattice, maps every output coordinate onto it and hands the four
neighbours plus their weights to a caller-supplied blend strategy.
"""

import logging
from dataclasses import dataclass

import numpy as np

from .blend import Weighting, corner_weights, to_channel
from .config import (
    DEFAULT_OUT_SIZE, DEFAULT_SCALE, DEFAULT_SEED,
    check_alpha, check_dimension, check_seed,
)
from .lattice import color_lattice, vector_lattice
from .mapping import map_grid

logger = logging.getLogger(__name__)


def _validate_common(kernel):
    for name in ("out_width", "out_height", "scale_x", "scale_y"):
        object.__setattr__(kernel, name,
                           check_dimension(name, getattr(kernel, name)))
    object.__setattr__(kernel, "seed", check_seed(kernel.seed))


def _check_field(field, kernel):
    expected = (kernel.out_height, kernel.out_width, 4)
    if field.shape != expected:
        raise ValueError(
            f"blend returned shape {field.shape}, expected {expected}"
        )


@dataclass(frozen=True)
class NoiseKernel:
    """Noise over a lattice of unit vectors.

    The blend strategy is called as ``blend(tl, bl, tr, br, dx, dy)``
    where the corners have shape (out_height, out_width, 2) and the
    fractional offsets have shape (out_height, out_width). It must return
    an (out_height, out_width, 4) array.
    """

    out_width: int = DEFAULT_OUT_SIZE
    out_height: int = DEFAULT_OUT_SIZE
    scale_x: int = DEFAULT_SCALE
    scale_y: int = DEFAULT_SCALE
    seed: int = DEFAULT_SEED

    def __post_init__(self):
        _validate_common(self)

    def lattice(self):
        return vector_lattice(self.seed, self.scale_x, self.scale_y)

    def grid_map(self):
        return map_grid(self.out_width, self.out_height,
                        self.scale_x, self.scale_y)

    def make_noise(self, blend):
        """Evaluate the noise field.

        Returns:
            float32 array of shape (out_height, out_width, 4).
        """
        logger.debug("Evaluating %dx%d vector noise over %dx%d lattice "
                     "(seed=%d)", self.out_width, self.out_height,
                     self.scale_x, self.scale_y, self.seed)
        grid_map = self.grid_map()
        tl, bl, tr, br = grid_map.gather(self.lattice())
        dx, dy = grid_map.offsets()

        field = np.array(blend(tl, bl, tr, br, dx, dy), dtype=np.float32)
        _check_field(field, self)
        return field


@dataclass(frozen=True)
class ColorNoiseKernel:
    """Noise over a lattice of RGBA colors.

    The lattice alpha is fixed per kernel: 255 for opaque grids, 0 for
    blending grids. The blend strategy is called as
    ``blend(tl, bl, tr, br, w_tl, w_bl, w_tr, w_br)`` with uint8 corners
    of shape (out_height, out_width, 4) and float32 weights computed
    under ``weighting``. Its result is narrowed to uint8 by truncation.
    """

    out_width: int = DEFAULT_OUT_SIZE
    out_height: int = DEFAULT_OUT_SIZE
    scale_x: int = DEFAULT_SCALE
    scale_y: int = DEFAULT_SCALE
    seed: int = DEFAULT_SEED
    alpha: int = 255
    weighting: Weighting = Weighting.INVERSE_DISTANCE

    def __post_init__(self):
        _validate_common(self)
        object.__setattr__(self, "alpha", check_alpha(self.alpha))
        object.__setattr__(self, "weighting", Weighting.parse(self.weighting))

    def lattice(self):
        return color_lattice(self.seed, self.scale_x, self.scale_y,
                             alpha=self.alpha)

    def grid_map(self):
        return map_grid(self.out_width, self.out_height,
                        self.scale_x, self.scale_y)

    def make_noise(self, blend):
        """Evaluate the noise field.

        Returns:
            uint8 array of shape (out_height, out_width, 4).
        """
        logger.debug("Evaluating %dx%d color noise over %dx%d lattice "
                     "(seed=%d, weighting=%s)", self.out_width,
                     self.out_height, self.scale_x, self.scale_y,
                     self.seed, self.weighting.value)
        grid_map = self.grid_map()
        corners = grid_map.gather(self.lattice())
        weights = corner_weights(grid_map, self.weighting)

        field = np.array(to_channel(blend(*corners, *weights)))
        _check_field(field, self)
        return field
