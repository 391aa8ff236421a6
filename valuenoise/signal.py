"""1D value noise for audio-like signals."""

import logging

import numpy as np

from .config import (
    DEFAULT_GRID_LEN, DEFAULT_OUTPUT_LEN, DEFAULT_SEED,
    check_dimension, check_seed,
)
from .easing import Ease, get_easing
from .lattice import scalar_lattice
from .mapping import map_axis

logger = logging.getLogger(__name__)


class Noise1D:
    """A precomputed 1D noise signal.

    The whole output is interpolated from the lattice when the object is
    created. Iterating yields the output cyclically and never stops; each
    ``iter()`` starts again at the first sample.

    Args:
        seed: Lattice seed.
        grid_len: Number of lattice nodes.
        output_len: Number of output samples per cycle.
        ease: Easing law (``Ease`` member or name) used between nodes.
    """

    def __init__(self, seed=DEFAULT_SEED, grid_len=DEFAULT_GRID_LEN,
                 output_len=DEFAULT_OUTPUT_LEN, ease=Ease.LINEAR):
        self._seed = check_seed(seed)
        self._grid_len = check_dimension("grid_len", grid_len)
        self._output_len = check_dimension("output_len", output_len)
        self._ease = Ease.parse(ease)

        self._grid = scalar_lattice(self._seed, self._grid_len)
        self._output = self._interpolate()

    @property
    def seed(self):
        return self._seed

    @property
    def grid_len(self):
        return self._grid_len

    @property
    def output_len(self):
        return self._output_len

    @property
    def ease(self):
        return self._ease

    @property
    def grid(self):
        """Read-only lattice nodes."""
        return self._grid

    @property
    def output(self):
        """Read-only samples of one cycle."""
        return self._output

    def _interpolate(self):
        nodes = map_axis(self.output_len, self.grid_len)
        law = get_easing(self.ease)
        output = np.asarray(
            law(nodes.offset, self.grid[nodes.floor], self.grid[nodes.wrapped]),
            dtype=np.float32,
        )
        output.flags.writeable = False
        logger.debug("Interpolated %d samples from %d nodes with %s easing",
                     self.output_len, self.grid_len, self.ease.value)
        return output

    def __len__(self):
        return self.output_len

    def __iter__(self):
        output = self.output
        while True:
            for value in output:
                yield value

    def take(self, n):
        """Return the first ``n`` samples of the cycle, wrapping as needed."""
        if n < 0:
            raise ValueError(f"n must be >= 0, got {n}")
        return np.resize(self.output, n)

    def __repr__(self):
        return (f"Noise1D(seed={self.seed}, grid_len={self.grid_len}, "
                f"output_len={self.output_len}, ease={self.ease.value!r})")


def dot_signal(seed=DEFAULT_SEED, grid_len=DEFAULT_GRID_LEN,
               output_len=DEFAULT_OUTPUT_LEN):
    """Early dot-product variant of 1D noise.

    Node values are weighted by the squared offset from the opposite
    node: a sample sitting on node ``i`` takes the value of node ``i + 1``
    and the signal sags towards zero halfway between nodes.

    Returns:
        ``(grid, output)`` float32 arrays.
    """
    seed = check_seed(seed)
    grid = scalar_lattice(seed, grid_len)
    nodes = map_axis(check_dimension("output_len", output_len), grid.size)

    dx = nodes.offset
    rest = np.float32(1.0) - dx
    dot_left = grid[nodes.floor] * dx
    dot_right = grid[nodes.wrapped] * rest
    return grid, (dot_left * dx + dot_right * rest).astype(np.float32)
