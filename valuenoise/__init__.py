"""valuenoise - Seeded lattice value noise for textures and signals."""

import numpy as np

from .blend import Weighting
from .config import (
    DEFAULT_GRID_LEN, DEFAULT_OUTPUT_LEN, ConfigurationError,
)
from .easing import Ease
from .kernel import ColorNoiseKernel, NoiseKernel
from .signal import Noise1D
from .textures import PRESETS, to_image

__version__ = "0.1.0"
__all__ = [
    "generate_texture", "generate_signal", "NoiseKernel",
    "ColorNoiseKernel", "Noise1D", "Ease", "Weighting",
    "ConfigurationError",
]


def _random_seed():
    return int(np.random.randint(0, 2**31))


def generate_texture(preset="color-splotches", seed=None, **kwargs):
    """Generate a demo texture image.

    Args:
        preset: Name of a texture preset (see ``textures.PRESETS``).
        seed: Lattice seed. A random seed is picked when None.
        **kwargs: Preset overrides (width, height, scale_x, scale_y).

    Returns:
        PIL Image in RGBA mode.
    """
    try:
        make = PRESETS[preset]
    except KeyError:
        raise ConfigurationError(
            f"unknown preset {preset!r} (expected one of: "
            f"{', '.join(PRESETS)})"
        ) from None
    if seed is None:
        seed = _random_seed()
    return to_image(make(seed=seed, **kwargs))


def generate_signal(grid_len=DEFAULT_GRID_LEN, output_len=DEFAULT_OUTPUT_LEN,
                    ease=Ease.LINEAR, seed=None):
    """Generate a 1D noise signal.

    Args:
        grid_len: Number of lattice nodes.
        output_len: Number of output samples.
        ease: Easing law between nodes.
        seed: Lattice seed. A random seed is picked when None.

    Returns:
        Noise1D whose ``output`` holds the samples.
    """
    if seed is None:
        seed = _random_seed()
    return Noise1D(seed, grid_len, output_len, ease)
