"""Demo texture presets.

Each preset wires a kernel to one of the built-in blend strategies. All
presets take the same keyword arguments (``width``, ``height``,
``scale_x``, ``scale_y``, ``seed``) with their own defaults, and return a
noise field. ``to_image`` turns any field into a Pillow image.
"""

import logging
from pathlib import Path

import numpy as np
from PIL import Image

from .blend import (
    Weighting, average_blend, corner_blend, dot_blend, to_channel,
)
from .config import DEFAULT_SEED
from .kernel import ColorNoiseKernel, NoiseKernel

logger = logging.getLogger(__name__)


def to_image(field):
    """Convert a noise field to an RGBA image.

    Float fields are taken to be in [0, 1], multiplied by 255 and
    truncated; uint8 fields are used as-is.
    """
    arr = np.asarray(field)
    if arr.dtype != np.uint8:
        arr = to_channel(arr.astype(np.float32) * np.float32(255.0))
    return Image.fromarray(np.ascontiguousarray(arr))


def vector_dots(width=1400, height=1400, scale_x=25, scale_y=35,
                seed=DEFAULT_SEED):
    """Unit vector lattice, each corner dotted with the cell offset."""
    kernel = NoiseKernel(width, height, scale_x, scale_y, seed)
    return kernel.make_noise(dot_blend)


def color_splotches(width=1024, height=1024, scale_x=64, scale_y=64,
                    seed=DEFAULT_SEED):
    """Black grid with blurry color splotches."""
    kernel = ColorNoiseKernel(width, height, scale_x, scale_y, seed)
    return kernel.make_noise(average_blend)


def corner_gradients(width=1024, height=1024, scale_x=26, scale_y=26,
                     seed=DEFAULT_SEED):
    """Dark field with triangular red and green gradient boxes."""
    kernel = ColorNoiseKernel(width, height, scale_x, scale_y, seed)
    return kernel.make_noise(corner_blend)


def distance_texture(width=1024, height=1024, scale_x=60, scale_y=50,
                     seed=DEFAULT_SEED):
    """Transparent-lattice texture weighted by raw corner distance."""
    kernel = ColorNoiseKernel(width, height, scale_x, scale_y, seed,
                              alpha=0, weighting=Weighting.DISTANCE)
    return kernel.make_noise(average_blend)


def inverse_distance_texture(width=1024, height=1024, scale_x=60,
                             scale_y=50, seed=DEFAULT_SEED):
    """Transparent-lattice texture weighted by ``1 - distance``."""
    kernel = ColorNoiseKernel(width, height, scale_x, scale_y, seed,
                              alpha=0, weighting=Weighting.INVERSE_DISTANCE)
    return kernel.make_noise(average_blend)


PRESETS = {
    "vector-dots": vector_dots,
    "color-splotches": color_splotches,
    "corner-gradients": corner_gradients,
    "distance": distance_texture,
    "inverse-distance": inverse_distance_texture,
}

# (file name, preset, overrides)
GALLERY = [
    ("noise0.png", vector_dots, {}),
    ("noise1.png", color_splotches, {}),
    ("noise2.png", corner_gradients, {}),
    ("noise3.png", corner_gradients,
     dict(width=1400, height=1400, scale_x=100, scale_y=100)),
    ("mknoise0.png", distance_texture,
     dict(width=640, height=480, scale_x=13, scale_y=13)),
    ("mknoise1.png", distance_texture,
     dict(width=640, height=480, scale_x=130, scale_y=130)),
    ("mknoise2.png", distance_texture, dict(scale_x=42, scale_y=42)),
    ("mknoise3.png", distance_texture, dict(scale_x=30, scale_y=80)),
    ("mknoise4.png", distance_texture, {}),
    ("mknoise5.png", inverse_distance_texture, {}),
    ("mknoise6.png", inverse_distance_texture, dict(scale_x=6, scale_y=5)),
]


def render_textures(out_dir, seed=DEFAULT_SEED):
    """Render every gallery texture as a PNG into ``out_dir``.

    Returns:
        List of written paths.
    """
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for name, preset, overrides in GALLERY:
        path = out_dir / name
        to_image(preset(seed=seed, **overrides)).save(path)
        logger.info("Saved %s", path)
        written.append(path)
    return written
