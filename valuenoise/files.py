"""Writers for 1D signals: PNG plots and WAV audio."""

import logging
from pathlib import Path

import numpy as np
import soundfile as sf
from PIL import Image

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100

BELOW_COLOR = (125, 0, 0, 255)
ABOVE_COLOR = (0, 0, 125, 255)


def _prepare(path):
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def plot_signal(samples, height=256):
    """Draw a signal in [-1, 1] as a filled plot.

    Each sample becomes one column. Rows at or below the sample's level
    are red, rows above it are blue; the bottom row is -1.

    Returns:
        PIL Image in RGBA mode, ``len(samples)`` wide.
    """
    samples = np.asarray(samples, dtype=np.float32)
    if samples.ndim != 1 or samples.size == 0:
        raise ValueError("samples must be a non-empty 1D sequence")
    if height < 2:
        raise ValueError(f"height must be >= 2, got {height}")

    level = (samples + np.float32(1.0)) / np.float32(2.0)
    rows = np.arange(height, dtype=np.float32) / np.float32(height - 1)
    filled = rows[:, None] <= level[None, :]

    img = np.empty((height, samples.size, 4), dtype=np.uint8)
    img[filled] = BELOW_COLOR
    img[~filled] = ABOVE_COLOR
    # row 0 is the bottom of the plot
    return Image.fromarray(np.ascontiguousarray(img[::-1]))


def save_png(path, samples, height=256):
    """Plot ``samples`` with ``plot_signal`` and save as PNG."""
    path = _prepare(path)
    plot_signal(samples, height=height).save(path)
    logger.info("Saved signal plot (%d samples) to %s", len(samples), path)
    return path


def save_wav(path, samples, sample_rate=SAMPLE_RATE):
    """Save ``samples`` as mono 32-bit float WAV."""
    path = _prepare(path)
    data = np.asarray(samples, dtype=np.float32)
    sf.write(str(path), data, sample_rate, subtype="FLOAT", format="WAV")
    logger.info("Saved %d samples at %d Hz to %s",
                data.size, sample_rate, path)
    return path
