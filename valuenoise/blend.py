"""Corner weighting policies and blend strategies for 2D noise.

A blend strategy is any callable taking the four neighbour arrays plus
two (fractional) or four (distance) weight arrays and returning one
sample per output coordinate. Strategies operate on whole arrays at once;
``per_sample`` adapts a function written for a single coordinate.
"""

import enum
import functools

import numpy as np

from .config import ConfigurationError

SQRT_2 = np.float32(np.sqrt(2.0))


class Weighting(str, enum.Enum):
    """How corner weights are derived from a sample's cell position."""

    FRACTIONAL = "fractional"
    DISTANCE = "distance"
    INVERSE_DISTANCE = "inverse-distance"

    @classmethod
    def parse(cls, value):
        try:
            return cls(value)
        except ValueError:
            names = ", ".join(w.value for w in cls)
            raise ConfigurationError(
                f"unknown weighting {value!r} (expected one of: {names})"
            ) from None


def bilinear_weights(dx, dy):
    """Standard bilinear corner weights.

    Returns:
        ``(w_tl, w_bl, w_tr, w_br)``, each the product of the
        complementary fractional distances. They sum to 1.
    """
    one = np.float32(1.0)
    return ((one - dx) * (one - dy),
            (one - dx) * dy,
            dx * (one - dy),
            dx * dy)


def corner_distances(grid_map):
    """Euclidean distance from each sample to its four cell corners.

    Distances are divided by sqrt(2), so they lie in [0, 1].

    Returns:
        ``(d_tl, d_bl, d_tr, d_br)`` float32 arrays of the output shape.
    """
    dx, dy = grid_map.offsets()
    cx, cy = grid_map.complements()
    return (np.sqrt(dx * dx + dy * dy) / SQRT_2,
            np.sqrt(dx * dx + cy * cy) / SQRT_2,
            np.sqrt(cx * cx + dy * dy) / SQRT_2,
            np.sqrt(cx * cx + cy * cy) / SQRT_2)


def corner_weights(grid_map, weighting=Weighting.INVERSE_DISTANCE):
    """Corner weights for every output sample under a weighting policy.

    ``DISTANCE`` yields the raw scaled distance, which grows away from the
    corner. ``INVERSE_DISTANCE`` yields ``1 - distance``, which is 1 on
    the corner itself. ``FRACTIONAL`` yields bilinear weights.
    """
    weighting = Weighting.parse(weighting)
    if weighting is Weighting.FRACTIONAL:
        return bilinear_weights(*grid_map.offsets())
    distances = corner_distances(grid_map)
    if weighting is Weighting.DISTANCE:
        return distances
    one = np.float32(1.0)
    return tuple(one - d for d in distances)


def to_channel(values):
    """Narrow float samples to uint8 channels.

    Values are floored (never rounded) and saturate at 0 and 255. NaN
    becomes 0.
    """
    arr = np.asarray(values)
    if arr.dtype == np.uint8:
        return arr
    arr = np.floor(arr.astype(np.float32))
    arr = np.nan_to_num(arr, nan=0.0, posinf=255.0, neginf=0.0)
    return np.clip(arr, 0, 255).astype(np.uint8)


def per_sample(func):
    """Adapt a single-coordinate blend function to whole arrays.

    ``func`` receives the values of one output coordinate (corner values
    and weights) and returns that coordinate's sample. The wrapped
    strategy calls it once per coordinate; coordinates are independent,
    so the result does not depend on visiting order.
    """
    @functools.wraps(func)
    def blend(*args):
        shape = np.shape(args[-1])
        samples = [func(*(arg[idx] for arg in args))
                   for idx in np.ndindex(*shape)]
        sample_shape = np.shape(samples[0])
        return np.asarray(samples, dtype=np.float32).reshape(
            shape + sample_shape)

    return blend


# ---------------------------------------------------------------------------
# Built-in strategies
# ---------------------------------------------------------------------------

def dot_blend(tl, bl, tr, br, dx, dy):
    """Dot each corner vector with the offset vector ``(dx, dy)``.

    The four products become the R, G, B and A channels, in corner order
    top-left, bottom-left, top-right, bottom-right.
    """
    channels = [c[..., 0] * dx + c[..., 1] * dy for c in (tl, bl, tr, br)]
    return np.stack(channels, axis=-1).astype(np.float32)


def _weighted_rgb(tl, bl, tr, br, w_tl, w_bl, w_tr, w_br):
    rgb = (tl[..., :3].astype(np.float32) * w_tl[..., None]
           + bl[..., :3].astype(np.float32) * w_bl[..., None]
           + tr[..., :3].astype(np.float32) * w_tr[..., None]
           + br[..., :3].astype(np.float32) * w_br[..., None])
    return rgb


def _with_alpha(rgb, alpha):
    out = np.empty(rgb.shape[:-1] + (4,), dtype=np.float32)
    out[..., :3] = rgb
    out[..., 3] = alpha
    return out


def average_blend(tl, bl, tr, br, d_tl, d_bl, d_tr, d_br):
    """Weighted color sum divided by four, fully opaque.

    With inverse-distance weights this gives blurry color splotches on a
    dark grid; with raw distance weights the lattice points are dark.
    """
    rgb = _weighted_rgb(tl, bl, tr, br, d_tl, d_bl, d_tr, d_br) / np.float32(4.0)
    return _with_alpha(rgb, 255.0)


def bilinear_blend(tl, bl, tr, br, w_tl, w_bl, w_tr, w_br):
    """Weighted color sum, fully opaque.

    Meant for weights that sum to 1 such as ``Weighting.FRACTIONAL``,
    where it is a plain bilinear color interpolation.
    """
    return _with_alpha(_weighted_rgb(tl, bl, tr, br, w_tl, w_bl, w_tr, w_br),
                       255.0)


def corner_blend(tl, bl, tr, br, d_tl, d_bl, d_tr, d_br):
    """Red channels of three corners as separate color channels.

    R comes from top-left, G from bottom-right and B from top-right,
    each scaled by its weight. Alpha is the bottom-right red channel.
    """
    def red(c):
        return c[..., 0].astype(np.float32)

    channels = [red(tl) * d_tl, red(br) * d_br, red(tr) * d_tr, red(br)]
    return np.stack(channels, axis=-1)
