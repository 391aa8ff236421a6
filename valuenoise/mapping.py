"""Toroidal mapping from output coordinates to lattice cells.

An output index ``x`` in ``[0, out_len)`` lands on the lattice position
``x * scale / out_len``. Its two neighbours are the floor cell and the
next cell, where the next cell after the last one is cell 0. All
arithmetic is single precision.
"""

from dataclasses import dataclass
from typing import NamedTuple

import numpy as np

from .config import check_dimension


class AxisSample(NamedTuple):
    """Mapping of a single output index along one axis."""
    position: float
    floor: int
    wrapped: int
    offset: float


@dataclass(frozen=True)
class AxisMap:
    """Mapping of every output index along one axis.

    All arrays have length ``out_len``.
    """
    out_len: int
    scale: int
    position: np.ndarray    # float32 lattice coordinate
    floor: np.ndarray       # int64 floor neighbour
    wrapped: np.ndarray     # int64 next neighbour, 0 past the last cell
    offset: np.ndarray      # float32 position - floor, in [0, 1)
    complement: np.ndarray  # float32 (floor + 1) - position


def _wrap_next(floor, scale):
    # "equals scale", not modulo: floor never exceeds scale - 1
    nxt = floor + 1
    return np.where(nxt == scale, 0, nxt)


_BELOW_ONE = np.nextafter(np.float32(1.0), np.float32(0.0))


def _split(position, scale):
    """Split float32 lattice positions into neighbours and offsets.

    On axes of about 2**24 samples the last positions round up to exactly
    ``scale``; those stay in the last cell with an offset just below 1.
    """
    floor = np.minimum(np.floor(position).astype(np.int64), scale - 1)
    floor_f = floor.astype(np.float32)
    offset = np.minimum(position - floor_f, _BELOW_ONE)
    complement = np.maximum((floor_f + np.float32(1.0)) - position,
                            np.float32(0.0))
    return floor, _wrap_next(floor, scale), offset, complement


def map_index(index, out_len, scale):
    """Map one output index onto the lattice.

    Args:
        index: Output index, ``0 <= index < out_len``.
        out_len: Output length along this axis.
        scale: Lattice length along this axis.

    Returns:
        AxisSample with the lattice position, floor and wrapped
        neighbours, and the fractional offset.
    """
    out_len = check_dimension("out_len", out_len)
    scale = check_dimension("scale", scale)
    if not 0 <= index < out_len:
        raise IndexError(f"index {index} outside [0, {out_len})")

    position = np.float32(index) * np.float32(scale) / np.float32(out_len)
    floor, wrapped, offset, _ = _split(np.asarray(position), scale)
    return AxisSample(float(position), int(floor), int(wrapped),
                      float(offset))


def map_axis(out_len, scale):
    """Map every output index along one axis onto the lattice."""
    out_len = check_dimension("out_len", out_len)
    scale = check_dimension("scale", scale)

    position = (np.arange(out_len, dtype=np.float32) * np.float32(scale)
                / np.float32(out_len))
    floor, wrapped, offset, complement = _split(position, scale)

    return AxisMap(
        out_len=out_len,
        scale=scale,
        position=position,
        floor=floor,
        wrapped=wrapped,
        offset=offset,
        complement=complement,
    )


@dataclass(frozen=True)
class GridMap:
    """Mapping of a 2D output field onto a 2D lattice."""
    x: AxisMap
    y: AxisMap

    @property
    def shape(self):
        """Output shape as (out_height, out_width)."""
        return (self.y.out_len, self.x.out_len)

    def offsets(self):
        """Return ``(dx, dy)`` broadcast to the output shape."""
        dx = np.broadcast_to(self.x.offset[None, :], self.shape)
        dy = np.broadcast_to(self.y.offset[:, None], self.shape)
        return dx, dy

    def complements(self):
        """Return ``(1 - dx, 1 - dy)`` as measured from the next cells."""
        cx = np.broadcast_to(self.x.complement[None, :], self.shape)
        cy = np.broadcast_to(self.y.complement[:, None], self.shape)
        return cx, cy

    def cells(self):
        """Return the (y, x) index arrays of the four neighbours.

        Order is top-left, bottom-left, top-right, bottom-right.
        """
        fy = self.y.floor[:, None]
        wy = self.y.wrapped[:, None]
        fx = self.x.floor[None, :]
        wx = self.x.wrapped[None, :]
        return (fy, fx), (wy, fx), (fy, wx), (wy, wx)

    def gather(self, lattice):
        """Look up the four neighbour values for every output sample.

        Args:
            lattice: Array of shape (scale_y, scale_x, ...).

        Returns:
            Tuple ``(tl, bl, tr, br)``, each of shape
            (out_height, out_width, ...).
        """
        expected = (self.y.scale, self.x.scale)
        if lattice.shape[:2] != expected:
            raise ValueError(
                f"lattice shape {lattice.shape[:2]} does not match "
                f"mapping scale {expected}"
            )
        return tuple(lattice[iy, ix] for iy, ix in self.cells())


def map_grid(out_width, out_height, scale_x, scale_y):
    """Map a ``out_width x out_height`` field onto a ``scale_x x scale_y``
    lattice."""
    return GridMap(x=map_axis(out_width, scale_x),
                   y=map_axis(out_height, scale_y))
