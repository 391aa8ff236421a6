"""Easing laws for 1D noise reconstruction.

Each law is a shape curve ``f`` on [0, 1] combined with the two
neighbouring lattice values as ``(1 - f(t)) * left + f(t) * right``.
Every law returns ``left`` exactly at ``t = 0`` and ``right`` exactly at
``t = 1``.

The classic curves are the in-out variants of Robert Penner's easing
equations.
"""

import enum
import math

import numpy as np

from .config import ConfigurationError


class Ease(str, enum.Enum):
    """Closed set of interpolation laws."""

    LINEAR = "linear"
    SMOOTHSTEP = "smoothstep"
    SMOOTHERSTEP = "smootherstep"
    SMOOTHESTSTEP = "smootheststep"
    BACK = "back"
    BOUNCE = "bounce"
    CIRC = "circ"
    CUBIC = "cubic"
    ELASTIC = "elastic"
    EXPO = "expo"
    QUAD = "quad"
    QUART = "quart"
    QUINT = "quint"
    SINE = "sine"

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("_", "").replace("-", "")
        for law in cls:
            if law.value == key:
                return law
        names = ", ".join(law.value for law in cls)
        raise ConfigurationError(
            f"unknown easing law {value!r} (expected one of: {names})"
        )


# ---------------------------------------------------------------------------
# Shape curves, t in [0, 1]
# ---------------------------------------------------------------------------

def _linear(t):
    return t


def _smoothstep(t):
    return t * t * (3 - 2 * t)


def _smootherstep(t):
    return t * t * t * (t * (t * 6 - 15) + 10)


def _smootheststep(t):
    return t * t * t * t * (t * (t * (t * -20 + 70) - 84) + 35)


def _power(n):
    scale = 2 ** (n - 1)

    def curve(t):
        return np.where(t < 0.5,
                        scale * t ** n,
                        1 - (-2 * t + 2) ** n / 2)
    curve.__name__ = f"_power{n}"
    return curve


def _sine(t):
    return -(np.cos(math.pi * t) - 1) / 2


def _circ(t):
    return np.where(t < 0.5,
                    (1 - np.sqrt(1 - (2 * t) ** 2)) / 2,
                    (np.sqrt(1 - (-2 * t + 2) ** 2) + 1) / 2)


def _expo(t):
    return np.where(t < 0.5,
                    np.exp2(20 * t - 10) / 2,
                    (2 - np.exp2(-20 * t + 10)) / 2)


def _elastic(t):
    c5 = 2 * math.pi / 4.5
    wave = np.sin((20 * t - 11.125) * c5)
    return np.where(t < 0.5,
                    -(np.exp2(20 * t - 10) * wave) / 2,
                    np.exp2(-20 * t + 10) * wave / 2 + 1)


def _back(t):
    c2 = 1.70158 * 1.525
    return np.where(t < 0.5,
                    (2 * t) ** 2 * ((c2 + 1) * 2 * t - c2) / 2,
                    ((2 * t - 2) ** 2 * ((c2 + 1) * (t * 2 - 2) + c2) + 2) / 2)


def _bounce_out(x):
    n1 = 7.5625
    d1 = 2.75
    return np.select(
        [x < 1 / d1, x < 2 / d1, x < 2.5 / d1],
        [n1 * x * x,
         n1 * (x - 1.5 / d1) ** 2 + 0.75,
         n1 * (x - 2.25 / d1) ** 2 + 0.9375],
        n1 * (x - 2.625 / d1) ** 2 + 0.984375,
    )


def _bounce(t):
    return np.where(t < 0.5,
                    (1 - _bounce_out(1 - 2 * t)) / 2,
                    (1 + _bounce_out(2 * t - 1)) / 2)


_CURVES = {
    Ease.LINEAR: _linear,
    Ease.SMOOTHSTEP: _smoothstep,
    Ease.SMOOTHERSTEP: _smootherstep,
    Ease.SMOOTHESTSTEP: _smootheststep,
    Ease.BACK: _back,
    Ease.BOUNCE: _bounce,
    Ease.CIRC: _circ,
    Ease.CUBIC: _power(3),
    Ease.ELASTIC: _elastic,
    Ease.EXPO: _expo,
    Ease.QUAD: _power(2),
    Ease.QUART: _power(4),
    Ease.QUINT: _power(5),
    Ease.SINE: _sine,
}


def _with_endpoints(curve):
    """Wrap a shape curve into an ``ease(t, left, right)`` law.

    ``t`` is clamped to [0, 1] and the curve is pinned to exactly 0 and 1
    at the ends, so the boundary values come out unchanged.
    """
    def ease(t, left, right):
        t = np.clip(np.asarray(t, dtype=np.float32), 0.0, 1.0)
        # both branches of np.where are evaluated
        with np.errstate(invalid="ignore", over="ignore"):
            f = np.asarray(curve(t), dtype=np.float32)
        f = np.where(t <= 0, np.float32(0.0),
                     np.where(t >= 1, np.float32(1.0), f))
        left = np.asarray(left, dtype=np.float32)
        right = np.asarray(right, dtype=np.float32)
        return (np.float32(1.0) - f) * left + f * right

    ease.__name__ = curve.__name__.lstrip("_")
    return ease


_EASINGS = {law: _with_endpoints(curve) for law, curve in _CURVES.items()}


def get_easing(law):
    """Resolve a law (``Ease`` member or name) to ``ease(t, left, right)``."""
    return _EASINGS[Ease.parse(law)]


def ease(law, t, left, right):
    """Interpolate between ``left`` and ``right`` at ``t`` with ``law``."""
    return get_easing(law)(t, left, right)
