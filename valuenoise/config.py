"""Parameter validation and defaults shared by the noise kernels."""

import numbers

# Defaults of the demo programs
DEFAULT_OUT_SIZE = 1024
DEFAULT_SCALE = 64
DEFAULT_SEED = 47
DEFAULT_GRID_LEN = 64
DEFAULT_OUTPUT_LEN = 1024

MAX_SEED = 2**64 - 1


class ConfigurationError(ValueError):
    """Raised when a kernel is constructed with unusable parameters."""


def check_dimension(name, value):
    """Return ``value`` as an int, or raise if it is not a positive integer.

    Every lattice and output size is used as a divisor by the coordinate
    mapper, so zero is rejected here instead of failing mid-evaluation.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ConfigurationError(
            f"{name} must be an integer, got {type(value).__name__}"
        )
    if value < 1:
        raise ConfigurationError(f"{name} must be >= 1, got {value}")
    return int(value)


def check_seed(seed):
    """Return ``seed`` as an int in the unsigned 64-bit range."""
    if isinstance(seed, bool) or not isinstance(seed, numbers.Integral):
        raise ConfigurationError(
            f"seed must be an integer, got {type(seed).__name__}"
        )
    if not 0 <= seed <= MAX_SEED:
        raise ConfigurationError(
            f"seed must be in [0, 2**64), got {seed}"
        )
    return int(seed)


def check_alpha(alpha):
    """Return ``alpha`` as an int channel value in [0, 255]."""
    if isinstance(alpha, bool) or not isinstance(alpha, numbers.Integral):
        raise ConfigurationError(
            f"alpha must be an integer, got {type(alpha).__name__}"
        )
    if not 0 <= alpha <= 255:
        raise ConfigurationError(f"alpha must be in [0, 255], got {alpha}")
    return int(alpha)
