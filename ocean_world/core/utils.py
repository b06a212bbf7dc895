"""
Utility functions for Ocean World.

Clock, clamping and random sampling helpers shared by the simulation.
"""

import time

import numpy as np


def now_ms() -> float:
    """Monotonic clock in milliseconds."""
    return time.monotonic() * 1000.0


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp value into [lo, hi]. If hi < lo the range collapses to lo."""
    hi = max(lo, hi)
    return lo if value < lo else hi if value > hi else value


def inset_uniform(rng: np.random.Generator, extent: float, margin: float) -> float:
    """
    Sample uniformly from [margin, extent - margin].

    When the extent is too small for the margin the sample collapses to
    the midpoint of the extent.
    """
    span = extent - 2.0 * margin
    if span <= 0:
        return extent / 2.0
    return margin + rng.random() * span


def make_rng(seed=None) -> np.random.Generator:
    """Create the random generator used by a scene."""
    return np.random.default_rng(seed)
