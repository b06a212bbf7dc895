"""
Wave Field - Layered sinusoidal water surface.

Each layer is an independent oscillator whose baseline, amplitude and
spatial frequency grow with its index, so deeper layers sit lower and
swell harder. Phases accumulate without bound; the sine is evaluated on
the phase wrapped to [0, 2*pi) so precision holds over long sessions.
"""

from typing import List, Sequence
from dataclasses import dataclass
import numpy as np

from ..core.constants import (
    WAVE_BASELINE_STEP, WAVE_AMPLITUDE_BASE, WAVE_AMPLITUDE_STEP,
    WAVE_FREQUENCY_BASE, WAVE_FREQUENCY_STEP, WAVE_SPEED_BASE, WAVE_SPEED_STEP,
    WAVE_SAMPLE_STEP, DEFAULT_WAVE_COLORS,
)

TWO_PI = 2 * np.pi


@dataclass
class WaveOscillator:
    """One layer of the wave field."""
    y: float            # Baseline (pixels from top)
    amplitude: float
    frequency: float    # Radians per pixel
    speed: float        # Phase advance per tick
    color: str
    phase: float = 0.0  # Accumulated, only ever increases

    @classmethod
    def for_layer(cls, index: int, baseline_y: float, color: str) -> 'WaveOscillator':
        """Build layer `index` with parameters scaled linearly by index."""
        return cls(
            y=baseline_y + index * WAVE_BASELINE_STEP,
            amplitude=WAVE_AMPLITUDE_BASE + index * WAVE_AMPLITUDE_STEP,
            frequency=WAVE_FREQUENCY_BASE + index * WAVE_FREQUENCY_STEP,
            speed=WAVE_SPEED_BASE + index * WAVE_SPEED_STEP,
            color=color,
        )

    @property
    def wrapped_phase(self) -> float:
        return float(np.mod(self.phase, TWO_PI))


class WaveField:
    """
    Owns the wave oscillators.

    The set is always replaced wholesale by rebuild(); advance() moves
    every phase forward by its own speed.
    """

    def __init__(self):
        self.oscillators: List[WaveOscillator] = []
        self.rebuild_count = 0

    def __len__(self) -> int:
        return len(self.oscillators)

    def __iter__(self):
        return iter(self.oscillators)

    def rebuild(self, layer_count: int, colors: Sequence[str], baseline_y: float):
        """
        Replace the oscillator set.

        Args:
            layer_count: Number of layers
            colors: Palette assigned round-robin (any length; empty falls
                back to the built-in palette)
            baseline_y: Water surface y of the top layer
        """
        palette = list(colors) or list(DEFAULT_WAVE_COLORS)
        self.oscillators = [
            WaveOscillator.for_layer(i, baseline_y, palette[i % len(palette)])
            for i in range(layer_count)
        ]
        self.rebuild_count += 1

    def advance(self):
        """Advance every oscillator's phase by its speed."""
        for osc in self.oscillators:
            osc.phase += osc.speed

    @staticmethod
    def height_at(osc: WaveOscillator, x):
        """
        Surface height of `osc` at horizontal position x.

        Accepts a scalar or a numpy array of x positions.
        """
        return osc.y + np.sin(np.asarray(x) * osc.frequency + osc.wrapped_phase) * osc.amplitude

    def profile(self, osc: WaveOscillator, width: float,
                step: float = WAVE_SAMPLE_STEP) -> np.ndarray:
        """
        Sample the surface across [0, width) at a fixed step.

        Returns:
            (N, 2) array of (x, y) points
        """
        xs = np.arange(0.0, max(width, 0.0), step)
        ys = self.height_at(osc, xs)
        return np.column_stack([xs, ys])
