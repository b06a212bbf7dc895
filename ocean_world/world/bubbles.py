"""
Bubbles - Rising particles recycled through a fixed-size pool.

A bubble floats up with a small sideways wobble driven by its own
height. Once it clears the top edge it is respawned below the bottom
edge with fresh random size, speed and opacity, so the pool never grows
or shrinks mid-flight.
"""

from typing import List
import numpy as np

from ..core.constants import (
    BUBBLE_SPAWN_DEPTH, BUBBLE_SIZE_MIN, BUBBLE_SIZE_SPAN,
    BUBBLE_SPEED_MIN, BUBBLE_SPEED_SPAN, BUBBLE_OPACITY_MIN, BUBBLE_OPACITY_SPAN,
    BUBBLE_WOBBLE_FREQ, BUBBLE_WOBBLE_AMP,
)


class BubbleParticle:
    """A single rising bubble."""

    __slots__ = ('x', 'y', 'size', 'speed', 'opacity', 'respawns')

    def __init__(self, width: float, height: float, rng: np.random.Generator):
        self.x = 0.0
        self.y = 0.0
        self.size = 0.0
        self.speed = 0.0
        self.opacity = 0.0
        self.respawns = 0
        self.reset(width, height, rng)

    def reset(self, width: float, height: float, rng: np.random.Generator):
        """Respawn somewhere in the band just below the visible area."""
        self.x = rng.random() * width
        self.y = height + rng.random() * BUBBLE_SPAWN_DEPTH
        self.size = BUBBLE_SIZE_MIN + rng.random() * BUBBLE_SIZE_SPAN
        self.speed = BUBBLE_SPEED_MIN + rng.random() * BUBBLE_SPEED_SPAN
        self.opacity = BUBBLE_OPACITY_MIN + rng.random() * BUBBLE_OPACITY_SPAN

    def update(self, width: float, height: float, rng: np.random.Generator) -> bool:
        """
        Rise one tick.

        Returns:
            True if the bubble left the top edge and was respawned
        """
        self.y -= self.speed
        self.x += np.sin(self.y * BUBBLE_WOBBLE_FREQ) * BUBBLE_WOBBLE_AMP

        if self.y < -self.size:
            self.reset(width, height, rng)
            self.respawns += 1
            return True
        return False


class BubblePool:
    """Fixed-size, continuously recycled set of bubbles."""

    def __init__(self):
        self.particles: List[BubbleParticle] = []

    def __len__(self) -> int:
        return len(self.particles)

    def __iter__(self):
        return iter(self.particles)

    @property
    def is_empty(self) -> bool:
        return not self.particles

    def create(self, count: int, width: float, height: float, rng: np.random.Generator):
        """Replace the pool with `count` freshly spawned bubbles."""
        self.particles = [BubbleParticle(width, height, rng) for _ in range(count)]

    def clear(self):
        self.particles = []

    def advance(self, width: float, height: float, rng: np.random.Generator) -> int:
        """Move every bubble one tick. Returns the number respawned."""
        respawned = 0
        for bubble in self.particles:
            if bubble.update(width, height, rng):
                respawned += 1
        return respawned
