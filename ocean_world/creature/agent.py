"""
Steering Agent - A shark that swims toward a target.

Two modes:
- PURSUING: target tracks the pointer every tick
- AUTONOMOUS: target is a random point inset from the edges, re-drawn
  whenever the retarget deadline passes

Locomotion is the same in both modes: turn to face the target, swim
`speed` pixels along the heading unless already within ARRIVAL_EPSILON,
then clamp into the surface. The tail wags back and forth on its own
schedule regardless of whether the shark is moving.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple
import numpy as np

from ..core.constants import (
    ARRIVAL_EPSILON, TARGET_MARGIN_FACTOR, RETARGET_MIN_DELAY,
    TAIL_STEP, TAIL_LIMIT, CREATURE_HUE_RANGE,
)
from ..core.utils import clamp, inset_uniform


class SteeringMode(Enum):
    PURSUING = 'pursuing'
    AUTONOMOUS = 'autonomous'


@dataclass
class SteeringAgent:
    """
    Steering state of a single shark.

    Attributes:
        x, y: Position (pixels, y down)
        size: Body size; also the boundary inset
        speed: Pixels per tick
        heading: Last heading toward the target (radians)
        tail_angle: Current tail deflection (radians)
        tail_direction: +1 or -1
        target_x, target_y: Current target
        mode: SteeringMode
        next_retarget: Monotonic ms deadline for the next autonomous target
        color: Display color
    """
    x: float
    y: float
    size: float
    speed: float
    target_x: float
    target_y: float
    next_retarget: float
    heading: float = 0.0
    tail_angle: float = 0.0
    tail_direction: int = 1
    mode: SteeringMode = SteeringMode.AUTONOMOUS
    color: str = 'hsl(200, 70%, 40%)'

    @property
    def is_pursuing(self) -> bool:
        return self.mode is SteeringMode.PURSUING

    @property
    def facing_left(self) -> bool:
        return np.cos(self.heading) < 0

    def distance_to_target(self) -> float:
        return float(np.hypot(self.target_x - self.x, self.target_y - self.y))

    # === Mode transitions ===

    def pursue(self, x: float, y: float):
        """Enter PURSUING with the pointer as target."""
        self.mode = SteeringMode.PURSUING
        self.target_x = x
        self.target_y = y

    def retarget(self, width: float, height: float, now: float,
                 interval: float, rng: np.random.Generator):
        """
        Enter AUTONOMOUS with a fresh random target and deadline.

        The target is inset from each edge by TARGET_MARGIN_FACTOR x size.
        """
        margin = self.size * TARGET_MARGIN_FACTOR
        self.mode = SteeringMode.AUTONOMOUS
        self.target_x = inset_uniform(rng, width, margin)
        self.target_y = inset_uniform(rng, height, margin)
        self.next_retarget = now + rng.random() * interval + RETARGET_MIN_DELAY

    # === Per-tick update ===

    def update(self, width: float, height: float, now: float, interval: float,
               rng: np.random.Generator,
               pointer: Optional[Tuple[float, float]] = None) -> bool:
        """
        Advance one tick.

        Args:
            width, height: Surface extent
            now: Monotonic ms, read once per frame by the caller
            interval: Retarget interval (ms)
            rng: Random generator
            pointer: Pointer position if it is inside the surface and
                pursuit is enabled, else None

        Returns:
            True if a new autonomous target was drawn this tick
        """
        retargeted = False
        # Pointer presence wins over any pending deadline
        if pointer is not None:
            self.pursue(*pointer)
        else:
            self.mode = SteeringMode.AUTONOMOUS
            if now >= self.next_retarget:
                self.retarget(width, height, now, interval, rng)
                retargeted = True

        dx = self.target_x - self.x
        dy = self.target_y - self.y
        self.heading = float(np.arctan2(dy, dx))

        if np.hypot(dx, dy) > ARRIVAL_EPSILON:
            self.x += np.cos(self.heading) * self.speed
            self.y += np.sin(self.heading) * self.speed

        self.x = clamp(self.x, self.size, width - self.size)
        self.y = clamp(self.y, self.size, height - self.size)

        self.tail_angle += TAIL_STEP * self.tail_direction
        if abs(self.tail_angle) > TAIL_LIMIT:
            self.tail_direction *= -1

        return retargeted


def spawn_agent(width: float, height: float, size: float, speed: float,
                now: float, interval: float, rng: np.random.Generator,
                pointer: Optional[Tuple[float, float]] = None) -> SteeringAgent:
    """
    Create a shark at a random in-bounds position.

    The first deadline is drawn from [now, now + interval) so a fresh
    school does not retarget in lockstep. With a pointer the shark starts
    out pursuing it.
    """
    margin = size * TARGET_MARGIN_FACTOR
    agent = SteeringAgent(
        x=clamp(rng.random() * width, size, width - size),
        y=clamp(rng.random() * height, size, height - size),
        size=size,
        speed=speed,
        target_x=inset_uniform(rng, width, margin),
        target_y=inset_uniform(rng, height, margin),
        next_retarget=now + rng.random() * interval,
        color=f'hsl({rng.random() * CREATURE_HUE_RANGE:.1f}, 70%, 40%)',
    )
    if pointer is not None:
        agent.pursue(*pointer)
    return agent
