"""
Renderers - Functions for drawing individual scene layers.

Each renderer takes a DrawingContext and draws one layer. The scene
controller calls them back to front: background, waves, bubbles, sharks.
"""

import numpy as np
from typing import Iterable, TYPE_CHECKING

from .colors import lighten_color, with_alpha

if TYPE_CHECKING:
    from .surface import DrawingContext
    from ..core.config import BackgroundGradient
    from ..world.waves import WaveField
    from ..world.bubbles import BubblePool
    from ..creature.agent import SteeringAgent


# =============================================================================
# BACKGROUND
# =============================================================================

def render_background(ctx: 'DrawingContext', gradient: 'BackgroundGradient'):
    """
    Fill the surface with the vertical background gradient.

    Colors without a matching stop are spaced evenly.
    """
    colors = list(gradient.colors)
    if not colors:
        return
    stops = [gradient.stop_for(i) for i in range(len(colors))]
    ctx.fill_vertical_gradient(colors, stops)


# =============================================================================
# WAVES
# =============================================================================

def render_waves(ctx: 'DrawingContext', field: 'WaveField', width: float, height: float):
    """Fill each wave layer from its sampled surface down to the bottom edge."""
    for osc in field:
        profile = field.profile(osc, width)
        outline = np.vstack([
            [[0.0, osc.y]],
            profile,
            [[width, height], [0.0, height]],
        ])
        ctx.fill_polygon(outline, osc.color)


# =============================================================================
# BUBBLES
# =============================================================================

def render_bubbles(ctx: 'DrawingContext', pool: 'BubblePool'):
    """White circles at each bubble's own opacity."""
    for bubble in pool:
        ctx.fill_circle(bubble.x, bubble.y, bubble.size, with_alpha('white', bubble.opacity))


# =============================================================================
# SHARKS
# =============================================================================

SHARK_DARK = '#36387f'
SHARK_MEDIUM = '#36379b'
SHARK_BELLY = '#b5b5e6'
SHARK_BLACK = '#2b2b40'
SHARK_WHITE = '#eef0ff'


def _bezier(p0, p1, p2, p3, n: int = 12) -> np.ndarray:
    """Sample a cubic bezier (excluding p0)."""
    t = np.linspace(0.0, 1.0, n + 1)[1:, None]
    p0, p1, p2, p3 = (np.asarray(p, dtype=float) for p in (p0, p1, p2, p3))
    return ((1 - t) ** 3) * p0 + 3 * ((1 - t) ** 2) * t * p1 + 3 * (1 - t) * (t ** 2) * p2 + (t ** 3) * p3


def _shark_body(size: float) -> np.ndarray:
    s = size
    start = (0.9 * s, 0.0)
    pts = [np.array([start])]
    pts.append(_bezier(start, (0.7 * s, -0.25 * s), (0.3 * s, -0.35 * s), (-0.2 * s, -0.3 * s)))
    pts.append(_bezier((-0.2 * s, -0.3 * s), (-0.6 * s, -0.25 * s), (-0.8 * s, -0.15 * s), (-1.0 * s, -0.1 * s)))
    pts.append(np.array([(-1.0 * s, 0.05 * s)]))
    pts.append(_bezier((-1.0 * s, 0.05 * s), (-0.8 * s, 0.1 * s), (-0.6 * s, 0.15 * s), (-0.2 * s, 0.2 * s)))
    pts.append(_bezier((-0.2 * s, 0.2 * s), (0.3 * s, 0.18 * s), (0.7 * s, 0.1 * s), (0.9 * s, 0.05 * s)))
    return np.vstack(pts)


def _shark_belly(size: float) -> np.ndarray:
    s = size
    start = (0.8 * s, 0.05 * s)
    pts = [np.array([start])]
    pts.append(_bezier(start, (0.6 * s, 0.1 * s), (0.2 * s, 0.12 * s), (-0.1 * s, 0.15 * s)))
    pts.append(_bezier((-0.1 * s, 0.15 * s), (-0.3 * s, 0.18 * s), (-0.5 * s, 0.2 * s), (-0.9 * s, 0.1 * s)))
    pts.append(_bezier((-0.9 * s, 0.1 * s), (-0.6 * s, 0.2 * s), (-0.3 * s, 0.25 * s), (0.3 * s, 0.2 * s)))
    return np.vstack(pts)


def shark_parts(size: float, tail_angle: float, color: str):
    """
    Shark outline in local coordinates, nose pointing +x.

    Returns:
        List of (kind, points, color) with kind 'fill' or 'stroke'
    """
    s = size
    wag = tail_angle * 6
    dorsal = np.array([(-0.1 * s, -0.3 * s), (-0.3 * s, -0.5 * s), (-0.5 * s, -0.25 * s)])
    return [
        ('fill', _shark_body(s), SHARK_MEDIUM),
        ('fill', _shark_belly(s), SHARK_BELLY),
        ('fill', np.array([(-0.9 * s, -0.1 * s), (-1.5 * s, -0.4 * s + wag), (-1.2 * s, -0.05 * s)]), SHARK_MEDIUM),
        ('fill', np.array([(-0.9 * s, 0.1 * s), (-1.5 * s, 0.3 * s + wag), (-1.2 * s, 0.05 * s)]), SHARK_BELLY),
        ('fill', np.array([(-0.9 * s, -0.08 * s), (-1.1 * s, 0.0), (-0.9 * s, 0.08 * s)]), SHARK_MEDIUM),
        ('fill', dorsal, color),
        ('stroke', dorsal[:2], lighten_color(SHARK_DARK, 20)),
        ('fill', np.array([(0.2 * s, 0.05 * s), (0.6 * s, 0.2 * s), (0.3 * s, 0.3 * s)]), SHARK_MEDIUM),
    ]


def render_shark(ctx: 'DrawingContext', agent: 'SteeringAgent'):
    """Draw one shark, mirrored when it swims left."""
    flip = -1.0 if agent.facing_left else 1.0
    origin = np.array([agent.x, agent.y])
    scale = np.array([flip, 1.0])

    for kind, points, color in shark_parts(agent.size, agent.tail_angle, agent.color):
        world = points * scale + origin
        if kind == 'fill':
            ctx.fill_polygon(world, color)
        else:
            ctx.stroke_polyline(world, color, width=2.0)

    eye = np.array([0.6 * agent.size, -0.15 * agent.size]) * scale + origin
    ctx.fill_circle(eye[0], eye[1], agent.size * 0.04, SHARK_BLACK)


def render_sharks(ctx: 'DrawingContext', agents: Iterable['SteeringAgent']):
    for agent in agents:
        render_shark(ctx, agent)
