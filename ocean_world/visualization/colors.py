"""
Color utilities for visualization.

Parses the CSS-style color strings used in scene configuration
(hex, rgb/rgba, hsl/hsla) into matplotlib RGBA tuples, lightens colors,
and builds interpolated gradient columns.
"""

import colorsys
import re
from typing import Sequence, Tuple

import numpy as np
import matplotlib.colors as mcolors

RGBA = Tuple[float, float, float, float]

_RGB_RE = re.compile(
    r'^rgba?\(\s*([\d.]+)\s*,\s*([\d.]+)\s*,\s*([\d.]+)\s*(?:,\s*([\d.]+)\s*)?\)$'
)
_HSL_RE = re.compile(
    r'^hsla?\(\s*([\d.]+)\s*,\s*([\d.]+)%\s*,\s*([\d.]+)%\s*(?:,\s*([\d.]+)\s*)?\)$'
)


def parse_color(color) -> RGBA:
    """
    Convert a color spec to an RGBA float tuple.

    Accepts 'rgb(r, g, b)', 'rgba(r, g, b, a)', 'hsl(h, s%, l%)',
    'hsla(h, s%, l%, a)' and anything matplotlib understands
    ('#1a2980', '#fff', 'white', (r, g, b), ...).

    Raises:
        ValueError: If the color cannot be parsed
    """
    if isinstance(color, str):
        spec = color.strip().lower()
        m = _RGB_RE.match(spec)
        if m:
            r, g, b = (min(255.0, float(v)) / 255.0 for v in m.groups()[:3])
            a = float(m.group(4)) if m.group(4) is not None else 1.0
            return (r, g, b, min(1.0, a))
        m = _HSL_RE.match(spec)
        if m:
            h = (float(m.group(1)) % 360.0) / 360.0
            s = min(100.0, float(m.group(2))) / 100.0
            light = min(100.0, float(m.group(3))) / 100.0
            a = float(m.group(4)) if m.group(4) is not None else 1.0
            r, g, b = colorsys.hls_to_rgb(h, light, s)
            return (r, g, b, min(1.0, a))
        color = spec
    return tuple(float(c) for c in mcolors.to_rgba(color))


def lighten_color(color, percent: float) -> str:
    """Lighten each channel by `percent` of full scale, returned as hex."""
    r, g, b, _ = parse_color(color)
    amt = round(2.55 * percent) / 255.0
    return mcolors.to_hex((min(1.0, r + amt), min(1.0, g + amt), min(1.0, b + amt)))


def with_alpha(color, alpha: float) -> RGBA:
    r, g, b, _ = parse_color(color)
    return (r, g, b, float(np.clip(alpha, 0.0, 1.0)))


def gradient_column(colors: Sequence, stops: Sequence[float], samples: int = 256) -> np.ndarray:
    """
    Interpolate a vertical gradient.

    Args:
        colors: Color specs, top to bottom
        stops: Stop positions (0-1) matching colors
        samples: Number of rows

    Returns:
        (samples, 1, 4) RGBA array suitable for imshow
    """
    if not colors:
        return np.zeros((samples, 1, 4))
    rgba = np.array([parse_color(c) for c in colors])
    pos = np.asarray(stops, dtype=float)
    order = np.argsort(pos, kind='stable')
    pos, rgba = pos[order], rgba[order]

    t = np.linspace(0.0, 1.0, samples)
    column = np.zeros((samples, 1, 4))
    for ch in range(4):
        column[:, 0, ch] = np.interp(t, pos, rgba[:, ch])
    return column
