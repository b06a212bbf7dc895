"""
Drawing surface - matplotlib figure used as a pixel canvas.

The scene draws in pixel coordinates with y pointing down, like a 2D
canvas. MatplotlibSurface sets up a full-bleed axes with those limits and
hands out a MatplotlibContext for each frame; once the figure is closed
no context is available and the next frame fails loudly.
"""

from typing import Optional, Sequence, Tuple

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from matplotlib.patches import Circle, Polygon

from ..core.errors import SurfaceError
from .colors import parse_color, gradient_column


class DrawingContext:
    """2D drawing operations the scene renderers rely on."""

    def clear(self):
        raise NotImplementedError

    def fill_vertical_gradient(self, colors: Sequence, stops: Sequence[float]):
        raise NotImplementedError

    def fill_polygon(self, points, color):
        raise NotImplementedError

    def fill_circle(self, x: float, y: float, radius: float, color):
        raise NotImplementedError

    def stroke_polyline(self, points, color, width: float = 1.0):
        raise NotImplementedError

    def present(self):
        raise NotImplementedError


class Surface:
    """A drawing target with a fixed pixel extent."""

    width: float
    height: float

    def get_context(self) -> Optional[DrawingContext]:
        raise NotImplementedError

    def resize(self, width: float, height: float):
        self.width = float(width)
        self.height = float(height)

    def release(self):
        pass


class MatplotlibContext(DrawingContext):
    """
    Draws onto a matplotlib axes in painter's order.

    Every call gets a higher zorder than the previous one so the back to
    front layering follows call order regardless of artist type.
    """

    def __init__(self, surface: 'MatplotlibSurface'):
        self.surface = surface
        self.ax = surface.ax
        self._z = 0.0

    def _next_z(self) -> float:
        self._z += 1.0
        return self._z

    def clear(self):
        self.ax.clear()
        self._z = 0.0
        self.ax.set_xlim(0, self.surface.width)
        self.ax.set_ylim(self.surface.height, 0)
        self.ax.set_axis_off()

    def fill_vertical_gradient(self, colors: Sequence, stops: Sequence[float]):
        column = gradient_column(colors, stops)
        self.ax.imshow(
            column, extent=(0, self.surface.width, self.surface.height, 0),
            aspect='auto', interpolation='bilinear', zorder=self._next_z()
        )
        # imshow resets the limits
        self.ax.set_xlim(0, self.surface.width)
        self.ax.set_ylim(self.surface.height, 0)

    def fill_polygon(self, points, color):
        self.ax.add_patch(Polygon(
            np.asarray(points, dtype=float), closed=True,
            fc=parse_color(color), ec='none', zorder=self._next_z()
        ))

    def fill_circle(self, x: float, y: float, radius: float, color):
        self.ax.add_patch(Circle(
            (x, y), radius, fc=parse_color(color), ec='none', zorder=self._next_z()
        ))

    def stroke_polyline(self, points, color, width: float = 1.0):
        pts = np.asarray(points, dtype=float)
        self.ax.plot(pts[:, 0], pts[:, 1], color=parse_color(color), lw=width,
                     solid_capstyle='round', zorder=self._next_z())

    def present(self):
        self.surface.figure.canvas.draw_idle()


class MatplotlibSurface(Surface):
    """
    A matplotlib figure used as the scene canvas.

    Args:
        figure: Existing figure (a new pyplot figure is created if None)
        width, height: Pixel size for a new figure
        label: Label for a new figure
    """

    def __init__(self, figure: Optional[Figure] = None, width: int = 960,
                 height: int = 540, label: str = 'Ocean World'):
        if figure is None:
            dpi = 100
            figure = plt.figure(label, figsize=(width / dpi, height / dpi), dpi=dpi)
        self.figure = figure
        self.figure.patch.set_alpha(0.0)
        self.ax = self.figure.add_axes([0, 0, 1, 1])
        self.ax.set_axis_off()
        self.width, self.height = self._pixel_size()
        self._released = False
        self._context = MatplotlibContext(self)

    def _pixel_size(self) -> Tuple[float, float]:
        bbox = self.figure.bbox
        return float(bbox.width), float(bbox.height)

    @property
    def is_open(self) -> bool:
        if self._released:
            return False
        number = getattr(self.figure, 'number', None)
        if number is None:
            return True
        return plt.fignum_exists(number)

    def get_context(self) -> Optional[MatplotlibContext]:
        return self._context if self.is_open else None

    def release(self):
        self._released = True


def resolve_surface(identifier) -> Surface:
    """
    Turn a surface identifier into a Surface.

    Accepts a Surface, a matplotlib Figure, or the label of an open
    pyplot figure.

    Raises:
        SurfaceError: If nothing usable is found
    """
    if isinstance(identifier, Surface):
        return identifier
    if isinstance(identifier, Figure):
        return MatplotlibSurface(identifier)
    if isinstance(identifier, str):
        if identifier not in plt.get_figlabels():
            raise SurfaceError(f"Figure with label '{identifier}' not found")
        return MatplotlibSurface(plt.figure(identifier))
    raise SurfaceError(f"Unusable drawing surface: {identifier!r}")
