"""
Visualization System - matplotlib surface, scheduling and rendering.

- colors: CSS-style color parsing and gradients
- surface: Pixel-space drawing surface and context
- scheduler: Per-refresh callback scheduling
- renderers: Background, wave, bubble and shark layers
- main_vis: Interactive window wiring (pointer, keys, resize)
"""

from .colors import parse_color, lighten_color, gradient_column
from .surface import (
    Surface, DrawingContext, MatplotlibSurface, MatplotlibContext, resolve_surface
)
from .scheduler import FrameHandle, RefreshScheduler, TimerScheduler, ManualScheduler
from .renderers import render_background, render_waves, render_bubbles, render_sharks
