"""
Scene Controller - Orchestrates the ocean scene.

Owns the sharks, the wave field and the bubble pool, routes pointer
input to the sharks, drives the update -> composite loop through a
refresh scheduler, and applies live configuration changes by rebuilding
only the collections a change actually affects.

Everything runs on one thread: a frame completes before the next one is
scheduled, and pointer handlers only run between frames, so no shark is
ever observed half-updated.
"""

from dataclasses import replace
from typing import Callable, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from ..core.config import SceneConfiguration, ConfigPatch, GradientPatch
from ..core.constants import RANDOM_SPEED_MIN, RANDOM_SPEED_SPAN
from ..core.errors import OceanWorldError, SurfaceError
from ..core.utils import now_ms, make_rng
from ..creature.agent import SteeringAgent, spawn_agent
from ..world.waves import WaveField
from ..world.bubbles import BubblePool
from ..visualization.surface import Surface, MatplotlibSurface, resolve_surface
from ..visualization.scheduler import (
    FrameHandle, RefreshScheduler, ManualScheduler, TimerScheduler
)
from ..visualization.renderers import (
    render_background, render_waves, render_bubbles, render_sharks
)
from ..events.logger import event_log
from ..events.console_log import console_log


class SceneController:
    """
    The ocean scene.

    Frame order (back to front) is fixed:
    background -> waves (advance + draw) -> bubbles (advance + draw)
    -> sharks (steer + draw).
    """

    def __init__(self, surface: Union[Surface, str, object],
                 options: Optional[Mapping] = None, *,
                 scheduler: Optional[RefreshScheduler] = None,
                 clock: Optional[Callable[[], float]] = None,
                 rng: Optional[np.random.Generator] = None,
                 autostart: bool = True):
        """
        Initialize the scene.

        Args:
            surface: Surface, matplotlib Figure, or label of an open figure
            options: Optional configuration values (omitted ones use defaults)
            scheduler: Refresh scheduler (timer-based for matplotlib
                surfaces, manual otherwise)
            clock: Monotonic millisecond clock
            rng: numpy random Generator
            autostart: Start animating immediately

        Raises:
            SurfaceError: If the surface or its drawing context is unavailable
            ConfigurationError: If an option is out of its domain
        """
        self.surface = resolve_surface(surface)
        if self.surface.get_context() is None:
            raise SurfaceError("Could not get a drawing context from the surface")

        self.config = SceneConfiguration.from_options(options)
        self.scheduler = scheduler or self._default_scheduler()
        self._clock = clock or now_ms
        self.rng = rng if rng is not None else make_rng()

        self.agents: List[SteeringAgent] = []
        self.waves = WaveField()
        self.bubbles = BubblePool()
        self.pointer: Optional[Tuple[float, float]] = None
        self.water_surface_y = 0.0

        self.frame_handle: Optional[FrameHandle] = None
        self.frame_count = 0
        self._running = False
        self._destroyed = False

        self._build_waves()
        self._build_agents()
        if self.config.enable_bubbles:
            self._build_bubbles()

        console_log().log(
            f"[Init] Ocean scene {self.width:.0f}x{self.height:.0f} | "
            f"sharks:{len(self.agents)} waves:{len(self.waves)} bubbles:{len(self.bubbles)}"
        )

        if autostart:
            self.start()

    def _default_scheduler(self) -> RefreshScheduler:
        if isinstance(self.surface, MatplotlibSurface):
            return TimerScheduler(self.surface.figure)
        return ManualScheduler()

    # === Properties ===

    @property
    def width(self) -> float:
        return self.surface.width

    @property
    def height(self) -> float:
        return self.surface.height

    @property
    def is_running(self) -> bool:
        return self._running

    def _pursuit_target(self) -> Optional[Tuple[float, float]]:
        if self.pointer is not None and self.config.enable_pursuit:
            return self.pointer
        return None

    # === Collection builders ===

    def _build_waves(self):
        self.water_surface_y = self.height * self.config.water_level
        self.waves.rebuild(self.config.wave_count, self.config.wave_colors, self.water_surface_y)
        console_log().log(f"[Waves] {len(self.waves)} layers at y={self.water_surface_y:.0f}")
        event_log().log_waves(self.frame_count, len(self.waves),
                              self.config.wave_colors, self.water_surface_y)

    def _spawn(self, now: float) -> SteeringAgent:
        return spawn_agent(
            self.width, self.height, self.config.creature_size, self.config.creature_speed,
            now, self.config.retarget_interval, self.rng, pointer=self._pursuit_target()
        )

    def _build_agents(self):
        now = self._clock()
        self.agents = [self._spawn(now) for _ in range(self.config.creature_count)]
        console_log().log(f"[Shark] School rebuilt: {len(self.agents)}")
        event_log().log_agents(self.frame_count, 'rebuilt', len(self.agents))

    def _build_bubbles(self):
        self.bubbles.create(self.config.bubble_count, self.width, self.height, self.rng)
        console_log().log(f"[Bubbles] Pool created: {len(self.bubbles)}")
        event_log().log('bubbles_created', self.frame_count, count=len(self.bubbles))

    def _release_pursuit(self):
        """Send every shark off to a fresh random target."""
        now = self._clock()
        for agent in self.agents:
            agent.retarget(self.width, self.height, now, self.config.retarget_interval, self.rng)

    # === Frame loop ===

    def advance_frame(self):
        """
        Update and composite one frame.

        Raises:
            SurfaceError: If the drawing context is gone
        """
        ctx = self.surface.get_context()
        if ctx is None:
            raise SurfaceError("Drawing context lost; the surface is no longer usable")

        now = self._clock()
        width, height = self.width, self.height
        config = self.config

        ctx.clear()

        if config.enable_background:
            render_background(ctx, config.background_gradient)

        self.waves.advance()
        render_waves(ctx, self.waves, width, height)

        if config.enable_bubbles:
            self.bubbles.advance(width, height, self.rng)
            render_bubbles(ctx, self.bubbles)

        target = self._pursuit_target()
        for i, agent in enumerate(tuple(self.agents)):
            if agent.update(width, height, now, config.retarget_interval, self.rng, target):
                console_log().log(f"[Retarget] Shark {i} -> ({agent.target_x:.0f}, {agent.target_y:.0f})")
        render_sharks(ctx, self.agents)

        ctx.present()
        self.frame_count += 1

    def _animate(self):
        self.frame_handle = None
        if not self._running:
            return
        try:
            self.advance_frame()
        except Exception as e:
            self._running = False
            console_log().log(f"[Error] Animation stopped: {e}")
            raise

        summary = console_log().get_summary(self.frame_count)
        if summary:
            console_log().log(summary)

        if self._running:
            self.frame_handle = self.scheduler.request(self._animate)

    def start(self):
        """Start (or restart) the animation loop. Any pending frame is cancelled first."""
        if self._destroyed:
            raise OceanWorldError("Scene has been destroyed")
        if self.frame_handle is not None:
            self.frame_handle.cancel()
            self.frame_handle = None
        if not self._running:
            console_log().log("[Scene] Animation started")
            event_log().log('scene_start', self.frame_count)
        self._running = True
        self._animate()

    def stop(self):
        """Stop the animation loop. No frame runs after this returns."""
        if self.frame_handle is not None:
            self.frame_handle.cancel()
            self.frame_handle = None
        if self._running:
            self._running = False
            console_log().log(f"[Scene] Animation stopped at frame {self.frame_count}")
            event_log().log('scene_stop', self.frame_count)

    def destroy(self):
        """Stop and release the surface."""
        self.stop()
        if not self._destroyed:
            self._destroyed = True
            self.surface.release()
            event_log().flush()

    # === Pointer input ===

    def set_pointer_position(self, x: float, y: float):
        """
        Pointer moved to (x, y) in surface coordinates.

        With pursuit enabled every shark starts chasing the pointer.
        Coordinates outside the surface count as the pointer leaving.
        """
        if not (0 <= x <= self.width and 0 <= y <= self.height):
            self.set_pointer_absent()
            return
        if self.pointer is None:
            console_log().log(f"[Pointer] Entered at ({x:.0f}, {y:.0f})")
        self.pointer = (float(x), float(y))
        if self.config.enable_pursuit:
            for agent in self.agents:
                agent.pursue(*self.pointer)

    def set_pointer_absent(self):
        """
        Pointer left the surface: every shark picks its own target.

        Only the transition from inside to outside releases the sharks.
        """
        if self.pointer is None:
            return
        console_log().log("[Pointer] Left surface")
        self.pointer = None
        self._release_pursuit()

    # === Shark collection ===

    def add_agent(self) -> SteeringAgent:
        agent = self._spawn(self._clock())
        self.agents.append(agent)
        console_log().log(f"[Shark] Added ({len(self.agents)} total)")
        event_log().log_agents(self.frame_count, 'added', len(self.agents))
        return agent

    def remove_agent(self) -> Optional[SteeringAgent]:
        """Remove the most recently added shark. No-op when there are none."""
        if not self.agents:
            return None
        agent = self.agents.pop()
        console_log().log(f"[Shark] Removed ({len(self.agents)} left)")
        event_log().log_agents(self.frame_count, 'removed', len(self.agents))
        return agent

    # === Configuration ===

    def reconfigure(self, patch: Union[ConfigPatch, Mapping, None] = None, **changes) -> SceneConfiguration:
        """
        Apply a partial configuration update.

        Side effects per field:
        - wave_count, water_level, wave_colors: wave rebuild when the value
          differs from the current one (colors compared by value)
        - creature_count: shark rebuild when the count differs
        - creature_speed, creature_size: applied to live sharks in place
        - bubble_count: pool rebuild when a pool exists
        - enable_bubbles: pool created when enabled and empty
        - enable_pursuit: disabling releases every shark to a random target
        - background_gradient: colors/stops merged field by field
        - retarget_interval, enable_background: stored only

        Unrecognized keys are ignored.

        Raises:
            ConfigurationError: If a value is out of its domain (nothing
                is changed in that case)
        """
        if isinstance(patch, ConfigPatch):
            extra = ConfigPatch.from_mapping(changes)
            patch = replace(patch, **{k: getattr(extra, k) for k in extra.changed_fields()})
            ignored = ConfigPatch.unrecognized(changes)
        else:
            mapping = dict(patch or {})
            mapping.update(changes)
            ignored = ConfigPatch.unrecognized(mapping)
            patch = ConfigPatch.from_mapping(mapping)

        old = self.config
        new = patch.apply(old)
        self.config = new

        if ignored:
            console_log().log(f"[Config] Ignored unknown keys: {', '.join(ignored)}")

        if (new.wave_count != old.wave_count or new.water_level != old.water_level
                or tuple(new.wave_colors) != tuple(old.wave_colors)):
            self._build_waves()

        if new.creature_count != old.creature_count:
            self._build_agents()
        else:
            if patch.creature_speed is not None:
                for agent in self.agents:
                    agent.speed = new.creature_speed
            if patch.creature_size is not None:
                for agent in self.agents:
                    agent.size = new.creature_size

        if new.bubble_count != old.bubble_count and not self.bubbles.is_empty:
            self._build_bubbles()
        if patch.enable_bubbles is not None and new.enable_bubbles and self.bubbles.is_empty:
            self._build_bubbles()

        if patch.enable_pursuit is not None and new.enable_pursuit != old.enable_pursuit:
            self._on_pursuit_changed()

        changed = patch.changed_fields()
        if changed:
            console_log().log(f"[Config] Updated: {', '.join(changed)}")
        event_log().log_reconfigure(self.frame_count, changed, ignored)
        return new

    def set_wave_colors(self, colors: Sequence[str]):
        """
        Replace the wave palette and rebuild the waves.

        Raises:
            ConfigurationError: If a color cannot be parsed (nothing changes)
        """
        self.config = ConfigPatch.from_mapping({'wave_colors': colors}).apply(self.config)
        self._build_waves()

    def add_wave_color(self, color: str):
        self.set_wave_colors(tuple(self.config.wave_colors) + (color,))

    def remove_wave_color(self, index: int):
        """Remove palette entry `index`. Out-of-range indices are ignored."""
        colors = list(self.config.wave_colors)
        if 0 <= index < len(colors):
            del colors[index]
            self.set_wave_colors(colors)

    def clear_and_set_wave_colors(self, colors: Sequence[str]):
        self.set_wave_colors(colors)

    def current_wave_colors(self) -> List[str]:
        return list(self.config.wave_colors)

    def set_background_gradient(self, colors: Sequence[str], stops: Optional[Sequence[float]] = None):
        """Replace the gradient colors, and the stops when given."""
        gradient = GradientPatch.coerce(
            {'colors': colors, 'stops': stops}
        ).merge_into(self.config.background_gradient)
        self.config = replace(self.config, background_gradient=gradient)

    def randomize_speed(self) -> float:
        """Give every shark the same new random speed in [2, 6)."""
        speed = RANDOM_SPEED_MIN + self.rng.random() * RANDOM_SPEED_SPAN
        self.config = replace(self.config, creature_speed=speed)
        for agent in self.agents:
            agent.speed = speed
        console_log().log(f"[Shark] Speed -> {speed:.2f}")
        return speed

    def toggle_particles(self) -> bool:
        """Toggle bubbles. The pool is kept while hidden."""
        enabled = not self.config.enable_bubbles
        self.config = replace(self.config, enable_bubbles=enabled)
        if enabled and self.bubbles.is_empty:
            self._build_bubbles()
        console_log().log(f"[Bubbles] {'ON' if enabled else 'OFF'}")
        return enabled

    def toggle_background(self) -> bool:
        enabled = not self.config.enable_background
        self.config = replace(self.config, enable_background=enabled)
        console_log().log(f"[Viz] Background: {'ON' if enabled else 'OFF'}")
        return enabled

    def toggle_pursuit(self) -> bool:
        return self.set_pursuit(not self.config.enable_pursuit)

    def set_pursuit(self, enabled: bool) -> bool:
        enabled = bool(enabled)
        changed = enabled != self.config.enable_pursuit
        self.config = replace(self.config, enable_pursuit=enabled)
        if changed:
            self._on_pursuit_changed()
        elif not enabled:
            self._release_pursuit()
        return enabled

    def _on_pursuit_changed(self):
        enabled = self.config.enable_pursuit
        if not enabled:
            self._release_pursuit()
        elif self.pointer is not None:
            for agent in self.agents:
                agent.pursue(*self.pointer)
        console_log().log(f"[Pursuit] {'ON' if enabled else 'OFF'}")
        event_log().log('pursuit', self.frame_count, enabled=enabled)

    def reset_scene(self):
        """Recreate the sharks and the bubble pool."""
        self.agents = []
        self.bubbles.clear()
        self._build_agents()
        if self.config.enable_bubbles:
            self._build_bubbles()
        console_log().log("[Scene] Reset")
        event_log().log('scene_reset', self.frame_count)

    def resize(self, width: float, height: float):
        """Adopt a new surface size; the water line follows."""
        self.surface.resize(width, height)
        console_log().log(f"[Resize] {width:.0f}x{height:.0f}")
        event_log().log('resize', self.frame_count, width=float(width), height=float(height))
        self._build_waves()
