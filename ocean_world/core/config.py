"""
Scene configuration - immutable snapshots and typed partial updates.

SceneConfiguration always carries a concrete value for every tunable.
The controller holds the single "current" snapshot and swaps in a new one
on every change; ConfigPatch enumerates every recognized field as optional
so that updates are applied field by field instead of blindly merged.
"""

import numbers
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

import numpy as np

from .constants import (
    DEFAULT_CREATURE_COUNT, DEFAULT_CREATURE_SIZE, DEFAULT_CREATURE_SPEED,
    DEFAULT_WAVE_COUNT, DEFAULT_BUBBLE_COUNT, DEFAULT_WATER_LEVEL,
    DEFAULT_RETARGET_INTERVAL, DEFAULT_BACKGROUND_COLORS, DEFAULT_WAVE_COLORS,
)
from .errors import ConfigurationError
from ..visualization.colors import parse_color


@dataclass(frozen=True)
class BackgroundGradient:
    """Vertical background gradient: colors top to bottom and their stops (0-1)."""
    colors: Tuple[str, ...] = DEFAULT_BACKGROUND_COLORS
    stops: Tuple[float, ...] = (0.0, DEFAULT_WATER_LEVEL, 1.0)

    def stop_for(self, index: int) -> float:
        """Stop position of color `index`, evenly spaced when no stop is given."""
        if index < len(self.stops):
            return float(self.stops[index])
        if len(self.colors) < 2:
            return 0.0
        return index / (len(self.colors) - 1)


@dataclass(frozen=True)
class GradientPatch:
    """Partial background gradient update."""
    colors: Optional[Tuple[str, ...]] = None
    stops: Optional[Tuple[float, ...]] = None

    @classmethod
    def coerce(cls, value) -> Optional['GradientPatch']:
        if value is None or isinstance(value, GradientPatch):
            return value
        if isinstance(value, BackgroundGradient):
            return cls(colors=value.colors, stops=value.stops)
        if isinstance(value, Mapping):
            colors = value.get('colors')
            stops = value.get('stops')
            return cls(
                colors=_as_colors('background_gradient.colors', colors) if colors is not None else None,
                stops=tuple(_as_float('background_gradient.stops', s) for s in stops)
                if stops is not None else None,
            )
        raise ConfigurationError(f"background_gradient must be a mapping, got {type(value).__name__}")

    def merge_into(self, gradient: BackgroundGradient) -> BackgroundGradient:
        return BackgroundGradient(
            colors=self.colors if self.colors is not None else gradient.colors,
            stops=self.stops if self.stops is not None else gradient.stops,
        )


@dataclass(frozen=True)
class SceneConfiguration:
    """
    Complete set of scene tunables.

    Attributes:
        creature_count: Number of sharks created on (re)build
        creature_size: Shark size in pixels
        creature_speed: Pixels advanced per tick
        wave_count: Number of wave layers
        bubble_count: Size of the bubble pool
        enable_bubbles: Whether bubbles are updated and drawn
        water_level: Water surface position as a fraction of height (0-1)
        retarget_interval: Upper bound of the random autonomous retarget delay (ms)
        enable_background: Whether the gradient background is drawn
        enable_pursuit: Whether sharks chase the pointer
        background_gradient: Background colors and stops
        wave_colors: Palette assigned round-robin to wave layers
    """
    creature_count: int = DEFAULT_CREATURE_COUNT
    creature_size: float = DEFAULT_CREATURE_SIZE
    creature_speed: float = DEFAULT_CREATURE_SPEED
    wave_count: int = DEFAULT_WAVE_COUNT
    bubble_count: int = DEFAULT_BUBBLE_COUNT
    enable_bubbles: bool = True
    water_level: float = DEFAULT_WATER_LEVEL
    retarget_interval: float = DEFAULT_RETARGET_INTERVAL
    enable_background: bool = True
    enable_pursuit: bool = True
    background_gradient: BackgroundGradient = field(default_factory=BackgroundGradient)
    wave_colors: Tuple[str, ...] = DEFAULT_WAVE_COLORS

    def __post_init__(self):
        _validate(self)

    @classmethod
    def from_options(cls, options: Optional[Mapping[str, Any]] = None, **kwargs) -> 'SceneConfiguration':
        """
        Build a complete configuration from optional user options.

        Omitted options take their defaults. The default gradient stops
        follow the requested water level: [0, water_level, 1].
        """
        merged = dict(options or {})
        merged.update(kwargs)
        patch = ConfigPatch.from_mapping(merged)

        water_level = patch.water_level if patch.water_level is not None else DEFAULT_WATER_LEVEL
        base = cls(
            water_level=water_level,
            background_gradient=BackgroundGradient(stops=(0.0, float(water_level), 1.0)),
        )
        return patch.apply(base)


def _validate(config: SceneConfiguration):
    for name in ('creature_count', 'wave_count', 'bubble_count'):
        if getattr(config, name) < 0:
            raise ConfigurationError(f"{name} must be >= 0, got {getattr(config, name)}")
    for name in ('creature_size', 'creature_speed', 'retarget_interval'):
        if getattr(config, name) < 0:
            raise ConfigurationError(f"{name} must be >= 0, got {getattr(config, name)}")
    if not 0.0 <= config.water_level <= 1.0:
        raise ConfigurationError(f"water_level must be within [0, 1], got {config.water_level}")
    for stop in config.background_gradient.stops:
        if not 0.0 <= stop <= 1.0:
            raise ConfigurationError(f"gradient stops must be within [0, 1], got {stop}")
    for name, colors in (('wave_colors', config.wave_colors),
                         ('background_gradient.colors', config.background_gradient.colors)):
        for color in colors:
            try:
                parse_color(color)
            except (ValueError, TypeError):
                raise ConfigurationError(f"{name} contains an invalid color: {color!r}") from None


def _as_int(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if not float(value).is_integer():
        raise ConfigurationError(f"{name} must be a whole number, got {value!r}")
    return int(value)


def _as_float(name: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ConfigurationError(f"{name} must be a number, got {value!r}")
    return float(value)


def _as_bool(name: str, value) -> bool:
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    raise ConfigurationError(f"{name} must be True or False, got {value!r}")


def _as_colors(name: str, value) -> Tuple[str, ...]:
    """A color list. A bare string is rejected rather than split into characters."""
    if isinstance(value, str) or not isinstance(value, Iterable):
        raise ConfigurationError(f"{name} must be a list of colors, got {value!r}")
    return tuple(value)


_INT_FIELDS = ('creature_count', 'wave_count', 'bubble_count')
_FLOAT_FIELDS = ('creature_size', 'creature_speed', 'water_level', 'retarget_interval')
_BOOL_FIELDS = ('enable_bubbles', 'enable_background', 'enable_pursuit')


@dataclass(frozen=True)
class ConfigPatch:
    """
    Partial configuration update. None means "leave unchanged".

    Side effects of each field are applied by SceneController.reconfigure.
    """
    creature_count: Optional[int] = None
    creature_size: Optional[float] = None
    creature_speed: Optional[float] = None
    wave_count: Optional[int] = None
    bubble_count: Optional[int] = None
    enable_bubbles: Optional[bool] = None
    water_level: Optional[float] = None
    retarget_interval: Optional[float] = None
    enable_background: Optional[bool] = None
    enable_pursuit: Optional[bool] = None
    background_gradient: Optional[GradientPatch] = None
    wave_colors: Optional[Tuple[str, ...]] = None

    @classmethod
    def recognized_keys(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> 'ConfigPatch':
        """
        Build a patch, checking value types. Unrecognized keys are dropped.

        Raises:
            ConfigurationError: If a value has the wrong type
        """
        known = set(cls.recognized_keys())
        values: Dict[str, Any] = {}
        for key, value in mapping.items():
            if key not in known or value is None:
                continue
            if key in _INT_FIELDS:
                values[key] = _as_int(key, value)
            elif key in _FLOAT_FIELDS:
                values[key] = _as_float(key, value)
            elif key in _BOOL_FIELDS:
                values[key] = _as_bool(key, value)
            elif key == 'background_gradient':
                values[key] = GradientPatch.coerce(value)
            elif key == 'wave_colors':
                values[key] = _as_colors(key, value)
        return cls(**values)

    @staticmethod
    def unrecognized(mapping: Iterable[str]) -> Tuple[str, ...]:
        known = set(ConfigPatch.recognized_keys())
        return tuple(k for k in mapping if k not in known)

    def changed_fields(self) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(self) if getattr(self, f.name) is not None)

    def apply(self, config: SceneConfiguration) -> SceneConfiguration:
        """Return a new snapshot with this patch applied."""
        changes: Dict[str, Any] = {}
        for name in self.changed_fields():
            value = getattr(self, name)
            if name == 'background_gradient':
                changes[name] = value.merge_into(config.background_gradient)
            else:
                changes[name] = value
        if not changes:
            return config
        return replace(config, **changes)
