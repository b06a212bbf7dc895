"""
Ocean World - Animated ocean scene with steered sharks

Sharks chase the pointer or wander between random targets beneath a
layered sinusoidal water surface while bubbles rise through the water.

Usage:
    python -m ocean_world              # Interactive window
    python -m ocean_world --headless   # Offscreen rendering

Package structure:
- core/: Constants, configuration snapshots, errors, helpers
- creature/: Steering agents (sharks)
- world/: Wave field and bubble pool
- manager/: Scene controller (frame loop, input, live reconfiguration)
- visualization/: matplotlib surface, scheduling, renderers, window wiring
- events/: Console and JSONL event logging
"""

__version__ = "1.0.0"

from .core.config import SceneConfiguration, ConfigPatch, BackgroundGradient
from .core.errors import OceanWorldError, SurfaceError, ConfigurationError
from .creature.agent import SteeringAgent, SteeringMode
from .world.waves import WaveField, WaveOscillator
from .world.bubbles import BubbleParticle, BubblePool
from .manager.scene_controller import SceneController
from .main import main, main_visual, main_headless
