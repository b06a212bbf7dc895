#!/usr/bin/env python3
"""
Ocean World - Animated Ocean Scene
==================================

Sharks swimming under a layered, undulating water surface with rising
bubbles:
- Sharks chase the pointer while it is over the window
- Otherwise each shark wanders to random targets on its own schedule
- Wave layers, bubbles and background are reconfigurable live

Usage:
    python -m ocean_world                          # Interactive window
    python -m ocean_world --headless               # Render offscreen
    python -m ocean_world --headless --frames 300 --save ocean.png
    python -m ocean_world --help                   # Show help

Launch parameters (environment):
    OCEAN_SHARK_COUNT, OCEAN_SHARK_SIZE, OCEAN_SHARK_SPEED,
    OCEAN_WAVE_COUNT, OCEAN_BUBBLE_COUNT, OCEAN_WATER_LEVEL,
    OCEAN_RETARGET_MS, OCEAN_BUBBLES, OCEAN_BACKGROUND, OCEAN_PURSUIT
"""

import os
import sys
import time

# Package imports
from .manager.scene_controller import SceneController
from .visualization.surface import MatplotlibSurface
from .visualization.scheduler import ManualScheduler
from .events.logger import event_log
from .core.errors import ConfigurationError

import matplotlib
import matplotlib.pyplot as plt

# Keys the scene uses that matplotlib binds by default
SCENE_KEYS = ('s', 'f', 'g', 'r', 'b', 'v', '+', '-', '=', '_', ' ')


def _env_number(name: str, default: str, kind):
    raw = os.environ.get(name, default)
    try:
        return kind(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from None


def read_launch_params() -> dict:
    """
    Read launch parameters from the environment.

    Raises:
        ConfigurationError: If a numeric variable does not parse
    """
    return {
        'creature_count': _env_number('OCEAN_SHARK_COUNT', '1', int),
        'creature_size': _env_number('OCEAN_SHARK_SIZE', '40', float),
        'creature_speed': _env_number('OCEAN_SHARK_SPEED', '3', float),
        'wave_count': _env_number('OCEAN_WAVE_COUNT', '3', int),
        'bubble_count': _env_number('OCEAN_BUBBLE_COUNT', '30', int),
        'water_level': _env_number('OCEAN_WATER_LEVEL', '0.2', float),
        'retarget_interval': _env_number('OCEAN_RETARGET_MS', '3000', float),
        'enable_bubbles': os.environ.get('OCEAN_BUBBLES', '1') == '1',
        'enable_background': os.environ.get('OCEAN_BACKGROUND', '1') == '1',
        'enable_pursuit': os.environ.get('OCEAN_PURSUIT', '1') == '1',
    }


def print_banner(mode: str = 'visual'):
    """Print startup banner."""
    print("=" * 60)
    print("OCEAN WORLD - Animated Ocean Scene")
    print("=" * 60)
    if mode == 'headless':
        print("HEADLESS MODE (offscreen rendering)")
    else:
        print("Move the pointer over the window and the sharks follow.")
        print("Close the window or press Ctrl+C to quit.")
    print("=" * 60)


def _free_keymaps():
    """Remove scene keys from matplotlib's default key bindings."""
    for name in [n for n in matplotlib.rcParams if n.startswith('keymap.')]:
        keys = matplotlib.rcParams[name]
        matplotlib.rcParams[name] = [k for k in keys if k not in SCENE_KEYS]


def _arg_value(flag: str, default=None):
    if flag in sys.argv:
        idx = sys.argv.index(flag)
        if idx + 1 < len(sys.argv):
            return sys.argv[idx + 1]
    return default


def main_visual(params: dict = None):
    """Interactive window driven by matplotlib timers."""
    params = params if params is not None else read_launch_params()
    from .visualization.main_vis import OceanVisualization

    print_banner('visual')
    _free_keymaps()

    scene = None
    event_log().log('session_start', 0, mode='visual')
    try:
        surface = MatplotlibSurface(width=1100, height=620)
        scene = SceneController(surface, params)
        OceanVisualization(scene)
        plt.show()
    except KeyboardInterrupt:
        print("\n[Shutdown] Interrupted")
    finally:
        if scene is not None:
            scene.destroy()
            event_log().log('session_end', scene.frame_count, mode='visual')
        event_log().flush()
        plt.close('all')


def main_headless(frames: int = 300, save_path: str = None, params: dict = None):
    """Render `frames` frames offscreen, optionally saving the last one."""
    params = params if params is not None else read_launch_params()
    plt.switch_backend('Agg')
    print_banner('headless')

    scene = None
    event_log().log('session_start', 0, mode='headless')
    started = time.time()
    try:
        surface = MatplotlibSurface(width=960, height=540)
        scheduler = ManualScheduler()
        scene = SceneController(surface, params, scheduler=scheduler)

        while scene.frame_count < frames and scheduler.pending_count:
            scheduler.run_pending()
            if scene.frame_count % 100 == 0:
                elapsed = time.time() - started
                print(f"[{scene.frame_count:5d}] sharks:{len(scene.agents)} "
                      f"bubbles:{len(scene.bubbles)} | {elapsed:.1f}s")

        if save_path:
            surface.figure.savefig(save_path)
            print(f"[Session] Saved frame {scene.frame_count} to {save_path}")
    except KeyboardInterrupt:
        print("\n[Shutdown] Interrupted")
    finally:
        if scene is not None:
            scene.destroy()
            event_log().log('session_end', scene.frame_count, mode='headless')
        event_log().flush()
        plt.close('all')


def main():
    """Entry point - choose mode based on arguments."""
    if '--help' in sys.argv or '-h' in sys.argv:
        print(__doc__)
        return

    try:
        if '--headless' in sys.argv:
            frames = int(_arg_value('--frames', '300'))
            main_headless(frames, _arg_value('--save'))
        else:
            main_visual()
    except ConfigurationError as e:
        print(f"[Error] {e}")
        sys.exit(2)


if __name__ == "__main__":
    main()
