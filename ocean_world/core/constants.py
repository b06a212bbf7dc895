"""
Core constants for Ocean World.

Default configuration values, steering and wave-layer parameters, bubble
respawn ranges and file paths. Everything here is plain data computed
once at import time.
"""

import os

# =============================================================================
# PATHS
# =============================================================================
PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DATA_DIR = os.environ.get('OCEAN_DATA_DIR', os.path.join(PACKAGE_DIR, 'data'))
EVENT_LOG_FILE = os.environ.get('OCEAN_EVENT_LOG', os.path.join(DATA_DIR, 'event_log.jsonl'))


# =============================================================================
# DEFAULT CONFIGURATION
# =============================================================================
DEFAULT_CREATURE_COUNT = 1
DEFAULT_CREATURE_SIZE = 40.0
DEFAULT_CREATURE_SPEED = 3.0
DEFAULT_WAVE_COUNT = 3
DEFAULT_BUBBLE_COUNT = 30
DEFAULT_WATER_LEVEL = 0.2          # Fraction of surface height
DEFAULT_RETARGET_INTERVAL = 3000.0  # ms

DEFAULT_BACKGROUND_COLORS = ('#1a2980', '#26d0ce', '#1a6d80')

DEFAULT_WAVE_COLORS = (
    'rgba(0, 50, 100, 0.6)',
    'rgba(0, 80, 150, 0.5)',
    'rgba(0, 120, 200, 0.4)',
    'rgba(0, 150, 220, 0.3)',
    'rgba(0, 180, 240, 0.2)',
)


# =============================================================================
# STEERING
# =============================================================================
ARRIVAL_EPSILON = 5.0          # No displacement once this close to target
TARGET_MARGIN_FACTOR = 2.0     # Random targets inset by this x size
RETARGET_MIN_DELAY = 1000.0    # ms added to every autonomous deadline
TAIL_STEP = 0.2                # rad per tick
TAIL_LIMIT = 0.5               # rad; direction flips beyond this
CREATURE_HUE_RANGE = 60.0      # Display hue drawn from [0, 60)
RANDOM_SPEED_MIN = 2.0
RANDOM_SPEED_SPAN = 4.0


# =============================================================================
# WAVE LAYERS
# =============================================================================
WAVE_BASELINE_STEP = 15.0
WAVE_AMPLITUDE_BASE = 10.0
WAVE_AMPLITUDE_STEP = 5.0
WAVE_FREQUENCY_BASE = 0.01
WAVE_FREQUENCY_STEP = 0.005
WAVE_SPEED_BASE = 0.02
WAVE_SPEED_STEP = 0.01
WAVE_SAMPLE_STEP = 5.0         # Horizontal sampling step for rendering


# =============================================================================
# BUBBLES
# =============================================================================
BUBBLE_SPAWN_DEPTH = 100.0     # Respawn band below the bottom edge
BUBBLE_SIZE_MIN = 5.0
BUBBLE_SIZE_SPAN = 10.0
BUBBLE_SPEED_MIN = 1.0
BUBBLE_SPEED_SPAN = 2.0
BUBBLE_OPACITY_MIN = 0.2
BUBBLE_OPACITY_SPAN = 0.5
BUBBLE_WOBBLE_FREQ = 0.05
BUBBLE_WOBBLE_AMP = 0.5


# =============================================================================
# ANIMATION
# =============================================================================
FRAME_INTERVAL_MS = 16         # ~60 Hz refresh
