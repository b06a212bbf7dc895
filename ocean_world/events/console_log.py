"""
Console Logger - Configurable verbosity for terminal output.

Verbosity levels:
- MINIMAL: Lifecycle only (init, start/stop, errors)
- SCENE: Shark and configuration changes + minimal
- DETAIL: Wave/bubble rebuilds and key toggles
- FULL: Everything (pointer transitions, retargets)

Toggle with 'V' key in the visualization window.
"""

from enum import IntEnum
from typing import Optional
from collections import defaultdict


class Verbosity(IntEnum):
    MINIMAL = 0   # Just the essentials
    SCENE = 1     # Scene-level changes
    DETAIL = 2    # Subsystem rebuilds
    FULL = 3      # Everything


class ConsoleLogger:
    """
    Manages console output verbosity.

    Filters tagged messages ("[Tag] ...") by the current level and counts
    suppressed ones for periodic summaries.
    """

    _instance: Optional['ConsoleLogger'] = None

    def __init__(self):
        self.verbosity = Verbosity.SCENE
        self.enabled = True

        self.event_counts = defaultdict(int)
        self.last_summary_frame = 0
        self.summary_interval = 600  # Frames between summaries

        self.categories = {
            'essential': [
                '[Init]', '[Scene]', '[Shutdown]', '[Error]', '[Session]',
                '[Summary]',
            ],
            'scene': [
                '[Shark]', '[Config]', '[Pursuit]',
            ],
            'detail': [
                '[Waves]', '[Bubbles]', '[Viz]', '[Resize]',
            ],
            'full': [
                '[Pointer]', '[Retarget]', '[Frame]',
            ],
        }

        self.verbosity_names = {
            Verbosity.MINIMAL: "MINIMAL (lifecycle only)",
            Verbosity.SCENE: "SCENE CHANGES",
            Verbosity.DETAIL: "SUBSYSTEM DETAIL",
            Verbosity.FULL: "FULL (everything)",
        }

    @classmethod
    def get(cls) -> 'ConsoleLogger':
        if cls._instance is None:
            cls._instance = ConsoleLogger()
        return cls._instance

    def cycle_verbosity(self) -> str:
        """Cycle to next verbosity level."""
        self.verbosity = Verbosity((self.verbosity + 1) % 4)
        return self.verbosity_names[self.verbosity]

    def set_verbosity(self, level: Verbosity):
        """Set verbosity level directly."""
        self.verbosity = level

    def should_print(self, message: str) -> bool:
        """Determine if message should be printed at current verbosity."""
        if not self.enabled:
            return False

        for prefix in self.categories['essential']:
            if message.startswith(prefix):
                return True

        if self.verbosity == Verbosity.MINIMAL:
            return False

        for prefix in self.categories['scene']:
            if message.startswith(prefix):
                return self.verbosity >= Verbosity.SCENE

        for prefix in self.categories['detail']:
            if message.startswith(prefix):
                return self.verbosity >= Verbosity.DETAIL

        # Anything else tagged is FULL-only
        if message.startswith('['):
            return self.verbosity >= Verbosity.FULL

        # Untagged status lines always show
        return True

    def count_event(self, message: str):
        """Count suppressed event for later summary."""
        if message.startswith('['):
            end = message.find(']')
            if end > 0:
                self.event_counts[message[1:end]] += 1

    def get_summary(self, frame: int) -> Optional[str]:
        """Get summary of suppressed events if interval passed."""
        if frame - self.last_summary_frame < self.summary_interval:
            return None

        if not self.event_counts:
            return None

        self.last_summary_frame = frame

        parts = []
        for category, count in sorted(self.event_counts.items(), key=lambda x: -x[1]):
            if count > 0:
                parts.append(f"{category}:{count}")

        self.event_counts.clear()

        if parts:
            return f"[Summary] {', '.join(parts[:8])}"
        return None

    def log(self, message: str, force: bool = False) -> bool:
        """
        Log a message respecting verbosity.

        Args:
            message: The message to log
            force: If True, always print regardless of verbosity

        Returns True if message was printed.
        """
        if force or self.should_print(message):
            print(message)
            return True
        self.count_event(message)
        return False


# Global instance
def console_log() -> ConsoleLogger:
    """Get singleton ConsoleLogger."""
    return ConsoleLogger.get()
