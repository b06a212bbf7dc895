"""
Event Logger for Ocean World.

Logs scene lifecycle and configuration events to a JSONL file for easy
parsing. Each line is a self-contained JSON object.
"""

import json
import os
import time
from typing import Optional

from ..core.constants import EVENT_LOG_FILE


class EventLogger:
    """
    Buffers scene events and appends them to a JSONL file.

    Event types:
    - session_start / session_end: Entry point started or stopped
    - scene_start / scene_stop: Animation loop started or stopped
    - agent_added / agent_removed: Shark collection changed
    - agents_rebuilt: Shark collection recreated
    - waves_rebuilt: Wave layers recreated
    - bubbles_created: Bubble pool (re)created
    - reconfigure: Configuration patch applied
    - pursuit: Pointer pursuit enabled/disabled
    - resize: Surface resized
    - scene_reset: Sharks and bubbles recreated
    """

    _instance: Optional['EventLogger'] = None

    def __init__(self, filepath: str = None):
        """
        Initialize event logger.

        Args:
            filepath: Path to JSONL log file (default: EVENT_LOG_FILE from constants)
        """
        self.filepath = filepath or EVENT_LOG_FILE
        self.enabled = True
        self.buffer = []
        self.buffer_size = 10  # Flush every N events

    @classmethod
    def get(cls) -> 'EventLogger':
        """Get singleton instance."""
        if cls._instance is None:
            cls._instance = EventLogger()
        return cls._instance

    @classmethod
    def reset(cls, filepath: str = None):
        """Replace the singleton (tests point it at a scratch file)."""
        cls._instance = EventLogger(filepath) if filepath else None

    def log(self, event_type: str, frame: int = 0, **data):
        """
        Log an event.

        Args:
            event_type: Type of event (e.g., 'agent_added', 'waves_rebuilt')
            frame: Frame number when the event occurred
            **data: Additional event data
        """
        if not self.enabled:
            return

        event = {
            'type': event_type,
            'frame': frame,
            'time': time.strftime('%Y-%m-%d %H:%M:%S'),
            **data
        }

        self.buffer.append(event)

        if len(self.buffer) >= self.buffer_size:
            self.flush()

    def flush(self):
        """Write buffered events to file."""
        if not self.buffer:
            return

        try:
            directory = os.path.dirname(self.filepath)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.filepath, 'a') as f:
                for event in self.buffer:
                    f.write(json.dumps(event) + '\n')
            self.buffer.clear()
        except OSError as e:
            print(f"[EventLog] Write failed: {e}")

    # === Convenience methods for specific event types ===

    def log_agents(self, frame: int, action: str, count: int):
        """Log a change to the shark collection."""
        self.log(f'agent_{action}' if action in ('added', 'removed') else f'agents_{action}',
                 frame, count=count)

    def log_waves(self, frame: int, layers: int, colors: list, baseline: float):
        """Log a wave rebuild."""
        self.log('waves_rebuilt', frame, layers=layers, colors=list(colors),
                 baseline=round(baseline, 2))

    def log_reconfigure(self, frame: int, changed: tuple, ignored: tuple = ()):
        """Log an applied configuration patch."""
        self.log('reconfigure', frame, changed=list(changed),
                 ignored=list(ignored) if ignored else None)


# Global accessor function
def event_log() -> EventLogger:
    """Get the singleton EventLogger instance."""
    return EventLogger.get()
