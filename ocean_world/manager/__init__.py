"""Scene orchestration."""

from .scene_controller import SceneController
