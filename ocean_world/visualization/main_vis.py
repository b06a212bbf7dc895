"""
Main Visualization - Interactive matplotlib window for the ocean scene.

Translates matplotlib canvas events into scene controller calls:
pointer motion inside the axes becomes the pursuit target, leaving the
axes or window releases the sharks, key presses toggle scene features,
and window resizes move the water line.
"""

from typing import TYPE_CHECKING

from ..events.console_log import console_log

if TYPE_CHECKING:
    from ..manager.scene_controller import SceneController


class OceanVisualization:
    """
    Binds a matplotlib window to a SceneController.

    The controller must draw on a MatplotlibSurface.
    """

    def __init__(self, controller: 'SceneController'):
        self.controller = controller
        self.surface = controller.surface
        self.figure = self.surface.figure
        self.ax = self.surface.ax

        canvas = self.figure.canvas
        self._cids = [
            canvas.mpl_connect('motion_notify_event', self._on_motion),
            canvas.mpl_connect('axes_leave_event', self._on_leave),
            canvas.mpl_connect('figure_leave_event', self._on_leave),
            canvas.mpl_connect('key_press_event', self._on_key),
            canvas.mpl_connect('resize_event', self._on_resize),
            canvas.mpl_connect('close_event', self._on_close),
        ]
        self._print_controls()

    def _print_controls(self):
        """Print all keyboard controls."""
        print("[Viz] Initialized")
        print("=" * 48)
        print("  KEYBOARD CONTROLS")
        print("=" * 48)
        print("    +/-       Add/remove shark")
        print("    S         Randomize speed      R   Reset scene")
        print("    B         Bubbles on/off       G   Background on/off")
        print("    F         Pointer pursuit on/off")
        print("    Space     Pause/Resume         V   Cycle log verbosity")
        print("    ?         Show this help")
        print("=" * 48)

    def disconnect(self):
        for cid in self._cids:
            self.figure.canvas.mpl_disconnect(cid)
        self._cids = []

    # === Event handlers ===

    def _on_motion(self, event):
        if event.inaxes is self.ax and event.xdata is not None and event.ydata is not None:
            self.controller.set_pointer_position(event.xdata, event.ydata)
        elif self.controller.pointer is not None:
            self.controller.set_pointer_absent()

    def _on_leave(self, event):
        if self.controller.pointer is not None:
            self.controller.set_pointer_absent()

    def _on_resize(self, event):
        if event.width > 0 and event.height > 0:
            self.controller.resize(event.width, event.height)

    def _on_close(self, event):
        self.controller.stop()

    def _on_key(self, event):
        """Handle keyboard input."""
        ctrl = self.controller
        key = event.key

        if key in ('+', '='):
            ctrl.add_agent()
        elif key in ('-', '_'):
            ctrl.remove_agent()
        elif key == 's':
            ctrl.randomize_speed()
        elif key == 'b':
            ctrl.toggle_particles()
        elif key == 'g':
            ctrl.toggle_background()
        elif key == 'f':
            enabled = ctrl.toggle_pursuit()
            print(f"[Viz] Pointer pursuit: {'ON' if enabled else 'OFF'}")
        elif key == 'r':
            ctrl.reset_scene()
        elif key == ' ':
            if ctrl.is_running:
                ctrl.stop()
                print("[Viz] PAUSED")
            else:
                ctrl.start()
                print("[Viz] RUNNING")
        elif key == 'v':
            level_name = console_log().cycle_verbosity()
            print(f"[Viz] Console verbosity: {level_name}")
        elif key == '?':
            self._print_controls()
