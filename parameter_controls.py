"""
Local interaction logic for parameter controls.

Controllers turn user gestures into device writes and update their own
view. They hold no Qt types; views only need the small method set used
below (set_on / set_active_index / show_value).
"""

from typing import Callable, Optional

from logging_utils import log_event
from parameter_model import next_toggle_value
from quantization import percent, slider_value


class EditState:
    """Drag/Edit flag shared by the continuous controls of one panel.

    While dragging is True, device updates for continuous controls are not
    shown, so an in-progress gesture is never overwritten.
    """

    def __init__(self):
        self.dragging = False
        self.parameter_id: Optional[str] = None
        self._end_listeners: list[Callable[[], None]] = []

    def add_end_listener(self, callback: Callable[[], None]) -> None:
        """Called after every drag ends, once the flag is already cleared."""
        self._end_listeners.append(callback)

    def begin(self, parameter_id: str) -> None:
        self.dragging = True
        self.parameter_id = parameter_id
        log_event("DEBUG", "Sync", "Drag started", id=parameter_id)

    def end(self) -> None:
        was_dragging = self.dragging
        if was_dragging:
            log_event("DEBUG", "Sync", "Drag ended", id=self.parameter_id)
        self.dragging = False
        self.parameter_id = None
        if was_dragging:
            for callback in list(self._end_listeners):
                callback()


class ToggleController:
    """Boolean parameter: flips between min and max, never anything in between."""

    def __init__(self, param, view):
        self.param = param
        self.view = view

    def activate(self) -> None:
        new_value = next_toggle_value(self.param.value, self.param.min, self.param.max)
        self.param.value = new_value
        self.view.set_on(new_value == float(self.param.max))


class StepController:
    """Discrete parameter: one button per grid value, exactly one active."""

    def __init__(self, param, view, values: list[float]):
        self.param = param
        self.view = view
        self.values = values

    def select(self, index: int) -> None:
        self.param.value = self.values[index]
        self.view.set_active_index(index)


class SliderController:
    """Continuous parameter: streams every intermediate position to the device."""

    def __init__(self, param, view, edit_state: EditState, resolution: int):
        self.param = param
        self.view = view
        self.edit_state = edit_state
        self.resolution = resolution

    def press(self) -> None:
        self.edit_state.begin(self.param.id)

    def move(self, position: int) -> None:
        value = slider_value(position, self.param.min, self.param.max, self.resolution)
        self.param.value = value
        self.view.show_value(value, percent(value, self.param.min, self.param.max))

    def release(self) -> None:
        self.edit_state.end()
        self.resync()

    def resync(self) -> None:
        """Show the device's current value (covers updates dropped during a drag)."""
        value = self.param.value
        self.view.show_value(value, percent(value, self.param.min, self.param.max))
