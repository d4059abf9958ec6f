"""
patchpanel - Synchronization Registry
Maps parameter ids to widget handles and applies device change events to
the widgets. Dispatch only ever updates views; it never writes back to the
device.
"""

from dataclasses import dataclass
from typing import Any, Optional, Union

from logging_utils import log_event
from parameter_controls import EditState
from parameter_model import is_on
from quantization import clamp_step_index, nearest_step_index, percent


@dataclass
class BooleanHandle:
    parameter_id: str
    view: Any
    controller: Any = None


@dataclass
class DiscreteHandle:
    parameter_id: str
    view: Any
    min: float
    step_delta: float
    steps: int
    controller: Any = None


@dataclass
class ContinuousHandle:
    parameter_id: str
    view: Any
    min: float
    max: float
    controller: Any = None


WidgetHandle = Union[BooleanHandle, DiscreteHandle, ContinuousHandle]


class SyncRegistry:
    """One handle per rendered parameter, fixed for the panel's lifetime."""

    def __init__(self, edit_state: Optional[EditState] = None):
        self.edit_state = edit_state or EditState()
        self._handles: dict[str, WidgetHandle] = {}
        self.dropped_updates = 0
        self.edit_state.add_end_listener(self.resync_continuous)

    def register(self, parameter_id: str, handle: WidgetHandle) -> None:
        if parameter_id in self._handles:
            raise ValueError(f"Parameter {parameter_id!r} already has a widget")
        self._handles[parameter_id] = handle

    def get(self, parameter_id: str) -> Optional[WidgetHandle]:
        return self._handles.get(parameter_id)

    def __contains__(self, parameter_id) -> bool:
        return parameter_id in self._handles

    def __len__(self) -> int:
        return len(self._handles)

    def ids(self) -> list[str]:
        return list(self._handles)

    def resync_continuous(self) -> int:
        """Show the device value on every slider; updates may have been dropped during a drag."""
        count = 0
        for handle in self._handles.values():
            if isinstance(handle, ContinuousHandle) and handle.controller is not None:
                handle.controller.resync()
                count += 1
        return count

    def dispatch(self, event) -> bool:
        """Apply one device change event. Returns True if a widget was updated."""
        handle = self._handles.get(event.id)
        if handle is None:
            log_event("DEBUG", "Sync", "Event for unrendered parameter ignored", id=event.id)
            return False

        value = float(event.value)
        if isinstance(handle, BooleanHandle):
            handle.view.set_on(is_on(value))
        elif isinstance(handle, DiscreteHandle):
            index = nearest_step_index(value, handle.min, handle.step_delta)
            handle.view.set_active_index(clamp_step_index(index, handle.steps))
        elif isinstance(handle, ContinuousHandle):
            if self.edit_state.dragging:
                self.dropped_updates += 1
                log_event("DEBUG", "Sync", "Update dropped during drag", id=event.id, value=value)
                return False
            handle.view.show_value(value, percent(value, handle.min, handle.max))
        else:
            raise TypeError(f"Unknown widget handle type: {type(handle).__name__}")
        return True
