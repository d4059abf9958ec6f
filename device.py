"""
patchpanel - Device
In-process model of an audio device's parameter state.
The device is the authority for parameter values; writing a parameter's
value is the only command channel, and every accepted write is announced
on the parameter change stream.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Mapping, Optional

from logging_utils import log_event
from parameter_model import ParameterSpec


@dataclass(frozen=True)
class ParameterChangeEvent:
    id: str
    value: float


class Subscription:
    """Handle returned by EventStream.subscribe; unsubscribe() detaches the callback."""

    def __init__(self, stream: "EventStream", callback: Callable):
        self._stream = stream
        self._callback = callback
        self.active = True

    def unsubscribe(self) -> None:
        if not self.active:
            return
        self.active = False
        self._stream._remove(self)


class EventStream:
    """Synchronous publish/subscribe stream.

    Events reach subscribers in emission order and, per event, in subscription
    order. Delivery happens on the emitting thread.
    """

    def __init__(self, name: str = "events"):
        self.name = name
        self._subscriptions: list[Subscription] = []

    def subscribe(self, callback: Callable) -> Subscription:
        subscription = Subscription(self, callback)
        self._subscriptions.append(subscription)
        return subscription

    def _remove(self, subscription: Subscription) -> None:
        try:
            self._subscriptions.remove(subscription)
        except ValueError:
            pass

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def emit(self, event) -> None:
        # Snapshot: a callback may unsubscribe while we iterate
        for subscription in list(self._subscriptions):
            if subscription.active:
                subscription._callback(event)


class DeviceParameter:
    """One device parameter: static spec plus the current value."""

    def __init__(self, spec: ParameterSpec, device: "Device"):
        self.spec = spec
        self._device = device
        self._value = self._clamp(spec.initial_value)

    @property
    def id(self) -> str:
        return self.spec.id

    @property
    def name(self) -> Optional[str]:
        return self.spec.name

    @property
    def min(self) -> float:
        return self.spec.min

    @property
    def max(self) -> float:
        return self.spec.max

    @property
    def steps(self) -> int:
        return self.spec.steps

    @property
    def labels(self):
        return self.spec.labels

    def _clamp(self, value: float) -> float:
        return max(float(self.spec.min), min(float(self.spec.max), float(value)))

    @property
    def value(self) -> float:
        return self._value

    @value.setter
    def value(self, new_value: float) -> None:
        self._value = self._clamp(new_value)
        self._device._announce(self)

    def __repr__(self) -> str:
        return f"DeviceParameter(id={self.id!r}, value={self._value!r})"


class Device:
    """Parameter-holding device with a change stream."""

    def __init__(self, specs: Iterable[ParameterSpec], name: str = "device"):
        self.name = name
        self._parameters: list[DeviceParameter] = []
        self._by_id: dict[str, DeviceParameter] = {}
        for spec in specs:
            if spec.id in self._by_id:
                log_event("WARNING", "Device", "Duplicate parameter id ignored", id=spec.id)
                continue
            param = DeviceParameter(spec, self)
            self._parameters.append(param)
            self._by_id[spec.id] = param
        self.parameter_change_event = EventStream("parameterChange")

    @property
    def parameters(self) -> list[DeviceParameter]:
        """Parameters in device order. A new list every call."""
        return list(self._parameters)

    @property
    def num_parameters(self) -> int:
        return len(self._parameters)

    def get_parameter(self, parameter_id: str) -> Optional[DeviceParameter]:
        return self._by_id.get(parameter_id)

    def _announce(self, param: DeviceParameter) -> None:
        self.parameter_change_event.emit(ParameterChangeEvent(param.id, param.value))

    def set_parameter_value(self, parameter_id: str, value: float) -> bool:
        """Device-originated write (automation, presets). Unknown ids are ignored."""
        param = self._by_id.get(parameter_id)
        if param is None:
            log_event("DEBUG", "Device", "Write to unknown parameter ignored", id=parameter_id)
            return False
        param.value = value
        return True

    def set_preset(self, values: Mapping[str, float]) -> int:
        """Apply a preset's id -> value mapping in order. Returns how many ids were applied."""
        applied = 0
        skipped = 0
        for parameter_id, value in values.items():
            if self.set_parameter_value(parameter_id, value):
                applied += 1
            else:
                skipped += 1
        if skipped:
            log_event("WARNING", "Preset", "Preset references unknown parameters", skipped=skipped)
        return applied
