"""
patchpanel - Widget Factory
Builds one parameter row per device parameter: the Qt control, the
controller that writes local edits to the device, and the handle the
registry uses for device-driven updates.
"""

from typing import Optional

from config import PanelConfig
from parameter_controls import EditState, SliderController, StepController, ToggleController
from parameter_model import ControlArchetype, classify_parameter, display_name, is_on
from quantization import (
    clamp_step_index,
    format_step_value,
    nearest_step_index,
    percent,
    slider_resolution,
    step_delta,
    step_values,
)
from sync_registry import BooleanHandle, ContinuousHandle, DiscreteHandle, WidgetHandle
from widgets import ParameterRow, ParameterSlider, StepButtonRow, ToggleButton


def step_captions(values: list[float], labels) -> list[str]:
    """Button captions: the label for a position when there is one, else the formatted value."""
    captions = []
    for i, value in enumerate(values):
        if labels is not None and i < len(labels) and labels[i] is not None:
            captions.append(str(labels[i]))
        else:
            captions.append(format_step_value(value))
    return captions


def _build_toggle(param, config: PanelConfig):
    button = ToggleButton(active_color=config.active_color)
    button.set_on(is_on(param.value))
    controller = ToggleController(param, button)
    button.clicked.connect(lambda _checked=False: controller.activate())
    handle = BooleanHandle(param.id, button, controller=controller)
    return button, handle


def _build_steps(param, config: PanelConfig):
    steps = int(param.steps)
    delta = step_delta(param.min, param.max, steps)
    values = step_values(param.min, param.max, steps)

    group = StepButtonRow(step_captions(values, param.labels), active_color=config.active_color)
    group.set_active_index(clamp_step_index(nearest_step_index(param.value, param.min, delta), steps))
    controller = StepController(param, group, values)
    group.step_selected.connect(controller.select)
    handle = DiscreteHandle(param.id, group, float(param.min), delta, steps, controller=controller)
    return group, handle


def _build_slider(param, edit_state: EditState, config: PanelConfig):
    resolution = slider_resolution(param.steps, config.continuous_resolution)
    slider = ParameterSlider(param.min, param.max, resolution, fill_color=config.slider_fill_color)
    slider.setObjectName(str(param.id))
    slider.setToolTip(display_name(param))
    slider.show_value(param.value, percent(param.value, param.min, param.max))

    controller = SliderController(param, slider, edit_state, resolution)
    slider.sliderPressed.connect(controller.press)
    slider.sliderReleased.connect(controller.release)
    slider.valueChanged.connect(controller.move)
    handle = ContinuousHandle(param.id, slider, float(param.min), float(param.max), controller=controller)
    return slider, handle


def build_parameter_widget(
    param,
    edit_state: EditState,
    config: Optional[PanelConfig] = None,
) -> tuple[ParameterRow, WidgetHandle]:
    """Create the row for one parameter and the handle that keeps it in sync."""
    config = config or PanelConfig()
    archetype = classify_parameter(param)

    if archetype is ControlArchetype.BOOLEAN:
        control, handle = _build_toggle(param, config)
    elif archetype is ControlArchetype.DISCRETE_STEPPED:
        control, handle = _build_steps(param, config)
    elif archetype is ControlArchetype.CONTINUOUS:
        control, handle = _build_slider(param, edit_state, config)
    else:
        raise ValueError(f"Unhandled archetype: {archetype!r}")

    row = ParameterRow(str(param.id), display_name(param), control, name_width=config.name_label_width)
    return row, handle
