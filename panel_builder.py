"""
patchpanel - Panel Builder
Populates a container with one row per device parameter and keeps the
rows in sync with the device for the panel's lifetime.
"""

from typing import Optional

from PyQt6.QtWidgets import QVBoxLayout, QWidget

from config import PanelConfig
from logging_utils import log_event
from parameter_controls import EditState
from presentation_order import reorder_parameters
from sync_registry import SyncRegistry
from widget_factory import build_parameter_widget


class ParameterPanel:
    """A built panel: its rows, registry and device subscription."""

    def __init__(self, device, container: QWidget, registry: SyncRegistry, rows: list, subscription):
        self.device = device
        self.container = container
        self.registry = registry
        self.rows = rows
        self._subscription = subscription

    @property
    def edit_state(self) -> EditState:
        return self.registry.edit_state

    @property
    def order(self) -> list[str]:
        return [row.parameter_id for row in self.rows]

    @property
    def is_live(self) -> bool:
        return self._subscription is not None and self._subscription.active

    def close(self) -> None:
        """Detach from the device. Rows stay on screen but stop following it."""
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
            log_event("INFO", "Panel", "Panel detached from device")


def build_parameter_panel(device, container: QWidget, config: Optional[PanelConfig] = None) -> ParameterPanel:
    """Build rows in presentation order, register them, then subscribe once to device changes."""
    config = config or PanelConfig()
    device_order = device.parameters
    ordered = reorder_parameters(device_order, config.reorder_target_name, config.reorder_group_names)

    layout = container.layout()
    if layout is None:
        layout = QVBoxLayout(container)
        layout.setContentsMargins(4, 4, 4, 4)

    registry = SyncRegistry(EditState())
    rows = []
    for param in ordered:
        row, handle = build_parameter_widget(param, registry.edit_state, config)
        registry.register(param.id, handle)
        layout.addWidget(row)
        rows.append(row)

    subscription = device.parameter_change_event.subscribe(registry.dispatch)
    log_event(
        "INFO", "Panel", "Parameter panel built",
        parameters=len(rows),
        reordered=[p.id for p in ordered] != [p.id for p in device_order],
    )
    return ParameterPanel(device, container, registry, rows, subscription)
