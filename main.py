"""
patchpanel - Main Window
Hosts the patcher title, preset selector and the live parameter panel.
"""

from typing import Optional

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QComboBox, QHBoxLayout, QLabel, QMainWindow, QVBoxLayout, QWidget,
)

from config import Config
from config_persistence import load_config, save_config
from logging_utils import log_event, set_log_level
from panel_builder import ParameterPanel, build_parameter_panel
from patch_loader import PatchExport, PatchLoadError, Preset, patch_title
from widgets import NoWheelScrollArea


class PatchPanelWindow(QMainWindow):
    """Main application window"""

    def __init__(self, config: Optional[Config] = None):
        super().__init__()

        self.config = config or load_config()
        set_log_level(getattr(self.config, 'log_level', 'INFO'))

        self.device = None
        self.export: Optional[PatchExport] = None
        self.panel: Optional[ParameterPanel] = None
        self.presets: list[Preset] = []

        self.setWindowTitle("patchpanel")
        self.setMinimumSize(400, 300)
        self.resize(self.config.window.width, self.config.window.height)
        self.setStyleSheet(self._get_stylesheet())

        self._setup_ui()

    def _get_stylesheet(self) -> str:
        return """
            QMainWindow, QWidget {
                background-color: #3d3d3d;
                color: #e0e0e0;
            }

            QPushButton {
                background-color: #565d7f;
                color: #ffffff;
                border: 1px solid #5d5d5d;
                border-radius: 3px;
                padding: 4px 8px;
            }

            QComboBox {
                background-color: #4d4d4d;
                border: 1px solid #5d5d5d;
                padding: 2px 6px;
            }

            QLabel#patcherTitle {
                font-size: 16px;
                font-weight: bold;
            }

            QLabel#errorBanner {
                background-color: #6b2d2d;
                border: 1px solid #ff5555;
                padding: 8px;
            }
        """

    def _setup_ui(self):
        central = QWidget()
        root = QVBoxLayout(central)

        self.title_label = QLabel("No patcher loaded")
        self.title_label.setObjectName("patcherTitle")
        root.addWidget(self.title_label)

        self.error_banner = QLabel()
        self.error_banner.setObjectName("errorBanner")
        self.error_banner.setWordWrap(True)
        self.error_banner.setVisible(False)
        root.addWidget(self.error_banner)

        preset_row = QHBoxLayout()
        self.preset_label = QLabel("Preset")
        self.preset_combo = QComboBox()
        self.preset_combo.currentIndexChanged.connect(self._on_preset_selected)
        preset_row.addWidget(self.preset_label)
        preset_row.addWidget(self.preset_combo, 1)
        root.addLayout(preset_row)
        self._set_presets_visible(False)

        self.scroll = NoWheelScrollArea()
        self.scroll.setWidgetResizable(True)
        scroll_body = QWidget()
        body_layout = QVBoxLayout(scroll_body)
        body_layout.setContentsMargins(0, 0, 0, 0)

        self.param_container = QWidget()
        container_layout = QVBoxLayout(self.param_container)
        container_layout.setContentsMargins(4, 4, 4, 4)
        self.no_param_label = QLabel("No parameters")
        self.no_param_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        container_layout.addWidget(self.no_param_label)

        body_layout.addWidget(self.param_container)
        body_layout.addStretch(1)
        self.scroll.setWidget(scroll_body)
        root.addWidget(self.scroll, 1)

        self.setCentralWidget(central)

    def _set_presets_visible(self, visible: bool):
        self.preset_label.setVisible(visible)
        self.preset_combo.setVisible(visible)

    def attach_device(self, device, export: Optional[PatchExport] = None) -> ParameterPanel:
        """Render the device's parameters and keep them live. Only one device per window."""
        if self.panel is not None:
            raise RuntimeError("A device is already attached to this window")

        self.device = device
        self.export = export
        if export is not None:
            self.title_label.setText(patch_title(export, self.config.window.title_fallback))

        if device.num_parameters > 0:
            self.param_container.layout().removeWidget(self.no_param_label)
            self.no_param_label.deleteLater()
            self.no_param_label = None

        self.panel = build_parameter_panel(device, self.param_container, self.config.panel)
        self._load_presets(export.presets if export is not None else [])
        return self.panel

    def _load_presets(self, presets: list[Preset]):
        self.presets = list(presets)
        if not self.presets:
            self._set_presets_visible(False)
            return

        self.preset_combo.blockSignals(True)
        self.preset_combo.clear()
        self.preset_combo.addItem("Choose a preset...")
        for preset in self.presets:
            self.preset_combo.addItem(preset.name)
        self.preset_combo.setCurrentIndex(0)
        self.preset_combo.blockSignals(False)
        self._set_presets_visible(True)

    def _on_preset_selected(self, index: int):
        # Index 0 is the placeholder
        if self.device is None or index <= 0 or index > len(self.presets):
            return
        preset = self.presets[index - 1]
        applied = self.device.set_preset(preset.values)
        log_event("INFO", "Preset", "Preset applied", name=preset.name, parameters=applied)

    def show_error(self, header: str, description: str = ""):
        text = f"<b>{header}</b>"
        if description:
            text += f"<br>{description}"
        self.error_banner.setText(text)
        self.error_banner.setVisible(True)

    def show_load_error(self, error: PatchLoadError):
        log_event("ERROR", "Patch", error.header, detail=str(error))
        self.show_error(error.header, error.description)

    def closeEvent(self, event):
        """Detach from the device and persist window settings."""
        if self.panel is not None:
            self.panel.close()

        self.config.window.width = self.width()
        self.config.window.height = self.height()
        save_config(self.config)

        event.accept()
