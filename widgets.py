"""
patchpanel - Widgets
Qt visual primitives for parameter rows. They only render state and emit
gestures; device writes happen in parameter_controls.
"""

import re

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QHBoxLayout, QLabel, QPushButton, QScrollArea, QSlider, QWidget,
)

from quantization import slider_position

_NON_WORD = re.compile(r"\W")


class ToggleButton(QPushButton):
    """Two-state ON/OFF button. Not checkable: state only changes through set_on()."""

    def __init__(self, active_color: str = "#00ff00", parent=None):
        super().__init__("OFF", parent)
        self.setFixedWidth(56)
        self.active_color = active_color
        self._on = False
        self._update_style()

    def set_on(self, on: bool):
        self._on = bool(on)
        self.setText("ON" if self._on else "OFF")
        self._update_style()

    def is_on(self) -> bool:
        return self._on

    def _update_style(self):
        if self._on:
            self.setStyleSheet(f"background-color: #4a6b4a; border: 2px solid {self.active_color}; font-weight: bold;")
        else:
            self.setStyleSheet("background-color: #424242;")


class StepButtonRow(QWidget):
    """Horizontal row of step buttons with single selection."""

    step_selected = pyqtSignal(int)

    def __init__(self, captions: list[str], active_color: str = "#00ff00", parent=None):
        super().__init__(parent)
        self.active_color = active_color
        self._active_index = -1

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(2)

        self.buttons: list[QPushButton] = []
        for i, caption in enumerate(captions):
            btn = QPushButton(caption)
            btn.setMinimumWidth(36)
            btn.clicked.connect(lambda _checked=False, index=i: self.step_selected.emit(index))
            layout.addWidget(btn)
            self.buttons.append(btn)
        self._update_style()

    def set_active_index(self, index: int):
        self._active_index = index
        self._update_style()

    def active_index(self) -> int:
        return self._active_index

    def active_indices(self) -> list[int]:
        return [i for i, btn in enumerate(self.buttons) if btn.property("active")]

    def _update_style(self):
        for i, btn in enumerate(self.buttons):
            btn.setProperty("active", i == self._active_index)
            if i == self._active_index:
                btn.setStyleSheet(f"background-color: #4a6b4a; border: 2px solid {self.active_color}; font-weight: bold;")
            else:
                btn.setStyleSheet("background-color: #424242;")


class ParameterSlider(QSlider):
    """Horizontal slider over an integer grid of `resolution` intervals.

    The groove is filled up to fill_percent() of its width. show_value() moves
    the handle without emitting valueChanged.
    """

    def __init__(self, min_val: float, max_val: float, resolution: int,
                 fill_color: str = "#00aaff", parent=None):
        super().__init__(Qt.Orientation.Horizontal, parent)
        self.min_val = float(min_val)
        self.max_val = float(max_val)
        self.resolution = int(resolution)
        self.fill_color = fill_color
        self._display_value = self.min_val
        self._fill_percent = 0.0

        self.setMinimum(0)
        self.setMaximum(self.resolution)
        self.setSingleStep(1)
        self.setPageStep(max(1, self.resolution // 10))
        self.setTracking(True)

    def show_value(self, value: float, fill_percent: float):
        self.blockSignals(True)
        try:
            self.setValue(slider_position(value, self.min_val, self.max_val, self.resolution))
        finally:
            self.blockSignals(False)
        self._display_value = float(value)
        self._apply_fill(fill_percent)

    def display_value(self) -> float:
        return self._display_value

    def fill_percent(self) -> float:
        return self._fill_percent

    def _apply_fill(self, fill_percent: float):
        self._fill_percent = float(fill_percent)
        stop = self._fill_percent / 100.0
        self.setStyleSheet(f"""
            QSlider::groove:horizontal {{
                height: 6px;
                border-radius: 3px;
                background: qlineargradient(x1:0, y1:0, x2:1, y2:0,
                    stop:0 {self.fill_color}, stop:{stop:.4f} {self.fill_color},
                    stop:{min(1.0, stop + 0.0001):.4f} #333, stop:1 #333);
            }}
            QSlider::handle:horizontal {{
                width: 12px;
                margin: -4px 0;
                border-radius: 6px;
                background: #ddd;
            }}
        """)


class ParameterRow(QWidget):
    """Control followed by the parameter's name."""

    def __init__(self, parameter_id: str, name: str, control: QWidget,
                 name_width: int = 160, parent=None):
        super().__init__(parent)
        self.parameter_id = parameter_id
        self.control = control
        self.setObjectName(f"param-{_NON_WORD.sub('_', parameter_id)}")

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 2, 0, 2)

        self.name_label = QLabel(name)
        self.name_label.setFixedWidth(name_width)
        self.name_label.setStyleSheet("color: #aaa;")

        layout.addWidget(control, 1)
        layout.addWidget(self.name_label)


class NoWheelScrollArea(QScrollArea):
    """
    QScrollArea that ignores mouse wheel events.
    Keeps wheel input on the slider under the cursor instead of scrolling the panel.
    """

    def wheelEvent(self, event):
        event.ignore()
