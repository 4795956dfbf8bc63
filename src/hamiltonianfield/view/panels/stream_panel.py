from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QFontDatabase
from PySide6.QtWidgets import (
    QComboBox, QFormLayout, QGroupBox, QHBoxLayout, QLabel, QPlainTextEdit, QPushButton, QSlider, QVBoxLayout,
    QWidget
)

from hamiltonianfield.config import (
    MAX_RESOLUTION, MIN_RESOLUTION, RESOLUTION_STEP, THRESHOLD_PRESETS, snap_resolution
)


class StreamControlPanel(QWidget):
    resolution_changed = Signal(int)
    preset_changed = Signal(str)
    start_requested = Signal()
    stop_requested = Signal()

    def __init__(self, resolution: int, preset: str) -> None:
        super().__init__()

        layout = QVBoxLayout(self)

        # --- Grid ---
        grp_grid = QGroupBox("Grid")
        form_grid = QFormLayout(grp_grid)

        hbox_res = QHBoxLayout()
        self.slider_res = QSlider(Qt.Horizontal)
        self.slider_res.setRange(MIN_RESOLUTION, MAX_RESOLUTION)
        self.slider_res.setSingleStep(RESOLUTION_STEP)
        self.slider_res.setPageStep(RESOLUTION_STEP)
        self.slider_res.setTickInterval(RESOLUTION_STEP)
        self.slider_res.setTickPosition(QSlider.TicksBelow)
        self.slider_res.setValue(snap_resolution(resolution))
        self.slider_res.valueChanged.connect(self.on_slider_moved)
        self.slider_res.sliderReleased.connect(self.on_slider_released)
        hbox_res.addWidget(self.slider_res)

        self.lbl_res = QLabel()
        self.lbl_res.setMinimumWidth(70)
        hbox_res.addWidget(self.lbl_res)
        form_grid.addRow("Resolution:", hbox_res)

        self.combo_preset = QComboBox()
        self.combo_preset.addItems(sorted(THRESHOLD_PRESETS))
        self.combo_preset.setCurrentText(preset)
        self.combo_preset.currentTextChanged.connect(self.preset_changed.emit)
        form_grid.addRow("Thresholds:", self.combo_preset)

        layout.addWidget(grp_grid)

        # --- Capture ---
        grp_capture = QGroupBox("Camera")
        l_capture = QVBoxLayout(grp_capture)

        self.btn_toggle = QPushButton("Start")
        self.btn_toggle.setMinimumHeight(40)
        self.btn_toggle.setCheckable(True)
        self.btn_toggle.toggled.connect(self.on_toggle)
        l_capture.addWidget(self.btn_toggle)

        layout.addWidget(grp_capture)

        # --- Status log ---
        grp_log = QGroupBox("Status")
        l_log = QVBoxLayout(grp_log)

        self.txt_report = QPlainTextEdit()
        self.txt_report.setReadOnly(True)
        self.txt_report.setFont(QFontDatabase.systemFont(QFontDatabase.FixedFont))
        self.txt_report.setMinimumHeight(220)
        l_log.addWidget(self.txt_report)

        layout.addWidget(grp_log)
        layout.addStretch()

        self._update_label(self.slider_res.value())

    def show_report(self, text: str) -> None:
        self.txt_report.setPlainText(text)

    def set_running(self, running: bool) -> None:
        """Sync the toggle button without emitting start/stop again."""
        self.btn_toggle.blockSignals(True)
        self.btn_toggle.setChecked(running)
        self.btn_toggle.blockSignals(False)
        self.btn_toggle.setText("Stop" if running else "Start")

    # --- Slots ---

    def on_slider_moved(self, value: int) -> None:
        self._update_label(snap_resolution(value))
        # Keyboard / click changes have no release event
        if not self.slider_res.isSliderDown():
            self._emit_resolution()

    def on_slider_released(self) -> None:
        self._emit_resolution()

    def on_toggle(self, checked: bool) -> None:
        self.btn_toggle.setText("Stop" if checked else "Start")
        if checked:
            self.start_requested.emit()
        else:
            self.stop_requested.emit()

    def _emit_resolution(self) -> None:
        value = snap_resolution(self.slider_res.value())
        if value != self.slider_res.value():
            self.slider_res.blockSignals(True)
            self.slider_res.setValue(value)
            self.slider_res.blockSignals(False)
        self.resolution_changed.emit(value)

    def _update_label(self, value: int) -> None:
        self.lbl_res.setText(f"{value} x {value}")
