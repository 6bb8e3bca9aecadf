"""Realtime spectrogram viewer using PyQtGraph (timer-driven render)."""

import sys
from typing import Tuple

import numpy as np
import pyqtgraph as pg
from pyqtgraph.Qt import QtCore
from PyQt5.QtWidgets import (
    QApplication,
    QComboBox,
    QFormLayout,
    QSlider,
    QVBoxLayout,
    QWidget,
)

from . import config, image
from .intensity import Mode
from .pipeline import SpectrogramPipeline

SLIDER_STEPS: int = 1000


def slider_to_value(position: int, value_range: Tuple[float, float]) -> float:
    """Map an integer slider position onto ``value_range``."""
    lo, hi = value_range
    return lo + (hi - lo) * position / SLIDER_STEPS


def value_to_slider(value: float, value_range: Tuple[float, float]) -> int:
    lo, hi = value_range
    position = int(round((value - lo) / (hi - lo) * SLIDER_STEPS))
    return max(0, min(SLIDER_STEPS, position))


class SpectrogramViewer:
    """Display the pipeline image and expose gain, zero reference and mode."""

    def __init__(
        self,
        pipeline: SpectrogramPipeline,
        fps: int = config.FPS,
        size: Tuple[int, int] = config.WINDOW_SIZE,
        title: str = config.TITLE,
    ) -> None:
        """Create the Qt window, image item and controls."""
        self.pipeline = pipeline
        self.fps: int = fps
        self.iter: int = 0

        pg.setConfigOptions(imageAxisOrder="row-major", antialias=True)
        app = QApplication.instance() or QApplication([])
        win = QWidget()
        win.setWindowTitle(title)
        win.resize(size[0], size[1])
        layout = QVBoxLayout(win)

        # time runs along x, frequency bins along y
        graphics = pg.GraphicsLayoutWidget()
        plotitem = graphics.addPlot(labels={"bottom": "Time", "left": "Frequency bin"})
        plotitem.setMouseEnabled(x=False, y=False)
        imageitem = pg.ImageItem(border="k")
        plotitem.addItem(imageitem)
        layout.addWidget(graphics)

        controls = QFormLayout()
        gain_slider = QSlider(QtCore.Qt.Horizontal)
        gain_slider.setRange(0, SLIDER_STEPS)
        gain_slider.setValue(value_to_slider(pipeline.gain, config.GAIN_RANGE))
        gain_slider.valueChanged.connect(self.on_gain)
        controls.addRow("Gain", gain_slider)

        zero_slider = QSlider(QtCore.Qt.Horizontal)
        zero_slider.setRange(0, SLIDER_STEPS)
        zero_slider.setValue(
            value_to_slider(pipeline.zero_reference, config.ZERO_REFERENCE_RANGE)
        )
        zero_slider.valueChanged.connect(self.on_zero_reference)
        controls.addRow("Zero Ref", zero_slider)

        mode_box = QComboBox()
        for mode in Mode:
            mode_box.addItem(mode.value.capitalize(), mode)
        mode_box.setCurrentIndex(list(Mode).index(pipeline.mode))
        mode_box.currentIndexChanged.connect(self.on_mode)
        controls.addRow("Mode", mode_box)
        layout.addLayout(controls)

        win.show()

        self.app = app
        self.win = win
        self.plotitem = plotitem
        self.imageitem = imageitem
        self.mode_box = mode_box

    def on_gain(self, position: int) -> None:
        self.pipeline.gain = slider_to_value(position, config.GAIN_RANGE)

    def on_zero_reference(self, position: int) -> None:
        self.pipeline.zero_reference = slider_to_value(
            position, config.ZERO_REFERENCE_RANGE
        )

    def on_mode(self, index: int) -> None:
        self.pipeline.mode = self.mode_box.itemData(index)

    def run_app(self) -> None:
        """Start a Qt timer to render the image at the target FPS."""
        timer = QtCore.QTimer()
        timer.timeout.connect(self.update)
        interval_ms = max(1, int(round(1000.0 / float(self.fps or 60))))
        timer.start(interval_ms)
        self.timer = timer

        if (sys.flags.interactive != 1) or not hasattr(QtCore, "PYQT_VERSION"):
            QApplication.instance().exec_()

    def update(self) -> None:
        """Render the latest history and refresh the image."""
        raster = self.pipeline.render()
        # rows are time, transpose so time scrolls horizontally
        self.imageitem.setImage(
            np.ascontiguousarray(image.to_rgb8(raster).transpose(1, 0, 2)),
            autoLevels=False,
            levels=(0, 255),
        )
        if self.iter == 0:
            nyquist = self.pipeline.nyquist_estimate()
            if nyquist:
                self.plotitem.setTitle(f"Nyquist {nyquist:.0f} Hz")
        self.iter += 1
