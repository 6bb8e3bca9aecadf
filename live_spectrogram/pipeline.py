"""Spectrogram pipeline: sample batches in, RGB raster out."""

import logging
import threading
from typing import Optional, Union

import numpy as np

from . import colors, config, image
from .analysis import SpectralAnalyzer
from .errors import EmptyHistory
from .frames import FrameAssembler
from .history import SpectrogramHistory
from .intensity import IntensityMapper, Mode

logger = logging.getLogger(__name__)


class SpectrogramPipeline:
    """Own every buffer and table of the spectrogram.

    ``submit`` runs on the capture thread and ``render`` on the display
    timer. ``mode``, ``gain`` and ``zero_reference`` may be changed at any
    time and are read at the start of each analysis pass.
    """

    def __init__(
        self,
        mode: Union[Mode, str] = config.DEFAULT_MODE,
        gain: float = config.DEFAULT_GAIN,
        zero_reference: float = config.DEFAULT_ZERO_REFERENCE,
        sample_count: int = config.SAMPLE_COUNT,
        buffer_count: int = config.BUFFER_COUNT,
        hop_count: int = config.HOP_COUNT,
        n_mels: int = config.N_MELS,
    ) -> None:
        self.mode: Mode = Mode(mode)
        self.gain: float = gain
        self.zero_reference: float = zero_reference

        # stateless tables first
        self.table: np.ndarray = colors.build()
        self.analyzer = SpectralAnalyzer(sample_count)
        self.mapper = IntensityMapper(sample_count, n_mels)
        # then the zero-initialized history, then the input side
        self.history = SpectrogramHistory(buffer_count, sample_count)
        self.assembler = FrameAssembler(sample_count, hop_count)

        self._nyquist: Optional[float] = None
        self._image: np.ndarray = image.placeholder()
        self._submit_lock = threading.Lock()
        self._image_lock = threading.Lock()

    def nyquist_estimate(self) -> Optional[float]:
        return self._nyquist

    def _estimate_nyquist(
        self, n: int, sample_rate: Optional[float], duration: Optional[float]
    ) -> None:
        if duration is None and sample_rate:
            duration = n / float(sample_rate)
        if not duration or n == 0:
            return
        self._nyquist = 0.5 / (duration / n)
        self.mapper.set_nyquist(self._nyquist)
        logger.info("Nyquist frequency estimated at %.1f Hz", self._nyquist)

    def process_frame(self, frame: np.ndarray) -> np.ndarray:
        """Analyze one frame and append its intensity row to the history."""
        spectrum = self.analyzer.analyze(frame)
        row = self.mapper.map(spectrum, self.mode, self.gain, self.zero_reference)
        self.history.append(row)
        return row

    def submit(
        self,
        batch,
        sample_rate: Optional[float] = None,
        duration: Optional[float] = None,
    ) -> int:
        """Queue ``batch`` and process every complete frame.

        ``duration`` is the batch length in seconds; ``sample_rate`` may be
        given instead. Returns the number of frames processed.
        """
        samples = np.asarray(batch, dtype=np.int16).ravel()
        with self._submit_lock:
            if self._nyquist is None:
                self._estimate_nyquist(samples.size, sample_rate, duration)
            self.assembler.ingest(samples)
            processed = 0
            for frame in self.assembler.extract_frames():
                self.process_frame(frame)
                processed += 1
        return processed

    def _render(self) -> np.ndarray:
        if self.history.is_empty:
            raise EmptyHistory("no spectrogram rows to render")
        red, green, blue = colors.apply(self.history.snapshot(), self.table)
        return image.synthesize(red, green, blue)

    def render(self) -> np.ndarray:
        """Render the current history and make it the current image."""
        try:
            rendered = self._render()
        except EmptyHistory:
            return self.current_image()
        with self._image_lock:
            self._image = rendered
        return rendered

    def current_image(self) -> np.ndarray:
        """Return the most recently rendered image, or the placeholder."""
        with self._image_lock:
            return self._image
