"""Windowed DCT-II magnitude analysis of a single frame."""

import functools

import librosa
import numpy as np
import scipy.fft

from . import config
from .errors import InvalidFrameLength


class SpectralAnalyzer:
    """Hann window + forward DCT-II + absolute value, coefficients built once."""

    def __init__(self, frame_size: int = config.SAMPLE_COUNT) -> None:
        self.frame_size: int = frame_size
        # periodic Hann: first sample is zero, last is not
        self.window: np.ndarray = librosa.filters.get_window(
            "hann", frame_size, fftbins=True
        ).astype(np.float32)
        self.dct = functools.partial(scipy.fft.dct, type=2, n=frame_size)
        self.x: np.ndarray = np.zeros(frame_size, dtype=np.float32)

    def analyze(self, frame) -> np.ndarray:
        """Return the magnitude spectrum of ``frame``."""
        frame = np.asarray(frame)
        if frame.size != self.frame_size:
            raise InvalidFrameLength(self.frame_size, frame.size)
        self.x[:] = frame.ravel()
        self.x *= self.window
        # scipy's unnormalized DCT-II carries a factor of two
        spectrum = 0.5 * self.dct(self.x)
        return np.abs(spectrum).astype(np.float32)
