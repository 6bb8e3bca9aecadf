"""Decibel intensity mapping in linear or mel frequency layout."""

import enum
import logging
from typing import Optional, Union

import librosa
import numpy as np

from . import config

logger = logging.getLogger(__name__)


class Mode(str, enum.Enum):
    LINEAR = "linear"
    MEL = "mel"


def mel_matrix(
    nyquist: float,
    n_bins: int = config.SAMPLE_COUNT,
    n_mels: int = config.N_MELS,
) -> np.ndarray:
    """Build an ``(n_bins, n_bins)`` matrix mapping linear bins to mel bins.

    A triangular filterbank of ``n_mels`` bands spanning 0 Hz to ``nyquist``
    is applied to the ``n_bins`` input bins, and the band energies are then
    linearly resampled onto ``n_bins`` evenly spaced mel positions so the
    output keeps the input width.
    """
    melfb = librosa.filters.mel(
        sr=2.0 * nyquist,
        n_fft=2 * (n_bins - 1),
        n_mels=n_mels,
        fmin=0.0,
        fmax=nyquist,
        norm=None,
    )
    bands = np.arange(n_mels)
    positions = np.linspace(0.0, n_mels - 1, n_bins)
    resample = np.stack([np.interp(positions, bands, e) for e in np.eye(n_mels)], axis=1)
    return (resample @ melfb).astype(np.float32)


class IntensityMapper:
    """Convert a magnitude spectrum into a gain-scaled decibel row."""

    def __init__(
        self,
        n_bins: int = config.SAMPLE_COUNT,
        n_mels: int = config.N_MELS,
        nyquist: Optional[float] = None,
    ) -> None:
        self.n_bins: int = n_bins
        self.n_mels: int = n_mels
        self.nyquist: float = (
            float(nyquist) if nyquist else config.DEFAULT_SAMPLE_RATE / 2.0
        )
        self._melfb: Optional[np.ndarray] = None

    def set_nyquist(self, nyquist: float) -> None:
        """Use ``nyquist`` as the upper edge of the mel filterbank."""
        nyquist = float(nyquist)
        if nyquist != self.nyquist:
            self.nyquist = nyquist
            self._melfb = None

    @property
    def melfb(self) -> np.ndarray:
        if self._melfb is None:
            logger.debug(
                "Building mel filterbank: %d bands up to %.1f Hz",
                self.n_mels,
                self.nyquist,
            )
            self._melfb = mel_matrix(self.nyquist, self.n_bins, self.n_mels)
        return self._melfb

    def map(
        self,
        spectrum: np.ndarray,
        mode: Union[Mode, str],
        gain: float,
        zero_reference: float,
    ) -> np.ndarray:
        """Return ``gain`` times the decibel value of every bin."""
        spectrum = np.asarray(spectrum, dtype=np.float32)
        if Mode(mode) is Mode.MEL:
            power = self.melfb @ spectrum
            row = librosa.power_to_db(
                power, ref=zero_reference, amin=config.EPS, top_db=None
            )
        else:
            row = librosa.amplitude_to_db(
                spectrum, ref=zero_reference, amin=config.EPS, top_db=None
            )
        return (gain * row).astype(np.float32)
