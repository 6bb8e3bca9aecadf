"""Interleave planar color channels into an RGB raster."""

import numpy as np

from .errors import EmptyHistory


def placeholder() -> np.ndarray:
    """Return the 1x1 black image shown before any row arrives."""
    return np.zeros((1, 1, 3), dtype=np.float32)


def synthesize(red: np.ndarray, green: np.ndarray, blue: np.ndarray) -> np.ndarray:
    """Stack the planes into a ``(height, width, 3)`` raster in R, G, B order."""
    if red.size == 0:
        raise EmptyHistory("no spectrogram rows to render")
    return np.stack([red, green, blue], axis=-1).astype(np.float32)


def to_rgb8(raster: np.ndarray) -> np.ndarray:
    """Quantize a [0, 1] float raster to uint8 for display."""
    return (np.clip(raster, 0.0, 1.0) * 255.0 + 0.5).astype(np.uint8)
