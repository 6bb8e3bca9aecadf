"""Hue/brightness color lookup table and per-pixel interpolation."""

import colorsys
from typing import Tuple

import numpy as np

from . import config

# channel columns of the stored table
GREEN, RED, BLUE = 0, 1, 2
UINT16_MAX: int = np.iinfo(np.uint16).max


def build(
    entries: int = config.TABLE_ENTRIES, max_hue: float = config.TABLE_MAX_HUE
) -> np.ndarray:
    """Return an ``(entries, 3)`` uint16 table stored in (G, R, B) order.

    Low intensities map to blue (hue ``max_hue``) and high intensities run
    backwards around the hue wheel to red, with brightness ``sqrt(v)``.
    """
    table = np.zeros((entries, 3), dtype=np.uint16)
    for i in range(entries):
        value = i / (entries - 1)
        hue = max_hue * (1.0 - value)
        red, green, blue = colorsys.hsv_to_rgb(hue, 1.0, np.sqrt(value))
        table[i] = [int(green * UINT16_MAX), int(red * UINT16_MAX), int(blue * UINT16_MAX)]
    table.setflags(write=False)
    return table


def normalize(values: np.ndarray) -> np.ndarray:
    """Clamp intensities into the table domain [0, 1]."""
    return np.clip(np.asarray(values, dtype=np.float32), 0.0, 1.0)


def apply(
    intensities: np.ndarray, table: np.ndarray
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Look up ``intensities`` in ``table`` with linear interpolation.

    Returns float32 (red, green, blue) planes in [0, 1] with the shape of
    ``intensities``.
    """
    last = table.shape[0] - 1
    index = np.clip(normalize(intensities) * last, 0.0, last)
    lo = np.floor(index).astype(np.intp)
    hi = np.minimum(lo + 1, last)
    frac = (index - lo)[..., np.newaxis]
    levels = table.astype(np.float32) / UINT16_MAX
    mixed = levels[lo] * (1.0 - frac) + levels[hi] * frac
    return (
        mixed[..., RED].astype(np.float32),
        mixed[..., GREEN].astype(np.float32),
        mixed[..., BLUE].astype(np.float32),
    )
