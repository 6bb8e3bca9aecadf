"""Central configuration for the live spectrogram app."""

from typing import Tuple

# Audio input settings
SAMPLE_FORMAT: str = "int16"
INPUT_DEVICE_KEYWORD: str = "Microphone"
MAX_INPUT_CHANNELS: int = 1
CHUNK: int = 1024
DEFAULT_SAMPLE_RATE: int = 44100

# Analysis settings
SAMPLE_COUNT: int = 1024
BUFFER_COUNT: int = 768
HOP_COUNT: int = 512
N_MELS: int = 128
EPS: float = 1e-12

# Run-time parameters and the ranges offered by the viewer
DEFAULT_MODE: str = "linear"
DEFAULT_GAIN: float = 0.025
GAIN_RANGE: Tuple[float, float] = (0.01, 0.04)
DEFAULT_ZERO_REFERENCE: float = 1000.0
ZERO_REFERENCE_RANGE: Tuple[float, float] = (10.0, 2500.0)

# Color lookup table
TABLE_ENTRIES: int = 32
TABLE_MAX_HUE: float = 0.6666

# Viewer settings
FPS: int = 30
WINDOW_SIZE: Tuple[int, int] = (1000, 800)
TITLE: str = "live spectrogram"
LOG_LEVEL: str = "INFO"
