"""Microphone capture delivering mono int16 batches (prints a device table)."""

import logging
from typing import Callable, Dict, Optional

import numpy as np
import pyaudio

from . import config

logger = logging.getLogger(__name__)

_FORMATS = {"int16": (pyaudio.paInt16, np.int16)}


class AudioInputStream:
    """Read fixed-size int16 buffers from an input device and forward them."""

    def __init__(
        self,
        input_device_keyword: str = config.INPUT_DEVICE_KEYWORD,
        chunk: int = config.CHUNK,
        sample_format: str = config.SAMPLE_FORMAT,
        input_device_index: Optional[int] = None,
    ) -> None:
        """Open an input device for ``chunk``-sized reads."""
        if sample_format not in _FORMATS:
            raise ValueError(f"Unsupported sample format {sample_format!r}, use int16.")
        self.format, self.dtype = _FORMATS[sample_format]
        self.chunk: int = chunk
        self.rate: int = config.DEFAULT_SAMPLE_RATE
        self.channels: int = config.MAX_INPUT_CHANNELS
        self.p = pyaudio.PyAudio()
        self.__open_stream(input_device_keyword, input_device_index)

    def __select(self, dev: Dict, name: str) -> None:
        self.input_device_index = int(dev["index"])
        self.input_device_name = name
        self.rate = int(dev["defaultSampleRate"])
        self.channels = max(1, int(dev["maxInputChannels"]))

    def __open_stream(
        self, input_device_keyword: str, input_device_index: Optional[int]
    ) -> None:
        """Pick device by index or keyword, fall back to the default input."""
        self.input_device_index: Optional[int] = None
        self.input_device_name: Optional[str] = None
        print("=========================================================")
        print("dev. index\tmaxInputCh.\tdev. name")

        for k in range(self.p.get_device_count()):
            dev = self.p.get_device_info_by_index(k)
            name = dev["name"]
            if isinstance(name, bytes):
                name = name.decode("cp932")  # for windows
            max_input = int(dev["maxInputChannels"])
            print(f"{dev['index']}\t{max_input}\t{name}")
            if max_input == 0 or self.input_device_index is not None:
                continue
            if input_device_index is not None:
                if dev["index"] == input_device_index:
                    self.__select(dev, name)
            elif input_device_keyword in name:
                self.__select(dev, name)
        print("=========================================================")

        if self.input_device_index is None:
            # raises IOError when the host has no input device at all
            dev = self.p.get_default_input_device_info()
            logger.warning(
                "Input device %r not found, using default %r",
                input_device_keyword if input_device_index is None else input_device_index,
                dev["name"],
            )
            self.__select(dev, dev["name"])

        logger.info(
            "Input device %s: rate=%d channels=%d chunk=%d",
            self.input_device_name,
            self.rate,
            self.channels,
            self.chunk,
        )
        self.stream = self.p.open(
            format=self.format,
            channels=self.channels,
            rate=self.rate,
            input=True,
            output=False,
            frames_per_buffer=self.chunk,
            input_device_index=self.input_device_index,
        )

    def to_mono(self, data: np.ndarray) -> np.ndarray:
        """Down-mix interleaved ``[L, R, L, R, ...]`` samples to one channel."""
        if self.channels == 1:
            return data
        frames = data[: data.size - data.size % self.channels]
        mixed = frames.reshape(-1, self.channels).mean(axis=1)
        return np.round(mixed).astype(np.int16)

    def run(self, callback: Callable[[np.ndarray, int], object]) -> None:
        """Read buffers until the stream stops and pass ``(batch, rate)`` on."""
        try:
            while self.stream.is_active():
                raw = self.stream.read(self.chunk, exception_on_overflow=False)
                data = np.frombuffer(raw, dtype=self.dtype)
                if data.size == 0:
                    continue
                callback(self.to_mono(data), self.rate)
        finally:
            self.__terminate()

    def __terminate(self) -> None:
        """Best-effort shutdown without raising."""
        for close in (self.stream.stop_stream, self.stream.close, self.p.terminate):
            try:
                close()
            except Exception:
                logger.debug("Ignoring error during audio shutdown", exc_info=True)

