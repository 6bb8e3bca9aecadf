"""Fixed-capacity FIFO of intensity rows shared by analysis and rendering."""

import threading

import numpy as np

from . import config


class SpectrogramHistory:
    """Ring buffer of the most recent ``buffer_count`` rows.

    ``append`` and ``snapshot`` hold the same lock for their whole duration,
    so a snapshot never observes a half-written row.
    """

    def __init__(
        self,
        buffer_count: int = config.BUFFER_COUNT,
        sample_count: int = config.SAMPLE_COUNT,
    ) -> None:
        self.buffer_count: int = buffer_count
        self.sample_count: int = sample_count
        self.capacity: int = buffer_count * sample_count
        self.data: np.ndarray = np.zeros((buffer_count, sample_count), dtype=np.float32)
        self.write_idx: int = 0
        self.count: int = 0
        self.lock = threading.Lock()

    def __len__(self) -> int:
        return self.count * self.sample_count

    @property
    def rows(self) -> int:
        return self.count

    @property
    def is_empty(self) -> bool:
        return self.count == 0

    def append(self, row: np.ndarray) -> None:
        """Append ``row``, evicting the oldest row when full."""
        row = np.asarray(row, dtype=np.float32).ravel()
        if row.size != self.sample_count:
            raise ValueError(
                f"row has {row.size} values, expected {self.sample_count}"
            )
        with self.lock:
            # when full, write_idx points at the oldest row
            self.data[self.write_idx] = row
            self.write_idx = (self.write_idx + 1) % self.buffer_count
            self.count = min(self.count + 1, self.buffer_count)

    def snapshot(self) -> np.ndarray:
        """Return an oldest-to-newest copy; never-written rows are zero."""
        with self.lock:
            return np.roll(self.data, -self.write_idx, axis=0)

    def latest(self, n: int = 1) -> np.ndarray:
        """Return the newest ``n`` rows (fewer if fewer were appended)."""
        n = max(0, min(n, self.count))
        if n == 0:
            return np.zeros((0, self.sample_count), dtype=np.float32)
        return self.snapshot()[-n:]
