"""Overlapping frame assembly from incoming sample batches."""

import logging
from typing import Iterator

import numpy as np

from . import config

logger = logging.getLogger(__name__)


class FrameAssembler:
    """Queue int16 batches and slice them into 50%-overlapping frames."""

    def __init__(
        self,
        frame_size: int = config.SAMPLE_COUNT,
        hop_size: int = config.HOP_COUNT,
    ) -> None:
        self.frame_size: int = frame_size
        self.hop_size: int = hop_size
        self.queue: np.ndarray = np.zeros(0, dtype=np.int16)

    @property
    def pending(self) -> int:
        """Number of samples waiting for extraction."""
        return int(self.queue.size)

    def ingest(self, batch) -> bool:
        """Append ``batch`` unless the queue already holds two frames.

        Returns ``True`` when the batch was queued.
        """
        samples = np.asarray(batch, dtype=np.int16).ravel()
        if samples.size == 0:
            return False
        if self.queue.size >= 2 * self.frame_size:
            logger.debug(
                "Dropping %d samples, %d already pending", samples.size, self.queue.size
            )
            return False
        self.queue = np.concatenate([self.queue, samples])
        return True

    def extract_frames(self) -> Iterator[np.ndarray]:
        """Yield frames while at least one full frame is pending."""
        while self.queue.size >= self.frame_size:
            frame = self.queue[: self.frame_size].copy()
            # advance by one hop only, consecutive frames share the tail
            self.queue = self.queue[self.hop_size :]
            yield frame
