"""Exceptions raised by the spectrogram pipeline."""


class SpectrogramError(Exception):
    """Base class for pipeline errors."""


class InvalidFrameLength(SpectrogramError, ValueError):
    """An analysis frame does not have the configured length."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"expected a frame of {expected} samples, got {actual}")
        self.expected = expected
        self.actual = actual


class EmptyHistory(SpectrogramError):
    """The history buffer has not received a row yet."""
