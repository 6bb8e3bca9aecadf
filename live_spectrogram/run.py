"""Entry point to run the live spectrogram viewer."""

import logging
import threading

from . import config
from .audio_stream import AudioInputStream
from .pipeline import SpectrogramPipeline
from .viewer import SpectrogramViewer


def main() -> None:
    """Start audio capture in a worker thread and launch the viewer UI."""
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    pipeline: SpectrogramPipeline = SpectrogramPipeline()
    ais: AudioInputStream = AudioInputStream(
        input_device_keyword=config.INPUT_DEVICE_KEYWORD,
        chunk=config.CHUNK,
    )
    viewer: SpectrogramViewer = SpectrogramViewer(
        pipeline,
        fps=config.FPS,
        size=config.WINDOW_SIZE,
        title=config.TITLE,
    )

    # Capture and analysis share one worker thread, in arrival order
    thread: threading.Thread = threading.Thread(
        target=ais.run, args=(lambda batch, rate: pipeline.submit(batch, sample_rate=rate),)
    )
    thread.daemon = True
    thread.start()

    # Rendering is driven by the viewer's timer
    viewer.run_app()


if __name__ == "__main__":
    main()
