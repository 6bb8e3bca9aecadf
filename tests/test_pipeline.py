import numpy as np
import pytest

from live_spectrogram import config
from live_spectrogram.errors import InvalidFrameLength
from live_spectrogram.intensity import Mode
from live_spectrogram.pipeline import SpectrogramPipeline


def _square(n=1024, amplitude=1000):
    return np.tile(np.array([amplitude, -amplitude], dtype=np.int16), n // 2)


def test_square_wave_renders_a_row():
    pipeline = SpectrogramPipeline(mode="linear", gain=0.025, zero_reference=1000)
    assert pipeline.submit(_square(), sample_rate=44100) == 1
    assert pipeline.history.rows == 1

    spectrum = pipeline.analyzer.analyze(_square())
    assert spectrum.max() > 100 * np.median(spectrum)

    raster = pipeline.render()
    assert raster.shape == (768, 1024, 3)
    # newest row is the last one and carries color, older rows are still black
    assert raster[-1].max() > 0.0
    assert not raster[:-1].any()
    assert pipeline.current_image() is raster


def test_half_frame_of_silence_in_mel_mode():
    pipeline = SpectrogramPipeline(mode="mel")
    assert pipeline.submit(np.zeros(512, dtype=np.int16), sample_rate=16000) == 0
    assert pipeline.history.is_empty
    assert pipeline.render().shape == (1, 1, 3)

    assert pipeline.submit(np.zeros(512, dtype=np.int16), sample_rate=16000) == 1
    (row,) = pipeline.history.latest(1)
    floor = config.DEFAULT_GAIN * 10.0 * np.log10(config.EPS / config.DEFAULT_ZERO_REFERENCE)
    assert np.all(np.isfinite(row))
    np.testing.assert_allclose(row, floor, rtol=1e-5)


def test_consecutive_batches_produce_overlapping_rows():
    pipeline = SpectrogramPipeline()
    first = np.full(1024, 100, dtype=np.int16)
    second = np.full(1024, 2000, dtype=np.int16)
    assert pipeline.submit(first, sample_rate=44100) == 1
    assert pipeline.submit(second, sample_rate=44100) == 2

    rows = pipeline.history.latest(3)
    assert rows.shape == (3, 1024)

    def expected(frame):
        spectrum = pipeline.analyzer.analyze(frame)
        return pipeline.mapper.map(spectrum, Mode.LINEAR, pipeline.gain, pipeline.zero_reference)

    straddling = np.concatenate([first[512:], second[:512]])
    np.testing.assert_allclose(rows[0], expected(first), rtol=1e-5)
    np.testing.assert_allclose(rows[1], expected(straddling), rtol=1e-5)
    np.testing.assert_allclose(rows[2], expected(second), rtol=1e-5)


def test_current_image_is_stable_between_renders():
    pipeline = SpectrogramPipeline()
    assert pipeline.current_image().shape == (1, 1, 3)
    pipeline.submit(_square(), sample_rate=44100)
    pipeline.render()
    first = pipeline.current_image()
    second = pipeline.current_image()
    np.testing.assert_array_equal(first, second)
    assert first.tobytes() == second.tobytes()


def test_nyquist_from_first_batch_only():
    pipeline = SpectrogramPipeline()
    assert pipeline.nyquist_estimate() is None
    pipeline.submit(np.zeros(480, dtype=np.int16), duration=0.01)
    assert pipeline.nyquist_estimate() == pytest.approx(24000.0)
    assert pipeline.mapper.nyquist == pytest.approx(24000.0)
    pipeline.submit(np.zeros(480, dtype=np.int16), sample_rate=8000)
    assert pipeline.nyquist_estimate() == pytest.approx(24000.0)


def test_nyquist_from_sample_rate():
    pipeline = SpectrogramPipeline()
    pipeline.submit(np.zeros(100, dtype=np.int16), sample_rate=44100)
    assert pipeline.nyquist_estimate() == pytest.approx(22050.0)


def test_mode_switch_mid_stream():
    pipeline = SpectrogramPipeline(mode=Mode.LINEAR)
    frame = _square()
    pipeline.submit(frame, sample_rate=44100)
    pipeline.mode = Mode.MEL
    pipeline.submit(frame[:512], sample_rate=44100)
    linear_row, mel_row = pipeline.history.latest(2)

    spectrum = pipeline.analyzer.analyze(frame)
    np.testing.assert_allclose(
        linear_row, pipeline.mapper.map(spectrum, "linear", 0.025, 1000.0), rtol=1e-5
    )
    overlapped = np.concatenate([frame[512:], frame[:512]])
    np.testing.assert_allclose(
        mel_row,
        pipeline.mapper.map(pipeline.analyzer.analyze(overlapped), "mel", 0.025, 1000.0),
        rtol=1e-5,
    )


def test_history_stays_bounded():
    pipeline = SpectrogramPipeline(buffer_count=4)
    rng = np.random.default_rng(11)
    for _ in range(20):
        pipeline.submit(rng.integers(-2000, 2000, size=1024), sample_rate=44100)
        assert len(pipeline.history) <= 4 * 1024
        assert pipeline.assembler.pending < 1024
    assert pipeline.render().shape == (4, 1024, 3)


def test_process_frame_rejects_bad_length():
    pipeline = SpectrogramPipeline()
    with pytest.raises(InvalidFrameLength):
        pipeline.process_frame(np.zeros(10, dtype=np.int16))
    assert pipeline.history.is_empty
