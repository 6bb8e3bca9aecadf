import numpy as np

from live_spectrogram.frames import FrameAssembler


def test_single_frame_leaves_one_hop_pending():
    fa = FrameAssembler()
    assert fa.ingest(np.arange(1024, dtype=np.int16))
    frames = list(fa.extract_frames())
    assert len(frames) == 1
    assert np.array_equal(frames[0], np.arange(1024))
    assert fa.pending == 512


def test_consecutive_frames_overlap_by_half():
    fa = FrameAssembler()
    fa.ingest(np.arange(2000, dtype=np.int16))
    frames = list(fa.extract_frames())
    assert len(frames) == 2
    assert np.array_equal(frames[0][512:], frames[1][:512])
    assert frames[1][0] == 512


def test_extraction_runs_to_exhaustion():
    fa = FrameAssembler()
    rng = np.random.default_rng(7)
    for size in rng.integers(0, 1500, size=50):
        fa.ingest(rng.integers(-1000, 1000, size=size))
        for frame in fa.extract_frames():
            assert frame.size == 1024
        assert fa.pending < 1024


def test_batches_dropped_while_queue_full():
    fa = FrameAssembler()
    assert fa.ingest(np.zeros(2048, dtype=np.int16))
    assert not fa.ingest(np.ones(10, dtype=np.int16))
    assert fa.pending == 2048


def test_queue_may_exceed_two_frames_with_one_large_batch():
    fa = FrameAssembler()
    fa.ingest(np.zeros(3000, dtype=np.int16))
    assert len(list(fa.extract_frames())) == 4
    assert fa.pending == 952


def test_empty_batch_is_noop():
    fa = FrameAssembler()
    assert not fa.ingest([])
    assert list(fa.extract_frames()) == []
    assert fa.pending == 0


def test_frames_are_copies():
    fa = FrameAssembler()
    fa.ingest(np.zeros(1024, dtype=np.int16))
    (frame,) = fa.extract_frames()
    frame[:] = 5
    assert not fa.queue.any()
