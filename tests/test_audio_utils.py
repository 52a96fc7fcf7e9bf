import numpy as np
import pytest
import soundfile as sf

from bpm_estimator.audio.audio_utils import load_audio, to_mono
from bpm_estimator.audio.bpm_detection import detect_bpm_from_file
from bpm_estimator.audio.models import TempoStatus


def _write_stereo(path, y, sr):
    """Write a stereo file with the right channel at half amplitude."""
    sf.write(str(path), np.stack([y, 0.5 * y], axis=1), sr)
    return path


def test_to_mono_averages_channels():
    y = np.array([[1.0, 0.0, -1.0], [0.0, 0.0, 1.0]], dtype=np.float32)
    np.testing.assert_allclose(to_mono(y), [0.5, 0.0, 0.0])


def test_to_mono_keeps_mono_input():
    y = np.linspace(-1.0, 1.0, 10, dtype=np.float32)
    assert to_mono(y) is y


def test_to_mono_converts_integer_samples():
    mono = to_mono(np.array([1, 2, 3]))
    assert np.issubdtype(mono.dtype, np.floating)


def test_to_mono_rejects_bad_shapes():
    with pytest.raises(ValueError):
        to_mono(np.zeros((2, 2, 10)))


def test_load_audio_downmixes_at_native_rate(tmp_path, burst_train):
    y = burst_train(n_bursts=4, period_frames=32)
    wav_path = _write_stereo(tmp_path / "bursts.wav", y, 32768)

    samples, sr = load_audio(str(wav_path))

    assert sr == 32768
    assert samples.ndim == 1
    assert len(samples) == len(y)
    np.testing.assert_allclose(samples, 0.75 * y, atol=1e-3)


def test_load_audio_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_audio(str(tmp_path / "missing.wav"))


def test_detect_bpm_from_file(tmp_path, burst_train):
    wav_path = _write_stereo(tmp_path / "bursts.wav", burst_train(n_bursts=8, period_frames=32), 32768)

    analysis = detect_bpm_from_file(str(wav_path))

    assert analysis.status is TempoStatus.OK
    assert analysis.bpm == 120
    assert analysis.sample_rate == 32768


def test_detect_bpm_from_file_validates_before_loading(tmp_path):
    # Parameter errors win over the missing file
    with pytest.raises(ValueError):
        detect_bpm_from_file(str(tmp_path / "missing.wav"), hop_size=-1)
