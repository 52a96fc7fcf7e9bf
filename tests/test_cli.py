import logging

import numpy as np
import pytest
import soundfile as sf

import estimate_bpm_cli
from bpm_estimator.utils.logging_config import APP_LOGGER_NAME, setup_logging


@pytest.fixture(autouse=True)
def _reset_app_logger():
    yield
    app_logger = logging.getLogger(APP_LOGGER_NAME)
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()


def test_cli_prints_estimated_bpm(tmp_path, burst_train, capsys):
    wav_path = tmp_path / "bursts.wav"
    sf.write(str(wav_path), burst_train(n_bursts=8, period_frames=32), 32768)

    assert estimate_bpm_cli.main([str(wav_path)]) == 0
    assert "Estimated BPM: 120" in capsys.readouterr().out


def test_cli_reports_undetermined(tmp_path, capsys):
    wav_path = tmp_path / "silence.wav"
    sf.write(str(wav_path), np.zeros(44100, dtype=np.float32), 44100)

    assert estimate_bpm_cli.main([str(wav_path)]) == 1
    assert "Could not determine BPM (too_few_onsets)" in capsys.readouterr().out


def test_cli_missing_file(tmp_path):
    assert estimate_bpm_cli.main([str(tmp_path / "missing.mp3")]) == 2


def test_cli_rejects_bad_window(tmp_path):
    wav_path = tmp_path / "silence.wav"
    sf.write(str(wav_path), np.zeros(4096, dtype=np.float32), 22050)

    assert estimate_bpm_cli.main([str(wav_path), "--window-size", "256", "--hop-size", "512"]) == 2


def test_setup_logging_does_not_duplicate_handlers(tmp_path):
    log_file = tmp_path / "debug.log"
    setup_logging()
    app_logger = setup_logging(debug=True, log_file=str(log_file))

    assert app_logger.name == APP_LOGGER_NAME
    assert app_logger.level == logging.DEBUG
    assert len(app_logger.handlers) == 2

    app_logger.debug("hello")
    for handler in app_logger.handlers:
        handler.flush()
    assert "DEBUG - hello" in log_file.read_text()
