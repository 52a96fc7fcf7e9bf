import logging

import numpy as np

from bpm_estimator.audio.audio_utils import load_audio
from bpm_estimator.audio.energy import compute_frame_energies
from bpm_estimator.audio.models import TempoAnalysis
from bpm_estimator.audio.onset_detection import compute_energy_stats, detect_onsets
from bpm_estimator.audio.tempo_estimation import estimate_tempo
from bpm_estimator.config.tempo_config import get_tempo_detection_params, validate_sample_rate

logger = logging.getLogger(__name__)


def detect_bpm(samples, sample_rate, **kwargs):
    """
    Estimate the tempo of a mono sample sequence.

    Args:
        samples (np.ndarray): 1-D mono audio samples
        sample_rate (int): Sample rate in Hz
        **kwargs: Override any default tempo detection parameter

    Returns:
        TempoAnalysis: BPM (None if undetermined), the reason, and the
                       intermediate statistics

    Raises:
        ValueError: If a parameter violates the analysis contract.
    """
    params = get_tempo_detection_params(**kwargs)
    validate_sample_rate(sample_rate)

    samples = np.asarray(samples)
    if samples.ndim != 1:
        raise ValueError(f"Expected mono samples with shape (n,), got shape {samples.shape}; downmix with to_mono")

    window_size = params['window_size']
    hop_size = params['hop_size']

    logger.info("Calculating energy...")
    energies = compute_frame_energies(samples, window_size, hop_size, max_workers=params['max_workers'])
    logger.info(f"Number of analysis frames: {len(energies)}")

    logger.info("Detecting onsets...")
    stats = compute_energy_stats(energies, params['sensitivity'])
    logger.info(
        f"Energy stats - Mean: {stats.mean:.6f}, Std Dev: {stats.std_dev:.6f}, "
        f"Max: {stats.max:.6f}, Threshold: {stats.threshold:.6f}"
    )
    onsets = detect_onsets(
        energies,
        sample_rate,
        hop_size,
        neighborhood=params['neighborhood'],
        min_spacing=params['min_spacing'],
        stats=stats,
    )
    logger.info(f"Found {len(onsets)} onsets")

    logger.info("Calculating BPM...")
    tempo = estimate_tempo(
        onsets,
        hop_size,
        sample_rate,
        min_onsets=params['min_onsets'],
        min_valid_intervals=params['min_valid_intervals'],
        min_interval=params['min_interval'],
        max_interval=params['max_interval'],
        min_bpm=params['min_bpm'],
        max_bpm=params['max_bpm'],
        max_folds=params['max_folds'],
    )
    if tempo.median_interval is not None:
        logger.info(f"Median interval: {tempo.median_interval:.6f} seconds")

    return TempoAnalysis(
        bpm=tempo.bpm,
        status=tempo.status,
        sample_rate=int(sample_rate),
        n_samples=len(samples),
        n_frames=len(energies),
        energy_stats=stats,
        onsets=onsets,
        tempo=tempo,
    )


def detect_bpm_from_file(audio_path, sr=None, **kwargs):
    """
    Load an audio file, downmix it to mono and estimate its tempo.

    Args:
        audio_path (str): Path to audio file
        sr (int, optional): Resample to this rate before analysis. Defaults to the native rate.
        **kwargs: Override any default tempo detection parameter

    Returns:
        TempoAnalysis: See detect_bpm
    """
    # Validate before paying for decoding
    get_tempo_detection_params(**kwargs)

    y, sample_rate = load_audio(audio_path, sr=sr)
    return detect_bpm(y, sample_rate, **kwargs)
