"""Onset detection over a frame energy sequence.

A frame is an onset when its energy rises above an adaptive threshold
(mean + k * std_dev of the whole sequence) and is a strict local maximum
within a fixed neighborhood. Accepted onsets are kept at least a refractory
period apart, so a single transient is reported once.
"""

import logging
import math
from typing import Optional

import numpy as np

from bpm_estimator.audio.models import EnergyStats
from bpm_estimator.config.tempo_config import (
    HOP_SIZE,
    MIN_ONSET_SPACING,
    ONSET_NEIGHBORHOOD,
    THRESHOLD_SENSITIVITY,
    validate_sample_rate,
)

logger = logging.getLogger(__name__)


def compute_energy_stats(energies: np.ndarray, sensitivity: float = THRESHOLD_SENSITIVITY) -> EnergyStats:
    """Compute mean, population std dev, max and the adaptive threshold.

    An empty sequence yields all-zero statistics.
    """
    energies = np.asarray(energies, dtype=np.float64)
    if energies.size == 0:
        return EnergyStats(mean=0.0, std_dev=0.0, max=0.0, threshold=0.0)

    mean = float(np.mean(energies))
    std_dev = float(np.std(energies))
    return EnergyStats(
        mean=mean,
        std_dev=std_dev,
        max=float(np.max(energies)),
        threshold=mean + sensitivity * std_dev,
    )


def min_distance_frames(sample_rate: int, hop_size: int = HOP_SIZE, min_spacing: float = MIN_ONSET_SPACING) -> int:
    """Refractory period in frames: ceil(min_spacing * sample_rate / hop_size)."""
    # Rounding first keeps an exact multiple (e.g. 3.0000000000000004) from gaining a frame
    return math.ceil(round(min_spacing * sample_rate / hop_size, 9))


def _local_maxima(energies, threshold, neighborhood):
    """Indices above threshold that strictly beat every neighbor within +/- neighborhood."""
    n = len(energies)
    if n < 2 * neighborhood + 1:
        return np.array([], dtype=np.int64)

    center = energies[neighborhood:n - neighborhood]
    mask = center > threshold
    for offset in range(1, neighborhood + 1):
        mask &= center > energies[neighborhood - offset:n - neighborhood - offset]
        mask &= center > energies[neighborhood + offset:n - neighborhood + offset]

    return np.flatnonzero(mask) + neighborhood


def detect_onsets(
    energies: np.ndarray,
    sample_rate: int,
    hop_size: int = HOP_SIZE,
    *,
    sensitivity: float = THRESHOLD_SENSITIVITY,
    neighborhood: int = ONSET_NEIGHBORHOOD,
    min_spacing: float = MIN_ONSET_SPACING,
    stats: Optional[EnergyStats] = None,
) -> np.ndarray:
    """
    Detect onset frame indices in an energy sequence.

    Args:
        energies (np.ndarray): Frame energy sequence
        sample_rate (int): Sample rate of the analysed audio
        hop_size (int, optional): Samples between frames. Defaults to HOP_SIZE.
        sensitivity (float, optional): k in mean + k * std_dev.
        neighborhood (int, optional): Radius of the strict local maximum check.
        min_spacing (float, optional): Minimum seconds between accepted onsets.
        stats (EnergyStats, optional): Precomputed statistics. Computed here if omitted.

    Returns:
        np.ndarray: Increasing int64 frame indices. Empty when nothing crosses
                    the threshold, never an error.
    """
    validate_sample_rate(sample_rate)
    if hop_size <= 0:
        raise ValueError(f"hop_size must be positive, got {hop_size}")

    energies = np.asarray(energies, dtype=np.float64)
    if stats is None:
        stats = compute_energy_stats(energies, sensitivity)

    candidates = _local_maxima(energies, stats.threshold, neighborhood)
    min_distance = min_distance_frames(sample_rate, hop_size, min_spacing)

    onsets = []
    last_onset = None
    for index in candidates:
        if last_onset is None or index - last_onset >= min_distance:
            onsets.append(int(index))
            last_onset = index

    logger.debug(
        f"{len(candidates)} threshold peaks, {len(onsets)} onsets after {min_distance}-frame refractory period"
    )
    return np.array(onsets, dtype=np.int64)
