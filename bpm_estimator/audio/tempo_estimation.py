"""Tempo estimation from onset frame indices.

Consecutive onsets are turned into inter-onset intervals. Implausible
intervals are dropped, and the median of the survivors is converted to BPM.
The BPM is then folded by octaves into [MIN_BPM, MAX_BPM]. Any shortage of
evidence ends in an undetermined estimate with a named status, never an
exception.
"""

import logging
import math
from typing import Optional, Sequence

import numpy as np

from bpm_estimator.audio.models import TempoEstimate, TempoStatus
from bpm_estimator.config.tempo_config import (
    HOP_SIZE,
    MAX_BPM,
    MAX_INTERVAL,
    MAX_OCTAVE_FOLDS,
    MIN_BPM,
    MIN_INTERVAL,
    MIN_ONSETS,
    MIN_VALID_INTERVALS,
    validate_sample_rate,
)

logger = logging.getLogger(__name__)


def onset_intervals(onsets: Sequence[int], hop_size: int, sample_rate: int) -> np.ndarray:
    """Seconds between consecutive onsets."""
    onsets = np.asarray(onsets, dtype=np.int64)
    if onsets.size < 2:
        return np.array([], dtype=np.float64)
    return np.diff(onsets) * float(hop_size) / sample_rate


def median_interval(intervals: np.ndarray) -> float:
    """Median of the sorted intervals; for an even count the upper middle element."""
    ordered = np.sort(np.asarray(intervals, dtype=np.float64))
    return float(ordered[len(ordered) // 2])


def interval_to_bpm(interval: float) -> int:
    """Convert seconds per beat to BPM, rounding halves away from zero."""
    return int(math.floor(60.0 / interval + 0.5))


def fold_octaves(bpm: int, min_bpm: int = MIN_BPM, max_bpm: int = MAX_BPM, max_folds: int = MAX_OCTAVE_FOLDS) -> Optional[int]:
    """
    Fold a tempo into [min_bpm, max_bpm] by doubling or halving.

    Doubles while the tempo is positive and below min_bpm, then halves
    (integer division) while it is above max_bpm.

    Returns:
        int or None: The folded tempo, or None when it is not positive, the
                     fold budget runs out, or the band cannot be reached.
    """
    folds = 0
    while 0 < bpm < min_bpm and folds < max_folds:
        bpm *= 2
        folds += 1
    while bpm > max_bpm and folds < max_folds:
        bpm //= 2
        folds += 1

    if bpm <= 0 or not min_bpm <= bpm <= max_bpm:
        return None
    return bpm


def estimate_tempo(
    onsets: Sequence[int],
    hop_size: int = HOP_SIZE,
    sample_rate: int = 44100,
    *,
    min_onsets: int = MIN_ONSETS,
    min_valid_intervals: int = MIN_VALID_INTERVALS,
    min_interval: float = MIN_INTERVAL,
    max_interval: float = MAX_INTERVAL,
    min_bpm: int = MIN_BPM,
    max_bpm: int = MAX_BPM,
    max_folds: int = MAX_OCTAVE_FOLDS,
) -> TempoEstimate:
    """
    Estimate BPM from ordered onset frame indices.

    Args:
        onsets (Sequence[int]): Increasing onset frame indices
        hop_size (int, optional): Samples between frames. Defaults to HOP_SIZE.
        sample_rate (int, optional): Sample rate of the analysed audio.
        min_onsets (int, optional): Onsets required to attempt an estimate.
        min_valid_intervals (int, optional): Intervals required after filtering.
        min_interval (float, optional): Shortest plausible interval in seconds.
        max_interval (float, optional): Longest plausible interval in seconds.
        min_bpm (int, optional): Lower edge of the octave correction band.
        max_bpm (int, optional): Upper edge of the octave correction band.
        max_folds (int, optional): Doubling/halving steps allowed.

    Returns:
        TempoEstimate: bpm in [min_bpm, max_bpm] with status OK, or bpm None
                       with the reason in status.
    """
    validate_sample_rate(sample_rate)
    if hop_size <= 0:
        raise ValueError(f"hop_size must be positive, got {hop_size}")

    onsets = np.asarray(onsets, dtype=np.int64)
    if onsets.size < min_onsets:
        logger.info(f"Too few onsets to estimate BPM ({onsets.size} < {min_onsets})")
        return TempoEstimate(bpm=None, status=TempoStatus.TOO_FEW_ONSETS)

    intervals = onset_intervals(onsets, hop_size, sample_rate)
    valid = intervals[(intervals >= min_interval) & (intervals <= max_interval)]

    if valid.size < min_valid_intervals:
        logger.info(f"Too few valid intervals to estimate BPM ({valid.size} of {intervals.size} kept)")
        return TempoEstimate(
            bpm=None,
            status=TempoStatus.TOO_FEW_INTERVALS,
            n_intervals=int(intervals.size),
            n_valid_intervals=int(valid.size),
        )

    median = median_interval(valid)
    raw_bpm = interval_to_bpm(median)
    bpm = fold_octaves(raw_bpm, min_bpm, max_bpm, max_folds)
    logger.debug(f"Median interval: {median:.6f} seconds, raw BPM {raw_bpm}, folded BPM {bpm}")

    return TempoEstimate(
        bpm=bpm,
        status=TempoStatus.OK if bpm is not None else TempoStatus.OUT_OF_RANGE,
        median_interval=median,
        raw_bpm=raw_bpm,
        n_intervals=int(intervals.size),
        n_valid_intervals=int(valid.size),
    )
