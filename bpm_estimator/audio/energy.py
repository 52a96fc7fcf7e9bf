"""Frame Energy Extraction.

Slices a mono sample sequence into overlapping fixed-size windows and reduces
each window to its mean squared amplitude. Frame ``i`` covers samples
``[i * hop_size, i * hop_size + window_size)``.

Frames are independent, so long inputs are split into contiguous frame ranges
and computed on a thread pool. Every worker writes only its own slice of a
preallocated output array, so no locking is needed and the result does not
depend on the number of workers.
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

import librosa
import numpy as np

from bpm_estimator.config.tempo_config import HOP_SIZE, PARALLEL_MIN_FRAMES, WINDOW_SIZE, validate_analysis_window

logger = logging.getLogger(__name__)


def frame_count(n_samples: int, window_size: int = WINDOW_SIZE, hop_size: int = HOP_SIZE) -> int:
    """Number of analysis frames, floor((N - W) / H), never negative."""
    if n_samples < window_size:
        return 0
    return (n_samples - window_size) // hop_size


def _fill_energies(y, out, start, stop, window_size, hop_size):
    # Samples needed by frames [start, stop)
    segment = y[start * hop_size:(stop - 1) * hop_size + window_size]
    frames = librosa.util.frame(segment, frame_length=window_size, hop_length=hop_size, axis=0)
    out[start:stop] = np.mean(np.square(frames), axis=1)


def compute_frame_energies(
    samples: np.ndarray,
    window_size: int = WINDOW_SIZE,
    hop_size: int = HOP_SIZE,
    *,
    max_workers: Optional[int] = None,
    parallel_min_frames: int = PARALLEL_MIN_FRAMES,
) -> np.ndarray:
    """Compute the energy sequence of a mono sample sequence.

    Args:
        samples (np.ndarray): 1-D mono audio samples
        window_size (int, optional): Samples per frame. Defaults to WINDOW_SIZE.
        hop_size (int, optional): Samples between frame starts. Defaults to HOP_SIZE.
        max_workers (int, optional): Worker threads. Defaults to the CPU count.
        parallel_min_frames (int, optional): Inputs with fewer frames are
            computed on the calling thread.

    Returns:
        np.ndarray: float64 energies, one per frame. Empty if the input is
                    shorter than one window plus one hop.

    Raises:
        ValueError: If the window/hop pair is invalid or samples are not 1-D.
    """
    validate_analysis_window(window_size, hop_size)

    y = np.asarray(samples, dtype=np.float64)
    if y.ndim != 1:
        raise ValueError(f"Expected mono samples with shape (n,), got shape {y.shape}")

    n_frames = frame_count(len(y), window_size, hop_size)
    energies = np.zeros(n_frames, dtype=np.float64)
    if n_frames == 0:
        logger.debug(f"No analysis frames for {len(y)} samples (window {window_size}, hop {hop_size})")
        return energies

    workers = max_workers or os.cpu_count() or 1
    workers = min(workers, n_frames)

    if workers == 1 or n_frames < parallel_min_frames:
        _fill_energies(y, energies, 0, n_frames, window_size, hop_size)
        return energies

    bounds = np.linspace(0, n_frames, workers + 1).astype(int)
    logger.debug(f"Computing {n_frames} frame energies on {workers} threads")

    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [
            pool.submit(_fill_energies, y, energies, int(start), int(stop), window_size, hop_size)
            for start, stop in zip(bounds[:-1], bounds[1:])
            if stop > start
        ]

    # Re-raise any worker failure
    for future in futures:
        future.result()

    return energies
