"""Shared synthetic signals for tempo detection tests."""

import numpy as np
import pytest


def generate_burst_train(
    n_bursts: int,
    period_frames: int,
    hop_size: int = 512,
    window_size: int = 1024,
    first_frame: int = 4,
    amplitude: float = 1.0,
) -> np.ndarray:
    """Generate decaying bursts aligned to the analysis hop grid.

    Each burst is window_size samples long and starts exactly at the start of
    frame first_frame + k * period_frames, so that frame holds the whole burst
    and is a strict energy peak over its neighbors. With a sample rate where
    period_frames * hop_size / sr is exactly 60 / bpm, the detected tempo is
    exact.
    """
    last_frame = first_frame + period_frames * (n_bursts - 1)
    n_samples = (last_frame + 6) * hop_size + window_size
    y = np.zeros(n_samples, dtype=np.float32)

    burst = amplitude * np.linspace(1.0, 0.0, window_size, dtype=np.float32)
    for k in range(n_bursts):
        start = (first_frame + k * period_frames) * hop_size
        y[start:start + window_size] += burst
    return y


@pytest.fixture
def burst_train():
    """Factory fixture for hop-aligned burst trains."""
    return generate_burst_train
