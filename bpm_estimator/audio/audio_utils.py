"""Audio loading utilities for tempo detection.

This module turns an audio file into the mono sample sequence the tempo
detection pipeline consumes:
- load_audio: Decode an audio file (mp3, wav, flac, ...) at its native rate
- to_mono: Average all channels into a single channel

Decoding is delegated to librosa, so any format its backends read is
supported.
"""

import logging
import os
from typing import Optional, Tuple

import librosa
import numpy as np

logger = logging.getLogger(__name__)


def to_mono(y: np.ndarray) -> np.ndarray:
    """Downmix audio to a single channel by averaging channels.

    Args:
        y (np.ndarray): Samples shaped (n,) or channels-first (channels, n)

    Returns:
        np.ndarray: 1-D float samples
    """
    y = np.asarray(y)
    if not np.issubdtype(y.dtype, np.floating):
        y = y.astype(np.float32)
    if y.ndim == 1:
        return y
    if y.ndim != 2:
        raise ValueError(f"Expected audio shaped (n,) or (channels, n), got shape {y.shape}")
    return np.mean(y, axis=0)


def load_audio(audio_path: str, sr: Optional[int] = None) -> Tuple[np.ndarray, int]:
    """Load audio from a file and downmix it to mono.

    Args:
        audio_path (str): Path to the audio file (mp3, wav, etc.)
        sr (int, optional): Target sample rate. Defaults to None (native rate).

    Returns:
        tuple: (samples, sample_rate) with samples a 1-D float array

    Raises:
        FileNotFoundError: If audio_path does not exist.
        ValueError: If the file decodes to no samples.
    """
    if not os.path.exists(audio_path):
        raise FileNotFoundError(f"Audio file not found: {audio_path}")

    y, sample_rate = librosa.load(audio_path, sr=sr, mono=False)
    channels = 1 if y.ndim == 1 else y.shape[0]
    logger.info(f"Sample rate: {sample_rate} Hz")
    logger.info(f"Channels: {channels}")

    y = to_mono(y)
    if len(y) == 0:
        raise ValueError("Audio file is empty or could not be read: %s" % audio_path)

    logger.info(f"Read {len(y)} mono samples")
    return y, int(sample_rate)
