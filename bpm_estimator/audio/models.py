"""Result types shared by the tempo detection stages."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

import numpy as np


class TempoStatus(str, Enum):
    """Why a tempo estimate was or was not produced."""

    OK = "ok"
    TOO_FEW_ONSETS = "too_few_onsets"
    TOO_FEW_INTERVALS = "too_few_intervals"
    OUT_OF_RANGE = "out_of_range"


@dataclass
class EnergyStats:
    """Statistics of the energy sequence that define the adaptive threshold."""
    mean: float
    std_dev: float
    max: float
    threshold: float


@dataclass
class TempoEstimate:
    """Outcome of inter-onset interval analysis.

    ``bpm`` is None unless ``status`` is ``TempoStatus.OK``.
    """
    bpm: Optional[int]
    status: TempoStatus
    median_interval: Optional[float] = None  # seconds
    raw_bpm: Optional[int] = None  # before octave correction
    n_intervals: int = 0
    n_valid_intervals: int = 0

    @property
    def is_determined(self) -> bool:
        return self.status is TempoStatus.OK


@dataclass
class TempoAnalysis:
    """Full pipeline result with the intermediate diagnostics."""
    bpm: Optional[int]
    status: TempoStatus
    sample_rate: int
    n_samples: int
    n_frames: int
    energy_stats: EnergyStats
    onsets: np.ndarray = field(default_factory=lambda: np.array([], dtype=np.int64))
    tempo: Optional[TempoEstimate] = None

    @property
    def is_determined(self) -> bool:
        return self.status is TempoStatus.OK

    @property
    def n_onsets(self) -> int:
        return len(self.onsets)
