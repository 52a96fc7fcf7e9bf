"""
Configuration settings for frame energy extraction, onset detection and tempo estimation.
"""

# Analysis window settings
WINDOW_SIZE = 1024   # Samples per analysis frame
HOP_SIZE = 512       # Number of samples between successive frames

# Onset detection settings
THRESHOLD_SENSITIVITY = 1.5  # k in threshold = mean + k * std_dev (lower = more onsets)
ONSET_NEIGHBORHOOD = 2       # A candidate must beat every frame within +/- this many frames
MIN_ONSET_SPACING = 0.05     # Refractory period between accepted onsets, in seconds

# Tempo estimation settings
MIN_ONSETS = 4            # Fewer onsets than this and the tempo is undetermined
MIN_VALID_INTERVALS = 3   # Intervals that must survive the plausibility filter
MIN_INTERVAL = 0.2        # Shortest plausible inter-onset interval (s), 300 BPM
MAX_INTERVAL = 2.0        # Longest plausible inter-onset interval (s), 30 BPM

# Octave correction band
MIN_BPM = 60
MAX_BPM = 200
MAX_OCTAVE_FOLDS = 16

# Energy frames below this count are computed on the calling thread
PARALLEL_MIN_FRAMES = 4096


def get_tempo_detection_params(**overrides):
    """
    Get centralized tempo detection parameters.

    Args:
        **overrides: Replace any default parameter by name.

    Returns:
        dict: Validated dictionary of tempo detection parameters

    Raises:
        ValueError: If an override names an unknown parameter or a value
                    violates the analysis contract.
    """
    params = {
        'window_size': WINDOW_SIZE,
        'hop_size': HOP_SIZE,
        'sensitivity': THRESHOLD_SENSITIVITY,
        'neighborhood': ONSET_NEIGHBORHOOD,
        'min_spacing': MIN_ONSET_SPACING,
        'min_onsets': MIN_ONSETS,
        'min_valid_intervals': MIN_VALID_INTERVALS,
        'min_interval': MIN_INTERVAL,
        'max_interval': MAX_INTERVAL,
        'min_bpm': MIN_BPM,
        'max_bpm': MAX_BPM,
        'max_folds': MAX_OCTAVE_FOLDS,
        'max_workers': None,
    }

    unknown = sorted(set(overrides) - set(params))
    if unknown:
        raise ValueError(f"Unknown tempo detection parameter(s): {', '.join(unknown)}")

    params.update(overrides)
    validate_tempo_params(params)
    return params


def validate_analysis_window(window_size, hop_size):
    """Reject window/hop pairs that cannot form overlapping frames (W > H > 0)."""
    if hop_size <= 0:
        raise ValueError(f"hop_size must be positive, got {hop_size}")
    if window_size <= hop_size:
        raise ValueError(
            f"window_size must be larger than hop_size, got window_size={window_size}, hop_size={hop_size}"
        )


def validate_sample_rate(sample_rate):
    if sample_rate is None or sample_rate <= 0:
        raise ValueError(f"sample_rate must be positive, got {sample_rate}")


def validate_tempo_params(params):
    """
    Fail fast on configuration that would produce a misleading tempo.

    Args:
        params (dict): Parameters as returned by get_tempo_detection_params

    Raises:
        ValueError: On the first violated constraint.
    """
    validate_analysis_window(params['window_size'], params['hop_size'])

    if params['sensitivity'] < 0:
        raise ValueError(f"sensitivity must be non-negative, got {params['sensitivity']}")
    if params['neighborhood'] < 1:
        raise ValueError(f"neighborhood must be at least 1, got {params['neighborhood']}")
    if params['min_spacing'] < 0:
        raise ValueError(f"min_spacing must be non-negative, got {params['min_spacing']}")
    if params['min_onsets'] < 2:
        raise ValueError(f"min_onsets must be at least 2, got {params['min_onsets']}")
    if params['min_valid_intervals'] < 1:
        raise ValueError(f"min_valid_intervals must be at least 1, got {params['min_valid_intervals']}")
    if not 0 < params['min_interval'] < params['max_interval']:
        raise ValueError(
            f"Interval band must satisfy 0 < min_interval < max_interval, "
            f"got [{params['min_interval']}, {params['max_interval']}]"
        )
    if params['min_bpm'] <= 0 or params['max_bpm'] < params['min_bpm']:
        raise ValueError(
            f"BPM band must satisfy 0 < min_bpm <= max_bpm, got [{params['min_bpm']}, {params['max_bpm']}]"
        )
    if params['max_folds'] < 0:
        raise ValueError(f"max_folds must be non-negative, got {params['max_folds']}")
    if params['max_workers'] is not None and params['max_workers'] < 1:
        raise ValueError(f"max_workers must be at least 1, got {params['max_workers']}")
