"""Tempo (BPM) estimation from decoded audio samples."""

__version__ = "0.1.0"
