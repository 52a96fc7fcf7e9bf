#!/usr/bin/env python3
import argparse
import logging
import sys

from bpm_estimator.audio.bpm_detection import detect_bpm_from_file
from bpm_estimator.config.tempo_config import HOP_SIZE, THRESHOLD_SENSITIVITY, WINDOW_SIZE
from bpm_estimator.utils.logging_config import setup_logging


def build_parser():
    parser = argparse.ArgumentParser(description='Estimate the tempo (BPM) of an audio file.')
    parser.add_argument('audio', help='Input audio path (mp3, wav, flac, ...)')
    parser.add_argument('--window-size', type=int, default=WINDOW_SIZE, help='Samples per analysis frame')
    parser.add_argument('--hop-size', type=int, default=HOP_SIZE, help='Samples between analysis frames')
    parser.add_argument('--sensitivity', type=float, default=THRESHOLD_SENSITIVITY,
                        help='Onset threshold k in mean + k * std_dev')
    parser.add_argument('--sr', type=int, default=None, help='Resample to this rate (default: native)')
    parser.add_argument('--workers', type=int, default=None, help='Threads for energy extraction')
    parser.add_argument('--debug', action='store_true', help='Enable debug mode')
    return parser


def main(argv=None):
    """
    Main entry point for the estimate-bpm application.

    Returns:
        int: 0 when a tempo was determined, 1 when undetermined, 2 on error
    """
    args = build_parser().parse_args(argv)

    logger = setup_logging(args.debug)

    try:
        analysis = detect_bpm_from_file(
            args.audio,
            sr=args.sr,
            window_size=args.window_size,
            hop_size=args.hop_size,
            sensitivity=args.sensitivity,
            max_workers=args.workers,
        )
    except (FileNotFoundError, ValueError) as error:
        logger.error(f"Fatal error: {error}")
        return 2
    except Exception as error:
        # Decoder backends raise their own types for unreadable files
        logger.error(f"Fatal error: {error}", exc_info=True)
        return 2

    if analysis.is_determined:
        print(f"\nEstimated BPM: {analysis.bpm}")
        return 0

    print(f"\nCould not determine BPM ({analysis.status.value})")
    return 1


if __name__ == "__main__":
    sys.exit(main())
