"""Duration analyzer — finds the rate under which cue lengths are whole frames."""

import logging
from typing import Sequence

from subsync.models import COMMON_FRAMERATES, Detection, DetectionMethod, TimingSample

logger = logging.getLogger(__name__)

MIN_SAMPLES = 20
FRAME_TOLERANCE = 0.1
MIN_ALIGNMENT = 0.6
CONFIDENCE_CEILING = 0.8


def alignment_ratio(samples: Sequence[TimingSample], fps: float) -> float:
    """Fraction of cues whose duration is within 0.1 frames of an integer."""
    if not samples:
        return 0.0
    frame_ms = 1000.0 / fps
    aligned = 0
    for sample in samples:
        frames = sample.duration_ms / frame_ms
        if abs(frames - round(frames)) < FRAME_TOLERANCE:
            aligned += 1
    return aligned / len(samples)


def detect_by_duration_patterns(samples: Sequence[TimingSample]) -> Detection | None:
    if len(samples) < MIN_SAMPLES:
        return None

    best: Detection | None = None
    best_ratio = 0.0
    for fps in COMMON_FRAMERATES:
        ratio = alignment_ratio(samples, fps)
        logger.debug("%g fps: %.1f%% of durations frame-aligned", fps, ratio * 100)
        if ratio > best_ratio and ratio > MIN_ALIGNMENT:
            best_ratio = ratio
            best = Detection(fps, ratio * CONFIDENCE_CEILING, DetectionMethod.DURATION_PATTERN)
    return best
